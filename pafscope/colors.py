"""Deterministic colours derived from strings, for labelling annotations."""

from __future__ import annotations

import math
import struct
import sys

_MASK64 = 0xFFFFFFFFFFFFFFFF
_U8_MAX = 255.0


def _rotl(value: int, shift: int) -> int:
    return ((value << shift) | (value >> (64 - shift))) & _MASK64


def _sip_round(v0: int, v1: int, v2: int, v3: int) -> tuple[int, int, int, int]:
    v0 = (v0 + v1) & _MASK64
    v1 = _rotl(v1, 13) ^ v0
    v0 = _rotl(v0, 32)
    v2 = (v2 + v3) & _MASK64
    v3 = _rotl(v3, 16) ^ v2
    v0 = (v0 + v3) & _MASK64
    v3 = _rotl(v3, 21) ^ v0
    v2 = (v2 + v1) & _MASK64
    v1 = _rotl(v1, 17) ^ v2
    v2 = _rotl(v2, 32)
    return v0, v1, v2, v3


def _siphash13(data: bytes, k0: int = 0, k1: int = 0) -> int:
    """SipHash-1-3 of ``data`` with a 128-bit key given as two 64-bit halves."""
    v0 = k0 ^ 0x736F6D6570736575
    v1 = k1 ^ 0x646F72616E646F6D
    v2 = k0 ^ 0x6C7967656E657261
    v3 = k1 ^ 0x7465646279746573

    full = len(data) - len(data) % 8
    for offset in range(0, full, 8):
        word = int.from_bytes(data[offset : offset + 8], "little")
        v3 ^= word
        v0, v1, v2, v3 = _sip_round(v0, v1, v2, v3)
        v0 ^= word

    tail = int.from_bytes(data[full:], "little")
    last = ((len(data) & 0xFF) << 56) | tail
    v3 ^= last
    v0, v1, v2, v3 = _sip_round(v0, v1, v2, v3)
    v0 ^= last

    v2 ^= 0xFF
    for _ in range(3):
        v0, v1, v2, v3 = _sip_round(v0, v1, v2, v3)
    return v0 ^ v1 ^ v2 ^ v3


def _f32(value: float) -> float:
    """Round a float to single precision."""
    if math.isnan(value) or math.isinf(value):
        return value
    return struct.unpack("f", struct.pack("f", value))[0]


def _div(numerator: float, denominator: float) -> float:
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator)
    return _f32(numerator / denominator)


def _fmin(a: float, b: float) -> float:
    """Minimum that ignores a NaN operand."""
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return min(a, b)


def _fmax(a: float, b: float) -> float:
    """Maximum that ignores a NaN operand."""
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return max(a, b)


def hashed_rgb(name: str) -> tuple[int, int, int]:
    """Three bytes taken from a keyless SipHash-1-3 of the length-prefixed UTF-8 name."""
    raw = name.encode("utf-8")
    message = len(raw).to_bytes(8, "little") + raw
    digest = _siphash13(message).to_bytes(8, sys.byteorder)
    return digest[0], digest[1], digest[2]


def _normalized_rgb(text: str) -> tuple[float, float, float]:
    channels = [_f32(c / _U8_MAX) for c in hashed_rgb(text)]
    total = _f32(_f32(channels[0] + channels[1]) + channels[2])
    r, g, b = (_div(c, total) for c in channels)
    return r, g, b


def string_hash_color_f32(text: str) -> tuple[float, float, float]:
    """Hashed RGB scaled so the three components sum to one."""
    return _normalized_rgb(text)


def string_hash_color_alt(path_name: str) -> tuple[float, float, float]:
    return string_hash_color_f32(path_name)


def string_hash_color(path_name: str) -> tuple[float, float, float]:
    """A brightened hashed colour, quantised to 8 bits per channel, in 0.0..=1.0."""
    normalized = _normalized_rgb(path_name)
    brightest = _fmax(_fmax(normalized[0], normalized[1]), normalized[2])
    factor = _fmin(_div(1.0, brightest), 1.5)

    result = []
    for component in normalized:
        scaled = _fmin(_f32(component * factor), 1.0)
        quantised = float(math.floor(_f32(_U8_MAX * scaled) + 0.5))
        result.append(_f32(quantised / _U8_MAX))
    r, g, b = result
    return r, g, b