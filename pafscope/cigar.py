"""CIGAR strings: parsing, packed storage and target-range indexing."""

from __future__ import annotations

import bisect
import enum
from dataclasses import dataclass, field
from typing import Iterator, Optional

_OP_TERMINATORS = frozenset("MX=DISHN")
_COUNT_MASK = 0x1FFFFFFF
_U32_MAX = 0xFFFFFFFF
_U64_MAX = 0xFFFFFFFFFFFFFFFF

Point = tuple[float, float]


def _parse_uint(text: str, limit: int) -> Optional[int]:
    """Parse an unsigned decimal integer, allowing a leading '+'; None if invalid."""
    digits = text[1:] if text.startswith("+") else text
    if not digits or any(c not in "0123456789" for c in digits):
        return None
    value = int(digits)
    return value if value <= limit else None


def _split_ops(cigar: str) -> Iterator[str]:
    """Split a CIGAR string into pieces, each ending with an operation letter."""
    piece_start = 0
    for pos, char in enumerate(cigar):
        if char in _OP_TERMINATORS:
            yield cigar[piece_start : pos + 1]
            piece_start = pos + 1
    if piece_start < len(cigar):
        yield cigar[piece_start:]


class Strand(enum.Enum):
    """Strand of the query sequence in an alignment."""

    FORWARD = 0
    REVERSE = 1

    @classmethod
    def parse(cls, text: str) -> "Strand":
        if text == "+":
            return cls.FORWARD
        if text == "-":
            return cls.REVERSE
        raise ValueError("Strand must be + or -")

    def is_rev(self) -> bool:
        return self is Strand.REVERSE


class CigarOp(enum.Enum):
    """A CIGAR operation; soft/hard clips and skips are not represented."""

    EQ = 0
    X = 1
    I = 2  # noqa: E741
    D = 3
    M = 4

    @classmethod
    def from_char(cls, char: str) -> "CigarOp":
        try:
            return _CHAR_TO_OP[char]
        except KeyError:
            raise ValueError(f"Unknown op: {char!r}") from None

    def to_char(self) -> str:
        return _OP_TO_CHAR[self]

    def pack(self, count: int) -> int:
        """Pack this op and a count into a 32-bit integer (op in the top 3 bits)."""
        return (self.value << 29) | (count & _COUNT_MASK)

    @classmethod
    def unpack(cls, value: int) -> tuple["CigarOp", int]:
        """Unpack a 32-bit value; unknown op codes fall back to M."""
        code = min((value & _U32_MAX) >> 29, 4)
        return cls(code), value & _COUNT_MASK

    @classmethod
    def parse_str_into_list(cls, cigar: str) -> list[tuple["CigarOp", int]]:
        """Parse a CIGAR string into (op, count) pairs, skipping unknown ops."""
        result = []
        for piece in _split_ops(cigar):
            count = _parse_uint(piece[:-1], _U64_MAX)
            if count is None:
                continue
            op = _CHAR_TO_OP.get(piece[-1])
            if op is None:
                continue
            result.append((op, count))
        return result

    def apply_to_offsets(self, count: int, offsets: tuple[int, int]) -> tuple[int, int]:
        target, query = offsets
        if self.is_match_or_mismatch():
            return target + count, query + count
        if self is CigarOp.D:
            return target + count, query
        return target, query + count

    def consumes_target(self) -> bool:
        return self in (CigarOp.EQ, CigarOp.X, CigarOp.M, CigarOp.D)

    def consumes_query(self) -> bool:
        return self in (CigarOp.EQ, CigarOp.X, CigarOp.M, CigarOp.I)

    def is_match(self) -> bool:
        return self in (CigarOp.M, CigarOp.EQ)

    def is_mismatch(self) -> bool:
        return self is CigarOp.X

    def is_match_or_mismatch(self) -> bool:
        return self in (CigarOp.M, CigarOp.EQ, CigarOp.X)


_CHAR_TO_OP = {
    "M": CigarOp.M,
    "X": CigarOp.X,
    "=": CigarOp.EQ,
    "D": CigarOp.D,
    "I": CigarOp.I,
}
_OP_TO_CHAR = {op: char for char, op in _CHAR_TO_OP.items()}


@dataclass(frozen=True)
class CigarIterItem:
    """One (possibly clipped) operation with its half-open target and query ranges."""

    target_range: tuple[int, int]
    query_range: tuple[int, int]
    op: CigarOp
    op_count: int


class Cigar:
    """A whole CIGAR, stored as packed 32-bit operations."""

    def __init__(self, packed: Optional[list[int]] = None) -> None:
        self._packed: list[int] = list(packed) if packed else []

    @classmethod
    def parse_str(cls, cigar: str) -> "Cigar":
        packed = []
        for piece in _split_ops(cigar):
            count = _parse_uint(piece[:-1], _U32_MAX)
            if count is None:
                continue
            op = _CHAR_TO_OP.get(piece[-1])
            if op is None:
                continue
            packed.append(op.pack(count))
        return cls(packed)

    def get(self, index: int) -> Optional[tuple[CigarOp, int]]:
        if not 0 <= index < len(self._packed):
            return None
        return CigarOp.unpack(self._packed[index])

    def target_and_query_len(self) -> tuple[int, int]:
        target = query = 0
        for op, count in self:
            if op.consumes_target():
                target += count
            if op.consumes_query():
                query += count
        return target, query

    def __iter__(self) -> Iterator[tuple[CigarOp, int]]:
        return (CigarOp.unpack(value) for value in self._packed)

    def __len__(self) -> int:
        return len(self._packed)


@dataclass
class CigarIndex:
    """A CIGAR with per-operation target and query offsets for range lookups."""

    target_len: int
    query_len: int
    query_strand: Strand
    cigar: Cigar
    op_line_vertices: list[tuple[Point, Point]] = field(default_factory=list)
    op_target_offsets: list[int] = field(default_factory=list)
    op_query_offsets: list[int] = field(default_factory=list)

    @classmethod
    def from_cigar(
        cls, cigar: Cigar, target_len: int, query_len: int, query_strand: Strand
    ) -> "CigarIndex":
        vertices: list[tuple[Point, Point]] = []
        target_offsets: list[int] = []
        query_offsets: list[int] = []

        target_offset = 0
        # query offsets are 0-based and increasing even on the reverse strand
        query_offset = 0

        for op, count in cigar:
            target_offsets.append(target_offset)
            query_offsets.append(query_offset)

            if op.is_match_or_mismatch():
                x0 = float(target_offset)
                x1 = x0 + count
                if query_strand is Strand.FORWARD:
                    y0 = float(query_offset)
                else:
                    y0 = float(query_len - query_offset)
                vertices.append(((x0, y0), (x1, y0 + count)))
                target_offset += count
                query_offset += count
            elif op is CigarOp.D:
                target_offset += count
            elif op is CigarOp.I:
                query_offset += count

        target_offsets.append(target_offset)
        query_offsets.append(query_offset)

        return cls(
            target_len=target_offset,
            query_len=query_offset,
            query_strand=query_strand,
            cigar=cigar,
            op_line_vertices=vertices,
            op_target_offsets=target_offsets,
            op_query_offsets=query_offsets,
        )

    @classmethod
    def from_cigar_string(
        cls, cigar: str, target_len: int, query_len: int, query_strand: Strand
    ) -> "CigarIndex":
        return cls.from_cigar(Cigar.parse_str(cigar), target_len, query_len, query_strand)

    def whole_cigar(self) -> Iterator[tuple[CigarOp, int]]:
        return iter(self.cigar)

    @staticmethod
    def _op_range(offsets: list[int], op_index: int) -> Optional[tuple[int, int]]:
        if op_index < 0 or op_index + 1 >= len(offsets):
            return None
        return offsets[op_index], offsets[op_index + 1]

    def op_target_range(self, op_index: int) -> Optional[tuple[int, int]]:
        """Target range of an operation, relative to the start of the CIGAR."""
        return self._op_range(self.op_target_offsets, op_index)

    def op_query_range(self, op_index: int) -> Optional[tuple[int, int]]:
        """Query range of an operation, relative to the start of the CIGAR."""
        return self._op_range(self.op_query_offsets, op_index)

    def target_and_query_len(self) -> tuple[int, int]:
        return self.cigar.target_and_query_len()

    def iter_target_range(self, start: int, end: int) -> Iterator[CigarIterItem]:
        """Yield the operations overlapping target range [start, end), clipped to it."""
        offsets = self.op_target_offsets
        start_i = max(bisect.bisect_left(offsets, start) - 1, 0)
        end_i = bisect.bisect_left(offsets, end)

        for index in range(start_i, end_i):
            entry = self.cigar.get(index)
            op_target = self.op_target_range(index)
            op_query = self.op_query_range(index)
            if entry is None or op_target is None or op_query is None:
                return
            op, op_count = entry

            t_start, t_end = op_target
            q_start, q_end = op_query

            if op_target[1] > end:
                clipped = op_target[1] - end
                t_end -= clipped
                op_count -= clipped
                if op.consumes_query():
                    q_end -= clipped

            if op_target[0] < start:
                clipped = start - op_target[0]
                t_start += clipped
                op_count -= clipped
                if op.consumes_query():
                    q_start += clipped

            yield CigarIterItem(
                target_range=(t_start, t_end),
                query_range=(q_start, q_end),
                op=op,
                op_count=op_count,
            )