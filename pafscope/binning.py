"""Binned linear approximation of an alignment's height above the target axis."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from pafscope.cigar import CigarIndex

_USIZE_MAX = 2**64 - 1


def _div(numerator: float, denominator: float) -> float:
    """IEEE float division: zero divisors give inf or NaN instead of raising."""
    if denominator == 0:
        if numerator == 0 or math.isnan(numerator):
            return math.nan
        return math.copysign(math.inf, numerator) * math.copysign(1.0, denominator)
    return numerator / denominator


def _to_index(value: float) -> int:
    """Convert a float to a non-negative index, saturating like an unsigned cast."""
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return _USIZE_MAX
    return min(int(value), _USIZE_MAX)


@dataclass
class BinnedCigarIndex:
    """Average query offsets in equal-width target bins, interpolated on lookup."""

    bins: list[float] = field(default_factory=list)
    x_min: float = 0.0
    bin_size: float = 0.0

    def lookup(self, x: float) -> float:
        """Interpolated height at target position ``x``; 0.0 when there are no bins."""
        if not self.bins:
            return 0.0

        index = _to_index(math.floor(q) if math.isfinite(q := _div(x - self.x_min, self.bin_size)) else q)

        if index >= len(self.bins) - 1:
            return self.bins[-1]

        x0 = self.x_min + index * self.bin_size
        y0 = self.bins[index]
        x1 = x0 + self.bin_size
        y1 = self.bins[index + 1]

        return y0 + _div((x - x0) * (y1 - y0), x1 - x0)


def bin_cigar_index(cigar: CigarIndex, bin_count: int) -> BinnedCigarIndex:
    """Average the CIGAR's operation query offsets into ``bin_count`` target bins."""
    if not cigar.op_target_offsets or bin_count == 0:
        return BinnedCigarIndex([], 0.0, 0.0)

    x_min = cigar.op_target_offsets[0]
    x_max = cigar.op_target_offsets[-1]
    bin_size = (x_max - x_min) / bin_count

    sums = [0.0] * bin_count
    counts = [0] * bin_count

    for x, y in zip(cigar.op_target_offsets, cigar.op_query_offsets):
        bin_index = min(_to_index(_div(float(x - x_min), bin_size)), bin_count - 1)
        sums[bin_index] += float(y)
        counts[bin_index] += 1

    bins = [total / count if count > 0 else total for total, count in zip(sums, counts)]

    return BinnedCigarIndex(bins, float(x_min), bin_size)