"""Math helpers — range mapping and clamping. No engine imports."""

from __future__ import annotations


def map_range(value: float, in_lo: float, in_hi: float, out_lo: float, out_hi: float) -> float:
    """Linear map of value from [in_lo, in_hi] to [out_lo, out_hi] (no clamping)."""
    return out_lo + (value - in_lo) * (out_hi - out_lo) / (in_hi - in_lo)


def clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))
