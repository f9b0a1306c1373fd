from __future__ import annotations


class OutOfRangeError(ValueError):
    """
    Input outside the supported window (years 1900..2100, term index 0..23,
    month 1..12, ...). Never clamped; callers must guard their inputs.
    """


def require_in_range(value: int, lo: int, hi: int, name: str) -> int:
    v = int(value)
    if not (lo <= v <= hi):
        raise OutOfRangeError(f"{name} out of range: {v} (expected {lo}..{hi})")
    return v
