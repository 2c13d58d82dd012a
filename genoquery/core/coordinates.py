"""
Coordinate model.

User-facing coordinates are 1-based; everything internal is a zero-based,
half-open ``Location``:

    position p       ->  [p - 1, p)
    range [s, e]     ->  [s - 1, e)
"""

from __future__ import annotations

from genoquery.core.errors import ValidationError
from genoquery.models.data_classes import Location


def make_location(chrom: str, start: int, end: int) -> Location:
    """
    Build a Location, enforcing its invariants.

    Raises:
        ValidationError: empty chromosome, negative start, or ``start >= end``
    """
    if not chrom:
        raise ValidationError("Invalid locations: empty chromosome name")
    if start < 0:
        raise ValidationError(
            f"Invalid locations: {chrom}:{start + 1} is before the first base (positions are 1-based)"
        )
    if start >= end:
        raise ValidationError(
            f"Invalid locations: {chrom}:{start + 1}-{end} ends before it starts"
        )
    return Location(chrom=chrom, start=start, end=end)


def location_from_position(chrom: str, position: int) -> Location:
    """A single 1-based position as a one-base interval."""
    return make_location(chrom, position - 1, position)


def location_from_range(chrom: str, start: int, end: int) -> Location:
    """A 1-based inclusive range as a half-open interval."""
    return make_location(chrom, start - 1, end)
