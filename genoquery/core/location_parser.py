"""
Location parser.

Turns the genotype endpoint's two mutually exclusive query parameters into a
``Query``:

    locations=CHR:POS[,CHR:POS...]   ->  LocationList (order preserved)
    range=CHR:START-END              ->  RangeQuery

Positions are 1-based; the result is zero-based half-open.
"""

from __future__ import annotations

import re
from typing import List, Optional

from genoquery.core.coordinates import location_from_position, location_from_range
from genoquery.core.errors import ParseError, ValidationError
from genoquery.models.data_classes import Location, LocationList, Query, RangeQuery

BOTH_PARAMS_MESSAGE = "Invalid query param. Both locations and range params found."
NO_PARAMS_MESSAGE = "No valid query params found."
INVALID_LOCATIONS_MESSAGE = "Invalid locations"

# Optional sign, ASCII digits, nothing else. int() alone would also accept
# surrounding whitespace and underscores.
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

# Coordinates and ids are 64-bit signed integers.
_INT_MIN = -(2 ** 63)
_INT_MAX = 2 ** 63 - 1


def parse_int(value: str) -> int:
    """
    Parse a decimal integer the strict way.

    Raises:
        ParseError: if ``value`` is not an optionally signed run of digits,
            or does not fit in a 64-bit signed integer
    """
    if not _INTEGER_PATTERN.fullmatch(value):
        raise ParseError(f"parsing {value!r}: invalid syntax")
    try:
        number = int(value)
    except ValueError as e:
        # More digits than the interpreter will convert.
        raise ParseError(f"parsing {value!r}: value out of range") from e
    if not _INT_MIN <= number <= _INT_MAX:
        raise ParseError(f"parsing {value!r}: value out of range")
    return number


def parse_locations(param: str) -> LocationList:
    """Parse ``CHR:POS[,CHR:POS...]``."""
    locations: List[Location] = []
    for entry in param.split(","):
        fields = entry.split(":")
        if len(fields) != 2:
            raise ValidationError(INVALID_LOCATIONS_MESSAGE)
        chrom, pos = fields
        locations.append(location_from_position(chrom, parse_int(pos)))
    return LocationList(locations=tuple(locations))


def parse_range(param: str) -> RangeQuery:
    """Parse ``CHR:START-END``."""
    fields = param.split(":")
    if len(fields) != 2:
        raise ValidationError(INVALID_LOCATIONS_MESSAGE)
    chrom, span = fields

    bounds = span.split("-")
    if len(bounds) != 2:
        raise ValidationError(INVALID_LOCATIONS_MESSAGE)
    start = parse_int(bounds[0])
    end = parse_int(bounds[1])

    return RangeQuery(location=location_from_range(chrom, start, end))


def parse_query(locations: Optional[str], range_: Optional[str]) -> Query:
    """
    Build the query for a genotype request.

    Exactly one of ``locations`` and ``range_`` must be non-empty.

    Raises:
        ValidationError: both or neither given, or a malformed entry
        ParseError: a coordinate is not an integer
    """
    if locations and range_:
        raise ValidationError(BOTH_PARAMS_MESSAGE)
    if not locations and not range_:
        raise ValidationError(NO_PARAMS_MESSAGE)

    if locations:
        return parse_locations(locations)
    return parse_range(range_)
