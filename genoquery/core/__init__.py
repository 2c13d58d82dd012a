"""Core query pipeline package."""

from genoquery.core.coordinates import (
    location_from_position,
    location_from_range,
    make_location,
)
from genoquery.core.errors import (
    GenoQueryError,
    NotFoundError,
    ParseError,
    RequestCancelled,
    StoreError,
    ValidationError,
    status_for,
)
from genoquery.core.location_parser import parse_int, parse_query
from genoquery.core.dispatcher import GenomeResolver, QueryDispatcher

__all__ = [
    "location_from_position",
    "location_from_range",
    "make_location",
    "GenoQueryError",
    "NotFoundError",
    "ParseError",
    "RequestCancelled",
    "StoreError",
    "ValidationError",
    "status_for",
    "parse_int",
    "parse_query",
    "GenomeResolver",
    "QueryDispatcher",
]
