"""
Core enumerations for genoquery.
"""

from enum import Enum
from typing import Optional


class QueryKind(str, Enum):
    """Which of the two mutually exclusive query forms a request used."""
    LOCATIONS = "locations"
    RANGE = "range"


class OutputFormat(str, Enum):
    """Values accepted by the genotype endpoint's ``fmt`` selector."""
    GENOTYPES = ""
    SEQUENCE = "seq"

    @classmethod
    def from_param(cls, value: Optional[str]) -> "OutputFormat":
        """Anything other than ``seq`` selects the raw genotype list."""
        if value == cls.SEQUENCE.value:
            return cls.SEQUENCE
        return cls.GENOTYPES


class ErrorKind(str, Enum):
    """Failure categories carried from the store and parser to the HTTP layer."""
    VALIDATION = "validation"
    PARSE = "parse"
    NOT_FOUND = "not_found"
    INVALID_INPUT = "invalid_input"
    STORE = "store"
    CANCELLED = "cancelled"
