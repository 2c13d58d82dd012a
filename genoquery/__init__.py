"""
genoquery - Genomic variant query API

Parses and validates genomic coordinate queries, resolves genome records,
and dispatches genotype lookups and sequence reconstruction to a genome store.
"""

__version__ = "0.1.0"
__author__ = "genoquery developers"

from genoquery.models.enums import ErrorKind, QueryKind
from genoquery.models.data_classes import (
    Genome,
    Location,
    LocationList,
    RangeQuery,
    Genotype,
    VariantCall,
    Sequence,
)

__all__ = [
    # Enums
    "ErrorKind",
    "QueryKind",
    # Data classes
    "Genome",
    "Location",
    "LocationList",
    "RangeQuery",
    "Genotype",
    "VariantCall",
    "Sequence",
]
