"""Data models package."""

from genoquery.models.enums import ErrorKind, OutputFormat, QueryKind
from genoquery.models.data_classes import (
    CreateGenomeRequest,
    Genome,
    Genotype,
    Location,
    LocationList,
    Query,
    RangeQuery,
    Sequence,
    VariantCall,
)

__all__ = [
    "ErrorKind",
    "OutputFormat",
    "QueryKind",
    "CreateGenomeRequest",
    "Genome",
    "Genotype",
    "Location",
    "LocationList",
    "Query",
    "RangeQuery",
    "Sequence",
    "VariantCall",
]
