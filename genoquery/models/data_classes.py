"""
Pydantic data classes for genoquery.

All values here are request-scoped: the genome store owns persistent state,
the query layer only builds and passes these around. Wire names are camelCase.
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel

from genoquery.models.enums import QueryKind


class WireModel(BaseModel):
    """Base for models that cross the HTTP boundary."""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


# =============================================================================
# Coordinates
# =============================================================================

class Location(WireModel):
    """A zero-based, half-open genomic interval ``[start, end)``."""
    chrom: str
    start: int
    end: int

    @computed_field
    @property
    def length(self) -> int:
        return self.end - self.start

    def contains(self, position: int) -> bool:
        """Check if a zero-based position is within this interval."""
        return self.start <= position < self.end

    def overlaps(self, chrom: str, start: int, end: int) -> bool:
        """Check if ``[start, end)`` on ``chrom`` overlaps this interval."""
        if self.chrom != chrom:
            return False
        return self.start < end and start < self.end

    def __str__(self) -> str:
        return f"{self.chrom}:{self.start}-{self.end}"


class LocationList(BaseModel):
    """Discrete single-base positions, in the order the caller gave them."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[QueryKind.LOCATIONS] = QueryKind.LOCATIONS
    locations: Tuple[Location, ...] = Field(..., min_length=1)


class RangeQuery(BaseModel):
    """A single contiguous interval."""
    model_config = ConfigDict(frozen=True)

    kind: Literal[QueryKind.RANGE] = QueryKind.RANGE
    location: Location

    @property
    def locations(self) -> Tuple[Location, ...]:
        return (self.location,)


Query = Union[LocationList, RangeQuery]


# =============================================================================
# Store records
# =============================================================================

class Genome(WireModel):
    """One sample column of an ingested variant-call file."""
    id: int
    file_path: str
    sample_index: int
    sample_name: Optional[str] = None
    created_at: Optional[datetime] = None


class CreateGenomeRequest(WireModel):
    """Body of ``POST /v1/genomes``."""
    file_path: str = ""


class VariantCall(WireModel):
    """A single VCF record as seen by one sample."""
    chrom: str
    pos: int  # 1-based, as in the VCF
    id: Optional[str] = None
    ref: str
    alts: List[str] = Field(default_factory=list)
    alleles: List[Optional[int]] = Field(default_factory=list)
    phased: bool = False

    @computed_field
    @property
    def genotype(self) -> str:
        sep = "|" if self.phased else "/"
        return sep.join("." if a is None else str(a) for a in self.alleles)

    @property
    def start(self) -> int:
        return self.pos - 1

    @property
    def end(self) -> int:
        return self.start + len(self.ref)

    def allele(self, index: Optional[int]) -> Optional[str]:
        """Bases of allele ``index`` (0 = REF), or None for a missing call."""
        if index is None:
            return None
        if index == 0:
            return self.ref
        return self.alts[index - 1]


class Genotype(WireModel):
    """Variant calls overlapping one queried location."""
    location: Location
    calls: List[VariantCall] = Field(default_factory=list)


class Sequence(WireModel):
    """Bases reconstructed over a range from the sample's genotype calls."""
    location: Location
    reference: str
    haplotypes: List[str] = Field(default_factory=list)
