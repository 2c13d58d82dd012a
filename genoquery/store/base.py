"""
Genome store interface.

The query layer only talks to genome, genotype and evidence data through this
interface, so a store can be swapped (or faked in tests) without touching the
parsing and dispatch pipeline.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Sequence as SequenceType

from genoquery.models.data_classes import Genome, Genotype, Location, Sequence


class GenomeStore(ABC):
    """
    Owner of all persistent genome, genotype and evidence state.

    Implementations must be safe to call from several worker threads at once.
    Every method reports failure by raising ``StoreError`` (or its
    ``NotFoundError`` subclass).
    """

    @abstractmethod
    def init(self) -> None:
        """Prepare backing storage. Called once at startup."""

    @abstractmethod
    def create_genomes(self, file_path: str) -> List[Genome]:
        """Register one genome per sample found in a variant-call file."""

    @abstractmethod
    def list_genomes(self) -> List[Genome]:
        """All registered genomes, oldest first."""

    @abstractmethod
    def get_genome(self, genome_id: int) -> Genome:
        """Lookup a genome by id."""

    @abstractmethod
    def query_genotypes(
        self,
        file_path: str,
        sample_index: int,
        locations: SequenceType[Location],
    ) -> List[Genotype]:
        """
        Genotype calls for one sample at each location.

        The result is aligned with ``locations``: one Genotype per input
        Location, in the same order.
        """

    @abstractmethod
    def genotypes_to_sequence(
        self,
        genotypes: SequenceType[Genotype],
        locations: SequenceType[Location],
    ) -> Sequence:
        """Reconstruct the sample's bases over ``locations`` from its calls."""

    @abstractmethod
    def get_evidence(self, evidence_id: int) -> bytes:
        """Raw evidence payload, returned unmodified."""

    def close(self) -> None:
        """Release any resources held by the store."""
