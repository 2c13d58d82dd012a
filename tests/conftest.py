"""
Test configuration and fixtures for genoquery.
"""

from __future__ import annotations

from pathlib import Path
from typing import Generator, List, Sequence as SequenceType

import pytest

from genoquery.config import GenoQueryConfig
from genoquery.core.errors import NotFoundError, StoreError
from genoquery.models.data_classes import Genome, Genotype, Location, Sequence
from genoquery.models.enums import ErrorKind
from genoquery.store.base import GenomeStore
from genoquery.store.reference import ReferenceGenome


class FakeGenomeStore(GenomeStore):
    """In-memory store that records every call it receives."""

    def __init__(self) -> None:
        self.genomes = {
            1: Genome(id=1, file_path="test.vcf.gz", sample_index=0, sample_name="NA00001"),
        }
        self.evidences = {1: b"read evidence\nline 2\n"}
        self.calls: List[tuple] = []

    def init(self) -> None:
        self.calls.append(("init",))

    def create_genomes(self, file_path: str) -> List[Genome]:
        self.calls.append(("create_genomes", file_path))
        if not file_path:
            raise StoreError("open : no such file or directory", kind=ErrorKind.INVALID_INPUT)
        genome = Genome(
            id=max(self.genomes) + 1,
            file_path=file_path,
            sample_index=0,
            sample_name="NA00001",
        )
        self.genomes[genome.id] = genome
        return [genome]

    def list_genomes(self) -> List[Genome]:
        self.calls.append(("list_genomes",))
        return list(self.genomes.values())

    def get_genome(self, genome_id: int) -> Genome:
        self.calls.append(("get_genome", genome_id))
        if genome_id not in self.genomes:
            raise NotFoundError(f"Genome {genome_id} not found")
        return self.genomes[genome_id]

    def query_genotypes(
        self,
        file_path: str,
        sample_index: int,
        locations: SequenceType[Location],
    ) -> List[Genotype]:
        self.calls.append(("query_genotypes", file_path, sample_index, list(locations)))
        return [Genotype(location=location) for location in locations]

    def genotypes_to_sequence(
        self,
        genotypes: SequenceType[Genotype],
        locations: SequenceType[Location],
    ) -> Sequence:
        self.calls.append(("genotypes_to_sequence", list(genotypes), list(locations)))
        location = locations[0]
        reference = "A" * location.length
        return Sequence(location=location, reference=reference, haplotypes=[reference, reference])

    def get_evidence(self, evidence_id: int) -> bytes:
        self.calls.append(("get_evidence", evidence_id))
        if evidence_id not in self.evidences:
            raise NotFoundError(f"Evidence {evidence_id} not found")
        return self.evidences[evidence_id]

    def called(self, name: str) -> List[tuple]:
        """Recorded calls to the method ``name``."""
        return [c for c in self.calls if c[0] == name]


@pytest.fixture
def fake_store() -> FakeGenomeStore:
    """Fresh in-memory genome store."""
    return FakeGenomeStore()


@pytest.fixture
def config(tmp_path: Path) -> GenoQueryConfig:
    """Configuration pointing at a temporary data directory."""
    return GenoQueryConfig(data_dir=tmp_path / "genoquery")


# Reference for chromosome 1 used by the VCF fixture below:
#   index 0123456789...
#         ACGTGCATCATGACGTACGT
REFERENCE_CHR1 = "ACGTGCATCATGACGTACGT"

VCF_TEXT = "\n".join([
    "##fileformat=VCFv4.2",
    "##contig=<ID=1,length=20>",
    "##contig=<ID=2,length=20>",
    '##FORMAT=<ID=GT,Number=1,Type=String,Description="Genotype">',
    "\t".join(["#CHROM", "POS", "ID", "REF", "ALT", "QUAL", "FILTER", "INFO",
               "FORMAT", "NA00001", "NA00002"]),
    "\t".join(["1", "2", "rs1", "C", "T", "50", "PASS", ".", "GT", "0|1", "1/1"]),
    "\t".join(["1", "5", ".", "G", "A,GC", "50", "PASS", ".", "GT", "1|2", "0/0"]),
    "\t".join(["1", "10", ".", "AT", "A", "50", "PASS", ".", "GT", "1|0", "./."]),
]) + "\n"


@pytest.fixture
def vcf_file(tmp_path: Path) -> Path:
    """Small uncompressed two-sample VCF."""
    path = tmp_path / "test.vcf"
    path.write_text(VCF_TEXT)
    return path


@pytest.fixture
def fasta_file(tmp_path: Path) -> Generator[Path, None, None]:
    """Reference FASTA matching ``vcf_file``."""
    path = tmp_path / "reference.fa"
    path.write_text(f">1\n{REFERENCE_CHR1}\n>2\n{'T' * 20}\n")
    yield path
    ReferenceGenome.clear_instances()
