"""
Reference genome handling with lazy loading.

Uses pyfaidx for memory-efficient access to large FASTA files.
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Dict, Optional

from pyfaidx import Fasta, FetchError

from genoquery.core.errors import StoreError
from genoquery.models.enums import ErrorKind


class ReferenceGenome:
    """
    Lazy-loading reference FASTA using pyfaidx.

    Features:
    - Memory-mapped FASTA (only loads requested regions)
    - One shared instance per FASTA path
    - Automatic index creation (.fai)
    - 'chr1' / '1' naming tolerance
    """

    _instances: Dict[str, "ReferenceGenome"] = {}
    _lock = threading.Lock()

    def __new__(cls, fasta_path: Path) -> "ReferenceGenome":
        """Singleton pattern per FASTA path."""
        key = str(Path(fasta_path).expanduser().resolve())
        with cls._lock:
            if key not in cls._instances:
                instance = super().__new__(cls)
                instance._initialized = False
                cls._instances[key] = instance
            return cls._instances[key]

    def __init__(self, fasta_path: Path):
        if self._initialized:
            return

        self.fasta_path = Path(fasta_path).expanduser()
        self._fasta: Optional[Fasta] = None
        self._chromosome_lengths: Dict[str, int] = {}
        self._load_lock = threading.Lock()
        self._initialized = True

    def _ensure_loaded(self) -> None:
        """Load FASTA file if not already loaded."""
        with self._load_lock:
            if self._fasta is not None:
                return

            if not self.fasta_path.exists():
                raise StoreError(
                    f"Reference FASTA not found: {self.fasta_path}",
                    kind=ErrorKind.STORE,
                )

            # pyfaidx will create .fai index if needed
            self._fasta = Fasta(str(self.fasta_path), build_index=True)

            for chrom in self._fasta.keys():
                self._chromosome_lengths[chrom] = len(self._fasta[chrom])

    def get_sequence(self, chromosome: str, start: int, end: int) -> str:
        """
        Get reference bases.

        Args:
            chromosome: Chromosome name (with or without 'chr' prefix)
            start: Start position (0-based)
            end: End position (exclusive)

        Returns:
            DNA sequence (uppercase)

        Raises:
            StoreError: unknown chromosome, or the interval runs off the end
        """
        self._ensure_loaded()

        chrom = self._normalize_chromosome(chromosome)
        length = self._chromosome_lengths[chrom]
        if end > length:
            raise StoreError(
                f"{chromosome}:{start + 1}-{end} extends past the end of "
                f"{chrom} ({length} bp)",
                kind=ErrorKind.INVALID_INPUT,
            )

        try:
            return str(self._fasta[chrom][start:end]).upper()
        except (KeyError, FetchError) as e:
            raise StoreError(f"Failed to fetch {chrom}:{start}-{end}: {e}") from e

    def _normalize_chromosome(self, chromosome: str) -> str:
        """
        Normalize chromosome name to match FASTA.

        Handles 'chr1' vs '1' naming conventions.
        """
        if chromosome in self._chromosome_lengths:
            return chromosome

        if chromosome.startswith("chr"):
            alt = chromosome[3:]
        else:
            alt = f"chr{chromosome}"

        if alt in self._chromosome_lengths:
            return alt

        for key in self._chromosome_lengths:
            if key.upper() == chromosome.upper():
                return key

        raise StoreError(
            f"Chromosome {chromosome} not found in reference {self.fasta_path.name}",
            kind=ErrorKind.INVALID_INPUT,
        )

    def close(self) -> None:
        """Close the FASTA file handle."""
        with self._load_lock:
            if self._fasta is not None:
                self._fasta.close()
                self._fasta = None
                self._chromosome_lengths.clear()

    @classmethod
    def clear_instances(cls) -> None:
        """Close and forget every cached reference."""
        with cls._lock:
            for instance in cls._instances.values():
                instance.close()
            cls._instances.clear()
