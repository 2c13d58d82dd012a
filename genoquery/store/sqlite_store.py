"""
SQLite-backed genome store.

Genome and evidence records live in a local SQLite database; genotypes are
read straight from the registered variant-call files, and sequences are
rebuilt against a reference FASTA.
"""

from __future__ import annotations

import logging
import sqlite3
from contextlib import closing, contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional, Sequence as SequenceType

from genoquery.core.errors import NotFoundError, StoreError
from genoquery.models.data_classes import Genome, Genotype, Location, Sequence
from genoquery.models.enums import ErrorKind
from genoquery.store import vcf
from genoquery.store.base import GenomeStore
from genoquery.store.reference import ReferenceGenome
from genoquery.store.sequence import reconstruct_sequence

logger = logging.getLogger(__name__)

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS genomes (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        file_path TEXT NOT NULL,
        sample_index INTEGER NOT NULL,
        sample_name TEXT,
        created_at TEXT NOT NULL
    );

    CREATE TABLE IF NOT EXISTS evidences (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        genome_id INTEGER,
        payload BLOB NOT NULL,
        created_at TEXT NOT NULL,
        FOREIGN KEY (genome_id) REFERENCES genomes(id)
    );

    CREATE INDEX IF NOT EXISTS idx_genomes_file ON genomes(file_path);
    CREATE INDEX IF NOT EXISTS idx_evidences_genome ON evidences(genome_id);
"""


class SQLiteGenomeStore(GenomeStore):
    """
    Genome store on SQLite, pysam and pyfaidx.

    Each call opens its own connection, so the store can be shared by the
    server's worker threads.
    """

    def __init__(self, db_path: Path, reference_fasta: Optional[Path] = None):
        self.db_path = Path(db_path).expanduser()
        self.reference_fasta = reference_fasta

    @contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        """Connection committed on success and always closed."""
        try:
            with closing(sqlite3.connect(str(self.db_path))) as conn:
                conn.row_factory = sqlite3.Row
                conn.execute("PRAGMA foreign_keys = ON")
                with conn:
                    yield conn
        except sqlite3.Error as e:
            raise StoreError(f"Database error: {e}") from e

    def init(self) -> None:
        """Create database and tables if needed."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        with self._connection() as conn:
            conn.executescript(_SCHEMA)
        logger.info("Genome store ready at %s", self.db_path)

    @staticmethod
    def _row_to_genome(row: sqlite3.Row) -> Genome:
        return Genome(
            id=row["id"],
            file_path=row["file_path"],
            sample_index=row["sample_index"],
            sample_name=row["sample_name"],
            created_at=row["created_at"],
        )

    # -- Genomes --------------------------------------------------------------

    def create_genomes(self, file_path: str) -> List[Genome]:
        samples = vcf.read_sample_names(file_path)
        if not samples:
            raise StoreError(
                f"No samples found in {file_path}",
                kind=ErrorKind.INVALID_INPUT,
            )

        created_at = datetime.now(timezone.utc).isoformat()
        genomes: List[Genome] = []
        with self._connection() as conn:
            for index, name in enumerate(samples):
                cursor = conn.execute(
                    """
                    INSERT INTO genomes (file_path, sample_index, sample_name, created_at)
                    VALUES (?, ?, ?, ?)
                    """,
                    (file_path, index, name, created_at),
                )
                genomes.append(Genome(
                    id=cursor.lastrowid,
                    file_path=file_path,
                    sample_index=index,
                    sample_name=name,
                    created_at=created_at,
                ))

        logger.info("Registered %d genome(s) from %s", len(genomes), file_path)
        return genomes

    def list_genomes(self) -> List[Genome]:
        with self._connection() as conn:
            rows = conn.execute("SELECT * FROM genomes ORDER BY id").fetchall()
        return [self._row_to_genome(row) for row in rows]

    def get_genome(self, genome_id: int) -> Genome:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT * FROM genomes WHERE id = ?", (genome_id,)
            ).fetchone()
        if row is None:
            raise NotFoundError(f"Genome {genome_id} not found")
        return self._row_to_genome(row)

    # -- Genotypes ------------------------------------------------------------

    def query_genotypes(
        self,
        file_path: str,
        sample_index: int,
        locations: SequenceType[Location],
    ) -> List[Genotype]:
        return vcf.query_genotypes(file_path, sample_index, locations)

    def genotypes_to_sequence(
        self,
        genotypes: SequenceType[Genotype],
        locations: SequenceType[Location],
    ) -> Sequence:
        if self.reference_fasta is None:
            raise StoreError("No reference FASTA configured for sequence reconstruction")
        if len(locations) != 1 or len(genotypes) != 1:
            raise StoreError(
                "Sequence reconstruction needs exactly one location",
                kind=ErrorKind.INVALID_INPUT,
            )

        location = locations[0]
        reference = ReferenceGenome(self.reference_fasta).get_sequence(
            location.chrom, location.start, location.end
        )
        return reconstruct_sequence(reference, location, list(genotypes[0].calls))

    # -- Evidence -------------------------------------------------------------

    def get_evidence(self, evidence_id: int) -> bytes:
        with self._connection() as conn:
            row = conn.execute(
                "SELECT payload FROM evidences WHERE id = ?", (evidence_id,)
            ).fetchone()
        if row is None:
            raise NotFoundError(f"Evidence {evidence_id} not found")
        return bytes(row["payload"])

    def add_evidence(self, payload: bytes, genome_id: Optional[int] = None) -> int:
        """Store an evidence payload, optionally tied to a genome. Returns its id."""
        if genome_id is not None:
            self.get_genome(genome_id)
        with self._connection() as conn:
            cursor = conn.execute(
                "INSERT INTO evidences (genome_id, payload, created_at) VALUES (?, ?, ?)",
                (genome_id, sqlite3.Binary(payload), datetime.now(timezone.utc).isoformat()),
            )
            evidence_id = cursor.lastrowid
        logger.info("Stored evidence %d (%d bytes)", evidence_id, len(payload))
        return evidence_id

    def close(self) -> None:
        if self.reference_fasta is not None:
            ReferenceGenome(self.reference_fasta).close()
