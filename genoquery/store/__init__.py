"""Genome store package."""

from genoquery.store.base import GenomeStore
from genoquery.store.sqlite_store import SQLiteGenomeStore
from genoquery.store.reference import ReferenceGenome
from genoquery.store.sequence import reconstruct_sequence

__all__ = [
    "GenomeStore",
    "SQLiteGenomeStore",
    "ReferenceGenome",
    "reconstruct_sequence",
]
