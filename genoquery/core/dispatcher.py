"""
Genome resolution and query dispatch.

Bridges parsed queries to the genome store. Store methods are blocking, so
they run in Starlette's worker threadpool; the event loop only awaits them.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Optional, Union

from starlette.concurrency import run_in_threadpool

from genoquery.core.errors import RequestCancelled
from genoquery.core.location_parser import parse_int
from genoquery.models.data_classes import Genome, Genotype, Query, RangeQuery, Sequence
from genoquery.models.enums import OutputFormat
from genoquery.store.base import GenomeStore

logger = logging.getLogger(__name__)

# Returns True once the client that made the request has gone away.
CancellationProbe = Callable[[], Awaitable[bool]]


async def _ensure_not_cancelled(is_cancelled: Optional[CancellationProbe]) -> None:
    if is_cancelled is not None and await is_cancelled():
        raise RequestCancelled("Request cancelled by client")


class GenomeResolver:
    """Resolves a genome id from a URL path to a genome record."""

    def __init__(self, store: GenomeStore):
        self.store = store

    async def resolve(
        self,
        raw_id: str,
        is_cancelled: Optional[CancellationProbe] = None,
    ) -> Genome:
        """
        Parse ``raw_id`` and load the genome.

        Raises:
            ParseError: ``raw_id`` is not an integer
            StoreError: the store failed, including not-found
        """
        genome_id = parse_int(raw_id)
        await _ensure_not_cancelled(is_cancelled)
        return await run_in_threadpool(self.store.get_genome, genome_id)


class QueryDispatcher:
    """
    Runs one genotype query against the store.

    ``fmt=seq`` reconstructs a sequence, but only for range queries; a
    location list always gets the raw genotype list back.
    """

    def __init__(self, store: GenomeStore):
        self.store = store

    async def dispatch(
        self,
        genome: Genome,
        query: Query,
        fmt: OutputFormat = OutputFormat.GENOTYPES,
        is_cancelled: Optional[CancellationProbe] = None,
    ) -> Union[List[Genotype], Sequence]:
        locations = list(query.locations)
        logger.debug(
            "Querying genome %d (%s, sample %d) at %d location(s)",
            genome.id, genome.file_path, genome.sample_index, len(locations),
        )

        await _ensure_not_cancelled(is_cancelled)
        genotypes = await run_in_threadpool(
            self.store.query_genotypes,
            genome.file_path,
            genome.sample_index,
            locations,
        )

        if fmt == OutputFormat.SEQUENCE and isinstance(query, RangeQuery):
            await _ensure_not_cancelled(is_cancelled)
            return await run_in_threadpool(
                self.store.genotypes_to_sequence, genotypes, locations
            )

        return genotypes
