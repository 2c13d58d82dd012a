"""
genoquery Web API

FastAPI application exposing genome registration, genotype queries and
evidence lookup over a genome store.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional, Union

from fastapi import APIRouter, FastAPI, Query, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError as PydanticValidationError
from starlette.concurrency import run_in_threadpool

from genoquery.config import GenoQueryConfig
from genoquery.core.dispatcher import GenomeResolver, QueryDispatcher
from genoquery.core.errors import GenoQueryError, ValidationError, status_for
from genoquery.core.location_parser import parse_int, parse_query
from genoquery.models.data_classes import CreateGenomeRequest, Genome, Genotype, Sequence
from genoquery.models.enums import ErrorKind, OutputFormat
from genoquery.store.base import GenomeStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1")


# =============================================================================
# Request helpers
# =============================================================================

def _store(request: Request) -> GenomeStore:
    return request.app.state.store


async def _bind_create_request(request: Request) -> CreateGenomeRequest:
    """Read ``filePath`` from a JSON or form-encoded body."""
    content_type = request.headers.get("content-type", "")
    try:
        if content_type.startswith("application/json"):
            data = await request.json()
        elif content_type.startswith(("application/x-www-form-urlencoded", "multipart/form-data")):
            data = dict(await request.form())
        else:
            raise ValidationError(f"Unsupported media type: {content_type or 'none'}")
        if not isinstance(data, dict):
            raise ValidationError("Request body must be an object")
        return CreateGenomeRequest.model_validate(data)
    except (ValueError, PydanticValidationError) as e:
        raise ValidationError(f"Invalid request body: {e}") from e


# =============================================================================
# API Endpoints
# =============================================================================

@router.post("/genomes", status_code=201, response_model=List[Genome])
async def post_genomes(request: Request):
    """Register genomes from a variant-call file.

    $ curl -X POST --data "filePath=test/data/test.vcf.gz" localhost:1323/v1/genomes
    """
    body = await _bind_create_request(request)
    return await run_in_threadpool(_store(request).create_genomes, body.file_path)


@router.get("/genomes", response_model=List[Genome])
async def list_genomes(request: Request):
    """All registered genomes."""
    return await run_in_threadpool(_store(request).list_genomes)


@router.get("/genomes/{genome_id}", response_model=Genome)
async def get_genome(genome_id: str, request: Request):
    """One genome by id."""
    resolver: GenomeResolver = request.app.state.resolver
    return await resolver.resolve(genome_id, is_cancelled=request.is_disconnected)


@router.get("/genomes/{genome_id}/genotypes", response_model=Union[List[Genotype], Sequence])
async def get_genotypes(
    genome_id: str,
    request: Request,
    locations: Optional[str] = Query(None, description="CHR:POS[,CHR:POS...], 1-based"),
    range_: Optional[str] = Query(None, alias="range", description="CHR:START-END, 1-based inclusive"),
    fmt: Optional[str] = Query(None, description="'seq' rebuilds the sequence of a range query"),
):
    """Genotypes of a genome at a list of positions or over a range.

    $ curl "localhost:1323/v1/genomes/1/genotypes?locations=1:1,1:2,1:3"
    $ curl "localhost:1323/v1/genomes/1/genotypes?range=1:1-100&fmt=seq"
    """
    query = parse_query(locations, range_)

    resolver: GenomeResolver = request.app.state.resolver
    dispatcher: QueryDispatcher = request.app.state.dispatcher

    genome = await resolver.resolve(genome_id, is_cancelled=request.is_disconnected)
    return await dispatcher.dispatch(
        genome,
        query,
        fmt=OutputFormat.from_param(fmt),
        is_cancelled=request.is_disconnected,
    )


@router.get("/evidences/{evidence_id}", response_class=PlainTextResponse)
async def get_evidence(evidence_id: str, request: Request):
    """Raw evidence payload."""
    payload = await run_in_threadpool(_store(request).get_evidence, parse_int(evidence_id))
    return PlainTextResponse(content=payload)


# =============================================================================
# Application factory
# =============================================================================

def create_app(config: GenoQueryConfig, store: GenomeStore) -> FastAPI:
    """
    Build the API around a store.

    The store is initialised on startup and closed on shutdown.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        await run_in_threadpool(store.init)
        try:
            yield
        finally:
            store.close()

    app = FastAPI(
        title="genoquery",
        description="Genomic variant query API",
        version=config.version,
        lifespan=lifespan,
    )
    app.state.config = config
    app.state.store = store
    app.state.resolver = GenomeResolver(store)
    app.state.dispatcher = QueryDispatcher(store)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        """Access log line for every request."""
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        client = request.client.host if request.client else "unknown"
        logger.info(
            "%s %s %s -> %d (%.1f ms)",
            client, request.method, request.url.path, response.status_code, elapsed_ms,
        )
        return response

    @app.exception_handler(GenoQueryError)
    async def handle_genoquery_error(request: Request, exc: GenoQueryError):
        status_code = status_for(exc.kind, distinct=config.distinct_error_status)
        logger.warning(
            "%s %s failed (%s): %s", request.method, request.url.path, exc.kind.value, exc.message
        )
        return JSONResponse(status_code=status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        status_code = status_for(ErrorKind.STORE, distinct=config.distinct_error_status)
        return JSONResponse(
            status_code=status_code,
            content={"message": str(exc), "kind": ErrorKind.STORE.value},
        )

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": config.version}

    app.include_router(router)
    return app
