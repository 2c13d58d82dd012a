"""
genoquery CLI - serve the API and work with the genome store.

Usage:
    genoquery serve --host 0.0.0.0 --port 1323
    genoquery ingest test/data/test.vcf.gz
    genoquery genotypes 1 --locations 1:1,1:2,1:3
    genoquery genotypes 1 --range 1:1-100 --fmt seq
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, List, Optional

import typer
from fastapi.encoders import jsonable_encoder
from pydantic import ValidationError as PydanticValidationError
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from genoquery import __version__
from genoquery.config import GenoQueryConfig, get_config
from genoquery.core.dispatcher import GenomeResolver, QueryDispatcher
from genoquery.core.errors import GenoQueryError
from genoquery.core.location_parser import parse_query
from genoquery.core.log import setup_logging
from genoquery.models.data_classes import Genome
from genoquery.models.enums import OutputFormat
from genoquery.store.sqlite_store import SQLiteGenomeStore

# Initialize Typer app and Rich console
app = typer.Typer(
    name="genoquery",
    help="Genomic variant query API",
    no_args_is_help=True,
    rich_markup_mode="rich",
)
evidence_app = typer.Typer(help="Store and read evidence payloads")
app.add_typer(evidence_app, name="evidence")

console = Console()
logger = logging.getLogger(__name__)


# =============================================================================
# Version callback
# =============================================================================

def version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold blue]genoquery[/bold blue] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
) -> None:
    """
    genoquery - Genomic variant query API

    Register VCF samples as genomes and query their genotypes.
    """
    pass


def _open_store(config: GenoQueryConfig) -> SQLiteGenomeStore:
    store = SQLiteGenomeStore(
        config.resolved_database_path(),
        reference_fasta=config.reference_fasta,
    )
    store.init()
    return store


def _fail(error: GenoQueryError) -> None:
    console.print(f"[red]Error:[/red] {escape(error.message)}")
    raise typer.Exit(1)


def _print_json(data: Any) -> None:
    # Plain print keeps stdout pipeable
    print(json.dumps(jsonable_encoder(data), indent=2))


def _genome_table(genomes: List[Genome], title: str) -> Table:
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Sample", style="green")
    table.add_column("Index", style="dim")
    table.add_column("File")
    for genome in genomes:
        table.add_row(
            str(genome.id),
            genome.sample_name or "",
            str(genome.sample_index),
            genome.file_path,
        )
    return table


# =============================================================================
# Server command
# =============================================================================

@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (default from config)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port (default from config)"),
) -> None:
    """Run the HTTP API."""
    import uvicorn

    from genoquery.api.server import create_app

    overrides = {k: v for k, v in {"host": host, "port": port}.items() if v is not None}
    try:
        config = GenoQueryConfig(**{**get_config().model_dump(), **overrides})
    except PydanticValidationError as e:
        console.print(f"[red]Error:[/red] invalid server settings: {escape(str(e))}")
        raise typer.Exit(1)
    setup_logging(config.log_level, config.log_file)

    store = SQLiteGenomeStore(
        config.resolved_database_path(),
        reference_fasta=config.reference_fasta,
    )
    logger.info(
        "Running genoquery server on %s (version %s)", config.addr, config.version
    )
    uvicorn.run(
        create_app(config, store),
        host=config.host,
        port=config.port,
        log_config=None,
        access_log=False,
    )


# =============================================================================
# Store commands
# =============================================================================

@app.command()
def ingest(
    file_path: str = typer.Argument(..., help="VCF/BCF file to register"),
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json"),
) -> None:
    """Register one genome per sample in a variant-call file."""
    store = _open_store(get_config())
    try:
        genomes = store.create_genomes(file_path)
    except GenoQueryError as e:
        _fail(e)
    finally:
        store.close()

    if format == "json":
        _print_json(genomes)
    else:
        console.print(_genome_table(genomes, f"Registered from {file_path}"))


@app.command()
def genomes(
    format: str = typer.Option("table", "--format", "-f", help="Output format: table, json"),
) -> None:
    """List registered genomes."""
    store = _open_store(get_config())
    try:
        records = store.list_genomes()
    except GenoQueryError as e:
        _fail(e)
    finally:
        store.close()

    if format == "json":
        _print_json(records)
    else:
        console.print(_genome_table(records, "Genomes"))


@app.command()
def genotypes(
    genome_id: str = typer.Argument(..., help="Genome id"),
    locations: Optional[str] = typer.Option(
        None,
        "--locations", "-l",
        help="1-based positions: CHR:POS[,CHR:POS...]",
    ),
    range_: Optional[str] = typer.Option(
        None,
        "--range", "-r",
        help="1-based inclusive range: CHR:START-END",
    ),
    fmt: Optional[str] = typer.Option(
        None,
        "--fmt",
        help="'seq' rebuilds the sample's sequence over a --range",
    ),
) -> None:
    """
    Query genotypes the same way GET /v1/genomes/{id}/genotypes does.

    Examples:
        genoquery genotypes 1 --locations 1:1,1:2,1:3
        genoquery genotypes 1 --range 1:1-100 --fmt seq
    """
    store = _open_store(get_config())

    async def run() -> Any:
        query = parse_query(locations, range_)
        genome = await GenomeResolver(store).resolve(genome_id)
        return await QueryDispatcher(store).dispatch(
            genome, query, fmt=OutputFormat.from_param(fmt)
        )

    try:
        result = asyncio.run(run())
    except GenoQueryError as e:
        _fail(e)
    finally:
        store.close()

    _print_json(result)


# =============================================================================
# Evidence commands
# =============================================================================

@evidence_app.command("add")
def evidence_add(
    file: Path = typer.Argument(..., exists=True, dir_okay=False, help="File holding the payload"),
    genome_id: Optional[int] = typer.Option(None, "--genome-id", "-g", help="Genome the evidence belongs to"),
) -> None:
    """Store a file's bytes as an evidence record."""
    store = _open_store(get_config())
    try:
        evidence_id = store.add_evidence(file.read_bytes(), genome_id=genome_id)
    except GenoQueryError as e:
        _fail(e)
    finally:
        store.close()

    console.print(f"[green]Stored evidence {evidence_id}[/green]")


@evidence_app.command("show")
def evidence_show(
    evidence_id: int = typer.Argument(..., help="Evidence id"),
) -> None:
    """Print an evidence payload as stored."""
    store = _open_store(get_config())
    try:
        payload = store.get_evidence(evidence_id)
    except GenoQueryError as e:
        _fail(e)
    finally:
        store.close()

    # Bytes go to the binary stream untouched
    typer.echo(payload, nl=False)


# =============================================================================
# Entry point
# =============================================================================

if __name__ == "__main__":
    app()
