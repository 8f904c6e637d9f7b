"""
Command-line interface for MyGuard.
"""

import asyncio
import logging
import sys
from typing import Optional

import click
import structlog

from myguard.config import get_settings
from myguard.exceptions import MyGuardError

logger = structlog.get_logger(__name__)


def configure_logging(level: str) -> None:
    """Send structlog output to stderr, filtered at the given level."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, debug: bool) -> None:
    """MyGuard: contract clause fairness classifier."""
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug
    configure_logging("DEBUG" if debug else get_settings().log_level)


def _analyzer():
    from myguard.services.analysis_service import get_contract_analyzer
    return get_contract_analyzer()


# =========================================================================
# Analysis Commands
# =========================================================================


@cli.command()
@click.argument("contract_file", required=False, type=click.File("r", encoding="utf-8"))
@click.option("--text", "-t", help="Contract text to analyze instead of a file")
@click.option("--json", "as_json", is_flag=True, help="Print the full report as JSON")
def analyze(contract_file, text: Optional[str], as_json: bool) -> None:
    """Classify every clause of a contract."""
    if contract_file is None and text is None:
        raise click.UsageError("Provide a contract file or --text")

    document = text if text is not None else contract_file.read()
    report = asyncio.run(_analyzer().analyze_document(document))

    if as_json:
        click.echo(report.model_dump_json(indent=2))
        return

    click.echo(f"Total clauses: {report.total_clauses}")
    click.echo(f"Allowed: {report.allowed_count} ({report.allowed_pct:.1f}%)")
    click.echo(f"Not allowed: {report.not_allowed_count} ({report.not_allowed_pct:.1f}%)")
    if report.tier is not None:
        click.echo(f"Tier: {report.tier.value}")

    for i, verdict in enumerate(report.breakdown, start=1):
        click.echo(f"\n{i}. [{verdict.label.value}] ({verdict.confidence:.2f}) {verdict.clause}")


@cli.command()
@click.argument("clause", type=str)
def classify(clause: str) -> None:
    """Classify a single clause."""
    try:
        verdict = asyncio.run(_analyzer().classify_clause(clause))
    except MyGuardError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"{verdict.label.value} ({verdict.confidence:.2f})")


@cli.command("dataset-size")
def dataset_size() -> None:
    """Show the number of reference records loaded."""
    click.echo(_analyzer().dataset_size())


@cli.command()
def tips() -> None:
    """Show contract review tips."""
    from myguard.services.explanation_service import contract_tips

    for tip in contract_tips():
        click.echo(f"- {tip}")


# =========================================================================
# Server Commands
# =========================================================================


@cli.command()
@click.option("--host", default=None, help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
def serve(host: Optional[str], port: Optional[int], reload: bool) -> None:
    """Start the API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    click.echo(f"Starting MyGuard API server on {host}:{port}")
    uvicorn.run("myguard.api.main:app", host=host, port=port, reload=reload)


def main() -> None:
    cli(obj={})


if __name__ == "__main__":
    main()
