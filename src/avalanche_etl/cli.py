"""
Command line interface for the avalanche ETL.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import ConfigError, EtlConfig, load_config
from .pipeline import PipelineReport, execute_pipeline
from .regions import VALID_REGIONS

console = Console()
app = typer.Typer(help="Publish New Zealand avalanche danger forecasts as GeoJSON.")
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def _configure_logging(level_name: str) -> None:
    env_override = os.getenv("AVALANCHE_LOG_LEVEL")
    level_str = (env_override or level_name or "info").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "INFO"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _resolve_config_path(value: Optional[Path]) -> Optional[Path]:
    """Ensure an explicitly given config path exists and return it absolute."""
    if value is None:
        return None
    resolved = value.expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"No config file found at {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Config path must be a file, got directory: {resolved}")
    return resolved


def _load_config_or_exit(path: Optional[Path]) -> EtlConfig:
    try:
        return load_config(path)
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {exc}")
        raise typer.Exit(code=1) from exc


def _print_report(report: PipelineReport) -> None:
    table = Table(title="Avalanche ETL Summary")
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in report.summary_rows():
        table.add_row(key, value)
    console.print(table)


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show avalanche-etl version and exit.",
        is_flag=True,
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
) -> None:
    """
    Default command when no subcommand is selected.
    """
    _configure_logging(log_level)

    if version:
        console.print(f"[bold green]avalanche-etl[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print("[bold yellow]avalanche-etl[/] is ready. Run [cyan]avalanche-etl run[/] to publish forecasts.")


@app.command()
def run(
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to an optional TOML configuration file.",
        callback=_resolve_config_path,
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the FeatureCollection to this file (overrides config).",
    ),
    submit_url: Optional[str] = typer.Option(
        None,
        "--submit-url",
        help="POST the FeatureCollection to this URL instead of writing a file.",
    ),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout",
        min=1,
        help="Per-request timeout in milliseconds.",
    ),
    dry_run: bool = typer.Option(
        False,
        "--dry-run",
        help="Build the collection and print it without submitting.",
    ),
) -> None:
    """
    Fetch all regions, build the FeatureCollection and submit it.
    """
    etl_config = _load_config_or_exit(config)
    updates = {}
    if output is not None:
        updates["output"] = output
    if submit_url is not None:
        updates["submit_url"] = submit_url
    if timeout is not None:
        updates["timeout"] = timeout
    if updates:
        etl_config = etl_config.model_copy(update=updates)
    logger.info("Using timeout %d ms against %s", etl_config.timeout, etl_config.base_url)

    try:
        report = execute_pipeline(etl_config, dry_run=dry_run)
    except Exception as exc:
        logger.error("Error in avalanche ETL: %s", exc)
        console.print(f"[bold red]Run failed:[/] {exc}")
        raise typer.Exit(code=1) from exc

    if dry_run:
        console.print_json(json.dumps(report.collection))
    _print_report(report)
    console.print("[bold green]Run completed.[/]")


@app.command()
def regions() -> None:
    """
    List the forecast regions processed on each run.
    """
    table = Table(title="Forecast Regions")
    table.add_column("Region id")
    table.add_column("API path")
    for region_id in VALID_REGIONS:
        table.add_row(str(region_id), f"/api/region/{region_id}")
    console.print(table)


def main() -> None:
    """
    Entry-point used by the console script defined in pyproject.toml.
    """
    app()
