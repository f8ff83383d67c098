"""Shared utilities for CLI commands"""

from __future__ import annotations

import json
import logging
import os
from collections.abc import Sequence
from typing import Any

import typer
import yaml
from pydantic import BaseModel
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from kenvcli.lib.context import OutputFormat

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for kenv CLI.

    Log levels:
    - Normal: Only warnings/errors shown
    - Verbose (-v): INFO level - shows deletions, copies, clones
    - Debug (KENV_DEBUG=1): DEBUG level - shows everything
    """
    debug = bool(os.environ.get("KENV_DEBUG"))
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING

    handler = RichHandler(
        console=Console(stderr=True),
        show_time=verbose,
        show_path=debug,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))

    cli_logger = logging.getLogger("kenvcli")
    cli_logger.setLevel(level)
    cli_logger.handlers = [handler]
    cli_logger.propagate = False


def _to_data(rows: Sequence[Any]) -> list[Any]:
    return [r.model_dump(mode="json") if isinstance(r, BaseModel) else r for r in rows]


def _cell(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, list):
        return "\n".join(_cell(v) for v in value)
    if isinstance(value, dict):
        return " -> ".join(str(v) for v in value.values())
    return str(value)


def render(rows: Sequence[Any], fmt: OutputFormat) -> None:
    """Print list command results in the requested format."""
    data = _to_data(rows)

    if fmt == OutputFormat.YAML:
        typer.echo(yaml.safe_dump(data, sort_keys=False), nl=False)
        return

    if fmt == OutputFormat.TABLE:
        table = Table()
        if data and isinstance(data[0], dict):
            columns = list(data[0].keys())
            for column in columns:
                table.add_column(column, style="cyan" if column == columns[0] else None)
            for row in data:
                table.add_row(*(_cell(row.get(c)) for c in columns))
        else:
            table.add_column("name", style="cyan")
            for row in data:
                table.add_row(_cell(row))
        console.print(table)
        return

    typer.echo(json.dumps(data, indent=2))
