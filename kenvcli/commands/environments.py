"""Environments command - list environments of the config directory"""

from __future__ import annotations

from kenvcli.lib.context import CLIContext
from kenvcli.lib.errors import handle_error
from kenvcli.lib.service import ConfigService

from .utils import render


def environments_list_command(ctx: CLIContext) -> None:
    """List available environments."""
    try:
        envs = ConfigService(ctx).environments()
    except Exception as e:
        handle_error(e)

    render(envs, ctx.output)
