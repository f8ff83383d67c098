"""Clusters command - list clusters of the current environment"""

from __future__ import annotations

from kenvcli.lib.context import CLIContext
from kenvcli.lib.errors import handle_error
from kenvcli.lib.service import ConfigService

from .utils import render


def clusters_list_command(ctx: CLIContext) -> None:
    """List configured clusters."""
    try:
        clusters = ConfigService(ctx).clusters()
    except Exception as e:
        handle_error(e)

    render(clusters, ctx.output)
