"""CLI commands"""

from .init import init_command
from .clusters import clusters_list_command
from .environments import environments_list_command

__all__ = ["init_command", "clusters_list_command", "environments_list_command"]
