"""Kenv - Kafka environment profiles CLI"""

from ._version import __version__

__all__ = ["__version__"]
