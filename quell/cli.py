"""Main CLI module for quell.

This module re-exports the CLI for convenience. The main implementation
is in __main__.py.
"""

from quell.__main__ import cli

__all__ = ["cli"]
