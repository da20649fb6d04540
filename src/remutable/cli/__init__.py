"""
CLI module for remutable.

Provides the command-line interface using Click.
"""

from remutable.cli.main import cli, main

__all__ = ["main", "cli"]
