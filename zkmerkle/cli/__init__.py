"""
Command-line interface for zkmerkle.
"""

from zkmerkle.cli.main import cli

__all__ = ["cli"]
