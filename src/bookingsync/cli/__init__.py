"""Command line interface for bookingsync."""
from bookingsync.cli.main import cli

__all__ = ["cli"]
