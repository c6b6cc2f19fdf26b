"""
Entry point for running bookingsync as a module.

Usage:
    python -m bookingsync [command] [options]

Example:
    python -m bookingsync save --name Jane --service Wash --at 2026-11-02T09:30:00Z
    python -m bookingsync pending --search jane
    python -m bookingsync sync
"""

from bookingsync.cli.main import cli

if __name__ == "__main__":
    cli()
