"""bookingsync CLI entry point - assembles all commands."""
import logging
import sys

import click

from .. import __version__
from ..config import SyncConfig
from ..core.errors import ConfigError
from ..core.receipt import set_receipt_stream
from .output import print_error
from .queue_cmd import connected, do_sync, pending, save, status, synced


@click.group()
@click.version_option(version=__version__)
@click.option('--store', 'store_path', default=None, help='Path to the local store file')
@click.option('--endpoint', default=None, help='Booking service base URL')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx: click.Context, store_path: str | None, endpoint: str | None, verbose: bool):
    """bookingsync: offline-first booking queue."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    set_receipt_stream("stderr")

    try:
        config = SyncConfig.from_env()
    except ConfigError as e:
        print_error(str(e))
        sys.exit(1)

    if store_path:
        config.store_path = store_path
    if endpoint:
        config.endpoint = endpoint
    ctx.obj = config


cli.add_command(save)
cli.add_command(pending)
cli.add_command(synced)
cli.add_command(status)
cli.add_command(do_sync)
cli.add_command(connected)


if __name__ == "__main__":
    cli()
