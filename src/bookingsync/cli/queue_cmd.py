"""Booking queue commands: save, pending, synced, status, sync, connected."""
import asyncio
import sys

import click

from ..booking import new_booking, parse_ts
from ..config import SyncConfig
from ..core.constants import PAGE_SIZE_DEFAULT
from ..core.errors import BookingSyncError
from ..offline.query import filter_bookings, paginate
from ..offline.queue import BookingQueue
from ..offline.reconnect import is_connected
from .output import print_error, print_json, print_page, print_success


def _queue(config: SyncConfig) -> BookingQueue:
    try:
        return BookingQueue.from_config(config)
    except BookingSyncError as e:
        print_error(str(e))
        sys.exit(1)


def _list(bookings, search: str | None, page: int, page_size: int, label: str) -> None:
    matches = filter_bookings(bookings, search=search)
    print_page(paginate(matches, page=page, page_size=page_size), label)


@click.command()
@click.option('--name', 'customer_name', default='', help='Customer name')
@click.option('--phone', 'phone_number', default='', help='Phone number')
@click.option('--email', default='', help='Email address')
@click.option('--service', 'service_type', default='', help='Service type, e.g. Wash')
@click.option('--at', 'appointment_at', required=True, help='Appointment time (ISO 8601)')
@click.pass_obj
def save(config: SyncConfig, customer_name: str, phone_number: str, email: str,
         service_type: str, appointment_at: str):
    """Queue a booking for sync."""
    try:
        booking = new_booking(
            customer_name=customer_name,
            phone_number=phone_number,
            email=email,
            service_type=service_type,
            appointment_at=parse_ts(appointment_at),
        )
        asyncio.run(_queue(config).save(booking))
        print_success(f"Queued booking {booking.id}")
    except BookingSyncError as e:
        print_error(f"Save failed: {e}")
        sys.exit(1)


@click.command()
@click.option('--search', '-s', default=None, help='Match name, email or phone')
@click.option('--page', default=1, type=int, help='Page number')
@click.option('--page-size', default=PAGE_SIZE_DEFAULT, type=click.IntRange(min=1), help='Rows per page')
@click.pass_obj
def pending(config: SyncConfig, search: str | None, page: int, page_size: int):
    """List bookings awaiting sync."""
    try:
        bookings = asyncio.run(_queue(config).get_pending())
        _list(bookings, search, page, page_size, "pending")
    except BookingSyncError as e:
        print_error(f"Listing failed: {e}")
        sys.exit(1)


@click.command()
@click.option('--search', '-s', default=None, help='Match name, email or phone')
@click.option('--page', default=1, type=int, help='Page number')
@click.option('--page-size', default=PAGE_SIZE_DEFAULT, type=click.IntRange(min=1), help='Rows per page')
@click.pass_obj
def synced(config: SyncConfig, search: str | None, page: int, page_size: int):
    """List bookings confirmed by the remote."""
    try:
        bookings = asyncio.run(_queue(config).get_synced())
        _list(bookings, search, page, page_size, "synced")
    except BookingSyncError as e:
        print_error(f"Listing failed: {e}")
        sys.exit(1)


@click.command()
@click.pass_obj
def status(config: SyncConfig):
    """Show queue status."""
    try:
        queue_status = asyncio.run(_queue(config).status())
        queue_status["connected"] = is_connected(
            config.probe_host, config.probe_port, config.probe_timeout
        )
        print_json(queue_status)
    except BookingSyncError as e:
        print_error(f"Status check failed: {e}")
        sys.exit(1)


@click.command('sync')
@click.option('--force', is_flag=True, help='Force sync attempt even if not connected')
@click.pass_obj
def do_sync(config: SyncConfig, force: bool):
    """Push pending bookings to the booking service."""
    if not force and not is_connected(config.probe_host, config.probe_port, config.probe_timeout):
        print_error("Not connected. Use --force to attempt anyway.")
        sys.exit(1)

    try:
        result = asyncio.run(_queue(config).sync_pending())
    except BookingSyncError as e:
        print_error(f"Sync failed: {e}")
        sys.exit(1)

    if result.skipped:
        click.echo("Queue is empty")
        return

    print_success(f"Synced {result.synced_count} booking(s), {result.pending_count} still pending")
    print_json(result.to_dict())


@click.command()
@click.pass_obj
def connected(config: SyncConfig):
    """Check if the booking service is reachable."""
    is_up = is_connected(config.probe_host, config.probe_port, config.probe_timeout)
    print_json({
        "connected": is_up,
        "status": "online" if is_up else "offline",
        "host": config.probe_host,
        "port": config.probe_port,
    })
