"""Reconnection handling.

The queue never schedules itself. Callers (a connectivity-restored event,
a timer, a button) use these helpers to check the remote and trigger one
sync pass when it is reachable.
"""
import asyncio
import logging
import socket

from ..core.constants import PROBE_HOST_DEFAULT, PROBE_PORT_DEFAULT, PROBE_TIMEOUT_SECONDS
from ..core.receipt import emit_receipt
from .queue import BookingQueue

logger = logging.getLogger("bookingsync.reconnect")


class ReconnectStatus:
    """Outcomes of handle_reconnection."""
    STILL_OFFLINE = "still_offline"
    CLEAN_RECONNECT = "clean_reconnect"  # Nothing pending
    SYNCED = "synced"


def is_connected(
    host: str = PROBE_HOST_DEFAULT,
    port: int = PROBE_PORT_DEFAULT,
    timeout: float = PROBE_TIMEOUT_SECONDS,
) -> bool:
    """Check if the booking service is reachable.

    Args:
        host: Service host
        port: Service port
        timeout: Connection timeout in seconds

    Returns:
        True if a TCP connection can be opened
    """
    try:
        with socket.create_connection((host, port), timeout=timeout):
            return True
    except OSError:
        return False


async def handle_reconnection(
    queue: BookingQueue,
    host: str | None = None,
    port: int | None = None,
) -> dict:
    """Handle transition from offline to online.

    Checks the service is reachable, then runs one sync pass if anything
    is pending.

    Args:
        queue: Queue to drain
        host: Host to check, defaults to the queue config's probe_host
        port: Port to check, defaults to the queue config's probe_port

    Returns:
        Reconnection status, including the pass result when one ran

    Raises:
        StorageError: If the store cannot be read or written
    """
    config = queue.config
    host = host or config.probe_host
    port = port or config.probe_port
    connected = await asyncio.to_thread(is_connected, host, port, config.probe_timeout)
    if not connected:
        logger.info("Still offline: %s:%d unreachable", host, port)
        return {
            "status": ReconnectStatus.STILL_OFFLINE,
            "connected": False,
        }

    pending = await queue.get_pending()
    if not pending:
        emit_receipt("reconnection", {
            "tenant_id": config.tenant_id,
            "status": ReconnectStatus.CLEAN_RECONNECT,
            "pending_count": 0,
        })
        return {
            "status": ReconnectStatus.CLEAN_RECONNECT,
            "connected": True,
            "pending_count": 0,
        }

    result = await queue.sync_pending()

    emit_receipt("reconnection", {
        "tenant_id": config.tenant_id,
        "status": ReconnectStatus.SYNCED,
        "synced_count": result.synced_count,
        "pending_count": result.pending_count,
        "batch_id": result.batch_id,
    })

    return {
        "status": ReconnectStatus.SYNCED,
        "connected": True,
        **result.to_dict(),
    }
