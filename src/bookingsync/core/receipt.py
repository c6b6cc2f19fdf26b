"""Event receipt primitives shared by every bookingsync module.

Functions:
    dual_hash: SHA256:BLAKE3 dual-hash format
    emit_receipt: Emit receipt with required fields as one JSON line
    set_receipt_stream: Choose stdout or stderr for receipts
    utc_now_iso: Current UTC time as ISO 8601 with trailing Z
"""
import hashlib
import json
import sys
from datetime import datetime, timezone

import blake3

# Name of the sys stream receipts go to, resolved at emit time
_receipt_stream = "stdout"


def set_receipt_stream(name: str) -> None:
    """Send receipts to sys.stdout or sys.stderr.

    The CLI uses stderr, keeping stdout for command output.
    """
    global _receipt_stream
    if name not in ("stdout", "stderr"):
        raise ValueError(f"Receipt stream must be 'stdout' or 'stderr', got {name!r}")
    _receipt_stream = name


def utc_now_iso() -> str:
    """Current UTC time as ISO 8601 string ending in 'Z'."""
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def dual_hash(data: bytes | str | dict) -> str:
    """Compute dual hash in format 'sha256hex:blake3hex'.

    Pure function with no side effects.

    Args:
        data: Bytes, string, or dict to hash

    Returns:
        String in format 'sha256hex:blake3hex' (both 64 hex chars)
    """
    if isinstance(data, dict):
        data = json.dumps(data, sort_keys=True, separators=(",", ":"))
    if isinstance(data, str):
        data = data.encode("utf-8")

    sha256_hex = hashlib.sha256(data).hexdigest()
    blake3_hex = blake3.blake3(data).hexdigest()

    return f"{sha256_hex}:{blake3_hex}"


def emit_receipt(receipt_type: str, data: dict, tenant_id: str = "default") -> dict:
    """Emit a receipt with standard required fields.

    Prints one JSON line to the receipt stream (stdout unless
    set_receipt_stream() chose stderr) with flush=True.

    Args:
        receipt_type: Type of receipt (booking_saved, sync_pass, sync_skipped, reconnection)
        data: Receipt payload data
        tenant_id: Tenant identifier (default: "default")

    Returns:
        Complete receipt dict with receipt_type, ts, tenant_id, payload_hash
    """
    tenant_id = data.get("tenant_id", tenant_id)

    payload_hash = dual_hash(json.dumps(data, sort_keys=True, default=str))

    receipt = {
        "receipt_type": receipt_type,
        "ts": utc_now_iso(),
        "tenant_id": tenant_id,
        "payload_hash": payload_hash,
        **data
    }

    print(json.dumps(receipt, sort_keys=True, default=str),
          file=getattr(sys, _receipt_stream), flush=True)

    return receipt
