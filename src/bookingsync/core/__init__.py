"""Core subpackage for bookingsync primitives.

Exports receipts, errors and the booking schema.
"""
from .errors import BookingSyncError, ConfigError, SchemaError, StorageError
from .receipt import dual_hash, emit_receipt, set_receipt_stream, utc_now_iso
from .schemas import BOOKING_SCHEMA, REQUIRED_FIELDS, validate_booking

__all__ = [
    "dual_hash",
    "emit_receipt",
    "set_receipt_stream",
    "utc_now_iso",
    "BookingSyncError",
    "StorageError",
    "SchemaError",
    "ConfigError",
    "BOOKING_SCHEMA",
    "REQUIRED_FIELDS",
    "validate_booking",
]
