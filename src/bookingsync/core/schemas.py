"""Booking wire schema and validation.

Constants:
    BOOKING_SCHEMA: Wire key -> expected type for a stored booking
    REQUIRED_FIELDS: Wire keys required in every stored booking

Functions:
    validate_booking: Validate a stored booking dict against the schema
"""
from .errors import SchemaError


# Timestamps are ISO 8601 strings on the wire
BOOKING_SCHEMA = {
    "id": str,
    "customerName": str,
    "phoneNumber": str,
    "email": str,
    "serviceType": str,
    "appointmentAt": str,
    "isSynced": bool,
    "createdAt": str,
}

REQUIRED_FIELDS = ["id", "appointmentAt", "createdAt"]


def validate_booking(data: dict) -> bool:
    """Validate booking dict has required fields and matches schema.

    Args:
        data: Booking dict as read from a store

    Returns:
        True if valid

    Raises:
        SchemaError: If a required field is missing, a field has the wrong
            type, or the id is empty
    """
    if not isinstance(data, dict):
        raise SchemaError(f"Booking must be a dict, got {type(data).__name__}")

    for field in REQUIRED_FIELDS:
        if field not in data:
            raise SchemaError(f"Missing required field: {field}")

    for field, expected in BOOKING_SCHEMA.items():
        if field in data and not isinstance(data[field], expected):
            raise SchemaError(
                f"Field {field} must be {expected.__name__}, "
                f"got {type(data[field]).__name__}"
            )

    if not data["id"]:
        raise SchemaError("Booking id must not be empty")

    return True
