"""Booking record: the unit that moves from Pending to Synced.

Bookings are immutable. A store transition produces a new value
(see Booking.mark_synced), so the Pending and Synced snapshots of one
pass never share a mutable instance.
"""
import dataclasses
import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .core.errors import SchemaError
from .core.schemas import validate_booking


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _to_utc(value: datetime) -> datetime:
    """Naive datetimes are taken to be UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def format_ts(value: datetime) -> str:
    """Render a datetime as ISO 8601 UTC with trailing Z."""
    return _to_utc(value).isoformat().replace("+00:00", "Z")


def parse_ts(text: str) -> datetime:
    """Parse an ISO 8601 timestamp (trailing Z allowed) into aware UTC.

    Raises:
        SchemaError: If text is not a valid timestamp
    """
    raw = text.strip()
    if raw.endswith("Z") or raw.endswith("z"):
        raw = raw[:-1] + "+00:00"
    try:
        return _to_utc(datetime.fromisoformat(raw))
    except ValueError as e:
        raise SchemaError(f"Invalid timestamp: {text!r}") from e


@dataclass(frozen=True)
class Booking:
    """A booking awaiting or confirmed by remote sync.

    Attributes:
        id: uuid4 text, assigned once at creation
        customer_name: Free text, may be empty
        phone_number: Unvalidated
        email: Unvalidated
        service_type: Free-form category (Wash, Interior, Full Valet, ...)
        appointment_at: Appointment instant (UTC)
        is_synced: True only once the remote confirmed the booking
        created_at: Creation instant (UTC), never changed
    """
    id: str
    customer_name: str = ""
    phone_number: str = ""
    email: str = ""
    service_type: str = ""
    appointment_at: datetime = field(default_factory=_utcnow)
    is_synced: bool = False
    created_at: datetime = field(default_factory=_utcnow)

    def __post_init__(self):
        # frozen, so normalise through object.__setattr__
        object.__setattr__(self, "appointment_at", _to_utc(self.appointment_at))
        object.__setattr__(self, "created_at", _to_utc(self.created_at))

    def mark_synced(self) -> "Booking":
        """Return a copy flagged as confirmed by the remote."""
        return dataclasses.replace(self, is_synced=True)

    def to_dict(self) -> dict:
        """Serialize to the camelCase wire/storage form."""
        return {
            "id": self.id,
            "customerName": self.customer_name,
            "phoneNumber": self.phone_number,
            "email": self.email,
            "serviceType": self.service_type,
            "appointmentAt": format_ts(self.appointment_at),
            "isSynced": self.is_synced,
            "createdAt": format_ts(self.created_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Booking":
        """Restore a booking from its stored form.

        Raises:
            SchemaError: If data is malformed
        """
        validate_booking(data)
        return cls(
            id=data["id"],
            customer_name=data.get("customerName", ""),
            phone_number=data.get("phoneNumber", ""),
            email=data.get("email", ""),
            service_type=data.get("serviceType", ""),
            appointment_at=parse_ts(data["appointmentAt"]),
            is_synced=data.get("isSynced", False),
            created_at=parse_ts(data["createdAt"]),
        )


def new_booking(
    customer_name: str = "",
    phone_number: str = "",
    email: str = "",
    service_type: str = "",
    appointment_at: datetime | None = None,
) -> Booking:
    """Create an unsynced booking with a fresh id and creation time.

    Args:
        customer_name: Customer display name
        phone_number: Contact phone
        email: Contact email
        service_type: Requested service
        appointment_at: Appointment instant (defaults to now)

    Returns:
        New Booking with is_synced=False
    """
    now = _utcnow()
    return Booking(
        id=str(uuid.uuid4()),
        customer_name=customer_name,
        phone_number=phone_number,
        email=email,
        service_type=service_type,
        appointment_at=appointment_at or now,
        is_synced=False,
        created_at=now,
    )
