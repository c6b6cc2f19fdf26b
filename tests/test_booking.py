"""Tests for the booking record and its schema."""
import dataclasses
from datetime import datetime, timedelta, timezone

import pytest

from bookingsync.booking import Booking, format_ts, new_booking, parse_ts
from bookingsync.core.errors import SchemaError
from bookingsync.core.schemas import validate_booking


class TestBooking:
    """Test booking creation and transitions."""

    def test_new_booking_defaults(self):
        """Fresh bookings are unsynced with a uuid id."""
        booking = new_booking(customer_name="Jane", service_type="Wash")

        assert booking.is_synced is False
        assert len(booking.id) == 36
        assert booking.created_at.tzinfo is not None

    def test_ids_unique(self):
        """Every new booking gets its own id."""
        ids = {new_booking().id for _ in range(200)}
        assert len(ids) == 200

    def test_mark_synced_returns_copy(self):
        """mark_synced leaves the original untouched."""
        booking = new_booking(customer_name="Jane")
        synced = booking.mark_synced()

        assert synced is not booking
        assert synced.is_synced is True
        assert booking.is_synced is False
        assert synced.id == booking.id
        assert synced.created_at == booking.created_at

    def test_frozen(self):
        """Bookings cannot be mutated in place."""
        booking = new_booking()
        with pytest.raises(dataclasses.FrozenInstanceError):
            booking.is_synced = True

    def test_naive_datetimes_are_utc(self):
        """Naive timestamps are normalised to UTC."""
        booking = Booking(id="n1", appointment_at=datetime(2026, 11, 2, 9, 30))
        assert booking.appointment_at == datetime(2026, 11, 2, 9, 30, tzinfo=timezone.utc)

    def test_offset_datetimes_converted(self):
        """Aware timestamps are converted to UTC."""
        sast = timezone(timedelta(hours=2))
        booking = Booking(id="z1", appointment_at=datetime(2026, 11, 2, 11, 30, tzinfo=sast))
        assert format_ts(booking.appointment_at) == "2026-11-02T09:30:00Z"


class TestSerialization:
    """Test the camelCase stored form."""

    def test_to_dict_keys(self):
        """Wire keys match the stored booking layout."""
        data = new_booking(customer_name="Jane").to_dict()

        assert set(data) == {
            "id", "customerName", "phoneNumber", "email",
            "serviceType", "appointmentAt", "isSynced", "createdAt",
        }
        assert data["customerName"] == "Jane"
        assert data["isSynced"] is False
        assert data["createdAt"].endswith("Z")

    def test_from_dict_restores_booking(self):
        """A stored dict restores an equal booking."""
        booking = new_booking(
            customer_name="Jane",
            phone_number="082 555 0100",
            email="jane@example.com",
            service_type="Full Valet",
            appointment_at=datetime(2026, 11, 2, 9, 30, tzinfo=timezone.utc),
        )
        assert Booking.from_dict(booking.to_dict()) == booking

    def test_from_dict_optional_fields_default(self):
        """Missing optional fields default to empty/unsynced."""
        booking = Booking.from_dict({
            "id": "r1",
            "appointmentAt": "2026-11-02T09:30:00Z",
            "createdAt": "2026-10-01T08:00:00Z",
        })
        assert booking.customer_name == ""
        assert booking.is_synced is False

    def test_missing_id_rejected(self):
        """Missing id raises SchemaError."""
        with pytest.raises(SchemaError, match="id"):
            Booking.from_dict({"appointmentAt": "2026-11-02T09:30:00Z", "createdAt": "2026-10-01T08:00:00Z"})

    def test_wrong_type_rejected(self):
        """A non-bool isSynced raises SchemaError."""
        with pytest.raises(SchemaError, match="isSynced"):
            validate_booking({
                "id": "r1",
                "isSynced": "yes",
                "appointmentAt": "2026-11-02T09:30:00Z",
                "createdAt": "2026-10-01T08:00:00Z",
            })

    def test_bad_timestamp_rejected(self):
        """Unparseable timestamps raise SchemaError."""
        with pytest.raises(SchemaError):
            parse_ts("next tuesday")

    def test_parse_ts_accepts_z(self):
        """Trailing Z parses as UTC."""
        assert parse_ts("2026-11-02T09:30:00Z") == datetime(2026, 11, 2, 9, 30, tzinfo=timezone.utc)
