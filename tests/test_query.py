"""Tests for booking list queries."""
from datetime import date, datetime, timezone

import pytest

from bookingsync.offline.query import filter_bookings, paginate
from conftest import make_booking


@pytest.fixture
def bookings():
    return [
        make_booking("1", "Jane Doe", email="jane@example.com", service_type="Wash",
                     appointment_at=datetime(2026, 11, 1, 9, 0, tzinfo=timezone.utc)),
        make_booking("2", "John Smith", phone_number="082 555 0199", service_type="Interior",
                     appointment_at=datetime(2026, 11, 3, 14, 0, tzinfo=timezone.utc)),
        make_booking("3", "Thandi M", email="thandi@example.com", service_type="wash",
                     appointment_at=datetime(2026, 11, 5, 11, 0, tzinfo=timezone.utc)),
    ]


class TestFilterBookings:
    """Test search and filters."""

    def test_no_filters_returns_all(self, bookings):
        assert filter_bookings(bookings) == bookings

    def test_search_name_case_insensitive(self, bookings):
        assert [b.id for b in filter_bookings(bookings, search="JANE")] == ["1"]

    def test_search_matches_email_and_phone(self, bookings):
        assert [b.id for b in filter_bookings(bookings, search="example.com")] == ["1", "3"]
        assert [b.id for b in filter_bookings(bookings, search="0199")] == ["2"]

    def test_service_type(self, bookings):
        assert [b.id for b in filter_bookings(bookings, service_type="Wash")] == ["1", "3"]

    def test_date_range_inclusive(self, bookings):
        found = filter_bookings(bookings, date_from=date(2026, 11, 3), date_to=date(2026, 11, 5))
        assert [b.id for b in found] == ["2", "3"]


class TestPaginate:
    """Test paging."""

    def test_pages(self):
        items = [make_booking(str(i)) for i in range(23)]

        page = paginate(items, page=3, page_size=10)

        assert [b.id for b in page.items] == ["20", "21", "22"]
        assert page.total == 23
        assert page.total_pages == 3
        assert page.has_prev is True
        assert page.has_next is False

    def test_empty_has_one_page(self):
        page = paginate([], page=1, page_size=10)

        assert page.items == []
        assert page.total_pages == 1
        assert page.has_prev is False
        assert page.has_next is False

    def test_page_clamped(self):
        items = [make_booking(str(i)) for i in range(5)]

        assert paginate(items, page=9, page_size=2).page == 3
        assert paginate(items, page=0, page_size=2).page == 1

    def test_bad_page_size(self):
        with pytest.raises(ValueError):
            paginate([], page_size=0)
