"""Booking list queries: search, date filtering and paging.

Pure functions over an in-memory list. Used by the CLI listings.
"""
import math
from dataclasses import dataclass, field
from datetime import date

from ..booking import Booking
from ..core.constants import PAGE_SIZE_DEFAULT


@dataclass
class Page:
    """One page of a filtered listing."""
    items: list[Booking] = field(default_factory=list)
    page: int = 1
    page_size: int = PAGE_SIZE_DEFAULT
    total: int = 0
    total_pages: int = 1

    @property
    def has_prev(self) -> bool:
        return self.page > 1

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages


def filter_bookings(
    bookings: list[Booking],
    search: str | None = None,
    service_type: str | None = None,
    date_from: date | None = None,
    date_to: date | None = None,
) -> list[Booking]:
    """Filter bookings, keeping input order.

    Args:
        bookings: Bookings to filter
        search: Case-insensitive substring of name, email or phone
        service_type: Exact service type (case-insensitive)
        date_from: Earliest appointment date, inclusive
        date_to: Latest appointment date, inclusive

    Returns:
        Matching bookings
    """
    needle = search.strip().lower() if search else ""
    wanted_service = service_type.lower() if service_type else None

    def predicate(b: Booking) -> bool:
        if needle:
            haystack = (b.customer_name, b.email, b.phone_number)
            if not any(needle in value.lower() for value in haystack):
                return False
        if wanted_service is not None and b.service_type.lower() != wanted_service:
            return False
        day = b.appointment_at.date()
        if date_from is not None and day < date_from:
            return False
        if date_to is not None and day > date_to:
            return False
        return True

    return [b for b in bookings if predicate(b)]


def paginate(items: list[Booking], page: int = 1, page_size: int = PAGE_SIZE_DEFAULT) -> Page:
    """Slice items into one page, clamping page into [1, total_pages].

    Raises:
        ValueError: If page_size < 1
    """
    if page_size < 1:
        raise ValueError(f"page_size must be >= 1, got {page_size}")

    total = len(items)
    total_pages = max(1, math.ceil(total / page_size))
    page = min(max(page, 1), total_pages)
    start = (page - 1) * page_size

    return Page(
        items=items[start:start + page_size],
        page=page,
        page_size=page_size,
        total=total,
        total_pages=total_pages,
    )
