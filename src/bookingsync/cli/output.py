"""Shared output formatting. NO class - just functions."""

import json

import click

from ..booking import Booking, format_ts
from ..offline.query import Page

# (header, max width, cell) per booking listing column
BOOKING_COLUMNS = [
    ("ID", 8, lambda b: b.id[:8]),
    ("Customer", 30, lambda b: b.customer_name),
    ("Service", 20, lambda b: b.service_type),
    ("Appointment", 20, lambda b: format_ts(b.appointment_at)),
    ("Synced", 6, lambda b: "yes" if b.is_synced else "no"),
]


def print_json(data: dict) -> None:
    """Print JSON data formatted."""
    click.echo(json.dumps(data, indent=2, sort_keys=True, default=str))


def print_error(message: str) -> None:
    """Print error message in red."""
    click.echo(click.style(f"Error: {message}", fg="red"), err=True)


def print_success(message: str) -> None:
    """Print success message in green."""
    click.echo(click.style(message, fg="green"))


def _fit(text: str, width: int) -> str:
    if len(text) <= width:
        return text
    return text[:width - 1] + "…"


def booking_table(bookings: list[Booking]) -> None:
    """Print bookings as a fixed-column table."""
    rows = [[_fit(cell(b), width) for _, width, cell in BOOKING_COLUMNS] for b in bookings]
    widths = [
        max([len(header)] + [len(row[i]) for row in rows])
        for i, (header, _, _) in enumerate(BOOKING_COLUMNS)
    ]

    click.echo("  ".join(h.ljust(w) for (h, _, _), w in zip(BOOKING_COLUMNS, widths)))
    click.echo("  ".join("-" * w for w in widths))
    for row in rows:
        click.echo("  ".join(c.ljust(w) for c, w in zip(row, widths)).rstrip())


def print_page(page: Page, label: str) -> None:
    """Print one page of a booking listing with its position footer."""
    if not page.items:
        click.echo(f"No {label} bookings")
        return

    booking_table(page.items)
    footer = f"Page {page.page}/{page.total_pages} - {page.total} {label} booking(s)"
    if page.has_next:
        footer += f" (next: --page {page.page + 1})"
    click.echo(footer)
