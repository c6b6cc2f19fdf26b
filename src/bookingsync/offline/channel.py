"""Submission channel: the remote "create booking" operation.

The synchronizer only needs an outcome per booking:
    - ACCEPTED: remote durably registered the booking
    - REJECTED: remote explicitly declined it (e.g. validation failure)
    - UNREACHABLE: network or transport failure

The remote must deduplicate by booking id. A resumed pass may resubmit a
booking that was already accepted.
"""
import asyncio
import logging
from abc import ABC, abstractmethod
from enum import Enum

import requests

from ..booking import Booking
from ..core.constants import CREATE_BOOKING_PATH, IDEMPOTENCY_HEADER, SUBMIT_TIMEOUT_SECONDS

logger = logging.getLogger("bookingsync.channel")


class SubmitOutcome(Enum):
    """Classification of one remote submission."""
    ACCEPTED = "accepted"
    REJECTED = "rejected"
    UNREACHABLE = "unreachable"


class SubmissionChannel(ABC):
    """Abstract base class for remote submission."""

    @abstractmethod
    async def submit(self, booking: Booking) -> SubmitOutcome:
        """Submit one booking. May raise on transport failure."""
        pass


def classify_status(status_code: int) -> SubmitOutcome:
    """Map an HTTP status code to a submission outcome.

    409 Conflict means the remote already holds this id, so the booking
    is registered. Server errors are transient.
    """
    if 200 <= status_code < 300 or status_code == 409:
        return SubmitOutcome.ACCEPTED
    if 400 <= status_code < 500:
        return SubmitOutcome.REJECTED
    return SubmitOutcome.UNREACHABLE


class HttpSubmissionChannel(SubmissionChannel):
    """POST bookings as JSON to {endpoint}/api/bookings.

    Attributes:
        url: Full create-booking URL
        timeout: Per-request timeout in seconds
    """

    def __init__(
        self,
        endpoint: str,
        api_token: str = "",
        timeout: float = SUBMIT_TIMEOUT_SECONDS,
        session: requests.Session | None = None,
    ):
        self.url = endpoint.rstrip("/") + CREATE_BOOKING_PATH
        self.timeout = timeout
        self._session = session or requests.Session()
        self._headers = {"Accept": "application/json"}
        if api_token:
            self._headers["Authorization"] = f"Bearer {api_token}"

    async def submit(self, booking: Booking) -> SubmitOutcome:
        return await asyncio.to_thread(self._post, booking)

    def _post(self, booking: Booking) -> SubmitOutcome:
        headers = {**self._headers, IDEMPOTENCY_HEADER: booking.id}
        try:
            response = self._session.post(
                self.url,
                json=booking.to_dict(),
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            logger.warning("POST %s failed for %s: %s", self.url, booking.id, e)
            return SubmitOutcome.UNREACHABLE

        outcome = classify_status(response.status_code)
        if outcome is not SubmitOutcome.ACCEPTED:
            logger.warning(
                "Remote returned %s for %s: %s",
                response.status_code, booking.id, response.text[:200],
            )
        return outcome
