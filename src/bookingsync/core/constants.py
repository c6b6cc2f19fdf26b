"""bookingsync constants and defaults.

All magic numbers live here. No exceptions.
"""
from pathlib import Path

# Store keys
PENDING_KEY = "rw_pending_bookings"
SYNCED_KEY = "rw_synced_bookings"
STATE_KEY = "rw_sync_state"

# Local store
DEFAULT_STORE_PATH = Path.home() / ".bookingsync" / "store.json"
STORE_LOCK_SUFFIX = ".lock"

# Remote "create booking" operation
DEFAULT_ENDPOINT = "http://localhost:8080"
CREATE_BOOKING_PATH = "/api/bookings"
IDEMPOTENCY_HEADER = "Idempotency-Key"

# Submission
SUBMIT_TIMEOUT_SECONDS = 10.0
MAX_CONCURRENCY_DEFAULT = 1
MAX_CONCURRENCY_LIMIT = 32

# Connectivity check
PROBE_HOST_DEFAULT = "localhost"
PROBE_PORT_DEFAULT = 8080
PROBE_TIMEOUT_SECONDS = 5.0

# Listing
PAGE_SIZE_DEFAULT = 10
