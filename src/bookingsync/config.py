"""Sync configuration.

All settings can be overridden via environment variables with the
BOOKINGSYNC_ prefix.
"""
import os
from dataclasses import dataclass

from .core.constants import (
    DEFAULT_ENDPOINT,
    DEFAULT_STORE_PATH,
    MAX_CONCURRENCY_DEFAULT,
    MAX_CONCURRENCY_LIMIT,
    PROBE_HOST_DEFAULT,
    PROBE_PORT_DEFAULT,
    PROBE_TIMEOUT_SECONDS,
    SUBMIT_TIMEOUT_SECONDS,
)
from .core.errors import ConfigError


def _env_number(name: str, cast: type):
    """Parse a numeric environment variable, raising ConfigError if malformed."""
    value = os.environ[name]
    try:
        return cast(value)
    except ValueError as e:
        kind = "an integer" if cast is int else "a number"
        raise ConfigError(f"{name} must be {kind}, got {value!r}") from e


@dataclass
class SyncConfig:
    """Booking sync configuration."""

    # Local store
    store_path: str = str(DEFAULT_STORE_PATH)

    # Remote "create booking" service
    endpoint: str = DEFAULT_ENDPOINT
    api_token: str = ""

    # Submission
    submit_timeout: float = SUBMIT_TIMEOUT_SECONDS
    max_concurrency: int = MAX_CONCURRENCY_DEFAULT

    # Connectivity check
    probe_host: str = PROBE_HOST_DEFAULT
    probe_port: int = PROBE_PORT_DEFAULT
    probe_timeout: float = PROBE_TIMEOUT_SECONDS

    # Receipts
    tenant_id: str = "default"

    @classmethod
    def from_env(cls) -> "SyncConfig":
        """Load configuration from environment variables.

        Raises:
            ConfigError: If a numeric variable cannot be parsed
        """
        config = cls()

        if "BOOKINGSYNC_STORE_PATH" in os.environ:
            config.store_path = os.environ["BOOKINGSYNC_STORE_PATH"]

        if "BOOKINGSYNC_ENDPOINT" in os.environ:
            config.endpoint = os.environ["BOOKINGSYNC_ENDPOINT"]
        if "BOOKINGSYNC_API_TOKEN" in os.environ:
            config.api_token = os.environ["BOOKINGSYNC_API_TOKEN"]

        if "BOOKINGSYNC_SUBMIT_TIMEOUT" in os.environ:
            config.submit_timeout = _env_number("BOOKINGSYNC_SUBMIT_TIMEOUT", float)
        if "BOOKINGSYNC_MAX_CONCURRENCY" in os.environ:
            config.max_concurrency = _env_number("BOOKINGSYNC_MAX_CONCURRENCY", int)

        if "BOOKINGSYNC_PROBE_HOST" in os.environ:
            config.probe_host = os.environ["BOOKINGSYNC_PROBE_HOST"]
        if "BOOKINGSYNC_PROBE_PORT" in os.environ:
            config.probe_port = _env_number("BOOKINGSYNC_PROBE_PORT", int)
        if "BOOKINGSYNC_PROBE_TIMEOUT" in os.environ:
            config.probe_timeout = _env_number("BOOKINGSYNC_PROBE_TIMEOUT", float)

        if "BOOKINGSYNC_TENANT_ID" in os.environ:
            config.tenant_id = os.environ["BOOKINGSYNC_TENANT_ID"]

        return config

    def validate(self) -> list[str]:
        """Validate configuration. Returns list of errors."""
        errors = []

        if not self.store_path:
            errors.append("store_path must not be empty")

        if not self.endpoint.startswith(("http://", "https://")):
            errors.append(f"endpoint must be an http(s) URL, got {self.endpoint!r}")

        if self.submit_timeout <= 0:
            errors.append(f"submit_timeout must be > 0, got {self.submit_timeout}")

        if self.max_concurrency < 1 or self.max_concurrency > MAX_CONCURRENCY_LIMIT:
            errors.append(
                f"max_concurrency must be 1-{MAX_CONCURRENCY_LIMIT}, got {self.max_concurrency}"
            )

        if self.probe_port < 1 or self.probe_port > 65535:
            errors.append(f"Invalid probe_port: {self.probe_port}")

        if self.probe_timeout <= 0:
            errors.append(f"probe_timeout must be > 0, got {self.probe_timeout}")

        return errors
