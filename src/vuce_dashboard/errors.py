"""Failures surfaced by the data loader. Field-level malformation never raises."""

from typing import Optional


class LoadError(Exception):
    """Base class for failures loading the webhook payload."""


class TransportError(LoadError):
    """Webhook answered with a non-success status."""

    def __init__(self, status_code: int, status_text: Optional[str] = None):
        self.status_code = status_code
        self.status_text = status_text or str(status_code)
        super().__init__(f"Error fetching data: {self.status_text}")


class NetworkError(LoadError):
    """Request never produced a response (DNS, connection refused, timeout)."""


class PayloadError(LoadError):
    """Response body is not a JSON array of records."""
