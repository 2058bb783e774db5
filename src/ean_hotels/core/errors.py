"""Exceptions raised by the EAN hotel client."""
from __future__ import annotations

from typing import Any, Dict, Optional

# itineraryId the API reports when no reservation exists.
NO_RESERVATION_ID = -1


class SearchValidationError(ValueError):
    """Raised when a search request cannot be turned into an API query."""


class ResponseFormatError(RuntimeError):
    """Raised when a response body is not the JSON envelope the API documents."""

    def __init__(self, message: str, body: str) -> None:
        super().__init__(message)
        self.body = body


class APIError(RuntimeError):
    """Error reported by the EAN API inside its ``EanWsError`` envelope.

    The API can create a billable reservation even while reporting an error, so
    ``reservation_made`` is always set; when it is true ``reservation_id`` holds
    the itinerary id. Check it before retrying a booking.
    """

    def __init__(
        self,
        message: str,
        *,
        verbose_message: Optional[str] = None,
        recoverability: Optional[str] = None,
        raw: Optional[Dict[str, Any]] = None,
        reservation_id: Optional[Any] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.verbose_message = verbose_message
        self.recoverability = recoverability
        self.raw = raw or {}
        self.reservation_id = reservation_id

    @property
    def reservation_made(self) -> bool:
        return self.reservation_id is not None

    def __str__(self) -> str:
        if self.reservation_made:
            return f"{self.message} (reservation {self.reservation_id} was created)"
        return self.message
