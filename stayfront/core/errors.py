"""
Error taxonomy shared by the API client, services and routes.

Every error carries a human-readable ``message`` that the page layer shows
verbatim. ``Unauthorized`` is never shown; it means "send the user to login".
"""

from enum import Enum
from typing import Optional


class StayfrontError(Exception):
    """Base class for all errors surfaced to a page."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class Unauthorized(StayfrontError):
    """The remote API answered 401. The session token has been cleared."""

    status_code = 401

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message)


class HttpError(StayfrontError):
    """Remote API returned a non-2xx status other than 401."""

    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.status_code = status if status >= 400 else 502


class NetworkError(StayfrontError):
    status_code = 502

    def __init__(self, message: str = "Unable to reach the server. Please try again."):
        super().__init__(message)


class ParseError(StayfrontError):
    """Remote payload was not JSON, or did not match the expected shape."""

    status_code = 502

    def __init__(self, message: str = "Unexpected response from the server"):
        super().__init__(message)


class BookingErrorCode(str, Enum):
    MISSING_DATES = "missing_dates"
    INVALID_RANGE = "invalid_range"
    GUEST_COUNT_INVALID = "guest_count_invalid"
    STALE_LISTING_PRICE = "stale_listing_price"
    PAST_DATE = "past_date"
    IN_PROGRESS = "in_progress"


class BookingValidationError(StayfrontError):
    """Local, recoverable booking form error. Shown inline next to the form."""

    status_code = 400

    def __init__(self, code: BookingErrorCode, message: str, field: Optional[str] = None):
        super().__init__(message)
        self.code = code
        self.field = field
