"""
Booking service: price/date helpers, the booking flow, and the user's bookings.

BOOKING FLOW
============

  IDLE -> VALIDATING -> AUTH_CHECKING -> SUBMITTING -> SUCCEEDED
                                                    +-> FAILED -> IDLE

  VALIDATING     local checks only; a failure returns to IDLE with an inline
                 message and nothing is sent
  AUTH_CHECKING  no current user means "go to /login", not an error
  SUBMITTING     nights and total are computed here, then POST /bookings
  SUCCEEDED      the form is reset and the page redirects to /bookings after
                 BOOKING_REDIRECT_DELAY seconds
  FAILED         the remote message is surfaced verbatim

A flow instance handles one submission at a time; submit() while another
submission is in flight is rejected.
"""

import asyncio
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from stayfront.core.config import get_settings
from stayfront.core.errors import (
    BookingErrorCode,
    BookingValidationError,
    ParseError,
    StayfrontError,
    Unauthorized,
)
from stayfront.core.logging import get_logger
from stayfront.core.metrics import record_booking_attempt
from stayfront.schemas.booking import Booking, BookingCreate, unwrap_bookings
from stayfront.schemas.listing import Listing
from stayfront.services.api_client import ApiClient, parse
from stayfront.services.auth_service import get_current_user
from stayfront.services.listing_service import get_listing
from stayfront.services.session import Session

logger = get_logger(__name__)

LOGIN_PATH = "/login"
BOOKINGS_PATH = "/bookings"
CONFIRMATION_MESSAGE = "Booking successful! Redirecting to your bookings..."


@dataclass
class BookingForm:
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    guests: int = 1

    def reset(self):
        self.check_in = None
        self.check_out = None
        self.guests = 1


def nights_between(check_in: date, check_out: date) -> int:
    """Whole days between the two dates."""
    return (check_out - check_in).days


def calculate_total(listing: Listing, check_in: Optional[date], check_out: Optional[date]) -> Decimal:
    """nights x price_per_night, or 0 until both dates are chosen."""
    if not check_in or not check_out:
        return Decimal(0)
    return nights_between(check_in, check_out) * listing.price_per_night


def validate_booking(form: BookingForm, listing: Listing) -> None:
    """Raise BookingValidationError for the first problem with the form."""
    if not form.check_in or not form.check_out:
        raise BookingValidationError(
            BookingErrorCode.MISSING_DATES,
            "Please select check-in and check-out dates",
            field="check_in" if not form.check_in else "check_out",
        )

    if form.check_out <= form.check_in:
        raise BookingValidationError(
            BookingErrorCode.INVALID_RANGE,
            "Check-out date must be after check-in date",
            field="check_out",
        )

    if form.check_in < date.today():
        raise BookingValidationError(
            BookingErrorCode.PAST_DATE,
            "Check-in date cannot be in the past",
            field="check_in",
        )

    if form.guests < 1:
        raise BookingValidationError(
            BookingErrorCode.GUEST_COUNT_INVALID,
            "Number of guests must be at least 1",
            field="guests",
        )

    if form.guests > listing.max_guests:
        raise BookingValidationError(
            BookingErrorCode.GUEST_COUNT_INVALID,
            f"Maximum number of guests allowed is {listing.max_guests}",
            field="guests",
        )


def booking_button_label(form: BookingForm, listing: Listing, submitting: bool = False) -> str:
    if submitting:
        return "Booking..."
    if not form.check_in or not form.check_out:
        return "Select dates to book"
    if form.guests < 1:
        return "Select number of guests"
    if form.guests > listing.max_guests:
        return f"Maximum {listing.max_guests} guests allowed"
    if nights_between(form.check_in, form.check_out) < 1 or form.check_in < date.today():
        return "Invalid dates"
    return "Book Now"


def is_booking_disabled(form: BookingForm, listing: Listing, submitting: bool = False) -> bool:
    return booking_button_label(form, listing, submitting) != "Book Now"


class FlowState(str, Enum):
    IDLE = "idle"
    VALIDATING = "validating"
    AUTH_CHECKING = "auth_checking"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class OutcomeStatus(str, Enum):
    SUCCEEDED = "succeeded"
    INVALID = "invalid"
    LOGIN_REQUIRED = "login_required"
    FAILED = "failed"


@dataclass
class BookingOutcome:
    status: OutcomeStatus
    booking: Optional[Booking] = None
    message: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[BookingErrorCode] = None
    redirect_to: Optional[str] = None
    redirect_after: Optional[int] = None


_IN_FLIGHT = (FlowState.VALIDATING, FlowState.AUTH_CHECKING, FlowState.SUBMITTING)


@dataclass
class BookingFlow:
    client: ApiClient
    session: Session
    listing: Listing
    form: BookingForm = field(default_factory=BookingForm)
    state: FlowState = FlowState.IDLE
    history: list = field(default_factory=list)
    error: Optional[str] = None

    def _enter(self, state: FlowState):
        self.state = state
        self.history.append(state)

    def _invalid(self, err: BookingValidationError) -> BookingOutcome:
        self.error = err.message
        self._enter(FlowState.IDLE)
        record_booking_attempt("invalid")
        logger.info("booking_rejected", listing_id=self.listing.id, code=err.code.value)
        return BookingOutcome(OutcomeStatus.INVALID, error=err.message, error_code=err.code)

    def _login_required(self) -> BookingOutcome:
        self._enter(FlowState.IDLE)
        record_booking_attempt("unauthenticated")
        logger.info("booking_login_required", listing_id=self.listing.id)
        return BookingOutcome(OutcomeStatus.LOGIN_REQUIRED, redirect_to=LOGIN_PATH)

    def _failed(self, message: str, code: Optional[BookingErrorCode] = None) -> BookingOutcome:
        self.error = message
        self._enter(FlowState.FAILED)
        self._enter(FlowState.IDLE)
        record_booking_attempt("error")
        return BookingOutcome(OutcomeStatus.FAILED, error=message, error_code=code)

    async def submit(self) -> BookingOutcome:
        if self.state in _IN_FLIGHT:
            return BookingOutcome(
                OutcomeStatus.INVALID,
                error="Booking already in progress",
                error_code=BookingErrorCode.IN_PROGRESS,
            )

        self.error = None
        self._enter(FlowState.VALIDATING)
        try:
            validate_booking(self.form, self.listing)
        except BookingValidationError as e:
            return self._invalid(e)

        self._enter(FlowState.AUTH_CHECKING)
        user = await get_current_user(self.client, self.session)
        if user is None:
            return self._login_required()

        self._enter(FlowState.SUBMITTING)
        nights = nights_between(self.form.check_in, self.form.check_out)
        total_price = calculate_total(self.listing, self.form.check_in, self.form.check_out)
        if total_price <= 0:
            logger.warning("booking_invalid_total", listing_id=self.listing.id, total=str(total_price))
            return self._failed("Invalid total price", BookingErrorCode.STALE_LISTING_PRICE)

        booking_data = BookingCreate(
            listing_id=self.listing.id,
            check_in_date=self.form.check_in,
            check_out_date=self.form.check_out,
            total_price=total_price,
        )
        try:
            data = await self.client.request(
                self.session,
                "/bookings",
                method="POST",
                body=booking_data,
                error_message="Failed to create booking",
            )
            booking = parse(Booking, data)
        except Unauthorized:
            return self._login_required()
        except StayfrontError as e:
            logger.warning("booking_failed", listing_id=self.listing.id, error=e.message)
            return self._failed(e.message)

        self._enter(FlowState.SUCCEEDED)
        self.form.reset()
        record_booking_attempt("success")
        logger.info(
            "booking_created",
            booking_id=booking.id,
            user_id=user.id,
            listing_id=self.listing.id,
            nights=nights,
            total_price=str(total_price),
        )
        return BookingOutcome(
            OutcomeStatus.SUCCEEDED,
            booking=booking,
            message=CONFIRMATION_MESSAGE,
            redirect_to=BOOKINGS_PATH,
            redirect_after=get_settings().BOOKING_REDIRECT_DELAY,
        )


async def get_user_bookings(client: ApiClient, session: Session) -> list[Booking]:
    """
    The logged-in user's bookings with their listings embedded.
    Bookings the API returned without a listing are back-filled one
    GET /listings/{id} each; a failed back-fill leaves the booking as-is.
    """
    data = await client.request(
        session,
        "/bookings",
        params={"include": "listing"},
        error_message="Failed to fetch bookings",
    )
    try:
        bookings = unwrap_bookings(data)
    except ValueError as e:
        raise ParseError() from e

    async def with_listing(booking: Booking) -> Booking:
        if booking.listing is not None:
            return booking
        try:
            listing = await get_listing(client, session, booking.listing_id)
        except Unauthorized:
            raise
        except StayfrontError as e:
            logger.warning("booking_listing_backfill_failed", booking_id=booking.id,
                           listing_id=booking.listing_id, error=e.message)
            return booking
        return booking.model_copy(update={"listing": listing})

    return list(await asyncio.gather(*(with_listing(b) for b in bookings)))
