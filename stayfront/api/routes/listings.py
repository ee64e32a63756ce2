"""
Listing pages: search results, detail with a price quote, and booking.
"""

from datetime import date
from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse, RedirectResponse
from pydantic import BaseModel

from stayfront.api.deps import get_api_client, get_session
from stayfront.core.errors import StayfrontError, Unauthorized
from stayfront.core.logging import get_logger
from stayfront.schemas.listing import ListingSearch
from stayfront.schemas.pages import BookingResult, ListingDetailPage, ListingsPage, Quote
from stayfront.services.api_client import ApiClient
from stayfront.services.booking_service import (
    BookingFlow,
    BookingForm,
    OutcomeStatus,
    booking_button_label,
    calculate_total,
    is_booking_disabled,
    nights_between,
)
from stayfront.services.listing_service import get_listing, search_listings
from stayfront.services.session import Session

logger = get_logger(__name__)
router = APIRouter(tags=["Listings"])


class BookingFormData(BaseModel):
    check_in: Optional[date] = None
    check_out: Optional[date] = None
    guests: int = 1


@router.get("/", response_model=ListingsPage)
@router.get("/listings", response_model=ListingsPage)
async def listings_page(
    location: Optional[str] = Query(None),
    check_in: Optional[date] = Query(None, alias="checkIn"),
    check_out: Optional[date] = Query(None, alias="checkOut"),
    guests: Optional[int] = Query(None, ge=1),
    client: ApiClient = Depends(get_api_client),
    session: Session = Depends(get_session),
):
    """
    Search results. A failed search renders the empty state with the
    error message instead of failing the page.
    """
    search = ListingSearch(location=location, check_in=check_in, check_out=check_out, guests=guests)
    try:
        listings = await search_listings(client, session, search)
    except Unauthorized:
        raise
    except StayfrontError as e:
        logger.warning("listings_search_failed", error=e.message)
        return ListingsPage(count=0, listings=[], error=e.message)
    return ListingsPage(count=len(listings), listings=listings)


@router.get("/listings/{listing_id}", response_model=ListingDetailPage)
async def listing_detail_page(
    listing_id: int,
    check_in: Optional[date] = Query(None, alias="checkIn"),
    check_out: Optional[date] = Query(None, alias="checkOut"),
    guests: int = Query(1),
    client: ApiClient = Depends(get_api_client),
    session: Session = Depends(get_session),
):
    """Listing detail with the booking widget's price preview."""
    listing = await get_listing(client, session, listing_id)
    form = BookingForm(check_in=check_in, check_out=check_out, guests=guests)

    # Reversed dates quote an empty stay
    nights = max(nights_between(check_in, check_out), 0) if check_in and check_out else 0
    quote = Quote(
        nights=nights,
        price_per_night=listing.price_per_night,
        total_price=calculate_total(listing, check_in, check_out) if nights else Decimal(0),
        button_label=booking_button_label(form, listing),
        disabled=is_booking_disabled(form, listing),
    )
    return ListingDetailPage(listing=listing, quote=quote)


@router.post("/listings/{listing_id}/book", response_model=BookingResult, status_code=status.HTTP_201_CREATED)
async def book_listing(
    listing_id: int,
    form_data: BookingFormData,
    client: ApiClient = Depends(get_api_client),
    session: Session = Depends(get_session),
):
    """
    Submit the booking form.

    303 to /login when nobody is logged in, 400 with an inline message when
    the form or the server rejects the booking, 201 with a Refresh header
    that forwards to /bookings on success.
    """
    listing = await get_listing(client, session, listing_id)
    form = BookingForm(
        check_in=form_data.check_in,
        check_out=form_data.check_out,
        guests=form_data.guests,
    )
    outcome = await BookingFlow(client, session, listing, form).submit()

    if outcome.status == OutcomeStatus.LOGIN_REQUIRED:
        return RedirectResponse(outcome.redirect_to, status_code=status.HTTP_303_SEE_OTHER)

    result = BookingResult(
        status=outcome.status.value,
        message=outcome.message,
        error=outcome.error,
        error_code=outcome.error_code.value if outcome.error_code else None,
        booking=outcome.booking,
        redirect_to=outcome.redirect_to,
        redirect_after=outcome.redirect_after,
    )

    if outcome.status == OutcomeStatus.SUCCEEDED:
        return JSONResponse(
            result.model_dump(mode="json"),
            status_code=status.HTTP_201_CREATED,
            headers={"Refresh": f"{outcome.redirect_after}; url={outcome.redirect_to}"},
        )
    return JSONResponse(result.model_dump(mode="json"), status_code=status.HTTP_400_BAD_REQUEST)
