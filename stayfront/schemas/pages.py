"""
View models returned by the page endpoints.
"""

from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, field_serializer

from stayfront.schemas.booking import Booking
from stayfront.schemas.listing import Listing
from stayfront.schemas.user import User


class ListingsPage(BaseModel):
    count: int
    listings: list[Listing]
    error: Optional[str] = None


class Quote(BaseModel):
    nights: int
    price_per_night: Decimal
    total_price: Decimal
    button_label: str
    disabled: bool

    @field_serializer("price_per_night", "total_price")
    def _decimal_as_number(self, value: Decimal) -> float:
        return float(value)


class ListingDetailPage(BaseModel):
    listing: Listing
    quote: Quote


class BookingResult(BaseModel):
    status: str
    message: Optional[str] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    booking: Optional[Booking] = None
    redirect_to: Optional[str] = None
    redirect_after: Optional[int] = None


class BookingsPage(BaseModel):
    bookings: list[Booking]
    error: Optional[str] = None


class HostDashboardPage(BaseModel):
    listings: list[Listing]
    message: Optional[str] = None
    error: Optional[str] = None


class SessionPage(BaseModel):
    user: Optional[User] = None
    message: Optional[str] = None
