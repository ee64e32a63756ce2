"""
Pydantic schemas for booking-related payloads.
"""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Union
from pydantic import BaseModel, TypeAdapter, field_serializer

from stayfront.schemas.listing import Listing


class BookingStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class Booking(BaseModel):
    id: int
    listing_id: int
    user_id: int
    check_in_date: date
    check_out_date: date
    total_price: Decimal = Decimal(0)
    status: BookingStatus = BookingStatus.PENDING
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    listing: Optional[Listing] = None

    @field_serializer("total_price")
    def _decimal_as_number(self, value: Decimal) -> float:
        return float(value)


class BookingCreate(BaseModel):
    listing_id: int
    check_in_date: date
    check_out_date: date
    total_price: Decimal

    @field_serializer("total_price")
    def _decimal_as_number(self, value: Decimal) -> float:
        return float(value)


class BookingList(BaseModel):
    bookings: Optional[list[Booking]] = None


# GET /bookings answers either a bare list or {"bookings": [...]}
BookingsEnvelope = TypeAdapter(Union[list[Booking], BookingList])


def unwrap_bookings(payload) -> list[Booking]:
    envelope = BookingsEnvelope.validate_python(payload)
    if isinstance(envelope, BookingList):
        return envelope.bookings or []
    return envelope
