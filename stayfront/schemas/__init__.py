from stayfront.schemas.user import User, LoginRequest, RegisterRequest, AuthResponse
from stayfront.schemas.listing import Listing, ListingCreate, ListingSearch
from stayfront.schemas.booking import Booking, BookingCreate, BookingStatus, unwrap_bookings

__all__ = [
    "User", "LoginRequest", "RegisterRequest", "AuthResponse",
    "Listing", "ListingCreate", "ListingSearch",
    "Booking", "BookingCreate", "BookingStatus", "unwrap_bookings",
]
