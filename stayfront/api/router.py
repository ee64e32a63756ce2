"""
Central router that aggregates all page modules.
"""

from fastapi import APIRouter
from stayfront.api.routes import auth, listings, bookings, host

page_router = APIRouter()
page_router.include_router(auth.router)
page_router.include_router(listings.router)
page_router.include_router(bookings.router)
page_router.include_router(host.router)
