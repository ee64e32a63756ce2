"""
My bookings page.
"""

from fastapi import APIRouter, Depends

from stayfront.api.deps import get_api_client, get_session
from stayfront.core.errors import StayfrontError, Unauthorized
from stayfront.core.logging import get_logger
from stayfront.schemas.pages import BookingsPage
from stayfront.services.api_client import ApiClient
from stayfront.services.booking_service import get_user_bookings
from stayfront.services.session import Session

logger = get_logger(__name__)
router = APIRouter(prefix="/bookings", tags=["Bookings"])


@router.get("", response_model=BookingsPage)
async def bookings_page(
    client: ApiClient = Depends(get_api_client),
    session: Session = Depends(get_session),
):
    """The user's bookings, each with its listing. Errors render inline."""
    try:
        bookings = await get_user_bookings(client, session)
    except Unauthorized:
        raise
    except StayfrontError as e:
        logger.warning("bookings_fetch_failed", error=e.message)
        return BookingsPage(bookings=[], error=e.message)
    return BookingsPage(bookings=bookings)
