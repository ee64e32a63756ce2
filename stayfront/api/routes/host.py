"""
Host pages: dashboard, new listing, delete listing.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, RedirectResponse

from stayfront.api.deps import get_api_client, get_session
from stayfront.core.errors import StayfrontError, Unauthorized
from stayfront.core.logging import get_logger
from stayfront.schemas.listing import ListingCreate
from stayfront.schemas.pages import HostDashboardPage
from stayfront.services.api_client import ApiClient
from stayfront.services.host_service import HostDashboard
from stayfront.services.listing_service import create_listing
from stayfront.services.session import Session

logger = get_logger(__name__)
router = APIRouter(prefix="/host", tags=["Host"])

DASHBOARD_PATH = "/host/dashboard"
FETCH_ERROR = "Failed to fetch your listings. Please try again."
DELETED_MESSAGE = "Listing deleted successfully"


@router.get("/dashboard", response_model=HostDashboardPage)
async def dashboard_page(
    client: ApiClient = Depends(get_api_client),
    session: Session = Depends(get_session),
):
    try:
        dashboard = await HostDashboard.load(client, session)
    except Unauthorized:
        raise
    except StayfrontError as e:
        logger.warning("host_listings_fetch_failed", error=e.message)
        return HostDashboardPage(listings=[], error=FETCH_ERROR)
    return HostDashboardPage(listings=dashboard.listings)


@router.post("/listings")
async def create_listing_endpoint(
    listing_data: ListingCreate,
    client: ApiClient = Depends(get_api_client),
    session: Session = Depends(get_session),
):
    """Create a listing and go back to the dashboard."""
    try:
        await create_listing(client, session, listing_data)
    except Unauthorized:
        raise
    except StayfrontError as e:
        return JSONResponse({"error": e.message}, status_code=status.HTTP_400_BAD_REQUEST)
    return RedirectResponse(DASHBOARD_PATH, status_code=status.HTTP_303_SEE_OTHER)


@router.delete("/listings/{listing_id}", response_model=HostDashboardPage)
async def delete_listing_endpoint(
    listing_id: int,
    client: ApiClient = Depends(get_api_client),
    session: Session = Depends(get_session),
):
    """
    Delete a listing, then return the refreshed dashboard. A dashboard that
    fails to load afterwards does not undo or block the delete.
    """
    dashboard = HostDashboard(client, session)
    try:
        await dashboard.delete(listing_id)
    except Unauthorized:
        raise
    except StayfrontError as e:
        page = HostDashboardPage(listings=[], error=e.message)
        return JSONResponse(page.model_dump(mode="json"), status_code=status.HTTP_400_BAD_REQUEST)

    try:
        await dashboard.reload()
    except Unauthorized:
        raise
    except StayfrontError as e:
        logger.warning("host_listings_fetch_failed", error=e.message, deleted=listing_id)
        return HostDashboardPage(listings=[], message=DELETED_MESSAGE, error=FETCH_ERROR)
    return HostDashboardPage(listings=dashboard.listings, message=DELETED_MESSAGE)
