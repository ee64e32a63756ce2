"""
Host dashboard: the logged-in host's listings.
"""

from dataclasses import dataclass, field

from stayfront.core.logging import get_logger
from stayfront.schemas.listing import Listing
from stayfront.services.api_client import ApiClient
from stayfront.services.listing_service import delete_listing, get_host_listings
from stayfront.services.session import Session

logger = get_logger(__name__)


@dataclass
class HostDashboard:
    client: ApiClient
    session: Session
    listings: list[Listing] = field(default_factory=list)

    @classmethod
    async def load(cls, client: ApiClient, session: Session) -> "HostDashboard":
        dashboard = cls(client, session)
        await dashboard.reload()
        return dashboard

    async def reload(self) -> None:
        self.listings = await get_host_listings(self.client, self.session)

    async def delete(self, listing_id: int) -> None:
        """
        Delete on the server, then drop the listing from this view.
        The collection is not re-fetched.
        """
        await delete_listing(self.client, self.session, listing_id)
        self.listings = [listing for listing in self.listings if listing.id != listing_id]
        logger.info("host_listing_removed", listing_id=listing_id, remaining=len(self.listings))
