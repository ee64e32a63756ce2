"""
Listing service: search, detail, and the host's own listings.
"""

from stayfront.core.logging import get_logger
from stayfront.schemas.listing import Listing, ListingCreate, ListingSearch
from stayfront.services.api_client import ApiClient, parse, parse_list
from stayfront.services.cache_service import (
    get_cached_listings,
    set_cached_listings,
    invalidate_listing_cache,
)
from stayfront.services.session import Session

logger = get_logger(__name__)


async def search_listings(client: ApiClient, session: Session, search: ListingSearch) -> list[Listing]:
    """
    Listings matching the search form.
    Results are cached in Redis for LISTINGS_CACHE_TTL seconds.
    """
    params = search.to_query()

    cached = await get_cached_listings(params)
    if cached is not None:
        return parse_list(Listing, cached)

    data = await client.request(
        session, "/listings", params=params, error_message="Failed to fetch listings"
    )
    listings = parse_list(Listing, data)

    await set_cached_listings(params, [listing.model_dump(mode="json") for listing in listings])
    logger.info("listings_searched", results=len(listings), **params)
    return listings


async def get_listing(client: ApiClient, session: Session, listing_id: int) -> Listing:
    data = await client.request(
        session, f"/listings/{listing_id}", error_message="Failed to fetch listing"
    )
    return parse(Listing, data)


async def get_host_listings(client: ApiClient, session: Session) -> list[Listing]:
    """Listings owned by the logged-in host."""
    data = await client.request(
        session, "/listings/host/listings", error_message="Failed to fetch host listings"
    )
    return parse_list(Listing, data)


async def create_listing(client: ApiClient, session: Session, listing_data: ListingCreate) -> Listing:
    data = await client.request(
        session,
        "/listings",
        method="POST",
        body=listing_data,
        error_message="Failed to create listing",
    )
    listing = parse(Listing, data)
    await invalidate_listing_cache()

    logger.info("listing_created", listing_id=listing.id, host_id=listing.host_id)
    return listing


async def delete_listing(client: ApiClient, session: Session, listing_id: int) -> None:
    await client.request(
        session,
        f"/listings/{listing_id}",
        method="DELETE",
        error_message="Failed to delete listing",
    )
    await invalidate_listing_cache()

    logger.info("listing_deleted", listing_id=listing_id)
