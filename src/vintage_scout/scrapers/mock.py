import logging

from ..fixtures import MOCK_LISTINGS
from ..models.listing import Listing

logger = logging.getLogger(__name__)


class MockListingSource:
    """Serves fixture listings in place of a live marketplace."""

    platform = "ebay"

    def __init__(self, listings: list[dict] | None = None):
        self.listings = MOCK_LISTINGS if listings is None else listings

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return None

    async def fetch(self, platform: str, limit: int) -> list[Listing]:
        items = [Listing.from_dict(d) for d in self.listings[:limit]]
        logger.info(f"[MOCK] Returning {len(items)} mock listings for {platform}")
        return items
