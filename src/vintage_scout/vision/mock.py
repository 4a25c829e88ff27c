import logging

from ..fixtures import MOCK_APPRAISALS
from ..models.appraisal import Appraisal
from ..models.listing import Listing

logger = logging.getLogger(__name__)


class MockAppraiser:
    """Returns canned appraisals keyed by listing URL. No network, no cost."""

    def __init__(self, appraisals: dict[str, dict] | None = None):
        self.appraisals = MOCK_APPRAISALS if appraisals is None else appraisals

    async def appraise(self, listing: Listing) -> Appraisal:
        data = self.appraisals.get(listing.url)
        if data is None:
            data = {
                "isAuthentic": False,
                "estimatedEra": "Unknown",
                "estimatedValue": None,
                "currentPrice": listing.price,
                "margin": None,
                "confidence": 0.3,
                "reasoning": "Unable to determine authenticity or value from available information.",
                "redFlags": ["Insufficient data for evaluation"],
                "references": [],
            }
        logger.info(f"[MOCK] Evaluated: {listing.short_title}...")
        return Appraisal.from_dict(data, listed_price=listing.price)
