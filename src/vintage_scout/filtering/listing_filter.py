from ..config import DEFAULT_EXCLUDE_KEYWORDS
from ..models.listing import Listing

VARIATION_GROUP_TYPE = "SELLER_DEFINED_VARIATIONS"


class ListingFilter:
    """Cheap first-pass rules applied before any listing reaches the vision model.

    Pure and deterministic: the output is the ordered subsequence of the
    input that passes every rule.
    """

    def __init__(
        self,
        max_price: float = 500.0,
        exclude_keywords: list[str] | None = None,
    ):
        self.max_price = max_price
        keywords = DEFAULT_EXCLUDE_KEYWORDS if exclude_keywords is None else exclude_keywords
        self.exclude_keywords = [k.lower() for k in keywords if k]

    def apply(self, listings: list[Listing]) -> list[Listing]:
        return [listing for listing in listings if self.passes(listing)]

    def passes(self, listing: Listing) -> bool:
        # Nothing for the vision model to look at
        if not isinstance(listing.image_urls, list) or not listing.image_urls:
            return False

        # Seller already prices near market
        price = listing.price
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            return False
        if not price <= self.max_price:
            return False

        # Reproductions and modern stock
        text = f"{listing.title or ''} {listing.description or ''}".lower()
        if any(keyword in text for keyword in self.exclude_keywords):
            return False

        # Vintage is one-of-one; "choose your size" listings are mass-produced
        raw = listing.raw_data if isinstance(listing.raw_data, dict) else {}
        if raw.get("itemGroupType") == VARIATION_GROUP_TYPE:
            return False

        return True
