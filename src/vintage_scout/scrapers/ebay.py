import logging
import math
import re
from urllib.parse import quote_plus

from .base import BrowserListingSource
from ..config import DEFAULT_SEARCH_QUERIES
from ..filtering.listing_filter import VARIATION_GROUP_TYPE
from ..models.listing import Listing

logger = logging.getLogger(__name__)

# Longest first so "New with tags" wins over "New"
_CONDITIONS = ("New with tags", "New (Other)", "Brand New", "Pre-Owned", "Open box", "New")


class EbayListingScraper(BrowserListingSource):
    """Scrapes active eBay search results for underpriced vintage clothing.

    Each configured query is searched newest-first with a price ceiling;
    results are merged, de-duplicated by URL and capped at the requested
    limit. A query that fails is logged and skipped.
    """

    platform = "ebay"
    SEARCH_URL = "https://www.ebay.com/sch/i.html"

    def __init__(
        self,
        queries: list[str] | None = None,
        max_price: float = 500.0,
        delay: float = 3.0,
        headless: bool = True,
        user_agent: str | None = None,
    ):
        super().__init__(delay=delay, headless=headless, user_agent=user_agent)
        self.queries = queries or list(DEFAULT_SEARCH_QUERIES)
        self.max_price = max_price

    def search_url(self, query: str) -> str:
        # _sop=10: newly listed first
        return (
            f"{self.SEARCH_URL}?_nkw={quote_plus(query)}"
            f"&_sacat=0&rt=nc&_udhi={self.max_price:g}&_sop=10&_ipg=60"
        )

    async def fetch(self, platform: str, limit: int) -> list[Listing]:
        listings: list[Listing] = []
        seen: set[str] = set()
        per_query = max(1, math.ceil(limit / len(self.queries)))

        logger.info(f"Fetching {limit} listings from eBay...")
        for query in self.queries:
            if len(listings) >= limit:
                break
            try:
                found = await self._search(query, per_query)
            except Exception as e:
                logger.error(f"Error searching '{query}': {e}")
                continue

            for listing in found:
                if len(listings) >= limit:
                    break
                if listing.url in seen:
                    continue
                seen.add(listing.url)
                listings.append(listing)
            logger.info(f"Query '{query[:30]}': {len(found)} results")

        logger.info(f"Fetched {len(listings)} total listings from eBay")
        return listings

    async def _search(self, query: str, max_results: int) -> list[Listing]:
        results: list[Listing] = []
        async with self.open_page() as page:
            await self.throttle()
            if not await self.goto(page, self.search_url(query), wait_selector=".srp-results"):
                logger.warning(f"Could not load eBay results for '{query}'")
                return results

            for card in await page.query_selector_all("li.s-card"):
                listing = await self._parse_card(card)
                if listing:
                    results.append(listing)
                if len(results) >= max_results:
                    break
        return results

    async def _parse_card(self, element) -> Listing | None:
        """Parse a single result card (li.s-card) into a listing."""
        try:
            data = await element.evaluate("""el => {
                const title_el = el.querySelector('.s-card__title');
                const title = title_el ? title_el.innerText.trim() : '';

                let price = '';
                for (const s of el.querySelectorAll('span')) {
                    const t = s.innerText.trim();
                    if (t.startsWith('$') && !t.includes('delivery')) {
                        price = t;
                        break;
                    }
                }
                const sub = el.querySelector('.s-card__subtitle');
                const condition = sub ? sub.innerText.trim() : '';

                const img = el.querySelector('img');
                const image = img ? (img.getAttribute('src') || img.dataset.src || '') : '';

                const link_el = el.querySelector('a.s-card__link');
                const url = link_el ? link_el.href : '';

                return {title, price, condition, image, url};
            }""")
        except Exception as e:
            logger.debug(f"Failed to read result card: {e}")
            return None

        return self.card_to_listing(data)

    @classmethod
    def card_to_listing(cls, data: dict) -> Listing | None:
        title = re.sub(r"\s*Opens in a new window or tab\s*$", "", data.get("title", ""))
        # Skip placeholder items
        if not title or title.lower().startswith("shop on ebay"):
            return None

        url = clean_item_url(data.get("url", ""))
        if not url:
            return None

        price, is_range = parse_price(data.get("price", ""))
        if price is None:
            return None

        raw_data = {
            "itemId": item_id_from_url(url),
            "condition": normalize_condition(data.get("condition", "")),
        }
        # A price range means "choose your size/color"
        if is_range:
            raw_data["itemGroupType"] = VARIATION_GROUP_TYPE

        image = data.get("image", "")
        return Listing(
            url=url,
            platform=cls.platform,
            title=title,
            price=price,
            image_urls=[upscale_image_url(image)] if image.startswith("http") else [],
            description=title,
            raw_data=raw_data,
        )


def parse_price(price_text: str) -> tuple[float | None, bool]:
    """Parse eBay price text. Ranges are averaged and flagged."""
    cleaned = price_text.replace("$", "").replace(",", "").strip()

    # Handle range: "$10.00 to $25.00"
    if " to " in cleaned:
        parts = cleaned.split(" to ")
        try:
            low = float(parts[0].strip())
            high = float(parts[1].strip())
            return (low + high) / 2, True
        except (ValueError, IndexError):
            return None, True

    try:
        return float(cleaned), False
    except ValueError:
        return None, False


def clean_item_url(url: str) -> str:
    """Drop tracking query params so the same item always has the same URL."""
    url = url.split("?", 1)[0].strip()
    return url if "/itm/" in url else ""


def item_id_from_url(url: str) -> str:
    match = re.search(r"/itm/(?:[^/]+/)?(\d+)", url)
    return match.group(1) if match else ""


def normalize_condition(text: str) -> str:
    for condition in _CONDITIONS:
        if condition.lower() in text.lower():
            return condition
    return text


def upscale_image_url(url: str) -> str:
    # Search thumbnails are s-l140/s-l225; the same path serves larger sizes
    return re.sub(r"s-l\d+\.", "s-l1600.", url)
