from dataclasses import dataclass, field
from typing import Any


@dataclass
class Listing:
    """A single marketplace item, normalized across platforms.

    The URL is the natural key: two listings are the same item iff their
    URLs are equal.
    """
    url: str
    platform: str
    title: str
    price: float
    image_urls: list[str] = field(default_factory=list)
    description: str = ""
    raw_data: dict[str, Any] = field(default_factory=dict)

    @property
    def short_title(self) -> str:
        return self.title[:50]

    @classmethod
    def from_dict(cls, data: dict) -> "Listing":
        """Build a listing from loosely-shaped source data.

        Missing or malformed fields degrade to values that fail the filter
        predicate they feed (no images, infinite price).
        """
        image_urls = data.get("imageUrls", data.get("image_urls")) or []
        if not isinstance(image_urls, list):
            image_urls = []

        try:
            price = float(data.get("price"))
        except (TypeError, ValueError):
            price = float("inf")

        raw = data.get("rawData", data.get("raw_data")) or {}
        if not isinstance(raw, dict):
            raw = {}

        return cls(
            url=str(data.get("url") or ""),
            platform=str(data.get("platform") or ""),
            title=str(data.get("title") or ""),
            price=price,
            image_urls=[u for u in image_urls if isinstance(u, str) and u],
            description=str(data.get("description") or ""),
            raw_data=raw,
        )
