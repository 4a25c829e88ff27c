import asyncio
import logging

import aiohttp

logger = logging.getLogger(__name__)


class ImageDownloader:
    """Fetch listing photos concurrently, dropping any that fail."""

    def __init__(self, timeout: float = 15.0, user_agent: str | None = None):
        self.timeout = timeout
        self.user_agent = user_agent

    async def fetch_all(self, urls: list[str]) -> list[tuple[bytes, str]]:
        """Download photos. Returns (image_bytes, media_type) for each success."""
        if not urls:
            return []

        headers = {"User-Agent": self.user_agent} if self.user_agent else None
        async with aiohttp.ClientSession(headers=headers) as session:
            tasks = [self._download_one(session, url) for url in urls]
            results = await asyncio.gather(*tasks, return_exceptions=True)

        images = []
        for url, result in zip(urls, results):
            if isinstance(result, tuple):
                images.append(result)
            elif isinstance(result, Exception):
                logger.warning(f"Image fetch failed for {url[:60]}: {result}")
        return images

    async def _download_one(
        self, session: aiohttp.ClientSession, url: str
    ) -> tuple[bytes, str]:
        async with session.get(url, timeout=aiohttp.ClientTimeout(total=self.timeout)) as resp:
            resp.raise_for_status()
            media_type = normalize_media_type(resp.content_type or "image/jpeg")
            data = await resp.read()
            return (data, media_type)


def normalize_media_type(content_type: str) -> str:
    """Normalize content type to Bedrock-supported image types."""
    ct = content_type.lower()
    if "png" in ct:
        return "image/png"
    if "gif" in ct:
        return "image/gif"
    if "webp" in ct:
        return "image/webp"
    return "image/jpeg"
