import asyncio
import logging
import time

import aiohttp
from botocore.exceptions import ClientError
from botocore.exceptions import ConnectionError as BotoConnectionError
from botocore.exceptions import HTTPClientError

from ..exceptions import (
    AppraisalError,
    NoImagesAvailable,
    TransientInferenceError,
)
from ..models.appraisal import Appraisal
from ..models.listing import Listing
from .parsing import extract_json_object

logger = logging.getLogger(__name__)

APPRAISAL_PROMPT = """You are an expert in vintage clothing (pre-1980s). Analyze this listing and determine if it's authentic vintage and potentially underpriced.

Listing Title: {title}
Listed Price: ${price}
Description: {description}

Analyze the photos for:
- Labels/tags (union labels, care tags, brand logos)
- Stitching patterns (single vs chain stitch)
- Hardware (zippers - Talon, Crown vs modern YKK)
- Fabric patterns and construction
- Condition details

Respond with JSON only:
{
  "isAuthentic": boolean,        // Is this actually pre-1980s?
  "estimatedEra": string,        // e.g., "1960s" or "early 1970s"
  "estimatedValue": number|null, // What it could sell for (USD), null if you can't tell
  "currentPrice": number,        // The listed price
  "margin": number|null,         // estimatedValue - currentPrice
  "confidence": number,          // 0-1 score
  "reasoning": string,           // Why you think it's valuable/authentic
  "redFlags": string[],          // Potential issues
  "references": string[]         // Comparable sales, known labels, pricing sources
}"""

RATE_LIMIT_CODES = {"ThrottlingException", "TooManyRequestsException"}
TRANSIENT_MARKERS = ("429", "ECONNRESET", "ETIMEDOUT", "fetch failed")


def build_prompt(listing: Listing) -> str:
    price = f"{listing.price:g}" if isinstance(listing.price, (int, float)) else str(listing.price)
    return (
        APPRAISAL_PROMPT.replace("{title}", listing.title)
        .replace("{price}", price)
        .replace("{description}", listing.description)
    )


def is_retryable(error: BaseException) -> bool:
    """Rate limits and transient network failures are retryable; nothing else is."""
    if isinstance(error, TransientInferenceError):
        return True
    if isinstance(error, AppraisalError):
        return False
    if isinstance(error, ClientError):
        code = error.response.get("Error", {}).get("Code", "")
        status = error.response.get("ResponseMetadata", {}).get("HTTPStatusCode")
        return status == 429 or code in RATE_LIMIT_CODES
    if isinstance(
        error,
        (
            BotoConnectionError,
            HTTPClientError,
            aiohttp.ClientConnectionError,
            ConnectionError,
            TimeoutError,
            asyncio.TimeoutError,
        ),
    ):
        return True
    message = str(error)
    return any(marker in message for marker in TRANSIENT_MARKERS)


class VisionAppraiser:
    """Turn one listing into one appraisal via a vision model, with retries.

    Up to ``max_images`` photos are downloaded (failures dropped). Each
    inference attempt that fails with a retryable error waits
    ``initial_retry_delay * 2**attempt`` seconds before the next attempt;
    anything else, including an unparseable answer, fails immediately.
    """

    def __init__(
        self,
        inference,
        images,
        max_images: int = 4,
        max_retries: int = 3,
        initial_retry_delay: float = 15.0,
        sleep=asyncio.sleep,
    ):
        self.inference = inference
        self.images = images
        self.max_images = max_images
        self.max_retries = max(1, max_retries)
        self.initial_retry_delay = initial_retry_delay
        self._sleep = sleep

    async def appraise(self, listing: Listing) -> Appraisal:
        short_title = listing.short_title
        logger.info(f"Evaluating: {short_title}...")

        urls = listing.image_urls[: self.max_images]
        logger.debug(f"Fetching {len(urls)} images...")
        images = await self.images.fetch_all(urls)
        if not images:
            raise NoImagesAvailable(listing.url)
        logger.debug(f"Fetched {len(images)} images successfully")

        prompt = build_prompt(listing)

        last_error: BaseException | None = None
        for attempt in range(self.max_retries):
            try:
                if attempt:
                    logger.info(f"Calling vision model (attempt {attempt + 1})...")
                started = time.monotonic()
                text = await self.inference.infer(images, prompt)
                elapsed_ms = (time.monotonic() - started) * 1000

                appraisal = Appraisal.from_dict(
                    extract_json_object(text), listed_price=listing.price
                )
                margin = "N/A" if appraisal.margin is None else f"${appraisal.margin:g}"
                logger.info(
                    f"Evaluated in {elapsed_ms:.0f}ms - Era: {appraisal.estimated_era}, "
                    f"Margin: {margin}, Confidence: {appraisal.confidence * 100:.0f}%"
                )
                return appraisal
            except Exception as e:
                last_error = e
                if not is_retryable(e):
                    logger.debug(f"Non-retryable error for '{short_title}': {e}")
                    raise
                if attempt < self.max_retries - 1:
                    delay = self.initial_retry_delay * (2 ** attempt)
                    reason = "Rate limited" if "429" in str(e) or isinstance(e, ClientError) else "Network error"
                    logger.warning(f"{reason}: {str(e)[:100]}")
                    logger.info(
                        f"Retrying in {delay:g}s... (attempt {attempt + 1}/{self.max_retries})"
                    )
                    await self._sleep(delay)

        logger.error(f"Max retries exceeded for '{short_title}'")
        raise last_error
