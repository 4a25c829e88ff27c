import asyncio
import logging

import aiohttp

from ..exceptions import NotificationError
from ..models.opportunity import Opportunity

logger = logging.getLogger(__name__)

# Discord rejects messages with more than 10 embeds
MAX_EMBEDS_PER_MESSAGE = 10


def build_embed(opp: Opportunity) -> dict:
    listing, appraisal = opp.listing, opp.appraisal
    value = "N/A" if appraisal.estimated_value is None else f"${appraisal.estimated_value:.2f}"
    fields = [
        {"name": "Listed Price", "value": f"${listing.price:.2f}", "inline": True},
        {"name": "Estimated Value", "value": value, "inline": True},
        {"name": "Margin", "value": f"${opp.margin:.2f}", "inline": True},
        {"name": "Era", "value": appraisal.estimated_era or "Unknown", "inline": True},
        {"name": "Confidence", "value": f"{appraisal.confidence * 100:.0f}%", "inline": True},
    ]
    if appraisal.red_flags:
        fields.append({"name": "Red Flags", "value": "\n".join(appraisal.red_flags)[:1024]})
    if appraisal.references:
        fields.append({"name": "References", "value": "\n".join(appraisal.references)[:1024]})

    embed = {
        "title": listing.title[:256],
        "url": listing.url,
        "description": appraisal.reasoning[:2048],
        "color": 0x22C55E,
        "fields": fields,
    }
    if listing.image_urls:
        embed["thumbnail"] = {"url": listing.image_urls[0]}
    return embed


class DiscordNotifier:
    """Post opportunities to a Discord channel webhook.

    Delivery problems are logged and swallowed; a failed alert never fails
    a scan.
    """

    def __init__(self, webhook_url: str, timeout: float = 15.0):
        self.webhook_url = webhook_url
        self.timeout = timeout

    async def notify(self, opportunities: list[Opportunity]) -> None:
        embeds = [build_embed(opp) for opp in opportunities]
        batches = [
            embeds[i : i + MAX_EMBEDS_PER_MESSAGE]
            for i in range(0, len(embeds), MAX_EMBEDS_PER_MESSAGE)
        ]
        try:
            async with aiohttp.ClientSession(
                timeout=aiohttp.ClientTimeout(total=self.timeout)
            ) as session:
                for i, batch in enumerate(batches):
                    payload = {"embeds": batch}
                    if i == 0:
                        payload["content"] = f"Found {len(opportunities)} vintage opportunities"
                    await self._post(session, payload)
            logger.info(f"Sent {len(opportunities)} opportunities to Discord")
        except (aiohttp.ClientError, NotificationError, asyncio.TimeoutError) as e:
            logger.error(f"Discord notification failed: {e}")

    async def _post(self, session: aiohttp.ClientSession, payload: dict) -> None:
        async with session.post(self.webhook_url, json=payload) as resp:
            if resp.status >= 400:
                body = await resp.text()
                raise NotificationError(f"Discord webhook returned {resp.status}: {body[:200]}")
