import asyncio
import io
import logging

import pytest
from rich.console import Console

from vintage_scout.exceptions import NotificationError
from vintage_scout.models.opportunity import Opportunity
from vintage_scout.output.discord import DiscordNotifier, build_embed
from vintage_scout.output.notify import NotifierGroup
from vintage_scout.output.terminal import ConsoleNotifier
from vintage_scout.scan import ScanSummary

WEBHOOK = "https://discord.com/api/webhooks/123/abc"


@pytest.fixture
def opportunity(make_listing, make_appraisal):
    return Opportunity(
        listing=make_listing(),
        appraisal=make_appraisal(red_flags=["Small moth hole"], references=["Sold $110-140"]),
    )


def record_posts(monkeypatch, notifier):
    posted = []

    async def _post(session, payload):
        posted.append(payload)

    monkeypatch.setattr(notifier, "_post", _post)
    return posted


def test_console_notifier_renders_opportunity(opportunity):
    buffer = io.StringIO()
    notifier = ConsoleNotifier(Console(file=buffer, width=120))

    asyncio.run(notifier.notify([opportunity]))

    output = buffer.getvalue()
    assert "Vintage Opportunities Found" in output
    assert "Pendleton" in output
    assert "$75.00" in output
    assert "Small moth hole" in output


def test_console_summary(opportunity):
    buffer = io.StringIO()
    notifier = ConsoleNotifier(Console(file=buffer, width=120))

    notifier.display_summary(ScanSummary(fetched=10, filtered=4, evaluated=3, errors=1, opportunities=[opportunity]))

    output = buffer.getvalue()
    assert "Scan Summary" in output
    assert "Listings fetched" in output


def test_build_embed(opportunity):
    embed = build_embed(opportunity)
    fields = {f["name"]: f["value"] for f in embed["fields"]}

    assert embed["url"] == "https://www.ebay.com/itm/test-001"
    assert embed["thumbnail"] == {"url": "https://example.com/img1.jpg"}
    assert fields["Listed Price"] == "$45.00"
    assert fields["Estimated Value"] == "$120.00"
    assert fields["Margin"] == "$75.00"
    assert fields["Confidence"] == "85%"
    assert fields["Red Flags"] == "Small moth hole"


def test_discord_batches_embeds(monkeypatch, opportunity):
    notifier = DiscordNotifier(WEBHOOK)
    posted = record_posts(monkeypatch, notifier)

    asyncio.run(notifier.notify([opportunity] * 12))

    assert [len(p["embeds"]) for p in posted] == [10, 2]
    assert posted[0]["content"] == "Found 12 vintage opportunities"
    assert "content" not in posted[1]


def test_discord_failure_is_logged_not_raised(monkeypatch, opportunity, caplog):
    notifier = DiscordNotifier(WEBHOOK)

    async def _post(session, payload):
        raise NotificationError("Discord webhook returned 404: Unknown Webhook")

    monkeypatch.setattr(notifier, "_post", _post)

    with caplog.at_level(logging.ERROR):
        asyncio.run(notifier.notify([opportunity]))

    assert "Discord notification failed" in caplog.text


def test_group_continues_past_failing_notifier(opportunity, notifier, caplog):
    class Exploding:
        async def notify(self, opportunities):
            raise RuntimeError("kaboom")

    group = NotifierGroup([Exploding(), notifier])

    with caplog.at_level(logging.ERROR):
        asyncio.run(group.notify([opportunity]))

    assert notifier.batches == [[opportunity]]
    assert "Exploding failed: kaboom" in caplog.text
