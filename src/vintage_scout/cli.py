import argparse
import asyncio
import logging
import os
import sys
from contextlib import AsyncExitStack

# Force UTF-8 output on Windows so Rich panels render correctly
if sys.platform == "win32":
    os.environ.setdefault("PYTHONIOENCODING", "utf-8")
    if hasattr(sys.stdout, "reconfigure"):
        sys.stdout.reconfigure(encoding="utf-8")
    if hasattr(sys.stderr, "reconfigure"):
        sys.stderr.reconfigure(encoding="utf-8")

from rich.console import Console

from .config import ScanConfig, Settings, load_settings
from .exceptions import FetchError, VintageScoutError
from .filtering.listing_filter import ListingFilter
from .output.discord import DiscordNotifier
from .output.notify import NotifierGroup
from .output.terminal import ConsoleNotifier
from .scan import ScanDeps, ScanSummary, run_scan
from .scrapers.ebay import EbayListingScraper
from .scrapers.mock import MockListingSource
from .storage.db import init_db, make_engine, make_session_factory
from .storage.repository import ScanStore
from .vision.appraiser import VisionAppraiser
from .vision.bedrock import BedrockVisionClient
from .vision.images import ImageDownloader
from .vision.mock import MockAppraiser

logger = logging.getLogger(__name__)


def build_listing_source(settings: Settings):
    if settings.use_mock_data:
        return MockListingSource()
    return EbayListingScraper(
        queries=settings.search_queries,
        max_price=settings.max_price,
        delay=settings.request_delay_seconds,
        headless=settings.headless_browser,
        user_agent=settings.user_agent,
    )


def build_appraiser(settings: Settings):
    if settings.use_mock_data:
        return MockAppraiser()
    return VisionAppraiser(
        inference=BedrockVisionClient(
            region=settings.aws_region,
            model_id=settings.bedrock_model_id,
        ),
        images=ImageDownloader(
            timeout=settings.image_timeout_seconds,
            user_agent=settings.user_agent,
        ),
        max_images=settings.max_images,
        max_retries=settings.max_retries,
        initial_retry_delay=settings.initial_retry_delay_seconds,
    )


def build_notifier(settings: Settings, console_output: ConsoleNotifier | None = None):
    notifiers = [console_output or ConsoleNotifier()]
    if settings.discord_webhook_url:
        notifiers.append(DiscordNotifier(settings.discord_webhook_url))
    return NotifierGroup(notifiers)


def apply_overrides(settings: Settings, args) -> Settings:
    if args.platform:
        settings.platform = args.platform
    if args.max_listings is not None:
        settings.max_listings = args.max_listings
    if args.min_margin is not None:
        settings.min_margin = args.min_margin
    if args.min_confidence is not None:
        settings.min_confidence = args.min_confidence
    if args.database_url:
        settings.database_url = args.database_url
    if args.mock:
        settings.use_mock_data = True
    if args.visible:
        settings.headless_browser = False
    return settings


async def run(args) -> ScanSummary:
    console = Console()
    console_output = ConsoleNotifier(console)
    settings = apply_overrides(load_settings(args.settings), args)
    config = ScanConfig.from_settings(settings)

    console.print()
    console.print("[bold green]Vintage Scout[/bold green]")
    mode = " [yellow](mock data)[/yellow]" if settings.use_mock_data else ""
    console.print(
        f"[dim]Platform {config.platform} | Max {config.max_listings} listings | "
        f"Min margin ${config.min_margin:g} | Min confidence {config.min_confidence:.0%}[/dim]{mode}"
    )
    console.print()

    engine = make_engine(settings.database_url)
    try:
        init_db(engine)
        store = ScanStore(make_session_factory(engine))
        notifier = build_notifier(settings, console_output)
        source = build_listing_source(settings)

        async with AsyncExitStack() as stack:
            try:
                await stack.enter_async_context(source)
            except Exception as e:
                raise FetchError(config.platform, f"could not start listing source: {e}") from e

            summary = await run_scan(
                config,
                ScanDeps(
                    source=source,
                    listing_filter=ListingFilter(
                        max_price=settings.max_price,
                        exclude_keywords=settings.exclude_keywords,
                    ),
                    appraiser=build_appraiser(settings),
                    notifier=notifier,
                    store=store,
                ),
            )
    finally:
        engine.dispose()

    console_output.display_summary(summary)
    return summary


def main():
    parser = argparse.ArgumentParser(
        description="Vintage Scout: find underpriced vintage clothing with AI appraisal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  vintage-scout --mock\n"
            "  vintage-scout --max-listings 20 --min-margin 50 --min-confidence 0.7\n"
        ),
    )
    parser.add_argument("--platform", help="Marketplace to scan (default: ebay)")
    parser.add_argument("--max-listings", type=int, help="Maximum listings to fetch (default: 20)")
    parser.add_argument("--min-margin", type=float, help="Minimum margin in dollars (default: 50)")
    parser.add_argument(
        "--min-confidence",
        type=float,
        help="Minimum appraisal confidence, 0-1 (default: 0.7)",
    )
    parser.add_argument(
        "--settings",
        default="config/settings.json",
        help="Path to settings config file",
    )
    parser.add_argument("--database-url", help="SQLAlchemy database URL")
    parser.add_argument(
        "--mock",
        action="store_true",
        help="Use canned listings and appraisals (no browser, no API cost)",
    )
    parser.add_argument(
        "--visible",
        action="store_true",
        help="Show browser windows (not headless)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%H:%M:%S",
    )
    # Suppress noisy loggers
    for name in ("playwright", "botocore", "urllib3", "aiohttp"):
        logging.getLogger(name).setLevel(logging.WARNING)

    try:
        asyncio.run(run(args))
    except KeyboardInterrupt:
        Console().print("\n[yellow]Scan cancelled.[/yellow]")
        sys.exit(0)
    except VintageScoutError as e:
        logger.error(f"Scan failed: {e}")
        Console(stderr=True).print(f"[bold red]Scan failed:[/bold red] {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
