"""Scan orchestration: fetch, filter, remember, appraise, alert.

One run walks the filtered listings strictly one at a time. The appraisal
call is rate-limited upstream, so sequential processing is the throttle.
A listing that fails to appraise is logged and counted; only a failed fetch
or a failed bulk upsert ends the run early.
"""
import logging
from dataclasses import dataclass, field
from typing import Protocol

from .config import ScanConfig
from .exceptions import DuplicateAppraisalError, FetchError, VintageScoutError
from .filtering.classifier import is_opportunity
from .models.appraisal import Appraisal
from .models.listing import Listing
from .models.opportunity import Opportunity

logger = logging.getLogger(__name__)


class ListingSource(Protocol):
    async def fetch(self, platform: str, limit: int) -> list[Listing]: ...


class ListingFilterer(Protocol):
    def apply(self, listings: list[Listing]) -> list[Listing]: ...


class Appraiser(Protocol):
    async def appraise(self, listing: Listing) -> Appraisal: ...


class Notifier(Protocol):
    async def notify(self, opportunities: list[Opportunity]) -> None: ...


class ScanRepository(Protocol):
    def upsert_filtered_listing(self, listing: Listing): ...

    def find_filtered_listing_by_url(self, url: str): ...

    def find_appraisal_by_listing_id(self, listing_id: int): ...

    def create_appraisal(self, listing_id: int, appraisal: Appraisal, is_opportunity: bool): ...


@dataclass
class ScanDeps:
    source: ListingSource
    listing_filter: ListingFilterer
    appraiser: Appraiser
    notifier: Notifier
    store: ScanRepository


@dataclass
class ScanSummary:
    fetched: int = 0
    filtered: int = 0
    evaluated: int = 0
    skipped: int = 0
    errors: int = 0
    opportunities: list[Opportunity] = field(default_factory=list)


async def run_scan(config: ScanConfig, deps: ScanDeps) -> ScanSummary:
    summary = ScanSummary()
    store = deps.store
    logger.info(f"Starting vintage scan on {config.platform}...")

    # 1. Fetch
    try:
        listings = await deps.source.fetch(config.platform, config.max_listings)
    except VintageScoutError:
        raise
    except Exception as e:
        raise FetchError(config.platform, str(e)) from e
    summary.fetched = len(listings)
    logger.info(f"Fetched {len(listings)} listings from {config.platform}")

    # 2. Cheap pre-filter
    filtered = deps.listing_filter.apply(listings)
    summary.filtered = len(filtered)
    logger.info(f"{len(filtered)} listings passed initial filter")

    # 3. Remember what passed; PersistenceError here ends the run
    for listing in filtered:
        store.upsert_filtered_listing(listing)

    # 4. Appraise, one listing at a time
    for listing in filtered:
        try:
            record = store.find_filtered_listing_by_url(listing.url)
            if record is None:
                continue

            if store.find_appraisal_by_listing_id(record.id) is not None:
                summary.skipped += 1
                continue

            appraisal = await deps.appraiser.appraise(listing)
            flagged = is_opportunity(appraisal, config.min_margin, config.min_confidence)
            store.create_appraisal(record.id, appraisal, flagged)
        except DuplicateAppraisalError:
            # Another run got there first
            logger.info(f"Already appraised by a concurrent run: {listing.short_title}")
            summary.skipped += 1
            continue
        except Exception as e:
            summary.errors += 1
            logger.error(f"Failed to evaluate listing: {listing.short_title}... ({listing.url})")
            logger.error(f"  {type(e).__name__}: {e}")
            continue

        summary.evaluated += 1
        if flagged:
            summary.opportunities.append(Opportunity(listing=listing, appraisal=appraisal))

    logger.info(
        f"Evaluation complete: {summary.evaluated} evaluated, "
        f"{summary.skipped} skipped, {summary.errors} errors"
    )

    # 5. Alert once per run, only when there is something to say
    if summary.opportunities:
        logger.info(f"Found {len(summary.opportunities)} opportunities!")
        await deps.notifier.notify(summary.opportunities)
    else:
        logger.info("No opportunities found this run.")

    logger.info("Scan complete.")
    return summary
