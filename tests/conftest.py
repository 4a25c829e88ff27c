"""
Shared fixtures for the scanner test suite: an in-memory store, sample
listings and appraisals, and fakes for every scan collaborator.
"""
import pytest
from sqlalchemy.pool import StaticPool

from vintage_scout.models.appraisal import Appraisal
from vintage_scout.models.listing import Listing
from vintage_scout.storage.db import init_db, make_engine, make_session_factory
from vintage_scout.storage.repository import ScanStore


@pytest.fixture
def engine():
    engine = make_engine("sqlite://", poolclass=StaticPool)
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def store(engine):
    return ScanStore(make_session_factory(engine))


@pytest.fixture
def make_listing():
    def _make(
        url="https://www.ebay.com/itm/test-001",
        title="Vintage 1960s Pendleton Wool Board Shirt Loop Collar",
        price=45.0,
        image_urls=None,
        description="Vintage Pendleton board shirt from the 1960s. Made in USA.",
        raw_data=None,
    ):
        return Listing(
            url=url,
            platform="ebay",
            title=title,
            price=price,
            image_urls=["https://example.com/img1.jpg"] if image_urls is None else image_urls,
            description=description,
            raw_data={"itemId": "test-001"} if raw_data is None else raw_data,
        )

    return _make


@pytest.fixture
def make_appraisal():
    def _make(estimated_value=120.0, current_price=45.0, confidence=0.85, **kwargs):
        margin = None if estimated_value is None else estimated_value - current_price
        return Appraisal(
            is_authentic=kwargs.get("is_authentic", True),
            estimated_era=kwargs.get("estimated_era", "1960s"),
            estimated_value=estimated_value,
            current_price=current_price,
            margin=margin,
            confidence=confidence,
            reasoning=kwargs.get("reasoning", "Loop collar Pendleton."),
            red_flags=kwargs.get("red_flags", []),
            references=kwargs.get("references", []),
        )

    return _make


class FakeSource:
    def __init__(self, listings=None, error=None):
        self.listings = listings or []
        self.error = error
        self.calls = []

    async def fetch(self, platform, limit):
        self.calls.append((platform, limit))
        if self.error:
            raise self.error
        return self.listings[:limit]


class FakeAppraiser:
    """Returns (or raises) a preset outcome per listing URL."""

    def __init__(self, outcomes):
        self.outcomes = outcomes
        self.calls = []

    async def appraise(self, listing):
        self.calls.append(listing.url)
        outcome = self.outcomes[listing.url]
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


class FakeNotifier:
    def __init__(self):
        self.batches = []

    async def notify(self, opportunities):
        self.batches.append(list(opportunities))


@pytest.fixture
def fake_source():
    return FakeSource


@pytest.fixture
def fake_appraiser():
    return FakeAppraiser


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def sleep_recorder():
    delays = []

    async def _sleep(seconds):
        delays.append(seconds)

    _sleep.delays = delays
    return _sleep
