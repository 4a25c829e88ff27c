import asyncio
import json

import pytest
from botocore.exceptions import ClientError

from vintage_scout.exceptions import (
    MalformedAppraisalResponse,
    NoImagesAvailable,
    TransientInferenceError,
)
from vintage_scout.vision.appraiser import VisionAppraiser, build_prompt, is_retryable
from vintage_scout.vision.mock import MockAppraiser

GOOD_RESPONSE = json.dumps(
    {
        "isAuthentic": True,
        "estimatedEra": "1960s",
        "estimatedValue": 120,
        "currentPrice": 45,
        "margin": 75,
        "confidence": 0.85,
        "reasoning": "Loop collar, Made in USA label.",
        "redFlags": [],
        "references": ["Similar sold $100-150"],
    }
)


def client_error(code, status):
    return ClientError(
        {"Error": {"Code": code, "Message": "boom"}, "ResponseMetadata": {"HTTPStatusCode": status}},
        "InvokeModel",
    )


class FakeImages:
    def __init__(self, available=True):
        self.available = available
        self.requested = []

    async def fetch_all(self, urls):
        self.requested.append(list(urls))
        if not self.available:
            return []
        return [(b"\xff\xd8jpeg", "image/jpeg") for _ in urls]


class FakeInference:
    """Plays back a script of responses; exceptions in the script are raised."""

    def __init__(self, *script):
        self.script = list(script)
        self.calls = 0

    async def infer(self, images, prompt):
        self.calls += 1
        outcome = self.script.pop(0)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome


def make_appraiser(inference, sleep, images=None, **kwargs):
    return VisionAppraiser(
        inference,
        images or FakeImages(),
        sleep=sleep,
        **kwargs,
    )


def test_successful_appraisal(make_listing, sleep_recorder):
    inference = FakeInference("Sure!\n```json\n" + GOOD_RESPONSE + "\n```")
    appraiser = make_appraiser(inference, sleep=sleep_recorder)

    appraisal = asyncio.run(appraiser.appraise(make_listing()))

    assert appraisal.margin == 75
    assert appraisal.confidence == 0.85
    assert inference.calls == 1
    assert sleep_recorder.delays == []


def test_only_first_four_images_are_requested(make_listing, sleep_recorder):
    images = FakeImages()
    urls = [f"https://example.com/{i}.jpg" for i in range(7)]
    appraiser = make_appraiser(FakeInference(GOOD_RESPONSE), images=images, sleep=sleep_recorder)

    asyncio.run(appraiser.appraise(make_listing(image_urls=urls)))

    assert images.requested == [urls[:4]]


def test_no_images_fails_without_calling_model(make_listing, sleep_recorder):
    inference = FakeInference(GOOD_RESPONSE)
    appraiser = make_appraiser(inference, images=FakeImages(available=False), sleep=sleep_recorder)

    with pytest.raises(NoImagesAvailable):
        asyncio.run(appraiser.appraise(make_listing()))
    assert inference.calls == 0


def test_retries_rate_limit_with_doubling_backoff(make_listing, sleep_recorder):
    inference = FakeInference(
        client_error("ThrottlingException", 429),
        TransientInferenceError("ECONNRESET"),
        GOOD_RESPONSE,
    )
    appraiser = make_appraiser(inference, sleep=sleep_recorder)

    appraisal = asyncio.run(appraiser.appraise(make_listing()))

    assert appraisal.estimated_value == 120
    assert inference.calls == 3
    assert sleep_recorder.delays == [15, 30]


def test_exhausted_retries_raise_last_error(make_listing, sleep_recorder):
    last = TransientInferenceError("fetch failed (third)")
    inference = FakeInference(
        TransientInferenceError("fetch failed"),
        ConnectionResetError("reset"),
        last,
    )
    appraiser = make_appraiser(inference, sleep=sleep_recorder)

    with pytest.raises(TransientInferenceError) as info:
        asyncio.run(appraiser.appraise(make_listing()))

    assert info.value is last
    assert inference.calls == 3
    # No wait after the final attempt
    assert sleep_recorder.delays == [15, 30]


def test_malformed_response_is_not_retried(make_listing, sleep_recorder):
    inference = FakeInference("I cannot appraise this item.", GOOD_RESPONSE)
    appraiser = make_appraiser(inference, sleep=sleep_recorder)

    with pytest.raises(MalformedAppraisalResponse):
        asyncio.run(appraiser.appraise(make_listing()))
    assert inference.calls == 1
    assert sleep_recorder.delays == []


def test_non_retryable_client_error_fails_immediately(make_listing, sleep_recorder):
    inference = FakeInference(client_error("ValidationException", 400), GOOD_RESPONSE)
    appraiser = make_appraiser(inference, sleep=sleep_recorder)

    with pytest.raises(ClientError):
        asyncio.run(appraiser.appraise(make_listing()))
    assert inference.calls == 1


def test_custom_retry_schedule(make_listing, sleep_recorder):
    inference = FakeInference(*[TransientInferenceError("429")] * 4, GOOD_RESPONSE)
    appraiser = make_appraiser(
        inference, sleep=sleep_recorder, max_retries=5, initial_retry_delay=1
    )

    asyncio.run(appraiser.appraise(make_listing()))
    assert sleep_recorder.delays == [1, 2, 4, 8]


@pytest.mark.parametrize(
    "error, expected",
    [
        (TransientInferenceError("anything"), True),
        (client_error("ThrottlingException", 400), True),
        (client_error("SomethingElse", 429), True),
        (client_error("AccessDeniedException", 403), False),
        (ConnectionResetError(), True),
        (asyncio.TimeoutError(), True),
        (RuntimeError("HTTP 429 Too Many Requests"), True),
        (RuntimeError("read ETIMEDOUT"), True),
        (RuntimeError("something else"), False),
        (MalformedAppraisalResponse("429 in the reason"), False),
        (NoImagesAvailable("https://x"), False),
    ],
)
def test_is_retryable(error, expected):
    assert is_retryable(error) is expected


def test_prompt_carries_listing_details(make_listing):
    prompt = build_prompt(make_listing(title="Old Talon zip jacket", price=35, description="From estate"))

    assert "Listing Title: Old Talon zip jacket" in prompt
    assert "Listed Price: $35" in prompt
    assert "Description: From estate" in prompt
    assert '"isAuthentic": boolean' in prompt


def test_mock_appraiser_known_and_unknown_listings(make_listing):
    appraiser = MockAppraiser(
        {
            "https://www.ebay.com/itm/known": {
                "isAuthentic": True,
                "estimatedEra": "1970s",
                "estimatedValue": 80,
                "currentPrice": 20,
                "margin": 60,
                "confidence": 0.9,
            }
        }
    )

    known = asyncio.run(appraiser.appraise(make_listing(url="https://www.ebay.com/itm/known", price=20)))
    unknown = asyncio.run(appraiser.appraise(make_listing(url="https://www.ebay.com/itm/other")))

    assert known.margin == 60
    assert unknown.estimated_value is None
    assert unknown.margin is None
    assert unknown.confidence == 0.3
