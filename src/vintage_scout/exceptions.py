"""Exception hierarchy for the scan pipeline.

Run-fatal errors (FetchError, PersistenceError during the bulk upsert) abort a
run. Appraisal errors are item-level: the orchestrator counts them and moves on
to the next listing.
"""


class VintageScoutError(Exception):
    """Base exception for all scanner errors."""


class ConfigurationError(VintageScoutError):
    """Settings are invalid or name an unsupported platform."""


class FetchError(VintageScoutError):
    """The listings source failed to produce listings."""

    def __init__(self, platform: str, message: str):
        self.platform = platform
        super().__init__(f"Failed to fetch listings from {platform}: {message}")


class PersistenceError(VintageScoutError):
    """A storage operation failed."""


class DuplicateAppraisalError(PersistenceError):
    """An appraisal already exists for the filtered listing."""

    def __init__(self, listing_id: int):
        self.listing_id = listing_id
        super().__init__(f"Appraisal already exists for listing {listing_id}")


class AppraisalError(VintageScoutError):
    """Base class for per-listing appraisal failures."""


class NoImagesAvailable(AppraisalError):
    """Every image download for a listing failed."""

    def __init__(self, url: str):
        self.url = url
        super().__init__(f"Failed to fetch any images for listing {url}")


class MalformedAppraisalResponse(AppraisalError):
    """The model answered, but not with a usable appraisal object."""

    def __init__(self, reason: str, raw_text: str = ""):
        self.reason = reason
        self.raw_text = raw_text
        super().__init__(f"Malformed appraisal response: {reason}")


class TransientInferenceError(AppraisalError):
    """A rate-limit or network condition that is worth retrying."""


class NotificationError(VintageScoutError):
    """Delivering an alert failed. Never escapes a notifier."""
