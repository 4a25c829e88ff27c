import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path

from .exceptions import ConfigurationError

SUPPORTED_PLATFORMS = ("ebay",)

DEFAULT_EXCLUDE_KEYWORDS = [
    "reproduction",
    "inspired by",
    "replica",
    "new with tags",
    "nwt",
]

# Phrasing casual sellers use when they don't know what they have
DEFAULT_SEARCH_QUERIES = [
    "old clothing estate sale",
    "grandma closet clothes",
    "antique clothes lot",
    "old jacket coat",
    "old dress clothing",
    "vintage clothing lot",
]

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
)


@dataclass
class Settings:
    platform: str = "ebay"
    max_listings: int = 20
    min_margin: float = 50.0
    min_confidence: float = 0.7
    max_price: float = 500.0
    exclude_keywords: list[str] = field(
        default_factory=lambda: list(DEFAULT_EXCLUDE_KEYWORDS)
    )
    search_queries: list[str] = field(
        default_factory=lambda: list(DEFAULT_SEARCH_QUERIES)
    )
    max_images: int = 4
    max_retries: int = 3
    initial_retry_delay_seconds: float = 15.0
    image_timeout_seconds: float = 15.0
    database_url: str = "sqlite:///vintage_scout.db"
    discord_webhook_url: str | None = None
    use_mock_data: bool = False
    request_delay_seconds: float = 3.0
    headless_browser: bool = True
    aws_region: str = "us-east-1"
    bedrock_model_id: str = "us.anthropic.claude-sonnet-4-20250514-v1:0"
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(frozen=True)
class ScanConfig:
    """Per-run inputs: where to look and what counts as an opportunity."""
    platform: str
    max_listings: int
    min_margin: float
    min_confidence: float

    def __post_init__(self):
        if self.platform not in SUPPORTED_PLATFORMS:
            raise ConfigurationError(
                f"Unsupported platform '{self.platform}' "
                f"(supported: {', '.join(SUPPORTED_PLATFORMS)})"
            )
        if self.max_listings < 1:
            raise ConfigurationError("max_listings must be at least 1")

    @classmethod
    def from_settings(cls, settings: Settings) -> "ScanConfig":
        return cls(
            platform=settings.platform,
            max_listings=settings.max_listings,
            min_margin=settings.min_margin,
            min_confidence=settings.min_confidence,
        )


def load_settings(path: str = "config/settings.json") -> Settings:
    """Load application settings from JSON file, then apply env overrides."""
    filepath = Path(path)
    if filepath.exists():
        with open(filepath) as f:
            try:
                data = json.load(f)
            except json.JSONDecodeError as e:
                raise ConfigurationError(f"Invalid settings file {filepath}: {e}") from e
        known = {f.name for f in fields(Settings)}
        settings = Settings(**{k: v for k, v in data.items() if k in known})
    else:
        settings = Settings()

    if os.environ.get("DISCORD_WEBHOOK_URL"):
        settings.discord_webhook_url = os.environ["DISCORD_WEBHOOK_URL"]
    if os.environ.get("DATABASE_URL"):
        settings.database_url = os.environ["DATABASE_URL"]
    if os.environ.get("USE_MOCK_DATA"):
        settings.use_mock_data = os.environ["USE_MOCK_DATA"].lower() == "true"

    return settings
