"""Application configuration and environment settings"""
from datetime import datetime
from decimal import Decimal
from typing import Optional
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# HAfAH operation type id for transfer_to_vesting (power up)
TRANSFER_TO_VESTING_OP = 77

# Transaction history query settings
PAGE_SIZE = 100
DATA_SIZE_LIMIT = 200000
MAX_PAGES = 50
MARGIN_HOURS = 10  # Padding around the exact range for the coarse API filter

DEFAULT_MIN_POWER_UP = 10

# Bots and system accounts never take part in a challenge
IGNORED_ACCOUNTS = frozenset({
    "hivebuzz",
    "hive.blog",
    "peakd",
    "ecency",
    "blocktrades",
    "buildawhale",
    "appreciator",
    "curangel",
    "ocdb",
    "leo.voter",
    "steemcleaners",
    "spaminator",
    "cheetah",
})

VALID_IMAGE_EXTENSIONS = frozenset({
    ".jpg",
    ".jpeg",
    ".png",
    ".gif",
    ".webp",
    ".bmp",
    ".svg",
    ".avif",
    ".tiff",
    ".tif",
    ".ico",
})

# Media hosts whose URLs are images even without a file extension
TRUSTED_IMAGE_DOMAINS = frozenset({
    "cdn.liketu.com",
    "images.ecency.com",
    "images.hive.blog",
    "cdn.steemitimages.com",
    "files.peakd.com",
    "static.peakd.com",
})

class Settings(BaseSettings):
    """Runner settings loaded from environment variables"""
    # API endpoints
    HIVE_API_URL: str = Field("https://api.hive.blog", description="Hive JSON-RPC node")
    HAFAH_API_URL: str = Field("https://api.syncad.com/hafah-api", description="HAfAH REST API base URL")
    REQUEST_TIMEOUT: Optional[float] = Field(None, description="Per request timeout in seconds, None waits forever")

    # Challenge parameters
    POST_URL: Optional[str] = Field(None, description="peakd, hive.blog or ecency URL of the challenge post")
    START_DATE: Optional[datetime] = Field(None, description="Start of the challenge window (UTC)")
    END_DATE: Optional[datetime] = Field(None, description="End of the challenge window (UTC)")
    MIN_POWER_UP: Decimal = Field(Decimal(DEFAULT_MIN_POWER_UP), description="Minimum total HIVE powered up in the window")
    REQUIRE_IMAGES: bool = Field(False, description="Reject comments without a valid image")

    OUTPUT_DIR: str = Field("/output", description="Directory for output files")

    model_config = SettingsConfigDict(
        env_file='.env',
        env_file_encoding='utf-8',
        case_sensitive=True
    )
