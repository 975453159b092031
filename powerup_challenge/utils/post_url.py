"""Parsing of Hive front-end post URLs (PeakD, Hive.blog, Ecency)"""
import re
from dataclasses import dataclass

from powerup_challenge.exceptions import InvalidPostUrlError

_ACCOUNT = r'([a-z0-9\-\.]+)'
_PERMLINK = r'([a-z0-9\-]+)'

POST_URL_PATTERNS = (
    # https://peakd.com/hive-123456/@author/permlink or https://peakd.com/spanish/@author/permlink
    re.compile(rf'^https?://peakd\.com/[^/]+/@{_ACCOUNT}/{_PERMLINK}$', re.IGNORECASE),
    re.compile(rf'^https?://peakd\.com/@{_ACCOUNT}/{_PERMLINK}$', re.IGNORECASE),
    re.compile(rf'^https?://hive\.blog/@{_ACCOUNT}/{_PERMLINK}$', re.IGNORECASE),
    re.compile(rf'^https?://ecency\.com/@{_ACCOUNT}/{_PERMLINK}$', re.IGNORECASE),
)

MIN_SEGMENT_LENGTH = 3


@dataclass(frozen=True)
class PostReference:
    """Author and permlink identifying a post"""
    author: str
    permlink: str


def parse_post_url(url: str) -> PostReference:
    """Extract author and permlink from a post URL"""
    if not url or not isinstance(url, str):
        raise InvalidPostUrlError("Empty or invalid URL")

    trimmed = url.strip()
    for pattern in POST_URL_PATTERNS:
        match = pattern.match(trimmed)
        if not match:
            continue

        author = match.group(1).lower()
        permlink = match.group(2).lower()

        if len(author) < MIN_SEGMENT_LENGTH:
            raise InvalidPostUrlError(f"Username must have at least {MIN_SEGMENT_LENGTH} characters")
        if len(permlink) < MIN_SEGMENT_LENGTH:
            raise InvalidPostUrlError(f"Permlink must have at least {MIN_SEGMENT_LENGTH} characters")

        return PostReference(author=author, permlink=permlink)

    raise InvalidPostUrlError("Unrecognized URL format. Use a PeakD, Hive.blog or Ecency URL")


def build_peakd_url(author: str, permlink: str) -> str:
    """Build the PeakD URL of a post"""
    return f"https://peakd.com/@{author.replace('@', '')}/{permlink}"
