"""Classification of challenge commenters into valid, invalid and ignored"""
import json
import logging
from typing import Any, Callable, Dict, List, Optional, Union
from decimal import Decimal

from powerup_challenge.config import IGNORED_ACCOUNTS
from powerup_challenge.eligibility import EligibilityResolver
from powerup_challenge.models.analysis import ChallengeAnalysis, User
from powerup_challenge.models.power_up import DateRange, PowerUpResult
from powerup_challenge.utils.dates import format_display
from powerup_challenge.utils.images import get_valid_images

logger = logging.getLogger(__name__)

REASON_METADATA_ERROR = "metadata parse error"
REASON_MISSING_IMAGES = "missing images"
REASON_NO_POWER_UP = "no qualifying power-up in range"

ProgressCallback = Callable[[int, int], None]


class MetadataParseError(ValueError):
    """Comment json_metadata that cannot be read"""
    pass


def parse_comment_metadata(raw: Any) -> Dict[str, Any]:
    """
    Read a comment's json_metadata.

    Empty metadata reads as {}. Valid JSON that is not an object carries no
    images and also reads as {}.
    """
    if raw is None or raw == '':
        return {}
    if isinstance(raw, dict):
        return raw

    try:
        metadata = json.loads(raw)
    except (TypeError, ValueError) as e:
        raise MetadataParseError(str(e)) from e

    return metadata if isinstance(metadata, dict) else {}


def merge_duplicate_users(users: List[User]) -> List[User]:
    """
    Consolidate repeated comments of the same author.

    The first record of an author is kept; later ones add their images
    (without duplicates), bump comment_count and can turn has_images on.
    """
    merged: Dict[str, User] = {}

    for user in users:
        existing = merged.get(user.name)
        if existing is None:
            merged[user.name] = user.model_copy(update={'comment_count': 1})
            continue

        existing.images = list(dict.fromkeys(existing.images + user.images))
        existing.comment_count = (existing.comment_count or 1) + 1
        existing.has_images = existing.has_images or user.has_images

    return list(merged.values())


class ParticipantClassifier:
    """Resolves every comment of a post against the challenge rules"""

    def __init__(self, resolver: EligibilityResolver, ignored_accounts=IGNORED_ACCOUNTS):
        self.resolver = resolver
        self.ignored_accounts = ignored_accounts

    def classify(self, comments: List[Dict[str, Any]], date_range: DateRange,
                 min_threshold: Union[Decimal, int, str], require_images: bool = False,
                 on_progress: Optional[ProgressCallback] = None) -> ChallengeAnalysis:
        """
        Partition commenters into valid, invalid and ignored users.

        Comments are resolved one at a time. API and network errors abort the
        whole run; unreadable metadata only invalidates its comment.
        """
        valid_users: List[User] = []
        invalid_users: List[User] = []
        ignored_users: List[str] = []
        results: Dict[str, PowerUpResult] = {}
        total = len(comments)

        logger.info(f"Analyzing {total} comments between {format_display(date_range.start_date)} "
                    f"and {format_display(date_range.end_date)}")

        for index, comment in enumerate(comments, start=1):
            author = comment.get('author') or ''

            if author.lower() in self.ignored_accounts:
                logger.info(f"{author} - Ignored account (bot/system)")
                ignored_users.append(author)
            else:
                user = self._classify_comment(comment, date_range, min_threshold, require_images, results)
                (valid_users if user.has_power_up else invalid_users).append(user)

            if on_progress:
                on_progress(index, total)

        analysis = ChallengeAnalysis(
            valid_users=merge_duplicate_users(valid_users),
            invalid_users=merge_duplicate_users(invalid_users),
            ignored_users=list(dict.fromkeys(ignored_users)),
            total_comments=total
        )

        logger.info(f"Analysis complete: {analysis.total_comments} comments, "
                    f"{len(analysis.valid_users)} valid, {len(analysis.invalid_users)} invalid, "
                    f"{len(analysis.ignored_users)} ignored")
        return analysis

    def _classify_comment(self, comment: Dict[str, Any], date_range: DateRange,
                          min_threshold: Union[Decimal, int, str], require_images: bool,
                          results: Dict[str, PowerUpResult]) -> User:
        author = comment.get('author') or ''

        try:
            metadata = parse_comment_metadata(comment.get('json_metadata'))
        except MetadataParseError as e:
            logger.warning(f"Could not parse metadata of {author}: {e}")
            return User(name=author, reason=REASON_METADATA_ERROR)

        valid_images = get_valid_images(metadata.get('image'))
        has_images = len(valid_images) > 0

        if require_images and not has_images:
            logger.info(f"{author} - No valid images in the comment")
            return User(name=author, reason=REASON_MISSING_IMAGES)

        if author not in results:
            results[author] = self.resolver.check_user(author, date_range, min_threshold)
        result = results[author]

        if not result.has_power_up:
            return User(
                name=author,
                images=valid_images,
                has_images=has_images,
                reason=REASON_NO_POWER_UP
            )

        logger.info(f"{author} - Meets every requirement")
        return User(
            name=author,
            images=valid_images,
            power_up_date=result.power_up_date,
            power_up_amount=result.power_up_amount,
            power_up_tx_id=result.power_up_tx_id,
            power_up_transactions=result.power_up_transactions,
            total_power_up=result.total_power_up,
            has_images=has_images,
            has_power_up=True
        )
