"""Main challenge analysis entry point"""
import logging
from decimal import Decimal
from typing import Optional, Union

from powerup_challenge.classifier import ParticipantClassifier, ProgressCallback
from powerup_challenge.config import DEFAULT_MIN_POWER_UP
from powerup_challenge.eligibility import EligibilityResolver
from powerup_challenge.models.analysis import ChallengeAnalysis
from powerup_challenge.models.power_up import DateRange
from powerup_challenge.scanner import PowerUpScanner
from powerup_challenge.services.hafah import HafahAPI
from powerup_challenge.services.hive import HiveAPI

logger = logging.getLogger(__name__)


class ChallengeAnalyzer:
    """Wires the content API, the history API and the classification rules"""

    def __init__(self, hive_api: Optional[HiveAPI] = None, hafah_api: Optional[HafahAPI] = None):
        """Initialize the analyzer, defaulting to the public API nodes"""
        self.hive_api = hive_api or HiveAPI()
        self.hafah_api = hafah_api or HafahAPI()
        self.scanner = PowerUpScanner(self.hafah_api)
        self.resolver = EligibilityResolver(self.scanner)
        self.classifier = ParticipantClassifier(self.resolver)

    def analyze(self, author: str, permlink: str, date_range: DateRange,
                min_power_up: Union[Decimal, int, str] = DEFAULT_MIN_POWER_UP,
                require_images: bool = False,
                on_progress: Optional[ProgressCallback] = None) -> ChallengeAnalysis:
        """
        Analyze the commenters of a challenge post.

        Raises:
            ApiError: If an upstream API answers with an error
            NetworkError: If an upstream API cannot be reached
        """
        try:
            comments = self.hive_api.get_content_replies(author, permlink)
            return self.classifier.classify(
                comments,
                date_range,
                min_power_up,
                require_images=require_images,
                on_progress=on_progress
            )
        except Exception as e:
            logger.error(f"Error analyzing @{author}/{permlink}: {e}")
            raise


def analyze(author: str, permlink: str, date_range: DateRange,
            min_power_up: Union[Decimal, int, str] = DEFAULT_MIN_POWER_UP,
            require_images: bool = False,
            on_progress: Optional[ProgressCallback] = None) -> ChallengeAnalysis:
    """Analyze a challenge post with the default API nodes"""
    return ChallengeAnalyzer().analyze(author, permlink, date_range, min_power_up, require_images, on_progress)
