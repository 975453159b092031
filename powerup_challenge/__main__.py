"""Entry point for challenge analysis"""
import json
import logging
import os
import sys
import traceback

from powerup_challenge.analyzer import ChallengeAnalyzer
from powerup_challenge.config import Settings
from powerup_challenge.models.analysis import ChallengeAnalysis
from powerup_challenge.models.power_up import DateRange
from powerup_challenge.services.hafah import HafahAPI
from powerup_challenge.services.hive import HiveAPI
from powerup_challenge.utils.dates import format_human
from powerup_challenge.utils.post_url import parse_post_url, build_peakd_url

logging.basicConfig(level=logging.INFO, format='%(message)s')
logger = logging.getLogger(__name__)

def log_summary(analysis: ChallengeAnalysis, date_range: DateRange) -> None:
    """Log a short human readable summary of the analysis"""
    logger.info(f"Window: {format_human(date_range.start_date)} - {format_human(date_range.end_date)}")
    logger.info(f"Total comments: {analysis.total_comments}")
    logger.info(f"Valid users: {len(analysis.valid_users)}")
    logger.info(f"Invalid users: {len(analysis.invalid_users)}")
    logger.info(f"Ignored accounts: {len(analysis.ignored_users)}")

    for user in analysis.valid_users:
        comments = f" ({user.comment_count} comments)" if (user.comment_count or 1) > 1 else ""
        logger.info(f"  @{user.name}: {user.total_power_up} HIVE{comments}")
    for user in analysis.invalid_users:
        logger.info(f"  @{user.name}: {user.reason}")

def run() -> None:
    """Analyze the configured challenge post and save the results."""
    try:
        settings = Settings()

        if not settings.POST_URL:
            raise ValueError("POST_URL setting is required")
        if not settings.START_DATE or not settings.END_DATE:
            raise ValueError("START_DATE and END_DATE settings are required")

        post = parse_post_url(settings.POST_URL)
        date_range = DateRange(settings.START_DATE, settings.END_DATE)
        logger.info(f"Analyzing challenge {build_peakd_url(post.author, post.permlink)}")

        analyzer = ChallengeAnalyzer(
            hive_api=HiveAPI(settings.HIVE_API_URL, timeout=settings.REQUEST_TIMEOUT),
            hafah_api=HafahAPI(settings.HAFAH_API_URL, timeout=settings.REQUEST_TIMEOUT)
        )
        analysis = analyzer.analyze(
            post.author,
            post.permlink,
            date_range,
            settings.MIN_POWER_UP,
            require_images=settings.REQUIRE_IMAGES,
            on_progress=lambda current, total: logger.info(f"Progress: {current}/{total}")
        )

        log_summary(analysis, date_range)

        # Save results
        os.makedirs(settings.OUTPUT_DIR, exist_ok=True)
        output_path = os.path.join(settings.OUTPUT_DIR, "results.json")
        with open(output_path, 'w') as f:
            json.dump(analysis.model_dump(), f, indent=2)

        logger.info(f"Results written to {output_path}")

    except Exception as e:
        logger.error(f"Error during challenge analysis: {e}")
        traceback.print_exc()
        sys.exit(1)

if __name__ == "__main__":
    run()
