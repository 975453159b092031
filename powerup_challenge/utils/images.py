"""Image URL validation for comment attachments"""
import logging
from typing import Any, List
from urllib.parse import urlparse

from powerup_challenge.config import VALID_IMAGE_EXTENSIONS, TRUSTED_IMAGE_DOMAINS

logger = logging.getLogger(__name__)


def is_valid_image_url(url: str) -> bool:
    """
    Check whether a URL references an image.

    Trusted media hosts are accepted whatever the path looks like; any other
    host needs a recognized image extension. Malformed URLs are rejected,
    never raised.
    """
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except (ValueError, TypeError, AttributeError) as e:
        logger.warning(f"Invalid URL: {url} ({e})")
        return False

    if not parsed.scheme or not hostname:
        return False

    if hostname.lower() in TRUSTED_IMAGE_DOMAINS:
        return True

    path = parsed.path.lower()
    dot_index = path.rfind('.')
    if dot_index == -1:
        return False

    return path[dot_index:] in VALID_IMAGE_EXTENSIONS


def get_valid_images(images: Any) -> List[str]:
    """Filter a metadata image list down to valid image URLs, keeping order"""
    if not isinstance(images, list):
        return []

    valid_images = []
    for image in images:
        if not isinstance(image, str) or not image.strip():
            continue

        if is_valid_image_url(image.strip()):
            logger.debug(f"Valid image: {image}")
            valid_images.append(image)
        else:
            logger.info(f"Discarded invalid image: {image}")

    return valid_images
