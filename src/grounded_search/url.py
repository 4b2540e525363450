"""URL handling utilities."""

from __future__ import annotations

import logging
from urllib.parse import urlparse

logger = logging.getLogger(__name__)


def extract_domain(url: str) -> str:
    """Extract the display host name from a URL.

    Args:
        url: The URL to extract the domain from.

    Returns:
        The host name (without 'www.' prefix), or the URL itself if it has
        no host.
    """
    try:
        domain = urlparse(url).hostname
    except ValueError:
        return url
    if not domain:
        logger.debug(f"Could not get domain from url {url}")
        return url
    if domain.startswith("www."):
        domain = domain[4:]
    return domain


def is_absolute_url(url: str) -> bool:
    """Return True if *url* is a complete ``http``/``https`` URL with a host."""
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)
