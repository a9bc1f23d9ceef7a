"""
Capture helpers.

Filters are captured from the same endpoints the marketplace tools
call from the browser.  `match_source` recognises those endpoints in
a request URL so a saved response can be tagged with its source, and
`fetch_payload` retrieves a response directly when the caller has the
credentials to do so.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from ..normalize.schema import Source

logger = logging.getLogger(__name__)

INTERCEPT_PATTERNS = (
    (Source.VTOOLS, "custom.v-tools.com/v3/services/filters"),
    (Source.SOUK, "api.souk.to/api/v1/matching_alert/web"),
)


def match_source(url: Optional[str]) -> Optional[Source]:
    """Return the source whose filter endpoint appears in ``url``."""
    if not url:
        return None
    for source, pattern in INTERCEPT_PATTERNS:
        if pattern in url:
            return source
    return None


def fetch_payload(url: str, headers: Optional[Dict[str, str]] = None, timeout: int = 30) -> Any:
    """Fetch a filter endpoint and return the decoded JSON body.

    Args:
        url: Full endpoint URL, including any query string.
        headers: Extra request headers, typically authorization.
        timeout: Request timeout in seconds.

    Raises:
        requests.HTTPError: If the endpoint answers with an error status.
        ValueError: If the body is not valid JSON.
    """
    logger.info("Fetching %s", url)
    resp = requests.get(url, headers=headers or {}, timeout=timeout)
    resp.raise_for_status()
    return resp.json()
