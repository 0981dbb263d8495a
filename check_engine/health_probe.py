import logging
from typing import Optional

import requests

logger = logging.getLogger(__name__)


def probe(url: str, timeout: float) -> Optional[int]:
    """GET url without following redirects; return the status code, or None if unreachable."""
    try:
        response = requests.get(url, timeout=timeout, allow_redirects=False)
    except requests.RequestException as e:
        logger.info(f"Probe of {url} failed: {e}")
        return None
    logger.debug(f"Probe of {url} returned {response.status_code}")
    return response.status_code
