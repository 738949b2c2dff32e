from __future__ import annotations
"""Plain HTTP text fetch with a hard timeout.

Used for vendor board APIs and any page that does not need a browser. The
result is always a `FetchResult`; transport problems are reported, not raised.
"""
from typing import Optional
import logging
import httpx

from .models import FetchResult
from .settings import SETTINGS

logger = logging.getLogger(__name__)

FETCH_USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36'


def fetch_with_timeout(url: str, timeout_ms: Optional[int] = None, client: Optional[httpx.Client] = None) -> FetchResult:
    if timeout_ms is None:
        timeout_ms = SETTINGS.fetch_timeout_ms
    timeout = httpx.Timeout(timeout_ms / 1000.0)
    close_client = False
    if client is None:
        client = httpx.Client(timeout=timeout, headers={'User-Agent': FETCH_USER_AGENT}, follow_redirects=True)
        close_client = True
    try:
        resp = client.get(url, timeout=timeout)
    except httpx.TimeoutException:
        logger.warning(f"Fetch timed out after {timeout_ms}ms: {url}")
        return FetchResult(success=False, error='Request timed out')
    except httpx.HTTPError as e:
        logger.warning(f"Fetch failed for {url}: {e}")
        return FetchResult(success=False, error=str(e) or 'Unknown error')
    finally:
        if close_client:
            client.close()
    if resp.status_code < 200 or resp.status_code >= 300:
        return FetchResult(success=False, error=f"HTTP {resp.status_code}: {resp.reason_phrase}")
    return FetchResult(success=True, data=resp.text)
