"""Routing of target URLs to job-board APIs or the browser engine.

Known boards expose structured postings over public JSON APIs; each one is an
adapter with `from_url(url, timeout_ms)` and `fetch()` returning
`BoardPosting` objects. Adapters are registered by host hint:

  BOARD_SOURCES = [
    {"platform": "greenhouse", "host": "greenhouse.io",
     "module": "careerscraper.pagescan.sources.greenhouse_source",
     "class": "GreenhouseSource"},
    ...
  ]

Any other URL goes through the browser extraction engine.
"""
from __future__ import annotations
from typing import Callable, Dict, List, Optional, Protocol, runtime_checkable
from urllib.parse import urlparse
import importlib
import logging

from ..models import BoardPosting, BoardResponse, ExtractionResult
from ..settings import SETTINGS, Settings

logger = logging.getLogger("sources")

BROWSER_PLATFORM = "browser"
BROWSER_PLATFORM_LABEL = "Generic Scraper"

BOARD_SOURCES: List[Dict[str, str]] = [
    {"platform": "greenhouse", "host": "greenhouse.io",
     "module": "careerscraper.pagescan.sources.greenhouse_source", "class": "GreenhouseSource"},
    {"platform": "lever", "host": "lever.co",
     "module": "careerscraper.pagescan.sources.lever_source", "class": "LeverSource"},
]


class BoardError(Exception):
    def __init__(self, status: int, message: str):
        super().__init__(message)
        self.status = status
        self.message = message


class CompanyNotDetected(BoardError):
    def __init__(self, message: str):
        super().__init__(400, message)


@runtime_checkable
class BoardSource(Protocol):
    name: str
    def fetch(self) -> List[BoardPosting]:  # pragma: no cover - interface definition
        ...


def _hostname(url: str) -> str:
    return (urlparse(url).hostname or "").lower()


def _entry_for(url: str) -> Optional[Dict[str, str]]:
    host = _hostname(url)
    for entry in BOARD_SOURCES:
        if entry["host"] in host:
            return entry
    return None


def detect_platform(url: str) -> str:
    entry = _entry_for(url)
    return entry["platform"] if entry else BROWSER_PLATFORM


def load_source(entry: Dict[str, str], url: str, timeout_ms: int) -> BoardSource:
    mod = importlib.import_module(entry["module"])
    cls = getattr(mod, entry["class"])
    return cls.from_url(url, timeout_ms=timeout_ms)


def fetch_jobs(url: str, settings: Optional[Settings] = None,
               scraper: Optional[Callable[[str], ExtractionResult]] = None) -> BoardResponse:
    """Fetch listings for `url` from its board API, or scrape the rendered page."""
    settings = settings or SETTINGS
    parsed = urlparse(url or "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return BoardResponse(success=False, status_code=500, error=f"Invalid URL: {url}")
    entry = _entry_for(url)
    if entry is None:
        if scraper is None:
            from ..extractor import scrape as scraper
        logger.info(f"Using browser scraper for: {url}")
        result = scraper(url)
        if not result.success:
            return BoardResponse(success=False, status_code=500, error=result.error)
        return BoardResponse(success=True, platform=BROWSER_PLATFORM_LABEL, jobs=result.jobs)
    try:
        source = load_source(entry, url, settings.board_fetch_timeout_ms)
        logger.info(f"Fetching from {source.name} API for company {getattr(source, 'company_slug', '?')}")
        postings = source.fetch()
    except BoardError as e:
        logger.warning(f"{entry['platform']} fetch failed: {e.message}")
        return BoardResponse(success=False, status_code=e.status, error=e.message)
    except Exception as e:
        logger.exception(f"{entry['platform']} fetch crashed for {url}")
        return BoardResponse(success=False, status_code=500, error=str(e) or "Internal error")
    return BoardResponse(success=True, platform=source.name, jobs=postings)
