"""Failure taxonomy for a single extraction run.

Everything raised inside the engine derives from `ScrapeError`; the
orchestrator turns these into a failed `ExtractionResult` at its boundary.
"""
from __future__ import annotations

NO_LISTINGS_MESSAGE = (
    'No job listings found. The page may require interaction or have a different structure.'
)


class ScrapeError(Exception):
    """Base extraction error."""


class LaunchFailure(ScrapeError):
    """Browser process could not be started."""


class NavigationError(ScrapeError):
    """Target page could not be loaded."""


class NavigationTimeout(NavigationError):
    """Page did not reach network idle within the navigation ceiling."""


class EvaluationFailure(ScrapeError):
    """An in-page script or DOM query failed."""


class SelectorWaitTimeout(ScrapeError):
    """None of the probe selectors appeared in time. Advisory only."""


class NoListingsFound(ScrapeError):
    def __init__(self, message: str = NO_LISTINGS_MESSAGE):
        super().__init__(message)
