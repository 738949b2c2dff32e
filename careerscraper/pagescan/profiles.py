"""Extraction profiles and the URL classifier that picks one.

A profile is pure data: the ordered selector cascade used to discover
candidate elements plus the rules that turn a candidate into a record.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Pattern, Tuple
import re


@dataclass(frozen=True)
class SelectorStrategy:
    selector: str
    # When set, each match is replaced by its first descendant matching this
    # selector (matches without one are dropped).
    descend: Optional[str] = None

    def describe(self) -> str:
        if self.descend:
            return f"{self.selector} >> {self.descend}"
        return self.selector


@dataclass(frozen=True)
class Profile:
    name: str
    strategies: Tuple[SelectorStrategy, ...]
    title_selectors: Tuple[str, ...] = ()
    collapse_whitespace: bool = False
    # Location lookup scope: closest ancestor matching one of these, tried in
    # order. Empty means the candidate itself is the scope.
    container_selectors: Tuple[str, ...] = ()
    location_selectors: Tuple[str, ...] = ()
    location_pattern: Optional[Pattern[str]] = None
    probe_selectors: Tuple[str, ...] = ()
    page_url_fallback: bool = True
    # True: ids follow accepted records. False: ids follow candidate position.
    number_accepted_only: bool = False


# "City, ST" or "City, Region". US-centric: non-US layouts are often missed.
CITY_REGION_RGX = re.compile(r"([A-Z][a-z]+,\s*[A-Z]{2})|([A-Z][a-z\s]+,\s*[A-Z][a-z\s]+)")

WORKDAY_URL_HINTS = ('myworkdayjobs.com', 'wd3.', 'wd5.')

WORKDAY = Profile(
    name='workday',
    strategies=(
        SelectorStrategy('a[data-automation-id="jobTitle"]'),
        SelectorStrategy('a[href*="/job/"]'),
        SelectorStrategy('a[aria-label*="job"]'),
        SelectorStrategy('li[role="listitem"], li[class*="css"]', descend='a'),
    ),
    collapse_whitespace=True,
    container_selectors=('li', '[role="listitem"]'),
    location_selectors=(
        '[data-automation-id*="location"]',
        'dd',
        '[class*="location"]',
    ),
    location_pattern=CITY_REGION_RGX,
    probe_selectors=(
        '[data-automation-id="jobTitle"]',
        'a[aria-label*="job"]',
        '[class*="css"][role="listitem"]',
        'li a[href*="job"]',
    ),
    page_url_fallback=False,
    number_accepted_only=True,
)

GENERIC = Profile(
    name='generic',
    strategies=tuple(SelectorStrategy(s) for s in (
        'a[href*="/job"]',
        'a[href*="/position"]',
        'a[href*="/career"]',
        '[data-job-id]',
        '.job-listing',
        '.job-item',
        '.opening',
        '[class*="job"]',
        '[class*="position"]',
        '[class*="career"]',
    )),
    title_selectors=('h2', 'h3', 'h4', '.title', '[class*="title"]', 'a'),
    location_selectors=(
        '.location',
        '[class*="location"]',
        '[class*="office"]',
        '[data-location]',
    ),
)


def is_workday(url: str) -> bool:
    return any(hint in (url or '') for hint in WORKDAY_URL_HINTS)


def classify(url: str) -> Profile:
    return WORKDAY if is_workday(url) else GENERIC
