from __future__ import annotations
from typing import List
import logging
import re

from bs4 import Tag

from .cascade import discover
from .dom import PageSnapshot
from .logging_config import log_event
from .models import JobRecord, LOCATION_NOT_SPECIFIED
from .profiles import Profile

logger = logging.getLogger(__name__)

_WS_RGX = re.compile(r"\s+")


def normalize_text(text: str, collapse: bool = False) -> str:
    if collapse:
        return _WS_RGX.sub(' ', text or '').strip()
    return (text or '').strip()


def resolve_title(snapshot: PageSnapshot, node: Tag, profile: Profile) -> str:
    # only the first match per selector is considered, as with querySelector
    for sel in profile.title_selectors:
        el = snapshot.select_one(sel, scope=node)
        if el is None:
            continue
        txt = normalize_text(snapshot.text(el), profile.collapse_whitespace)
        if txt:
            return txt
    if snapshot.is_anchor(node):
        return normalize_text(snapshot.text(node), profile.collapse_whitespace)
    return ''


def _location_scope(snapshot: PageSnapshot, node: Tag, profile: Profile):
    if not profile.container_selectors:
        return node
    for sel in profile.container_selectors:
        container = snapshot.closest(node, sel)
        if container is not None:
            return container
    return None


def resolve_location(snapshot: PageSnapshot, node: Tag, profile: Profile) -> str:
    scope = _location_scope(snapshot, node, profile)
    if scope is None:
        return LOCATION_NOT_SPECIFIED
    for sel in profile.location_selectors:
        el = snapshot.select_one(sel, scope=scope)
        if el is None:
            continue
        txt = normalize_text(snapshot.text(el))
        if txt:
            return txt
    if profile.location_pattern is not None:
        m = profile.location_pattern.search(snapshot.text(scope))
        if m:
            loc = normalize_text(m.group(0))
            if loc:
                return loc
    return LOCATION_NOT_SPECIFIED


def resolve_url(snapshot: PageSnapshot, node: Tag, profile: Profile) -> str:
    if snapshot.is_anchor(node):
        url = snapshot.href(node)
    else:
        link = snapshot.select_one('a', scope=node)
        url = snapshot.href(link) if link is not None else ''
    if not url and profile.page_url_fallback:
        url = snapshot.url
    return url


def extract_jobs(snapshot: PageSnapshot, profile: Profile, min_title_length: int = 3) -> List[JobRecord]:
    """Run the profile's cascade on a snapshot and build accepted records.

    A candidate is kept only when its title is longer than `min_title_length`
    and it resolves to a non-empty URL. Rejections are only counted.
    """
    winner, candidates = discover(snapshot, profile)
    jobs: List[JobRecord] = []
    rejected = 0
    for position, node in enumerate(candidates, start=1):
        title = resolve_title(snapshot, node, profile)
        url = resolve_url(snapshot, node, profile)
        if len(title) <= min_title_length or not url:
            rejected += 1
            continue
        job_id = len(jobs) + 1 if profile.number_accepted_only else position
        jobs.append(JobRecord(
            id=job_id,
            title=title,
            location=resolve_location(snapshot, node, profile),
            url=url,
        ))
    logger.info(f"[{profile.name}] accepted={len(jobs)} rejected={rejected} candidates={len(candidates)}")
    log_event('fields_extracted', profile=profile.name,
              strategy=winner.describe() if winner else None,
              candidates=len(candidates), accepted=len(jobs), rejected=rejected)
    return jobs
