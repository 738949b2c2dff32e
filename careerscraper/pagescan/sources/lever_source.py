from __future__ import annotations
"""Lever public postings adapter.

Boards live at jobs.lever.co/{slug}; postings come from
https://api.lever.co/v0/postings/{slug} as a JSON list.
"""
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse
import json

from ..fetcher import fetch_with_timeout
from ..models import BoardPosting
from .base import BoardError, CompanyNotDetected

API_URL = "https://api.lever.co/v0/postings/{slug}"


def company_from_url(url: str) -> Optional[str]:
    segments = [s for s in urlparse(url).path.split('/') if s]
    return segments[0] if segments else None


@dataclass
class LeverSource:
    company_slug: str
    timeout_ms: int = 10000
    name: str = "Lever"

    @classmethod
    def from_url(cls, url: str, timeout_ms: int = 10000) -> "LeverSource":
        slug = company_from_url(url)
        if not slug:
            raise CompanyNotDetected("Unable to detect company name from Lever URL")
        return cls(company_slug=slug, timeout_ms=timeout_ms)

    def fetch(self) -> List[BoardPosting]:
        result = fetch_with_timeout(API_URL.format(slug=self.company_slug), self.timeout_ms)
        if not result.success:
            raise BoardError(500, f"Failed to fetch jobs: {result.error}")
        try:
            postings = json.loads(result.data or "")
        except json.JSONDecodeError as e:
            raise BoardError(500, "Failed to parse job data") from e
        if not isinstance(postings, list):
            raise BoardError(500, "Failed to parse job data")
        items: List[BoardPosting] = []
        for p in postings:
            if not isinstance(p, dict) or p.get("id") is None:
                continue
            categories = p.get("categories") or {}
            location = categories.get("location") if isinstance(categories, dict) else None
            items.append(BoardPosting(
                id=p["id"],
                title=p.get("text") or "",
                location=location or "Remote",
                url=p.get("hostedUrl"),
            ))
        return items
