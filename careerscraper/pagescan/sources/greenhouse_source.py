from __future__ import annotations
"""Greenhouse public board adapter.

Greenhouse boards live at boards.greenhouse.io/{slug} or
job-boards.greenhouse.io/{slug}; embedded boards pass the slug as
`?for={slug}`. Postings come from the public, unauthenticated API:

  https://boards-api.greenhouse.io/v1/boards/{slug}/jobs

Structure (simplified):
{
  "jobs": [
     {"id": 123, "title": "Data Engineer",
      "location": {"name": "Remote - US"},
      "absolute_url": "https://boards.greenhouse.io/acme/jobs/123", ...}
  ]
}

Fields mapped to BoardPosting:
  id       -> job['id']
  title    -> job['title']
  location -> job['location']['name'], "Remote" when absent
  url      -> job['absolute_url']
"""
from dataclasses import dataclass
from typing import List, Optional
from urllib.parse import urlparse, parse_qs
import json

from ..fetcher import fetch_with_timeout
from ..models import BoardPosting
from .base import BoardError, CompanyNotDetected

API_URL = "https://boards-api.greenhouse.io/v1/boards/{slug}/jobs"


def company_from_url(url: str) -> Optional[str]:
    parsed = urlparse(url)
    slug = (parse_qs(parsed.query).get('for') or [None])[0]
    if slug:
        return slug
    segments = [s for s in parsed.path.split('/') if s]
    if segments and segments[0] != 'embed':
        return segments[0]
    return None


def _map_job(j: dict) -> BoardPosting:
    loc = j.get("location")
    location = loc.get("name") if isinstance(loc, dict) else None
    return BoardPosting(
        id=j.get("id"),
        title=j.get("title") or "",
        location=location or "Remote",
        url=j.get("absolute_url"),
    )


@dataclass
class GreenhouseSource:
    company_slug: str
    timeout_ms: int = 10000
    name: str = "Greenhouse"

    @classmethod
    def from_url(cls, url: str, timeout_ms: int = 10000) -> "GreenhouseSource":
        slug = company_from_url(url)
        if not slug:
            raise CompanyNotDetected("Unable to detect company name")
        return cls(company_slug=slug, timeout_ms=timeout_ms)

    def fetch(self) -> List[BoardPosting]:
        result = fetch_with_timeout(API_URL.format(slug=self.company_slug), self.timeout_ms)
        if not result.success:
            raise BoardError(500, f"Failed to fetch jobs: {result.error}. Company \"{self.company_slug}\" may not have a public Greenhouse board.")
        try:
            data = json.loads(result.data or "")
        except json.JSONDecodeError as e:
            raise BoardError(500, "Failed to parse job data") from e
        jobs = (data.get("jobs") or []) if isinstance(data, dict) else []
        return [_map_job(j) for j in jobs if isinstance(j, dict) and j.get("id") is not None]
