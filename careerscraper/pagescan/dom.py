"""Serializable view of a rendered page.

The browser hands back plain data (outer HTML, location and base URI); all
selector work then runs host-side on a BeautifulSoup tree. Queries behave like
their DOM counterparts: `select` returns document order, `text` mirrors
`textContent` and `href` mirrors the anchor's resolved `href` property.
"""
from __future__ import annotations
from typing import Any, Dict, List, Optional
from urllib.parse import urljoin

import soupsieve
from bs4 import BeautifulSoup, Tag

from .errors import EvaluationFailure

# Runs inside the page; must only return JSON-serializable values.
SNAPSHOT_SCRIPT = """() => ({
    html: document.documentElement ? document.documentElement.outerHTML : '',
    url: window.location.href,
    baseUrl: document.baseURI
})"""

# Parsed into real elements by html.parser, but never matched by querySelectorAll
# in a scripting browser: template content is inert and noscript is raw text.
INERT_TAGS = ['template', 'noscript']


class PageSnapshot:
    def __init__(self, html: str, url: str, base_url: Optional[str] = None):
        self.url = url
        self.base_url = base_url or url
        self.soup = BeautifulSoup(html or '', 'html.parser')
        inert = self.soup.find(INERT_TAGS)
        while inert is not None:
            inert.decompose()
            inert = self.soup.find(INERT_TAGS)

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> 'PageSnapshot':
        if not isinstance(payload, dict) or 'html' not in payload:
            raise EvaluationFailure('Page snapshot script returned no document')
        return cls(payload.get('html') or '', payload.get('url') or '', payload.get('baseUrl'))

    @classmethod
    def from_html(cls, html: str, url: str) -> 'PageSnapshot':
        """Snapshot of stored HTML; honours a <base href> like the browser would."""
        snap = cls(html, url)
        base = snap.soup.find('base', href=True)
        if base is not None:
            snap.base_url = urljoin(url, base['href'])
        return snap

    def select(self, selector: str, scope: Optional[Tag] = None) -> List[Tag]:
        root = self.soup if scope is None else scope
        try:
            return list(root.select(selector))
        except soupsieve.SelectorSyntaxError as e:
            raise EvaluationFailure(f"Invalid selector '{selector}': {e}") from e

    def select_one(self, selector: str, scope: Optional[Tag] = None) -> Optional[Tag]:
        root = self.soup if scope is None else scope
        try:
            return root.select_one(selector)
        except soupsieve.SelectorSyntaxError as e:
            raise EvaluationFailure(f"Invalid selector '{selector}': {e}") from e

    @staticmethod
    def closest(node: Tag, selector: str) -> Optional[Tag]:
        try:
            return soupsieve.closest(selector, node)
        except soupsieve.SelectorSyntaxError as e:
            raise EvaluationFailure(f"Invalid selector '{selector}': {e}") from e

    @staticmethod
    def text(node: Optional[Tag]) -> str:
        if node is None:
            return ''
        return node.get_text()

    @staticmethod
    def is_anchor(node: Tag) -> bool:
        return (node.name or '').lower() == 'a'

    def href(self, node: Tag) -> str:
        raw = node.get('href')
        if raw is None:
            return ''
        raw = raw.strip()
        try:
            return urljoin(self.base_url, raw)
        except ValueError:
            # unparseable (e.g. broken IPv6 host); the DOM property keeps the raw value
            return raw
