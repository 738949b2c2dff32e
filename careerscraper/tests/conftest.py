"""Global pytest fixtures.
 - Sets env vars to disable logging side effects.
 - Provides an in-memory browser driver serving stored HTML, recording every
   call so tests can assert on navigation, waits, scrolls and cleanup.
"""
from __future__ import annotations
import os
import sys
import pathlib
import pytest

os.environ.setdefault('CAREERSCRAPER_DISABLE_FILE_LOGS', '1')
os.environ.setdefault('CAREERSCRAPER_DISABLE_EVENTS', '1')

ROOT = pathlib.Path(__file__).resolve().parents[2]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from careerscraper.pagescan.dom import SNAPSHOT_SCRIPT
from careerscraper.pagescan.errors import EvaluationFailure, NavigationTimeout, SelectorWaitTimeout
from careerscraper.pagescan.scroll import SCROLL_STEP_SCRIPT
from careerscraper.pagescan.settings import SETTINGS


class FakeDriver:
    def __init__(self, html: str = '<html><body></body></html>', url: str | None = None,
                 scroll_height: int = 1200, navigation_error: Exception | None = None,
                 snapshot_error: Exception | None = None, probe_hits: bool = False):
        self.html = html
        self.url = url
        self.scroll_height = scroll_height
        self.navigation_error = navigation_error
        self.snapshot_error = snapshot_error
        self.probe_hits = probe_hits
        self.user_agent = None
        self.viewport = None
        self.visits = []
        self.pauses = []
        self.probes = []
        self.scroll_steps = 0
        self.snapshots = 0
        self.close_calls = 0

    def open_page(self, user_agent=None):
        self.user_agent = user_agent

    def set_viewport(self, width, height):
        self.viewport = (width, height)

    def goto(self, url, wait_until, timeout_ms):
        self.visits.append((url, wait_until, timeout_ms))
        if self.url is None:
            self.url = url
        if self.navigation_error is not None:
            raise self.navigation_error

    def evaluate(self, script, arg=None):
        if script == SCROLL_STEP_SCRIPT:
            self.scroll_steps += 1
            return self.scroll_height
        if script == SNAPSHOT_SCRIPT:
            self.snapshots += 1
            if self.snapshot_error is not None:
                raise self.snapshot_error
            return {'html': self.html, 'url': self.url, 'baseUrl': self.url}
        raise EvaluationFailure(f'unexpected script: {script[:40]}')

    def wait_for_any(self, selectors, timeout_ms):
        self.probes.append((tuple(selectors), timeout_ms))
        if not self.probe_hits:
            raise SelectorWaitTimeout('probe timed out')

    def pause(self, ms):
        self.pauses.append(ms)

    def close(self):
        self.close_calls += 1


@pytest.fixture
def fast_settings():
    return SETTINGS.replace(load_settle_ms=0, probe_settle_ms=0, scroll_settle_ms=0, scroll_interval_ms=0)


@pytest.fixture
def make_driver():
    created = []

    def _make(*args, **kwargs):
        driver = FakeDriver(*args, **kwargs)
        created.append(driver)
        return driver
    _make.created = created
    return _make


@pytest.fixture
def timeout_error():
    return NavigationTimeout('Timeout 30000ms exceeded.')
