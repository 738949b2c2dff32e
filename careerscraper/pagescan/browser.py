"""Browser automation boundary.

The engine needs eight things from a browser: launch, open a page, set the
viewport, set the user agent, navigate with a quiescence condition, evaluate
scripts returning plain data, wait for the first of several selectors, and
close. `BrowserDriver` names them; `PlaywrightDriver` provides them on top of
Playwright's sync API with one private Chromium instance per driver.
"""
from __future__ import annotations
from typing import Any, Optional, Protocol, Sequence, TYPE_CHECKING
import logging
import time

from .errors import (
    EvaluationFailure,
    LaunchFailure,
    NavigationError,
    NavigationTimeout,
    SelectorWaitTimeout,
)
from .settings import Settings

if TYPE_CHECKING:  # pragma: no cover
    from playwright.sync_api import Browser, Page, Playwright  # type: ignore

logger = logging.getLogger(__name__)

NETWORK_IDLE = 'networkidle'


class BrowserDriver(Protocol):
    def open_page(self, user_agent: Optional[str] = None) -> None: ...
    def set_viewport(self, width: int, height: int) -> None: ...
    def goto(self, url: str, wait_until: str, timeout_ms: int) -> None: ...
    def evaluate(self, script: str, arg: Any = None) -> Any: ...
    def wait_for_any(self, selectors: Sequence[str], timeout_ms: int) -> None: ...
    def pause(self, ms: int) -> None: ...
    def close(self) -> None: ...


class PlaywrightDriver:
    def __init__(self, playwright: 'Playwright', browser: 'Browser'):
        self._playwright = playwright
        self._browser = browser
        self._page: Optional['Page'] = None
        self._closed = False

    @classmethod
    def launch(cls, settings: Settings) -> 'PlaywrightDriver':
        # lazy import; replay and tests never load playwright
        from playwright.sync_api import sync_playwright, Error as PlaywrightError  # type: ignore
        try:
            pw = sync_playwright().start()
        except PlaywrightError as e:
            raise LaunchFailure(f"Failed to start Playwright: {e}") from e
        try:
            browser = pw.chromium.launch(headless=settings.headless, args=list(settings.browser_args))
        except PlaywrightError as e:
            pw.stop()
            raise LaunchFailure(f"Failed to launch browser: {e}") from e
        logger.debug(f"Launched chromium headless={settings.headless}")
        return cls(pw, browser)

    @property
    def page(self) -> 'Page':
        if self._page is None:
            raise EvaluationFailure('No page open')
        return self._page

    def open_page(self, user_agent: Optional[str] = None) -> None:
        from playwright.sync_api import Error as PlaywrightError  # type: ignore
        try:
            context = self._browser.new_context(user_agent=user_agent) if user_agent else self._browser.new_context()
            self._page = context.new_page()
        except PlaywrightError as e:
            raise LaunchFailure(f"Failed to open page: {e}") from e

    def set_viewport(self, width: int, height: int) -> None:
        self.page.set_viewport_size({'width': width, 'height': height})

    def goto(self, url: str, wait_until: str = NETWORK_IDLE, timeout_ms: int = 30000) -> None:
        from playwright.sync_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError  # type: ignore
        try:
            self.page.goto(url, wait_until=wait_until, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise NavigationTimeout(str(e).splitlines()[0] if str(e) else f"Navigation timeout of {timeout_ms} ms exceeded") from e
        except PlaywrightError as e:
            raise NavigationError(str(e).splitlines()[0] if str(e) else f"Navigation to {url} failed") from e

    def evaluate(self, script: str, arg: Any = None) -> Any:
        from playwright.sync_api import Error as PlaywrightError  # type: ignore
        try:
            if arg is None:
                return self.page.evaluate(script)
            return self.page.evaluate(script, arg)
        except PlaywrightError as e:
            raise EvaluationFailure(str(e).splitlines()[0] if str(e) else 'Page evaluation failed') from e

    def wait_for_any(self, selectors: Sequence[str], timeout_ms: int) -> None:
        from playwright.sync_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError  # type: ignore
        union = ', '.join(selectors)
        try:
            self.page.wait_for_selector(union, state='attached', timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise SelectorWaitTimeout(f"None of {len(selectors)} selectors appeared within {timeout_ms} ms") from e
        except PlaywrightError as e:
            raise EvaluationFailure(str(e).splitlines()[0] if str(e) else 'Selector wait failed') from e

    def pause(self, ms: int) -> None:
        if ms > 0:
            time.sleep(ms / 1000.0)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        try:
            self._browser.close()
        except Exception:
            logger.warning("Browser close failed", exc_info=True)
        try:
            self._playwright.stop()
        except Exception:
            logger.debug("Playwright stop failed", exc_info=True)
