import pytest
from playwright.sync_api import Error as PlaywrightError, TimeoutError as PlaywrightTimeoutError

from careerscraper.pagescan.browser import PlaywrightDriver
from careerscraper.pagescan.errors import (
    EvaluationFailure,
    NavigationError,
    NavigationTimeout,
    SelectorWaitTimeout,
)


class StubPage:
    def __init__(self, error=None):
        self.error = error
        self.calls = []
    def goto(self, url, wait_until=None, timeout=None):
        self.calls.append(('goto', url, wait_until, timeout))
        if self.error:
            raise self.error
    def evaluate(self, script, *args):
        if self.error:
            raise self.error
        return {'args': args}
    def wait_for_selector(self, selector, state=None, timeout=None):
        self.calls.append(('wait', selector, state, timeout))
        if self.error:
            raise self.error
    def set_viewport_size(self, size):
        self.calls.append(('viewport', size))


class StubContext:
    def __init__(self, page):
        self.page = page
    def new_page(self):
        return self.page


class StubBrowser:
    def __init__(self, page):
        self.page = page
        self.close_calls = 0
        self.context_kwargs = None
    def new_context(self, **kwargs):
        self.context_kwargs = kwargs
        return StubContext(self.page)
    def close(self):
        self.close_calls += 1


class StubPlaywright:
    def __init__(self):
        self.stop_calls = 0
    def stop(self):
        self.stop_calls += 1


def _driver(error=None):
    page = StubPage(error)
    browser = StubBrowser(page)
    pw = StubPlaywright()
    driver = PlaywrightDriver(pw, browser)
    driver.open_page(user_agent='UA/1.0')
    return driver, page, browser, pw


def test_open_page_uses_user_agent_and_viewport():
    driver, page, browser, _ = _driver()
    driver.set_viewport(1280, 800)
    assert browser.context_kwargs == {'user_agent': 'UA/1.0'}
    assert page.calls == [('viewport', {'width': 1280, 'height': 800})]


def test_close_is_idempotent():
    driver, _, browser, pw = _driver()
    driver.close()
    driver.close()
    assert browser.close_calls == 1
    assert pw.stop_calls == 1


def test_goto_timeout_translated():
    driver, page, _, _ = _driver(PlaywrightTimeoutError('Timeout 30000ms exceeded.\n=== logs ==='))
    with pytest.raises(NavigationTimeout, match='Timeout 30000ms exceeded.'):
        driver.goto('https://example.com', 'networkidle', 30000)
    assert page.calls[0] == ('goto', 'https://example.com', 'networkidle', 30000)


def test_goto_other_error_translated():
    driver, _, _, _ = _driver(PlaywrightError('net::ERR_NAME_NOT_RESOLVED'))
    with pytest.raises(NavigationError) as exc:
        driver.goto('https://nope.invalid', 'networkidle', 30000)
    assert not isinstance(exc.value, NavigationTimeout)


def test_evaluate_error_translated():
    driver, _, _, _ = _driver(PlaywrightError('ReferenceError: foo is not defined'))
    with pytest.raises(EvaluationFailure, match='ReferenceError'):
        driver.evaluate('() => foo')


def test_evaluate_passes_argument():
    driver, _, _, _ = _driver()
    assert driver.evaluate('(d) => d', 100) == {'args': (100,)}
    assert driver.evaluate('() => 1') == {'args': ()}


def test_wait_for_any_uses_selector_union():
    driver, page, _, _ = _driver(PlaywrightTimeoutError('Timeout 15000ms exceeded.'))
    with pytest.raises(SelectorWaitTimeout):
        driver.wait_for_any(['a.one', 'li a[href*="job"]'], 15000)
    assert page.calls == [('wait', 'a.one, li a[href*="job"]', 'attached', 15000)]
