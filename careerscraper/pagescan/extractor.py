"""Single-page listing extraction.

`scrape(url)` drives one private browser through load, settle, probe, scroll
and extraction, and always returns an `ExtractionResult`: nothing raised in
the pipeline escapes, and the browser is closed exactly once on every path.

Stages run strictly in order:

    IDLE -> BROWSER_LAUNCHING -> PAGE_LOADING -> SETTLING -> PROBING
         -> SCROLL_TRIGGERING -> PROFILE_DISPATCH -> EXTRACTING -> COMPLETED

PROBING only does work for profiles that define probe selectors, and a probe
timeout is tolerated.
"""
from __future__ import annotations
from enum import Enum
from typing import Callable, List, Optional
import logging
import time

from .browser import BrowserDriver, NETWORK_IDLE, PlaywrightDriver
from .dom import PageSnapshot, SNAPSHOT_SCRIPT
from .errors import NoListingsFound, ScrapeError, SelectorWaitTimeout
from .fields import extract_jobs
from .logging_config import log_event
from .models import ExtractionResult, JobRecord
from .profiles import Profile, classify
from .scroll import auto_scroll
from .settings import SETTINGS, Settings

logger = logging.getLogger(__name__)

Launcher = Callable[[Settings], BrowserDriver]


class Stage(str, Enum):
    IDLE = 'idle'
    BROWSER_LAUNCHING = 'browser_launching'
    PAGE_LOADING = 'page_loading'
    SETTLING = 'settling'
    PROBING = 'probing'
    SCROLL_TRIGGERING = 'scroll_triggering'
    PROFILE_DISPATCH = 'profile_dispatch'
    EXTRACTING = 'extracting'
    COMPLETED = 'completed'


class _Run:
    def __init__(self, url: str):
        self.url = url
        self.stage = Stage.IDLE

    def enter(self, stage: Stage, **fields):
        self.stage = stage
        logger.debug(f"[{stage.value}] {self.url}")
        log_event('scrape_stage', stage=stage.value, url=self.url, **fields)


def probe(driver: BrowserDriver, selectors, timeout_ms: int) -> bool:
    """Wait for any of `selectors`; a timeout is advisory and only logged."""
    if not selectors:
        return False
    try:
        driver.wait_for_any(list(selectors), timeout_ms)
        return True
    except SelectorWaitTimeout as e:
        logger.info(f"Initial wait failed, trying to extract anyway ({e})")
        log_event('warn', stage=Stage.PROBING.value, message='probe_timeout')
        return False


def take_snapshot(driver: BrowserDriver) -> PageSnapshot:
    return PageSnapshot.from_payload(driver.evaluate(SNAPSHOT_SCRIPT))


def _pipeline(run: _Run, driver: BrowserDriver, settings: Settings) -> List[JobRecord]:
    driver.open_page(user_agent=settings.user_agent)
    driver.set_viewport(settings.viewport_width, settings.viewport_height)

    run.enter(Stage.PAGE_LOADING)
    driver.goto(run.url, wait_until=NETWORK_IDLE, timeout_ms=settings.navigation_timeout_ms)

    run.enter(Stage.SETTLING)
    driver.pause(settings.load_settle_ms)

    profile: Profile = classify(run.url)
    run.enter(Stage.PROBING, profile=profile.name)
    if profile.probe_selectors:
        probe(driver, profile.probe_selectors, settings.probe_timeout_ms)
        driver.pause(settings.probe_settle_ms)

    run.enter(Stage.SCROLL_TRIGGERING)
    auto_scroll(driver, settings.scroll_step, settings.scroll_interval_ms, settings.scroll_max_distance)
    driver.pause(settings.scroll_settle_ms)

    run.enter(Stage.PROFILE_DISPATCH, profile=profile.name)
    logger.info(f"Using {profile.name} profile for {run.url}")
    snapshot = take_snapshot(driver)

    run.enter(Stage.EXTRACTING, profile=profile.name)
    return extract_jobs(snapshot, profile, settings.min_title_length)


def scrape(target_url: str, settings: Optional[Settings] = None, launcher: Optional[Launcher] = None) -> ExtractionResult:
    settings = settings or SETTINGS
    launcher = launcher or PlaywrightDriver.launch
    run = _Run(target_url)
    start = time.time()
    logger.info(f"Launching browser for: {target_url}")
    log_event('scrape_start', url=target_url)

    run.enter(Stage.BROWSER_LAUNCHING)
    try:
        driver = launcher(settings)
    except ScrapeError as e:
        return _finish(run, start, ExtractionResult.failure(str(e)))
    except Exception as e:
        logger.exception("Unexpected launch error")
        return _finish(run, start, ExtractionResult.failure(str(e)))

    try:
        jobs = _pipeline(run, driver, settings)
        if not jobs:
            raise NoListingsFound()
        result = ExtractionResult.ok(jobs)
    except ScrapeError as e:
        result = ExtractionResult.failure(str(e))
    except Exception as e:
        logger.exception(f"Unexpected error during {run.stage.value}")
        result = ExtractionResult.failure(str(e))
    finally:
        driver.close()
    return _finish(run, start, result)


def _finish(run: _Run, start: float, result: ExtractionResult) -> ExtractionResult:
    failed_at = run.stage.value
    run.enter(Stage.COMPLETED, success=result.success)
    elapsed = round(time.time() - start, 2)
    if result.success:
        logger.info(f"Successfully extracted {len(result.jobs or [])} jobs elapsed={elapsed}s")
        log_event('scrape_complete', url=run.url, jobs=len(result.jobs or []), elapsed_s=elapsed)
    else:
        logger.error(f"Scraping error at {failed_at}: {result.error}")
        log_event('error', stage=failed_at, url=run.url, message=result.error, elapsed_s=elapsed)
    return result


def extract_from_html(html: str, url: str, min_title_length: Optional[int] = None) -> ExtractionResult:
    """Replay the extraction engine on stored HTML (no browser)."""
    if min_title_length is None:
        min_title_length = SETTINGS.min_title_length
    try:
        snapshot = PageSnapshot.from_html(html, url)
        jobs = extract_jobs(snapshot, classify(url), min_title_length)
    except ScrapeError as e:
        return ExtractionResult.failure(str(e))
    except Exception as e:
        logger.exception(f"Unexpected error replaying {url}")
        return ExtractionResult.failure(str(e))
    if not jobs:
        return ExtractionResult.failure(NoListingsFound().args[0])
    return ExtractionResult.ok(jobs)
