from __future__ import annotations
import logging

from .browser import BrowserDriver
from .errors import ScrapeError

logger = logging.getLogger(__name__)

# Reads the height before scrolling so growth caused by this step is seen next tick.
SCROLL_STEP_SCRIPT = """(distance) => {
    const height = document.body ? document.body.scrollHeight : 0;
    window.scrollBy(0, distance);
    return height;
}"""


def auto_scroll(driver: BrowserDriver, step: int = 100, interval_ms: int = 100, max_distance: int = 3000) -> int:
    """Scroll down in fixed steps until the page bottom or the distance cap.

    The cap bounds infinite-scroll pages whose height keeps growing. Driver
    errors end the scroll early; they are logged, never raised.
    Returns the distance scrolled.
    """
    total = 0
    try:
        while True:
            height = driver.evaluate(SCROLL_STEP_SCRIPT, step)
            total += step
            try:
                height = int(height or 0)
            except (TypeError, ValueError):
                height = 0
            if total >= height or total >= max_distance:
                break
            driver.pause(interval_ms)
    except ScrapeError as e:
        logger.warning(f"Auto-scroll stopped after {total}px: {e}")
    logger.debug(f"Auto-scroll finished distance={total}")
    return total
