"""Logging setup for the scraper.

Two sinks: a human readable rotating log (`scrape.log`) and an append-only
JSON-lines event stream (`scrape.events.jsonl`) with one record per stage
transition, cascade winner and outcome. Both live under `logs/` next to the
package unless CAREERSCRAPER_LOG_DIR points elsewhere, and each can be turned
off with CAREERSCRAPER_DISABLE_FILE_LOGS / CAREERSCRAPER_DISABLE_EVENTS
(checked per call, so tests can flip them with monkeypatch).
"""
from __future__ import annotations
import json
import logging
import os
import threading
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path

DEFAULT_LOG_DIR = Path(__file__).resolve().parent.parent / 'logs'
LOG_FILE_NAME = 'scrape.log'
EVENTS_FILE_NAME = 'scrape.events.jsonl'

_FILE_FORMAT = '%(asctime)s %(levelname)s %(name)s %(message)s'
_CONSOLE_FORMAT = '%(levelname)s %(message)s'

# concurrent requests share one events file
_EVENTS_LOCK = threading.Lock()


def log_dir() -> Path:
    override = os.getenv('CAREERSCRAPER_LOG_DIR')
    return Path(override) if override else DEFAULT_LOG_DIR


def _flag(name: str) -> bool:
    return os.getenv(name, '').strip().lower() not in ('', '0', 'false', 'no')


def _file_handler(directory: Path) -> logging.Handler:
    directory.mkdir(parents=True, exist_ok=True)
    fh = RotatingFileHandler(directory / LOG_FILE_NAME, maxBytes=1_000_000, backupCount=5, encoding='utf-8')
    fh.setFormatter(logging.Formatter(_FILE_FORMAT))
    return fh


def _console_handler(level: int) -> logging.Handler:
    ch = logging.StreamHandler()
    ch.setFormatter(logging.Formatter(_CONSOLE_FORMAT))
    ch.setLevel(level)
    return ch


def setup_logging(debug: bool = False):
    root = logging.getLogger()
    if root.handlers:
        return
    level = logging.DEBUG if debug else logging.INFO
    root.setLevel(level)
    if not _flag('CAREERSCRAPER_DISABLE_FILE_LOGS'):
        root.addHandler(_file_handler(log_dir()))
    root.addHandler(_console_handler(level))
    logging.getLogger('playwright').setLevel(logging.WARNING)
    logging.getLogger('httpx').setLevel(logging.WARNING)


def log_event(event: str, **fields):
    """Append a structured JSON event line; never raises on I/O problems."""
    if _flag('CAREERSCRAPER_DISABLE_EVENTS'):
        return
    rec = {'ts': datetime.now(timezone.utc).isoformat(timespec='seconds'), 'event': event}
    rec.update(fields)
    line = json.dumps(rec, ensure_ascii=False, default=str) + '\n'
    directory = log_dir()
    try:
        directory.mkdir(parents=True, exist_ok=True)
        with _EVENTS_LOCK, (directory / EVENTS_FILE_NAME).open('a', encoding='utf-8') as f:
            f.write(line)
    except OSError:
        logging.getLogger(__name__).debug('Failed to write structured log line', exc_info=True)
