"""Centralized settings with environment + runtime config overlay.
Provides typed accessors so timeouts and settle delays stay tunable instead of
being scattered through the extraction code as magic numbers.
"""
from __future__ import annotations
from pathlib import Path
import os, yaml
from dataclasses import dataclass, replace as _dc_replace
from typing import Tuple

_RUNTIME_CACHE: dict | None = None

CONFIG_DIR = Path(__file__).resolve().parent.parent / 'config'

ENV_PREFIX = 'CAREERSCRAPER_'

DEFAULT_USER_AGENT = (
    'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 '
    '(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36'
)

DEFAULT_BROWSER_ARGS = (
    '--no-sandbox',
    '--disable-setuid-sandbox',
    '--disable-dev-shm-usage',
    '--disable-accelerated-2d-canvas',
    '--disable-gpu',
)


def _load_runtime() -> dict:
    global _RUNTIME_CACHE
    if _RUNTIME_CACHE is None:
        cfg_file = CONFIG_DIR / 'runtime.yml'
        if cfg_file.exists():
            try:
                _RUNTIME_CACHE = yaml.safe_load(cfg_file.read_text(encoding='utf-8')) or {}
            except yaml.YAMLError:
                _RUNTIME_CACHE = {}
        else:
            _RUNTIME_CACHE = {}
    return _RUNTIME_CACHE


def _runtime_value(name: str, default):
    # runtime.yml keys are the env names without prefix, lower-cased
    return _load_runtime().get(name[len(ENV_PREFIX):].lower(), default)


def _env_int(name: str, default: int) -> int:
    v = os.getenv(name)
    if v is not None:
        try:
            return int(v)
        except ValueError:
            return default
    try:
        return int(_runtime_value(name, default))
    except (TypeError, ValueError):
        return default


def _env_float(name: str, default: float) -> float:
    v = os.getenv(name)
    if v is not None:
        try:
            return float(v)
        except ValueError:
            return default
    try:
        return float(_runtime_value(name, default))
    except (TypeError, ValueError):
        return default


def _env_str(name: str, default: str) -> str:
    v = os.getenv(name)
    if v is not None:
        return v
    return str(_runtime_value(name, default))


def _env_bool(name: str, default: bool) -> bool:
    v = os.getenv(name)
    if v is None:
        v = _runtime_value(name, default)
    if isinstance(v, bool):
        return v
    return str(v).strip().lower() in {'1', 'true', 'yes', 'on'}


def _env_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    v = os.getenv(name)
    if v is not None:
        return tuple(part.strip() for part in v.split(',') if part.strip())
    raw = _runtime_value(name, default)
    if isinstance(raw, str):
        return tuple(part.strip() for part in raw.split(',') if part.strip())
    return tuple(str(x) for x in raw)


@dataclass(frozen=True)
class Settings:
    navigation_timeout_ms: int
    probe_timeout_ms: int
    load_settle_ms: int
    probe_settle_ms: int
    scroll_settle_ms: int
    scroll_step: int
    scroll_interval_ms: int
    scroll_max_distance: int
    min_title_length: int
    viewport_width: int
    viewport_height: int
    user_agent: str
    headless: bool
    browser_args: Tuple[str, ...]
    fetch_timeout_ms: int
    board_fetch_timeout_ms: int

    def replace(self, **overrides) -> 'Settings':
        return _dc_replace(self, **overrides)


def load_settings() -> Settings:
    return Settings(
        navigation_timeout_ms=_env_int('CAREERSCRAPER_NAVIGATION_TIMEOUT_MS', 30000),
        probe_timeout_ms=_env_int('CAREERSCRAPER_PROBE_TIMEOUT_MS', 15000),
        load_settle_ms=_env_int('CAREERSCRAPER_LOAD_SETTLE_MS', 3000),
        probe_settle_ms=_env_int('CAREERSCRAPER_PROBE_SETTLE_MS', 3000),
        scroll_settle_ms=_env_int('CAREERSCRAPER_SCROLL_SETTLE_MS', 2000),
        scroll_step=_env_int('CAREERSCRAPER_SCROLL_STEP', 100),
        scroll_interval_ms=_env_int('CAREERSCRAPER_SCROLL_INTERVAL_MS', 100),
        scroll_max_distance=_env_int('CAREERSCRAPER_SCROLL_MAX_DISTANCE', 3000),
        min_title_length=_env_int('CAREERSCRAPER_MIN_TITLE_LENGTH', 3),
        viewport_width=_env_int('CAREERSCRAPER_VIEWPORT_WIDTH', 1280),
        viewport_height=_env_int('CAREERSCRAPER_VIEWPORT_HEIGHT', 800),
        user_agent=_env_str('CAREERSCRAPER_USER_AGENT', DEFAULT_USER_AGENT),
        headless=_env_bool('CAREERSCRAPER_HEADLESS', True),
        browser_args=_env_list('CAREERSCRAPER_BROWSER_ARGS', DEFAULT_BROWSER_ARGS),
        fetch_timeout_ms=_env_int('CAREERSCRAPER_FETCH_TIMEOUT_MS', 5000),
        board_fetch_timeout_ms=_env_int('CAREERSCRAPER_BOARD_FETCH_TIMEOUT_MS', 10000),
    )

SETTINGS = load_settings()
