"""Career page scraper public API."""
from importlib import metadata as _metadata

try:
    __version__ = _metadata.version("careerscraper")
except _metadata.PackageNotFoundError:  # fallback when not installed
    __version__ = "0.1.0"

from .pagescan.extractor import scrape, extract_from_html  # re-export
from .pagescan.models import ExtractionResult, JobRecord  # re-export

__all__ = ["__version__", "scrape", "extract_from_html", "ExtractionResult", "JobRecord"]
