from pathlib import Path
import sys
import json
import argparse
import logging

# Ensure project root is on path when executing this file directly
ROOT = Path(__file__).resolve().parent.parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from careerscraper.pagescan.extractor import extract_from_html, scrape
from careerscraper.pagescan.logging_config import setup_logging, log_event
from careerscraper.pagescan.models import BoardResponse
from careerscraper.pagescan.settings import SETTINGS
from careerscraper.pagescan.sources.base import BROWSER_PLATFORM_LABEL, fetch_jobs


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description='Extract job listings from a career page')
    ap.add_argument('url', help='Career page URL (also used to resolve links with --html)')
    ap.add_argument('--html', type=Path, help='Replay extraction on a saved HTML file instead of opening a browser')
    ap.add_argument('--debug', action='store_true', help='Enable debug logging')
    ap.add_argument('--headed', action='store_true', help='Show the browser window')
    ap.add_argument('--json', action='store_true', help='Print the JSON payload instead of one line per job')
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(debug=args.debug)
    logger = logging.getLogger('run_scrape')
    if args.html:
        html = args.html.read_text(encoding='utf-8', errors='replace')
        result = extract_from_html(html, args.url)
        if result.success:
            response = BoardResponse(success=True, platform=BROWSER_PLATFORM_LABEL, jobs=result.jobs)
        else:
            response = BoardResponse(success=False, status_code=500, error=result.error)
    else:
        settings = SETTINGS.replace(headless=not args.headed) if args.headed else SETTINGS
        response = fetch_jobs(args.url, settings=settings, scraper=lambda u: scrape(u, settings=settings))
    log_event('cli_run', url=args.url, success=response.success, jobs=len(response.jobs or []))
    if args.json:
        print(json.dumps(response.to_payload(), indent=2, ensure_ascii=False))
    elif response.success:
        for job in response.jobs or []:
            print(f"{job.id}\t{job.title}\t{job.location}\t{job.url}")
        logger.info(f"{response.platform}: {len(response.jobs or [])} jobs")
    else:
        logger.error(response.error)
    return 0 if response.success else 1


if __name__ == '__main__':
    sys.exit(main())
