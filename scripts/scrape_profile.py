"""
Script to scrape one or more public creator profiles from the command line.

Useful for checking that the extraction strategies still match the live
profile pages.  Settings are read from the same ``SCRAPER_*`` environment
variables the API uses.  Run it from the repository root with:

  python scripts/scrape_profile.py natgeo

Each result is printed as a JSON object.  The exit status is 1 if any
profile could not be scraped.
"""

from __future__ import annotations

import argparse
import json
import os
import sys
from typing import List, Optional

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from profile_acquisition import InstagramScraper, ScraperSettings  # noqa: E402
from profile_acquisition.logging_config import setup_logging  # noqa: E402


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Scrape public creator profiles.")
    parser.add_argument("identifiers", nargs="+", help="profile handles to scrape")
    parser.add_argument("--log-level", default=None, help="override SCRAPER_LOG_LEVEL")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    settings = ScraperSettings.from_env()
    logger = setup_logging(args.log_level or settings.log_level)
    logger.info("Starting profile scrape for %d identifier(s)", len(args.identifiers))

    failed = 0
    with InstagramScraper(settings) as scraper:
        for identifier, profile in scraper.get_profiles(args.identifiers).items():
            if profile is None:
                failed += 1
                print(json.dumps({"identifier": identifier, "error": "unavailable"}))
            else:
                print(profile.model_dump_json())
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
