#!/usr/bin/env python3
"""
Quick check of the row extraction against the live page.
Usage: python scripts/check_listing.py [configs.json]

Renders each configured listing and prints the rows the monitor would see,
without touching the snapshot files or sending notifications.
"""

import logging
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

from config.settings import DEFAULT_CONFIG_PATH, ConfigError, load_settings
from monitoring.browser import ChromePageFetcher
from monitoring.errors import MonitorError
from monitoring.monitor import build_targets
from utils.date_converter import format_listing_date


def main():
    config_path = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_CONFIG_PATH
    try:
        settings = load_settings(config_path, notifier="console")
    except ConfigError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    fetcher = ChromePageFetcher(headless=settings.headless, page_load_timeout=settings.page_load_timeout)

    for target in build_targets(settings):
        print(f"\n{'='*60}")
        print(f"Testing: {target.url}")
        print(f"{'='*60}\n")
        try:
            records = target.extract(fetcher.fetch(target.url, target.ready_selector))
        except MonitorError as e:
            print(f"ERROR: {e}")
            continue

        for record in records:
            print(f"  {record.key:<50} {record.version:<20} {format_listing_date(record.updated_at)}")
        print(f"\n  {len(records)} {target.entity} entries")


if __name__ == "__main__":
    main()
