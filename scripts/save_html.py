#!/usr/bin/env python3
"""
Save the rendered listing pages to html_examples/ so the row selectors can
be checked against what the browser actually produces.

Usage:
    python scripts/save_html.py [configs.json]
"""

import os
import sys
from pathlib import Path

sys.path.append(str(Path(__file__).parent.parent))

from config.settings import DEFAULT_CONFIG_PATH, ConfigError, load_settings
from monitoring.browser import ChromePageFetcher
from monitoring.errors import FetchError
from monitoring.monitor import build_targets


def save_html(html_content, filename):
    with open(filename, "w", encoding="utf-8") as file:
        file.write(html_content)
    print(f"HTML content saved to {filename}")


def main():
    config_path = sys.argv[1] if len(sys.argv) > 1 else DEFAULT_CONFIG_PATH
    try:
        settings = load_settings(config_path, notifier="console")
    except ConfigError as e:
        print(f"Configuration error: {e}")
        sys.exit(1)

    output_dir = "html_examples"
    os.makedirs(output_dir, exist_ok=True)

    fetcher = ChromePageFetcher(headless=settings.headless, page_load_timeout=settings.page_load_timeout)
    for target in build_targets(settings):
        print(f"Fetching HTML for {target.entity} list...")
        try:
            html = fetcher.fetch(target.url, target.ready_selector)
        except FetchError as e:
            print(f"Failed to fetch HTML for {target.entity} list: {e}")
            continue
        save_html(html, os.path.join(output_dir, f"{target.entity.lower()}.html"))

    print("Done fetching all listing pages.")


if __name__ == "__main__":
    main()
