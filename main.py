#!/usr/bin/env python3
"""
Driver Update Monitor - Main Entry Point

Checks the vendor support page once for new, removed or updated drivers
and BIOS releases, reports the changes, and exits. Schedule it with cron,
a systemd timer or Task Scheduler to monitor continuously.

Usage:
    python main.py [configs.json] [--console] [--log-file PATH] [--verbose]
"""

import argparse
import logging
import sys

from config.settings import DEFAULT_CONFIG_PATH, ConfigError, load_settings
from monitoring.browser import ChromePageFetcher
from monitoring.errors import MonitorError, NotifyError
from monitoring.monitor import Monitor
from monitoring.notifier import build_notifier

logger = logging.getLogger(__name__)


def setup_logging(log_file=None, verbose=False):
    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def notify_error_and_exit(error, notifier):
    """Report a fatal error once, log it, and exit with status 1."""
    try:
        notifier.send(str(error))
    except NotifyError as e:
        logger.error(f"Could not send error notification: {e}")
    logger.error(f"Monitoring run failed: {error}", exc_info=True)
    sys.exit(1)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Driver Update Monitor")
    parser.add_argument(
        "config", nargs="?", default=DEFAULT_CONFIG_PATH,
        help=f"Path to the JSON config file (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--console", action="store_true",
        help="Print notifications to stdout instead of sending them",
    )
    parser.add_argument("--log-file", help="Also write logs to this file")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv=None, fetcher=None):
    args = parse_args(argv)
    setup_logging(args.log_file, args.verbose)

    try:
        settings = load_settings(args.config, notifier="console" if args.console else None)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    notifier = build_notifier(settings)
    if fetcher is None:
        fetcher = ChromePageFetcher(
            headless=settings.headless, page_load_timeout=settings.page_load_timeout
        )

    try:
        Monitor(settings, notifier, fetcher).run()
    except MonitorError as e:
        notify_error_and_exit(e, notifier)


if __name__ == "__main__":
    main()
