"""
Main Monitor

Runs one detection cycle for each monitored listing (drivers, then BIOS):
render the page, extract the rows, compare against the snapshot, report the
changes, and save the new snapshot when the comparison allows it.
"""

import logging
import sys
from dataclasses import dataclass
from functools import partial
from typing import Callable, Optional

from monitoring.change_detector import PersistDecision, detect_changes
from monitoring.errors import NotifyError
from monitoring.extractor import extract_drivers, extract_firmware
from monitoring.records import DriverInfo, FirmwareInfo
from monitoring.snapshot_store import load_snapshot, save_snapshot

logger = logging.getLogger(__name__)


@dataclass
class MonitorTarget:
    """One listing page and the snapshot file that tracks it."""
    entity: str
    url: str
    snapshot_path: str
    record_type: type
    extract: Callable
    ready_selector: Optional[str] = None


def build_targets(settings):
    """
    Build the monitored targets from settings.

    The BIOS listing is only monitored when ``bios_list_url`` is configured.
    """
    targets = [
        MonitorTarget(
            entity="driver",
            url=settings.driver_list_url,
            snapshot_path=settings.drivers_info_path,
            record_type=DriverInfo,
            extract=partial(
                extract_drivers,
                os_filter=settings.os_filter,
                row_selector=settings.driver_row_selector,
                version_label=settings.version_label,
            ),
            ready_selector=_container_selector(settings.driver_row_selector),
        )
    ]
    if settings.bios_enabled:
        targets.append(
            MonitorTarget(
                entity="BIOS",
                url=settings.bios_list_url,
                snapshot_path=settings.bios_info_path,
                record_type=FirmwareInfo,
                extract=partial(
                    extract_firmware,
                    row_selector=settings.bios_row_selector,
                    version_label=settings.version_label,
                ),
                ready_selector=_container_selector(settings.bios_row_selector),
            )
        )
    return targets


def _container_selector(row_selector):
    # "div#Download > table > tbody > tr" -> "div#Download"
    return row_selector.split(">")[0].strip()


class Monitor:
    """
    Orchestrates the detection cycles.

    Fetch, extract and snapshot write errors propagate to the caller as
    MonitorError subclasses. Failures to deliver an individual change
    notification are logged and the cycle continues.
    """

    def __init__(self, settings, notifier, fetcher, console=None):
        self.settings = settings
        self.notifier = notifier
        self.fetcher = fetcher
        self.console = console if console is not None else sys.stdout
        self.targets = build_targets(settings)

    def run(self):
        """Run every target once, in order. Returns the detection results."""
        results = []
        for target in self.targets:
            results.append(self.run_target(target))
        return results

    def run_target(self, target):
        logger.info(f"Downloading html for {target.entity} list...")
        html = self.fetcher.fetch(target.url, target.ready_selector)

        logger.info(f"Scraping html for {target.entity} list...")
        current = target.extract(html)
        logger.info(f"Found {len(current)} {target.entity} entries")

        previous = load_snapshot(target.snapshot_path, target.record_type)
        result = detect_changes(current, previous, target.url, entity=target.entity)
        self.report(result)

        if result.decision is PersistDecision.OVERWRITE:
            save_snapshot(target.snapshot_path, current)
        else:
            logger.info(f"Keeping existing snapshot {target.snapshot_path}")
        return result

    def report(self, result):
        for event in result.advisories:
            print(event.message, file=self.console)
        for event in result.notifications:
            try:
                self.notifier.send(event.message)
            except NotifyError as e:
                logger.error(f"Failed to send notification '{event.message}': {e}")
