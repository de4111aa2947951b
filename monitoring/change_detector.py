"""
Change Detector

Compares a freshly scraped listing against the stored snapshot and decides
what to report and whether the new listing should replace the snapshot.

Rows on the vendor page have no stable identifier and two rows can share the
same display name, so a general set diff cannot attribute changes. Instead:
- a longer listing is reported as additions (by key membership),
- a shorter listing is reported as removals (by key membership),
- an equal-length listing is compared position by position, and the cycle
  is abandoned at the first position whose key differs.
"""

from dataclasses import dataclass, field
from enum import Enum

from utils.date_converter import format_listing_date


class EventKind(Enum):
    CREATED = 'created'
    ADDITION_DETECTED = 'addition_detected'
    ADDED = 'added'
    REMOVAL_DETECTED = 'removal_detected'
    REMOVED = 'removed'
    VERSION_MISMATCH = 'version_mismatch'
    ORDER_CHANGED = 'order_changed'
    MANUAL_DELETE_REQUIRED = 'manual_delete_required'
    UPDATED = 'updated'
    SOURCE = 'source'
    NO_UPDATES = 'no_updates'


class PersistDecision(Enum):
    OVERWRITE = 'overwrite'
    HOLD = 'hold'


@dataclass(frozen=True)
class ChangeEvent:
    kind: EventKind
    message: str
    # Advisory events are console-only and never sent to the notifier.
    advisory: bool = False


@dataclass
class DetectionResult:
    decision: PersistDecision
    events: list = field(default_factory=list)

    @property
    def notifications(self):
        return [event for event in self.events if not event.advisory]

    @property
    def advisories(self):
        return [event for event in self.events if event.advisory]


def _source_event(source_url):
    return ChangeEvent(EventKind.SOURCE, f"Source: {source_url}")


def detect_changes(current, previous, source_url, entity="driver"):
    """
    Compare the scraped listing with the stored snapshot.

    Args:
        current (list): Records scraped in this run, in page order
        previous (list or None): Records from the snapshot, None if there is none
        source_url (str): Listing page URL, appended to reports
        entity (str): Noun used in messages ("driver", "BIOS")

    Returns:
        DetectionResult: Events in emission order and the persist decision
    """
    if previous is None:
        return DetectionResult(
            PersistDecision.OVERWRITE,
            [ChangeEvent(EventKind.CREATED, f"Created a {entity} info file as it didn't exist")],
        )

    if len(current) > len(previous):
        events = [ChangeEvent(EventKind.ADDITION_DETECTED, f"New {entity} was added")]
        known = {record.key for record in previous}
        for record in current:
            if record.key not in known:
                events.append(ChangeEvent(EventKind.ADDED, f"{record.key} was added"))
        events.append(_source_event(source_url))
        return DetectionResult(PersistDecision.OVERWRITE, events)

    if len(current) < len(previous):
        events = [ChangeEvent(EventKind.REMOVAL_DETECTED, f"Existing {entity} was removed")]
        remaining = {record.key for record in current}
        for record in previous:
            if record.key not in remaining:
                events.append(ChangeEvent(EventKind.REMOVED, f"{record.key} was removed"))
        events.append(_source_event(source_url))
        return DetectionResult(PersistDecision.OVERWRITE, events)

    events = []
    for index, (new, old) in enumerate(zip(current, previous)):
        if new.key != old.key:
            # Keep the old snapshot so the changed rows can still be worked out by hand.
            events.extend([
                ChangeEvent(
                    EventKind.VERSION_MISMATCH,
                    f"Version mismatch at row {index + 1}: {old.version} -> {new.version}",
                ),
                ChangeEvent(
                    EventKind.ORDER_CHANGED,
                    "Listing order has changed. Some entries may have been added or removed. "
                    "Please check the website.",
                ),
                ChangeEvent(
                    EventKind.MANUAL_DELETE_REQUIRED,
                    f"Please delete the {entity} info json file manually.",
                ),
                _source_event(source_url),
            ])
            return DetectionResult(PersistDecision.HOLD, events)
        if new.updated_at > old.updated_at:
            events.append(ChangeEvent(
                EventKind.UPDATED,
                f"{new.key} got a newer version: {new.version} "
                f"(updated at {format_listing_date(new.updated_at)})",
            ))

    if events:
        events.append(_source_event(source_url))
        return DetectionResult(PersistDecision.OVERWRITE, events)

    return DetectionResult(
        PersistDecision.HOLD,
        [ChangeEvent(EventKind.NO_UPDATES, "No updates available", advisory=True)],
    )
