"""
Monitor Errors

Exception types raised by the fetch, extract, persist and notify stages.
Library exceptions are translated into these at the module boundary so the
entry point only has to know about this hierarchy.
"""


class MonitorError(Exception):
    """Fatal error for the current run. Reported once, then the process exits."""


class FetchError(MonitorError):
    """The listing page could not be rendered."""


class ExtractError(MonitorError):
    """The rendered page did not have the expected structure."""


class SnapshotWriteError(MonitorError):
    """The snapshot file could not be written."""


class NotifyError(Exception):
    """A notification could not be delivered."""
