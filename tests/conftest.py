from datetime import date

import pytest

from config.settings import Settings
from monitoring.errors import NotifyError
from monitoring.records import DriverInfo, FirmwareInfo


def driver(name, version, day):
    return DriverInfo(name=name, version=version, updated_at=date.fromisoformat(day))


def firmware(version, day):
    return FirmwareInfo(version=version, updated_at=date.fromisoformat(day))


def driver_page(rows, container="Download"):
    """Render a minimal listing page. rows: (name, version, os, date_text)."""
    body = "".join(
        f"<tr><td>{name}バージョン:{version}</td><td>{os_name}</td>"
        f"<td>12MB</td><td>{day}</td></tr>"
        for name, version, os_name, day in rows
    )
    return f"<html><body><div id='{container}'><table><tbody>{body}</tbody></table></div></body></html>"


class RecordingNotifier:
    def __init__(self, fail=False):
        self.messages = []
        self.fail = fail

    def send(self, message):
        if self.fail:
            raise NotifyError("channel down")
        self.messages.append(message)


class FakeFetcher:
    def __init__(self, pages=None, error=None):
        self.pages = pages or {}
        self.error = error
        self.calls = []

    def fetch(self, url, ready_selector=None):
        self.calls.append((url, ready_selector))
        if self.error is not None:
            raise self.error
        return self.pages[url]


@pytest.fixture
def notifier():
    return RecordingNotifier()


@pytest.fixture
def settings(tmp_path):
    return Settings(
        driver_list_url="https://example.com/drivers",
        drivers_info_path=str(tmp_path / "drivers_info.json"),
        bios_list_url="https://example.com/bios",
        bios_info_path=str(tmp_path / "bios_info.json"),
        notify_token="token",
        os_filter="Windows 11",
        notifier="console",
    )
