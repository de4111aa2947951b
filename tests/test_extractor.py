from datetime import date

import pytest

from conftest import driver_page
from monitoring.errors import ExtractError
from monitoring.extractor import extract_drivers, extract_firmware, split_name_version
from monitoring.records import DriverInfo, FirmwareInfo


def test_extracts_drivers_in_page_order():
    html = driver_page([
        ("Intel Chipset Driver ", "10.1.18", "Windows 11", "2023/1/5"),
        ("Realtek Audio Driver ", "6.0.9", "Windows 11", "2022/12/24"),
    ])

    assert extract_drivers(html) == [
        DriverInfo("Intel Chipset Driver", "10.1.18", date(2023, 1, 5)),
        DriverInfo("Realtek Audio Driver", "6.0.9", date(2022, 12, 24)),
    ]


def test_os_filter_keeps_matching_rows():
    html = driver_page([
        ("Audio ", "1.0", "Windows 10 64bit", "2023/1/1"),
        ("Audio ", "1.1", "Windows 11 64bit", "2023/2/1"),
    ])

    drivers = extract_drivers(html, os_filter="Windows 11")

    assert [d.version for d in drivers] == ["1.1"]


def test_name_is_split_at_last_label():
    assert split_name_version("Tool バージョン:2 バージョン:3.1") == ("Tool バージョン:2", "3.1")


def test_duplicate_names_are_kept():
    html = driver_page([
        ("Display Driver ", "31.0", "Windows 11", "2023/3/1"),
        ("Display Driver ", "30.0", "Windows 11", "2023/1/1"),
    ])

    assert [d.name for d in extract_drivers(html)] == ["Display Driver", "Display Driver"]


def test_no_rows_is_an_error():
    with pytest.raises(ExtractError, match="scraped result is empty"):
        extract_drivers("<html><body><p>Maintenance</p></body></html>")


def test_filter_matching_nothing_is_an_error():
    html = driver_page([("Audio ", "1.0", "Windows 10", "2023/1/1")])

    with pytest.raises(ExtractError, match="scraped result is empty"):
        extract_drivers(html, os_filter="Windows 11")


def test_missing_version_label_is_an_error():
    html = (
        "<div id='Download'><table><tbody>"
        "<tr><td>Audio 1.0</td><td>Windows 11</td><td></td><td>2023/1/1</td></tr>"
        "</tbody></table></div>"
    )

    with pytest.raises(ExtractError, match="version info not found"):
        extract_drivers(html)


def test_driver_without_name_is_an_error():
    html = driver_page([("", "1.0", "Windows 11", "2023/1/1")])

    with pytest.raises(ExtractError, match="version info not found"):
        extract_drivers(html)


def test_bad_date_is_an_error():
    html = driver_page([("Audio ", "1.0", "Windows 11", "January 5")])

    with pytest.raises(ExtractError):
        extract_drivers(html)


def test_missing_date_cell_is_an_error():
    html = (
        "<div id='Download'><table><tbody>"
        "<tr><td>Audio バージョン:1.0</td><td>Windows 11</td></tr>"
        "</tbody></table></div>"
    )

    with pytest.raises(ExtractError, match="field not found"):
        extract_drivers(html)


def test_extracts_firmware_versions():
    html = driver_page(
        [("BIOS ", "1.03", "", "2023/3/1"), ("", "1.02", "", "2023/1/10")],
        container="BIOS",
    )

    assert extract_firmware(html) == [
        FirmwareInfo("1.03", date(2023, 3, 1)),
        FirmwareInfo("1.02", date(2023, 1, 10)),
    ]


def test_custom_selector_and_label():
    html = (
        "<section class='drivers'><table><tbody>"
        "<tr><td>Audio Version: 2.0</td><td>Linux</td><td></td><td>2024/7/1</td></tr>"
        "</tbody></table></section>"
    )

    drivers = extract_drivers(
        html, row_selector="section.drivers > table > tbody > tr", version_label="Version:"
    )

    assert drivers == [DriverInfo("Audio", "2.0", date(2024, 7, 1))]
