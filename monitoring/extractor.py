"""
Listing Extractor

Parses the rendered support page with BeautifulSoup and turns the download
table rows into records.

Expected row layout:
    td 1: "<name>バージョン:<version>" (BIOS rows carry only the version part)
    td 2: target operating system
    td 4: release date as YYYY/M/D
"""

import logging

from bs4 import BeautifulSoup

from monitoring.errors import ExtractError
from monitoring.records import DriverInfo, FirmwareInfo
from utils.date_converter import parse_listing_date

logger = logging.getLogger(__name__)

VERSION_LABEL = "バージョン:"
DRIVER_ROW_SELECTOR = "div#Download > table > tbody > tr"
BIOS_ROW_SELECTOR = "div#BIOS > table > tbody > tr"

NAME_VERSION_CELL = "td:nth-child(1)"
OS_CELL = "td:nth-child(2)"
DATE_CELL = "td:nth-child(4)"


def _cell_text(row, selector):
    cell = row.select_one(selector)
    if cell is None:
        raise ExtractError(f"field not found: {selector}")
    return cell.get_text()


def _select_rows(markup, row_selector):
    soup = BeautifulSoup(markup, "html.parser")
    rows = soup.select(row_selector)
    logger.debug(f"Found {len(rows)} rows for '{row_selector}'")
    return rows


def _parse_date(row):
    text = _cell_text(row, DATE_CELL)
    try:
        return parse_listing_date(text)
    except ValueError as e:
        raise ExtractError(str(e)) from e


def split_name_version(text, version_label=VERSION_LABEL):
    """
    Split the combined name/version cell at the last version label.

    Returns:
        tuple: (name, version), both stripped. Name may be empty.

    Raises:
        ExtractError: If the label does not occur in text
    """
    position = text.rfind(version_label)
    if position < 0:
        raise ExtractError("version info not found")
    name = text[:position].strip()
    version = text[position + len(version_label):].strip()
    return name, version


def extract_drivers(markup, os_filter="", row_selector=DRIVER_ROW_SELECTOR,
                    version_label=VERSION_LABEL):
    """
    Extract driver records in page order.

    Args:
        markup (str): Rendered page HTML
        os_filter (str): Keep only rows whose OS cell contains this text.
            An empty filter keeps every row.
        row_selector (str): CSS selector for the table rows
        version_label (str): Label separating the name from the version

    Returns:
        list[DriverInfo]: Matching rows

    Raises:
        ExtractError: No matching rows, or a row is missing a field
    """
    drivers = []
    for row in _select_rows(markup, row_selector):
        if os_filter and os_filter not in _cell_text(row, OS_CELL):
            continue
        name, version = split_name_version(_cell_text(row, NAME_VERSION_CELL), version_label)
        if not name:
            raise ExtractError("version info not found")
        drivers.append(DriverInfo(name=name, version=version, updated_at=_parse_date(row)))

    if not drivers:
        raise ExtractError("scraped result is empty")
    return drivers


def extract_firmware(markup, row_selector=BIOS_ROW_SELECTOR, version_label=VERSION_LABEL):
    """
    Extract BIOS records in page order.

    Raises:
        ExtractError: No rows, or a row is missing a field
    """
    firmware = []
    for row in _select_rows(markup, row_selector):
        _, version = split_name_version(_cell_text(row, NAME_VERSION_CELL), version_label)
        firmware.append(FirmwareInfo(version=version, updated_at=_parse_date(row)))

    if not firmware:
        raise ExtractError("scraped result is empty")
    return firmware
