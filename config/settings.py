"""
Configuration Management

Loads the JSON config file and applies overrides from environment
variables (and a .env file, if present). The result is a single Settings
value that is passed to the monitor and the notifier.
"""

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "configs.json"

NOTIFIERS = ("line", "console", "email")

DEFAULT_VERSION_LABEL = "バージョン:"
DEFAULT_DRIVER_ROW_SELECTOR = "div#Download > table > tbody > tr"
DEFAULT_BIOS_ROW_SELECTOR = "div#BIOS > table > tbody > tr"

# Config key -> (older camelCase key, environment variable)
_ALIASES = {
    "driver_list_url": ("driverListURL", "DRIVER_LIST_URL"),
    "drivers_info_path": ("driversInfoPath", "DRIVERS_INFO_PATH"),
    "bios_list_url": ("biosListURL", "BIOS_LIST_URL"),
    "bios_info_path": ("biosInfoPath", "BIOS_INFO_PATH"),
    "notify_token": ("lineNotifyToken", "NOTIFY_TOKEN"),
    "os_filter": ("osFilter", "OS_FILTER"),
    "notifier": (None, "NOTIFIER"),
}


class ConfigError(Exception):
    """Missing or invalid configuration."""


@dataclass
class Settings:
    driver_list_url: str
    drivers_info_path: str
    bios_list_url: str = ""
    bios_info_path: str = ""
    notify_token: str = ""
    os_filter: str = ""
    notifier: str = "line"
    version_label: str = DEFAULT_VERSION_LABEL
    driver_row_selector: str = DEFAULT_DRIVER_ROW_SELECTOR
    bios_row_selector: str = DEFAULT_BIOS_ROW_SELECTOR
    headless: bool = True
    page_load_timeout: float = 10
    smtp_server: str = "smtp.gmail.com"
    smtp_port: int = 587
    sender_email: str = ""
    sender_password: str = ""
    receiver_emails: list = field(default_factory=list)

    @property
    def bios_enabled(self):
        return bool(self.bios_list_url)


def _read_config_file(path):
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {path}") from e
    except (OSError, ValueError) as e:
        raise ConfigError(f"Could not read config file {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config file {path} must contain a JSON object")
    return data


def _lookup(data, key):
    legacy_key, env_var = _ALIASES.get(key, (None, None))
    if env_var and os.getenv(env_var):
        return os.getenv(env_var)
    if key in data:
        return data[key]
    if legacy_key and legacy_key in data:
        return data[legacy_key]
    return None


def _as_bool(value):
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in ("true", "1", "yes", "on"):
        return True
    if isinstance(value, str) and value.strip().lower() in ("false", "0", "no", "off"):
        return False
    raise ConfigError(f"Expected a boolean, got {value!r}")


def _as_number(value, cast, name):
    try:
        return cast(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {name}: {value!r}") from e


def load_settings(path=DEFAULT_CONFIG_PATH, env_file=None, notifier=None):
    """
    Load settings from a JSON config file plus environment overrides.

    Args:
        path (str or Path): JSON config file
        env_file (str, optional): .env file to load. Defaults to searching
            from the current directory, as python-dotenv does.
        notifier (str, optional): Overrides the configured notifier,
            e.g. "console" for a dry run

    Returns:
        Settings: Validated configuration

    Raises:
        ConfigError: If the file is missing or invalid, or a required value is absent
    """
    load_dotenv(env_file)
    data = _read_config_file(Path(path))

    values = {}
    for key in _ALIASES:
        value = _lookup(data, key)
        if value is not None:
            values[key] = str(value).strip()

    for key in ("driver_list_url", "drivers_info_path"):
        if not values.get(key):
            raise ConfigError(f"Missing required config value: {key}")

    settings = Settings(
        driver_list_url=values["driver_list_url"],
        drivers_info_path=values["drivers_info_path"],
        bios_list_url=values.get("bios_list_url", ""),
        bios_info_path=values.get("bios_info_path", ""),
        notify_token=values.get("notify_token", ""),
        os_filter=values.get("os_filter", ""),
        notifier=(notifier or values.get("notifier", "line")).lower(),
        version_label=data.get("version_label", DEFAULT_VERSION_LABEL),
        driver_row_selector=data.get("driver_row_selector", DEFAULT_DRIVER_ROW_SELECTOR),
        bios_row_selector=data.get("bios_row_selector", DEFAULT_BIOS_ROW_SELECTOR),
        headless=_as_bool(data.get("headless", True)),
        page_load_timeout=_as_number(data.get("page_load_timeout", 10), float, "page_load_timeout"),
        smtp_server=os.getenv("SMTP_SERVER", "smtp.gmail.com"),
        smtp_port=_as_number(os.getenv("SMTP_PORT", "587"), int, "SMTP_PORT"),
        sender_email=os.getenv("SENDER_EMAIL", ""),
        sender_password=os.getenv("SENDER_PASSWORD", ""),
        receiver_emails=[
            email.strip() for email in os.getenv("RECEIVER_EMAILS", "").split(",") if email.strip()
        ],
    )
    validate_settings(settings)
    logger.debug(f"Loaded settings from {path}")
    return settings


def validate_settings(settings):
    """
    Check cross-field requirements.

    Raises:
        ConfigError: If the settings cannot be used
    """
    for name in ("version_label", "driver_row_selector", "bios_row_selector"):
        value = getattr(settings, name)
        if not isinstance(value, str) or not value.strip():
            raise ConfigError(f"{name} must be a non-empty string")
    if settings.notifier not in NOTIFIERS:
        raise ConfigError(
            f"Unknown notifier '{settings.notifier}'. Expected one of: {', '.join(NOTIFIERS)}"
        )
    if settings.bios_list_url and not settings.bios_info_path:
        raise ConfigError("bios_info_path is required when bios_list_url is set")
    if settings.notifier == "line" and not settings.notify_token:
        raise ConfigError("notify_token is required for LINE notifications")
    if settings.notifier == "email":
        if not settings.sender_email or not settings.sender_password:
            raise ConfigError(
                "Email credentials not configured. Set SENDER_EMAIL and SENDER_PASSWORD."
            )
        if not settings.receiver_emails:
            raise ConfigError("RECEIVER_EMAILS is required for email notifications")
    if settings.page_load_timeout <= 0:
        raise ConfigError("page_load_timeout must be positive")
