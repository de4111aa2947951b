"""
Listing Records

One record per row of the vendor's download tables. Drivers are matched
across snapshots by name, BIOS releases by version.
"""

from dataclasses import dataclass
from datetime import date

from utils.date_converter import from_iso, to_iso


@dataclass(frozen=True)
class DriverInfo:
    name: str
    version: str
    updated_at: date

    @property
    def key(self):
        return self.name

    def to_dict(self):
        return {
            'name': self.name,
            'version': self.version,
            'updatedAt': to_iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            name=data['name'].strip(),
            version=data['version'].strip(),
            updated_at=from_iso(data['updatedAt']),
        )


@dataclass(frozen=True)
class FirmwareInfo:
    version: str
    updated_at: date

    @property
    def key(self):
        return self.version

    def to_dict(self):
        return {
            'version': self.version,
            'updatedAt': to_iso(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data):
        return cls(
            version=data['version'].strip(),
            updated_at=from_iso(data['updatedAt']),
        )
