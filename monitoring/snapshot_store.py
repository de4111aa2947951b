"""
Snapshot Store

Reads and writes the last known listing as a JSON array. A missing or
unreadable file means "no snapshot yet" and is not an error; the next
cycle will create it.
"""

import json
import logging
import os
import tempfile
from pathlib import Path

from monitoring.errors import SnapshotWriteError

logger = logging.getLogger(__name__)


def load_snapshot(path, record_type):
    """
    Load a stored listing.

    Args:
        path (str or Path): Snapshot file
        record_type (type): DriverInfo or FirmwareInfo

    Returns:
        list or None: Records in stored order, or None if there is no usable snapshot
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            payload = json.load(f)
    except FileNotFoundError:
        logger.info(f"No snapshot at {path}")
        return None
    except (OSError, ValueError) as e:
        logger.warning(f"Could not read snapshot {path}: {e}")
        return None

    if not isinstance(payload, list):
        logger.warning(f"Snapshot {path} is not a JSON array, ignoring it")
        return None

    try:
        return [record_type.from_dict(item) for item in payload]
    except (AttributeError, KeyError, TypeError, ValueError) as e:
        logger.warning(f"Snapshot {path} has malformed records, ignoring it: {e}")
        return None


def save_snapshot(path, records):
    """
    Replace the stored listing with ``records``.

    The file is written next to the target and moved into place, so a
    concurrent reader sees either the old or the new snapshot.

    Raises:
        SnapshotWriteError: If the file cannot be written
    """
    path = Path(path)
    content = json.dumps([record.to_dict() for record in records], ensure_ascii=False, indent='\t')

    tmp_name = None
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", suffix='.tmp', dir=path.parent)
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(content)
            f.write('\n')
        os.replace(tmp_name, path)
    except OSError as e:
        if tmp_name and os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise SnapshotWriteError(f"Could not write snapshot {path}: {e}") from e

    logger.info(f"Saved {len(records)} records to {path}")
