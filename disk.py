"""
TempPurge - Free-space readings used to report how much a cleanup freed.
"""

from __future__ import annotations

import logging
import os
import shutil

logger = logging.getLogger(__name__)


def free_space(path: str) -> int:
    """Return free bytes on the volume holding ``path`` (0 if unknown)."""
    probe = os.path.abspath(path)
    # The target may not exist yet; any ancestor lives on the same volume
    while not os.path.exists(probe):
        parent = os.path.dirname(probe)
        if parent == probe:
            break
        probe = parent

    try:
        return shutil.disk_usage(probe).free
    except OSError as exc:
        logger.warning("Cannot read free space for %s: %s", path, exc)
        return 0


def freed_between(before: int, after: int) -> int:
    """Bytes freed between two readings. Never negative."""
    return max(0, after - before)


def system_drive() -> str:
    """Root of the system volume."""
    if os.name == "nt":
        return os.environ.get("SystemDrive", "C:") + "\\"
    return os.sep
