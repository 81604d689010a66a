"""
Rule: Recycle Bin
Empties the Recycle Bin on all drives through the shell API.
"""

from __future__ import annotations

import ctypes
import logging
import os

from config import AppConfig
from disk import free_space, freed_between, system_drive
from models import RuleOutcome

logger = logging.getLogger(__name__)

name = "recycle_bin"
display_name = "Recycle Bin"
description = "Deleted files in the Recycle Bin on all drives"

SHERB_NOCONFIRMATION = 0x00000001
SHERB_NOPROGRESSUI = 0x00000002
SHERB_NOSOUND = 0x00000004

# HRESULT returned when there is nothing to empty
E_UNEXPECTED = 0x8000FFFF


def run(config: AppConfig) -> RuleOutcome:
    outcome = RuleOutcome(name=name, display_name=display_name)

    if not config.empty_recycle_bin:
        outcome.skipped = "disabled"
        return outcome
    if not is_windows():
        outcome.skipped = "not supported on this platform"
        return outcome

    drive = system_drive()
    before = free_space(drive)
    hresult = empty_recycle_bin()
    after = free_space(drive)
    outcome.freed_bytes = freed_between(before, after)

    if hresult not in (0, E_UNEXPECTED):
        outcome.error = f"SHEmptyRecycleBinW failed with HRESULT 0x{hresult:08X}"
        logger.warning(outcome.error)
    return outcome


def empty_recycle_bin() -> int:
    """Empty the Recycle Bin for every drive. Returns the unsigned HRESULT."""
    flags = SHERB_NOCONFIRMATION | SHERB_NOPROGRESSUI | SHERB_NOSOUND
    res = ctypes.windll.shell32.SHEmptyRecycleBinW(None, None, flags)
    return res & 0xFFFFFFFF


def is_windows() -> bool:
    return os.name == "nt"
