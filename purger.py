"""
TempPurge - Deletion engine that empties a directory tree in place.

Two ordered passes: every file first, then every subdirectory deepest
first. Per-item failures are counted, never raised.
"""

from __future__ import annotations

import logging
import os
import stat
from typing import List, Tuple

from models import PurgeResult

logger = logging.getLogger(__name__)

FILE_ATTRIBUTE_NORMAL = 0x80
FILE_ATTRIBUTE_REPARSE_POINT = 0x400


def purge(path: str) -> PurgeResult:
    """
    Delete everything beneath ``path`` while leaving ``path`` itself.

    Args:
        path: Root directory to empty. A missing root is a no-op.

    Returns:
        PurgeResult with deleted counts, bytes removed and error count.
    """
    result = PurgeResult()

    if not os.path.isdir(path):
        logger.debug("Nothing to purge at %s", path)
        return result

    # Folders are listed up front and removed only after every file
    files, dirs, listing_errors = _collect(path)
    result.errors += listing_errors

    # -- File pass --
    for file_path in files:
        normalize_attributes(file_path)
        try:
            size = os.lstat(file_path).st_size
            _remove_file(file_path)
        except OSError as exc:
            result.errors += 1
            logger.debug("Skipped file %s: %s", file_path, exc)
            continue
        result.files_deleted += 1
        result.bytes_removed += size
        logger.debug("Deleted file %s (%d bytes)", file_path, size)

    # -- Directory pass --
    for dir_path in dirs:
        normalize_attributes(dir_path)
        try:
            os.rmdir(dir_path)
        except OSError as exc:
            result.errors += 1
            logger.debug("Skipped folder %s: %s", dir_path, exc)
            continue
        result.dirs_deleted += 1
        logger.debug("Deleted folder %s", dir_path)

    return result


def normalize_attributes(path: str) -> None:
    """Clear read-only, hidden and system attributes. Failures are ignored."""
    if os.name == "nt":
        try:
            import ctypes
            ctypes.windll.kernel32.SetFileAttributesW(str(path), FILE_ATTRIBUTE_NORMAL)
        except (OSError, AttributeError):
            pass
        return

    try:
        st = os.lstat(path)
        if stat.S_ISLNK(st.st_mode):
            return
        os.chmod(path, stat.S_IMODE(st.st_mode) | stat.S_IWRITE)
    except OSError:
        pass


def _remove_file(path: str) -> None:
    """Remove a file or link. Directory links on Windows need rmdir."""
    if os.name == "nt" and _is_link(path) and os.path.isdir(path):
        os.rmdir(path)
    else:
        os.remove(path)


def _is_link(path: str) -> bool:
    """True for symlinks and for Windows junctions, which islink() misses."""
    return os.path.islink(path) or _is_junction(path)


def _is_junction(path: str) -> bool:
    try:
        attributes = getattr(os.lstat(path), "st_file_attributes", 0)
    except OSError:
        return False
    return bool(attributes & FILE_ATTRIBUTE_REPARSE_POINT)


def _collect(root: str) -> Tuple[List[str], List[str], int]:
    """
    Walk ``root`` once.

    Returns:
        Tuple of (files and links, real subdirectories deepest first,
        number of folders that could not be listed).
    """
    errors: List[OSError] = []
    files: List[str] = []
    found: List[Tuple[int, str]] = []
    root_depth = _depth(root)

    for dirpath, dirnames, filenames in os.walk(root, onerror=errors.append):
        for name in filenames:
            files.append(os.path.join(dirpath, name))

        real_dirs = []
        for name in dirnames:
            full = os.path.join(dirpath, name)
            if _is_link(full):
                files.append(full)
            else:
                real_dirs.append(name)
                found.append((_depth(full) - root_depth, full))
        # Links and junctions are removed, never entered
        dirnames[:] = real_dirs

    for exc in errors:
        logger.debug("Could not list %s: %s", getattr(exc, "filename", root), exc)

    found.sort(key=lambda entry: (entry[0], entry[1]), reverse=True)
    return files, [full for _depth_value, full in found], len(errors)


def _depth(path: str) -> int:
    parts = os.path.normpath(path).split(os.sep)
    return len([p for p in parts if p])
