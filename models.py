"""
TempPurge - Data models for purge results and cleanup runs.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

SIZE_UNITS = ["B", "KB", "MB", "GB", "TB", "PB"]


@dataclass
class PurgeResult:
    """Aggregate counters produced by one purge of a directory tree."""
    files_deleted: int = 0
    dirs_deleted: int = 0
    bytes_removed: int = 0      # Pre-deletion size of deleted files only
    errors: int = 0             # Files, folders or listings that failed

    def __add__(self, other: PurgeResult) -> PurgeResult:
        if not isinstance(other, PurgeResult):
            return NotImplemented
        return PurgeResult(
            files_deleted=self.files_deleted + other.files_deleted,
            dirs_deleted=self.dirs_deleted + other.dirs_deleted,
            bytes_removed=self.bytes_removed + other.bytes_removed,
            errors=self.errors + other.errors,
        )

    @property
    def items_deleted(self) -> int:
        return self.files_deleted + self.dirs_deleted

    @property
    def bytes_removed_human(self) -> str:
        return format_size(self.bytes_removed)


@dataclass
class TargetReport:
    """Outcome of purging one target directory, with free-space readings."""
    label: str                  # e.g. "User temp"
    path: str
    result: PurgeResult = field(default_factory=PurgeResult)
    free_before: int = 0
    free_after: int = 0

    @property
    def freed(self) -> int:
        # Other processes write to the volume concurrently
        return max(0, self.free_after - self.free_before)


@dataclass
class RuleOutcome:
    """Result of running a single cleanup rule."""
    name: str
    display_name: str
    targets: List[TargetReport] = field(default_factory=list)
    freed_bytes: int = 0
    error: Optional[str] = None     # Error text if the rule failed
    skipped: Optional[str] = None   # Reason the rule did not run
    duration_s: float = 0.0

    @property
    def result(self) -> PurgeResult:
        total = PurgeResult()
        for target in self.targets:
            total = total + target.result
        return total


@dataclass
class CleanupRun:
    """Aggregated result of running all selected rules."""
    outcomes: List[RuleOutcome] = field(default_factory=list)
    total_duration_s: float = 0.0

    @property
    def result(self) -> PurgeResult:
        total = PurgeResult()
        for outcome in self.outcomes:
            total = total + outcome.result
        return total

    @property
    def freed_bytes(self) -> int:
        return sum(o.freed_bytes for o in self.outcomes)

    @property
    def failed_rules(self) -> int:
        return sum(1 for o in self.outcomes if o.error)


def format_size(size_bytes: int) -> str:
    """Format bytes into a human-readable string using 1024-based units."""
    size = float(max(size_bytes, 0))
    idx = 0
    while size >= 1024.0 and idx < len(SIZE_UNITS) - 1:
        size /= 1024.0
        idx += 1
    return f"{size:.2f} {SIZE_UNITS[idx]}"


def format_duration(seconds: float) -> str:
    """Format seconds into a human-readable duration string."""
    if seconds < 0.001:
        return "<1ms"
    if seconds < 1.0:
        return f"{seconds * 1000:.0f}ms"
    if seconds < 60.0:
        return f"{seconds:.1f}s"
    minutes = int(seconds // 60)
    secs = seconds % 60
    if minutes < 60:
        return f"{minutes}m {secs:.0f}s"
    hours = minutes // 60
    mins = minutes % 60
    return f"{hours}h {mins}m {secs:.0f}s"
