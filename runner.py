"""
TempPurge - Runs the cleanup rules and writes the CSV log.
"""

from __future__ import annotations

import csv
import logging
import os
import time
import traceback
from datetime import datetime
from typing import Callable, Iterable, List, Optional

from config import AppConfig
from models import CleanupRun, RuleOutcome
from rules import ALL_RULES

logger = logging.getLogger(__name__)

ProgressCallback = Optional[Callable[[str, int, int, float], None]]
# callback(label, completed_rules, total_rules, elapsed_s)

LOG_FIELDS = [
    "timestamp", "rule", "label", "path", "files_deleted", "dirs_deleted",
    "bytes_removed", "errors", "freed_bytes", "status",
]


def run_all(
    config: AppConfig,
    rule_names: Optional[Iterable[str]] = None,
    progress_cb: ProgressCallback = None,
    rules: Optional[List] = None,
) -> CleanupRun:
    """
    Run the selected cleanup rules one after another.

    Args:
        config: Effective configuration for this run.
        rule_names: If provided, only run rules whose `name` is listed.
        progress_cb: Optional callback for progress reporting.
        rules: Rule modules to choose from (defaults to ALL_RULES).

    Returns:
        CleanupRun with one RuleOutcome per rule that was run.
    """
    run = CleanupRun()
    available = ALL_RULES if rules is None else rules
    if rule_names is not None:
        wanted = set(rule_names)
        available = [r for r in available if r.name in wanted]

    total = len(available)
    run_start = time.perf_counter()

    def emit_progress(label: str, completed: int) -> None:
        if progress_cb:
            progress_cb(label, completed, total, time.perf_counter() - run_start)

    for idx, rule_module in enumerate(available):
        emit_progress(f"{rule_module.display_name} ({idx + 1}/{total})", idx)

        rule_start = time.perf_counter()
        try:
            outcome = rule_module.run(config)
        except Exception:
            logger.error("Rule %s crashed", rule_module.name, exc_info=True)
            outcome = RuleOutcome(
                name=rule_module.name,
                display_name=rule_module.display_name,
                error=traceback.format_exc(),
            )
        outcome.duration_s = time.perf_counter() - rule_start
        run.outcomes.append(outcome)

    run.total_duration_s = time.perf_counter() - run_start
    emit_progress("Done", total)
    return run


def write_log(log_dir: str, run: CleanupRun) -> str:
    """Write one CSV row per purged target. Returns the log path, or "" on failure."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_path = os.path.join(log_dir, f"cleanup_log_{timestamp}.csv")

    rows = []
    now = datetime.now().isoformat()
    for outcome in run.outcomes:
        status = "failed" if outcome.error else ("skipped" if outcome.skipped else "ok")
        if not outcome.targets:
            rows.append({
                "timestamp": now, "rule": outcome.name, "label": outcome.display_name,
                "path": "", "files_deleted": 0, "dirs_deleted": 0,
                "bytes_removed": 0, "errors": 0,
                "freed_bytes": outcome.freed_bytes, "status": status,
            })
            continue
        for target in outcome.targets:
            rows.append({
                "timestamp": now,
                "rule": outcome.name,
                "label": target.label,
                "path": target.path,
                "files_deleted": target.result.files_deleted,
                "dirs_deleted": target.result.dirs_deleted,
                "bytes_removed": target.result.bytes_removed,
                "errors": target.result.errors,
                "freed_bytes": target.freed,
                "status": status,
            })

    try:
        os.makedirs(log_dir, exist_ok=True)
        with open(log_path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=LOG_FIELDS)
            writer.writeheader()
            writer.writerows(rows)
    except OSError as exc:
        logger.warning("Could not write cleanup log %s: %s", log_path, exc)
        return ""
    return log_path
