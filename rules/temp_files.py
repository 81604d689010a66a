"""
Rule: User Temp Files & System Temp Files
Empties %TEMP%, C:\\Windows\\Temp and any extra configured folders.
"""

from __future__ import annotations

import logging

from config import AppConfig, default_targets
from disk import free_space
from models import RuleOutcome, TargetReport
from purger import purge

logger = logging.getLogger(__name__)

name = "temp_files"
display_name = "Temporary Files"
description = "User and system temporary files (%TEMP%, Windows\\Temp)"


def run(config: AppConfig) -> RuleOutcome:
    outcome = RuleOutcome(name=name, display_name=display_name)

    for label, path in default_targets(config):
        report = TargetReport(label=label, path=path)
        report.free_before = free_space(path)
        report.result = purge(path)
        report.free_after = free_space(path)
        outcome.targets.append(report)
        logger.info(
            "%s %s: %d files, %d folders, %d errors",
            label, path, report.result.files_deleted,
            report.result.dirs_deleted, report.result.errors,
        )

    outcome.freed_bytes = sum(t.freed for t in outcome.targets)
    return outcome
