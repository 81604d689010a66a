"""
TempPurge - Cleanup rules registry.

Each rule module exposes:
    name: str           - internal identifier
    display_name: str   - human-readable name
    description: str    - what this rule cleans
    run(config) -> RuleOutcome
"""

from __future__ import annotations

from typing import Any, List

from rules import recycle_bin, temp_files

# Master list of all available rule modules, in run order
ALL_RULES: List[Any] = [
    temp_files,
    recycle_bin,
]


def get_rule_names() -> List[str]:
    """Return list of all rule internal names."""
    return [r.name for r in ALL_RULES]
