"""Custom grouping rule matching."""

from __future__ import annotations

from fnmatch import fnmatch
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from rules.config import GroupingRule


def match_grouping_rule(path: str, rules: list[GroupingRule]) -> str | None:
    """Return the name of the grouping rule a root-relative path falls under.

    Uses first-match-wins semantics: the first rule whose glob patterns
    match the path determines the module.
    """
    for rule in rules:
        for glob_pattern in rule.globs:
            if fnmatch(path, glob_pattern):
                return rule.name
    return None


def is_excluded(path: str, exclude_patterns: list[str]) -> bool:
    """Check whether a path contains any of the exclude substrings.

    Empty patterns are skipped, so an empty string never excludes every path.
    """
    return any(pattern and pattern in path for pattern in exclude_patterns)
