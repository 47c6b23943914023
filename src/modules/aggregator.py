"""Aggregate property graph file nodes into modules."""

from __future__ import annotations

import logging
import posixpath
from pathlib import Path
from typing import TYPE_CHECKING

from graph.models import CODE_DOMAIN, TEST_LABEL, NodeType
from modules.models import Module, ModuleMetrics
from rules.config import AggregationLevel, ConfigError
from rules.grouping import is_excluded, match_grouping_rule
from utils import (
    module_id_for_path,
    module_name_for_path,
    normalize_path,
    relative_parts,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from graph.models import Node, PropertyGraph
    from rules.config import AggregationConfig

logger = logging.getLogger(__name__)


class _GroupingContext:
    """Per-call inputs shared by the grouping functions."""

    def __init__(self, root_path: str, config: AggregationConfig) -> None:
        self.root_path = normalize_path(root_path)
        self.config = config
        self.marker_cache: dict[str, bool] = {}


def _group_by_directory(file_path: str, ctx: _GroupingContext) -> str:
    return posixpath.dirname(file_path) or "."


def _group_by_top_level(file_path: str, ctx: _GroupingContext) -> str:
    parts = relative_parts(file_path, ctx.root_path)
    if parts is None:
        return _group_by_directory(file_path, ctx)

    directories = parts[:-1]
    return normalize_path(posixpath.join(ctx.root_path, *directories[:2]))


def _has_package_marker(directory: str, ctx: _GroupingContext) -> bool:
    cached = ctx.marker_cache.get(directory)
    if cached is not None:
        return cached

    found = any(
        (Path(directory) / marker).is_file() for marker in ctx.config.package_markers
    )
    ctx.marker_cache[directory] = found
    return found


def _group_by_package(file_path: str, ctx: _GroupingContext) -> str:
    file_directory = _group_by_directory(file_path, ctx)
    current = file_directory

    try:
        while relative_parts(current, ctx.root_path) is not None:
            if _has_package_marker(current, ctx):
                return current
            parent = posixpath.dirname(current) or "."
            if parent == current:
                break
            current = parent
    except OSError as exc:
        logger.warning(
            "Package marker check failed under %s (%s); grouping %s by directory",
            current,
            exc,
            file_path,
        )

    return file_directory


def _group_by_custom_rules(file_path: str, ctx: _GroupingContext) -> str:
    parts = relative_parts(file_path, ctx.root_path)
    if parts is not None:
        rule_name = match_grouping_rule("/".join(parts), ctx.config.custom_rules)
        if rule_name is not None:
            return normalize_path(posixpath.join(ctx.root_path, rule_name))
    return _group_by_directory(file_path, ctx)


_GROUPERS: dict[AggregationLevel, Callable[[str, _GroupingContext], str]] = {
    AggregationLevel.DIRECTORY: _group_by_directory,
    AggregationLevel.TOP_LEVEL: _group_by_top_level,
    AggregationLevel.PACKAGE: _group_by_package,
    AggregationLevel.CUSTOM: _group_by_custom_rules,
}


def _grouper_for(level: object) -> Callable[[str, _GroupingContext], str]:
    try:
        return _GROUPERS[AggregationLevel(level)]
    except (ValueError, KeyError) as exc:
        valid = ", ".join(member.value for member in AggregationLevel)
        msg = f"Unknown aggregation level {level!r}. Valid levels: {valid}"
        raise ConfigError(msg) from exc


def _file_lines(node: Node) -> int:
    # Each missing bound counts as line 0.
    start = node.metadata.start_line or 0
    end = node.metadata.end_line or 0
    return max(0, end - start)


def _build_module(module_path: str, files: list[Node]) -> Module:
    metrics = ModuleMetrics(
        file_count=len(files),
        total_lines=sum(_file_lines(node) for node in files),
    )
    return Module(
        id=module_id_for_path(module_path),
        name=module_name_for_path(module_path),
        path=module_path,
        files=[node.id for node in files],
        metrics=metrics,
    )


class ModuleAggregator:
    """Groups eligible file nodes of a property graph into modules."""

    def is_eligible(self, node: Node, config: AggregationConfig) -> bool:
        """Check whether a node takes part in module grouping."""
        if node.type is not NodeType.FILE or not node.is_from_domain(CODE_DOMAIN):
            return False

        file_path = node.metadata.file_path
        if not file_path:
            logger.debug("Skipping file node %s without filePath", node.id)
            return False

        if is_excluded(file_path, config.exclude_patterns):
            return False

        return config.include_tests or not node.has_label(TEST_LABEL)

    def aggregate(
        self,
        graph: PropertyGraph,
        root_path: str,
        config: AggregationConfig,
    ) -> list[Module]:
        """Aggregate the file nodes of graph into modules.

        Args:
            graph: Property graph to read file nodes from
            root_path: Root used for relative grouping
            config: Selection and grouping policy

        Returns:
            Modules in first-seen order of their module path; files keep
            graph node order. Empty when no file is eligible.

        Raises:
            ConfigError: If config.level is not a known aggregation level.
        """
        grouper = _grouper_for(config.level)
        ctx = _GroupingContext(root_path, config)

        logger.info("Aggregating modules at level %s", AggregationLevel(config.level).value)

        code_files = [node for node in graph.get_nodes() if self.is_eligible(node, config)]
        logger.info("Found %d code files to aggregate", len(code_files))

        files_by_module: dict[str, list[Node]] = {}
        for node in code_files:
            file_path = normalize_path(node.metadata.file_path or "")
            module_path = grouper(file_path, ctx)
            files_by_module.setdefault(module_path, []).append(node)

        modules = [
            _build_module(module_path, files)
            for module_path, files in files_by_module.items()
        ]

        logger.info(
            "Created %d modules from %d files", len(modules), len(code_files)
        )
        return modules


__all__ = ["ModuleAggregator"]
