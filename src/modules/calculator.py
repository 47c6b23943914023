"""Module-level dependency calculation from property graph import edges."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING

from graph.algos import reachable
from graph.models import EdgeType
from modules.resolver import PathResolver

if TYPE_CHECKING:
    from graph.models import Edge, PropertyGraph
    from modules.models import Module

logger = logging.getLogger(__name__)


@dataclass
class DependencyStats:
    """Edge tallies from the last calculate() call."""

    total_edges: int = 0
    resolved: int = 0
    unresolved: int = 0
    same_module: int = 0
    cross_module: int = 0
    unmapped_source: int = 0
    ungrouped_target: int = 0


def _register_dependency(source: Module, target: Module) -> None:
    source.add_dependency(target.id)
    target.add_dependent(source.id)


class ModuleDependencyCalculator:
    """Derives module-to-module dependencies from file-level import edges."""

    def __init__(self) -> None:
        self.stats = DependencyStats()

    def calculate(self, modules: list[Module], graph: PropertyGraph) -> None:
        """Fill in dependencies, dependents and dependency counts, then seal.

        Indices are local to this call. Each module may take part in exactly
        one calculation; a sealed module raises RuntimeError on write.
        """
        sealed = [module.id for module in modules if module.sealed]
        if sealed:
            msg = f"Modules already sealed by a previous calculation: {', '.join(sealed)}"
            raise RuntimeError(msg)

        logger.info("Calculating dependencies for %d modules", len(modules))

        stats = DependencyStats()
        self.stats = stats

        resolver = PathResolver(graph.get_nodes())
        file_id_to_module: dict[str, Module] = {}
        for module in modules:
            for file_id in module.files:
                file_id_to_module[file_id] = module

        import_edges = [edge for edge in graph.get_edges() if edge.type is EdgeType.IMPORTS]
        logger.info("Processing %d import edges", len(import_edges))

        for edge in import_edges:
            stats.total_edges += 1
            self._process_edge(edge, resolver, file_id_to_module, stats)

        for module in modules:
            module.seal()

        logger.info(
            "Calculated %d module dependencies (%d resolved, %d unresolved, "
            "%d same-module, %d cross-module edges)",
            sum(module.metrics.dependency_count for module in modules),
            stats.resolved,
            stats.unresolved,
            stats.same_module,
            stats.cross_module,
        )

    def _process_edge(
        self,
        edge: Edge,
        resolver: PathResolver,
        file_id_to_module: dict[str, Module],
        stats: DependencyStats,
    ) -> None:
        source_module = file_id_to_module.get(edge.from_id)
        if source_module is None:
            stats.unmapped_source += 1
            return

        target_file_id = resolver.resolve(edge.to_id, edge.from_id)
        if target_file_id is None:
            stats.unresolved += 1
            logger.debug("Unresolved import %r from %s", edge.to_id, edge.from_id)
            return
        stats.resolved += 1

        target_module = file_id_to_module.get(target_file_id)
        if target_module is None:
            stats.ungrouped_target += 1
            return

        if source_module.id == target_module.id:
            stats.same_module += 1
            return

        stats.cross_module += 1
        _register_dependency(source_module, target_module)

    def get_transitive_dependencies(self, module_id: str, modules: list[Module]) -> set[str]:
        """Ids of every module reachable through dependencies, origin excluded."""
        modules_by_id = {module.id: module for module in modules}
        if module_id not in modules_by_id:
            return set()

        def neighbors(node: str) -> tuple[str, ...]:
            module = modules_by_id.get(node)
            return tuple(module.dependencies) if module is not None else ()

        return reachable(module_id, neighbors)

    def get_transitive_dependents(self, module_id: str, modules: list[Module]) -> set[str]:
        """Ids of every module reachable through dependents, origin excluded."""
        modules_by_id = {module.id: module for module in modules}
        if module_id not in modules_by_id:
            return set()

        def neighbors(node: str) -> tuple[str, ...]:
            module = modules_by_id.get(node)
            return tuple(module.dependents) if module is not None else ()

        return reachable(module_id, neighbors)


__all__ = ["DependencyStats", "ModuleDependencyCalculator"]
