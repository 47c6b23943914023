"""Module-level projection of a property graph."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

from graph.algos import find_cycles
from rules.config import AggregationLevel

if TYPE_CHECKING:
    from modules.models import Module

MODULE_PROJECTION_TYPE = "module"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ProjectionMetadata(BaseModel):
    """Provenance of a module projection."""

    source_graph_id: str
    projection_type: str = Field(default=MODULE_PROJECTION_TYPE)
    root_path: str
    aggregation_level: AggregationLevel
    configuration: dict[str, Any] = Field(default_factory=dict)
    generated_at: datetime = Field(default_factory=_utc_now)
    total_files: int = 0
    total_dependencies: int = 0


class ProjectionMetrics(BaseModel):
    """Aggregate figures across all modules of a projection."""

    total_modules: int
    total_files: int
    total_dependencies: int
    average_dependencies_per_module: float
    max_dependencies: int
    cyclic_dependencies: int


class ProjectionSummary(ProjectionMetrics):
    """Metrics plus a few headline facts about the module set."""

    largest_module: str | None = None
    root_modules: int = 0
    leaf_modules: int = 0


class ModuleProjection:
    """A finalized set of modules and their dependency relations."""

    def __init__(
        self,
        projection_id: str,
        metadata: ProjectionMetadata,
        modules: list[Module] | None = None,
    ) -> None:
        self.id = projection_id
        self.metadata = metadata
        self._modules: dict[str, Module] = {module.id: module for module in modules or []}

    def get_module(self, module_id: str) -> Module | None:
        return self._modules.get(module_id)

    def get_modules(self) -> list[Module]:
        return list(self._modules.values())

    def get_module_count(self) -> int:
        return len(self._modules)

    def get_modules_with_dependencies(self) -> list[Module]:
        return [module for module in self._modules.values() if not module.is_leaf()]

    def get_modules_by_path(self, path_prefix: str) -> list[Module]:
        return [
            module for module in self._modules.values() if module.path.startswith(path_prefix)
        ]

    def get_root_modules(self) -> list[Module]:
        """Modules no other module in this projection imports."""
        return [module for module in self._modules.values() if module.is_root()]

    def get_leaf_modules(self) -> list[Module]:
        """Modules that import no other module."""
        return [module for module in self._modules.values() if module.is_leaf()]

    def get_cycles(self) -> list[list[Module]]:
        """Detect circular dependencies.

        Every back edge found by a depth-first walk over the dependency
        relation yields one cycle, so a cycle reachable from several entry
        points can be reported more than once.
        """
        graph = {module_id: module.dependencies for module_id, module in self._modules.items()}
        return [
            [self._modules[module_id] for module_id in cycle] for cycle in find_cycles(graph)
        ]

    def get_metrics(self) -> ProjectionMetrics:
        modules = self.get_modules()
        dependency_counts = [module.metrics.dependency_count for module in modules]
        total_dependencies = sum(dependency_counts)

        return ProjectionMetrics(
            total_modules=len(modules),
            total_files=sum(len(module.files) for module in modules),
            total_dependencies=total_dependencies,
            average_dependencies_per_module=(
                total_dependencies / len(modules) if modules else 0.0
            ),
            max_dependencies=max(dependency_counts, default=0),
            cyclic_dependencies=len(self.get_cycles()),
        )

    def get_summary(self) -> ProjectionSummary:
        modules = self.get_modules()
        largest = max(modules, key=lambda module: len(module.files), default=None)

        return ProjectionSummary(
            **self.get_metrics().model_dump(),
            largest_module=largest.name if largest is not None else None,
            root_modules=len(self.get_root_modules()),
            leaf_modules=len(self.get_leaf_modules()),
        )


__all__ = [
    "MODULE_PROJECTION_TYPE",
    "ModuleProjection",
    "ProjectionMetadata",
    "ProjectionMetrics",
    "ProjectionSummary",
]
