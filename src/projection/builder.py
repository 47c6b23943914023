"""Build module projections from property graphs."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from modules.aggregator import ModuleAggregator
from modules.calculator import ModuleDependencyCalculator
from projection.projection import ModuleProjection, ProjectionMetadata
from rules.config import AggregationConfig
from utils import normalize_path

if TYPE_CHECKING:
    from graph.models import PropertyGraph

logger = logging.getLogger(__name__)


class ModuleProjectionBuilder:
    """Runs aggregation, dependency calculation and projection in order."""

    def __init__(self, root_path: str, config: AggregationConfig | None = None) -> None:
        self.root_path = normalize_path(root_path)
        self.config = config if config is not None else AggregationConfig()
        self.aggregator = ModuleAggregator()
        self.calculator = ModuleDependencyCalculator()

    def build(self, graph: PropertyGraph) -> ModuleProjection:
        logger.info(
            "Creating module projection for graph %s at level %s",
            graph.id,
            getattr(self.config.level, "value", self.config.level),
        )

        try:
            modules = self.aggregator.aggregate(graph, self.root_path, self.config)
            self.calculator.calculate(modules, graph)
        except Exception:
            logger.exception("Failed to create module projection for graph %s", graph.id)
            raise

        metadata = ProjectionMetadata(
            source_graph_id=graph.id,
            root_path=self.root_path,
            aggregation_level=self.config.level,
            configuration=self.config.model_dump(mode="json"),
            total_files=sum(len(module.files) for module in modules),
            total_dependencies=sum(module.metrics.dependency_count for module in modules),
        )
        projection = ModuleProjection(f"proj-module-{graph.id}", metadata, modules)

        logger.info(
            "Module projection created: %d modules, %d dependencies",
            projection.get_module_count(),
            metadata.total_dependencies,
        )
        return projection


def build_module_projection(
    graph: PropertyGraph,
    root_path: str,
    config: AggregationConfig | None = None,
) -> ModuleProjection:
    """Build a module projection with a one-off builder."""
    return ModuleProjectionBuilder(root_path, config).build(graph)


__all__ = ["ModuleProjectionBuilder", "build_module_projection"]
