"""Flattened graph view of a module projection for layout and export."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from rules.config import GraphViewConfig

if TYPE_CHECKING:
    from modules.models import Module
    from projection.projection import ModuleProjection

logger = logging.getLogger(__name__)

VIEW_PROJECTION_TYPE = "module-dependency"

_HIGH = "#ff6b6b"
_MEDIUM = "#feca57"
_LOW = "#48dbfb"
_LEAF = "#1dd1a1"
_DEFAULT = "#4ecdc4"


class _CamelModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class GraphViewNode(_CamelModel):
    id: str
    label: str
    type: str = "module"
    color: str = _DEFAULT
    width: int = 100
    height: int = 50
    metadata: dict[str, Any] = Field(default_factory=dict)


class GraphViewEdge(_CamelModel):
    id: str
    from_id: str = Field(alias="from")
    to_id: str = Field(alias="to")
    metadata: dict[str, Any] = Field(default_factory=dict)


class GraphViewMetadata(_CamelModel):
    projection_type: str = Field(default=VIEW_PROJECTION_TYPE, alias="projectionType")
    module_count: int = Field(alias="moduleCount")
    dependency_count: int = Field(alias="dependencyCount")


class GraphView(_CamelModel):
    """Nodes and edges ready for a layout engine or exporter."""

    id: str
    nodes: list[GraphViewNode] = Field(default_factory=list)
    edges: list[GraphViewEdge] = Field(default_factory=list)
    metadata: GraphViewMetadata

    def get_node_count(self) -> int:
        return len(self.nodes)

    def get_edge_count(self) -> int:
        return len(self.edges)

    def to_dict(self) -> dict[str, Any]:
        """Return the camelCase wire shape."""
        return self.model_dump(by_alias=True)


def _node_color(module: Module, scheme: str) -> str:
    metrics = module.metrics
    if scheme == "complexity":
        if metrics.file_count > 50:
            return _HIGH
        if metrics.file_count > 20:
            return _MEDIUM
        return _LOW

    if scheme == "dependencies":
        if metrics.dependency_count > 10:
            return _HIGH
        if metrics.dependency_count > 5:
            return _MEDIUM
        if metrics.dependency_count > 0:
            return _LOW
        return _LEAF

    return _DEFAULT


def _node_size(module: Module, mode: str) -> tuple[int, int]:
    if mode == "proportional":
        file_count = module.metrics.file_count
        return 80 + min(file_count * 2, 100), 40 + min(file_count, 30)
    return 100, 50


def edge_id(from_id: str, to_id: str) -> str:
    return f"{from_id} -> {to_id}"


class GraphViewBuilder:
    """Converts module projections into graph views."""

    def build(
        self,
        projection: ModuleProjection,
        config: GraphViewConfig | None = None,
    ) -> GraphView:
        config = config if config is not None else GraphViewConfig()
        modules = projection.get_modules()

        nodes = [self._create_node(module, config) for module in modules]
        edges = [
            GraphViewEdge(id=edge_id(module.id, dep_id), from_id=module.id, to_id=dep_id)
            for module in modules
            for dep_id in module.dependencies
        ]

        view = GraphView(
            id=f"view-{projection.id}",
            nodes=nodes,
            edges=edges,
            metadata=GraphViewMetadata(
                module_count=projection.get_module_count(),
                dependency_count=len(edges),
            ),
        )

        logger.info(
            "Graph view created: %d nodes, %d edges",
            view.get_node_count(),
            view.get_edge_count(),
        )
        return view

    def _create_node(self, module: Module, config: GraphViewConfig) -> GraphViewNode:
        width, height = _node_size(module, config.node_size)
        metadata: dict[str, Any] = {}
        if config.include_metrics:
            metadata = {
                "fileCount": module.metrics.file_count,
                "dependencyCount": module.metrics.dependency_count,
                "dependentCount": module.metrics.dependent_count,
                "totalLines": module.metrics.total_lines,
                "path": module.path,
            }

        return GraphViewNode(
            id=module.id,
            label=module.name if config.show_labels else "",
            color=_node_color(module, config.color_scheme),
            width=width,
            height=height,
            metadata=metadata,
        )


__all__ = [
    "GraphView",
    "GraphViewBuilder",
    "GraphViewEdge",
    "GraphViewMetadata",
    "GraphViewNode",
    "edge_id",
]
