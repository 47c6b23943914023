"""Module projection and its graph view."""

from projection.builder import ModuleProjectionBuilder, build_module_projection
from projection.projection import (
    ModuleProjection,
    ProjectionMetadata,
    ProjectionMetrics,
    ProjectionSummary,
)
from projection.view import GraphView, GraphViewBuilder

__all__ = [
    "GraphView",
    "GraphViewBuilder",
    "ModuleProjection",
    "ModuleProjectionBuilder",
    "ProjectionMetadata",
    "ProjectionMetrics",
    "ProjectionSummary",
    "build_module_projection",
]
