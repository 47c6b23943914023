"""Property graph input models and graph algorithms."""

from graph.algos import find_cycles, reachable
from graph.models import Edge, EdgeType, Node, NodeType, PropertyGraph

__all__ = [
    "Edge",
    "EdgeType",
    "Node",
    "NodeType",
    "PropertyGraph",
    "find_cycles",
    "reachable",
]
