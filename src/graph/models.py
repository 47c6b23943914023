"""Property graph input models.

The property graph is produced by an external parser. These models describe
the subset of its node and edge records that module projection consumes, and
accept both the camelCase wire keys (``filePath``, ``fromId``) and the
snake_case attribute names.
"""

from __future__ import annotations

from enum import Enum
from pydantic import BaseModel, ConfigDict, Field

CODE_DOMAIN = "code"
TEST_LABEL = "Test"


class NodeType(str, Enum):
    """Kinds of code elements in a property graph."""

    FILE = "file"
    DIRECTORY = "directory"
    MODULE = "module"
    CLASS = "class"
    INTERFACE = "interface"
    FUNCTION = "function"
    METHOD = "method"
    VARIABLE = "variable"
    TYPE = "type"


class EdgeType(str, Enum):
    """Kinds of relationships between property graph nodes."""

    IMPORTS = "imports"
    EXPORTS = "exports"
    CONTAINS = "contains"
    CALLS = "calls"
    EXTENDS = "extends"
    IMPLEMENTS = "implements"
    REFERENCES = "references"
    DEPENDS_ON = "depends_on"


class _WireModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class SourceMetadata(_WireModel):
    """Where a node or edge came from."""

    domain: str = Field(default=CODE_DOMAIN, description="Source domain tag")
    extension: str | None = Field(default=None, description="Parser extension")
    version: str | None = Field(default=None, description="Parser version")


class NodeMetadata(_WireModel):
    """File location of a node. Parsers may attach extra keys."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    file_path: str | None = Field(default=None, alias="filePath")
    start_line: int | None = Field(default=None, alias="startLine")
    end_line: int | None = Field(default=None, alias="endLine")


class Node(_WireModel):
    """A code element."""

    id: str
    type: NodeType
    name: str = ""
    labels: frozenset[str] = Field(default_factory=frozenset)
    metadata: NodeMetadata = Field(default_factory=NodeMetadata)
    source: SourceMetadata = Field(default_factory=SourceMetadata)

    def is_from_domain(self, domain: str) -> bool:
        return self.source.domain == domain

    def has_label(self, label: str) -> bool:
        return label in self.labels


class Edge(_WireModel):
    """A directed relationship.

    ``to_id`` is either a node id or, for import edges the parser could not
    link, the raw import specifier string.
    """

    id: str
    type: EdgeType
    from_id: str = Field(alias="fromId")
    to_id: str = Field(alias="toId")


class PropertyGraph(_WireModel):
    """Read-only container of nodes and edges, in insertion order."""

    id: str
    nodes: list[Node] = Field(default_factory=list)
    edges: list[Edge] = Field(default_factory=list)

    def add_node(self, node: Node) -> None:
        self.nodes.append(node)

    def add_edge(self, edge: Edge) -> None:
        self.edges.append(edge)

    def get_nodes(self) -> list[Node]:
        return list(self.nodes)

    def get_edges(self) -> list[Edge]:
        return list(self.edges)

    def get_node(self, node_id: str) -> Node | None:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None


__all__ = [
    "CODE_DOMAIN",
    "TEST_LABEL",
    "Edge",
    "EdgeType",
    "Node",
    "NodeMetadata",
    "NodeType",
    "PropertyGraph",
    "SourceMetadata",
]
