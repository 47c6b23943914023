from __future__ import annotations

from graph.models import Edge, EdgeType, Node, NodeType, PropertyGraph
from modules.models import Module
from projection.builder import build_module_projection
from projection.projection import ModuleProjection
from rules.config import AggregationConfig


def _file(node_id: str, file_path: str, *, lines: int = 0) -> Node:
    return Node(
        id=node_id,
        type=NodeType.FILE,
        metadata={"filePath": file_path, "startLine": 0, "endLine": lines},
    )


def _import(from_id: str, to_id: str) -> Edge:
    return Edge(
        id=f"{from_id}->{to_id}", type=EdgeType.IMPORTS, from_id=from_id, to_id=to_id
    )


def _project(nodes: list[Node], edges: list[Edge]) -> ModuleProjection:
    graph = PropertyGraph(id="g", nodes=nodes, edges=edges)
    return build_module_projection(graph, "/test", AggregationConfig(include_tests=True))


def _module_at(projection: ModuleProjection, path: str) -> Module:
    [module] = projection.get_modules_by_path(path)
    return module


def test_chain_across_three_directories() -> None:
    projection = _project(
        [_file("a", "/test/a/A.ts"), _file("b", "/test/b/B.ts"), _file("c", "/test/c/C.ts")],
        [_import("a", "b"), _import("b", "c")],
    )
    a, b, c = (_module_at(projection, path) for path in ("/test/a", "/test/b", "/test/c"))

    assert projection.get_module_count() == 3
    assert a.dependencies == {b.id}
    assert b.dependencies == {c.id}
    assert c.dependencies == set()
    assert projection.get_cycles() == []
    assert projection.get_root_modules() == [a]
    assert projection.get_leaf_modules() == [c]


def test_mutual_imports_within_one_directory() -> None:
    projection = _project(
        [_file("x", "/test/a/X.ts"), _file("y", "/test/a/Y.ts")],
        [_import("x", "./Y"), _import("y", "./X")],
    )

    [module] = projection.get_modules()
    assert module.metrics.dependency_count == 0
    assert module.metrics.dependent_count == 0
    assert projection.get_cycles() == []


def test_cycle_between_two_of_three_modules() -> None:
    projection = _project(
        [_file("a", "/test/a/A.ts"), _file("b", "/test/b/B.ts"), _file("c", "/test/c/C.ts")],
        [_import("a", "b"), _import("a", "c"), _import("b", "a")],
    )
    a, b, c = (_module_at(projection, path) for path in ("/test/a", "/test/b", "/test/c"))

    cycles = projection.get_cycles()

    assert cycles == [[a, b]]
    assert c.metrics.dependency_count == 0
    assert c.dependents == {a.id}
    assert projection.get_metrics().cyclic_dependencies == 1


def test_cycles_are_reported_once_per_back_edge() -> None:
    projection = _project(
        [_file("a", "/test/a/A.ts"), _file("b", "/test/b/B.ts"), _file("c", "/test/c/C.ts")],
        [_import("a", "b"), _import("b", "a"), _import("b", "c"), _import("c", "a")],
    )
    a, b, c = (_module_at(projection, path) for path in ("/test/a", "/test/b", "/test/c"))

    assert projection.get_cycles() == [[a, b], [a, b, c]]


def test_metrics_and_summary() -> None:
    projection = _project(
        [
            _file("a1", "/test/a/A1.ts", lines=10),
            _file("a2", "/test/a/A2.ts", lines=30),
            _file("b", "/test/b/B.ts", lines=5),
            _file("c", "/test/c/C.ts"),
        ],
        [_import("a1", "b"), _import("a2", "c"), _import("b", "c")],
    )

    metrics = projection.get_metrics()
    summary = projection.get_summary()

    assert metrics.total_modules == 3
    assert metrics.total_files == 4
    assert metrics.total_dependencies == 3
    assert metrics.average_dependencies_per_module == 1.0
    assert metrics.max_dependencies == 2
    assert metrics.cyclic_dependencies == 0
    assert summary.largest_module == "a"
    assert summary.root_modules == 1
    assert summary.leaf_modules == 1
    assert _module_at(projection, "/test/a").metrics.total_lines == 40


def test_empty_projection_metrics() -> None:
    projection = _project([], [])

    metrics = projection.get_metrics()

    assert metrics.total_modules == 0
    assert metrics.average_dependencies_per_module == 0.0
    assert metrics.max_dependencies == 0
    assert projection.get_summary().largest_module is None


def test_lookup_helpers() -> None:
    projection = _project(
        [_file("a", "/test/src/a/A.ts"), _file("b", "/test/lib/b/B.ts")],
        [_import("a", "b")],
    )
    a = _module_at(projection, "/test/src")

    assert projection.get_module(a.id) is a
    assert projection.get_module("module-missing") is None
    assert [m.name for m in projection.get_modules_by_path("/test/lib")] == ["b"]
    assert projection.get_modules_with_dependencies() == [a]


def test_projection_metadata() -> None:
    projection = _project(
        [_file("a", "/test/a/A.ts"), _file("b", "/test/b/B.ts")],
        [_import("a", "b")],
    )

    assert projection.id == "proj-module-g"
    assert projection.metadata.source_graph_id == "g"
    assert projection.metadata.root_path == "/test"
    assert projection.metadata.total_files == 2
    assert projection.metadata.total_dependencies == 1
    assert projection.metadata.configuration["level"] == "directory"
