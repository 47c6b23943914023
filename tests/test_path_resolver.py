from __future__ import annotations

from graph.models import Node, NodeType
from modules.resolver import PathResolver, candidate_paths, is_relative_specifier


def _node(node_id: str, file_path: str | None, node_type: NodeType = NodeType.FILE) -> Node:
    return Node.model_validate(
        {"id": node_id, "type": node_type, "metadata": {"filePath": file_path}}
    )


def test_is_relative_specifier() -> None:
    assert is_relative_specifier("./File")
    assert is_relative_specifier("../sibling/File")
    assert not is_relative_specifier("lodash")
    assert not is_relative_specifier("/src/a/File.ts")
    assert not is_relative_specifier(".hidden")


def test_candidate_paths_order() -> None:
    assert list(candidate_paths("/src/a/../lib/util.js")) == [
        "/src/a/../lib/util.js",
        "/src/lib/util.js",
        "/src/lib/util.ts",
        "/src/lib/util.js.ts",
        "/src/lib/util.js.tsx",
        "/src/lib/util.js.js",
        "/src/lib/util.js/index.ts",
        "/src/lib/util.js/index.js",
    ]


def test_resolves_known_file_id_directly() -> None:
    resolver = PathResolver([_node("a", "/src/a/File.ts"), _node("b", "/src/b/File.ts")])

    assert resolver.resolve("b", "a") == "b"


def test_resolves_relative_sibling_preferring_ts_over_tsx() -> None:
    source = _node("a", "/src/a/File.ts")
    ts_target = _node("ts", "/src/sibling/File.ts")
    tsx_target = _node("tsx", "/src/sibling/File.tsx")

    both = PathResolver([source, tsx_target, ts_target])
    only_tsx = PathResolver([source, tsx_target])
    neither = PathResolver([source])

    assert both.resolve("../sibling/File", "a") == "ts"
    assert only_tsx.resolve("../sibling/File", "a") == "tsx"
    assert neither.resolve("../sibling/File", "a") is None


def test_resolves_js_suffix_to_ts_source() -> None:
    resolver = PathResolver([_node("a", "/src/a/File.ts"), _node("u", "/src/a/util.ts")])

    assert resolver.resolve("./util.js", "a") == "u"


def test_resolves_jsx_suffix_to_tsx_source() -> None:
    resolver = PathResolver([_node("a", "/src/a/File.ts"), _node("v", "/src/a/View.tsx")])

    assert resolver.resolve("./View.jsx", "a") == "v"


def test_resolves_directory_index() -> None:
    resolver = PathResolver(
        [_node("a", "/src/a/File.ts"), _node("idx", "/src/lib/index.js")]
    )

    assert resolver.resolve("../lib", "a") == "idx"


def test_bare_specifier_never_resolves_by_path() -> None:
    resolver = PathResolver([_node("a", "/src/a/File.ts"), _node("l", "/src/a/lodash.ts")])

    assert resolver.resolve("lodash", "a") is None


def test_index_only_contains_file_nodes() -> None:
    resolver = PathResolver(
        [
            _node("a", "/src/a/File.ts"),
            _node("cls", "/src/b/Thing.ts", node_type=NodeType.CLASS),
            _node("nopath", None),
        ]
    )

    assert resolver.resolve("../b/Thing", "a") is None
    assert resolver.resolve("cls", "a") is None
    assert resolver.is_file_id("a")
    assert not resolver.is_file_id("cls")
    assert not resolver.is_file_id("nopath")
