"""Import target resolution for module dependency calculation.

Import edges in the property graph point either at a file node id or, when the
parser could not link them, at the raw import specifier. The resolver maps
both forms onto file node ids using an index of FILE nodes only; symbol nodes
also carry a ``filePath`` and would otherwise produce false matches.
"""

from __future__ import annotations

import posixpath
from typing import TYPE_CHECKING

from graph.models import NodeType
from utils import normalize_path

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from graph.models import Node

RELATIVE_PREFIXES = ("./", "../")


def is_relative_specifier(specifier: str) -> bool:
    return specifier.startswith(RELATIVE_PREFIXES)


def candidate_paths(joined: str) -> Iterator[str]:
    """Yield lookup candidates for a joined relative import, in priority order."""
    yield joined

    normalized = normalize_path(joined)
    yield normalized

    if normalized.endswith(".js"):
        yield normalized[: -len(".js")] + ".ts"
    if normalized.endswith(".jsx"):
        yield normalized[: -len(".jsx")] + ".tsx"

    for suffix in (".ts", ".tsx", ".js", "/index.ts", "/index.js"):
        yield normalized + suffix


class PathResolver:
    """Resolves import edge targets to file node ids."""

    def __init__(self, nodes: Iterable[Node]) -> None:
        self.path_to_file_id: dict[str, str] = {}
        self.file_id_to_path: dict[str, str] = {}

        for node in nodes:
            if node.type is not NodeType.FILE or not node.metadata.file_path:
                continue
            file_path = normalize_path(node.metadata.file_path)
            self.path_to_file_id.setdefault(file_path, node.id)
            self.file_id_to_path[node.id] = file_path

    def is_file_id(self, node_id: str) -> bool:
        return node_id in self.file_id_to_path

    def resolve(self, target: str, source_file_id: str) -> str | None:
        """Resolve an import target seen in source_file_id.

        Returns the file node id, or None for bare package specifiers and
        relative specifiers that match no indexed file.
        """
        if target in self.file_id_to_path:
            return target

        if not is_relative_specifier(target):
            return None

        source_path = self.file_id_to_path.get(source_file_id)
        if source_path is None:
            return None

        joined = posixpath.join(posixpath.dirname(source_path), target)
        for candidate in candidate_paths(joined):
            file_id = self.path_to_file_id.get(candidate)
            if file_id is not None:
                return file_id

        return None


__all__ = ["RELATIVE_PREFIXES", "PathResolver", "candidate_paths", "is_relative_specifier"]
