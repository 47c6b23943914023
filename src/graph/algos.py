"""Graph algorithms for module dependency graphs."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Mapping


@dataclass
class _Frame:
    """One suspended DFS call: a node and how far through its neighbours we are."""

    node: str
    neighbors: tuple[str, ...]
    position: int = 0


class _CycleSearchState:
    """Mutable state container for the iterative cycle search."""

    def __init__(self) -> None:
        self.visited: set[str] = set()
        self.on_stack: set[str] = set()
        self.depth: dict[str, int] = {}
        self.frames: list[_Frame] = []
        self.cycles: list[list[str]] = []

    def enter(self, node: str, graph: Mapping[str, Iterable[str]]) -> None:
        self.visited.add(node)
        self.on_stack.add(node)
        self.depth[node] = len(self.frames)
        self.frames.append(_Frame(node, tuple(graph[node])))

    def leave(self) -> None:
        frame = self.frames.pop()
        self.on_stack.remove(frame.node)
        del self.depth[frame.node]

    def report_cycle(self, start: str) -> None:
        start_index = self.depth.get(start)
        if start_index is None:
            msg = (
                f"Cycle search invariant violated: node {start!r} is marked "
                "on the recursion stack but has no frame."
            )
            raise RuntimeError(msg)
        self.cycles.append([frame.node for frame in self.frames[start_index:]])


def _search_from(
    root: str, graph: Mapping[str, Iterable[str]], state: _CycleSearchState
) -> None:
    """Depth-first search from root, reporting every back edge as a cycle."""
    state.enter(root, graph)

    while state.frames:
        frame = state.frames[-1]
        if frame.position >= len(frame.neighbors):
            state.leave()
            continue

        neighbor = frame.neighbors[frame.position]
        frame.position += 1

        if neighbor not in state.visited:
            if neighbor in graph:
                state.enter(neighbor, graph)
        elif neighbor in state.on_stack:
            state.report_cycle(neighbor)


def find_cycles(graph: Mapping[str, Iterable[str]]) -> list[list[str]]:
    """Find cycles in a directed graph by depth-first back-edge detection.

    Nodes are entered in mapping order and neighbours in iteration order.
    Whenever a neighbour is already on the current DFS path, the path slice
    from that neighbour to the current node is reported. The same underlying
    cycle can therefore be reported more than once, and reports are not
    guaranteed to be minimal. Neighbours that are not keys of ``graph`` are
    ignored.

    The search keeps an explicit frame stack instead of recursing, so deep
    dependency chains do not hit the interpreter recursion limit.

    Args:
        graph: Mapping of node -> nodes it points to

    Returns:
        List of cycles, each a list of nodes in path order
    """
    state = _CycleSearchState()

    for node in graph:
        if node not in state.visited:
            _search_from(node, graph, state)

    return state.cycles


def reachable(start: str, neighbors: Callable[[str], Iterable[str]]) -> set[str]:
    """Return every node reachable from start, excluding start itself.

    Breadth-first with a visited set, so cyclic graphs terminate. A cycle
    leading back to start does not add start to the result.
    """
    visited = {start}
    result: set[str] = set()
    queue = deque([start])

    while queue:
        node = queue.popleft()
        for neighbor in neighbors(node):
            if neighbor in visited:
                continue
            visited.add(neighbor)
            result.add(neighbor)
            queue.append(neighbor)

    return result


__all__ = [
    "_CycleSearchState",
    "_Frame",
    "_search_from",
    "find_cycles",
    "reachable",
]
