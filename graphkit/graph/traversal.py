"""Depth-first and breadth-first traversal over a ``Graph``.

Both walks follow outgoing edges in column order and return the visit
order. An optional ``visit`` callback fires once per vertex as it is
visited, which lets callers stream or animate a traversal.
"""

from collections import deque
from collections.abc import Callable, Hashable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .matrix_graph import Graph

Vertex = Hashable


def dfs(
    graph: "Graph",
    start: Vertex,
    visit: Callable[[Vertex], None] | None = None,
) -> list[Vertex]:
    """Depth-first pre-order from ``start``.

    Uses an explicit stack rather than recursion so long chains cannot hit
    the interpreter's recursion limit. Neighbors are pushed in reverse so
    they pop in column order, giving the same order as the recursive walk.

    Returns:
        Visited vertices, ``start`` first; empty if ``start`` is not in the graph.
    """
    if start not in graph:
        return []

    visited: set[Vertex] = set()
    order: list[Vertex] = []
    stack: list[Vertex] = [start]

    while stack:
        current = stack.pop()
        if current in visited:
            continue

        visited.add(current)
        order.append(current)
        if visit is not None:
            visit(current)

        for neighbor in reversed(graph.neighbors(current)):
            if neighbor not in visited:
                stack.append(neighbor)

    return order


def bfs(
    graph: "Graph",
    start: Vertex,
    visit: Callable[[Vertex], None] | None = None,
) -> list[Vertex]:
    """Breadth-first order from ``start``.

    Vertices are marked visited when dequeued, so a vertex may sit in the
    queue more than once; later copies are skipped.

    Returns:
        Visited vertices, ``start`` first; empty if ``start`` is not in the graph.
    """
    if start not in graph:
        return []

    visited: set[Vertex] = set()
    order: list[Vertex] = []
    queue: deque[Vertex] = deque([start])

    while queue:
        current = queue.popleft()
        if current in visited:
            continue

        visited.add(current)
        order.append(current)
        if visit is not None:
            visit(current)

        for neighbor in graph.neighbors(current):
            if neighbor not in visited:
                queue.append(neighbor)

    return order
