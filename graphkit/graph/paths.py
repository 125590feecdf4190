"""Unweighted shortest-path search.

Directed and undirected searches share one BFS and differ only in which
neighbors they expand. Edge weights are ignored; path length is hop count.
Among equally short paths the one found first in BFS queue order wins.

Result conventions:
    [v]   source == target (no self-loop needed)
    []    either endpoint missing, or target unreachable
"""

from collections import deque
from collections.abc import Callable, Hashable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .matrix_graph import Graph

Vertex = Hashable


def _bfs_path(
    graph: "Graph",
    source: Vertex,
    target: Vertex,
    expand: Callable[[Vertex], list[Vertex]],
) -> list[Vertex]:
    if source not in graph or target not in graph:
        return []
    if source == target:
        return [source]

    predecessors: dict[Vertex, Vertex] = {}
    discovered: set[Vertex] = {source}
    queue: deque[Vertex] = deque([source])

    while queue:
        current = queue.popleft()
        if current == target:
            path = [current]
            while path[-1] in predecessors:
                path.append(predecessors[path[-1]])
            path.reverse()
            return path

        for neighbor in expand(current):
            if neighbor not in discovered:
                discovered.add(neighbor)
                predecessors[neighbor] = current
                queue.append(neighbor)

    return []


def shortest_path(graph: "Graph", source: Vertex, target: Vertex) -> list[Vertex]:
    """Fewest-hop path following edge direction."""
    return _bfs_path(graph, source, target, graph.neighbors)


def shortest_path_undirected(
    graph: "Graph", source: Vertex, target: Vertex
) -> list[Vertex]:
    """Fewest-hop path treating every edge as traversable both ways."""
    return _bfs_path(graph, source, target, graph.undirected_neighbors)
