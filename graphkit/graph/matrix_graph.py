"""Dense adjacency-matrix graph.

``Graph`` owns an ordered list of vertex labels and a square weight matrix
where ``matrix[i][j]`` is the weight of the directed edge from
``vertices[i]`` to ``vertices[j]`` (``0`` means no edge). Every mutation
either completes or leaves the graph untouched; lookups that miss return
``False`` or ``[]`` rather than raising.

Usage:
    graph = Graph([[0, 1], [0, 0]], ["A", "B"])
    graph.add_vertex("C")
    graph.add_edge("B", "C", weight=3)
    graph.bfs("A")  # ["A", "B", "C"]
"""

from collections.abc import Callable, Hashable, Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any

import structlog

from .errors import StructureError
from .parsers import MatrixFormat, load_matrix, parse_matrix_string
from .paths import shortest_path, shortest_path_undirected
from .structure import Relationship, build_adjacency_matrix
from .traversal import bfs, dfs

logger = structlog.get_logger(__name__)

Vertex = Hashable
Weight = float


class Graph:
    """Directed, weighted graph stored as a dense adjacency matrix.

    Args:
        matrix: Square weight matrix. Deep-copied so later changes to the
            caller's lists do not leak in.
        vertices: Labels for the matrix rows. Defaults to ``0..n-1``. When
            given without a matrix, the graph starts with those vertices
            and no edges.

    Raises:
        StructureError: If the matrix is not square, the label count does not
            match the matrix size, or labels repeat.
    """

    def __init__(
        self,
        matrix: Sequence[Sequence[Weight]] | None = None,
        vertices: Sequence[Vertex] | None = None,
    ) -> None:
        if matrix is not None:
            rows = [list(row) for row in matrix]
            labels = list(vertices) if vertices is not None else list(range(len(rows)))
        elif vertices is not None:
            labels = list(vertices)
            rows = [[0] * len(labels) for _ in labels]
        else:
            rows, labels = [], []

        self._validate(rows, labels)
        self._matrix: list[list[Weight]] = rows
        self._vertices: list[Vertex] = labels

    @staticmethod
    def _validate(matrix: list[list[Weight]], vertices: list[Vertex]) -> None:
        size = len(matrix)
        if any(len(row) != size for row in matrix):
            raise StructureError("Matrix must be square")
        if len(vertices) != size:
            raise StructureError(
                f"Vertices count ({len(vertices)}) must match matrix size ({size})"
            )
        if len(set(vertices)) != len(vertices):
            raise StructureError("Vertex labels must be unique")

    # Constructors

    @classmethod
    def from_file(
        cls,
        path: str | Path,
        vertices: Sequence[Vertex] | None = None,
        fmt: MatrixFormat | str | None = None,
    ) -> "Graph":
        """Load a graph from a .csv, .json or text matrix file."""
        return cls(load_matrix(path, fmt), vertices)

    @classmethod
    def from_string(
        cls, matrix_string: str, vertices: Sequence[Vertex] | None = None
    ) -> "Graph":
        """Build a graph from an inline matrix (rows on lines, cells split by spaces/commas)."""
        return cls(parse_matrix_string(matrix_string), vertices)

    @classmethod
    def from_relationships(
        cls,
        relationships: Sequence[Relationship | Mapping[str, Any]],
        vertices: Sequence[Vertex],
        default_weight: Weight = 1,
    ) -> "Graph":
        """Build a graph from ``{from, to, weight}`` relationships over ``vertices``."""
        matrix = build_adjacency_matrix(relationships, vertices, default_weight)
        return cls(matrix, vertices)

    # State access

    @property
    def matrix(self) -> list[list[Weight]]:
        """A copy of the weight matrix."""
        return [list(row) for row in self._matrix]

    @property
    def vertices(self) -> list[Vertex]:
        """A copy of the vertex labels in index order."""
        return list(self._vertices)

    def __len__(self) -> int:
        return len(self._vertices)

    def __contains__(self, vertex: object) -> bool:
        return vertex in self._vertices

    def __repr__(self) -> str:
        return f"Graph(vertices={self._vertices!r}, edges={self.edge_count})"

    def __str__(self) -> str:
        return f"Graph with {len(self._vertices)} vertices: {self._vertices}"

    def index_of(self, vertex: Vertex) -> int | None:
        """Row/column index of ``vertex``, or None if absent."""
        try:
            return self._vertices.index(vertex)
        except ValueError:
            return None

    # Mutation

    def add_vertex(self, vertex: Vertex) -> bool:
        """Append a vertex with no edges. Returns False if it already exists."""
        if vertex in self._vertices:
            return False

        self._vertices.append(vertex)
        for row in self._matrix:
            row.append(0)
        self._matrix.append([0] * len(self._vertices))
        return True

    def remove_vertex(self, vertex: Vertex) -> bool:
        """Remove a vertex with its row and column. Returns False if absent."""
        index = self.index_of(vertex)
        if index is None:
            return False

        del self._vertices[index]
        del self._matrix[index]
        for row in self._matrix:
            del row[index]
        return True

    def add_edge(self, source: Vertex, target: Vertex, weight: Weight = 1) -> bool:
        """Set the weight of ``source -> target``, overwriting any existing weight.

        Returns False if either endpoint is missing.
        """
        i, j = self.index_of(source), self.index_of(target)
        if i is None or j is None:
            return False

        self._matrix[i][j] = weight
        return True

    def remove_edge(self, source: Vertex, target: Vertex) -> bool:
        """Clear ``source -> target``. Returns False if either endpoint is missing."""
        i, j = self.index_of(source), self.index_of(target)
        if i is None or j is None:
            return False

        self._matrix[i][j] = 0
        return True

    def relabel(self, vertices: Sequence[Vertex]) -> bool:
        """Replace all vertex labels at once.

        Returns False, leaving labels unchanged, if the count differs from
        the matrix size or the new labels repeat.
        """
        labels = list(vertices)
        if len(labels) != len(self._vertices) or len(set(labels)) != len(labels):
            return False
        self._vertices = labels
        return True

    # Queries

    def has_edge(self, source: Vertex, target: Vertex) -> bool:
        i, j = self.index_of(source), self.index_of(target)
        if i is None or j is None:
            return False
        return self._matrix[i][j] != 0

    def edge_weight(self, source: Vertex, target: Vertex) -> Weight:
        """Weight of ``source -> target``; 0 when absent."""
        i, j = self.index_of(source), self.index_of(target)
        if i is None or j is None:
            return 0
        return self._matrix[i][j]

    def neighbors(self, vertex: Vertex) -> list[Vertex]:
        """Targets of the vertex's outgoing edges, in column order."""
        index = self.index_of(vertex)
        if index is None:
            return []
        return [
            self._vertices[j]
            for j, weight in enumerate(self._matrix[index])
            if weight != 0
        ]

    def undirected_neighbors(self, vertex: Vertex) -> list[Vertex]:
        """Vertices joined to ``vertex`` by an edge in either direction, in column order."""
        index = self.index_of(vertex)
        if index is None:
            return []
        return [
            self._vertices[j]
            for j in range(len(self._vertices))
            if self._matrix[index][j] != 0 or self._matrix[j][index] != 0
        ]

    def edges(self) -> Iterator[tuple[Vertex, Vertex, Weight]]:
        """Yield ``(source, target, weight)`` for every non-zero cell, row by row."""
        for i, row in enumerate(self._matrix):
            for j, weight in enumerate(row):
                if weight != 0:
                    yield self._vertices[i], self._vertices[j], weight

    @property
    def edge_count(self) -> int:
        """Number of non-zero cells, self-loops included."""
        return sum(1 for row in self._matrix for weight in row if weight != 0)

    @property
    def density(self) -> float:
        """``edge_count / (n * (n - 1))``; 0.0 for graphs with fewer than two vertices."""
        n = len(self._vertices)
        if n <= 1:
            return 0.0
        return self.edge_count / (n * (n - 1))

    # Traversal and paths

    def dfs(
        self, start: Vertex, visit: Callable[[Vertex], None] | None = None
    ) -> list[Vertex]:
        return dfs(self, start, visit)

    def bfs(
        self, start: Vertex, visit: Callable[[Vertex], None] | None = None
    ) -> list[Vertex]:
        return bfs(self, start, visit)

    def shortest_path(self, source: Vertex, target: Vertex) -> list[Vertex]:
        return shortest_path(self, source, target)

    def shortest_path_undirected(self, source: Vertex, target: Vertex) -> list[Vertex]:
        return shortest_path_undirected(self, source, target)
