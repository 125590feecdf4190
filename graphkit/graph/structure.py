"""Adjacency views used by the centrality engine.

A ``GraphStructure`` is a transient projection of a graph: an adjacency
list (vertex -> ordered ``(node, weight)`` entries) for BFS and Dijkstra,
and a dense adjacency map (vertex -> vertex -> weight) for power
iteration. It can be built from a ``Graph`` or straight from a list of
``{from, to, weight}`` relationships, which is how the HTTP layer feeds it.

This module also turns raw data records into relationships, mirroring the
"analyze relationships" flow: each record names a vertex and some of its
fields point at other vertices.
"""

from collections.abc import Hashable, Iterable, Mapping, Sequence
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, NamedTuple

import numpy as np
import structlog

from .errors import StructureError

if TYPE_CHECKING:
    from .matrix_graph import Graph

logger = structlog.get_logger(__name__)

Vertex = Hashable


@dataclass(frozen=True)
class Relationship:
    """A directed, weighted link between two vertices.

    Attributes:
        source: Vertex the link starts at.
        target: Vertex the link points to.
        weight: Edge weight (``1`` when unspecified).
    """

    source: Vertex
    target: Vertex
    weight: float = 1

    @classmethod
    def from_dict(
        cls, data: Mapping[str, Any], default_weight: float = 1
    ) -> "Relationship":
        """Build from a ``{"from": ..., "to": ..., "weight": ...}`` mapping."""
        if "from" not in data or "to" not in data:
            raise ValueError(f"Relationship requires 'from' and 'to': {dict(data)!r}")
        weight = data.get("weight")
        return cls(
            source=data["from"],
            target=data["to"],
            weight=default_weight if weight is None else weight,
        )

    def to_dict(self) -> dict[str, Any]:
        return {"from": self.source, "to": self.target, "weight": self.weight}


class AdjacencyEntry(NamedTuple):
    """One outgoing edge in an adjacency list."""

    node: Vertex
    weight: float


def _coerce_relationship(
    item: Relationship | Mapping[str, Any], default_weight: float
) -> Relationship:
    if isinstance(item, Relationship):
        return item
    return Relationship.from_dict(item, default_weight)


def _unique_vertices(vertices: Iterable[Vertex]) -> list[Vertex]:
    labels = list(vertices)
    if len(set(labels)) != len(labels):
        raise StructureError("Vertex labels must be unique")
    return labels


@dataclass
class GraphStructure:
    """Adjacency-list and adjacency-map views over a fixed vertex list.

    Attributes:
        vertices: Vertex labels in canonical order.
        adjacency_list: vertex -> outgoing entries, in insertion order.
        adjacency_map: vertex -> vertex -> weight, dense (0 for no edge).
    """

    vertices: list[Vertex]
    adjacency_list: dict[Vertex, list[AdjacencyEntry]] = field(default_factory=dict)
    adjacency_map: dict[Vertex, dict[Vertex, float]] = field(default_factory=dict)

    @classmethod
    def empty(cls, vertices: Iterable[Vertex]) -> "GraphStructure":
        labels = _unique_vertices(vertices)
        return cls(
            vertices=labels,
            adjacency_list={v: [] for v in labels},
            adjacency_map={v: {u: 0 for u in labels} for v in labels},
        )

    @classmethod
    def from_graph(cls, graph: "Graph") -> "GraphStructure":
        """Project a ``Graph``; adjacency lists follow matrix column order."""
        structure = cls.empty(graph.vertices)
        for source, target, weight in graph.edges():
            structure.set_edge(source, target, weight)
        return structure

    def set_edge(self, source: Vertex, target: Vertex, weight: float) -> None:
        """Add or overwrite ``source -> target`` in both views."""
        entries = self.adjacency_list[source]
        for position, entry in enumerate(entries):
            if entry.node == target:
                entries[position] = AdjacencyEntry(target, weight)
                break
        else:
            entries.append(AdjacencyEntry(target, weight))
        self.adjacency_map[source][target] = weight

    def weight(self, source: Vertex, target: Vertex) -> float:
        return self.adjacency_map.get(source, {}).get(target, 0)

    def weight_matrix(self) -> np.ndarray:
        """Dense ``float`` matrix with ``[i, j]`` = weight of ``vertices[i] -> vertices[j]``."""
        return np.array(
            [[self.adjacency_map[u][v] for v in self.vertices] for u in self.vertices],
            dtype=float,
        ).reshape(len(self.vertices), len(self.vertices))

    @property
    def relationship_count(self) -> int:
        return sum(len(entries) for entries in self.adjacency_list.values())


def build_graph_structure(
    relationships: Iterable[Relationship | Mapping[str, Any]],
    vertices: Sequence[Vertex],
    default_weight: float = 1,
) -> GraphStructure:
    """Build adjacency views from relationships over a fixed vertex list.

    Relationships naming a vertex outside ``vertices`` or carrying a zero
    weight are skipped. A repeated ``(from, to)`` pair keeps the last weight.

    Raises:
        StructureError: If ``vertices`` contains duplicates.
        ValueError: If a relationship mapping lacks ``from`` or ``to``.
    """
    structure = GraphStructure.empty(vertices)
    known = set(structure.vertices)
    skipped = 0

    for item in relationships:
        rel = _coerce_relationship(item, default_weight)
        if rel.source not in known or rel.target not in known or rel.weight == 0:
            skipped += 1
            continue
        structure.set_edge(rel.source, rel.target, rel.weight)

    if skipped:
        logger.debug("Relationships skipped", skipped=skipped)
    return structure


def build_adjacency_matrix(
    relationships: Iterable[Relationship | Mapping[str, Any]],
    vertices: Sequence[Vertex],
    default_weight: float = 1,
) -> list[list[float]]:
    """Dense adjacency matrix (row = source) for ``vertices`` from relationships."""
    structure = build_graph_structure(relationships, vertices, default_weight)
    return [
        [structure.adjacency_map[u][v] for v in structure.vertices]
        for u in structure.vertices
    ]


def extract_relationships(
    records: Iterable[Mapping[str, Any]],
    relationship_fields: Sequence[str],
    node_label_field: str = "id",
) -> tuple[list[Relationship], list[str]]:
    """Derive relationships from data records.

    Each record's ``node_label_field`` names a vertex. Every field in
    ``relationship_fields`` points at other vertices: a scalar value yields
    one relationship, a list yields one per element. Empty values and
    self-references are skipped. Labels are compared as strings.

    Example:
        records = [{"id": "ann", "manager": "bob", "friends": ["cat"]}]
        extract_relationships(records, ["manager", "friends"])
        # -> ([ann->bob, ann->cat], ["ann", "bob", "cat"])

    Returns:
        ``(relationships, vertices)`` with vertices sorted.
    """
    relationships: list[Relationship] = []
    vertices: set[str] = set()

    for record in records:
        raw_label = record.get(node_label_field)
        if raw_label is None or raw_label == "":
            continue
        node_id = str(raw_label)
        vertices.add(node_id)

        for field_name in relationship_fields:
            value = record.get(field_name)
            if value is None or value == "" or value == []:
                continue
            targets = value if isinstance(value, list) else [value]
            for target in targets:
                if target is None:
                    continue
                target_id = str(target)
                if not target_id or target_id == node_id:
                    continue
                relationships.append(Relationship(node_id, target_id, 1))
                vertices.add(target_id)

    return relationships, sorted(vertices)


def summarize_relationships(
    relationships: Sequence[Relationship | Mapping[str, Any]],
    vertices: Sequence[Vertex],
) -> dict[str, Any]:
    """Vertex count, relationship count and density of a relationship set."""
    n = len(vertices)
    max_edges = n * (n - 1)
    return {
        "vertices": n,
        "relationships": len(relationships),
        "density": len(relationships) / max_edges if max_edges > 0 else 0.0,
    }
