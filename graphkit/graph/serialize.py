"""Graph output formats.

Two JSON shapes are consumed by the visualisation front-ends and must not
change field names:

Generic graph::

    {"nodes": [{"id", "label", "x", "y"}],
     "edges": [{"from", "to", "weight", "label"}],
     "properties": {"vertices", "edges", "density"}}

D3 graph::

    {"nodes": [{"id", "name", "category"}],
     "links": [{"source", "target", "weight"}]}

Labels are written as strings. Nodes in the generic format sit evenly on a
circle so a viewer has a sensible default layout.
"""

import csv
import io
import json
import math
from collections.abc import Sequence
from pathlib import Path
from typing import Any

import structlog

from .config import DEFAULT_LAYOUT_OFFSET_X, DEFAULT_LAYOUT_OFFSET_Y, DEFAULT_LAYOUT_RADIUS
from .errors import ParseError
from .matrix_graph import Graph

logger = structlog.get_logger(__name__)

DEFAULT_RADIUS = DEFAULT_LAYOUT_RADIUS
DEFAULT_OFFSET_X = DEFAULT_LAYOUT_OFFSET_X
DEFAULT_OFFSET_Y = DEFAULT_LAYOUT_OFFSET_Y


def _edge_label(weight: float) -> str:
    return "" if weight == 1 else str(weight)


def circular_layout(
    count: int,
    radius: float = DEFAULT_RADIUS,
    offset_x: float = DEFAULT_OFFSET_X,
    offset_y: float = DEFAULT_OFFSET_Y,
) -> list[tuple[float, float]]:
    """``count`` points evenly spaced on a circle, starting at angle 0."""
    return [
        (
            math.cos(2 * math.pi * i / count) * radius + offset_x,
            math.sin(2 * math.pi * i / count) * radius + offset_y,
        )
        for i in range(count)
    ]


def to_json_data(
    graph: Graph,
    radius: float = DEFAULT_RADIUS,
    offset_x: float = DEFAULT_OFFSET_X,
    offset_y: float = DEFAULT_OFFSET_Y,
) -> dict[str, Any]:
    """Generic JSON graph with circular node coordinates."""
    vertices = graph.vertices
    positions = circular_layout(len(vertices), radius, offset_x, offset_y)
    nodes = [
        {"id": str(vertex), "label": str(vertex), "x": x, "y": y}
        for vertex, (x, y) in zip(vertices, positions)
    ]
    edges = [
        {
            "from": str(source),
            "to": str(target),
            "weight": weight,
            "label": _edge_label(weight),
        }
        for source, target, weight in graph.edges()
    ]
    return {
        "nodes": nodes,
        "edges": edges,
        "properties": {
            "vertices": len(vertices),
            "edges": len(edges),
            "density": round(graph.density, 3),
        },
    }


def to_d3_format(graph: Graph) -> dict[str, Any]:
    """D3 nodes/links JSON graph."""
    return {
        "nodes": [
            {"id": str(vertex), "name": str(vertex), "category": "default"}
            for vertex in graph.vertices
        ],
        "links": [
            {"source": str(source), "target": str(target), "weight": weight}
            for source, target, weight in graph.edges()
        ],
    }


def from_json_data(data: dict[str, Any]) -> Graph:
    """Rebuild a graph from the generic JSON format.

    Vertices come back as the string ids written by ``to_json_data``.

    Raises:
        ParseError: If ``nodes``/``edges`` are missing or reference unknown ids.
    """
    try:
        vertices = [str(node["id"]) for node in data["nodes"]]
        edges = data["edges"]
    except (KeyError, TypeError) as e:
        raise ParseError(f"Invalid graph JSON: missing {e}") from e

    graph = Graph(vertices=vertices)
    for edge in edges:
        try:
            source, target, weight = str(edge["from"]), str(edge["to"]), edge["weight"]
        except (KeyError, TypeError) as e:
            raise ParseError(f"Invalid graph JSON edge {edge!r}") from e
        if not graph.add_edge(source, target, weight):
            raise ParseError(f"Edge {source!r} -> {target!r} references an unknown node")
    return graph


def export_json(graph: Graph, path: str | Path = "graph.json", **layout: float) -> Path:
    """Write the generic JSON graph to ``path`` (pretty-printed)."""
    output = Path(path)
    output.write_text(json.dumps(to_json_data(graph, **layout), indent=2), encoding="utf-8")
    logger.info("Graph exported", path=str(output), format="json")
    return output


def export_d3(graph: Graph, path: str | Path = "graph_d3.json") -> Path:
    """Write the D3 nodes/links graph to ``path`` (pretty-printed)."""
    output = Path(path)
    output.write_text(json.dumps(to_d3_format(graph), indent=2), encoding="utf-8")
    logger.info("Graph exported", path=str(output), format="d3")
    return output


def to_csv(matrix: Sequence[Sequence[float]]) -> str:
    """Matrix as CSV text, one row per line."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerows(matrix)
    return buffer.getvalue().rstrip("\n")


def render_matrix(graph: Graph) -> str:
    """Matrix with a label header row and each row prefixed by its label."""
    vertices = graph.vertices
    lines = ["   " + "  ".join(str(v) for v in vertices)]
    for vertex, row in zip(vertices, graph.matrix):
        lines.append(f"{vertex}  " + "  ".join(str(w) for w in row))
    return "\n".join(lines)


def render_summary(graph: Graph) -> str:
    """Human-readable overview: vertices, edges, adjacency list, properties."""
    rule = "=" * 50
    lines = ["Graph Visualization:", rule]

    vertices = graph.vertices
    if not vertices:
        lines.append("Empty graph")
        return "\n".join(lines)

    lines.append(f"Vertices: {', '.join(str(v) for v in vertices)}")
    lines.append("")
    lines.append("Edges:")
    edges = list(graph.edges())
    if not edges:
        lines.append("  No edges")
    for source, target, weight in edges:
        if weight == 1:
            lines.append(f"  {source} -> {target}")
        else:
            lines.append(f"  {source} --({weight})--> {target}")

    lines.append("")
    lines.append("Adjacency List:")
    for vertex in vertices:
        neighbors = graph.neighbors(vertex)
        if not neighbors:
            lines.append(f"  {vertex}: (no connections)")
            continue
        parts = []
        for neighbor in neighbors:
            weight = graph.edge_weight(vertex, neighbor)
            parts.append(str(neighbor) if weight == 1 else f"{neighbor}({weight})")
        lines.append(f"  {vertex}: {', '.join(parts)}")

    lines.append("")
    lines.append("Graph Properties:")
    lines.append(f"  Vertices: {len(vertices)}")
    lines.append(f"  Edges: {len(edges)}")
    lines.append(f"  Density: {round(graph.density, 3)}")
    lines.append(rule)
    return "\n".join(lines)
