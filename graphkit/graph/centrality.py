"""Network centrality measures over a ``GraphStructure``.

Implements four classic measures:
- degree: (out-degree + in-degree) / (n - 1)
- betweenness: share of all shortest paths (by hop count) passing through
  a vertex, summed over vertex pairs and normalised by (n-1)(n-2)/2
- closeness: inverse of the mean weighted (Dijkstra) distance to every
  reachable vertex
- eigenvector: power iteration on the weight matrix, summing incoming
  edges (``new[v] = sum_u w(u, v) * old[u]``) with L2 normalisation

Every measure returns a ``{vertex: score}`` mapping over the full vertex
list. Ranking to top-N happens afterwards in ``rank_scores``.

Betweenness enumerates every shortest path for every pair, which grows
combinatorially on dense or highly symmetric graphs. ``max_paths`` caps
the enumeration per pair when that matters.

Example:
    structure = build_graph_structure(relationships, vertices)
    report = calculate_centrality(structure, measures=["degree"], top_n=3)
    report.rankings["degree"]  # [("hub", 1.0), ...]
"""

import heapq
import itertools
import math
from collections import deque
from collections.abc import Callable, Hashable, Iterable
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

import numpy as np
import structlog

from .structure import GraphStructure

logger = structlog.get_logger(__name__)

Vertex = Hashable
Scores = dict[Vertex, float]


class CentralityMeasure(str, Enum):
    """Available centrality measures, in reporting order."""

    DEGREE = "degree"
    BETWEENNESS = "betweenness"
    CLOSENESS = "closeness"
    EIGENVECTOR = "eigenvector"


ALL_MEASURES = "all"


def degree_centrality(structure: GraphStructure) -> Scores:
    """Normalised in+out degree. Single-vertex graphs score 0."""
    vertices = structure.vertices
    n = len(vertices)
    if n <= 1:
        return {v: 0.0 for v in vertices}

    in_degree: dict[Vertex, int] = {v: 0 for v in vertices}
    for source in vertices:
        for entry in structure.adjacency_list[source]:
            in_degree[entry.node] += 1

    return {
        v: (len(structure.adjacency_list[v]) + in_degree[v]) / (n - 1)
        for v in vertices
    }


def find_all_shortest_paths(
    structure: GraphStructure,
    source: Vertex,
    target: Vertex,
    max_paths: int | None = None,
) -> list[list[Vertex]]:
    """Every fewest-hop path from ``source`` to ``target``.

    BFS records, for each vertex, all predecessors at the minimum distance;
    the predecessor chains are then unwound into complete paths.

    Args:
        max_paths: Stop after this many paths (None = no limit).

    Returns:
        List of paths (each ``[source, ..., target]``); empty if unreachable.
    """
    if source not in structure.adjacency_list or target not in structure.adjacency_list:
        return []
    if source == target:
        return [[source]]

    distance: dict[Vertex, int] = {source: 0}
    predecessors: dict[Vertex, list[Vertex]] = {source: []}
    queue: deque[Vertex] = deque([source])

    while queue:
        current = queue.popleft()
        next_distance = distance[current] + 1
        for entry in structure.adjacency_list[current]:
            neighbor = entry.node
            if neighbor not in distance:
                distance[neighbor] = next_distance
                predecessors[neighbor] = [current]
                queue.append(neighbor)
            elif distance[neighbor] == next_distance:
                predecessors[neighbor].append(current)

    if target not in distance:
        return []

    paths: list[list[Vertex]] = []
    # Each stack item is a partial path in reverse: [target, ..., node]
    stack: list[list[Vertex]] = [[target]]
    while stack:
        partial = stack.pop()
        node = partial[-1]
        if node == source:
            paths.append(partial[::-1])
            if max_paths is not None and len(paths) >= max_paths:
                logger.warning(
                    "Shortest path enumeration truncated",
                    source=source,
                    target=target,
                    max_paths=max_paths,
                )
                break
            continue
        for pred in reversed(predecessors[node]):
            stack.append(partial + [pred])

    return paths


def betweenness_centrality(
    structure: GraphStructure, max_paths: int | None = None
) -> Scores:
    """Normalised betweenness from all shortest paths between vertex pairs.

    Pairs are taken in vertex order (``s`` before ``t``) and paths are
    followed from ``s`` to ``t`` along edge direction. For each pair every
    intermediate vertex gains ``paths_through / total_paths``. Sums are
    divided by ``(n-1)(n-2)/2`` when that is positive.
    """
    vertices = structure.vertices
    scores: Scores = {v: 0.0 for v in vertices}
    pairs = 0

    for s_index, source in enumerate(vertices):
        for target in vertices[s_index + 1:]:
            paths = find_all_shortest_paths(structure, source, target, max_paths)
            if not paths:
                continue
            pairs += 1
            total = len(paths)
            path_sets = [set(path) for path in paths]
            for vertex in vertices:
                if vertex == source or vertex == target:
                    continue
                through = sum(1 for members in path_sets if vertex in members)
                if through:
                    scores[vertex] += through / total

    n = len(vertices)
    normalization = ((n - 1) * (n - 2)) / 2
    if normalization > 0:
        scores = {v: score / normalization for v, score in scores.items()}

    logger.debug("Betweenness computed", vertices=n, connected_pairs=pairs)
    return scores


def dijkstra(structure: GraphStructure, source: Vertex) -> dict[Vertex, float]:
    """Weighted distances from ``source`` to every reachable vertex (source included at 0)."""
    if source not in structure.adjacency_list:
        return {}

    distances: dict[Vertex, float] = {source: 0}
    visited: set[Vertex] = set()
    # Counter breaks distance ties so vertices never get compared
    counter = itertools.count()
    heap: list[tuple[float, int, Vertex]] = [(0, next(counter), source)]

    while heap:
        current_distance, _, current = heapq.heappop(heap)
        if current in visited:
            continue
        visited.add(current)

        for entry in structure.adjacency_list[current]:
            new_distance = current_distance + entry.weight
            if entry.node not in distances or new_distance < distances[entry.node]:
                distances[entry.node] = new_distance
                heapq.heappush(heap, (new_distance, next(counter), entry.node))

    return distances


def closeness_centrality(structure: GraphStructure) -> Scores:
    """Inverse mean distance to reachable vertices; 0 when nothing is reachable."""
    scores: Scores = {}
    for vertex in structure.vertices:
        distances = dijkstra(structure, vertex)
        reachable = [d for d in distances.values() if math.isfinite(d) and d > 0]
        if not reachable:
            scores[vertex] = 0.0
            continue
        average = sum(reachable) / len(reachable)
        scores[vertex] = 1 / average if average > 0 else 0.0
    return scores


def eigenvector_centrality(
    structure: GraphStructure,
    max_iterations: int = 100,
    tolerance: float = 1e-6,
) -> Scores:
    """Power-iteration eigenvector centrality.

    Starts from ``1/sqrt(n)`` everywhere and repeatedly sets each score to
    the weighted sum of the scores of vertices pointing *at* it, then
    L2-normalises (skipped when the norm is 0). Stops once the L1 change
    between rounds drops below ``tolerance`` or after ``max_iterations``.
    """
    vertices = structure.vertices
    n = len(vertices)
    if n == 0:
        return {}

    weights = structure.weight_matrix()
    scores = np.full(n, 1 / math.sqrt(n))
    converged = False
    iteration = 0

    for iteration in range(1, max_iterations + 1):
        updated = weights.T @ scores
        norm = np.linalg.norm(updated)
        if norm > 0:
            updated = updated / norm
        change = float(np.abs(updated - scores).sum())
        scores = updated
        if change < tolerance:
            converged = True
            break

    if converged:
        logger.debug("Eigenvector converged", iterations=iteration, vertices=n)
    else:
        logger.warning(
            "Eigenvector did not converge",
            iterations=max_iterations,
            tolerance=tolerance,
            vertices=n,
        )

    return {v: float(scores[i]) for i, v in enumerate(vertices)}


def resolve_measures(measures: Iterable[str | CentralityMeasure]) -> list[CentralityMeasure]:
    """Expand ``"all"`` and validate names, keeping first-seen order.

    Raises:
        ValueError: If a name is not a known measure.
    """
    requested = list(measures)
    if any(str(getattr(m, "value", m)).lower() == ALL_MEASURES for m in requested):
        return list(CentralityMeasure)

    resolved: list[CentralityMeasure] = []
    for measure in requested:
        name = str(getattr(measure, "value", measure)).lower()
        try:
            parsed = CentralityMeasure(name)
        except ValueError:
            valid = [m.value for m in CentralityMeasure] + [ALL_MEASURES]
            raise ValueError(
                f"Invalid centrality measure {measure!r}. Must be one of: {valid}"
            ) from None
        if parsed not in resolved:
            resolved.append(parsed)
    return resolved


def rank_scores(scores: Scores, top_n: int | None = None) -> list[tuple[Vertex, float]]:
    """Scores sorted high to low; ties keep vertex order. ``top_n`` trims the list."""
    ranked = sorted(scores.items(), key=lambda item: item[1], reverse=True)
    return ranked if top_n is None else ranked[: max(top_n, 0)]


@dataclass
class CentralityReport:
    """Scores and rankings for one or more centrality measures.

    Attributes:
        measures: Measures computed, in reporting order.
        scores: measure -> full ``{vertex: score}`` mapping.
        rankings: measure -> top-N ``(vertex, score)`` pairs, best first.
        top_n: Ranking length requested.
    """

    measures: list[CentralityMeasure]
    scores: dict[str, Scores] = field(default_factory=dict)
    rankings: dict[str, list[tuple[Vertex, float]]] = field(default_factory=dict)
    top_n: int | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready form with vertex labels as strings."""
        return {
            "measures": [m.value for m in self.measures],
            "scores": {
                measure: {str(v): score for v, score in scores.items()}
                for measure, scores in self.scores.items()
            },
            "rankings": {
                measure: [{"node": str(v), "score": score} for v, score in ranked]
                for measure, ranked in self.rankings.items()
            },
            "top_n": self.top_n,
        }


def calculate_centrality(
    structure: GraphStructure,
    measures: Iterable[str | CentralityMeasure] = (ALL_MEASURES,),
    top_n: int | None = 10,
    max_iterations: int = 100,
    tolerance: float = 1e-6,
    max_paths: int | None = None,
) -> CentralityReport:
    """Compute the requested measures and their top-N rankings.

    Args:
        structure: Adjacency views to analyse.
        measures: Measure names, or ``"all"``.
        top_n: Ranking length per measure (None = every vertex).
        max_iterations: Eigenvector power-iteration limit.
        tolerance: Eigenvector convergence threshold.
        max_paths: Betweenness per-pair path cap (None = uncapped).

    Raises:
        ValueError: If a measure name is unknown.
    """
    resolved = resolve_measures(measures)
    calculators: dict[CentralityMeasure, Callable[[], Scores]] = {
        CentralityMeasure.DEGREE: lambda: degree_centrality(structure),
        CentralityMeasure.BETWEENNESS: lambda: betweenness_centrality(
            structure, max_paths=max_paths
        ),
        CentralityMeasure.CLOSENESS: lambda: closeness_centrality(structure),
        CentralityMeasure.EIGENVECTOR: lambda: eigenvector_centrality(
            structure, max_iterations=max_iterations, tolerance=tolerance
        ),
    }

    report = CentralityReport(measures=resolved, top_n=top_n)
    for measure in resolved:
        scores = calculators[measure]()
        report.scores[measure.value] = scores
        report.rankings[measure.value] = rank_scores(scores, top_n)

    logger.debug(
        "Centrality analysis complete",
        measures=[m.value for m in resolved],
        vertices=len(structure.vertices),
        relationships=structure.relationship_count,
    )
    return report
