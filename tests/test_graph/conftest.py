"""Pytest fixtures for graph engine tests."""

import pytest

from graphkit.graph.matrix_graph import Graph
from graphkit.graph.structure import GraphStructure, build_graph_structure


@pytest.fixture
def sample_graph() -> Graph:
    """A -> B, A -> C, B -> A, B -> C, C -> B."""
    return Graph([[0, 1, 1], [1, 0, 1], [0, 1, 0]], ["A", "B", "C"])


@pytest.fixture
def complex_graph() -> Graph:
    """A->B, A->C, B->D, B->E, C->E, D->F, E->D, E->F."""
    return Graph(
        [
            [0, 1, 1, 0, 0, 0],
            [0, 0, 0, 1, 1, 0],
            [0, 0, 0, 0, 1, 0],
            [0, 0, 0, 0, 0, 1],
            [0, 0, 0, 1, 0, 1],
            [0, 0, 0, 0, 0, 0],
        ],
        ["A", "B", "C", "D", "E", "F"],
    )


@pytest.fixture
def linear_graph() -> Graph:
    """A -> B -> C."""
    return Graph([[0, 1, 0], [0, 0, 1], [0, 0, 0]], ["A", "B", "C"])


@pytest.fixture
def disconnected_graph() -> Graph:
    """Two 2-cycles: A <-> B and C <-> D."""
    return Graph(
        [[0, 1, 0, 0], [1, 0, 0, 0], [0, 0, 0, 1], [0, 0, 1, 0]],
        ["A", "B", "C", "D"],
    )


@pytest.fixture
def cycle_graph() -> Graph:
    """A -> B -> C -> A."""
    return Graph([[0, 1, 0], [0, 0, 1], [1, 0, 0]], ["A", "B", "C"])


@pytest.fixture
def sample_relationships() -> list[dict]:
    """A->B, B->C, A->C, C->D."""
    return [
        {"from": "A", "to": "B", "weight": 1},
        {"from": "B", "to": "C", "weight": 1},
        {"from": "A", "to": "C", "weight": 1},
        {"from": "C", "to": "D", "weight": 1},
    ]


@pytest.fixture
def sample_structure(sample_relationships: list[dict]) -> GraphStructure:
    return build_graph_structure(sample_relationships, ["A", "B", "C", "D"])


@pytest.fixture
def diamond_structure() -> GraphStructure:
    """A->B, A->C, B->D, C->D: two equal shortest paths A to D."""
    return build_graph_structure(
        [
            {"from": "A", "to": "B"},
            {"from": "A", "to": "C"},
            {"from": "B", "to": "D"},
            {"from": "C", "to": "D"},
        ],
        ["A", "B", "C", "D"],
    )
