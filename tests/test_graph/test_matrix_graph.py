"""Tests for the adjacency-matrix Graph store."""

import pytest

from graphkit.graph.errors import ParseError, StructureError
from graphkit.graph.matrix_graph import Graph


class TestConstruction:
    """Test Graph.__init__() validation and defaults."""

    def test_empty_graph(self) -> None:
        """Graph() starts with no vertices and an empty matrix."""
        graph = Graph()
        assert graph.vertices == []
        assert graph.matrix == []
        assert len(graph) == 0

    def test_default_labels_are_indices(self) -> None:
        """Labels default to 0..n-1."""
        graph = Graph([[0, 1], [1, 0]])
        assert graph.vertices == [0, 1]

    def test_vertices_without_matrix(self) -> None:
        """Labels alone produce an edgeless graph of that size."""
        graph = Graph(vertices=["A", "B"])
        assert graph.matrix == [[0, 0], [0, 0]]

    def test_non_square_matrix_rejected(self) -> None:
        """A ragged matrix raises StructureError."""
        with pytest.raises(StructureError, match="square"):
            Graph([[0, 1], [1]])

    def test_wide_matrix_rejected(self) -> None:
        with pytest.raises(StructureError):
            Graph([[0, 1, 0], [1, 0, 0]])

    def test_label_count_mismatch_rejected(self) -> None:
        """Vertex count must equal matrix size."""
        with pytest.raises(StructureError, match="must match"):
            Graph([[0, 1], [1, 0]], ["A", "B", "C"])

    def test_empty_matrix_with_labels_rejected(self) -> None:
        with pytest.raises(StructureError):
            Graph([], ["A"])

    def test_duplicate_labels_rejected(self) -> None:
        with pytest.raises(StructureError, match="unique"):
            Graph([[0, 1], [1, 0]], ["A", "A"])

    def test_structure_error_is_value_error(self) -> None:
        """Callers catching ValueError also catch StructureError."""
        with pytest.raises(ValueError):
            Graph([[0]], ["A", "B"])

    def test_input_matrix_is_copied(self) -> None:
        """Mutating the caller's matrix does not change the graph."""
        source = [[0, 1], [0, 0]]
        graph = Graph(source, ["A", "B"])
        source[0][1] = 0
        assert graph.has_edge("A", "B")

    def test_matrix_property_returns_copy(self) -> None:
        """Mutating the returned matrix does not change the graph."""
        graph = Graph([[0, 1], [0, 0]], ["A", "B"])
        snapshot = graph.matrix
        snapshot[0][1] = 0
        assert graph.has_edge("A", "B")

    def test_integer_labels(self) -> None:
        """Non-string labels work as identifiers."""
        graph = Graph([[0, 1], [0, 0]], [10, 20])
        assert graph.neighbors(10) == [20]


class TestVertexMutation:
    """Test add_vertex() and remove_vertex()."""

    def test_add_vertex_grows_matrix(self, sample_graph: Graph) -> None:
        assert sample_graph.add_vertex("D") is True
        assert sample_graph.vertices == ["A", "B", "C", "D"]
        assert all(len(row) == 4 for row in sample_graph.matrix)
        assert sample_graph.matrix[3] == [0, 0, 0, 0]

    def test_add_existing_vertex_is_noop(self, sample_graph: Graph) -> None:
        """Adding a present label returns False and changes nothing."""
        before = sample_graph.matrix
        assert sample_graph.add_vertex("A") is False
        assert sample_graph.matrix == before

    def test_add_then_remove_restores_state(self, sample_graph: Graph) -> None:
        """add_vertex followed by remove_vertex is a round trip."""
        vertices, matrix = sample_graph.vertices, sample_graph.matrix
        sample_graph.add_vertex("Z")
        sample_graph.remove_vertex("Z")
        assert sample_graph.vertices == vertices
        assert sample_graph.matrix == matrix

    def test_remove_vertex_drops_row_and_column(self, sample_graph: Graph) -> None:
        assert sample_graph.remove_vertex("B") is True
        assert sample_graph.vertices == ["A", "C"]
        assert sample_graph.matrix == [[0, 1], [0, 0]]

    def test_remove_missing_vertex(self, sample_graph: Graph) -> None:
        assert sample_graph.remove_vertex("Z") is False
        assert len(sample_graph) == 3

    def test_add_vertex_to_empty_graph(self) -> None:
        graph = Graph()
        graph.add_vertex("A")
        assert graph.matrix == [[0]]


class TestEdgeMutation:
    """Test add_edge(), remove_edge() and has_edge()."""

    def test_add_edge_sets_weight(self, linear_graph: Graph) -> None:
        assert linear_graph.add_edge("C", "A", 5) is True
        assert linear_graph.edge_weight("C", "A") == 5
        assert linear_graph.has_edge("C", "A")

    def test_add_edge_overwrites(self, linear_graph: Graph) -> None:
        linear_graph.add_edge("A", "B", 7)
        assert linear_graph.edge_weight("A", "B") == 7

    def test_add_edge_default_weight(self, linear_graph: Graph) -> None:
        linear_graph.add_edge("C", "A")
        assert linear_graph.edge_weight("C", "A") == 1

    def test_add_edge_missing_endpoint(self, linear_graph: Graph) -> None:
        """Missing endpoints return False and leave the matrix unchanged."""
        before = linear_graph.matrix
        assert linear_graph.add_edge("A", "Z") is False
        assert linear_graph.add_edge("Z", "A") is False
        assert linear_graph.matrix == before

    def test_remove_edge(self, linear_graph: Graph) -> None:
        linear_graph.add_edge("A", "C", 2)
        assert linear_graph.has_edge("A", "C")
        assert linear_graph.remove_edge("A", "C") is True
        assert not linear_graph.has_edge("A", "C")

    def test_remove_edge_missing_endpoint(self, linear_graph: Graph) -> None:
        assert linear_graph.remove_edge("A", "Z") is False

    def test_has_edge_missing_vertex(self, linear_graph: Graph) -> None:
        assert linear_graph.has_edge("Z", "A") is False

    def test_self_loop(self) -> None:
        graph = Graph(vertices=["A"])
        graph.add_edge("A", "A")
        assert graph.has_edge("A", "A")
        assert graph.neighbors("A") == ["A"]


class TestQueries:
    """Test neighbors, edges, density and relabelling."""

    def test_neighbors_in_column_order(self, sample_graph: Graph) -> None:
        assert sample_graph.neighbors("A") == ["B", "C"]
        assert sample_graph.neighbors("C") == ["B"]

    def test_neighbors_missing_vertex(self, sample_graph: Graph) -> None:
        assert sample_graph.neighbors("Z") == []

    def test_undirected_neighbors(self, linear_graph: Graph) -> None:
        """Incoming and outgoing edges both count, in column order."""
        assert linear_graph.undirected_neighbors("B") == ["A", "C"]
        assert linear_graph.undirected_neighbors("Z") == []

    def test_edges_row_major(self, sample_graph: Graph) -> None:
        assert list(sample_graph.edges()) == [
            ("A", "B", 1),
            ("A", "C", 1),
            ("B", "A", 1),
            ("B", "C", 1),
            ("C", "B", 1),
        ]

    def test_edge_count_and_density(self, sample_graph: Graph) -> None:
        assert sample_graph.edge_count == 5
        assert sample_graph.density == pytest.approx(5 / 6)

    def test_density_counts_self_loops(self) -> None:
        graph = Graph([[1, 1], [0, 0]], ["A", "B"])
        assert graph.density == pytest.approx(1.0)

    def test_density_of_tiny_graphs(self) -> None:
        """Graphs with fewer than two vertices have density 0."""
        assert Graph().density == 0.0
        assert Graph([[1]], ["A"]).density == 0.0

    def test_edge_weight_missing(self, sample_graph: Graph) -> None:
        assert sample_graph.edge_weight("C", "A") == 0
        assert sample_graph.edge_weight("Z", "A") == 0

    def test_relabel(self, sample_graph: Graph) -> None:
        assert sample_graph.relabel(["X", "Y", "Z"]) is True
        assert sample_graph.neighbors("X") == ["Y", "Z"]

    def test_relabel_wrong_count(self, sample_graph: Graph) -> None:
        assert sample_graph.relabel(["X", "Y"]) is False
        assert sample_graph.vertices == ["A", "B", "C"]

    def test_relabel_duplicates(self, sample_graph: Graph) -> None:
        assert sample_graph.relabel(["X", "X", "Y"]) is False

    def test_contains_and_index(self, sample_graph: Graph) -> None:
        assert "B" in sample_graph
        assert "Z" not in sample_graph
        assert sample_graph.index_of("C") == 2
        assert sample_graph.index_of("Z") is None

    def test_str(self, sample_graph: Graph) -> None:
        assert str(sample_graph) == "Graph with 3 vertices: ['A', 'B', 'C']"


class TestFactories:
    """Test from_file(), from_string() and from_relationships()."""

    def test_from_string(self) -> None:
        graph = Graph.from_string("0 1 1\n1 0 1\n0 1 0", ["A", "B", "C"])
        assert graph.neighbors("A") == ["B", "C"]

    def test_from_string_label_mismatch(self) -> None:
        with pytest.raises(StructureError):
            Graph.from_string("0 1\n1 0", ["A", "B", "C"])

    def test_from_csv_file(self, tmp_path) -> None:
        path = tmp_path / "matrix.csv"
        path.write_text("0,1,0\n0,0,1\n1,0,0\n")
        graph = Graph.from_file(path, ["A", "B", "C"])
        assert graph.has_edge("C", "A")

    def test_from_json_file(self, tmp_path) -> None:
        path = tmp_path / "matrix.json"
        path.write_text('{"matrix": [[0, 2], [0, 0]]}')
        graph = Graph.from_file(path)
        assert graph.edge_weight(0, 1) == 2

    def test_from_missing_file(self, tmp_path) -> None:
        with pytest.raises(ParseError, match="not found"):
            Graph.from_file(tmp_path / "missing.csv")

    def test_from_file_overlong_name(self) -> None:
        with pytest.raises(ParseError):
            Graph.from_file("x" * 300 + ".csv")

    def test_from_relationships(self) -> None:
        graph = Graph.from_relationships(
            [{"from": "A", "to": "B", "weight": 3}, {"from": "B", "to": "Q"}],
            ["A", "B"],
        )
        assert graph.matrix == [[0, 3], [0, 0]]
