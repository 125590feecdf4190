"""Tests for JSON/D3 output, CSV and text rendering."""

import json

import pytest

from graphkit.graph.errors import ParseError
from graphkit.graph.matrix_graph import Graph
from graphkit.graph.serialize import (
    circular_layout,
    export_d3,
    export_json,
    from_json_data,
    render_matrix,
    render_summary,
    to_csv,
    to_d3_format,
    to_json_data,
)


class TestJsonData:
    """Test to_json_data() and from_json_data()."""

    def test_shape(self, sample_graph: Graph) -> None:
        data = to_json_data(sample_graph)
        assert [n["id"] for n in data["nodes"]] == ["A", "B", "C"]
        assert data["nodes"][0] == {"id": "A", "label": "A", "x": 350.0, "y": 200.0}
        assert data["properties"] == {"vertices": 3, "edges": 5, "density": 0.833}

    def test_edge_labels(self) -> None:
        graph = Graph([[0, 1], [2.5, 0]], ["A", "B"])
        edges = to_json_data(graph)["edges"]
        assert edges == [
            {"from": "A", "to": "B", "weight": 1, "label": ""},
            {"from": "B", "to": "A", "weight": 2.5, "label": "2.5"},
        ]

    def test_layout_overrides(self, sample_graph: Graph) -> None:
        data = to_json_data(sample_graph, radius=10, offset_x=0, offset_y=0)
        assert data["nodes"][0]["x"] == pytest.approx(10.0)
        assert data["nodes"][0]["y"] == pytest.approx(0.0)

    def test_labels_stringified(self) -> None:
        data = to_json_data(Graph([[0, 1], [0, 0]]))
        assert data["edges"][0]["from"] == "0"
        assert data["nodes"][1]["id"] == "1"

    def test_empty_graph(self) -> None:
        data = to_json_data(Graph())
        assert data == {
            "nodes": [],
            "edges": [],
            "properties": {"vertices": 0, "edges": 0, "density": 0.0},
        }

    def test_rebuild(self, complex_graph: Graph) -> None:
        rebuilt = from_json_data(to_json_data(complex_graph))
        assert rebuilt.vertices == complex_graph.vertices
        assert rebuilt.matrix == complex_graph.matrix

    def test_rebuild_missing_keys(self) -> None:
        with pytest.raises(ParseError, match="missing"):
            from_json_data({"nodes": []})

    def test_rebuild_unknown_node(self) -> None:
        data = {"nodes": [{"id": "A"}], "edges": [{"from": "A", "to": "Q", "weight": 1}]}
        with pytest.raises(ParseError, match="unknown node"):
            from_json_data(data)


class TestD3Format:
    """Test to_d3_format()."""

    def test_shape(self, linear_graph: Graph) -> None:
        data = to_d3_format(linear_graph)
        assert data["nodes"][0] == {"id": "A", "name": "A", "category": "default"}
        assert data["links"] == [
            {"source": "A", "target": "B", "weight": 1},
            {"source": "B", "target": "C", "weight": 1},
        ]


class TestLayout:
    """Test circular_layout()."""

    def test_points_on_circle(self) -> None:
        points = circular_layout(4, radius=150, offset_x=200, offset_y=200)
        assert points[0] == pytest.approx((350.0, 200.0))
        assert points[1] == pytest.approx((200.0, 350.0))
        for x, y in points:
            assert (x - 200) ** 2 + (y - 200) ** 2 == pytest.approx(150**2)

    def test_zero_points(self) -> None:
        assert circular_layout(0) == []


class TestExport:
    """Test export_json() and export_d3()."""

    def test_export_json(self, sample_graph: Graph, tmp_path) -> None:
        path = export_json(sample_graph, tmp_path / "out.json")
        assert json.loads(path.read_text()) == to_json_data(sample_graph)

    def test_export_d3(self, sample_graph: Graph, tmp_path) -> None:
        path = export_d3(sample_graph, tmp_path / "d3.json")
        assert json.loads(path.read_text())["links"][0] == {
            "source": "A",
            "target": "B",
            "weight": 1,
        }


class TestRendering:
    """Test to_csv(), render_matrix() and render_summary()."""

    def test_to_csv(self) -> None:
        assert to_csv([[0, 1], [2.5, 0]]) == "0,1\n2.5,0"

    def test_render_matrix(self, linear_graph: Graph) -> None:
        lines = render_matrix(linear_graph).splitlines()
        assert lines[0] == "   A  B  C"
        assert lines[1] == "A  0  1  0"

    def test_render_summary(self) -> None:
        graph = Graph([[0, 1, 3], [0, 0, 0], [0, 0, 0]], ["A", "B", "C"])
        text = render_summary(graph)
        assert text.startswith("Graph Visualization:")
        assert "Vertices: A, B, C" in text
        assert "  A -> B" in text
        assert "  A --(3)--> C" in text
        assert "  A: B, C(3)" in text
        assert "  B: (no connections)" in text
        assert "  Density: 0.333" in text

    def test_render_summary_no_edges(self) -> None:
        text = render_summary(Graph(vertices=["A"]))
        assert "  No edges" in text

    def test_render_summary_empty(self) -> None:
        assert "Empty graph" in render_summary(Graph())
