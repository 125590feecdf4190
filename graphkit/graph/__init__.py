"""Adjacency-matrix graph engine.

Represents directed, weighted graphs as dense adjacency matrices and
provides traversal, shortest paths, centrality measures and JSON/D3
serialization for visualisation front-ends.

Components:
- Graph: Matrix store with label-based CRUD, traversal and path methods
- dfs/bfs: Traversal engine
- shortest_path/shortest_path_undirected: Unweighted BFS path finder
- GraphStructure: Adjacency list/map projection used by centrality
- calculate_centrality: Degree, betweenness, closeness, eigenvector
- parsers/serialize: Matrix input (CSV, text, JSON) and graph output
- GraphConfig: Pydantic settings with GRAPH_ prefix
"""

from graphkit.graph.centrality import (
    CentralityMeasure,
    CentralityReport,
    betweenness_centrality,
    calculate_centrality,
    closeness_centrality,
    degree_centrality,
    eigenvector_centrality,
    find_all_shortest_paths,
    rank_scores,
)
from graphkit.graph.config import GraphConfig
from graphkit.graph.errors import GraphError, ParseError, StructureError
from graphkit.graph.matrix_graph import Graph
from graphkit.graph.parsers import MatrixFormat, load_matrix, parse_matrix
from graphkit.graph.paths import shortest_path, shortest_path_undirected
from graphkit.graph.serialize import (
    export_d3,
    export_json,
    from_json_data,
    to_d3_format,
    to_json_data,
)
from graphkit.graph.structure import (
    GraphStructure,
    Relationship,
    build_adjacency_matrix,
    build_graph_structure,
    extract_relationships,
)
from graphkit.graph.traversal import bfs, dfs

__all__ = [
    "CentralityMeasure",
    "CentralityReport",
    "Graph",
    "GraphConfig",
    "GraphError",
    "GraphStructure",
    "MatrixFormat",
    "ParseError",
    "Relationship",
    "StructureError",
    "betweenness_centrality",
    "bfs",
    "build_adjacency_matrix",
    "build_graph_structure",
    "calculate_centrality",
    "closeness_centrality",
    "degree_centrality",
    "dfs",
    "eigenvector_centrality",
    "export_d3",
    "export_json",
    "extract_relationships",
    "find_all_shortest_paths",
    "from_json_data",
    "load_matrix",
    "parse_matrix",
    "rank_scores",
    "shortest_path",
    "shortest_path_undirected",
    "to_d3_format",
    "to_json_data",
]
