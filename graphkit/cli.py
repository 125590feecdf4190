"""
Command-line interface for graphkit.

Loads adjacency matrices from files or inline strings and runs
traversals, path searches, centrality analysis and exports.

Usage:
    graphkit show matrix.csv -v A,B,C --dfs A --path A,C
    graphkit show "0,1\\n1,0" -f json
    graphkit centrality matrix.txt -v A,B,C,D -m betweenness -n 3
    graphkit serve                # Run the HTTP API
"""

import json
import os
from typing import Any

import click
import structlog

from graphkit.config.settings import get_settings
from graphkit.graph.centrality import ALL_MEASURES, CentralityMeasure, calculate_centrality
from graphkit.graph.config import GraphConfig
from graphkit.graph.errors import GraphError
from graphkit.graph.matrix_graph import Graph
from graphkit.graph.serialize import (
    export_d3,
    export_json,
    render_matrix,
    render_summary,
    to_json_data,
)
from graphkit.graph.structure import GraphStructure
from graphkit.observability.logging import setup_logging

logger = structlog.get_logger(__name__)

MEASURE_CHOICES = [m.value for m in CentralityMeasure] + [ALL_MEASURES]


def _parse_pairs(
    ctx: click.Context, param: click.Parameter, values: tuple[str, ...]
) -> list[tuple[str, str]]:
    """Split repeated ``FROM,TO`` option values into pairs."""
    pairs = []
    for value in values:
        source, sep, target = value.partition(",")
        if not sep or not source.strip() or not target.strip():
            raise click.BadParameter(f"expected FROM,TO but got {value!r}")
        pairs.append((source.strip(), target.strip()))
    return pairs


def _load_graph(source: str, labels: str | None) -> Graph:
    """Load from a file path, or parse ``source`` as an inline matrix."""
    try:
        if os.path.isfile(source):
            graph = Graph.from_file(source)
        else:
            logger.debug("Input is not a file, parsing as matrix string")
            graph = Graph.from_string(source.replace("\\n", "\n"))
    except GraphError as e:
        raise click.ClickException(str(e)) from e

    if labels:
        names = [name.strip() for name in labels.split(",")]
        if not graph.relabel(names):
            click.echo(
                f"Warning: Number of vertex labels ({len(names)}) doesn't match "
                f"matrix size ({len(graph)}) or labels repeat"
            )
            click.echo("Using default numeric labels")
    return graph


def _find_vertex(graph: Graph, text: str) -> Any | None:
    """Match a command-line label against vertices by string form."""
    for vertex in graph.vertices:
        if str(vertex) == text:
            return vertex
    available = ", ".join(str(v) for v in graph.vertices)
    click.echo(f"Error: Vertex '{text}' not found. Available vertices: {available}")
    return None


def _join(vertices: list[Any], separator: str = " -> ") -> str:
    return separator.join(str(v) for v in vertices)


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
def main(debug: bool) -> None:
    """graphkit - adjacency-matrix graph analysis."""
    setup_logging("DEBUG" if debug else None)


@main.command()
@click.argument("matrix")
@click.option("-v", "--vertices", "labels", default=None,
              help="Comma-separated vertex labels (e.g., 'A,B,C,D')")
@click.option("-f", "--format", "output_format", default="text",
              type=click.Choice(["text", "matrix", "json"]), help="Output format")
@click.option("--dfs", "dfs_starts", multiple=True, help="DFS traversal from vertex (can repeat)")
@click.option("--bfs", "bfs_starts", multiple=True, help="BFS traversal from vertex (can repeat)")
@click.option("--neighbors", "neighbor_of", multiple=True, help="Show neighbors of vertex (can repeat)")
@click.option("--edge", "edges", multiple=True, callback=_parse_pairs,
              help="Check whether edge FROM,TO exists (can repeat)")
@click.option("--path", "paths", multiple=True, callback=_parse_pairs,
              help="Shortest directed path FROM,TO (can repeat)")
@click.option("--path-undirected", "undirected_paths", multiple=True, callback=_parse_pairs,
              help="Shortest path FROM,TO ignoring edge direction (can repeat)")
@click.option("-j", "--export-json", "json_file", default=None, type=click.Path(dir_okay=False),
              help="Export graph to generic JSON file")
@click.option("-d", "--export-d3", "d3_file", default=None, type=click.Path(dir_okay=False),
              help="Export graph to D3 nodes/links JSON file")
def show(
    matrix: str,
    labels: str | None,
    output_format: str,
    dfs_starts: tuple[str, ...],
    bfs_starts: tuple[str, ...],
    neighbor_of: tuple[str, ...],
    edges: list[tuple[str, str]],
    paths: list[tuple[str, str]],
    undirected_paths: list[tuple[str, str]],
    json_file: str | None,
    d3_file: str | None,
) -> None:
    """Load a graph, display it and run operations on it.

    MATRIX is a .csv, .json or text file, or an inline matrix string
    with rows separated by newlines (or a literal \\n).

    Example:
        graphkit show matrix.csv -v A,B,C,D --dfs A --path A,D
    """
    graph = _load_graph(matrix, labels)
    config = GraphConfig()

    if output_format == "json":
        layout = to_json_data(
            graph,
            radius=config.layout_radius,
            offset_x=config.layout_offset_x,
            offset_y=config.layout_offset_y,
        )
        click.echo(json.dumps(layout, indent=2))
    elif output_format == "matrix":
        click.echo(render_matrix(graph))
    else:
        click.echo(render_summary(graph))

    for text in dfs_starts:
        vertex = _find_vertex(graph, text)
        if vertex is not None:
            click.echo(f"\nDFS from {vertex}: {_join(graph.dfs(vertex))}")

    for text in bfs_starts:
        vertex = _find_vertex(graph, text)
        if vertex is not None:
            click.echo(f"\nBFS from {vertex}: {_join(graph.bfs(vertex))}")

    for text in neighbor_of:
        vertex = _find_vertex(graph, text)
        if vertex is not None:
            click.echo(f"\nNeighbors of {vertex}: {_join(graph.neighbors(vertex), ', ')}")

    for source_text, target_text in edges:
        source, target = _find_vertex(graph, source_text), _find_vertex(graph, target_text)
        if source is not None and target is not None:
            answer = "Yes" if graph.has_edge(source, target) else "No"
            click.echo(f"\nEdge {source} -> {target}: {answer}")

    for undirected, pairs in ((False, paths), (True, undirected_paths)):
        for source_text, target_text in pairs:
            source, target = _find_vertex(graph, source_text), _find_vertex(graph, target_text)
            if source is None or target is None:
                continue
            if undirected:
                found = graph.shortest_path_undirected(source, target)
                heading = "Shortest undirected path"
            else:
                found = graph.shortest_path(source, target)
                heading = "Shortest path"
            if found:
                click.echo(f"\n{heading} {source} -> {target}: {_join(found)}")
            else:
                click.echo(f"\nNo path found from {source} to {target}")

    if json_file:
        export_json(
            graph,
            json_file,
            radius=config.layout_radius,
            offset_x=config.layout_offset_x,
            offset_y=config.layout_offset_y,
        )
        click.echo(f"\nGraph exported to {json_file}")

    if d3_file:
        export_d3(graph, d3_file)
        click.echo(f"\nGraph exported to D3.js format: {d3_file}")


@main.command()
@click.argument("matrix")
@click.option("-v", "--vertices", "labels", default=None,
              help="Comma-separated vertex labels (e.g., 'A,B,C,D')")
@click.option("-m", "--measure", "measures", multiple=True, type=click.Choice(MEASURE_CHOICES),
              help="Centrality measure (can repeat; default: all)")
@click.option("-n", "--top-n", default=None, type=click.IntRange(min=1),
              help="Number of top vertices per measure")
@click.option("--json", "as_json", is_flag=True, help="Print the full report as JSON")
def centrality(
    matrix: str,
    labels: str | None,
    measures: tuple[str, ...],
    top_n: int | None,
    as_json: bool,
) -> None:
    """Rank vertices by degree, betweenness, closeness and eigenvector centrality.

    Example:
        graphkit centrality matrix.csv -v A,B,C,D -m degree -m closeness -n 3
    """
    graph = _load_graph(matrix, labels)
    config = GraphConfig()
    report = calculate_centrality(
        GraphStructure.from_graph(graph),
        measures=measures or (ALL_MEASURES,),
        top_n=top_n or config.default_top_n,
        max_iterations=config.eigenvector_max_iterations,
        tolerance=config.eigenvector_tolerance,
        max_paths=config.max_shortest_paths,
    )

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        return

    click.echo("\nCentrality Analysis:")
    for measure, ranked in report.rankings.items():
        click.echo(f"\n{measure.capitalize()} Centrality")
        for position, (vertex, score) in enumerate(ranked, start=1):
            click.echo(f"  {position}. {vertex}: {score:.4f}")

    click.echo("\nSummary:")
    click.echo(f"  Vertices analyzed: {len(graph)}")
    click.echo(f"  Edges: {graph.edge_count}")
    click.echo(f"  Measures calculated: {', '.join(report.rankings)}")


@main.command()
@click.option("--host", default=None, help="API server host")
@click.option("--port", default=None, type=int, help="API server port")
@click.option("--reload", is_flag=True, help="Enable auto-reload (dev only)")
def serve(host: str | None, port: int | None, reload: bool) -> None:
    """Start the graph analysis API server."""
    import uvicorn

    settings = get_settings()
    host = host or settings.api_host
    port = port or settings.api_port

    click.echo(f"Starting API server on {host}:{port}")
    click.echo(f"API docs available on http://{host}:{port}/docs")

    uvicorn.run(
        "graphkit.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_level="info",
    )


if __name__ == "__main__":
    main()
