"""Graph endpoints: adjacency matrices, centrality, relationship analysis and paths.

Every request builds its own Graph/GraphStructure; nothing is shared or
mutated across requests. Handlers are plain ``def`` so the CPU-bound
analysis runs in FastAPI's threadpool instead of the event loop.
"""

import time

import structlog
from fastapi import APIRouter, Depends, HTTPException, status

from graphkit.api.auth import verify_api_key
from graphkit.api.dependencies import get_graph_config
from graphkit.api.models import (
    AdjacencyMatrixResponse,
    AnalyzeNetworkRequest,
    AnalyzeRelationshipsRequest,
    CentralityRequest,
    CentralityResponse,
    ErrorResponse,
    MatrixAnalysisRequest,
    MatrixAnalysisResponse,
    RankedVertex,
    RelationshipAnalysisResponse,
    RelationshipGraphRequest,
    ShortestPathRequest,
    ShortestPathResponse,
)
from graphkit.config.settings import get_settings
from graphkit.graph.centrality import ALL_MEASURES, CentralityReport, calculate_centrality
from graphkit.graph.config import GraphConfig
from graphkit.graph.errors import GraphError
from graphkit.graph.matrix_graph import Graph
from graphkit.graph.parsers import parse_matrix
from graphkit.graph.serialize import to_csv, to_d3_format, to_json_data
from graphkit.graph.structure import (
    build_graph_structure,
    extract_relationships,
    summarize_relationships,
)

logger = structlog.get_logger(__name__)
router = APIRouter(prefix="/api")

_ERROR_RESPONSES = {
    401: {"model": ErrorResponse, "description": "Invalid API key"},
    422: {"model": ErrorResponse, "description": "Invalid graph input"},
    500: {"model": ErrorResponse, "description": "Server error"},
}


def _unprocessable(error: Exception) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        detail=str(error),
    )


def _rankings(report: CentralityReport) -> dict[str, list[RankedVertex]]:
    return {
        measure: [RankedVertex(node=str(v), score=score) for v, score in ranked]
        for measure, ranked in report.rankings.items()
    }


def _layout(graph: Graph, config: GraphConfig) -> dict:
    return to_json_data(
        graph,
        radius=config.layout_radius,
        offset_x=config.layout_offset_x,
        offset_y=config.layout_offset_y,
    )


def _check_size(vertex_count: int) -> None:
    limit = get_settings().max_upload_vertices
    if vertex_count > limit:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"Graph has {vertex_count} vertices; limit is {limit}",
        )


@router.post(
    "/create-adjacency-matrix",
    response_model=AdjacencyMatrixResponse,
    responses=_ERROR_RESPONSES,
    summary="Build an adjacency matrix from relationships",
)
def create_adjacency_matrix(
    body: RelationshipGraphRequest,
    api_key: str = Depends(verify_api_key),
    config: GraphConfig = Depends(get_graph_config),
) -> AdjacencyMatrixResponse:
    _check_size(len(body.vertices))
    try:
        graph = Graph.from_relationships(
            [r.as_mapping() for r in body.relationships],
            body.vertices,
            default_weight=config.default_weight,
        )
    except (GraphError, ValueError) as e:
        raise _unprocessable(e)

    matrix = graph.matrix
    return AdjacencyMatrixResponse(
        vertices=[str(v) for v in graph.vertices],
        matrix=matrix,
        csv=to_csv(matrix),
        edges=graph.edge_count,
    )


@router.post(
    "/calculate-centrality",
    response_model=CentralityResponse,
    responses=_ERROR_RESPONSES,
    summary="Calculate centrality measures",
    description=(
        "Compute degree, betweenness, closeness and/or eigenvector centrality "
        "for every vertex and return the top-N per measure."
    ),
)
def calculate_centrality_route(
    body: CentralityRequest,
    api_key: str = Depends(verify_api_key),
    config: GraphConfig = Depends(get_graph_config),
) -> CentralityResponse:
    start_time = time.perf_counter()
    _check_size(len(body.vertices))

    try:
        structure = build_graph_structure(
            [r.as_mapping() for r in body.relationships],
            body.vertices,
            default_weight=config.default_weight,
        )
        report = calculate_centrality(
            structure,
            measures=body.measures,
            top_n=body.top_n,
            max_iterations=config.eigenvector_max_iterations,
            tolerance=config.eigenvector_tolerance,
            max_paths=config.max_shortest_paths,
        )
    except (GraphError, ValueError) as e:
        raise _unprocessable(e)
    except Exception as e:
        logger.error("calculate_centrality_failed", error=str(e), exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to calculate centrality",
        )

    latency_ms = (time.perf_counter() - start_time) * 1000
    payload = report.to_dict()
    return CentralityResponse(
        measures=payload["measures"],
        scores=payload["scores"],
        rankings=_rankings(report),
        vertex_count=len(structure.vertices),
        relationship_count=len(body.relationships),
        latency_ms=round(latency_ms, 2),
    )


def _analyze_records(
    body: AnalyzeRelationshipsRequest, config: GraphConfig
) -> tuple[RelationshipAnalysisResponse, list, list[str]]:
    relationships, vertices = extract_relationships(
        body.data, body.relationship_fields, body.node_label_field
    )
    _check_size(len(vertices))
    graph = Graph.from_relationships(relationships, vertices)
    summary = summarize_relationships(relationships, vertices)

    logger.info(
        "Relationships analyzed",
        records=len(body.data),
        vertices=summary["vertices"],
        relationships=summary["relationships"],
    )
    response = RelationshipAnalysisResponse(
        vertices=vertices,
        relationships=[r.to_dict() for r in relationships],
        density=round(summary["density"], 3),
        graph=_layout(graph, config),
        d3=to_d3_format(graph),
    )
    return response, relationships, vertices


@router.post(
    "/analyze-relationships",
    response_model=RelationshipAnalysisResponse,
    responses=_ERROR_RESPONSES,
    summary="Extract a graph from data records",
)
def analyze_relationships(
    body: AnalyzeRelationshipsRequest,
    api_key: str = Depends(verify_api_key),
    config: GraphConfig = Depends(get_graph_config),
) -> RelationshipAnalysisResponse:
    try:
        response, _, _ = _analyze_records(body, config)
    except (GraphError, ValueError) as e:
        raise _unprocessable(e)
    return response


@router.post(
    "/analyze-network-structure",
    response_model=RelationshipAnalysisResponse,
    responses=_ERROR_RESPONSES,
    summary="Extract a graph from data records and rank its vertices",
)
def analyze_network_structure(
    body: AnalyzeNetworkRequest,
    api_key: str = Depends(verify_api_key),
    config: GraphConfig = Depends(get_graph_config),
) -> RelationshipAnalysisResponse:
    try:
        response, relationships, vertices = _analyze_records(body, config)
        if body.include_centrality and vertices:
            report = calculate_centrality(
                build_graph_structure(relationships, vertices),
                measures=[ALL_MEASURES],
                top_n=5,
                max_iterations=config.eigenvector_max_iterations,
                tolerance=config.eigenvector_tolerance,
                max_paths=config.max_shortest_paths,
            )
            response.centrality = _rankings(report)
    except (GraphError, ValueError) as e:
        raise _unprocessable(e)
    return response


@router.post(
    "/shortest-path",
    response_model=ShortestPathResponse,
    responses=_ERROR_RESPONSES,
    summary="Find the fewest-hop path between two vertices",
)
def find_shortest_path(
    body: ShortestPathRequest,
    api_key: str = Depends(verify_api_key),
    config: GraphConfig = Depends(get_graph_config),
) -> ShortestPathResponse:
    _check_size(len(body.vertices))
    try:
        graph = Graph.from_relationships(
            [r.as_mapping() for r in body.relationships],
            body.vertices,
            default_weight=config.default_weight,
        )
    except (GraphError, ValueError) as e:
        raise _unprocessable(e)

    if body.undirected:
        path = graph.shortest_path_undirected(body.source, body.target)
    else:
        path = graph.shortest_path(body.source, body.target)

    return ShortestPathResponse(
        path=[str(v) for v in path],
        length=len(path) - 1 if path else -1,
        found=bool(path),
    )


@router.post(
    "/analyze-matrix",
    response_model=MatrixAnalysisResponse,
    responses={
        **_ERROR_RESPONSES,
        413: {"model": ErrorResponse, "description": "Matrix too large"},
    },
    summary="Parse an adjacency matrix and return visualization JSON",
)
def analyze_matrix(
    body: MatrixAnalysisRequest,
    api_key: str = Depends(verify_api_key),
    config: GraphConfig = Depends(get_graph_config),
) -> MatrixAnalysisResponse:
    try:
        matrix = parse_matrix(body.matrix, body.format)
        _check_size(len(matrix))
        graph = Graph(matrix, body.vertices)
    except (GraphError, ValueError) as e:
        raise _unprocessable(e)

    logger.info(
        "Matrix analyzed",
        vertices=len(graph),
        edges=graph.edge_count,
        format=body.format.value,
    )
    return MatrixAnalysisResponse(graph=_layout(graph, config), d3=to_d3_format(graph))
