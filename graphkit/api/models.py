"""
Request and response models for the graph analysis API.
"""

from typing import Any

from pydantic import BaseModel, Field, field_validator

from graphkit.graph.centrality import ALL_MEASURES, CentralityMeasure
from graphkit.graph.parsers import MatrixFormat

_VALID_MEASURES = {m.value for m in CentralityMeasure} | {ALL_MEASURES}


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str = Field(..., description="Overall service status")
    version: str = Field(..., description="graphkit version")
    environment: str = Field(..., description="Deployment environment")


class ErrorResponse(BaseModel):
    """Response model for errors."""

    detail: str = Field(
        ...,
        description="Error message",
    )
    error_type: str = Field(
        default="error",
        description="Error type",
    )


class RelationshipItem(BaseModel):
    """A directed relationship between two vertices."""

    model_config = {"populate_by_name": True}

    source: str = Field(..., alias="from", min_length=1, description="Source vertex")
    target: str = Field(..., alias="to", min_length=1, description="Target vertex")
    weight: float = Field(default=1, description="Relationship weight")

    def as_mapping(self) -> dict[str, Any]:
        return {"from": self.source, "to": self.target, "weight": self.weight}


class RelationshipGraphRequest(BaseModel):
    """Relationships over an explicit vertex list."""

    relationships: list[RelationshipItem] = Field(
        ..., description="Relationships with from/to/weight"
    )
    vertices: list[str] = Field(
        ..., min_length=1, description="Vertex names (matrix index order)"
    )


class AdjacencyMatrixResponse(BaseModel):
    """Response model for adjacency matrix construction."""

    vertices: list[str]
    matrix: list[list[float]]
    csv: str = Field(..., description="Matrix rendered as CSV")
    edges: int = Field(..., description="Non-zero cells in the matrix")


class CentralityRequest(RelationshipGraphRequest):
    """Request model for centrality analysis."""

    measures: list[str] = Field(
        default_factory=lambda: [ALL_MEASURES],
        description="degree, betweenness, closeness, eigenvector, or all",
    )
    top_n: int = Field(default=10, ge=1, le=1000, description="Top vertices per measure")

    @field_validator("measures")
    @classmethod
    def _check_measures(cls, value: list[str]) -> list[str]:
        invalid = [m for m in value if m.lower() not in _VALID_MEASURES]
        if invalid:
            raise ValueError(
                f"Invalid measures {invalid}. Must be one of: {sorted(_VALID_MEASURES)}"
            )
        return value


class RankedVertex(BaseModel):
    """One ranked vertex."""

    node: str
    score: float


class CentralityResponse(BaseModel):
    """Response model for centrality analysis."""

    measures: list[str]
    scores: dict[str, dict[str, float]] = Field(
        ..., description="measure -> vertex -> score (all vertices)"
    )
    rankings: dict[str, list[RankedVertex]] = Field(
        ..., description="measure -> top-N vertices, highest score first"
    )
    vertex_count: int
    relationship_count: int
    latency_ms: float = Field(..., description="Processing latency in milliseconds")


class AnalyzeRelationshipsRequest(BaseModel):
    """Request model for extracting a graph from data records."""

    data: list[dict[str, Any]] = Field(..., description="Records to analyze")
    relationship_fields: list[str] = Field(
        ..., min_length=1, description="Fields that point at other records (e.g. parent_id)"
    )
    node_label_field: str = Field(default="id", description="Field holding each record's label")


class AnalyzeNetworkRequest(AnalyzeRelationshipsRequest):
    """Request model for relationship extraction plus centrality."""

    include_centrality: bool = Field(default=True, description="Include centrality rankings")


class RelationshipAnalysisResponse(BaseModel):
    """Response model for relationship extraction."""

    vertices: list[str]
    relationships: list[dict[str, Any]]
    density: float
    graph: dict[str, Any] = Field(..., description="Generic JSON graph (nodes/edges/properties)")
    d3: dict[str, Any] = Field(..., description="D3 graph (nodes/links)")
    centrality: dict[str, list[RankedVertex]] | None = Field(
        default=None, description="Top-5 rankings per measure when requested"
    )


class ShortestPathRequest(RelationshipGraphRequest):
    """Request model for shortest path search."""

    source: str = Field(..., min_length=1)
    target: str = Field(..., min_length=1)
    undirected: bool = Field(default=False, description="Ignore edge direction")


class ShortestPathResponse(BaseModel):
    """Response model for shortest path search."""

    path: list[str]
    length: int = Field(..., description="Number of hops (-1 when no path)")
    found: bool


class MatrixAnalysisRequest(BaseModel):
    """Request model for analyzing a matrix given as text."""

    matrix: str = Field(..., min_length=1, description="Rows on lines, cells split by spaces/commas")
    format: MatrixFormat = Field(default=MatrixFormat.TEXT, description="text, csv or json")
    vertices: list[str] | None = Field(default=None, description="Optional vertex labels")


class MatrixAnalysisResponse(BaseModel):
    """Response model for matrix analysis."""

    graph: dict[str, Any]
    d3: dict[str, Any]
