"""Configuration for the graph engine.

All settings can be overridden via environment variables with GRAPH_ prefix.
Example: GRAPH_EIGENVECTOR_MAX_ITERATIONS=200
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LAYOUT_RADIUS = 150.0
DEFAULT_LAYOUT_OFFSET_X = 200.0
DEFAULT_LAYOUT_OFFSET_Y = 200.0


class GraphConfig(BaseSettings):
    """Graph engine configuration."""

    model_config = SettingsConfigDict(
        env_prefix="GRAPH_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    default_weight: float = Field(
        default=1,
        description="Weight assigned to edges and relationships that omit one",
    )

    # Circular layout used by the generic JSON export
    layout_radius: float = Field(
        default=DEFAULT_LAYOUT_RADIUS,
        gt=0.0,
        description="Radius of the circle nodes are placed on",
    )
    layout_offset_x: float = Field(
        default=DEFAULT_LAYOUT_OFFSET_X,
        description="Horizontal offset of the layout circle's centre",
    )
    layout_offset_y: float = Field(
        default=DEFAULT_LAYOUT_OFFSET_Y,
        description="Vertical offset of the layout circle's centre",
    )

    # Centrality settings
    eigenvector_max_iterations: int = Field(
        default=100,
        ge=1,
        le=10_000,
        description="Maximum power-iteration rounds for eigenvector centrality",
    )
    eigenvector_tolerance: float = Field(
        default=1e-6,
        gt=0.0,
        description="L1 change below which power iteration stops early",
    )
    max_shortest_paths: int | None = Field(
        default=None,
        ge=1,
        description=(
            "Cap on shortest paths enumerated per vertex pair for betweenness "
            "(None = enumerate all)"
        ),
    )
    default_top_n: int = Field(
        default=10,
        ge=1,
        description="Number of ranked vertices reported per centrality measure",
    )
