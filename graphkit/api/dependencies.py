"""
Dependency injection for FastAPI endpoints.
"""

from functools import lru_cache

from graphkit.graph.config import GraphConfig


@lru_cache
def get_graph_config() -> GraphConfig:
    """Engine configuration shared by all requests (read-only)."""
    return GraphConfig()
