"""HTTP API for graph analysis."""

from graphkit.api.app import create_app

__all__ = ["create_app"]
