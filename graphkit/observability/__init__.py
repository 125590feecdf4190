"""Observability layer - structured logging."""

from graphkit.observability.logging import (
    bind_context,
    clear_context,
    get_logger,
    setup_logging,
)

__all__ = ["bind_context", "clear_context", "get_logger", "setup_logging"]
