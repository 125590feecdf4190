"""Exception types raised by the graph engine.

Only structural and input problems raise. Lookups that find nothing
(missing vertex, missing edge, unreachable target) return ``False`` or an
empty list instead.
"""


class GraphError(Exception):
    """Base class for all graph engine errors."""


class StructureError(GraphError, ValueError):
    """The matrix/vertex pair violates the adjacency-matrix invariant."""


class ParseError(GraphError, ValueError):
    """A matrix source (file, string, JSON document) could not be parsed."""
