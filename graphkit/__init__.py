"""graphkit - adjacency-matrix graph analysis toolkit."""

__version__ = "0.1.0"
