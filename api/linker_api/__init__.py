"""Public API exports for linker_api plugin contracts."""

from .model import Node, Edge, Graph
from .services import DataSourcePlugin, WriterPlugin, GraphPass
from .errors import (
    GraphLinkError,
    ConfigParseError,
    PatternCompileError,
    AuxiliaryFileError,
    GraphSourceError,
    GraphInvariantViolation,
)

__all__ = [
    "Node",
    "Edge",
    "Graph",
    "DataSourcePlugin",
    "WriterPlugin",
    "GraphPass",
    "GraphLinkError",
    "ConfigParseError",
    "PatternCompileError",
    "AuxiliaryFileError",
    "GraphSourceError",
    "GraphInvariantViolation",
]
