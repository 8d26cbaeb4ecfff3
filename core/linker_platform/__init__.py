"""Pipeline execution platform: config reader, plugin registry, engine."""

from .engine import GraphEngine
from .registry import PluginRegistry
from .workspace import Workspace
from .config import PassDescriptor, parse_pipeline, read_pipeline

__all__ = [
    "GraphEngine",
    "PluginRegistry",
    "Workspace",
    "PassDescriptor",
    "parse_pipeline",
    "read_pipeline",
]
