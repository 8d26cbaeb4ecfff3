"""Datasource plugin interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Tuple
from ..model import Graph


class DataSourcePlugin(ABC):
    """Contract for plugins that load graph data from external sources."""

    @property
    @abstractmethod
    def plugin_id(self) -> str:
        """Return a unique, stable plugin identifier."""

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Return a human-readable plugin name for logs and CLI help."""

    @property
    def file_extensions(self) -> Tuple[str, ...]:
        """Return the file extensions (with leading dot) this plugin reads."""
        return ()

    def parameters_schema(self) -> dict[str, Any] | None:
        """Return an optional parameter schema for CLI integration."""
        return None

    @abstractmethod
    def load_graph(self, source: Any, **options: Any) -> Graph:
        """Load and return a graph object from the provided source."""
