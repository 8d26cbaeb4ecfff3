"""Graph pass plugin interface definitions."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Sequence
from ..model import Graph


class GraphPass(ABC):
    """Contract for one named, parameterized graph transformation.

    A pass is built once from its configuration arguments, which is when any
    parameter file is read and any pattern compiled. ``run`` must not change
    the graph it receives; it returns the transformed graph.
    """

    @property
    @abstractmethod
    def plugin_id(self) -> str:
        """Return the name the pass is invoked by in a pipeline file."""

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Return a human-readable pass name for logs."""

    def parameters_schema(self) -> dict[str, Any] | None:
        """Return an optional description of the configuration arguments."""
        return None

    @classmethod
    @abstractmethod
    def from_arguments(cls, arguments: Sequence[str], base_dir: Path = None) -> "GraphPass":
        """Build the pass from its configuration tokens.

        Relative file arguments are resolved against ``base_dir``.
        """

    @abstractmethod
    def run(self, graph: Graph) -> Graph:
        """Apply the pass and return the resulting graph."""
