# base.py
from __future__ import annotations

import logging
from abc import abstractmethod
from pathlib import Path
from typing import Any

from ..model import Graph, Node, Edge
from ..services.datasource_plugin import DataSourcePlugin
from ..errors import GraphSourceError

LOGGER = logging.getLogger(__name__)


class BaseDatasourcePlugin(DataSourcePlugin):
    # Base class for defining the flow of creating a Graph object
    # The flow is always to first parse the source (this is different based on plugin)
    # Secondly, we build the nodes and the edges (which is the same for all)

    def load_graph(self, source: Any, **options: Any) -> Graph:
        # Parse the data
        # This step is different based on each plugin implementation
        raw_data = self._parse_source(source, **options) or {}

        graph = Graph(
            name=str(options.get("name") or raw_data.get("name") or ""),
            strict=bool(raw_data.get("strict", False)),
        )
        self._build_nodes(raw_data, graph)
        self._build_edges(raw_data, graph)
        LOGGER.info(
            "Loaded %s graph from %s: %d nodes, %d edges",
            self.plugin_id, source, len(graph.nodes), len(graph.edges),
        )
        return graph

    @staticmethod
    def _resolve_path(source: Any, options: dict[str, Any]) -> str:
        if isinstance(source, (str, Path)) and str(source).strip():
            return str(source)
        fp = options.get("file_path")
        if isinstance(fp, (str, Path)) and str(fp).strip():
            return str(fp)
        raise GraphSourceError("Missing file path. Provide it as 'source' or as option 'file_path'.")

    @staticmethod
    def _read_source(path: str) -> str:
        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as exc:
            raise GraphSourceError(f"cannot read graph: {exc}", source=path) from exc

    @abstractmethod
    def _parse_source(self, source: Any, **options: Any) -> dict:
        # Returns {"name", "strict", "nodes": [...], "edges": [...]}
        pass

    # Create Node objects
    def _build_nodes(self, raw_data: dict, graph: Graph) -> None:
        for node_dict in raw_data.get("nodes", []) or []:
            name = node_dict.get("id")
            if name is None:
                continue
            name = str(name)
            attributes = dict(node_dict.get("attributes") or {})

            existing = graph.get_node(name)
            if existing is not None:
                # Repeated declarations add to the attributes
                existing.attributes.update(attributes)
                continue
            graph.add_node(Node(name, attributes))

    # Create Edge objects
    def _build_edges(self, raw_data: dict, graph: Graph) -> None:
        for edge_dict in raw_data.get("edges", []) or []:
            source = edge_dict.get("source")
            target = edge_dict.get("target")
            if source is None or target is None:
                continue
            source, target = str(source), str(target)

            # Endpoints that were never declared become plain nodes
            graph.ensure_node(source)
            graph.ensure_node(target)
            graph.add_edge(Edge(source, target, dict(edge_dict.get("attributes") or {})))
