from typing import Optional, List
from api.linker_api.model import Graph, Node, Edge


class Workspace:
    """
    Per-run state container.

    Responsibilities:
    - Own the current graph of a pipeline run
    - Keep every earlier state (one per applied pass) for inspection and undo
    """

    def __init__(self):
        self._current_graph: Optional[Graph] = None
        self._history: List[Graph] = []

    # ==========================================================
    # GRAPH STATE MANAGEMENT
    # ==========================================================

    def set_graph(self, graph: Graph) -> None:
        if self._current_graph is not None:
            self._history.append(self._current_graph)
        self._current_graph = graph

    def get_graph(self) -> Optional[Graph]:
        return self._current_graph

    def has_graph(self) -> bool:
        return self._current_graph is not None

    def clear(self) -> None:
        self._current_graph = None
        self._history.clear()

    def undo(self) -> Optional[Graph]:
        if not self._history:
            return None
        self._current_graph = self._history.pop()
        return self._current_graph

    def history_size(self) -> int:
        return len(self._history)

    @property
    def history(self) -> List[Graph]:
        return list(self._history)

    # ==========================================================
    # NODE / EDGE QUERIES
    # ==========================================================

    def list_nodes(self) -> List[Node]:
        if self._current_graph is None:
            return []
        return self._current_graph.nodes

    def find_node(self, name: str) -> Optional[Node]:
        if self._current_graph is None:
            return None
        return self._current_graph.get_node(name)

    def list_edges(self) -> List[Edge]:
        if self._current_graph is None:
            return []
        return self._current_graph.edges
