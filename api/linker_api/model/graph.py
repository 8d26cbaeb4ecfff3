from collections import Counter
from typing import Callable, Dict, Iterable, List, Optional, Set

from .node import Node
from .edge import Edge
from ..errors import GraphInvariantViolation


class Graph:
    def __init__(self, name: str = "", strict: bool = False):
        self.name = name
        self.strict = strict
        self._nodes: Dict[str, Node] = {}
        self.edges: List[Edge] = []

    # -----------------
    # NODE OPERATIONS
    # -----------------

    @property
    def nodes(self) -> List[Node]:
        return list(self._nodes.values())

    def node_names(self) -> List[str]:
        return list(self._nodes)

    def add_node(self, node: Node) -> Node:
        if node.name in self._nodes:
            raise ValueError(f"Node '{node.name}' already exists.")
        self._nodes[node.name] = node
        return node

    def ensure_node(self, name: str) -> Node:
        node = self._nodes.get(name)
        if node is None:
            node = self.add_node(Node(name))
        return node

    def get_node(self, name: str) -> Optional[Node]:
        return self._nodes.get(name)

    def has_node(self, name: str) -> bool:
        return name in self._nodes

    def __contains__(self, name: str) -> bool:
        return name in self._nodes

    def remove_node(self, name: str) -> bool:
        """Remove a node and every edge touching it. Unknown names are ignored."""
        return self.remove_nodes([name]) == 1

    def remove_nodes(self, names: Iterable[str]) -> int:
        doomed = {name for name in names if name in self._nodes}
        if not doomed:
            return 0
        for name in doomed:
            del self._nodes[name]
        self.edges = [
            e for e in self.edges
            if e.source not in doomed and e.target not in doomed
        ]
        return len(doomed)

    # -----------------
    # EDGE OPERATIONS
    # -----------------

    def add_edge(self, edge: Edge) -> Edge:
        if edge.source not in self._nodes:
            raise ValueError(f"Source node '{edge.source}' does not exist.")

        if edge.target not in self._nodes:
            raise ValueError(f"Target node '{edge.target}' does not exist.")

        self.edges.append(edge)
        return edge

    def connect(self, source: str, target: str) -> Edge:
        return self.add_edge(Edge(source, target))

    def get_edges(self) -> List[Edge]:
        return self.edges

    def remove_edges_where(self, predicate: Callable[[Edge], bool]) -> int:
        kept = [e for e in self.edges if not predicate(e)]
        removed = len(self.edges) - len(kept)
        self.edges = kept
        return removed

    def edge_count(self, source: str, target: str) -> int:
        return sum(1 for e in self.edges if e.source == source and e.target == target)

    def has_edge(self, source: str, target: str) -> bool:
        return any(e.source == source and e.target == target for e in self.edges)

    def incoming(self, name: str) -> List[Edge]:
        return [e for e in self.edges if e.target == name]

    def outgoing(self, name: str) -> List[Edge]:
        return [e for e in self.edges if e.source == name]

    def in_degrees(self) -> Counter:
        return Counter(e.target for e in self.edges)

    def out_degrees(self) -> Counter:
        return Counter(e.source for e in self.edges)

    # -----------------
    # TRAVERSAL
    # -----------------

    def reachable_from(self, start: Iterable[str], reverse: bool = False) -> Set[str]:
        """Names reachable from any start node, start nodes included.

        Names absent from the graph are ignored. With ``reverse`` edges are
        followed from target to source.
        """
        adjacency: Dict[str, List[str]] = {}
        for e in self.edges:
            frm, to = (e.target, e.source) if reverse else (e.source, e.target)
            adjacency.setdefault(frm, []).append(to)

        seen = {name for name in start if name in self._nodes}
        stack = list(seen)
        while stack:
            current = stack.pop()
            for nxt in adjacency.get(current, ()):
                if nxt not in seen:
                    seen.add(nxt)
                    stack.append(nxt)
        return seen

    # -----------------
    # WHOLE GRAPH
    # -----------------

    def copy(self) -> "Graph":
        clone = Graph(name=self.name, strict=self.strict)
        for node in self._nodes.values():
            clone.add_node(node.copy())
        clone.edges = [e.copy() for e in self.edges]
        return clone

    def check_invariants(self) -> None:
        for index, e in enumerate(self.edges):
            for endpoint in (e.source, e.target):
                if endpoint not in self._nodes:
                    raise GraphInvariantViolation(
                        f"edge #{index} {e.source!r} -> {e.target!r} references "
                        f"missing node {endpoint!r}"
                    )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "strict": self.strict,
            "nodes": [node.to_dict() for node in self._nodes.values()],
            "edges": [edge.to_dict() for edge in self.edges],
        }

    def __repr__(self) -> str:
        return f"Graph({self.name!r}, nodes={len(self._nodes)}, edges={len(self.edges)})"
