import logging
from typing import Sequence

from api.linker_api.model import Graph
from .base import BuiltinPass

LOGGER = logging.getLogger(__name__)


def link_graphs(graphs: Sequence[Graph]) -> Graph:
    """
    Merges graphs into one.

    Nodes are united by name (the first occurrence keeps its attributes),
    edge lists are concatenated in input order. Name and strictness come
    from the first graph.
    """
    first = graphs[0] if graphs else None
    result = Graph(
        name=first.name if first else "",
        strict=first.strict if first else False,
    )
    for graph in graphs:
        for node in graph.nodes:
            if not result.has_node(node.name):
                result.add_node(node.copy())
        for edge in graph.edges:
            result.add_edge(edge.copy())
    LOGGER.info(
        "link: merged %d graph(s) into %d nodes, %d edges",
        len(graphs), len(result.nodes), len(result.edges),
    )
    return result


class LinkPass(BuiltinPass):
    # The engine hoists this pass and calls link() with every input graph
    # On an already linked graph it is the identity

    PASS_ID = "link"
    DISPLAY_NAME = "Link input graphs"

    @classmethod
    def from_arguments(cls, arguments, base_dir=None):
        cls._check_arity(arguments, 0, 0)
        return cls()

    def link(self, graphs: Sequence[Graph]) -> Graph:
        return link_graphs(graphs)

    def run(self, graph: Graph) -> Graph:
        return graph.copy()
