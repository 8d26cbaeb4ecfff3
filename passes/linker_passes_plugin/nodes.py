"""Passes that select nodes by name: remove_nodes, term_nodes, extract_subgraph, extract_reachable."""

import logging

from api.linker_api.auxfiles import read_name_list
from api.linker_api.model import Graph
from .base import EXACT, REGEX, BuiltinPass, NameSelector, resolve_path, summarize

LOGGER = logging.getLogger(__name__)


class RemoveNodesPass(BuiltinPass):
    """Remove every node whose name matches a listed pattern, with its edges."""

    PASS_ID = "remove_nodes"
    DISPLAY_NAME = "Remove nodes"
    USAGE = "<names-file> [regex|exact]"

    def __init__(self, selector: NameSelector):
        self.selector = selector

    def parameters_schema(self) -> dict:
        return {
            "file": {"type": "path", "label": "One name pattern per line", "required": True},
            "mode": {"type": "str", "label": "regex (default) or exact", "required": False},
        }

    @classmethod
    def from_arguments(cls, arguments, base_dir=None):
        cls._check_arity(arguments, 1, 2)
        mode = cls._mode(arguments, 1, REGEX)
        return cls(NameSelector.from_file(resolve_path(arguments[0], base_dir), mode))

    def run(self, graph: Graph) -> Graph:
        result = graph.copy()
        doomed = self.selector.select(result.node_names())
        for name in doomed:
            LOGGER.debug("Removing node %s", name)
        removed = result.remove_nodes(doomed)
        summarize(self.PASS_ID, "removed nodes", removed, len(graph.nodes))
        return result


class TermNodesPass(BuiltinPass):
    """Make listed nodes terminal: drop their outgoing edges, keep the nodes."""

    PASS_ID = "term_nodes"
    DISPLAY_NAME = "Terminate nodes"
    USAGE = "<names-file> [exact|regex]"

    def __init__(self, selector: NameSelector):
        self.selector = selector

    @classmethod
    def from_arguments(cls, arguments, base_dir=None):
        cls._check_arity(arguments, 1, 2)
        mode = cls._mode(arguments, 1, EXACT)
        return cls(NameSelector.from_file(resolve_path(arguments[0], base_dir), mode))

    def run(self, graph: Graph) -> Graph:
        result = graph.copy()

        def outgoing_from_listed(edge):
            if self.selector.matches(edge.source):
                LOGGER.debug("Removing %s -> %s call", edge.source, edge.target)
                return True
            return False

        removed = result.remove_edges_where(outgoing_from_listed)
        summarize(self.PASS_ID, "removed edges", removed, len(graph.edges))
        return result


class ExtractSubgraphPass(BuiltinPass):
    """Keep only the listed nodes (exact names) and the edges between them."""

    PASS_ID = "extract_subgraph"
    DISPLAY_NAME = "Extract subgraph"
    USAGE = "<names-file>"

    def __init__(self, names):
        self.names = list(names)

    @classmethod
    def from_arguments(cls, arguments, base_dir=None):
        cls._check_arity(arguments, 1, 1)
        return cls(read_name_list(resolve_path(arguments[0], base_dir)))

    def run(self, graph: Graph) -> Graph:
        result = graph.copy()
        keep = set(self.names)
        removed = result.remove_nodes([n for n in result.node_names() if n not in keep])
        summarize(self.PASS_ID, "dropped nodes", removed, len(graph.nodes))
        return result


class ExtractReachablePass(BuiltinPass):
    """
    Keep only nodes reachable from the listed start nodes.

    With ``reverse`` edges are followed backwards, which keeps the start
    nodes and all of their ancestors.
    """

    PASS_ID = "extract_reachable"
    DISPLAY_NAME = "Extract reachable subgraph"
    USAGE = "<names-file> [forward|reverse]"

    def __init__(self, names, reverse: bool = False):
        self.names = list(names)
        self.reverse = reverse

    @classmethod
    def from_arguments(cls, arguments, base_dir=None):
        cls._check_arity(arguments, 1, 2)
        direction = cls._mode(arguments, 1, "forward", choices=("forward", "reverse"))
        names = read_name_list(resolve_path(arguments[0], base_dir))
        return cls(names, reverse=direction == "reverse")

    def run(self, graph: Graph) -> Graph:
        result = graph.copy()
        keep = result.reachable_from(self.names, reverse=self.reverse)
        removed = result.remove_nodes([n for n in result.node_names() if n not in keep])
        summarize(self.PASS_ID, "dropped nodes", removed, len(graph.nodes))
        return result
