import logging

from api.linker_api.auxfiles import read_name_list
from api.linker_api.model import Graph
from .base import BuiltinPass, resolve_path, summarize

LOGGER = logging.getLogger(__name__)


class ReparentPass(BuiltinPass):
    """
    Collapse chains through listed nodes.

    Listed nodes are processed one at a time in file order. For a node ``s``
    every pair of edges ``(v, s)`` and ``(s, u)`` yields a new edge
    ``(v, u)``, then ``s`` is removed with its edges. A chain through several
    listed nodes collapses because each later node already sees the edges
    added for the earlier ones. Pairs that use a self-loop on ``s`` are
    skipped since ``s`` is about to disappear.
    """

    PASS_ID = "reparent"
    DISPLAY_NAME = "Reparent through nodes"
    USAGE = "<names-file>"

    def __init__(self, names):
        self.names = list(names)

    def parameters_schema(self) -> dict:
        return {
            "file": {"type": "path", "label": "One node name per line, processed in order", "required": True},
        }

    @classmethod
    def from_arguments(cls, arguments, base_dir=None):
        cls._check_arity(arguments, 1, 1)
        return cls(read_name_list(resolve_path(arguments[0], base_dir)))

    def run(self, graph: Graph) -> Graph:
        result = graph.copy()
        collapsed = 0
        for name in self.names:
            if not result.has_node(name):
                continue
            parents = [e.source for e in result.incoming(name) if e.source != name]
            children = [e.target for e in result.outgoing(name) if e.target != name]
            for parent in parents:
                for child in children:
                    result.connect(parent, child)
            LOGGER.debug(
                "Reparenting through %s: %d new edge(s)", name, len(parents) * len(children)
            )
            result.remove_node(name)
            collapsed += 1
        summarize(self.PASS_ID, "collapsed nodes", collapsed)
        return result
