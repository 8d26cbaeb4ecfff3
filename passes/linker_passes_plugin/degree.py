import logging
from typing import Optional

from api.linker_api.errors import ConfigParseError
from api.linker_api.model import Graph
from .base import BuiltinPass, summarize

LOGGER = logging.getLogger(__name__)

_IN_FLAGS = ("-deg_in", "--deg_in")
_OUT_FLAGS = ("-deg_out", "--deg_out")


def _bound(text: str) -> int:
    if not (text.isascii() and text.isdigit()):
        raise ConfigParseError(f"'cut_deg' bound must be a non-negative integer, got {text!r}")
    return int(text)


class CutDegPass(BuiltinPass):
    """
    Keep only nodes whose in-degree and out-degree stay within the bounds.

    Degrees count every edge, so duplicates left before ``unique_edges``
    push a node over the bound. An omitted bound is unbounded.

    Arguments: ``+N`` or ``-deg_in N`` bounds incoming edges, ``-N`` or
    ``-deg_out N`` bounds outgoing edges.
    """

    PASS_ID = "cut_deg"
    DISPLAY_NAME = "Cut by degree"
    USAGE = "[+IN | -deg_in IN] [-OUT | -deg_out OUT]"

    def __init__(self, deg_in: Optional[int] = None, deg_out: Optional[int] = None):
        self.deg_in = deg_in
        self.deg_out = deg_out

    def parameters_schema(self) -> dict:
        return {
            "deg_in": {"type": "int", "label": "Maximum incoming edges", "required": False},
            "deg_out": {"type": "int", "label": "Maximum outgoing edges", "required": False},
        }

    @classmethod
    def from_arguments(cls, arguments, base_dir=None):
        bounds = {"deg_in": None, "deg_out": None}

        def assign(key, text):
            if bounds[key] is not None:
                raise ConfigParseError(f"'cut_deg' {key} given more than once")
            bounds[key] = _bound(text)

        tokens = list(arguments)
        i = 0
        while i < len(tokens):
            token = tokens[i]
            if token in _IN_FLAGS or token in _OUT_FLAGS:
                if i + 1 == len(tokens):
                    raise ConfigParseError(f"'cut_deg' {token} needs a value")
                assign("deg_in" if token in _IN_FLAGS else "deg_out", tokens[i + 1])
                i += 2
                continue
            if token.startswith("+"):
                assign("deg_in", token[1:])
            elif token.startswith("-"):
                assign("deg_out", token[1:])
            else:
                raise ConfigParseError(
                    f"Invalid prefix for deg filter: expected '+' or '-', got {token!r}"
                )
            i += 1
        return cls(**bounds)

    def _over(self, bound: Optional[int], degree: int) -> bool:
        return bound is not None and degree > bound

    def run(self, graph: Graph) -> Graph:
        result = graph.copy()
        if self.deg_in is None and self.deg_out is None:
            return result

        in_deg = result.in_degrees()
        out_deg = result.out_degrees()
        doomed = [
            name for name in result.node_names()
            if self._over(self.deg_in, in_deg[name]) or self._over(self.deg_out, out_deg[name])
        ]
        for name in doomed:
            LOGGER.debug("Cutting %s (in=%d, out=%d)", name, in_deg[name], out_deg[name])
        removed = result.remove_nodes(doomed)
        summarize(self.PASS_ID, "removed nodes", removed, len(graph.nodes))
        return result

    def __repr__(self) -> str:
        return f"CutDegPass(deg_in={self.deg_in}, deg_out={self.deg_out})"
