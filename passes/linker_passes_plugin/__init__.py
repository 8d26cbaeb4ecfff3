"""Built-in pass catalog."""

from .link import LinkPass, link_graphs
from .nodes import RemoveNodesPass, TermNodesPass, ExtractSubgraphPass, ExtractReachablePass
from .edges import RemoveEdgesPass, RegexEdgeGenPass, UniqueEdgesPass, ReversePass
from .degree import CutDegPass
from .reparent import ReparentPass

# Order in which a pipeline file may name them
BUILTIN_PASSES = {
    cls.PASS_ID: cls
    for cls in (
        LinkPass,
        RemoveNodesPass,
        RemoveEdgesPass,
        RegexEdgeGenPass,
        CutDegPass,
        UniqueEdgesPass,
        ExtractSubgraphPass,
        ReversePass,
        ReparentPass,
        TermNodesPass,
        ExtractReachablePass,
    )
}

__all__ = [
    "BUILTIN_PASSES",
    "LinkPass",
    "link_graphs",
    "RemoveNodesPass",
    "TermNodesPass",
    "ExtractSubgraphPass",
    "ExtractReachablePass",
    "RemoveEdgesPass",
    "RegexEdgeGenPass",
    "UniqueEdgesPass",
    "ReversePass",
    "CutDegPass",
    "ReparentPass",
]
