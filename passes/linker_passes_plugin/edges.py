"""Passes that rewrite the edge list: remove_edges, regex_edge_gen, unique_edges, reverse."""

import logging

from api.linker_api.auxfiles import read_lines
from api.linker_api.matching import parse_edge_rules, parse_generation_rules
from api.linker_api.model import Graph
from .base import BuiltinPass, resolve_path, summarize

LOGGER = logging.getLogger(__name__)


class RemoveEdgesPass(BuiltinPass):
    """
    Remove every edge matched by any ``src_regex dst_regex`` rule.

    The destination pattern may use backreferences to the source pattern's
    groups, e.g. ``(\\w+)_impl \\1`` drops edges from ``foo_impl`` to ``foo``.
    """

    PASS_ID = "remove_edges"
    DISPLAY_NAME = "Remove edges"
    USAGE = "<rules-file>"

    def __init__(self, rules):
        self.rules = list(rules)

    def parameters_schema(self) -> dict:
        return {
            "file": {"type": "path", "label": "One 'src_regex dst_regex' rule per line", "required": True},
        }

    @classmethod
    def from_arguments(cls, arguments, base_dir=None):
        cls._check_arity(arguments, 1, 1)
        path = resolve_path(arguments[0], base_dir)
        return cls(parse_edge_rules(read_lines(path), source=str(path)))

    def _selected(self, edge) -> bool:
        for rule in self.rules:
            if rule.matches_edge(edge.source, edge.target):
                LOGGER.debug("Removing edge %s -> %s (rule %r)", edge.source, edge.target, rule)
                return True
        return False

    def run(self, graph: Graph) -> Graph:
        result = graph.copy()
        removed = result.remove_edges_where(self._selected)
        summarize(self.PASS_ID, "removed edges", removed, len(graph.edges))
        return result


class RegexEdgeGenPass(BuiltinPass):
    """Connect every node matching a rule's regex with the rule's fixed node."""

    PASS_ID = "regex_edge_gen"
    DISPLAY_NAME = "Generate edges by regex"
    USAGE = "<rules-file>"

    def __init__(self, rules):
        self.rules = list(rules)

    def parameters_schema(self) -> dict:
        return {
            "file": {"type": "path", "label": "One '\"regex\" -> name' or '\"regex\" <- name' rule per line", "required": True},
        }

    @classmethod
    def from_arguments(cls, arguments, base_dir=None):
        cls._check_arity(arguments, 1, 1)
        path = resolve_path(arguments[0], base_dir)
        return cls(parse_generation_rules(read_lines(path), source=str(path)))

    def run(self, graph: Graph) -> Graph:
        result = graph.copy()
        added = 0
        for rule in self.rules:
            # Match against the nodes present before this rule adds its target
            matched = [name for name in result.node_names() if rule.pattern.matches(name)]
            for name in matched:
                source, target = rule.edge_for(name)
                result.ensure_node(rule.name)
                result.connect(source, target)
                LOGGER.debug("Adding edge %s -> %s", source, target)
                added += 1
        summarize(self.PASS_ID, "added edges", added)
        return result


class UniqueEdgesPass(BuiltinPass):
    PASS_ID = "unique_edges"
    DISPLAY_NAME = "Deduplicate edges"

    @classmethod
    def from_arguments(cls, arguments, base_dir=None):
        cls._check_arity(arguments, 0, 0)
        return cls()

    def run(self, graph: Graph) -> Graph:
        result = graph.copy()
        seen = set()
        unique = []
        for edge in result.edges:
            if edge.key not in seen:
                seen.add(edge.key)
                unique.append(edge)
        result.edges = unique
        summarize(self.PASS_ID, "removed duplicate edges", len(graph.edges) - len(unique), len(graph.edges))
        return result


class ReversePass(BuiltinPass):
    PASS_ID = "reverse"
    DISPLAY_NAME = "Reverse edges"

    @classmethod
    def from_arguments(cls, arguments, base_dir=None):
        cls._check_arity(arguments, 0, 0)
        return cls()

    def run(self, graph: Graph) -> Graph:
        result = graph.copy()
        result.edges = [edge.reversed() for edge in result.edges]
        summarize(self.PASS_ID, "reversed edges", len(result.edges))
        return result
