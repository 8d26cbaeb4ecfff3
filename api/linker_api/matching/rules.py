"""Rule-line grammars used by the edge passes.

``src_regex dst_regex``
    edge selection rule (``remove_edges``)
``"regex" -> name`` / ``"regex" <- name``
    edge generation rule (``regex_edge_gen``)
"""

from __future__ import annotations

import re
from typing import Iterable, List, Tuple

from ..errors import ConfigParseError, GraphLinkError
from .pattern import SOURCE, CompiledPattern, CompiledRule

FORWARD = "->"
BACKWARD = "<-"

_GENERATION_LINE = re.compile(
    r'^"(?P<regex>(?:[^"\\]|\\.)*)"\s*(?P<arrow>->|<-)\s*(?P<name>.+?)$'
)


class GenerationRule:
    """Connects every node matching ``pattern`` with the fixed node ``name``."""

    def __init__(self, pattern: str, direction: str, name: str):
        if direction not in (FORWARD, BACKWARD):
            raise ValueError(f"Unknown direction: {direction!r}")
        self.pattern = CompiledPattern(pattern, SOURCE)
        self.direction = direction
        self.name = name

    def edge_for(self, matched: str) -> Tuple[str, str]:
        if self.direction == FORWARD:
            return (matched, self.name)
        return (self.name, matched)

    def __repr__(self) -> str:
        return f"GenerationRule({self.pattern.pattern!r} {self.direction} {self.name!r})"


def _unquote(token: str) -> str:
    if len(token) >= 2 and token.startswith('"') and token.endswith('"'):
        return token[1:-1].replace('\\"', '"')
    return token


def parse_edge_rule(line: str) -> CompiledRule:
    tokens = line.split()
    if len(tokens) != 2:
        raise ConfigParseError(
            f"expected 'src_regex dst_regex', got {len(tokens)} token(s)", line=line
        )
    return CompiledRule(tokens[0], tokens[1])


def parse_generation_rule(line: str) -> GenerationRule:
    m = _GENERATION_LINE.match(line.strip())
    if m is None:
        raise ConfigParseError(
            "expected '\"regex\" -> name' or '\"regex\" <- name'", line=line
        )
    regex = m.group("regex").replace('\\"', '"')
    name = _unquote(m.group("name"))
    if not name:
        raise ConfigParseError("missing target node name", line=line)
    return GenerationRule(regex, m.group("arrow"), name)


def _parse_all(entries, parser, source):
    rules = []
    for line_number, text in entries:
        try:
            rules.append(parser(text))
        except GraphLinkError as exc:
            raise exc.with_context(source=source, line_number=line_number, line=text)
    return rules


def parse_edge_rules(entries: Iterable[Tuple[int, str]], source: str = None) -> List[CompiledRule]:
    return _parse_all(entries, parse_edge_rule, source)


def parse_generation_rules(entries: Iterable[Tuple[int, str]], source: str = None) -> List[GenerationRule]:
    return _parse_all(entries, parse_generation_rule, source)
