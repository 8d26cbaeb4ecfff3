"""Regex matching with the source/destination partial-match policy.

Names on the *source* side of a rule match when an unanchored pattern
matches a prefix of the name. Names on the *destination* side match when
the pattern matches a suffix. An explicit end anchor on a source pattern, or
an explicit start anchor on a destination pattern, forces a full match.
Anchors bind only the alternative they are written in: ``foo|bar$``
still prefix-matches ``foobar`` through ``foo``.

A ``CompiledRule`` couples a source pattern with a destination template
whose backreferences (``\\1``, ``\\g<1>``, ``\\g<name>``) point at groups of
the source pattern. The source is matched first; its captures are then
substituted into the template before the destination is matched.
"""

from __future__ import annotations

import re
from typing import Dict, List, Optional, Tuple, Union

from ..errors import PatternCompileError

SOURCE = "source"
DESTINATION = "destination"

# A template is a list of literal regex text and group references
TemplatePart = Union[str, int]
GroupRef = Union[int, str]


def _compile(pattern: str) -> "re.Pattern[str]":
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise PatternCompileError(
            f"invalid regular expression {pattern!r}: {exc}", pattern=pattern
        ) from exc


class CompiledPattern:
    """One regex plus the side of a rule it is matched on."""

    def __init__(self, pattern: str, side: str = SOURCE):
        if side not in (SOURCE, DESTINATION):
            raise ValueError(f"Unknown pattern side: {side!r}")
        self.pattern = pattern
        self.side = side
        self.regex = _compile(pattern)

    @property
    def groups(self) -> int:
        return self.regex.groups

    def match(self, name: str) -> Optional[re.Match]:
        if self.side == SOURCE:
            return self.regex.match(name)
        # Leftmost start that reaches the end of the name.
        # '^' and \A only hold at the real start, whatever the position.
        for start in range(len(name) + 1):
            m = self.regex.fullmatch(name, start)
            if m is not None:
                return m
        return None

    def matches(self, name: str) -> bool:
        return self.match(name) is not None

    def __repr__(self) -> str:
        return f"CompiledPattern({self.pattern!r}, {self.side})"


def split_template(template: str) -> List[TemplatePart]:
    """Split a destination template into literal text and group references."""
    parts: List[TemplatePart] = []
    literal: List[str] = []

    def flush():
        if literal:
            parts.append("".join(literal))
            literal.clear()

    i = 0
    while i < len(template):
        ch = template[i]
        if ch != "\\" or i + 1 == len(template):
            literal.append(ch)
            i += 1
            continue

        nxt = template[i + 1]
        if nxt in "123456789":
            end = i + 2
            if end < len(template) and template[end] in "0123456789":
                end += 1
            flush()
            parts.append(int(template[i + 1:end]))
            i = end
        elif nxt == "g" and template.startswith("<", i + 2):
            close = template.find(">", i + 3)
            if close == -1:
                raise PatternCompileError(
                    f"unterminated group reference in {template!r}", pattern=template
                )
            ref = template[i + 3:close]
            if not ref:
                raise PatternCompileError(
                    f"empty group reference in {template!r}", pattern=template
                )
            flush()
            parts.append(int(ref) if ref.isdigit() else ref)
            i = close + 1
        else:
            # Any other escape is regex text
            literal.append(template[i:i + 2])
            i += 2

    flush()
    return parts


class CompiledRule:
    """A source pattern and a dependent destination pattern compiled together."""

    def __init__(self, source_pattern: str, dependent_pattern_template: str):
        self.source = CompiledPattern(source_pattern, SOURCE)
        self.template = dependent_pattern_template
        self._parts = split_template(dependent_pattern_template)
        self._refs: List[GroupRef] = [p for p in self._parts if not isinstance(p, str)]
        self._cache: Dict[Tuple[str, ...], CompiledPattern] = {}

        for ref in self._refs:
            self._check_reference(ref)

        # Validate the destination side once with placeholder captures
        CompiledPattern(self._render(["x"] * len(self._refs)), DESTINATION)

        if not self._refs:
            self._cache[()] = CompiledPattern(dependent_pattern_template, DESTINATION)

    def _check_reference(self, ref: GroupRef) -> None:
        if isinstance(ref, int):
            if ref > self.source.groups:
                raise PatternCompileError(
                    f"destination {self.template!r} references group {ref} but source "
                    f"{self.source.pattern!r} defines only {self.source.groups}",
                    pattern=self.template,
                )
        elif ref not in self.source.regex.groupindex:
            raise PatternCompileError(
                f"destination {self.template!r} references unknown group {ref!r} "
                f"of source {self.source.pattern!r}",
                pattern=self.template,
            )

    def _render(self, values: List[str]) -> str:
        out = []
        captured = iter(values)
        for part in self._parts:
            if isinstance(part, str):
                out.append(part)
            else:
                out.append("(?:" + re.escape(next(captured)) + ")")
        return "".join(out)

    def match(self, name: str) -> Optional[re.Match]:
        """Match the source side; the returned match holds the captures."""
        return self.source.match(name)

    def match_dependent(self, captures: Optional[re.Match], candidate: str) -> bool:
        """Match the destination side using captures from ``match``."""
        if captures is None:
            return False
        values = []
        for ref in self._refs:
            value = captures.group(ref)
            if value is None:
                # Group did not take part in the source match
                return False
            values.append(value)
        key = tuple(values)
        dependent = self._cache.get(key)
        if dependent is None:
            dependent = CompiledPattern(self._render(values), DESTINATION)
            self._cache[key] = dependent
        return dependent.matches(candidate)

    def matches_edge(self, source: str, target: str) -> bool:
        return self.match_dependent(self.match(source), target)

    def __repr__(self) -> str:
        return f"CompiledRule({self.source.pattern!r}, {self.template!r})"
