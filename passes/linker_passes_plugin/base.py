from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from api.linker_api.auxfiles import read_lines
from api.linker_api.errors import ConfigParseError, GraphLinkError
from api.linker_api.matching import SOURCE, CompiledPattern
from api.linker_api.services.pass_plugin import GraphPass

LOGGER = logging.getLogger(__name__)

REGEX = "regex"
EXACT = "exact"


def resolve_path(argument: str, base_dir: Optional[Path] = None) -> Path:
    path = Path(argument)
    if base_dir is not None and not path.is_absolute():
        path = Path(base_dir) / path
    return path


class BuiltinPass(GraphPass):
    # Shared plumbing for the built-in catalog
    # PASS_ID is what a pipeline file names; DISPLAY_NAME is used in logs

    PASS_ID = ""
    DISPLAY_NAME = ""
    USAGE = ""

    @property
    def plugin_id(self) -> str:
        return self.PASS_ID

    @property
    def display_name(self) -> str:
        return self.DISPLAY_NAME

    @classmethod
    def _check_arity(cls, arguments: Sequence[str], minimum: int, maximum: int) -> None:
        if not minimum <= len(arguments) <= maximum:
            raise ConfigParseError(
                f"'{cls.PASS_ID}' takes {cls._arity_text(minimum, maximum)}, "
                f"got {len(arguments)}; usage: {cls.PASS_ID} {cls.USAGE}".rstrip()
            )

    @staticmethod
    def _arity_text(minimum: int, maximum: int) -> str:
        if minimum == maximum == 0:
            return "no arguments"
        if minimum == maximum:
            return f"{minimum} argument(s)"
        return f"{minimum} to {maximum} arguments"

    @classmethod
    def _mode(cls, arguments: Sequence[str], index: int, default: str, choices=(REGEX, EXACT)) -> str:
        if len(arguments) <= index:
            return default
        mode = arguments[index].lower()
        if mode not in choices:
            raise ConfigParseError(
                f"'{cls.PASS_ID}' mode must be one of {', '.join(choices)}, got {arguments[index]!r}"
            )
        return mode

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class NameSelector:
    """Selects node names either by regex (source-side policy) or exactly."""

    def __init__(self, items: List[str], mode: str = REGEX, patterns: List[CompiledPattern] = None):
        self.items = items
        self.mode = mode
        self._exact = set(items) if mode == EXACT else set()
        self._patterns = patterns or []

    @classmethod
    def from_file(cls, path: Path, mode: str) -> "NameSelector":
        entries = read_lines(path)
        items = [text for _, text in entries]
        if mode == EXACT:
            return cls(items, EXACT)
        patterns = []
        for line_number, text in entries:
            try:
                patterns.append(CompiledPattern(text, SOURCE))
            except GraphLinkError as exc:
                raise exc.with_context(source=str(path), line_number=line_number, line=text)
        return cls(items, REGEX, patterns)

    def matches(self, name: str) -> bool:
        if self.mode == EXACT:
            return name in self._exact
        return any(p.matches(name) for p in self._patterns)

    def select(self, names: Sequence[str]) -> List[str]:
        return [name for name in names if self.matches(name)]

    def __len__(self) -> int:
        return len(self.items)


def summarize(pass_id: str, what: str, count: int, total: int = None) -> None:
    if total is None:
        LOGGER.info("%s: %s %d", pass_id, what, count)
    else:
        LOGGER.info("%s: %s %d of %d", pass_id, what, count, total)

