"""Error types shared by the linker components.

Every error is fatal to a pipeline run. Errors carry optional context
(pass position, pass name, file, line) so the faulty configuration or rule
entry can be located from the message alone.
"""

from __future__ import annotations

from typing import Optional


class GraphLinkError(Exception):
    """Base class for all linker errors."""

    def __init__(
        self,
        message: str,
        *,
        source: Optional[str] = None,
        line_number: Optional[int] = None,
        line: Optional[str] = None,
        pass_index: Optional[int] = None,
        pass_name: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.source = source
        self.line_number = line_number
        self.line = line
        self.pass_index = pass_index
        self.pass_name = pass_name

    def with_context(self, **context) -> "GraphLinkError":
        """Fill in context fields that are still unset and return self."""
        for key, value in context.items():
            if value is not None and getattr(self, key, None) is None:
                setattr(self, key, value)
        return self

    def __str__(self) -> str:
        parts = []
        if self.pass_index is not None or self.pass_name is not None:
            parts.append(f"pass #{self.pass_index} '{self.pass_name}'")
        if self.source is not None:
            location = str(self.source)
            if self.line_number is not None:
                location += f":{self.line_number}"
            parts.append(location)
        elif self.line_number is not None:
            parts.append(f"line {self.line_number}")
        text = self.message
        if parts:
            text = f"{', '.join(parts)}: {text}"
        if self.line is not None:
            text += f" (offending line: {self.line!r})"
        return text


class ConfigParseError(GraphLinkError):
    """Malformed pass descriptor or rule line."""


class PatternCompileError(GraphLinkError):
    """Invalid regular expression or inconsistent backreference."""

    def __init__(self, message: str, *, pattern: Optional[str] = None, **context):
        super().__init__(message, **context)
        self.pattern = pattern


class AuxiliaryFileError(GraphLinkError):
    """A configuration, name or rule file could not be read."""


class GraphSourceError(GraphLinkError):
    """An input graph could not be read or parsed."""


class GraphInvariantViolation(GraphLinkError):
    """An edge references a node that is not in the graph.

    Passes never leave dangling edges behind, so this signals a defect in a
    pass rather than a user error.
    """
