"""Pattern matching for node and edge selection."""

from .pattern import (
    SOURCE,
    DESTINATION,
    CompiledPattern,
    CompiledRule,
    split_template,
)
from .rules import (
    FORWARD,
    BACKWARD,
    GenerationRule,
    parse_edge_rule,
    parse_edge_rules,
    parse_generation_rule,
    parse_generation_rules,
)

__all__ = [
    "SOURCE",
    "DESTINATION",
    "CompiledPattern",
    "CompiledRule",
    "split_template",
    "FORWARD",
    "BACKWARD",
    "GenerationRule",
    "parse_edge_rule",
    "parse_edge_rules",
    "parse_generation_rule",
    "parse_generation_rules",
]
