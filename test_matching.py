import pytest

from api.linker_api.errors import ConfigParseError, PatternCompileError
from api.linker_api.matching import (
    BACKWARD,
    DESTINATION,
    FORWARD,
    SOURCE,
    CompiledPattern,
    CompiledRule,
    parse_edge_rule,
    parse_edge_rules,
    parse_generation_rule,
    split_template,
)


# -----------------
# ANCHORS
# -----------------

@pytest.mark.parametrize("pattern, name, expected", [
    ("foo\\Z", "foo", True),
    ("foo\\Z", "foox", False),
    ("foo\\$", "foo$x", True),
    ("foo\\$", "foo", False),
    ("foo\\\\$", "foo\\", True),
    ("foo\\\\$", "foo\\x", False),
])
def test_source_end_anchors(pattern, name, expected):
    assert CompiledPattern(pattern, SOURCE).matches(name) is expected


@pytest.mark.parametrize("pattern, name, expected", [
    ("\\Abar", "bar", True),
    ("\\Abar", "xbar", False),
    ("\\^bar", "x^bar", True),
    ("[^a]bar", "xbar", True),
    ("[^a]bar", "abar", False),
])
def test_destination_start_anchors(pattern, name, expected):
    assert CompiledPattern(pattern, DESTINATION).matches(name) is expected


def test_anchor_binds_only_its_own_alternative():
    assert CompiledPattern("foo|bar$", SOURCE).matches("foobar")
    assert not CompiledPattern("foo$|bar", SOURCE).matches("foobar")
    assert CompiledPattern("^foo|bar", DESTINATION).matches("xbar")
    assert CompiledPattern("^foo|bar", DESTINATION).matches("foo")
    assert not CompiledPattern("^foo|bar", DESTINATION).matches("xfoo")


def test_anchored_alternation_in_edge_rule():
    rule = CompiledRule("(main|init$)", "^\\1|_test")
    assert rule.matches_edge("main_loop", "main")
    assert rule.matches_edge("main_loop", "unit_test")
    assert not rule.matches_edge("main_loop", "xmain")
    assert not rule.matches_edge("init_all", "init")


# -----------------
# PARTIAL MATCH POLICY
# -----------------

def test_source_pattern_matches_prefix_only():
    pattern = CompiledPattern("foo", SOURCE)
    assert pattern.matches("foo")
    assert pattern.matches("foobar")
    assert not pattern.matches("barfoo")


def test_source_end_anchor_forces_full_match():
    pattern = CompiledPattern("foo$", SOURCE)
    assert pattern.matches("foo")
    assert not pattern.matches("foobar")
    assert CompiledPattern("^foo$", SOURCE).matches("foo")
    assert not CompiledPattern("^foo$", SOURCE).matches("foox")


def test_destination_pattern_matches_suffix_only():
    pattern = CompiledPattern("bar", DESTINATION)
    assert pattern.matches("bar")
    assert pattern.matches("foobar")
    assert not pattern.matches("barfoo")


def test_destination_start_anchor_forces_full_match():
    pattern = CompiledPattern("^bar", DESTINATION)
    assert pattern.matches("bar")
    assert not pattern.matches("foobar")


def test_destination_suffix_match_uses_whole_pattern():
    pattern = CompiledPattern("a+b", DESTINATION)
    m = pattern.match("xaaab")
    assert m is not None
    assert m.group() == "aaab"


def test_malformed_pattern_raises():
    with pytest.raises(PatternCompileError) as info:
        CompiledPattern("foo(", SOURCE)
    assert info.value.pattern == "foo("


# -----------------
# BACKREFERENCES
# -----------------

def test_split_template():
    assert split_template("x\\1y\\g<2>\\g<name>\\.") == ["x", 1, "y", 2, "name", "\\."]
    assert split_template("\\\\1") == ["\\\\1"]


def test_rule_with_numbered_backreference():
    rule = CompiledRule("(\\w+)_impl", "\\1")
    captures = rule.match("parse_impl")
    assert captures is not None
    assert rule.match_dependent(captures, "parse")
    assert rule.match_dependent(captures, "ns::parse")
    assert not rule.match_dependent(captures, "parse_other")
    assert not rule.match_dependent(captures, "print")


def test_rule_with_named_backreference():
    rule = CompiledRule("(?P<mod>[a-z]+)\\.", "^\\g<mod>_test$")
    assert rule.matches_edge("core.run", "core_test")
    assert not rule.matches_edge("core.run", "xcore_test")
    assert not rule.matches_edge("util.run", "core_test")


def test_captured_text_is_matched_literally():
    rule = CompiledRule("(a.c)", "^\\1$")
    assert rule.matches_edge("a.c", "a.c")
    assert not rule.matches_edge("a.c", "abc")


def test_quantifier_applies_to_whole_capture():
    rule = CompiledRule("(ab)", "^\\1+$")
    assert rule.matches_edge("ab", "ababab")
    assert not rule.matches_edge("ab", "abb")


def test_unmatched_group_fails_dependent_match():
    rule = CompiledRule("(x)?y", "\\1")
    captures = rule.match("y")
    assert captures is not None
    assert not rule.match_dependent(captures, "anything")


def test_source_mismatch_never_matches():
    rule = CompiledRule("foo", "bar")
    assert rule.match("baz") is None
    assert not rule.match_dependent(None, "bar")
    assert not rule.matches_edge("baz", "bar")


def test_backreference_beyond_source_groups_raises():
    with pytest.raises(PatternCompileError):
        CompiledRule("(a)", "\\2")


def test_unknown_named_backreference_raises():
    with pytest.raises(PatternCompileError):
        CompiledRule("(?P<x>a)", "\\g<y>")


def test_malformed_destination_raises_at_compile_time():
    with pytest.raises(PatternCompileError):
        CompiledRule("(a)", "\\1[")


# -----------------
# RULE LINES
# -----------------

def test_parse_edge_rule():
    rule = parse_edge_rule("^main$   helper")
    assert rule.matches_edge("main", "my_helper")
    assert not rule.matches_edge("main2", "helper")


def test_parse_edge_rule_requires_two_tokens():
    with pytest.raises(ConfigParseError):
        parse_edge_rule("only_one")
    with pytest.raises(ConfigParseError):
        parse_edge_rule("a b c")


def test_parse_edge_rules_reports_line():
    with pytest.raises(PatternCompileError) as info:
        parse_edge_rules([(1, "a b"), (4, "( b")], source="rules.txt")
    assert info.value.source == "rules.txt"
    assert info.value.line_number == 4
    assert "rules.txt:4" in str(info.value)


@pytest.mark.parametrize("line, direction, name", [
    ('"foo.*" -> sink', FORWARD, "sink"),
    ('"foo.*"<-source', BACKWARD, "source"),
    ('"a\\"b" -> "quoted name"', FORWARD, "quoted name"),
])
def test_parse_generation_rule(line, direction, name):
    rule = parse_generation_rule(line)
    assert rule.direction == direction
    assert rule.name == name


def test_generation_rule_unescapes_quote_in_regex():
    rule = parse_generation_rule('"a\\"b" -> x')
    assert rule.pattern.pattern == 'a"b'
    assert rule.pattern.matches('a"b')


def test_generation_rule_edge_direction():
    assert parse_generation_rule('"v" -> t').edge_for("v1") == ("v1", "t")
    assert parse_generation_rule('"v" <- t').edge_for("v1") == ("t", "v1")


@pytest.mark.parametrize("line", [
    "foo -> bar",
    '"foo" => bar',
    '"foo" ->',
    '"foo -> bar',
])
def test_parse_generation_rule_rejects_malformed(line):
    with pytest.raises(ConfigParseError):
        parse_generation_rule(line)
