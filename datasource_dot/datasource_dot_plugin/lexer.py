# Tokenizer for the subset of the Graphviz DOT language the linker reads

import re
from typing import Iterator, NamedTuple

from api.linker_api.errors import GraphSourceError

KEYWORDS = {"strict", "graph", "digraph", "node", "edge", "subgraph"}


class Token(NamedTuple):
    kind: str  # "ID", "KEYWORD" or the punctuation itself
    value: str
    line: int
    quoted: bool = False


_TOKEN_RE = re.compile(
    r"""
      (?P<newline>\n)
    | (?P<space>[ \t\r\f\v]+)
    | (?P<line_comment>//[^\n]*)
    | (?P<block_comment>/\*.*?\*/)
    | (?P<quoted>"(?:[^"\\]|\\.)*")
    | (?P<arrow>->|--)
    | (?P<punct>[{}\[\];,=:+])
    | (?P<number>-?(?:\.[0-9]+|[0-9]+(?:\.[0-9]*)?))
    | (?P<name>[A-Za-z_\x80-\U0010ffff][A-Za-z_0-9\x80-\U0010ffff]*)
    """,
    re.VERBOSE | re.DOTALL,
)


_ESCAPE = re.compile(r'\\([\\"\n])')


def _unescape(text: str) -> str:
    # \" and \\ are escapes inside a DOT string; line continuations are dropped
    # Any other backslash (\n, \l in labels) is kept as written
    return _ESCAPE.sub(lambda m: "" if m.group(1) == "\n" else m.group(1), text)


def _read_html(text: str, start: int, line: int) -> int:
    depth = 0
    pos = start
    while pos < len(text):
        ch = text[pos]
        if ch == "<":
            depth += 1
        elif ch == ">":
            depth -= 1
            if depth == 0:
                return pos + 1
        pos += 1
    raise GraphSourceError("unterminated HTML string", line_number=line)


def tokenize(text: str) -> Iterator[Token]:
    pos = 0
    line = 1
    at_line_start = True
    while pos < len(text):
        # '#' lines are preprocessor output and are ignored
        if at_line_start and text[pos] == "#":
            end = text.find("\n", pos)
            pos = len(text) if end == -1 else end
            continue

        if text[pos] == "<":
            end = _read_html(text, pos, line)
            value = text[pos + 1:end - 1]
            yield Token("ID", value, line, quoted=True)
            line += value.count("\n")
            pos = end
            at_line_start = False
            continue

        m = _TOKEN_RE.match(text, pos)
        if m is None:
            raise GraphSourceError(f"unexpected character {text[pos]!r}", line_number=line)
        kind = m.lastgroup
        value = m.group()
        pos = m.end()

        if kind == "newline":
            line += 1
            at_line_start = True
            continue
        if kind in ("space", "line_comment"):
            continue
        at_line_start = False
        if kind == "block_comment":
            line += value.count("\n")
            continue

        if kind == "quoted":
            yield Token("ID", _unescape(value[1:-1]), line, quoted=True)
            line += value.count("\n")
        elif kind in ("arrow", "punct"):
            yield Token(value, value, line)
        elif kind == "name" and value.lower() in KEYWORDS:
            yield Token("KEYWORD", value.lower(), line)
        else:
            yield Token("ID", value, line)
