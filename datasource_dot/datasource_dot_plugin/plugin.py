from typing import Any, Dict, List, Optional

from api.linker_api.datasource_common.base import BaseDatasourcePlugin
from api.linker_api.errors import GraphLinkError, GraphSourceError
from .lexer import Token, tokenize


class _DotParser:
    # Recursive descent over the token list
    # Collects nodes in order of first appearance and edges in statement order

    def __init__(self, tokens: List[Token]):
        self.tokens = tokens
        self.pos = 0
        self.nodes: Dict[str, Dict[str, Any]] = {}
        self.edges: List[Dict[str, Any]] = []

    # -----------------
    # TOKEN HELPERS
    # -----------------

    def _peek(self, offset: int = 0) -> Optional[Token]:
        index = self.pos + offset
        return self.tokens[index] if index < len(self.tokens) else None

    def _at(self, kind: str, value: str = None, offset: int = 0) -> bool:
        tok = self._peek(offset)
        return tok is not None and tok.kind == kind and (value is None or tok.value == value)

    def _next(self) -> Token:
        tok = self._peek()
        if tok is None:
            last = self.tokens[-1].line if self.tokens else 1
            raise GraphSourceError("unexpected end of input", line_number=last)
        self.pos += 1
        return tok

    def _expect(self, kind: str, value: str = None) -> Token:
        tok = self._next()
        if tok.kind != kind or (value is not None and tok.value != value):
            expected = value or kind
            raise GraphSourceError(
                f"expected {expected!r}, got {tok.value!r}", line_number=tok.line
            )
        return tok

    def _id(self) -> str:
        value = self._expect("ID").value
        # "a" + "b" concatenation
        while self._at("+"):
            self._next()
            value += self._expect("ID").value
        return value

    # -----------------
    # GRAMMAR
    # -----------------

    def parse(self) -> dict:
        strict = False
        if self._at("KEYWORD", "strict"):
            self._next()
            strict = True
        kind = self._expect("KEYWORD")
        if kind.value not in ("graph", "digraph"):
            raise GraphSourceError(
                f"expected 'graph' or 'digraph', got {kind.value!r}", line_number=kind.line
            )
        name = self._id() if self._at("ID") else ""
        self._expect("{")
        self._stmt_list()
        self._expect("}")
        if self._peek() is not None:
            tok = self._peek()
            raise GraphSourceError(
                f"unexpected {tok.value!r} after graph body", line_number=tok.line
            )
        return {
            "name": name,
            "strict": strict,
            "nodes": list(self.nodes.values()),
            "edges": self.edges,
        }

    def _stmt_list(self) -> List[str]:
        # Returns the node names mentioned, for edges to subgraphs
        mentioned: List[str] = []
        while not self._at("}"):
            if self._peek() is None:
                self._next()
            mentioned.extend(self._stmt())
            if self._at(";"):
                self._next()
        return mentioned

    def _stmt(self) -> List[str]:
        if self._at("KEYWORD", "graph") or self._at("KEYWORD", "node") or self._at("KEYWORD", "edge"):
            # Default attribute statements do not change the topology
            self._next()
            self._attr_list()
            return []

        if self._at("ID") and self._at("=", offset=1):
            self._id()
            self._next()
            self._id()
            return []

        if self._at("KEYWORD", "subgraph") or self._at("{"):
            group = self._subgraph()
            return self._edge_rhs(group) if self._at_edge_op() else group

        name = self._node_id()
        self._mention(name)
        if self._at_edge_op():
            return self._edge_rhs([name])

        attributes = self._attr_list()
        self.nodes[name]["attributes"].update(attributes)
        return [name]

    def _at_edge_op(self) -> bool:
        return self._at("->") or self._at("--")

    def _edge_rhs(self, sources: List[str]) -> List[str]:
        chain = [sources]
        while self._at_edge_op():
            self._next()
            if self._at("KEYWORD", "subgraph") or self._at("{"):
                chain.append(self._subgraph())
            else:
                name = self._node_id()
                self._mention(name)
                chain.append([name])
        attributes = self._attr_list()

        for left, right in zip(chain, chain[1:]):
            for source in left:
                for target in right:
                    self.edges.append({
                        "source": source,
                        "target": target,
                        "attributes": dict(attributes),
                    })
        return [name for group in chain for name in group]

    def _subgraph(self) -> List[str]:
        if self._at("KEYWORD", "subgraph"):
            self._next()
            if self._at("ID"):
                self._id()
        self._expect("{")
        mentioned = self._stmt_list()
        self._expect("}")
        # Keep first-appearance order, drop repeats
        return list(dict.fromkeys(mentioned))

    def _node_id(self) -> str:
        name = self._id()
        # Ports and compass points are not part of the name
        if self._at(":"):
            self._next()
            self._id()
            if self._at(":"):
                self._next()
                self._id()
        return name

    def _mention(self, name: str) -> None:
        if name not in self.nodes:
            self.nodes[name] = {"id": name, "attributes": {}}

    def _attr_list(self) -> Dict[str, str]:
        attributes: Dict[str, str] = {}
        while self._at("["):
            self._next()
            while not self._at("]"):
                key = self._id()
                value = ""
                if self._at("="):
                    self._next()
                    value = self._id()
                attributes[key] = value
                if self._at(",") or self._at(";"):
                    self._next()
            self._expect("]")
        return attributes


def parse_dot(text: str) -> dict:
    return _DotParser(list(tokenize(text))).parse()


class DotDatasourcePlugin(BaseDatasourcePlugin):
    # Adapter to read a Graphviz DOT file and create a Graph object
    # Chains, subgraphs and ports are flattened into plain node/edge lists

    @property
    def plugin_id(self) -> str:
        return "dot"

    @property
    def display_name(self) -> str:
        return "Graphviz DOT file"

    @property
    def file_extensions(self):
        return (".dot", ".gv")

    def parameters_schema(self) -> dict:
        return {
            "file_path": {
                "type": "str",
                "label": "Path to DOT file",
                "required": True
            },
            "name": {
                "type": "str",
                "label": "Override the graph name",
                "required": False
            }
        }

    def _parse_source(self, source, **kwargs) -> dict:
        # Only the parsing step differs from the JSON plugin
        if kwargs.get("text") is not None:
            path = "<text>"
            text = kwargs["text"]
        else:
            path = self._resolve_path(source, kwargs)
            text = self._read_source(path)
        try:
            return parse_dot(text)
        except GraphLinkError as exc:
            raise exc.with_context(source=path)
