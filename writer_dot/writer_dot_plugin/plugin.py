import os
import re
from jinja2 import Environment, FileSystemLoader, StrictUndefined
from api.linker_api.services.writer_plugin import WriterPlugin
from api.linker_api.model.graph import Graph

TEMPLATE_NAME = "graph.dot.j2"


_NEEDS_ESCAPE = re.compile(r'"|\\(?=[\\"\n]|\Z)')


def dot_id(value) -> str:
    """Quote a name so it reads back verbatim.

    A backslash is doubled only where the reader would otherwise take it as
    part of an escape, so label escapes such as ``\\n`` pass through as written.
    """
    return '"' + _NEEDS_ESCAPE.sub(lambda m: "\\" + m.group(), str(value)) + '"'


def dot_attrs(attributes: dict) -> str:
    if not attributes:
        return ""
    pairs = ", ".join(f"{dot_id(k)}={dot_id(v)}" for k, v in attributes.items())
    return f" [{pairs}]"


def group_outgoing(graph: Graph) -> dict:
    """
    Groups edges by source name, keeping edge order inside each group.
    """
    outgoing = {}
    for edge in graph.edges:
        outgoing.setdefault(edge.source, []).append(edge)
    return outgoing


class DotWriter(WriterPlugin):
    @property
    def plugin_id(self) -> str:
        return "dot"

    @property
    def display_name(self) -> str:
        return "Graphviz DOT"

    @property
    def file_extension(self) -> str:
        return ".dot"

    def render_options_schema(self) -> dict:
        return {
            "name": {
                "type": "str",
                "label": "Graph name written after 'digraph'",
                "required": False
            },
            "strict": {
                "type": "bool",
                "label": "Write a strict digraph",
                "required": False
            }
        }

    def render(self, graph: Graph, **options) -> str:
        name = options.get("name")
        if name is None:
            name = graph.name
        strict = options.get("strict")
        if strict is None:
            strict = graph.strict

        # --- Template Rendering ---
        template_path = os.path.join(os.path.dirname(__file__), 'templates')
        env = Environment(
            loader=FileSystemLoader(template_path),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
            undefined=StrictUndefined,
        )
        env.filters["dot_id"] = dot_id
        env.filters["dot_attrs"] = dot_attrs
        template = env.get_template(TEMPLATE_NAME)

        return template.render(
            name=name,
            strict=strict,
            nodes=graph.nodes,
            outgoing=group_outgoing(graph),
        )
