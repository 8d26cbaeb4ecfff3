import pytest

from api.linker_api.model import Graph


def build_graph(nodes=(), edges=(), name: str = "") -> Graph:
    """Graph with the given node names and (source, target) pairs, in order."""
    graph = Graph(name=name)
    for node in nodes:
        graph.ensure_node(node)
    for source, target in edges:
        graph.ensure_node(source)
        graph.ensure_node(target)
        graph.connect(source, target)
    return graph


def edge_pairs(graph: Graph):
    return [edge.key for edge in graph.edges]


@pytest.fixture
def make_graph():
    return build_graph


@pytest.fixture
def write_file(tmp_path):
    def _write(name: str, text: str):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
