import logging
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from .registry import PluginRegistry
from .workspace import Workspace
from .config import PassDescriptor, read_pipeline
from api.linker_api.errors import ConfigParseError, GraphLinkError, GraphSourceError
from api.linker_api.model import Graph
from api.linker_api.services import GraphPass
from passes.linker_passes_plugin import LinkPass

LOGGER = logging.getLogger(__name__)

Step = Tuple[PassDescriptor, GraphPass]


class GraphEngine:
    """
    High-level orchestration layer.

    Responsibilities:
    - Build and validate every configured pass before any of them runs
    - Hoist 'link' so input graphs are merged before any modification
    - Apply the remaining passes strictly in declared order
    - Delegation to Workspace, which holds every intermediate graph
    """

    def __init__(self, registry: Optional[PluginRegistry] = None):
        self.registry = registry or PluginRegistry()
        self.workspace = Workspace()

    # ==========================================================
    # MAIN ORCHESTRATION
    # ==========================================================

    def process(
        self,
        sources: Sequence[str],
        config_path: str,
        output: Optional[str] = None,
        force_link: bool = False,
        writer_name: str = "dot",
        **options,
    ) -> str:
        writer_cls = self.registry.get_writer(writer_name)
        if not writer_cls:
            raise ConfigParseError(f"Writer '{writer_name}' not found.")

        # Configuration problems surface before any graph is read
        steps = self.build_passes(read_pipeline(config_path))
        graphs = [self.load_graph(source) for source in sources]

        graph = self.execute(graphs, steps, force_link=force_link)
        text = writer_cls().render(graph, **options)

        if output is not None:
            Path(output).write_text(text, encoding="utf-8")
            LOGGER.info("Wrote %d nodes, %d edges to %s", len(graph.nodes), len(graph.edges), output)
        return text

    def load_graph(self, source: str, datasource_name: Optional[str] = None) -> Graph:
        if datasource_name:
            datasource_cls = self.registry.get_datasource(datasource_name)
            if not datasource_cls:
                raise GraphSourceError(f"Datasource '{datasource_name}' not found.", source=str(source))
        else:
            datasource_cls = self.registry.get_datasource_for(source)
            if not datasource_cls:
                raise GraphSourceError("Unknown extension, cannot pick a datasource.", source=str(source))
        return datasource_cls().load_graph(source)

    def build_passes(self, descriptors: Sequence[PassDescriptor]) -> List[Step]:
        steps: List[Step] = []
        for descriptor in descriptors:
            try:
                pass_cls = self.registry.get_pass(descriptor.name)
                if pass_cls is None:
                    available = ", ".join(self.registry.list_passes())
                    raise ConfigParseError(
                        f'no "{descriptor.name}" pass; available: {available}'
                    )
                steps.append((descriptor, pass_cls.from_arguments(
                    descriptor.arguments, base_dir=descriptor.base_dir
                )))
            except GraphLinkError as exc:
                raise self._with_descriptor(exc, descriptor)
        return steps

    def run(
        self,
        graphs: Sequence[Graph],
        descriptors: Sequence[PassDescriptor],
        force_link: bool = False,
    ) -> Graph:
        return self.execute(graphs, self.build_passes(descriptors), force_link=force_link)

    def execute(self, graphs: Sequence[Graph], steps: Sequence[Step], force_link: bool = False) -> Graph:
        self.workspace.clear()

        link_steps = [step for step in steps if isinstance(step[1], LinkPass)]
        if link_steps or force_link:
            linker = link_steps[0][1] if link_steps else LinkPass()
            graph = linker.link(graphs)
        elif len(graphs) == 1:
            graph = graphs[0].copy()
        elif not graphs:
            graph = Graph()
        else:
            raise ConfigParseError(
                f"{len(graphs)} input graphs but no 'link' pass; "
                "add 'link' to the pipeline or force linking"
            )
        graph.check_invariants()
        self.workspace.set_graph(graph)

        for descriptor, graph_pass in steps:
            if isinstance(graph_pass, LinkPass):
                # Already applied before the first pass
                continue
            LOGGER.info("Running pass #%d %s", descriptor.index, graph_pass.display_name)
            try:
                graph = graph_pass.run(graph)
                graph.check_invariants()
            except GraphLinkError as exc:
                raise exc.with_context(pass_index=descriptor.index, pass_name=descriptor.name)
            self.workspace.set_graph(graph)

        return graph

    @staticmethod
    def _with_descriptor(exc: GraphLinkError, descriptor: PassDescriptor) -> GraphLinkError:
        exc.with_context(pass_index=descriptor.index, pass_name=descriptor.name)
        if exc.source is None:
            # Errors from auxiliary files already point at their own file
            exc.with_context(
                source=descriptor.source,
                line_number=descriptor.line_number,
                line=descriptor.line,
            )
        return exc

    # ==========================================================
    # WORKSPACE DELEGATION API
    # ==========================================================

    def get_current_graph(self):
        return self.workspace.get_graph()

    def clear_workspace(self):
        self.workspace.clear()

    def undo(self):
        return self.workspace.undo()

    def list_nodes(self):
        return self.workspace.list_nodes()

    def find_node(self, name: str):
        return self.workspace.find_node(name)

    def list_edges(self):
        return self.workspace.list_edges()
