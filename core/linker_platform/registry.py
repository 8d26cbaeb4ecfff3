import logging
import os
from importlib.metadata import entry_points
from api.linker_api.services import DataSourcePlugin
from api.linker_api.services import WriterPlugin
from api.linker_api.services import GraphPass
from typing import Dict, Type

LOGGER = logging.getLogger(__name__)


class PluginRegistry:

    _instance = None
    _datasources: Dict[str, Type[DataSourcePlugin]]
    _writers: Dict[str, Type[WriterPlugin]]
    _passes: Dict[str, Type[GraphPass]]

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._datasources = {}
            cls._instance._writers = {}
            cls._instance._passes = {}
            cls._instance._register_builtins()
            cls._instance._load_plugins()
        return cls._instance

    def _register_builtins(self):
        from datasource_dot.datasource_dot_plugin.plugin import DotDatasourcePlugin
        from datasource_json.datasource_json_plugin.plugin import JsonDatasourcePlugin
        from writer_dot.writer_dot_plugin.plugin import DotWriter
        from passes.linker_passes_plugin import BUILTIN_PASSES

        self._datasources["dot"] = DotDatasourcePlugin
        self._datasources["json"] = JsonDatasourcePlugin
        self._writers["dot"] = DotWriter
        self._passes.update(BUILTIN_PASSES)

    def _load_plugins(self):
        eps = entry_points()

        for ep in eps.select(group="linker_platform.datasource"):
            self._datasources[ep.name] = ep.load()

        for ep in eps.select(group="linker_platform.writer"):
            self._writers[ep.name] = ep.load()

        for ep in eps.select(group="linker_platform.pass"):
            self._passes[ep.name] = ep.load()

        LOGGER.debug(
            "Plugins: datasources=%s writers=%s passes=%s",
            self.list_datasources(), self.list_writers(), self.list_passes(),
        )

    def register_pass(self, name: str, pass_cls: Type[GraphPass]) -> None:
        if not name or not name.strip():
            raise ValueError("pass name must be non-empty")
        self._passes[name.strip()] = pass_cls

    def get_datasource(self, name: str) -> Type[DataSourcePlugin] | None:
        return self._datasources.get(name)

    def get_datasource_for(self, path: str) -> Type[DataSourcePlugin] | None:
        ext = os.path.splitext(str(path))[1].lower()
        for datasource_cls in self._datasources.values():
            if ext in datasource_cls().file_extensions:
                return datasource_cls
        return None

    def get_writer(self, name: str) -> Type[WriterPlugin] | None:
        return self._writers.get(name)

    def get_pass(self, name: str) -> Type[GraphPass] | None:
        return self._passes.get(name)

    def list_datasources(self) -> list[str]:
        return list(self._datasources.keys())

    def list_writers(self) -> list[str]:
        return list(self._writers.keys())

    def list_passes(self) -> list[str]:
        return list(self._passes.keys())
