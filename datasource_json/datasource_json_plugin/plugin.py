import json
from typing import Any

from api.linker_api.datasource_common.base import BaseDatasourcePlugin
from api.linker_api.errors import GraphSourceError


class JsonDatasourcePlugin(BaseDatasourcePlugin):
    # Adapter to read a JSON file and map it to a Graph object
    # It extends BaseDatasourcePlugin in which we define TemplateMethod
    # Expected document: {"name": ..., "nodes": [...], "edges": [...]}
    # A node is a plain name or an object with 'id' (or 'name'); other keys are attributes
    # An edge is an object with 'source'/'target' or a two-element list

    NODE_KEYS = {"id", "attributes"}
    EDGE_KEYS = {"source", "target", "attributes"}

    @property
    def plugin_id(self) -> str:
        # Platform finds this plugin with this id
        return "json"

    @property
    def display_name(self) -> str:
        return "JSON file"

    @property
    def file_extensions(self):
        return (".json",)

    def parameters_schema(self) -> dict:
        # What parameters are needed for us to load a Graph object
        return {
            "file_path": {
                "type": "str",
                "label": "Path to JSON file",
                "required": True
            },
            "name": {
                "type": "str",
                "label": "Override the graph name",
                "required": False
            }
        }

    def _parse_source(self, source, **kwargs) -> dict:
        # This is the only step that the JSON plugin will be doing differently from the DOT plugin
        path = self._resolve_path(source, kwargs)
        try:
            raw_json = json.loads(self._read_source(path))
        except json.JSONDecodeError as exc:
            raise GraphSourceError(f"invalid JSON: {exc.msg}", source=path, line_number=exc.lineno) from exc

        if not isinstance(raw_json, dict) or not isinstance(raw_json.get("nodes", []), list) \
                or not isinstance(raw_json.get("edges", []), list):
            raise GraphSourceError("expected an object with 'nodes' and 'edges' lists", source=path)

        return {
            "name": raw_json.get("name", ""),
            "strict": bool(raw_json.get("strict", False)),
            "nodes": [self._convert_node(n, path) for n in raw_json.get("nodes", [])],
            "edges": [self._convert_edge(e, path) for e in raw_json.get("edges", [])],
        }

    def _convert_node(self, obj: Any, path: str) -> dict:
        if isinstance(obj, str):
            return {"id": obj, "attributes": {}}
        if not isinstance(obj, dict):
            raise GraphSourceError(f"invalid node entry {obj!r}", source=path)

        # "name" is the fallback identifier and otherwise a plain attribute
        key = "id" if "id" in obj else "name"
        name = obj.get(key)
        if name is None:
            raise GraphSourceError(f"node entry without 'id': {obj!r}", source=path)

        # Everything else is the node attribute
        reserved = self.NODE_KEYS | {key}
        attributes = dict(obj.get("attributes") or {})
        attributes.update({k: v for k, v in obj.items() if k not in reserved})
        return {"id": str(name), "attributes": attributes}

    def _convert_edge(self, obj: Any, path: str) -> dict:
        if isinstance(obj, list) and len(obj) == 2:
            return {"source": str(obj[0]), "target": str(obj[1]), "attributes": {}}
        if not isinstance(obj, dict) or obj.get("source") is None or obj.get("target") is None:
            raise GraphSourceError(f"invalid edge entry {obj!r}", source=path)

        attributes = dict(obj.get("attributes") or {})
        attributes.update({k: v for k, v in obj.items() if k not in self.EDGE_KEYS})
        return {
            "source": str(obj["source"]),
            "target": str(obj["target"]),
            "attributes": attributes,
        }
