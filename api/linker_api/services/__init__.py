"""Service-level plugin contracts for linker_api."""

from .datasource_plugin import DataSourcePlugin
from .writer_plugin import WriterPlugin
from .pass_plugin import GraphPass

__all__ = ["DataSourcePlugin", "WriterPlugin", "GraphPass"]
