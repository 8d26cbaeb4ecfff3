from typing import Tuple


class Edge:
    def __init__(self, source: str, target: str, attributes: dict = None):
        self.source = source
        self.target = target
        self.attributes = attributes or {}

    @property
    def key(self) -> Tuple[str, str]:
        return (self.source, self.target)

    def reversed(self) -> "Edge":
        return Edge(self.target, self.source, dict(self.attributes))

    def copy(self) -> "Edge":
        return Edge(self.source, self.target, dict(self.attributes))

    def to_dict(self) -> dict:
        return {
            "source": self.source,
            "target": self.target,
            "attributes": self.attributes,
        }

    def __repr__(self) -> str:
        return f"Edge({self.source!r} -> {self.target!r})"
