class Node:
    def __init__(self, name: str, attributes: dict = None):
        self.name = name
        self.attributes = attributes or {}

    @property
    def node_id(self) -> str:
        # The name doubles as the display id
        return self.name

    def copy(self) -> "Node":
        return Node(self.name, dict(self.attributes))

    def to_dict(self) -> dict:
        return {
            "id": self.name,
            "attributes": self.attributes,
        }

    def __repr__(self) -> str:
        return f"Node({self.name!r})"
