"""
Vertex properties module.

Vertices are stored under a caller-chosen key together with an arbitrary
value; the properties defined here are the metadata kept alongside them.
"""

from typing import Dict, Any, Optional


class VertexProperties:
    """
    Metadata attached to a vertex.

    Attributes are a flat mapping of string keys to string values; the
    weight is an integer used by weighted graph algorithms.
    """

    def __init__(self, weight: int = 0, attributes: Optional[Dict[str, str]] = None):
        """
        Initialize VertexProperties.

        Args:
            weight: Integer weight of the vertex
            attributes: String-to-string attribute mapping (defaults to empty)
        """
        self.weight = weight
        self.attributes = dict(attributes) if attributes else {}

    def to_dict(self) -> Dict[str, Any]:
        return {"weight": self.weight, "attributes": dict(self.attributes)}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "VertexProperties":
        return cls(weight=data.get("weight", 0), attributes=data.get("attributes"))

    def __eq__(self, other):
        if not isinstance(other, VertexProperties):
            return False

        return self.weight == other.weight and self.attributes == other.attributes

    def __repr__(self):
        return f"VertexProperties(weight={self.weight}, attributes={self.attributes!r})"
