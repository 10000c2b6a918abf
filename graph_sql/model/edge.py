"""
Edge module for directed connections between vertices.

This module defines the structure of edges and their properties. Edges
reference their endpoints by vertex key only.
"""

from typing import Dict, Any, Optional


class EdgeProperties:
    """
    Metadata attached to an edge.

    ``data`` is an opaque byte payload. Stores keep it untouched; encoding
    and decoding it is up to the caller.
    """

    def __init__(
        self,
        weight: int = 0,
        attributes: Optional[Dict[str, str]] = None,
        data: Optional[bytes] = None,
    ):
        """
        Initialize EdgeProperties.

        Args:
            weight: Integer weight of the edge
            attributes: String-to-string attribute mapping (defaults to empty)
            data: Opaque payload bytes, or None
        """
        self.weight = weight
        self.attributes = dict(attributes) if attributes else {}
        self.data = data

    def to_dict(self) -> Dict[str, Any]:
        return {
            "weight": self.weight,
            "attributes": dict(self.attributes),
            "data": self.data,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EdgeProperties":
        return cls(
            weight=data.get("weight", 0),
            attributes=data.get("attributes"),
            data=data.get("data"),
        )

    def __eq__(self, other):
        if not isinstance(other, EdgeProperties):
            return False

        return (
            self.weight == other.weight
            and self.attributes == other.attributes
            and self.data == other.data
        )

    def __repr__(self):
        return (
            f"EdgeProperties(weight={self.weight}, "
            f"attributes={self.attributes!r}, "
            f"data={self.data!r})"
        )


class Edge:
    """
    Represents a directed edge from ``source`` to ``target``.

    Self-loops and both directions of a pair are distinct edges.
    """

    def __init__(self, source: Any, target: Any, properties: Optional[EdgeProperties] = None):
        """
        Initialize an Edge.

        Args:
            source: Key of the source vertex
            target: Key of the target vertex
            properties: Edge metadata (defaults to empty properties)
        """
        self.source = source
        self.target = target
        self.properties = properties if properties is not None else EdgeProperties()

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the Edge to a dictionary representation.

        Returns:
            Dictionary with source, target and the flattened properties
        """
        return {"source": self.source, "target": self.target, **self.properties.to_dict()}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Edge":
        """
        Create an Edge from a dictionary representation.

        Args:
            data: Dictionary as produced by ``to_dict``

        Returns:
            A new Edge instance
        """
        return cls(
            source=data["source"],
            target=data["target"],
            properties=EdgeProperties.from_dict(data),
        )

    def __eq__(self, other):
        if not isinstance(other, Edge):
            return False

        return (
            self.source == other.source
            and self.target == other.target
            and self.properties == other.properties
        )

    def __repr__(self):
        return f"Edge(source={self.source!r}, target={self.target!r}, properties={self.properties!r})"
