from .vertex import VertexProperties
from .edge import Edge, EdgeProperties

__all__ = ["VertexProperties", "Edge", "EdgeProperties"]
