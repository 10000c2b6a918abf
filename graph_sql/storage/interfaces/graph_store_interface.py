"""
Abstract interface for graph stores.

This module defines the contract a graph abstraction delegates its vertex
and edge bookkeeping to. Any implementation can back a graph in place of
another, whether it keeps data in memory or in a database.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, List, Optional, Tuple, TypeVar

from graph_sql.model.vertex import VertexProperties
from graph_sql.model.edge import Edge

K = TypeVar("K")
T = TypeVar("T")


class GraphStore(ABC, Generic[K, T]):
    """
    Abstract base class for graph stores.

    Stores are generic over the vertex key type ``K`` and the vertex value
    type ``T``. Point lookups raise VertexNotFoundError or EdgeNotFoundError
    when nothing matches; removals of absent entries succeed silently.
    """

    # Vertex Operations
    @abstractmethod
    def add_vertex(self, key: K, value: T, properties: Optional[VertexProperties] = None) -> None:
        """
        Store a vertex.

        Args:
            key: Unique key of the vertex
            value: Vertex value
            properties: Weight and attributes of the vertex
        """
        pass

    @abstractmethod
    def vertex(self, key: K) -> Tuple[T, VertexProperties]:
        """
        Retrieve a vertex by its key.

        Args:
            key: Key of the vertex

        Returns:
            Tuple of the vertex value and its properties

        Raises:
            VertexNotFoundError: If no vertex has this key
        """
        pass

    @abstractmethod
    def remove_vertex(self, key: K) -> None:
        """Remove a vertex. Edges referencing it are left in place."""
        pass

    @abstractmethod
    def list_vertices(self) -> List[K]:
        """Return the keys of all vertices."""
        pass

    @abstractmethod
    def vertex_count(self) -> int:
        """Return the number of vertices."""
        pass

    # Edge Operations
    @abstractmethod
    def add_edge(self, source: K, target: K, edge: Edge) -> None:
        """
        Store an edge from ``source`` to ``target``.

        Args:
            source: Key of the source vertex
            target: Key of the target vertex
            edge: Edge whose properties are stored
        """
        pass

    @abstractmethod
    def update_edge(self, source: K, target: K, edge: Edge) -> None:
        """
        Replace weight, attributes and data of an existing edge.

        Args:
            source: Key of the source vertex
            target: Key of the target vertex
            edge: Edge holding the new properties
        """
        pass

    @abstractmethod
    def remove_edge(self, source: K, target: K) -> None:
        """Remove the edge from ``source`` to ``target``."""
        pass

    @abstractmethod
    def edge(self, source: K, target: K) -> Edge:
        """
        Retrieve the edge from ``source`` to ``target``.

        Raises:
            EdgeNotFoundError: If there is no such edge
        """
        pass

    @abstractmethod
    def list_edges(self) -> List[Edge]:
        """Return all edges."""
        pass

    @abstractmethod
    def edge_count(self) -> int:
        """Return the number of edges."""
        pass
