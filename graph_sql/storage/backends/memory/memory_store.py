"""
In-memory storage implementation for graph stores.

MemoryStore keeps vertices and edges in dictionaries. It satisfies the same
GraphStore contract as SqlStore and is useful for tests and for graphs that
do not need to outlive the process.
"""

import copy
import logging
import threading
from typing import Any, Dict, List, Optional, Tuple

from graph_sql.exceptions import (
    EdgeAlreadyExistsError,
    EdgeNotFoundError,
    VertexAlreadyExistsError,
    VertexNotFoundError,
)
from graph_sql.model.edge import Edge, EdgeProperties
from graph_sql.model.vertex import VertexProperties
from graph_sql.storage.interfaces.graph_store_interface import GraphStore, K, T


class MemoryStore(GraphStore[K, T]):
    """
    Dictionary-backed implementation of the GraphStore interface.

    Unlike SqlStore, keys are unique here: adding a vertex or edge twice
    raises an AlreadyExistsError. Removal of absent entries is a no-op and
    removing a vertex leaves its edges in place, as in SqlStore. Vertex values
    and properties are copied on the way in and out.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._lock = threading.RLock()
        self._vertices: Dict[Any, T] = {}
        self._vertex_properties: Dict[Any, VertexProperties] = {}
        self._edges: Dict[Tuple[Any, Any], Edge] = {}

    # Vertex Operations
    def add_vertex(self, key: K, value: T, properties: Optional[VertexProperties] = None) -> None:
        with self._lock:
            if key in self._vertices:
                raise VertexAlreadyExistsError(key)

            self._vertices[key] = copy.deepcopy(value)
            self._vertex_properties[key] = copy.deepcopy(properties or VertexProperties())

        self.logger.debug(f"Added vertex {key!r}")

    def vertex(self, key: K) -> Tuple[T, VertexProperties]:
        with self._lock:
            if key not in self._vertices:
                raise VertexNotFoundError(key)

            return copy.deepcopy(self._vertices[key]), copy.deepcopy(self._vertex_properties[key])

    def remove_vertex(self, key: K) -> None:
        with self._lock:
            self._vertices.pop(key, None)
            self._vertex_properties.pop(key, None)

    def list_vertices(self) -> List[K]:
        with self._lock:
            return list(self._vertices)

    def vertex_count(self) -> int:
        with self._lock:
            return len(self._vertices)

    # Edge Operations
    def add_edge(self, source: K, target: K, edge: Edge) -> None:
        with self._lock:
            if (source, target) in self._edges:
                raise EdgeAlreadyExistsError(source, target)

            self._edges[(source, target)] = self._copy_edge(source, target, edge)

        self.logger.debug(f"Added edge {source!r} -> {target!r}")

    def update_edge(self, source: K, target: K, edge: Edge) -> None:
        with self._lock:
            if (source, target) in self._edges:
                self._edges[(source, target)] = self._copy_edge(source, target, edge)

    def remove_edge(self, source: K, target: K) -> None:
        with self._lock:
            self._edges.pop((source, target), None)

    def edge(self, source: K, target: K) -> Edge:
        with self._lock:
            if (source, target) not in self._edges:
                raise EdgeNotFoundError(source, target)

            stored = self._edges[(source, target)]
            return self._copy_edge(source, target, stored)

    def list_edges(self) -> List[Edge]:
        with self._lock:
            return [self._copy_edge(s, t, edge) for (s, t), edge in self._edges.items()]

    def edge_count(self) -> int:
        with self._lock:
            return len(self._edges)

    @staticmethod
    def _copy_edge(source: Any, target: Any, edge: Edge) -> Edge:
        properties = edge.properties
        return Edge(
            source,
            target,
            EdgeProperties(
                weight=properties.weight,
                attributes=dict(properties.attributes),
                data=properties.data,
            ),
        )
