"""
graph-sql: relational storage for directed graphs.

Vertices and edges of a graph are kept in two SQL tables and accessed
through the GraphStore interface.
"""

__version__ = "0.1.0"

from .exceptions import (
    GraphStoreError,
    SerializationError,
    DecodeError,
    NotFoundError,
    VertexNotFoundError,
    EdgeNotFoundError,
    StorageError,
    SchemaSetupError,
    SchemaTeardownError,
)
from .model import VertexProperties, Edge, EdgeProperties
from .config import SchemaConfig, DEFAULT_SCHEMA_CONFIG
from .storage import GraphStore, SqlStore, MemoryStore, JsonCodec, KeyCodec, create_store

__all__ = [
    "GraphStoreError",
    "SerializationError",
    "DecodeError",
    "NotFoundError",
    "VertexNotFoundError",
    "EdgeNotFoundError",
    "StorageError",
    "SchemaSetupError",
    "SchemaTeardownError",
    "VertexProperties",
    "Edge",
    "EdgeProperties",
    "SchemaConfig",
    "DEFAULT_SCHEMA_CONFIG",
    "GraphStore",
    "SqlStore",
    "MemoryStore",
    "JsonCodec",
    "KeyCodec",
    "create_store",
]
