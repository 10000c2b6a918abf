"""
Storage layer for graph stores.

This module provides the abstract store interface, the SQL and in-memory
implementations, and the codecs used to serialize values for storage.
"""

from .interfaces.graph_store_interface import GraphStore
from .backends import MemoryStore, SqlStore
from .codecs import JsonCodec, KeyCodec, ValueCodec
from .factory import create_store, list_available_backends, is_backend_available

__all__ = [
    "GraphStore",
    "MemoryStore",
    "SqlStore",
    "JsonCodec",
    "KeyCodec",
    "ValueCodec",
    "create_store",
    "list_available_backends",
    "is_backend_available",
]
