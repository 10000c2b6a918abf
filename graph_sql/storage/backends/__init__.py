"""
Storage backend implementations for graph stores.

This module contains concrete implementations of the GraphStore interface.
"""

from .memory import MemoryStore
from .sql import SqlStore

__all__ = ["MemoryStore", "SqlStore"]
