"""
In-memory storage backend implementation.

This module provides a dictionary-based implementation of the graph
store interface for tests and short-lived graphs.
"""

from .memory_store import MemoryStore

__all__ = ["MemoryStore"]
