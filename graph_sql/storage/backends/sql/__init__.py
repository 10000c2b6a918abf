"""
SQL storage backend implementation.

This module provides a relational implementation of the graph store
interface on top of any DB-API 2.0 connection.
"""

from .sql_store import SqlStore

__all__ = ["SqlStore"]
