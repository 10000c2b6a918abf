"""
Exception hierarchy for graph stores.

Every error raised by a store derives from GraphStoreError so callers can
catch store failures in one place, while the not-found errors stay
distinguishable from genuine storage faults.
"""

from typing import Any, Optional


class GraphStoreError(Exception):
    """Base class for all graph store errors."""

    pass


class SerializationError(GraphStoreError):
    """Raised when a value, key, attribute map or payload cannot be encoded."""

    pass


class DecodeError(GraphStoreError):
    """Raised when a stored payload cannot be parsed back into its original shape."""

    pass


class NotFoundError(GraphStoreError):
    """Raised when a point lookup matches no row."""

    pass


class VertexNotFoundError(NotFoundError):
    """Raised when no vertex exists for a key."""

    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"vertex not found: {key!r}")


class EdgeNotFoundError(NotFoundError):
    """Raised when no edge exists for a (source, target) pair."""

    def __init__(self, source: Any, target: Any):
        self.source = source
        self.target = target
        super().__init__(f"edge not found: {source!r} -> {target!r}")


class AlreadyExistsError(GraphStoreError):
    """Raised by stores that enforce key uniqueness."""

    pass


class VertexAlreadyExistsError(AlreadyExistsError):
    def __init__(self, key: Any):
        self.key = key
        super().__init__(f"vertex already exists: {key!r}")


class EdgeAlreadyExistsError(AlreadyExistsError):
    def __init__(self, source: Any, target: Any):
        self.source = source
        self.target = target
        super().__init__(f"edge already exists: {source!r} -> {target!r}")


class StorageError(GraphStoreError):
    """
    Raised when the underlying database fails.

    The original driver exception is chained as ``__cause__``.
    """

    def __init__(self, message: str, operation: Optional[str] = None, table: Optional[str] = None):
        self.operation = operation
        self.table = table
        super().__init__(message)


class SchemaSetupError(StorageError):
    """Raised when creating one of the store tables fails."""

    def __init__(self, table: str):
        super().__init__(f"failed to set up {table} table", operation="setup_tables", table=table)


class SchemaTeardownError(StorageError):
    """Raised when dropping one of the store tables fails."""

    def __init__(self, table: str):
        super().__init__(
            f"failed to tear down {table} table", operation="destroy_tables", table=table
        )
