"""
Store factory for creating graph store instances.

This module provides a factory function to instantiate the appropriate
graph store backend based on configuration settings.
"""

import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional

from graph_sql.config import get_config
from graph_sql.config.config_manager import SchemaConfig
from graph_sql.storage.codecs import KeyCodec, ValueCodec
from graph_sql.storage.interfaces.graph_store_interface import GraphStore
from graph_sql.storage.backends.memory import MemoryStore
from graph_sql.storage.backends.sql import SqlStore


class StoreFactory:
    """
    Factory class for creating graph store instances.

    This factory creates and configures stores based on the application
    configuration. The SQL backend uses the connection it is given, or opens
    an SQLite database at the configured path when none is supplied.
    """

    def __init__(self):
        self.logger = logging.getLogger(__name__)
        self._backends = {"sql": SqlStore, "memory": MemoryStore}

    def create_store(
        self,
        backend_type: Optional[str] = None,
        connection: Any = None,
        config_override: Optional[Dict[str, Any]] = None,
        value_codec: Optional[ValueCodec] = None,
        key_codec: Optional[KeyCodec] = None,
    ) -> GraphStore:
        """
        Create a graph store instance.

        Args:
            backend_type: Type of backend to create ('sql', 'memory').
                         If None, uses configuration setting.
            connection: Open DB-API connection for the SQL backend
            config_override: Optional overrides for schema and store settings
            value_codec: Codec for vertex values of the SQL backend
            key_codec: Key codec of the SQL backend

        Returns:
            Configured store instance

        Raises:
            ValueError: If the backend type is not supported
        """
        config = get_config()

        if backend_type is None:
            backend_type = config.config.store.backend

        if backend_type not in self._backends:
            available_backends = list(self._backends.keys())
            raise ValueError(
                f"Unsupported backend type '{backend_type}'. "
                f"Available backends: {available_backends}"
            )

        if backend_type == "memory":
            return MemoryStore()

        backend_config = self._get_backend_config(config, config_override)
        return self._create_sql_store(backend_config, connection, value_codec, key_codec)

    def _get_backend_config(
        self, config: Any, config_override: Optional[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Merge configured schema, store and database settings with overrides."""
        backend_config = dict(vars(config.config.schema))
        backend_config["placeholder"] = config.config.store.placeholder
        backend_config["commit_writes"] = config.config.store.commit_writes
        backend_config["database_path"] = config.config.database.path

        if config_override:
            backend_config.update(config_override)

        return backend_config

    def _create_sql_store(
        self,
        config: Dict[str, Any],
        connection: Any,
        value_codec: Optional[ValueCodec],
        key_codec: Optional[KeyCodec],
    ) -> SqlStore:
        """Create SQL store instance with proper configuration."""
        if connection is None:
            database_path = config["database_path"]
            if database_path != ":memory:":
                Path(database_path).parent.mkdir(parents=True, exist_ok=True)
            connection = sqlite3.connect(database_path)
            self.logger.info(f"Opened SQLite database at {database_path}")

        schema = SchemaConfig(
            vertices_table=config["vertices_table"],
            edges_table=config["edges_table"],
            vertex_hash_type=config["vertex_hash_type"],
            vertex_value_type=config["vertex_value_type"],
            id_column_type=config["id_column_type"],
        )

        return SqlStore(
            connection,
            schema,
            value_codec=value_codec,
            key_codec=key_codec,
            placeholder=config["placeholder"],
            commit_writes=config["commit_writes"],
        )

    def list_available_backends(self) -> List[str]:
        """
        List all available store backends.

        Returns:
            List of backend type names
        """
        return list(self._backends.keys())

    def is_backend_available(self, backend_type: str) -> bool:
        return backend_type in self._backends


# Global factory instance
_store_factory = StoreFactory()


def create_store(
    backend_type: Optional[str] = None,
    connection: Any = None,
    config_override: Optional[Dict[str, Any]] = None,
    value_codec: Optional[ValueCodec] = None,
    key_codec: Optional[KeyCodec] = None,
) -> GraphStore:
    """
    Create a graph store instance using the global factory.

    Args:
        backend_type: Type of backend to create ('sql', 'memory').
                     If None, uses configuration setting.
        connection: Open DB-API connection for the SQL backend
        config_override: Optional overrides for schema and store settings
        value_codec: Codec for vertex values of the SQL backend
        key_codec: Key codec of the SQL backend

    Returns:
        Configured store instance
    """
    return _store_factory.create_store(
        backend_type, connection, config_override, value_codec, key_codec
    )


def list_available_backends() -> List[str]:
    return _store_factory.list_available_backends()


def is_backend_available(backend_type: str) -> bool:
    return _store_factory.is_backend_available(backend_type)
