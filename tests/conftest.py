"""
Configuration file for pytest.

This file configures pytest to properly load environment variables
and provides shared fixtures for tests.
"""

import logging
import sqlite3

import dotenv
import pytest

from graph_sql.config.config_manager import ConfigManager
from graph_sql.storage.backends.sql import SqlStore
from graph_sql.storage.codecs import KeyCodec

# Load environment variables from .env file
dotenv.load_dotenv()


@pytest.fixture
def connection():
    """Provide an in-memory SQLite connection."""
    conn = sqlite3.connect(":memory:")
    yield conn
    conn.close()


@pytest.fixture
def store(connection):
    """Provide a SQL store over integer keys with its tables created."""
    sql_store = SqlStore(connection, key_codec=KeyCodec(int))
    sql_store.setup_tables()
    return sql_store


@pytest.fixture
def isolated_config(tmp_path, monkeypatch):
    """Reset the configuration singleton and point it at an empty directory."""
    import graph_sql.config.config_manager as config_module

    for var in (
        "ENVIRONMENT",
        "GRAPH_SQL_DATABASE_PATH",
        "GRAPH_SQL_VERTICES_TABLE",
        "GRAPH_SQL_EDGES_TABLE",
        "GRAPH_SQL_BACKEND",
        "GRAPH_SQL_PLACEHOLDER",
        "GRAPH_SQL_COMMIT_WRITES",
        "GRAPH_SQL_VERTEX_HASH_TYPE",
        "GRAPH_SQL_VERTEX_VALUE_TYPE",
        "GRAPH_SQL_ID_COLUMN_TYPE",
        "LOG_JSON",
        "DEBUG",
        "LOG_LEVEL",
    ):
        monkeypatch.delenv(var, raising=False)

    ConfigManager._instance = None
    config_module._config_manager = None
    manager = config_module.init_config(tmp_path)
    yield manager
    ConfigManager._instance = None
    config_module._config_manager = None


@pytest.fixture
def restore_root_logger():
    """Restore root logger handlers and level changed by configure_logging."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
