"""
SQL storage implementation for graph stores.

This module provides SqlStore, a GraphStore that keeps vertices and edges in
two relational tables. It works on any DB-API 2.0 connection handed in by the
application and issues exactly one statement per operation.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

from graph_sql.config.config_manager import SchemaConfig, DEFAULT_SCHEMA_CONFIG
from graph_sql.exceptions import (
    EdgeNotFoundError,
    SchemaSetupError,
    SchemaTeardownError,
    SerializationError,
    StorageError,
    VertexNotFoundError,
)
from graph_sql.model.edge import Edge, EdgeProperties
from graph_sql.model.vertex import VertexProperties
from graph_sql.storage.codecs import (
    JsonCodec,
    KeyCodec,
    ValueCodec,
    decode_attributes,
    encode_attributes,
)
from graph_sql.storage.interfaces.graph_store_interface import GraphStore, K, T

from .schema import (
    create_edges_table_sql,
    create_vertices_table_sql,
    drop_edges_table_sql,
    drop_vertices_table_sql,
)

INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


class SqlStore(GraphStore[K, T]):
    """
    SQL-backed implementation of the GraphStore interface.

    The store holds no state besides the connection and its configuration:
    no caches, no locks and no retries. Database errors surface immediately
    as StorageError. Removing a vertex does not remove its edges.

    JSON payloads are bound as bytes so that columns with numeric affinity
    keep the text as written. Keys are bound as given and read back as the
    column returns them: a TEXT key column yields ``'1'`` for ``1``, so pass
    ``KeyCodec(int)`` to get integer keys from the list operations.
    """

    def __init__(
        self,
        connection: Any,
        config: SchemaConfig = DEFAULT_SCHEMA_CONFIG,
        value_codec: Optional[ValueCodec] = None,
        key_codec: Optional[KeyCodec] = None,
        placeholder: str = "?",
        commit_writes: bool = True,
    ):
        """
        Initialize SqlStore.

        Args:
            connection: Open DB-API 2.0 connection to the target database
            config: Table names and column types
            value_codec: Codec for vertex values (defaults to JsonCodec)
            key_codec: Converts keys to parameters and back (defaults to raw values)
            placeholder: Bind marker of the driver, ``?`` or ``%s``
            commit_writes: Commit after every write statement
        """
        self.connection = connection
        self.config = config
        self.value_codec = value_codec or JsonCodec()
        self.key_codec = key_codec or KeyCodec()
        self.placeholder = placeholder
        self.commit_writes = commit_writes
        self.logger = logging.getLogger(__name__)

    # Schema Management
    def setup_tables(self) -> None:
        """
        Create the vertices table, then the edges table.

        A failure on the edges table leaves the vertices table in place.

        Raises:
            SchemaSetupError: Naming the table that could not be created
        """
        for table, statement in (
            (self.config.vertices_table, create_vertices_table_sql(self.config)),
            (self.config.edges_table, create_edges_table_sql(self.config)),
        ):
            try:
                self._run(statement)
            except Exception as e:
                self.logger.error(f"Failed to set up {table} table: {e}")
                raise SchemaSetupError(table) from e

        self.logger.info(
            f"Created tables {self.config.vertices_table} and {self.config.edges_table}"
        )

    def destroy_tables(self) -> None:
        """
        Drop the edges table, then the vertices table, removing all data.

        Raises:
            SchemaTeardownError: Naming the table that could not be dropped
        """
        for table, statement in (
            (self.config.edges_table, drop_edges_table_sql(self.config)),
            (self.config.vertices_table, drop_vertices_table_sql(self.config)),
        ):
            try:
                self._run(statement)
            except Exception as e:
                self.logger.error(f"Failed to tear down {table} table: {e}")
                raise SchemaTeardownError(table) from e

        self.logger.info(
            f"Dropped tables {self.config.edges_table} and {self.config.vertices_table}"
        )

    # Vertex Operations
    def add_vertex(self, key: K, value: T, properties: Optional[VertexProperties] = None) -> None:
        """Insert a vertex row. Key uniqueness is not checked."""
        properties = properties or VertexProperties()

        value_payload = self._payload(self.value_codec.encode(value))
        attributes_payload = self._payload(encode_attributes(properties.attributes))

        self._write(
            "add vertex",
            self.config.vertices_table,
            f"INSERT INTO {self.config.vertices_table} (hash, value, weight, attributes) "
            f"VALUES ({self._marks(4)})",
            (self.key_codec.encode(key), value_payload, self._weight(properties.weight), attributes_payload),
        )

    def remove_vertex(self, key: K) -> None:
        """Delete the rows for ``key``. Edges are not touched."""
        self._write(
            "remove vertex",
            self.config.vertices_table,
            f"DELETE FROM {self.config.vertices_table} WHERE hash = {self.placeholder}",
            (self.key_codec.encode(key),),
        )

    def vertex(self, key: K) -> Tuple[T, VertexProperties]:
        """Select and decode the value and properties stored for ``key``."""
        row = self._fetch_one(
            "query vertex",
            self.config.vertices_table,
            f"SELECT value, weight, attributes FROM {self.config.vertices_table} "
            f"WHERE hash = {self.placeholder}",
            (self.key_codec.encode(key),),
        )

        if row is None:
            raise VertexNotFoundError(key)

        value_raw, weight, attributes_raw = row
        value = self.value_codec.decode(value_raw)
        properties = VertexProperties(
            weight=self._stored_weight(weight),
            attributes=decode_attributes(attributes_raw),
        )
        return value, properties

    def list_vertices(self) -> List[K]:
        rows = self._fetch_all(
            "query vertices",
            self.config.vertices_table,
            f"SELECT hash FROM {self.config.vertices_table}",
        )
        return [self.key_codec.decode(row[0]) for row in rows]

    def vertex_count(self) -> int:
        row = self._fetch_one(
            "count vertices",
            self.config.vertices_table,
            f"SELECT count(hash) FROM {self.config.vertices_table}",
        )
        return int(row[0])

    # Edge Operations
    def add_edge(self, source: K, target: K, edge: Edge) -> None:
        """Insert an edge row; the data payload is stored as given."""
        properties = edge.properties
        attributes_payload = self._payload(encode_attributes(properties.attributes))

        self._write(
            "add edge",
            self.config.edges_table,
            f"INSERT INTO {self.config.edges_table} "
            f"(source_hash, target_hash, weight, attributes, data) VALUES ({self._marks(5)})",
            (
                self.key_codec.encode(source),
                self.key_codec.encode(target),
                self._weight(properties.weight),
                attributes_payload,
                self._data(properties.data),
            ),
        )

    def remove_edge(self, source: K, target: K) -> None:
        self._write(
            "remove edge",
            self.config.edges_table,
            f"DELETE FROM {self.config.edges_table} "
            f"WHERE source_hash = {self.placeholder} AND target_hash = {self.placeholder}",
            (self.key_codec.encode(source), self.key_codec.encode(target)),
        )

    def edge(self, source: K, target: K) -> Edge:
        """
        Select the edge from ``source`` to ``target``.

        Raises:
            EdgeNotFoundError: If no row matches the pair
            DecodeError: If the stored attributes cannot be parsed
        """
        row = self._fetch_one(
            "query edge",
            self.config.edges_table,
            f"SELECT weight, attributes, data FROM {self.config.edges_table} "
            f"WHERE source_hash = {self.placeholder} AND target_hash = {self.placeholder}",
            (self.key_codec.encode(source), self.key_codec.encode(target)),
        )

        if row is None:
            raise EdgeNotFoundError(source, target)

        weight, attributes_raw, data = row
        return Edge(
            source,
            target,
            EdgeProperties(
                weight=self._stored_weight(weight),
                attributes=decode_attributes(attributes_raw),
                data=self._stored_data(data),
            ),
        )

    def list_edges(self) -> List[Edge]:
        """Return every edge. A row that fails to decode aborts the whole listing."""
        rows = self._fetch_all(
            "query edges",
            self.config.edges_table,
            f"SELECT source_hash, target_hash, weight, attributes, data FROM {self.config.edges_table}",
        )

        edges = []
        for source, target, weight, attributes_raw, data in rows:
            edges.append(
                Edge(
                    self.key_codec.decode(source),
                    self.key_codec.decode(target),
                    EdgeProperties(
                        weight=self._stored_weight(weight),
                        attributes=decode_attributes(attributes_raw),
                        data=self._stored_data(data),
                    ),
                )
            )
        return edges

    def edge_count(self) -> int:
        # count(id) undercounts on SQLite when id is not a rowid alias
        row = self._fetch_one(
            "count edges",
            self.config.edges_table,
            f"SELECT count(source_hash) FROM {self.config.edges_table}",
        )
        return int(row[0])

    def update_edge(self, source: K, target: K, edge: Edge) -> None:
        """
        Overwrite weight, attributes and data of the edge from ``source`` to ``target``.

        Nothing happens if the edge does not exist.
        """
        properties = edge.properties
        attributes_payload = self._payload(encode_attributes(properties.attributes))

        self._write(
            "update edge",
            self.config.edges_table,
            f"UPDATE {self.config.edges_table} "
            f"SET weight = {self.placeholder}, attributes = {self.placeholder}, data = {self.placeholder} "
            f"WHERE source_hash = {self.placeholder} AND target_hash = {self.placeholder}",
            (
                self._weight(properties.weight),
                attributes_payload,
                self._data(properties.data),
                self.key_codec.encode(source),
                self.key_codec.encode(target),
            ),
        )

    # Private helper methods
    def _marks(self, count: int) -> str:
        return ", ".join([self.placeholder] * count)

    def _run(self, statement: str, params: Sequence[Any] = ()) -> None:
        cursor = self.connection.cursor()
        try:
            cursor.execute(statement, params)
        finally:
            cursor.close()
        if self.commit_writes:
            self.connection.commit()

    def _write(self, operation: str, table: str, statement: str, params: Sequence[Any]) -> None:
        try:
            self._run(statement, params)
        except Exception as e:
            self.logger.error(f"Failed to {operation} in {table}: {e}")
            raise StorageError(f"failed to {operation}: {e}", operation=operation, table=table) from e

        self.logger.debug(f"Executed {operation} on {table}")

    def _fetch(self, operation: str, table: str, statement: str, params: Sequence[Any], many: bool):
        try:
            cursor = self.connection.cursor()
            try:
                cursor.execute(statement, params)
                return cursor.fetchall() if many else cursor.fetchone()
            finally:
                cursor.close()
        except Exception as e:
            self.logger.error(f"Failed to {operation} in {table}: {e}")
            raise StorageError(f"failed to {operation}: {e}", operation=operation, table=table) from e

    def _fetch_one(self, operation: str, table: str, statement: str, params: Sequence[Any] = ()):
        return self._fetch(operation, table, statement, params, many=False)

    def _fetch_all(self, operation: str, table: str, statement: str, params: Sequence[Any] = ()):
        return self._fetch(operation, table, statement, params, many=True)

    @staticmethod
    def _weight(weight: Any) -> int:
        if isinstance(weight, bool) or not isinstance(weight, int):
            raise SerializationError(f"weight must be an integer, got {type(weight).__name__}")
        if not INT64_MIN <= weight <= INT64_MAX:
            raise SerializationError(f"weight {weight} does not fit in a 64-bit integer")
        return weight

    @staticmethod
    def _payload(text: str) -> bytes:
        return text.encode("utf-8")

    @staticmethod
    def _data(data: Any) -> Optional[bytes]:
        if data is None:
            return None
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise SerializationError(
                f"edge data must be bytes, got {type(data).__name__}; encode it before storing"
            )
        return bytes(data)

    @staticmethod
    def _stored_weight(weight: Any) -> int:
        return int(weight) if weight is not None else 0

    @staticmethod
    def _stored_data(data: Any) -> Optional[bytes]:
        if data is None:
            return None
        if isinstance(data, str):
            return data.encode("utf-8")
        return bytes(data)
