"""
Tests for the SQL store.

These tests run SqlStore against an in-memory SQLite database and check the
vertex and edge operations, schema lifecycle and error reporting.
"""

import sqlite3

import pytest

from graph_sql.config.config_manager import SchemaConfig
from graph_sql.exceptions import (
    DecodeError,
    EdgeNotFoundError,
    NotFoundError,
    SchemaSetupError,
    SchemaTeardownError,
    SerializationError,
    StorageError,
    VertexNotFoundError,
)
from graph_sql.model.edge import Edge, EdgeProperties
from graph_sql.model.vertex import VertexProperties
from graph_sql.storage.backends.sql import SqlStore
from graph_sql.storage.codecs import KeyCodec
from graph_sql.storage.interfaces.graph_store_interface import GraphStore


def table_names(connection):
    rows = connection.execute("SELECT name FROM sqlite_master WHERE type = 'table'").fetchall()
    return {row[0] for row in rows}


class TestSqlStoreVertices:
    """Vertex operations of SqlStore."""

    def test_implements_store_interface(self, store):
        assert isinstance(store, GraphStore)

    def test_vertex_round_trip(self, store):
        value = {"name": "alpha", "tags": ["a", "b"], "nested": {"x": None, "y": 1.5}}
        properties = VertexProperties(weight=7, attributes={"color": "red", "shape": "box"})

        store.add_vertex(1, value, properties)

        stored_value, stored_properties = store.vertex(1)
        assert stored_value == value
        assert stored_properties == properties

    @pytest.mark.parametrize(
        "value", [42, 1.5, 1.0, 1e16, 2 ** 63 + 1, -(2 ** 70), "1", "text", True, None, [1, "two", 3.0], {}]
    )
    def test_scalar_and_container_values_round_trip(self, store, value):
        store.add_vertex(1, value)

        stored_value, _ = store.vertex(1)
        assert stored_value == value
        assert type(stored_value) is type(value)

    def test_default_properties(self, store):
        store.add_vertex(1, "value")

        _, properties = store.vertex(1)
        assert properties.weight == 0
        assert properties.attributes == {}

    def test_missing_vertex_raises_not_found(self, store):
        with pytest.raises(VertexNotFoundError) as exc_info:
            store.vertex(99)

        assert exc_info.value.key == 99
        assert isinstance(exc_info.value, NotFoundError)
        assert not isinstance(exc_info.value, StorageError)

    def test_remove_vertex(self, store):
        store.add_vertex(1, 1)
        assert store.vertex_count() == 1

        store.remove_vertex(1)
        assert store.vertex_count() == 0

        # larger graph
        for key in (1, 2, 3, 4):
            store.add_vertex(key, key)
        assert store.vertex_count() == 4

        store.remove_vertex(3)
        assert store.vertex_count() == 3

        with pytest.raises(VertexNotFoundError):
            store.vertex(3)

    def test_remove_absent_vertex_is_noop(self, store):
        store.remove_vertex(12345)
        assert store.vertex_count() == 0

    def test_list_vertices(self, store):
        for key in (1, 2, 3):
            store.add_vertex(key, {"key": key})

        assert sorted(store.list_vertices()) == [1, 2, 3]

    def test_list_vertices_empty(self, store):
        assert store.list_vertices() == []

    def test_duplicate_keys_are_not_rejected(self, store):
        store.add_vertex(1, "first")
        store.add_vertex(1, "second")

        assert store.vertex_count() == 2

    def test_integer_keys_come_back_as_text_without_key_codec(self, connection):
        store = SqlStore(connection)
        store.setup_tables()

        store.add_vertex(1, "one")
        store.add_edge(1, 2, Edge(1, 2))

        assert store.list_vertices() == ["1"]
        assert (store.list_edges()[0].source, store.list_edges()[0].target) == ("1", "2")
        assert store.vertex(1)[0] == "one"

    def test_string_keys_without_key_codec(self, connection):
        store = SqlStore(connection)
        store.setup_tables()

        store.add_vertex("alpha", 1)
        store.add_vertex("beta", 2)

        assert sorted(store.list_vertices()) == ["alpha", "beta"]
        assert store.vertex("beta")[0] == 2

    @pytest.mark.parametrize("value", [float("nan"), float("inf"), {"x": [float("-inf")]}])
    def test_non_finite_floats_rejected(self, store, value):
        with pytest.raises(SerializationError):
            store.add_vertex(1, value)

        assert store.vertex_count() == 0

    def test_unencodable_value(self, store):
        with pytest.raises(SerializationError):
            store.add_vertex(1, object())

        assert store.vertex_count() == 0

    def test_non_string_attributes(self, store):
        with pytest.raises(SerializationError):
            store.add_vertex(1, "value", VertexProperties(attributes={"count": 3}))

        assert store.vertex_count() == 0

    def test_unsupported_key(self, store):
        with pytest.raises(SerializationError):
            store.add_vertex((1, 2), "value")

    def test_non_integer_weight(self, store):
        with pytest.raises(SerializationError):
            store.add_vertex(1, "value", VertexProperties(weight=1.5))

    def test_weight_outside_int64(self, store):
        with pytest.raises(SerializationError):
            store.add_vertex(1, "value", VertexProperties(weight=2 ** 63))

        with pytest.raises(SerializationError):
            store.add_edge(1, 2, Edge(1, 2, EdgeProperties(weight=-(2 ** 63) - 1)))

        store.add_vertex(1, "value", VertexProperties(weight=2 ** 63 - 1))
        assert store.vertex(1)[1].weight == 2 ** 63 - 1

    def test_corrupt_value_raises_decode_error(self, store, connection):
        connection.execute(
            "INSERT INTO vertices (hash, value, weight, attributes) VALUES ('5', '{broken', 0, '{}')"
        )

        with pytest.raises(DecodeError):
            store.vertex(5)

    def test_corrupt_attributes_raise_decode_error(self, store, connection):
        connection.execute(
            "INSERT INTO vertices (hash, value, weight, attributes) VALUES ('5', '\"v\"', 0, '[1, 2]')"
        )

        with pytest.raises(DecodeError):
            store.vertex(5)

    def test_null_attributes_decode_to_empty(self, store, connection):
        connection.execute(
            "INSERT INTO vertices (hash, value, weight, attributes) VALUES ('5', '\"v\"', 2, NULL)"
        )

        value, properties = store.vertex(5)
        assert value == "v"
        assert properties == VertexProperties(weight=2)


class TestSqlStoreEdges:
    """Edge operations of SqlStore."""

    def test_edge_count(self, store):
        store.add_vertex(1, 1)
        store.add_vertex(2, 2)

        assert store.edge_count() == 0

        store.add_edge(1, 2, Edge(1, 2))
        assert store.edge_count() == 1

        store.add_edge(2, 1, Edge(2, 1))
        assert store.edge_count() == 2

        store.add_edge(1, 1, Edge(1, 1))
        assert store.edge_count() == 3

        store.add_edge(2, 2, Edge(2, 2))
        assert store.edge_count() == 4

        store.remove_edge(2, 2)
        assert store.edge_count() == 3

    def test_edge_round_trip(self, store):
        properties = EdgeProperties(weight=3, attributes={"label": "knows"}, data=b"\x00\x01payload")
        store.add_edge(1, 2, Edge(1, 2, properties))

        edge = store.edge(1, 2)
        assert edge == Edge(1, 2, properties)
        assert isinstance(edge.properties.data, bytes)

    def test_edge_without_data(self, store):
        store.add_edge(1, 2, Edge(1, 2))

        assert store.edge(1, 2).properties.data is None

    def test_edge_direction_matters(self, store):
        store.add_edge(1, 2, Edge(1, 2, EdgeProperties(weight=1)))

        with pytest.raises(EdgeNotFoundError) as exc_info:
            store.edge(2, 1)

        assert exc_info.value.source == 2
        assert exc_info.value.target == 1
        assert not isinstance(exc_info.value, StorageError)

    def test_edge_exists_until_removed(self, store):
        store.add_edge(1, 2, Edge(1, 2))
        store.edge(1, 2)

        store.remove_edge(1, 2)
        with pytest.raises(EdgeNotFoundError):
            store.edge(1, 2)

        store.add_edge(1, 2, Edge(1, 2, EdgeProperties(weight=9)))
        assert store.edge(1, 2).properties.weight == 9

    def test_remove_absent_edge_is_noop(self, store):
        store.remove_edge(1, 2)
        assert store.edge_count() == 0

    def test_update_edge(self, store):
        store.add_vertex(1, 1)
        store.add_vertex(2, 2)

        store.add_edge(1, 2, Edge(1, 2))
        store.add_edge(2, 1, Edge(2, 1))
        store.add_edge(1, 1, Edge(1, 1))
        store.add_edge(2, 2, Edge(2, 2))

        store.update_edge(
            1, 1, Edge(1, 1, EdgeProperties(weight=5, attributes={"abc": "xyz"}, data=b"happy"))
        )

        edge = store.edge(1, 1)
        assert edge.properties.weight == 5
        assert edge.properties.attributes["abc"] == "xyz"
        assert edge.properties.data == b"happy"

        # other edges are untouched
        assert store.edge(2, 2).properties == EdgeProperties()

    def test_update_edge_replaces_instead_of_merging(self, store):
        store.add_edge(
            1, 2, Edge(1, 2, EdgeProperties(weight=1, attributes={"a": "1", "b": "2"}, data=b"x"))
        )

        store.update_edge(1, 2, Edge(1, 2, EdgeProperties(weight=2, attributes={"c": "3"})))

        edge = store.edge(1, 2)
        assert edge.properties.weight == 2
        assert edge.properties.attributes == {"c": "3"}
        assert edge.properties.data is None

    def test_update_absent_edge_does_not_create_it(self, store):
        store.update_edge(1, 2, Edge(1, 2, EdgeProperties(weight=4)))

        assert store.edge_count() == 0
        with pytest.raises(EdgeNotFoundError):
            store.edge(1, 2)

    def test_list_edges(self, store):
        store.add_edge(1, 2, Edge(1, 2, EdgeProperties(weight=1, attributes={"k": "v"})))
        store.add_edge(2, 3, Edge(2, 3, EdgeProperties(data=b"blob")))

        edges = sorted(store.list_edges(), key=lambda e: (e.source, e.target))
        assert edges == [
            Edge(1, 2, EdgeProperties(weight=1, attributes={"k": "v"})),
            Edge(2, 3, EdgeProperties(data=b"blob")),
        ]

    def test_list_edges_empty(self, store):
        assert store.list_edges() == []

    def test_list_edges_aborts_on_corrupt_row(self, store, connection):
        store.add_edge(1, 2, Edge(1, 2))
        connection.execute(
            "INSERT INTO edges (source_hash, target_hash, weight, attributes, data) "
            "VALUES ('3', '4', 0, 'not json', NULL)"
        )

        with pytest.raises(DecodeError):
            store.list_edges()

        with pytest.raises(DecodeError):
            store.edge(3, 4)

    def test_removing_vertex_keeps_its_edges(self, store):
        store.add_vertex(1, 1)
        store.add_vertex(2, 2)
        store.add_edge(1, 2, Edge(1, 2))
        store.add_edge(2, 1, Edge(2, 1))

        store.remove_vertex(1)

        assert store.vertex_count() == 1
        assert store.edge_count() == 2
        assert store.edge(1, 2) == Edge(1, 2)

    def test_edge_data_must_be_bytes(self, store):
        with pytest.raises(SerializationError):
            store.add_edge(1, 2, Edge(1, 2, EdgeProperties(data="happy")))

        assert store.edge_count() == 0

    def test_counts_and_listings_do_not_mutate(self, store):
        store.add_vertex(1, 1)
        store.add_edge(1, 1, Edge(1, 1))

        for _ in range(3):
            store.list_vertices()
            store.list_edges()
            store.vertex_count()
            store.edge_count()

        assert store.vertex_count() == 1
        assert store.edge_count() == 1


class TestSqlStoreSchema:
    """Schema lifecycle of SqlStore."""

    def test_setup_creates_both_tables(self, connection):
        store = SqlStore(connection)
        store.setup_tables()

        assert {"vertices", "edges"} <= table_names(connection)

    def test_destroy_drops_both_tables(self, store, connection):
        store.destroy_tables()

        assert not {"vertices", "edges"} & table_names(connection)

    def test_setup_twice_names_vertices_table(self, store):
        with pytest.raises(SchemaSetupError) as exc_info:
            store.setup_tables()

        assert exc_info.value.table == "vertices"
        assert isinstance(exc_info.value.__cause__, sqlite3.Error)

    def test_partial_setup_keeps_first_table(self, connection):
        connection.execute("CREATE TABLE edges (x INT)")
        store = SqlStore(connection)

        with pytest.raises(SchemaSetupError) as exc_info:
            store.setup_tables()

        assert exc_info.value.table == "edges"
        assert "vertices" in table_names(connection)

    def test_destroy_missing_tables_names_edges_table(self, connection):
        store = SqlStore(connection)

        with pytest.raises(SchemaTeardownError) as exc_info:
            store.destroy_tables()

        assert exc_info.value.table == "edges"

    def test_destroy_drops_edges_before_vertices(self, connection):
        connection.execute("CREATE TABLE edges (x INT)")
        store = SqlStore(connection)

        with pytest.raises(SchemaTeardownError) as exc_info:
            store.destroy_tables()

        assert exc_info.value.table == "vertices"
        assert "edges" not in table_names(connection)

    def test_custom_table_names_and_types(self, connection):
        config = SchemaConfig(
            vertices_table="graph_nodes",
            edges_table="graph_links",
            vertex_hash_type="INTEGER",
            vertex_value_type="TEXT",
        )
        store = SqlStore(connection, config)
        store.setup_tables()

        assert {"graph_nodes", "graph_links"} <= table_names(connection)

        store.add_vertex(10, "ten")
        store.add_edge(10, 10, Edge(10, 10))

        assert store.list_vertices() == [10]
        assert store.list_edges()[0].source == 10
        assert store.vertex(10)[0] == "ten"

    def test_operations_without_tables_raise_storage_error(self, connection):
        store = SqlStore(connection)

        with pytest.raises(StorageError) as exc_info:
            store.add_vertex(1, 1)

        assert exc_info.value.table == "vertices"
        assert isinstance(exc_info.value.__cause__, sqlite3.OperationalError)

        with pytest.raises(StorageError) as exc_info:
            store.edge_count()

        assert exc_info.value.table == "edges"

    def test_writes_are_committed(self, tmp_path):
        database = str(tmp_path / "graph.db")
        writer = sqlite3.connect(database)
        reader = sqlite3.connect(database)
        try:
            store = SqlStore(writer, key_codec=KeyCodec(int))
            store.setup_tables()
            store.add_vertex(1, {"a": 1})
            store.add_edge(1, 1, Edge(1, 1))

            other = SqlStore(reader, key_codec=KeyCodec(int))
            assert other.vertex_count() == 1
            assert other.list_edges() == [Edge(1, 1)]
        finally:
            writer.close()
            reader.close()
