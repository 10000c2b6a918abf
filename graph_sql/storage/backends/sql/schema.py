"""
DDL for the vertices and edges tables.

Table names and column types come from SchemaConfig and are substituted into
the templates as-is. They are operator-supplied and are not escaped.
"""

from graph_sql.config.config_manager import SchemaConfig

CREATE_VERTICES_TABLE = """
CREATE TABLE {table} (
    id {id_type},
    hash {hash_type},
    value {value_type},
    weight INT,
    attributes JSON
)"""

CREATE_EDGES_TABLE = """
CREATE TABLE {table} (
    id {id_type},
    source_hash {hash_type},
    target_hash {hash_type},
    weight INT,
    attributes JSON,
    data BLOB
)"""

DROP_TABLE = "DROP TABLE {table}"


def create_vertices_table_sql(config: SchemaConfig) -> str:
    return CREATE_VERTICES_TABLE.format(
        table=config.vertices_table,
        id_type=config.id_column_type,
        hash_type=config.vertex_hash_type,
        value_type=config.vertex_value_type,
    )


def create_edges_table_sql(config: SchemaConfig) -> str:
    return CREATE_EDGES_TABLE.format(
        table=config.edges_table,
        id_type=config.id_column_type,
        hash_type=config.vertex_hash_type,
    )


def drop_vertices_table_sql(config: SchemaConfig) -> str:
    return DROP_TABLE.format(table=config.vertices_table)


def drop_edges_table_sql(config: SchemaConfig) -> str:
    return DROP_TABLE.format(table=config.edges_table)
