"""
graph-sql CLI - Command line interface for managing graph store tables.

Usage:
    graph-sql setup [--config=DIR] [--database=PATH]
    graph-sql destroy [--config=DIR] [--database=PATH]
    graph-sql status [--config=DIR] [--database=PATH] [--format=FORMAT]
    graph-sql vertices [--config=DIR] [--database=PATH]
    graph-sql edges [--config=DIR] [--database=PATH] [--format=FORMAT]
    graph-sql version
    graph-sql --help

Commands:
    setup               Create the vertices and edges tables
    destroy             Drop both tables and all data in them
    status              Show configuration and row counts
    vertices            List vertex keys
    edges               List edges
    version             Show version information

Options:
    -h --help           Show this help message
    --config=DIR        Configuration directory
    --database=PATH     SQLite database file [default: from configuration]
    --format=FORMAT     Output format (text, json) [default: text]
"""

import json
import os
import sys
import traceback
from typing import Any, Dict, List, Optional, Tuple

import dotenv

from graph_sql import __version__
from graph_sql.config import ConfigValidationError, init_config
from graph_sql.exceptions import GraphStoreError
from graph_sql.monitoring import OperationLogger, configure_logging, get_logger
from graph_sql.storage.backends.sql import SqlStore
from graph_sql.storage.factory import create_store

logger = get_logger(__name__, component="cli")


class GraphSqlCLI:
    """graph-sql command line interface."""

    def __init__(self, config_dir: Optional[str] = None, database: Optional[str] = None):
        self.config_manager = init_config(config_dir)
        configure_logging(self.config_manager.config.logging)
        self.database = database
        self.store: Optional[SqlStore] = None

    def open_store(self) -> SqlStore:
        """Open the SQL store on the configured database."""
        if self.store is None:
            override = {"database_path": self.database} if self.database else None
            self.store = create_store("sql", config_override=override)
        return self.store

    def close(self):
        if self.store is not None:
            self.store.connection.close()
            self.store = None

    def setup_command(self):
        store = self.open_store()
        with OperationLogger(logger, "setup_tables"):
            store.setup_tables()
        print(f"✅ Created tables {store.config.vertices_table} and {store.config.edges_table}")

    def destroy_command(self):
        store = self.open_store()
        with OperationLogger(logger, "destroy_tables"):
            store.destroy_tables()
        print(f"🗑️  Dropped tables {store.config.edges_table} and {store.config.vertices_table}")

    def status_command(self, format: str = "text"):
        store = self.open_store()
        status = {
            "database": self.database or self.config_manager.config.database.path,
            "vertices_table": store.config.vertices_table,
            "edges_table": store.config.edges_table,
            "vertex_count": store.vertex_count(),
            "edge_count": store.edge_count(),
        }

        if format == "json":
            print(json.dumps(status, indent=2))
            return

        print("📊 Graph Store Status")
        print("=" * 50)
        for key, value in status.items():
            print(f"{key.replace('_', ' ').title()}: {value}")

    def vertices_command(self):
        for key in self.open_store().list_vertices():
            print(key)

    def edges_command(self, format: str = "text"):
        edges = self.open_store().list_edges()

        if format == "json":
            rows = []
            for edge in edges:
                row = edge.to_dict()
                data = row.pop("data")
                row["data"] = data.hex() if data is not None else None
                rows.append(row)
            print(json.dumps(rows, indent=2, default=str))
            return

        for edge in edges:
            print(f"{edge.source} -> {edge.target} (weight={edge.properties.weight})")


def parse_args(argv: List[str]) -> Tuple[Optional[str], Dict[str, Any]]:
    """Parse command line arguments manually."""
    if not argv:
        return None, {}

    command = argv[0]
    args: Dict[str, Any] = {}

    i = 1
    while i < len(argv):
        arg = argv[i]

        if arg.startswith("--"):
            if "=" in arg:
                key, value = arg[2:].split("=", 1)
                args[key] = value
            else:
                key = arg[2:]
                if i + 1 < len(argv) and not argv[i + 1].startswith("--"):
                    args[key] = argv[i + 1]
                    i += 1
                else:
                    args[key] = True
        else:
            args.setdefault("positional", []).append(arg)

        i += 1

    return command, args


def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI entry point."""
    dotenv.load_dotenv()
    command, args = parse_args(sys.argv[1:] if argv is None else argv)

    if command is None or command in ("--help", "-h", "help"):
        print(__doc__)
        return 0 if command else 1

    if command == "version":
        print(f"graph-sql {__version__}")
        return 0

    handlers = {
        "setup": lambda cli: cli.setup_command(),
        "destroy": lambda cli: cli.destroy_command(),
        "status": lambda cli: cli.status_command(format=args.get("format", "text")),
        "vertices": lambda cli: cli.vertices_command(),
        "edges": lambda cli: cli.edges_command(format=args.get("format", "text")),
    }

    if command not in handlers:
        print(f"❌ Unknown command: {command}")
        print("Run 'graph-sql --help' for usage information")
        return 1

    cli = None
    try:
        cli = GraphSqlCLI(config_dir=args.get("config"), database=args.get("database"))
        handlers[command](cli)
        return 0
    except (GraphStoreError, ConfigValidationError) as e:
        print(f"❌ {command} failed: {e}")
        if e.__cause__ is not None:
            print(f"   caused by: {e.__cause__}")
        if os.getenv("DEBUG"):
            traceback.print_exc()
        return 1
    finally:
        if cli is not None:
            cli.close()


if __name__ == "__main__":
    sys.exit(main())
