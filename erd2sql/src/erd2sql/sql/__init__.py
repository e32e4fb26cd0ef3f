"""SQL generation: type mapping, DDL and CRUD query templates."""

from .type_mapping import map_type
from .ddl import (
    SchemaSQL,
    generate_create_table,
    generate_drop_tables,
    generate_foreign_keys,
    generate_schema_sql,
)
from .query_builder import CrudQueries, QueryConfig, SQLQuery, build_query_config, create_crud_queries

__all__ = [
    "map_type",
    "SchemaSQL",
    "generate_create_table",
    "generate_drop_tables",
    "generate_foreign_keys",
    "generate_schema_sql",
    "CrudQueries",
    "QueryConfig",
    "SQLQuery",
    "build_query_config",
    "create_crud_queries",
]
