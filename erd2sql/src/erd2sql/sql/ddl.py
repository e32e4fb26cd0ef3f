"""PostgreSQL DDL generation from a parsed diagram schema."""

from typing import Dict, List, Optional, Tuple
from pydantic import BaseModel
from erd2sql.ir.diagram import DatabaseSchema, Entity
from erd2sql.sql.type_mapping import map_type
from erd2sql.utils.normalization import to_column_name, to_table_name
from erd2sql.config.logging import get_logger

logger = get_logger(__name__)

SCRIPT_HEADER = "-- Generated by erd2sql"


class SchemaSQL(BaseModel):
    """DDL for a whole schema."""

    create_tables: List[str]
    foreign_keys: List[str]
    drop_tables: List[str]
    full_script: str


def generate_create_table(entity: Entity) -> str:
    """
    Generate an idempotent CREATE TABLE statement for an entity.

    Columns come first in attribute order, then a PRIMARY KEY constraint over
    all PK columns, then one UNIQUE constraint per UK column that is not
    also part of the primary key.
    """
    table_name = to_table_name(entity.name)
    columns: List[str] = []
    constraints: List[str] = []

    for attr in entity.attributes:
        col_def = f'  "{to_column_name(attr.name)}" {map_type(attr.type)}'
        if attr.is_primary_key:
            col_def += " NOT NULL"
        columns.append(col_def)

    pk_columns = [f'"{to_column_name(a.name)}"' for a in entity.primary_key_attributes()]
    if pk_columns:
        constraints.append(f"  PRIMARY KEY ({', '.join(pk_columns)})")

    for attr in entity.attributes:
        if attr.is_unique and not attr.is_primary_key:
            constraints.append(f'  UNIQUE ("{to_column_name(attr.name)}")')

    body = ",\n".join(columns + constraints)
    return f'CREATE TABLE IF NOT EXISTS "{table_name}" (\n{body}\n);'


def _primary_key_column(entity: Entity) -> str:
    pk_attrs = entity.primary_key_attributes()
    return to_column_name(pk_attrs[0].name) if pk_attrs else "id"


def infer_reference(column_name: str, tables: Dict[str, Entity]) -> Optional[Tuple[str, str]]:
    """
    Infer the table and column an FK column points at from its name.

    ``customer_id`` references table ``customer`` if such a table exists;
    the referenced column is that table's first PK column, or ``id``.

    Args:
        column_name: Normalized FK column name
        tables: Normalized table name -> entity, first declaration wins

    Returns:
        (table, column) or None when the naming convention finds no match
    """
    if not column_name.endswith("_id"):
        return None
    candidate = column_name[: -len("_id")]
    entity = tables.get(candidate)
    if entity is None:
        return None
    return candidate, _primary_key_column(entity)


def generate_foreign_keys(schema: DatabaseSchema) -> List[str]:
    """
    Generate ALTER TABLE ... FOREIGN KEY statements for FK attributes.

    References are inferred purely from column names (see infer_reference).
    FK attributes whose target cannot be inferred are skipped.
    """
    tables: Dict[str, Entity] = {}
    for entity in schema.entities:
        tables.setdefault(to_table_name(entity.name), entity)

    statements: List[str] = []
    for entity in schema.entities:
        table_name = to_table_name(entity.name)
        for attr in entity.attributes:
            if not attr.is_foreign_key:
                continue
            col_name = to_column_name(attr.name)
            reference = infer_reference(col_name, tables)
            if reference is None:
                logger.debug(f"{table_name}.{col_name}: no referenced table inferred, skipping FK")
                continue
            ref_table, ref_column = reference
            constraint_name = f"fk_{table_name}_{col_name}"
            statements.append(
                f'ALTER TABLE "{table_name}" ADD CONSTRAINT "{constraint_name}" '
                f'FOREIGN KEY ("{col_name}") REFERENCES "{ref_table}" ("{ref_column}") '
                f"ON DELETE CASCADE;"
            )

    return statements


def generate_drop_tables(schema: DatabaseSchema) -> List[str]:
    """One DROP TABLE ... CASCADE per entity, in declaration order."""
    return [f'DROP TABLE IF EXISTS "{to_table_name(e.name)}" CASCADE;' for e in schema.entities]


def generate_schema_sql(schema: DatabaseSchema) -> SchemaSQL:
    """
    Generate the complete DDL for a schema.

    Args:
        schema: Parsed schema

    Returns:
        SchemaSQL with per-statement lists and a combined script
    """
    create_tables = [generate_create_table(e) for e in schema.entities]
    foreign_keys = generate_foreign_keys(schema)
    drop_tables = generate_drop_tables(schema)

    full_script = "\n\n".join(
        [
            SCRIPT_HEADER,
            "-- Create Tables",
            *create_tables,
            "",
            "-- Foreign Key Constraints",
            *foreign_keys,
        ]
    )

    logger.info(
        f"Generated DDL for {len(create_tables)} tables with {len(foreign_keys)} foreign keys"
    )

    return SchemaSQL(
        create_tables=create_tables,
        foreign_keys=foreign_keys,
        drop_tables=drop_tables,
        full_script=full_script,
    )
