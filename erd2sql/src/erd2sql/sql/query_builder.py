"""Parameterized CRUD query templates for entities.

Every builder returns SQL with positional placeholders (``$1``, ``$2``, ...)
and the matching parameter list; values are never interpolated into the SQL
text.
"""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field
from erd2sql.ir.diagram import Entity
from erd2sql.utils.normalization import to_column_name, to_table_name
from erd2sql.config.logging import get_logger

logger = get_logger(__name__)

ORDER_DIRECTIONS = ("ASC", "DESC")


class SQLQuery(BaseModel):
    """SQL text plus positional parameters."""

    sql: str
    params: List[Any] = Field(default_factory=list)


class QueryConfig(BaseModel):
    """Table name, columns and primary key used by the query builders."""

    table_name: str
    columns: List[str]
    primary_key: str


def build_query_config(entity: Entity) -> QueryConfig:
    """
    Derive the query configuration for an entity.

    The primary key is the first PK attribute; without one the first column
    is used.
    """
    columns = [to_column_name(a.name) for a in entity.attributes]
    pk_attrs = entity.primary_key_attributes()
    if pk_attrs:
        primary_key = to_column_name(pk_attrs[0].name)
    else:
        primary_key = columns[0] if columns else ""
    return QueryConfig(
        table_name=to_table_name(entity.name),
        columns=columns,
        primary_key=primary_key,
    )


def select_all(
    config: QueryConfig,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    order_by: Optional[str] = None,
    order_dir: str = "ASC",
) -> SQLQuery:
    """
    SELECT * with optional ORDER BY, LIMIT and OFFSET (in that order).

    ``order_by`` is only honoured when it names a column of the table, and an
    unrecognized ``order_dir`` falls back to ASC.
    """
    sql = f'SELECT * FROM "{config.table_name}"'
    params: List[Any] = []

    if order_by and order_by not in config.columns:
        logger.debug(f'Ignoring unknown order_by column "{order_by}" for "{config.table_name}"')
        order_by = None

    if order_by:
        direction = (order_dir or "ASC").upper()
        if direction not in ORDER_DIRECTIONS:
            direction = "ASC"
        sql += f' ORDER BY "{order_by}" {direction}'

    if limit:
        params.append(limit)
        sql += f" LIMIT ${len(params)}"

    if offset:
        params.append(offset)
        sql += f" OFFSET ${len(params)}"

    return SQLQuery(sql=sql, params=params)


def select_by_id(config: QueryConfig, id: Any) -> SQLQuery:
    return SQLQuery(
        sql=f'SELECT * FROM "{config.table_name}" WHERE "{config.primary_key}" = $1',
        params=[id],
    )


def insert(config: QueryConfig, data: Dict[str, Any]) -> SQLQuery:
    """
    INSERT ... RETURNING * for the known columns in ``data``.

    Keys that are not columns of the table are dropped. With nothing left the
    row is inserted with ``DEFAULT VALUES``.
    """
    keys = [k for k in data if k in config.columns]
    if not keys:
        return SQLQuery(sql=f'INSERT INTO "{config.table_name}" DEFAULT VALUES RETURNING *', params=[])

    column_list = ", ".join(f'"{k}"' for k in keys)
    placeholders = ", ".join(f"${i}" for i in range(1, len(keys) + 1))
    return SQLQuery(
        sql=f'INSERT INTO "{config.table_name}" ({column_list}) VALUES ({placeholders}) RETURNING *',
        params=[data[k] for k in keys],
    )


def update(config: QueryConfig, id: Any, data: Dict[str, Any]) -> SQLQuery:
    """
    UPDATE ... RETURNING * setting the known non-key columns in ``data``.

    The primary key is never updated; ``id`` is bound as the last parameter.
    With nothing left to set the statement assigns the key to itself, so the
    row is returned unchanged.
    """
    keys = [k for k in data if k in config.columns and k != config.primary_key]
    if not keys:
        pk = config.primary_key
        return SQLQuery(
            sql=f'UPDATE "{config.table_name}" SET "{pk}" = "{pk}" WHERE "{pk}" = $1 RETURNING *',
            params=[id],
        )

    set_clauses = ", ".join(f'"{k}" = ${i}' for i, k in enumerate(keys, start=1))
    return SQLQuery(
        sql=(
            f'UPDATE "{config.table_name}" SET {set_clauses} '
            f'WHERE "{config.primary_key}" = ${len(keys) + 1} RETURNING *'
        ),
        params=[data[k] for k in keys] + [id],
    )


def delete_by_id(config: QueryConfig, id: Any) -> SQLQuery:
    return SQLQuery(
        sql=f'DELETE FROM "{config.table_name}" WHERE "{config.primary_key}" = $1 RETURNING *',
        params=[id],
    )


def count(config: QueryConfig) -> SQLQuery:
    return SQLQuery(sql=f'SELECT COUNT(*) as count FROM "{config.table_name}"', params=[])


class CrudQueries:
    """Query builders bound to one entity's configuration."""

    def __init__(self, entity: Entity):
        self.config = build_query_config(entity)

    def select_all(self, **options) -> SQLQuery:
        return select_all(self.config, **options)

    def select_by_id(self, id: Any) -> SQLQuery:
        return select_by_id(self.config, id)

    def insert(self, data: Dict[str, Any]) -> SQLQuery:
        return insert(self.config, data)

    def update(self, id: Any, data: Dict[str, Any]) -> SQLQuery:
        return update(self.config, id, data)

    def delete(self, id: Any) -> SQLQuery:
        return delete_by_id(self.config, id)

    def count(self) -> SQLQuery:
        return count(self.config)


def create_crud_queries(entity: Entity) -> CrudQueries:
    """Build a CrudQueries helper for an entity."""
    return CrudQueries(entity)
