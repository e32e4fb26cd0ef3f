"""Mapping from diagram attribute types to PostgreSQL column types."""

import re
from typing import Dict

DEFAULT_SQL_TYPE = "TEXT"

TYPE_MAPPING: Dict[str, str] = {
    # Numeric types
    "int": "INTEGER",
    "integer": "INTEGER",
    "bigint": "BIGINT",
    "smallint": "SMALLINT",
    "serial": "SERIAL",
    "bigserial": "BIGSERIAL",
    "decimal": "DECIMAL(10,2)",
    "numeric": "NUMERIC",
    "float": "FLOAT",
    "real": "REAL",
    "double": "DOUBLE PRECISION",
    # String types
    "string": "VARCHAR(255)",
    "varchar": "VARCHAR(255)",
    "text": "TEXT",
    "char": "CHAR(1)",
    # Boolean
    "boolean": "BOOLEAN",
    "bool": "BOOLEAN",
    # Date/Time
    "date": "DATE",
    "time": "TIME",
    "datetime": "TIMESTAMP",
    "timestamp": "TIMESTAMP",
    "timestamptz": "TIMESTAMPTZ",
    # UUID
    "uuid": "UUID",
    # JSON
    "json": "JSON",
    "jsonb": "JSONB",
    # Binary
    "bytea": "BYTEA",
    "blob": "BYTEA",
}

_PARAMETERIZED = re.compile(r"^(\w+)\((.+)\)$")


def map_type(diagram_type: str) -> str:
    """
    Convert a diagram attribute type to a PostgreSQL type.

    Never fails: anything unrecognized maps to TEXT.

    Examples:
        >>> map_type("string")
        'VARCHAR(255)'
        >>> map_type("varchar(100)")
        'VARCHAR(100)'
        >>> map_type("int[]")
        'INTEGER[]'
        >>> map_type("varchar(50)[]")
        'VARCHAR(50)[]'
        >>> map_type("money")
        'TEXT'
    """
    normalized = diagram_type.lower().strip()

    if normalized.endswith("[]"):
        base_type = normalized[:-2]
        return f"{map_type(base_type)}[]"

    param_match = _PARAMETERIZED.match(normalized)
    if param_match:
        base_type, params = param_match.groups()
        sql_base = TYPE_MAPPING.get(base_type)
        if sql_base:
            # Supplied params replace the mapping's defaults, e.g. VARCHAR(255)
            if "(" in sql_base:
                return f"{sql_base.split('(')[0]}({params})"
            return f"{sql_base}({params})"

    return TYPE_MAPPING.get(normalized, DEFAULT_SQL_TYPE)
