"""Utility functions for common operations."""

from .normalization import clean_entity_name, normalize_identifier, to_column_name, to_table_name
from .diagram_io import load_diagram, load_schema_from_json, save_schema_to_json

__all__ = [
    "clean_entity_name",
    "normalize_identifier",
    "to_column_name",
    "to_table_name",
    "load_diagram",
    "load_schema_from_json",
    "save_schema_to_json",
]
