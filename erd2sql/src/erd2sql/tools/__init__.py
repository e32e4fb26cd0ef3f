"""Schema summaries."""

from .summary import (
    format_entity,
    format_relationship,
    format_schema,
    get_entity_details,
    list_entities,
    relationships_for,
)

__all__ = [
    "format_entity",
    "format_relationship",
    "format_schema",
    "get_entity_details",
    "list_entities",
    "relationships_for",
]
