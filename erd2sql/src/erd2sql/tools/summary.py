"""JSON-ready summaries of a parsed schema."""

from typing import Any, Dict, List, Optional
from erd2sql.errors import EntityNotFoundError
from erd2sql.ir.diagram import (
    CARDINALITY_DESCRIPTIONS,
    DatabaseSchema,
    Entity,
    Relationship,
)


def format_entity(entity: Entity) -> Dict[str, Any]:
    return {
        "name": entity.name,
        "alias": entity.alias,
        "attributes": [
            {
                "name": attr.name,
                "type": attr.type,
                "is_primary_key": attr.is_primary_key,
                "is_foreign_key": attr.is_foreign_key,
                "is_unique": attr.is_unique,
                "keys": list(attr.keys),
                "comment": attr.comment,
            }
            for attr in entity.attributes
        ],
        "primary_keys": entity.primary_keys,
        "foreign_keys": entity.foreign_keys,
    }


def describe_relationship(rel: Relationship) -> str:
    """Sentence form, e.g. ``CUSTOMER has zero or more ORDER (places)``."""
    return (
        f"{rel.first_entity} has {CARDINALITY_DESCRIPTIONS[rel.second_cardinality]} "
        f"{rel.second_entity} ({rel.label})"
    )


def format_relationship(rel: Relationship) -> Dict[str, Any]:
    return {
        "from": rel.first_entity,
        "to": rel.second_entity,
        "from_cardinality": rel.first_cardinality,
        "to_cardinality": rel.second_cardinality,
        "from_description": CARDINALITY_DESCRIPTIONS[rel.first_cardinality],
        "to_description": CARDINALITY_DESCRIPTIONS[rel.second_cardinality],
        "identifying": rel.identifying,
        "label": rel.label,
        "description": describe_relationship(rel),
    }


def format_schema(schema: DatabaseSchema) -> Dict[str, Any]:
    return {
        "entities": [format_entity(e) for e in schema.entities],
        "relationships": [format_relationship(r) for r in schema.relationships],
        "summary": {
            "entity_count": len(schema.entities),
            "relationship_count": len(schema.relationships),
            "total_attributes": sum(len(e.attributes) for e in schema.entities),
        },
    }


def list_entities(schema: DatabaseSchema) -> List[Dict[str, Any]]:
    return [
        {"name": e.name, "alias": e.alias, "attribute_count": len(e.attributes)}
        for e in schema.entities
    ]


def find_entity(schema: DatabaseSchema, name: str) -> Optional[Entity]:
    """Case-insensitive entity lookup."""
    wanted = name.lower()
    for entity in schema.entities:
        if entity.name.lower() == wanted:
            return entity
    return None


def relationships_for(schema: DatabaseSchema, name: Optional[str] = None) -> List[Relationship]:
    """Relationships involving ``name`` (case-insensitive), or all of them."""
    if not name:
        return list(schema.relationships)
    wanted = name.lower()
    return [
        r
        for r in schema.relationships
        if r.first_entity.lower() == wanted or r.second_entity.lower() == wanted
    ]


def get_entity_details(schema: DatabaseSchema, name: str) -> Dict[str, Any]:
    """
    Full description of one entity and the relationships it takes part in.

    Raises:
        EntityNotFoundError: If no entity matches ``name``
    """
    entity = find_entity(schema, name)
    if entity is None:
        raise EntityNotFoundError(name, schema.entity_names())
    return {
        "entity": format_entity(entity),
        "relationships": [format_relationship(r) for r in relationships_for(schema, name)],
    }
