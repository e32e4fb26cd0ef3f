"""Structural validation for parsed ER diagrams."""

from typing import List
from erd2sql.ir.diagram import DatabaseSchema, ValidationResult
from erd2sql.parser.mermaid import parse_er_diagram
from erd2sql.config.logging import get_logger

logger = get_logger(__name__)

MISSING_HEADER = 'Diagram does not contain "erDiagram" declaration'


def find_duplicate_entities(schema: DatabaseSchema) -> List[str]:
    """Return every entity name occurrence after its first, in order."""
    seen = set()
    duplicates: List[str] = []
    for name in schema.entity_names():
        if name in seen:
            duplicates.append(name)
        seen.add(name)
    return duplicates


def find_dangling_references(schema: DatabaseSchema) -> List[str]:
    """Return relationship endpoints that name no entity, one per occurrence."""
    names = set(schema.entity_names())
    dangling: List[str] = []
    for rel in schema.relationships:
        for endpoint in (rel.first_entity, rel.second_entity):
            if endpoint not in names:
                dangling.append(endpoint)
    return dangling


def validate_schema(schema: DatabaseSchema) -> List[str]:
    """
    Check a schema for duplicate entities and dangling relationship references.

    Useful for schemas assembled programmatically; the parser itself never
    produces dangling references because it auto-creates missing entities.

    Args:
        schema: Schema to check

    Returns:
        List of error messages (empty if the schema is consistent)
    """
    errors: List[str] = []

    duplicates = find_duplicate_entities(schema)
    if duplicates:
        errors.append(f"Duplicate entity names: {', '.join(duplicates)}")

    for name in find_dangling_references(schema):
        errors.append(f"Relationship references non-existent entity: {name}")

    return errors


def validate_er_diagram(text: str) -> ValidationResult:
    """
    Parse and validate a Mermaid ER diagram.

    Parse errors come first, followed by the header check (done on the raw
    text) and the schema checks.

    Args:
        text: Diagram source

    Returns:
        ValidationResult
    """
    result = parse_er_diagram(text)
    errors: List[str] = list(result.errors or [])

    if "erdiagram" not in text.lower():
        errors.append(MISSING_HEADER)

    if result.schema is not None:
        errors.extend(validate_schema(result.schema))

    if errors:
        logger.warning(f"Diagram validation found {len(errors)} issues")
    else:
        logger.info("Diagram validation passed")

    return ValidationResult(valid=not errors, errors=errors)
