"""Schema model for parsed ER diagrams."""

from .diagram import (
    Attribute,
    AttributeKey,
    Cardinality,
    CARDINALITY_DESCRIPTIONS,
    DatabaseSchema,
    Entity,
    ParseResult,
    Relationship,
    ValidationResult,
)

__all__ = [
    "Attribute",
    "AttributeKey",
    "Cardinality",
    "CARDINALITY_DESCRIPTIONS",
    "DatabaseSchema",
    "Entity",
    "ParseResult",
    "Relationship",
    "ValidationResult",
]
