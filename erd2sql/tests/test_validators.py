"""Tests for diagram and schema validation."""

from erd2sql.ir.diagram import DatabaseSchema, Entity, Relationship
from erd2sql.ir.validators import (
    MISSING_HEADER,
    find_duplicate_entities,
    validate_er_diagram,
    validate_schema,
)


def _rel(first, second):
    return Relationship(
        first_entity=first,
        second_entity=second,
        first_cardinality="EXACTLY_ONE",
        second_cardinality="ZERO_OR_MORE",
        identifying=True,
        label="has",
    )


def test_valid_diagram(shop_diagram):
    """A well-formed diagram validates cleanly."""
    result = validate_er_diagram(shop_diagram)
    assert result.valid
    assert result.errors == []


def test_missing_header_is_reported():
    """The header check runs on the raw text."""
    result = validate_er_diagram("CUSTOMER {\n int id PK\n}\n")
    assert not result.valid
    assert result.errors == [MISSING_HEADER]


def test_header_check_is_a_containment_check():
    """Any occurrence of the keyword satisfies the header check."""
    result = validate_er_diagram("%% see erdiagram docs\n")
    assert result.valid


def test_parse_errors_come_first():
    """Parse errors are included ahead of structural errors."""
    text = "erDiagram\n  CUSTOMER {\n    ???\n  }\n"
    result = validate_er_diagram(text)
    assert not result.valid
    assert result.errors == ['Line 3: Unable to parse attribute: "???"']


def test_auto_created_entities_resolve_references():
    """Relationship endpoints created by the parser count as present."""
    result = validate_er_diagram("erDiagram\n  CUSTOMER ||--o{ ORDER : places\n")
    assert result.valid


def test_dangling_references_without_auto_creation():
    """A schema assembled without auto-creation reports each dangling endpoint."""
    schema = DatabaseSchema(
        entities=[Entity(name="CUSTOMER")],
        relationships=[_rel("CUSTOMER", "ORDER"), _rel("INVOICE", "ORDER")],
    )
    assert validate_schema(schema) == [
        "Relationship references non-existent entity: ORDER",
        "Relationship references non-existent entity: INVOICE",
        "Relationship references non-existent entity: ORDER",
    ]


def test_duplicate_entities():
    """Every repeated name is reported, matched case-sensitively."""
    schema = DatabaseSchema(
        entities=[
            Entity(name="A"),
            Entity(name="B"),
            Entity(name="A"),
            Entity(name="a"),
            Entity(name="A"),
        ]
    )
    assert find_duplicate_entities(schema) == ["A", "A"]
    assert validate_schema(schema) == ["Duplicate entity names: A, A"]


def test_consistent_schema_has_no_errors():
    schema = DatabaseSchema(
        entities=[Entity(name="CUSTOMER"), Entity(name="ORDER")],
        relationships=[_rel("CUSTOMER", "ORDER")],
    )
    assert validate_schema(schema) == []
