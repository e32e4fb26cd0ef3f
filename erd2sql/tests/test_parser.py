"""Tests for the Mermaid ER diagram parser."""

from erd2sql.parser.mermaid import parse_attribute, parse_attribute_keys, parse_er_diagram


def test_customer_order_example():
    """Undeclared relationship endpoints are created with no attributes."""
    text = """
erDiagram
    CUSTOMER {
        int customer_id PK
        string email UK
    }
    CUSTOMER ||--o{ ORDER : "places"
"""
    result = parse_er_diagram(text)

    assert result.success
    assert result.errors is None
    schema = result.schema
    assert [e.name for e in schema.entities] == ["CUSTOMER", "ORDER"]
    assert len(schema.entities[0].attributes) == 2
    assert schema.entities[1].attributes == []

    assert len(schema.relationships) == 1
    rel = schema.relationships[0]
    assert rel.first_entity == "CUSTOMER"
    assert rel.second_entity == "ORDER"
    assert rel.first_cardinality == "EXACTLY_ONE"
    assert rel.second_cardinality == "ZERO_OR_MORE"
    assert rel.identifying is True
    assert rel.label == "places"


def test_attributes_keep_count_and_order(shop_diagram):
    """Every attribute line becomes one attribute, in source order."""
    schema = parse_er_diagram(shop_diagram).schema
    order = schema.get_entity("ORDER")
    assert [a.name for a in order.attributes] == ["order_id", "customer_id", "placed_at", "total"]
    assert [a.type for a in order.attributes] == ["int", "int", "timestamptz", "decimal(10,2)"]


def test_attribute_keys_and_comment(shop_diagram):
    """Key lists and quoted comments are captured."""
    schema = parse_er_diagram(shop_diagram).schema
    customer = schema.get_entity("CUSTOMER")
    email = customer.attributes[1]
    assert email.keys == ["UK"]
    assert email.comment == "login address"

    line_item = schema.get_entity("LINE-ITEM")
    assert line_item.attributes[0].keys == ["PK", "FK"]


def test_star_marker_implies_primary_key():
    """A leading * marks a PK and is removed from the name."""
    attr = parse_attribute("int *id")
    assert attr.name == "id"
    assert attr.keys == ["PK"]

    attr = parse_attribute("int *id FK")
    assert attr.keys == ["PK", "FK"]

    attr = parse_attribute("int *id PK")
    assert attr.keys == ["PK"]


def test_key_parsing_is_case_insensitive():
    """Key markers are normalized to upper case and deduplicated."""
    assert parse_attribute_keys("pk, Fk") == ["PK", "FK"]
    assert parse_attribute_keys("PK,PK") == ["PK"]
    assert parse_attribute_keys(None) == []


def test_alias_is_unquoted(shop_diagram):
    """Bracketed aliases are captured without their quotes."""
    product = parse_er_diagram(shop_diagram).schema.get_entity("PRODUCT")
    assert product.alias == "Catalog Product"


def test_dashed_connector_is_non_identifying(shop_diagram):
    """Dashed connectors produce non-identifying relationships."""
    rels = parse_er_diagram(shop_diagram).schema.relationships
    assert [r.identifying for r in rels] == [True, True, False]
    assert rels[2].first_cardinality == "ZERO_OR_ONE"
    assert rels[2].label == "appears in"
    assert rels[1].second_cardinality == "ONE_OR_MORE"
    assert rels[1].label == "contains"


def test_lines_before_header_are_ignored():
    """Nothing before the erDiagram header is parsed."""
    text = """
CUSTOMER {
    int broken line here
}
erDiagram
    PRODUCT
"""
    result = parse_er_diagram(text)
    assert result.success
    assert [e.name for e in result.schema.entities] == ["PRODUCT"]


def test_header_is_case_insensitive():
    """The header keyword matches regardless of case."""
    result = parse_er_diagram("ERDIAGRAM\n    PRODUCT\n")
    assert [e.name for e in result.schema.entities] == ["PRODUCT"]


def test_no_header_yields_empty_schema():
    """Without a header the schema is empty but parsing succeeds."""
    result = parse_er_diagram("CUSTOMER ||--o{ ORDER : places\n")
    assert result.success
    assert result.schema.entities == []
    assert result.schema.relationships == []


def test_bad_attribute_line_is_recorded_and_parsing_continues():
    """Unparseable attribute lines are errors but later lines still parse."""
    text = """erDiagram
    CUSTOMER {
        int customer_id PK
        this is not an attribute
        string email
    }
    PRODUCT
"""
    result = parse_er_diagram(text)

    assert not result.success
    assert result.errors == ['Line 4: Unable to parse attribute: "this is not an attribute"']
    schema = result.schema
    assert schema is not None
    assert [a.name for a in schema.get_entity("CUSTOMER").attributes] == ["customer_id", "email"]
    assert schema.get_entity("PRODUCT") is not None


def test_unterminated_block_is_committed():
    """An entity block left open at end of input is kept."""
    text = "erDiagram\n  CUSTOMER {\n    int id PK\n"
    result = parse_er_diagram(text)
    assert result.success
    assert len(result.schema.get_entity("CUSTOMER").attributes) == 1


def test_block_replaces_auto_created_entity_in_place():
    """A later block declaration fills in an entity first seen in a relationship."""
    text = """erDiagram
    CUSTOMER ||--o{ ORDER : places
    ORDER {
        int order_id PK
    }
"""
    schema = parse_er_diagram(text).schema
    assert [e.name for e in schema.entities] == ["CUSTOMER", "ORDER"]
    assert len(schema.get_entity("ORDER").attributes) == 1


def test_relationship_does_not_overwrite_declared_entity():
    """Relationships never replace an entity that already has attributes."""
    text = """erDiagram
    ORDER {
        int order_id PK
    }
    CUSTOMER ||--o{ ORDER : places
    ORDER
"""
    schema = parse_er_diagram(text).schema
    assert [e.name for e in schema.entities] == ["ORDER", "CUSTOMER"]
    assert len(schema.get_entity("ORDER").attributes) == 1


def test_quoted_entity_names():
    """Quoted names in relationships are stripped of their quotes."""
    text = 'erDiagram\n    "Order Item" }|..|| ORDER : "belongs to"\n'
    schema = parse_er_diagram(text).schema
    assert schema.entity_names() == ["Order Item", "ORDER"]
    rel = schema.relationships[0]
    assert rel.first_cardinality == "ONE_OR_MORE"
    assert rel.second_cardinality == "EXACTLY_ONE"


def test_comments_directions_and_unknown_lines_are_skipped():
    """Comments, direction and unsupported syntax produce no errors."""
    text = """erDiagram
    %% a comment
    direction TB
    classDef foo fill:#f9f
    CUSTOMER
"""
    result = parse_er_diagram(text)
    assert result.success
    assert result.schema.entity_names() == ["CUSTOMER"]


def test_parsing_is_idempotent(shop_diagram):
    """Parsing the same text twice yields identical schemas."""
    first = parse_er_diagram(shop_diagram).schema
    second = parse_er_diagram(shop_diagram).schema
    assert first == second
    assert first.entity_names() == ["CUSTOMER", "ORDER", "LINE-ITEM", "PRODUCT"]


def test_escaped_quoted_names():
    """Escaped \\"Name\\" forms parse in blocks and relationships."""
    text = r'''erDiagram
    \"Line Item\" {
        int line_id PK
    }
    \"Line Item\" }|..|| \"Sales Order\" : contains
'''
    result = parse_er_diagram(text)
    assert result.success
    schema = result.schema
    assert schema.entity_names() == ["Line Item", "Sales Order"]
    assert len(schema.get_entity("Line Item").attributes) == 1
    rel = schema.relationships[0]
    assert rel.first_entity == "Line Item"
    assert rel.second_entity == "Sales Order"
    assert rel.identifying is False


def test_label_loses_one_quote_per_side():
    """A label keeps its text with at most one wrapping quote removed each side."""
    for label_text in ['"places"', "places", '"places', 'places"']:
        result = parse_er_diagram(f"erDiagram\n    A ||--o{{ B : {label_text}\n")
        assert result.schema.relationships[0].label == "places"

    result = parse_er_diagram('erDiagram\n    A ||--o{ B : ""places""\n')
    assert result.schema.relationships == []
