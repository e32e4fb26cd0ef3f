"""Name normalization utilities for generated SQL identifiers."""

import re

_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_SEPARATORS = re.compile(r"[-\s]+")


def normalize_identifier(name: str) -> str:
    """
    Normalize a diagram name into a canonical SQL identifier.

    1. Insert an underscore at each lowercase-to-uppercase boundary
    2. Replace runs of hyphens/whitespace with a single underscore
    3. Lowercase

    The mapping is deterministic but not injective: ``OrderItem`` and
    ``order-item`` both become ``order_item``.

    Args:
        name: Entity or attribute name as written in the diagram

    Returns:
        Normalized identifier

    Examples:
        >>> normalize_identifier("OrderItem")
        'order_item'
        >>> normalize_identifier("line-item  detail")
        'line_item_detail'
        >>> normalize_identifier("CUSTOMER")
        'customer'
    """
    normalized = _CAMEL_BOUNDARY.sub(r"\1_\2", name)
    normalized = _SEPARATORS.sub("_", normalized)
    return normalized.lower()


def to_table_name(entity_name: str) -> str:
    """Table name for an entity."""
    return normalize_identifier(entity_name)


def to_column_name(attribute_name: str) -> str:
    """Column name for an attribute."""
    return normalize_identifier(attribute_name)


def clean_entity_name(name: str) -> str:
    """
    Strip wrapping quotes from a raw parsed name.

    Handles both ``"Name"`` and the escaped form ``\\"Name\\"`` used for
    names containing symbols.
    """
    if len(name) >= 4 and name.startswith('\\"') and name.endswith('\\"'):
        return name[2:-2]
    if len(name) >= 2 and name.startswith('"') and name.endswith('"'):
        return name[1:-1]
    return name
