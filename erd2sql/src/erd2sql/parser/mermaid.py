"""Mermaid ER diagram parser.

Single pass over the diagram lines with three states: waiting for the
``erDiagram`` header, scanning top-level declarations, and collecting the
attributes of an open entity block. Unparseable attribute lines are recorded
as errors and parsing continues, so a partial schema is always returned.
"""

import re
from enum import Enum
from typing import Dict, List, Optional
from erd2sql.ir.diagram import (
    Attribute,
    AttributeKey,
    DatabaseSchema,
    Entity,
    ParseResult,
    Relationship,
)
from erd2sql.parser.cardinality import CARDINALITY_SYMBOLS, parse_cardinality
from erd2sql.utils.normalization import clean_entity_name
from erd2sql.config.logging import get_logger

logger = get_logger(__name__)

VALID_KEYS = ("PK", "FK", "UK")

_NAME = r'(?:[a-zA-Z_][a-zA-Z0-9_-]*|\\"[^"]+\\"|"[^"]+")'
_ALIAS = r'(?:\s*\[([^\]]+)\])?'
_CARD = "|".join(re.escape(s) for s in CARDINALITY_SYMBOLS)
_TYPE = r"[a-zA-Z][a-zA-Z0-9_-]*(?:\(\s*\w+(?:\s*,\s*\w+)*\s*\))?(?:\[\])?"
_KEY = r"(?i:PK|FK|UK)"

HEADER = re.compile(r"^\s*erDiagram\s*$", re.IGNORECASE)
DIRECTION = re.compile(r"^\s*direction\s+(TB|BT|LR|RL)\s*$", re.IGNORECASE)
COMMENT = re.compile(r"^\s*%%")
ENTITY_BLOCK_START = re.compile(rf"^\s*({_NAME}){_ALIAS}\s*\{{\s*$")
ENTITY_BLOCK_END = re.compile(r"^\s*\}\s*$")
ATTRIBUTE = re.compile(
    rf"^\s*({_TYPE})\s+(\*?[a-zA-Z_][a-zA-Z0-9_-]*)"
    rf"(?:\s+({_KEY}(?:\s*,\s*{_KEY})*))?"
    r'(?:\s+"([^"]*)")?\s*$'
)
RELATIONSHIP = re.compile(
    rf"^\s*({_NAME})\s*({_CARD})(--|\.\.)({_CARD})\s*({_NAME})"
    r'\s*:\s*"?([^"]+)"?\s*$'
)
STANDALONE_ENTITY = re.compile(rf"^\s*({_NAME}){_ALIAS}\s*$")


class ParserState(Enum):
    """Where the parser is within the diagram."""

    SEEK_HEADER = "seek_header"
    TOP_LEVEL = "top_level"
    IN_ENTITY_BLOCK = "in_entity_block"


def parse_attribute_keys(key_string: Optional[str]) -> List[AttributeKey]:
    """Parse a key list such as ``"PK, FK"``; unknown tokens are dropped."""
    if not key_string:
        return []
    keys: List[AttributeKey] = []
    for part in key_string.split(","):
        key = part.strip().upper()
        if key in VALID_KEYS and key not in keys:
            keys.append(key)
    return keys


def parse_attribute(line: str) -> Optional[Attribute]:
    """
    Parse one attribute line of an entity block.

    A name prefixed with ``*`` marks an implicit primary key: the marker is
    removed and PK is put first in the key list.

    Args:
        line: Trimmed attribute line, e.g. ``string email UK "login"``

    Returns:
        Attribute, or None if the line does not match the attribute syntax
    """
    match = ATTRIBUTE.match(line)
    if not match:
        return None

    attr_type, name, key_string, comment = match.groups()
    keys = parse_attribute_keys(key_string)
    if name.startswith("*"):
        name = name[1:]
        if "PK" not in keys:
            keys.insert(0, "PK")

    return Attribute(name=name, type=attr_type, keys=keys, comment=comment)


def _ensure_entity(entities: Dict[str, Entity], name: str, alias: Optional[str] = None) -> None:
    # Never replaces an existing (possibly richer) definition.
    if name not in entities:
        entities[name] = Entity(name=name, alias=alias)


def parse_er_diagram(text: str) -> ParseResult:
    """
    Parse Mermaid ER diagram text into a DatabaseSchema.

    Args:
        text: Diagram source

    Returns:
        ParseResult; ``success`` is True iff no errors were recorded. The
        schema is returned in both cases.
    """
    entities: Dict[str, Entity] = {}
    relationships: List[Relationship] = []
    errors: List[str] = []

    state = ParserState.SEEK_HEADER
    current: Optional[Entity] = None

    for line_number, raw_line in enumerate(text.split("\n"), start=1):
        line = raw_line.strip()

        if not line or COMMENT.match(line):
            continue

        if HEADER.match(line):
            if state is ParserState.SEEK_HEADER:
                state = ParserState.TOP_LEVEL
            continue

        if state is ParserState.SEEK_HEADER:
            continue

        if DIRECTION.match(line):
            continue

        if ENTITY_BLOCK_END.match(line):
            if current is not None:
                entities[current.name] = current
                current = None
            state = ParserState.TOP_LEVEL
            continue

        if state is ParserState.IN_ENTITY_BLOCK:
            attribute = parse_attribute(line)
            if attribute is None:
                errors.append(f'Line {line_number}: Unable to parse attribute: "{line}"')
            else:
                current.attributes.append(attribute)
            continue

        block_match = ENTITY_BLOCK_START.match(line)
        if block_match:
            name, alias = block_match.groups()
            current = Entity(
                name=clean_entity_name(name),
                alias=clean_entity_name(alias.strip()) if alias else None,
            )
            state = ParserState.IN_ENTITY_BLOCK
            continue

        rel_match = RELATIONSHIP.match(line)
        if rel_match:
            first, left_card, connector, right_card, second, label = rel_match.groups()
            first_name = clean_entity_name(first)
            second_name = clean_entity_name(second)
            _ensure_entity(entities, first_name)
            _ensure_entity(entities, second_name)
            relationships.append(
                Relationship(
                    first_entity=first_name,
                    second_entity=second_name,
                    first_cardinality=parse_cardinality(left_card),
                    second_cardinality=parse_cardinality(right_card),
                    identifying=connector == "--",
                    label=label.strip(),
                )
            )
            continue

        standalone_match = STANDALONE_ENTITY.match(line)
        if standalone_match:
            name, alias = standalone_match.groups()
            _ensure_entity(
                entities,
                clean_entity_name(name),
                clean_entity_name(alias.strip()) if alias else None,
            )
            continue

        # Unrecognized lines may be valid Mermaid we don't model yet
        logger.debug(f"Line {line_number}: ignoring unrecognized line {line!r}")

    # Unterminated block at end of input is kept
    if current is not None:
        entities[current.name] = current

    schema = DatabaseSchema(entities=list(entities.values()), relationships=relationships)
    logger.debug(
        f"Parsed {len(schema.entities)} entities, {len(relationships)} relationships, "
        f"{len(errors)} errors"
    )

    return ParseResult(
        success=not errors,
        schema=schema,
        errors=errors or None,
    )
