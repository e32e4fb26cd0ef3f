"""Mermaid ER diagram parsing."""

from .cardinality import parse_cardinality
from .mermaid import ParserState, parse_attribute, parse_er_diagram

__all__ = ["parse_cardinality", "ParserState", "parse_attribute", "parse_er_diagram"]
