"""Schema model for entity-relationship diagrams."""

from dataclasses import dataclass, field
from typing import Dict, List, Literal, Optional
from pydantic import BaseModel, Field

Cardinality = Literal[
    "ZERO_OR_ONE",
    "EXACTLY_ONE",
    "ZERO_OR_MORE",
    "ONE_OR_MORE",
]

AttributeKey = Literal["PK", "FK", "UK"]

CARDINALITY_DESCRIPTIONS: Dict[str, str] = {
    "ZERO_OR_ONE": "zero or one",
    "EXACTLY_ONE": "exactly one",
    "ZERO_OR_MORE": "zero or more",
    "ONE_OR_MORE": "one or more",
}


class Attribute(BaseModel):
    """A typed field of an entity."""

    name: str
    type: str  # raw diagram token, e.g. "varchar(100)" or "int[]"
    keys: List[AttributeKey] = Field(default_factory=list)
    comment: Optional[str] = None

    @property
    def is_primary_key(self) -> bool:
        return "PK" in self.keys

    @property
    def is_foreign_key(self) -> bool:
        return "FK" in self.keys

    @property
    def is_unique(self) -> bool:
        return "UK" in self.keys


class Entity(BaseModel):
    """An entity in the diagram; becomes one table."""

    name: str
    alias: Optional[str] = None
    attributes: List[Attribute] = Field(default_factory=list)

    def primary_key_attributes(self) -> List[Attribute]:
        return [a for a in self.attributes if a.is_primary_key]

    @property
    def primary_keys(self) -> List[str]:
        return [a.name for a in self.attributes if a.is_primary_key]

    @property
    def foreign_keys(self) -> List[str]:
        return [a.name for a in self.attributes if a.is_foreign_key]


class Relationship(BaseModel):
    """A relationship between two entities, referenced by name."""

    first_entity: str
    second_entity: str
    first_cardinality: Cardinality
    second_cardinality: Cardinality
    identifying: bool  # solid connector
    label: str


class DatabaseSchema(BaseModel):
    """Entities and relationships parsed from one diagram."""

    entities: List[Entity] = Field(default_factory=list)
    relationships: List[Relationship] = Field(default_factory=list)

    def entity_names(self) -> List[str]:
        return [e.name for e in self.entities]

    def get_entity(self, name: str) -> Optional[Entity]:
        """Return the first entity whose name matches exactly."""
        for entity in self.entities:
            if entity.name == name:
                return entity
        return None


@dataclass
class ParseResult:
    """Outcome of parsing a diagram.

    ``schema`` is populated even when ``success`` is False so callers can
    work with a best-effort partial result.
    """

    success: bool
    schema: Optional[DatabaseSchema] = None
    errors: Optional[List[str]] = None


@dataclass
class ValidationResult:
    """Outcome of validating a diagram."""

    valid: bool
    errors: List[str] = field(default_factory=list)
