"""Exception types raised at the edges of erd2sql (I/O, lookups, CLI)."""


class Erd2SqlError(Exception):
    """Base class for erd2sql errors."""

    pass


class DiagramSourceError(Erd2SqlError):
    """Raised when no diagram text can be obtained from the given sources."""

    pass


class EntityNotFoundError(Erd2SqlError):
    """Raised when an entity lookup by name fails."""

    def __init__(self, name: str, available: list):
        self.name = name
        self.available = available
        super().__init__(
            f'Entity "{name}" not found. Available entities: {", ".join(available)}'
        )
