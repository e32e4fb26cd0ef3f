"""erd2sql: Mermaid ER diagrams to PostgreSQL DDL and CRUD queries."""

__version__ = "0.1.0"
