"""Typer CLI application."""

import json
from pathlib import Path
from typing import Optional

import typer

from erd2sql.config.logging import setup_logging
from erd2sql.errors import Erd2SqlError
from erd2sql.ir.diagram import DatabaseSchema
from erd2sql.ir.validators import validate_er_diagram
from erd2sql.parser.mermaid import parse_er_diagram
from erd2sql.sql.ddl import generate_schema_sql
from erd2sql.sql.query_builder import build_query_config, select_all
from erd2sql.tools.summary import (
    find_entity,
    format_relationship,
    format_schema,
    get_entity_details,
    list_entities,
    relationships_for,
)
from erd2sql.utils.diagram_io import load_diagram, save_schema_to_json

app = typer.Typer(help="erd2sql: Mermaid ER diagrams to PostgreSQL DDL and CRUD queries")

DIAGRAM_HELP = "Mermaid ER diagram file (defaults to MERMAID_DIAGRAM_PATH)"
URL_HELP = "Fetch the diagram from a URL instead of a file"


def _echo_json(data) -> None:
    typer.echo(json.dumps(data, indent=2))


def _fail(message: str) -> None:
    typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _read(diagram: Optional[Path], url: Optional[str]) -> str:
    try:
        return load_diagram(diagram, url)
    except Erd2SqlError as e:
        _fail(str(e))


def _parse(diagram: Optional[Path], url: Optional[str]) -> DatabaseSchema:
    """Parse the diagram, exiting with the parse errors if there are any."""
    result = parse_er_diagram(_read(diagram, url))
    if not result.success:
        for error in result.errors:
            typer.echo(error, err=True)
        _fail(f"{len(result.errors)} parse error(s)")
    return result.schema


@app.command()
def parse(
    diagram: Optional[Path] = typer.Argument(None, help=DIAGRAM_HELP),
    url: Optional[str] = typer.Option(None, "--url", help=URL_HELP),
    out: Optional[Path] = typer.Option(None, "--out", help="Write the schema JSON here"),
):
    """
    Parse a diagram and print its schema summary.

    Args:
        diagram: Path to the diagram file
        url: Diagram URL
        out: Optional output path for the raw schema JSON
    """
    setup_logging()
    schema = _parse(diagram, url)

    if out is not None:
        save_schema_to_json(schema, out)
        typer.echo(f"✓ Schema written to {out}")
        return

    _echo_json(format_schema(schema))


@app.command()
def validate(
    diagram: Optional[Path] = typer.Argument(None, help=DIAGRAM_HELP),
    url: Optional[str] = typer.Option(None, "--url", help=URL_HELP),
):
    """Validate a diagram for syntax errors and structural issues."""
    setup_logging()
    validation = validate_er_diagram(_read(diagram, url))

    if validation.valid:
        typer.echo("Diagram is valid.")
        return

    typer.echo(f"Found {len(validation.errors)} issue(s):")
    for error in validation.errors:
        typer.echo(f"  - {error}")
    raise typer.Exit(1)


@app.command()
def entities(
    diagram: Optional[Path] = typer.Argument(None, help=DIAGRAM_HELP),
    url: Optional[str] = typer.Option(None, "--url", help=URL_HELP),
):
    """List entities with their aliases and attribute counts."""
    setup_logging()
    schema = _parse(diagram, url)
    _echo_json({"entities": list_entities(schema), "total_count": len(schema.entities)})


@app.command()
def entity(
    name: str,
    diagram: Optional[Path] = typer.Argument(None, help=DIAGRAM_HELP),
    url: Optional[str] = typer.Option(None, "--url", help=URL_HELP),
):
    """Show one entity's attributes, keys and relationships."""
    setup_logging()
    schema = _parse(diagram, url)
    try:
        _echo_json(get_entity_details(schema, name))
    except Erd2SqlError as e:
        _fail(str(e))


@app.command()
def relationships(
    diagram: Optional[Path] = typer.Argument(None, help=DIAGRAM_HELP),
    url: Optional[str] = typer.Option(None, "--url", help=URL_HELP),
    entity_name: Optional[str] = typer.Option(None, "--entity", help="Only relationships involving this entity"),
):
    """List relationships with cardinality descriptions."""
    setup_logging()
    schema = _parse(diagram, url)
    rels = relationships_for(schema, entity_name)
    _echo_json({"relationships": [format_relationship(r) for r in rels], "total_count": len(rels)})


@app.command()
def sql(
    diagram: Optional[Path] = typer.Argument(None, help=DIAGRAM_HELP),
    url: Optional[str] = typer.Option(None, "--url", help=URL_HELP),
    out: Optional[Path] = typer.Option(None, "--out", help="Write the script here instead of stdout"),
    drop: bool = typer.Option(False, "--drop", help="Emit DROP TABLE statements instead"),
):
    """Generate PostgreSQL DDL from a diagram without executing it."""
    setup_logging()
    schema = _parse(diagram, url)
    schema_sql = generate_schema_sql(schema)
    script = "\n".join(schema_sql.drop_tables) if drop else schema_sql.full_script

    if out is None:
        typer.echo(script)
        return

    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(script + "\n", encoding="utf-8")
    typer.echo(f"✓ SQL written to {out}")


@app.command()
def queries(
    entity_name: str,
    diagram: Optional[Path] = typer.Argument(None, help=DIAGRAM_HELP),
    url: Optional[str] = typer.Option(None, "--url", help=URL_HELP),
    limit: Optional[int] = typer.Option(None, "--limit"),
    offset: Optional[int] = typer.Option(None, "--offset"),
    order_by: Optional[str] = typer.Option(None, "--order-by"),
    desc: bool = typer.Option(False, "--desc"),
):
    """Show the query configuration and list query for an entity."""
    setup_logging()
    schema = _parse(diagram, url)
    found = find_entity(schema, entity_name)
    if found is None:
        _fail(f'Entity "{entity_name}" not found')

    config = build_query_config(found)
    query = select_all(
        config,
        limit=limit,
        offset=offset,
        order_by=order_by,
        order_dir="DESC" if desc else "ASC",
    )

    _echo_json({"config": config.model_dump(), "select_all": query.model_dump()})


def main():
    """Entry point for CLI."""
    app()


if __name__ == "__main__":
    main()
