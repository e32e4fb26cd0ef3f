"""Utilities for loading diagram text and saving/loading parsed schemas."""

from pathlib import Path
from typing import Optional
import requests
from pydantic import TypeAdapter, ValidationError
from erd2sql.config.settings import get_settings
from erd2sql.config.logging import get_logger
from erd2sql.errors import DiagramSourceError
from erd2sql.ir.diagram import DatabaseSchema

logger = get_logger(__name__)


def read_diagram_file(path: Path) -> str:
    """
    Read diagram text from a file.

    Raises:
        DiagramSourceError: If the file doesn't exist
    """
    path = Path(path)
    if not path.is_file():
        raise DiagramSourceError(f"Diagram file not found: {path}")
    return path.read_text(encoding="utf-8")


def fetch_diagram(url: str, timeout: Optional[float] = None) -> str:
    """
    Fetch diagram text over HTTP(S).

    Raises:
        DiagramSourceError: On connection errors or non-2xx responses
    """
    timeout = timeout if timeout is not None else get_settings().url_timeout
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.RequestException as e:
        raise DiagramSourceError(f"Failed to fetch diagram from {url}: {e}") from e
    return resp.text


def load_diagram(path: Optional[Path] = None, url: Optional[str] = None) -> str:
    """
    Resolve diagram text from the first available source.

    Order: explicit path, explicit URL, configured MERMAID_DIAGRAM_PATH,
    configured MERMAID_DIAGRAM_URL.

    Args:
        path: Optional diagram file
        url: Optional diagram URL

    Returns:
        Diagram text

    Raises:
        DiagramSourceError: If no source is given or configured, or the
            chosen source cannot be read
    """
    if path is not None:
        return read_diagram_file(path)
    if url:
        return fetch_diagram(url)

    settings = get_settings()
    if settings.mermaid_diagram_path:
        configured = Path(settings.mermaid_diagram_path)
        if configured.is_file():
            logger.debug(f"Loading diagram from configured path {configured}")
            return configured.read_text(encoding="utf-8")
        logger.warning(f"Configured diagram path does not exist: {configured}")
    if settings.mermaid_diagram_url:
        logger.debug(f"Fetching diagram from configured URL {settings.mermaid_diagram_url}")
        return fetch_diagram(settings.mermaid_diagram_url)

    raise DiagramSourceError(
        "No diagram provided and no diagram source configured. "
        "Pass a diagram file or set MERMAID_DIAGRAM_PATH or MERMAID_DIAGRAM_URL."
    )


def save_schema_to_json(schema: DatabaseSchema, path: Path) -> None:
    """
    Save a DatabaseSchema to a JSON file.

    Note:
        Creates parent directories if they don't exist.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(schema.model_dump_json(indent=2), encoding="utf-8")


def load_schema_from_json(path: Path) -> DatabaseSchema:
    """
    Load a DatabaseSchema from a JSON file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the file is empty or not a valid schema
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Schema file not found: {path}")

    content = path.read_text(encoding="utf-8").strip()
    if not content:
        raise ValueError(f"Schema file is empty: {path}")

    try:
        return TypeAdapter(DatabaseSchema).validate_json(content)
    except ValidationError as e:
        raise ValueError(f"Failed to load schema from {path}: {e}") from e
