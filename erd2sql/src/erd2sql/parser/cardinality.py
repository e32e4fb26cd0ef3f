"""Cardinality symbol decoding for relationship connector ends."""

import re
from typing import Dict
from erd2sql.ir.diagram import Cardinality
from erd2sql.config.logging import get_logger

logger = get_logger(__name__)

# Both orientations map to the same value: a connector end reads the same
# whether it sits on the left or right of the line.
CARDINALITY_SYMBOLS: Dict[str, Cardinality] = {
    "|o": "ZERO_OR_ONE",
    "o|": "ZERO_OR_ONE",
    "||": "EXACTLY_ONE",
    "}o": "ZERO_OR_MORE",
    "o{": "ZERO_OR_MORE",
    "{o": "ZERO_OR_MORE",
    "}|": "ONE_OR_MORE",
    "|{": "ONE_OR_MORE",
    "{|": "ONE_OR_MORE",
}

DEFAULT_CARDINALITY: Cardinality = "EXACTLY_ONE"


def parse_cardinality(symbol: str) -> Cardinality:
    """
    Decode a connector-end symbol into a Cardinality.

    Whitespace inside the symbol is ignored. Unknown symbols decode to
    EXACTLY_ONE rather than raising.

    Args:
        symbol: Two-character connector end, e.g. "|o" or "o{"

    Returns:
        Cardinality value
    """
    normalized = re.sub(r"\s", "", symbol)
    cardinality = CARDINALITY_SYMBOLS.get(normalized)
    if cardinality is None:
        logger.debug(f"Unknown cardinality symbol {symbol!r}, using {DEFAULT_CARDINALITY}")
        return DEFAULT_CARDINALITY
    return cardinality
