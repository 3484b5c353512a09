"""
Legacy ingestion from a fixed-width color code stream.

Older stored text keeps its colors in a second string of the same length,
one code character per text character. Each run of identical codes becomes
one flat Color node.
"""
import logging
from typing import Dict, List, Optional

from ansi_markup.errors import InvalidLegacyCode
from ansi_markup.models import Document, MarkupNode, MARKUP_COLOR
from ansi_markup.resolver import resolve_document

logger = logging.getLogger(__name__)

DEFAULT_CODES = {"n", " "}

# Code character -> color spec
LEGACY_CODES: Dict[str, str] = {
    "x": "black",
    "r": "red",
    "g": "green",
    "y": "yellow",
    "b": "blue",
    "m": "magenta",
    "c": "cyan",
    "w": "white",
    "X": "/ black",
    "R": "/ red",
    "G": "/ green",
    "Y": "/ yellow",
    "B": "/ blue",
    "M": "/ magenta",
    "C": "/ cyan",
    "W": "/ white",
    "h": "bold",
    "u": "underline",
    "f": "blink",
    "i": "reverse",
}


def from_codes(text: str, codes: str) -> Document:
    """
    Build a resolved Document from plain text and its legacy code stream.

    Args:
        text: Plain text
        codes: One code character per character of text

    Returns:
        Document: flat (unnested) Color nodes, one per run of equal codes

    Raises:
        InvalidLegacyCode: unknown code character, or length mismatch
    """
    if len(text) != len(codes):
        raise InvalidLegacyCode(f"Code stream length {len(codes)} does not match text length {len(text)}")

    nodes: List[MarkupNode] = []
    ownership: List[Optional[int]] = []
    current: Optional[MarkupNode] = None
    previous = None

    for i, code in enumerate(codes):
        if code not in DEFAULT_CODES and code not in LEGACY_CODES:
            logger.debug("Unknown legacy code %r at offset %d", code, i)
            raise InvalidLegacyCode(f"Unknown legacy code {code!r} at offset {i}")

        if code != previous:
            if current is not None:
                current.end = i
                current = None
            if code not in DEFAULT_CODES:
                current = MarkupNode(len(nodes), None, MARKUP_COLOR, start=i)
                current.raw_open_text = f" {LEGACY_CODES[code]}"
                nodes.append(current)
            previous = code

        ownership.append(current.id if current is not None else None)

    if current is not None:
        current.end = len(codes)

    document = Document(text, nodes, ownership)
    resolve_document(document)
    return document
