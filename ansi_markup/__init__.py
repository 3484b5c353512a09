"""
Tagged MUD text for telnet clients.

Parses text carrying nestable color and html tags and renders it as plain
text, ANSI color (16 or 256 colors) or MXP markup.
"""
from ansi_markup.colors import validate_color_codes
from ansi_markup.encoder import encode
from ansi_markup.errors import (
    MarkupError, MalformedTag, UnbalancedTag, UnclosedTag, InvalidColorSpec, InvalidLegacyCode,
)
from ansi_markup.legacy import from_codes
from ansi_markup.models import ColorDirective, Document, MarkupNode, TAG_START, TAG_END
from ansi_markup.parser import from_markup, parse
from ansi_markup.render import render

__all__ = [
    "ColorDirective", "Document", "MarkupNode", "TAG_START", "TAG_END",
    "MarkupError", "MalformedTag", "UnbalancedTag", "UnclosedTag", "InvalidColorSpec", "InvalidLegacyCode",
    "parse", "from_markup", "from_codes", "render", "encode", "validate_color_codes",
]
