"""
Markup Tree Model
Defines the parsed tag nodes, color directives and the Document that owns them.
"""
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

# Tag delimiters. Neither is valid in document text.
TAG_START = "\x02"
TAG_END = "\x03"

# Markup kinds
MARKUP_COLOR = "color"
MARKUP_HTML = "html"

MARKUP_LETTERS = {
    "c": MARKUP_COLOR,
    "C": MARKUP_COLOR,
    "p": MARKUP_HTML,
    "P": MARKUP_HTML,
}

# Canonical kind letter used when writing tags back out
KIND_LETTERS = {
    MARKUP_COLOR: "c",
    MARKUP_HTML: "p",
}

# Grounds
GROUND_UNSET = "unset"
GROUND_FG = "fg"
GROUND_BG = "bg"

# Color directive modes
MODE_NONE = "none"
MODE_CLEAR = "clear"
MODE_LETTERS = "letters"
MODE_NUMBER = "number"
MODE_RGB = "rgb"
MODE_HEX_SHORT = "hex_short"
MODE_HEX_LONG = "hex_long"
MODE_NAME = "name"

# Attribute bits
ATTR_BOLD = 1
ATTR_UNDERLINE = 2
ATTR_BLINK = 4
ATTR_REVERSE = 8
ATTR_ITALIC = 16
ATTR_STRIKE = 32

ALL_ATTRIBUTES = (ATTR_BOLD, ATTR_UNDERLINE, ATTR_BLINK, ATTR_REVERSE, ATTR_ITALIC, ATTR_STRIKE)


@dataclass(frozen=True)
class ColorDirective:
    """
    One color instruction.

    `value` depends on `mode`:
      none / clear -> None
      letters      -> tuple of words
      number       -> palette index 0-255
      rgb          -> (r, g, b), each 0-255
      hex_short    -> (r, g, b) nibbles, each 0-15
      hex_long     -> (r, g, b), each 0-255
      name         -> palette color name
    """
    mode: str = MODE_NONE
    value: Any = None

    @property
    def is_none(self) -> bool:
        return self.mode == MODE_NONE

    def rgb(self) -> Optional[Tuple[int, int, int]]:
        """RGB triplet for the literal color modes, None otherwise."""
        if self.mode in (MODE_RGB, MODE_HEX_LONG):
            return tuple(self.value)
        if self.mode == MODE_HEX_SHORT:
            return tuple(v * 17 for v in self.value)
        return None


NO_DIRECTIVE = ColorDirective(MODE_NONE)
CLEAR_ALL = ColorDirective(MODE_CLEAR)


class MarkupNode:
    """
    One parsed tag occurrence.

    Created by the parser when an opening tag is scanned, resolved exactly
    once afterwards, and read-only from then on.
    """
    def __init__(self, node_id: int, parent: Optional[int], kind: str, start: int = 0):
        self.id = node_id
        self.parent = parent
        self.kind = kind
        self.raw_open_text = ""
        self.raw_close_text = ""

        # Plain text offsets covered by this node: [start, end)
        self.start = start
        self.end = start

        # Html
        self.open_markup = ""
        self.close_markup = ""

        # Color
        self.attribute_on_mask = 0
        self.attribute_off_mask = 0
        self.foreground_directive = NO_DIRECTIVE
        self.background_directive = NO_DIRECTIVE
        self.forces_reset = False

        self.resolved = False

    @property
    def is_empty(self) -> bool:
        return self.end == self.start

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for debugging and test comparison."""
        return {
            "id": self.id,
            "parent": self.parent,
            "kind": self.kind,
            "raw_open_text": self.raw_open_text,
            "raw_close_text": self.raw_close_text,
            "start": self.start,
            "end": self.end,
        }

    def __repr__(self):
        return f"MarkupNode(id={self.id}, parent={self.parent}, kind={self.kind!r}, raw={self.raw_open_text!r})"


class Document:
    """
    A parsed string: plain text plus the arena of tag nodes and the
    per-character ownership map.

    ownership[i] is the id of the innermost node covering plain_text[i],
    or None when the character sits outside every tag.
    """
    def __init__(self, plain_text: str = "", nodes: Optional[List[MarkupNode]] = None,
                 ownership: Optional[List[Optional[int]]] = None):
        self.plain_text = plain_text
        self.nodes: List[MarkupNode] = nodes if nodes is not None else []
        self.ownership: List[Optional[int]] = ownership if ownership is not None else [None] * len(plain_text)
        self.resolved = False

    @classmethod
    def from_markup(cls, src: str) -> 'Document':
        """Parse tagged source text and resolve every node."""
        from ansi_markup.parser import from_markup
        return from_markup(src)

    @classmethod
    def from_codes(cls, text: str, codes: str) -> 'Document':
        """Build a document from plain text and a legacy per-character code stream."""
        from ansi_markup.legacy import from_codes
        return from_codes(text, codes)

    def chain(self, node_id: Optional[int]) -> List[int]:
        """Ancestor chain of a node, outermost first, ending with the node itself."""
        result = []
        while node_id is not None:
            result.append(node_id)
            node_id = self.nodes[node_id].parent
        result.reverse()
        return result

    def node(self, node_id: int) -> MarkupNode:
        return self.nodes[node_id]

    def render(self, ansi: bool = False, xterm: bool = False, mxp: bool = False,
               palette: Optional[Callable[[str], Optional[Tuple[int, int, int]]]] = None) -> str:
        from ansi_markup.render import render
        return render(self, ansi, xterm, mxp, palette=palette)

    def encode(self) -> str:
        from ansi_markup.encoder import encode
        return encode(self)

    def __str__(self):
        return self.plain_text

    def __len__(self):
        return len(self.plain_text)

    def __repr__(self):
        return f"Document({self.plain_text!r}, nodes={len(self.nodes)})"
