"""
Renderer.

Produces the telnet rendering of a Document for a given capability set:
ANSI SGR color codes (16-color or xterm 256-color) and MXP tags.
"""
import copy
import logging
from typing import Callable, List, Optional, Set, Tuple

from ansi_markup.events import iter_events, EVENT_OPEN, EVENT_TEXT
from ansi_markup.models import (
    ColorDirective, Document, MarkupNode,
    MARKUP_COLOR, MARKUP_HTML, GROUND_FG, GROUND_BG,
    MODE_NONE, MODE_CLEAR, MODE_NUMBER, MODE_NAME,
    ATTR_BOLD, ATTR_UNDERLINE, ATTR_BLINK, ATTR_REVERSE, ATTR_ITALIC, ATTR_STRIKE,
    ALL_ATTRIBUTES,
)
from ansi_markup.palette import index_to_rgb, lookup_named_color, nearest_ansi, nearest_256
from ansi_markup.resolver import resolve_document

logger = logging.getLogger(__name__)

Palette = Callable[[str], Optional[Tuple[int, int, int]]]

ESC = "\x1b["
RESET = "0"

ATTRIBUTE_ON = {
    ATTR_BOLD: "1",
    ATTR_ITALIC: "3",
    ATTR_UNDERLINE: "4",
    ATTR_BLINK: "5",
    ATTR_REVERSE: "7",
    ATTR_STRIKE: "9",
}

ATTRIBUTE_OFF = {
    ATTR_BOLD: "22",
    ATTR_ITALIC: "23",
    ATTR_UNDERLINE: "24",
    ATTR_BLINK: "25",
    ATTR_REVERSE: "27",
    ATTR_STRIKE: "29",
}

DEFAULT_FG = "39"
DEFAULT_BG = "49"


def sgr(codes: List[str]) -> str:
    """Join SGR parameters into one escape sequence ("" when there are none)."""
    if not codes:
        return ""
    return f"{ESC}{';'.join(codes)}m"


def _basic_code(index: int, ground: str) -> str:
    base = 40 if ground == GROUND_BG else 30
    if index < 8:
        return str(base + index)
    return str(base + 60 + index - 8)


def directive_code(directive: ColorDirective, ground: str, xterm: bool,
                   palette: Optional[Palette] = None) -> Optional[str]:
    """
    SGR parameter string for one color directive.

    Args:
        directive: Resolved foreground or background directive
        ground: GROUND_FG or GROUND_BG (unset is treated as foreground)
        xterm: Use the 256-color code set instead of the 16-color one
        palette: Named color lookup, defaults to the built-in palette

    Returns:
        str: e.g. "31", "38;5;196", "0"; None when the directive is empty
    """
    if directive.mode == MODE_NONE:
        return None
    if directive.mode == MODE_CLEAR:
        return RESET

    if directive.mode == MODE_NUMBER:
        index = directive.value
        if xterm:
            return f"{48 if ground == GROUND_BG else 38};5;{index}"
        if index >= 16:
            index = nearest_ansi(index_to_rgb(index))
        return _basic_code(index, ground)

    if directive.mode == MODE_NAME:
        rgb = (palette or lookup_named_color)(directive.value)
        if rgb is None:
            logger.warning("Unknown color name %r, falling back to reset", directive.value)
            return RESET
    else:
        rgb = directive.rgb()
        if rgb is None:
            return None

    if xterm:
        return f"{48 if ground == GROUND_BG else 38};5;{nearest_256(rgb)}"
    return _basic_code(nearest_ansi(rgb), ground)


def color_sequence(directive: ColorDirective, ground: str, xterm: bool,
                   palette: Optional[Palette] = None) -> str:
    """Full escape sequence for one color directive."""
    code = directive_code(directive, ground, xterm, palette)
    return sgr([code]) if code else ""


def _restorable(code: Optional[str]) -> Optional[str]:
    return None if code == RESET else code


class _Renderer:
    """Walk state for one render call: the output buffer and the stack of open nodes."""

    def __init__(self, ansi: bool, xterm: bool, mxp: bool, palette: Palette):
        self.ansi = ansi
        self.xterm = xterm
        self.mxp = mxp
        self.palette = palette
        self.stack: List[MarkupNode] = []
        self.output: List[str] = []
        # Nodes whose open sequence fell back to a hard reset
        self.reset_nodes: Set[int] = set()

    def _fg(self, node: MarkupNode) -> Optional[str]:
        return directive_code(node.foreground_directive, GROUND_FG, self.xterm, self.palette)

    def _bg(self, node: MarkupNode) -> Optional[str]:
        return directive_code(node.background_directive, GROUND_BG, self.xterm, self.palette)

    def active_state(self) -> Tuple[int, Optional[str], Optional[str]]:
        """Attributes, foreground and background still in force from open color nodes."""
        mask = 0
        fg = None
        bg = None
        for node in reversed(self.stack):
            if node.kind != MARKUP_COLOR:
                continue
            if node.forces_reset:
                break
            mask |= node.attribute_on_mask
            if fg is None:
                fg = self._fg(node)
            if bg is None:
                bg = self._bg(node)
            if node.id in self.reset_nodes:
                break
        return mask, _restorable(fg), _restorable(bg)

    def open_color(self, node: MarkupNode) -> str:
        if node.forces_reset:
            return ""
        codes = [ATTRIBUTE_ON[bit] for bit in ALL_ATTRIBUTES if node.attribute_on_mask & bit]
        for code in (self._fg(node), self._bg(node)):
            if code:
                codes.append(code)
        if RESET in codes:
            self.reset_nodes.add(node.id)
        return sgr(codes)

    def close_color(self, node: MarkupNode) -> str:
        mask, fg, bg = self.active_state()

        if node.forces_reset or node.id in self.reset_nodes:
            codes = [RESET]
            codes.extend(ATTRIBUTE_ON[bit] for bit in ALL_ATTRIBUTES if mask & bit)
            codes.extend(code for code in (fg, bg) if code)
            return sgr(codes)

        codes = [ATTRIBUTE_OFF[bit] for bit in ALL_ATTRIBUTES
                 if node.attribute_off_mask & bit and not mask & bit]
        if not node.foreground_directive.is_none:
            codes.append(fg or DEFAULT_FG)
        if not node.background_directive.is_none:
            codes.append(bg or DEFAULT_BG)
        return sgr(codes)

    def open(self, node: MarkupNode):
        self.stack.append(node)
        if node.kind == MARKUP_HTML and self.mxp:
            self.output.append(node.open_markup)
        elif node.kind == MARKUP_COLOR and self.ansi:
            self.output.append(self.open_color(node))

    def close(self, node: MarkupNode):
        self.stack.pop()
        if node.kind == MARKUP_HTML and self.mxp:
            self.output.append(node.close_markup)
        elif node.kind == MARKUP_COLOR and self.ansi:
            self.output.append(self.close_color(node))


def render(document: Document, ansi: bool = False, xterm: bool = False, mxp: bool = False,
           palette: Optional[Palette] = None) -> str:
    """
    Render a document for a telnet client.

    Args:
        document: Parsed document
        ansi: Emit color tags as ANSI SGR sequences
        xterm: Use 256-color codes (only meaningful with ansi)
        mxp: Emit Html tags as MXP markup

    Returns:
        str: Rendered text; the plain text when ansi and mxp are both off
    """
    if not ansi and not mxp:
        return document.plain_text

    if not document.resolved:
        # Rendering never writes to the caller's document
        document = resolve_document(copy.deepcopy(document))

    renderer = _Renderer(ansi, xterm, mxp, palette or lookup_named_color)
    for event, payload in iter_events(document):
        if event == EVENT_TEXT:
            renderer.output.append(payload)
        elif event == EVENT_OPEN:
            renderer.open(payload)
        else:
            renderer.close(payload)
    return "".join(renderer.output)
