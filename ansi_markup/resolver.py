"""
Markup Resolver.

Second pass over the node arena: turns each node's raw tag text into what the
renderer needs. Html nodes get their open/close tag strings; Color nodes get
attribute bitmasks and foreground/background directives. Resolution depends
only on the node's own text, so it can be repeated safely.
"""
import logging

from ansi_markup.colors import validate_color_codes
from ansi_markup.errors import MalformedTag
from ansi_markup.models import (
    ColorDirective, Document, MarkupNode, NO_DIRECTIVE,
    MARKUP_COLOR, MARKUP_HTML, GROUND_BG,
    MODE_CLEAR, MODE_LETTERS, MODE_NUMBER, MODE_NAME,
    ATTR_BOLD, ATTR_UNDERLINE, ATTR_BLINK, ATTR_REVERSE, ATTR_ITALIC, ATTR_STRIKE,
)
from ansi_markup.palette import BASE_COLORS, COLOR_HEX_MAP

logger = logging.getLogger(__name__)

ATTRIBUTE_WORDS = {
    "bold": ATTR_BOLD,
    "hilite": ATTR_BOLD,
    "bright": ATTR_BOLD,
    "underline": ATTR_UNDERLINE,
    "blink": ATTR_BLINK,
    "flash": ATTR_BLINK,
    "reverse": ATTR_REVERSE,
    "inverse": ATTR_REVERSE,
    "italic": ATTR_ITALIC,
    "strike": ATTR_STRIKE,
    "strikethrough": ATTR_STRIKE,
}


def _word_directive(word: str):
    """Color directive for a color word, or None if the word is not a color."""
    if word in BASE_COLORS:
        return ColorDirective(MODE_NUMBER, BASE_COLORS.index(word))
    if word in COLOR_HEX_MAP:
        return ColorDirective(MODE_NAME, word)
    return None


def resolve_html(node: MarkupNode):
    text = node.raw_open_text.strip()
    if not text:
        raise MalformedTag(f"Html tag {node.id} has no tag name")
    tag_name = text.split(None, 1)[0]
    node.open_markup = f"<{text}>"
    node.close_markup = f"</{tag_name}>"


def resolve_color(node: MarkupNode):
    on_mask = 0
    foreground = NO_DIRECTIVE
    background = NO_DIRECTIVE
    forces_reset = False

    for directive, ground in validate_color_codes(node.raw_open_text):
        if directive.mode == MODE_CLEAR:
            forces_reset = True
            continue

        if directive.mode == MODE_LETTERS:
            for word in directive.value:
                if word in ATTRIBUTE_WORDS:
                    on_mask |= ATTRIBUTE_WORDS[word]
                    continue
                color = _word_directive(word)
                if color is None:
                    logger.debug("Ignoring unknown color word %r in tag %d", word, node.id)
                elif ground == GROUND_BG:
                    background = color
                else:
                    foreground = color
            continue

        if ground == GROUND_BG:
            background = directive
        else:
            foreground = directive

    node.forces_reset = forces_reset
    if forces_reset:
        node.attribute_on_mask = 0
        node.attribute_off_mask = 0
        node.foreground_directive = NO_DIRECTIVE
        node.background_directive = NO_DIRECTIVE
    else:
        node.attribute_on_mask = on_mask
        node.attribute_off_mask = on_mask
        node.foreground_directive = foreground
        node.background_directive = background


def resolve_node(node: MarkupNode) -> MarkupNode:
    """
    Resolve one node in place.

    Raises:
        InvalidColorSpec: if a Color node's text is not a valid color spec
        MalformedTag: if an Html node has no tag name
    """
    if node.kind == MARKUP_HTML:
        resolve_html(node)
    elif node.kind == MARKUP_COLOR:
        resolve_color(node)
    node.resolved = True
    return node


def resolve_document(document: Document) -> Document:
    """Resolve every node of a document. Any failure is fatal for the whole document."""
    for node in document.nodes:
        resolve_node(node)
    document.resolved = True
    return document
