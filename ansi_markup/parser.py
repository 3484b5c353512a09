"""
Tag Parser.

Single left-to-right pass over tagged source text. Tags look like

    \\x02c bold red\\x03 ... \\x02c/\\x03     (color)
    \\x02p b\\x03 ... \\x02p/\\x03            (html)

The scanner never looks further ahead than the current character.
"""
import logging
from typing import List, Optional

from ansi_markup.errors import MalformedTag, UnbalancedTag, UnclosedTag
from ansi_markup.models import Document, MarkupNode, MARKUP_LETTERS, TAG_START, TAG_END
from ansi_markup.resolver import resolve_document

logger = logging.getLogger(__name__)

# Scanner states
STATE_OUTSIDE = "outside"
STATE_KIND = "kind"
STATE_CLOSE_MARKER = "close_marker"
STATE_OPEN_BODY = "open_body"
STATE_CLOSE_BODY = "close_body"


def _fail(error_cls, message: str):
    logger.debug("Tag parse failed: %s", message)
    raise error_cls(message)


def parse(src: str) -> Document:
    """
    Build an unresolved Document from tagged source text.

    Args:
        src: Source text containing TAG_START/TAG_END delimited tags

    Returns:
        Document: plain text, node arena and ownership map

    Raises:
        MalformedTag: unknown kind letter, or a tag start inside a tag
        UnbalancedTag: a closing tag with no open node
        UnclosedTag: input ends with a node still open
    """
    nodes: List[MarkupNode] = []
    plain: List[str] = []
    ownership: List[Optional[int]] = []
    stack: List[int] = []

    state = STATE_OUTSIDE
    kind = None
    current: Optional[MarkupNode] = None

    for i, c in enumerate(src):
        if state == STATE_OUTSIDE:
            if c == TAG_START:
                state = STATE_KIND
            else:
                plain.append(c)
                ownership.append(stack[-1] if stack else None)

        elif state == STATE_KIND:
            kind = MARKUP_LETTERS.get(c)
            if kind is None:
                _fail(MalformedTag, f"Unknown tag kind {c!r} at offset {i}")
            state = STATE_CLOSE_MARKER

        elif state == STATE_CLOSE_MARKER:
            if c == "/":
                if not stack:
                    _fail(UnbalancedTag, f"Closing tag at offset {i} with no open tag")
                current = nodes[stack[-1]]
                state = STATE_CLOSE_BODY
                continue

            current = MarkupNode(len(nodes), stack[-1] if stack else None, kind, start=len(plain))
            nodes.append(current)
            stack.append(current.id)
            if c == TAG_END:
                state = STATE_OUTSIDE
            elif c == TAG_START:
                _fail(MalformedTag, f"Tag start inside tag at offset {i}")
            else:
                current.raw_open_text += c
                state = STATE_OPEN_BODY

        elif state == STATE_OPEN_BODY:
            if c == TAG_END:
                state = STATE_OUTSIDE
            elif c == TAG_START:
                _fail(MalformedTag, f"Tag start inside tag at offset {i}")
            else:
                current.raw_open_text += c

        elif state == STATE_CLOSE_BODY:
            if c == TAG_END:
                current.end = len(plain)
                stack.pop()
                state = STATE_OUTSIDE
            elif c == TAG_START:
                _fail(MalformedTag, f"Tag start inside tag at offset {i}")
            else:
                current.raw_close_text += c

    if stack:
        _fail(UnclosedTag, f"{len(stack)} tag(s) still open at end of input")
    if state != STATE_OUTSIDE:
        _fail(MalformedTag, "Input ends inside a tag")

    return Document("".join(plain), nodes, ownership)


def from_markup(src: str) -> Document:
    """Parse tagged source text and resolve every node."""
    document = parse(src)
    resolve_document(document)
    return document
