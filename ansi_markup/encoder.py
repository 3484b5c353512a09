"""
Canonical Encoder.

Writes a Document back out as tagged source text that parse() accepts,
reproducing the node nesting exactly.
"""
from ansi_markup.events import iter_events, EVENT_OPEN, EVENT_TEXT
from ansi_markup.models import Document, MarkupNode, KIND_LETTERS, TAG_START, TAG_END


def open_tag(node: MarkupNode) -> str:
    return f"{TAG_START}{KIND_LETTERS[node.kind]}{node.raw_open_text}{TAG_END}"


def close_tag(node: MarkupNode) -> str:
    return f"{TAG_START}{KIND_LETTERS[node.kind]}/{node.raw_close_text}{TAG_END}"


def encode(document: Document) -> str:
    """Reconstruct tagged source text from plain text, nodes and ownership."""
    parts = []
    for event, payload in iter_events(document):
        if event == EVENT_TEXT:
            parts.append(payload)
        elif event == EVENT_OPEN:
            parts.append(open_tag(payload))
        else:
            parts.append(close_tag(payload))
    return "".join(parts)
