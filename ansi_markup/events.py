"""
Open/close/text event stream over a Document.

Both the renderer and the encoder walk a document the same way: compare the
ownership chain of each character with the previous one, close what is no
longer covered and open what newly is. Empty-span nodes own no characters, so
they are anchored at their start offset and opened/closed in id order there.
"""
from typing import Dict, Iterator, List, Optional, Tuple

from ansi_markup.models import Document, MarkupNode

EVENT_OPEN = "open"
EVENT_CLOSE = "close"
EVENT_TEXT = "text"

Event = Tuple[str, object]


def _transition(document: Document, current: List[int], target: List[int]) -> Iterator[Event]:
    """Close nodes in `current` and open nodes in `target` outside their common prefix."""
    common = 0
    while common < len(current) and common < len(target) and current[common] == target[common]:
        common += 1
    for node_id in reversed(current[common:]):
        yield EVENT_CLOSE, document.nodes[node_id]
    for node_id in target[common:]:
        yield EVENT_OPEN, document.nodes[node_id]


def _empty_nodes(document: Document) -> Dict[int, List[MarkupNode]]:
    """Outermost empty-span nodes, grouped by the offset they sit at."""
    anchored: Dict[int, List[MarkupNode]] = {}
    for node in document.nodes:
        if not node.is_empty:
            continue
        parent = document.nodes[node.parent] if node.parent is not None else None
        if parent is not None and parent.is_empty:
            continue
        anchored.setdefault(node.start, []).append(node)
    return anchored


def _visit_empty(document: Document, node: MarkupNode, current: List[int],
                 children: Dict[int, List[MarkupNode]]) -> Iterator[Event]:
    target = document.chain(node.id)
    yield from _transition(document, current, target)
    current[:] = target
    for child in children.get(node.id, []):
        yield from _visit_empty(document, child, current, children)


def iter_events(document: Document) -> Iterator[Event]:
    """
    Yield ("open", node), ("close", node) and ("text", str) events in
    document order. Opens are outermost first, closes innermost first.
    """
    anchored = _empty_nodes(document)
    children: Dict[int, List[MarkupNode]] = {}
    for node in document.nodes:
        if node.is_empty and node.parent is not None and document.nodes[node.parent].is_empty:
            children.setdefault(node.parent, []).append(node)

    current: List[int] = []
    text = document.plain_text
    run_start = 0

    for pos in range(len(text) + 1):
        owner: Optional[int] = document.ownership[pos] if pos < len(text) else None
        target = document.chain(owner)
        empties = anchored.get(pos, [])
        if target == current and not empties:
            continue

        if pos > run_start:
            yield EVENT_TEXT, text[run_start:pos]
            run_start = pos

        for node in empties:
            yield from _visit_empty(document, node, current, children)
        yield from _transition(document, current, target)
        current = target

    if run_start < len(text):
        yield EVENT_TEXT, text[run_start:]
