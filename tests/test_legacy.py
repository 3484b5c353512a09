import pytest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from ansi_markup.errors import InvalidLegacyCode
from ansi_markup.models import ColorDirective, Document, MODE_NUMBER, ATTR_BOLD
from ansi_markup.parser import parse
from ansi_markup.legacy import from_codes


def test_runs_become_flat_nodes():
    doc = from_codes("hello", "rrnnb")
    assert doc.plain_text == "hello"
    assert doc.ownership == [0, 0, None, None, 1]
    assert [n.raw_open_text for n in doc.nodes] == [" red", " blue"]
    assert all(n.parent is None for n in doc.nodes)
    assert doc.resolved

def test_code_change_starts_new_node():
    doc = from_codes("abcd", "rrbb")
    assert doc.ownership == [0, 0, 1, 1]
    assert [(n.start, n.end) for n in doc.nodes] == [(0, 2), (2, 4)]

def test_default_codes_make_no_nodes():
    doc = from_codes("abcd", "nn  ")
    assert doc.nodes == []
    assert doc.ownership == [None] * 4

def test_background_and_attribute_codes():
    doc = from_codes("ab", "Rh")
    assert doc.nodes[0].background_directive == ColorDirective(MODE_NUMBER, 1)
    assert doc.nodes[1].attribute_on_mask == ATTR_BOLD

def test_render():
    doc = from_codes("hello", "rrnnb")
    assert doc.render(True, False, False) == "\x1b[31mhe\x1b[39mll\x1b[34mo\x1b[39m"

def test_matches_tagged_equivalent():
    legacy = from_codes("hello", "rrnnb")
    tagged = parse(legacy.encode())
    assert tagged.plain_text == legacy.plain_text
    assert tagged.ownership == legacy.ownership

def test_classmethod_entry_point():
    doc = Document.from_codes("hi", "gg")
    assert doc.ownership == [0, 0]

def test_unknown_code():
    with pytest.raises(InvalidLegacyCode):
        from_codes("abc", "rqr")

def test_length_mismatch():
    with pytest.raises(InvalidLegacyCode):
        from_codes("abc", "rr")
