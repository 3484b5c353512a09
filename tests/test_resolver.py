"""
Tests for resolving parsed tags into renderable form.
"""
import unittest
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from ansi_markup.errors import InvalidColorSpec, MalformedTag
from ansi_markup.models import (
    ColorDirective, NO_DIRECTIVE, TAG_START as S, TAG_END as E,
    MODE_NUMBER, MODE_RGB, MODE_NAME,
    ATTR_BOLD, ATTR_UNDERLINE, ATTR_ITALIC, ATTR_REVERSE,
)
from ansi_markup.parser import parse, from_markup
from ansi_markup.resolver import resolve_node, resolve_document


def color_node(spec):
    return from_markup(f"{S}c {spec}{E}x{S}c/{E}").nodes[0]


def html_node(body):
    return from_markup(f"{S}p {body}{E}x{S}p/{E}").nodes[0]


class TestColorResolution(unittest.TestCase):
    def test_bold_red(self):
        node = color_node("bold red")
        self.assertTrue(node.attribute_on_mask & ATTR_BOLD)
        self.assertEqual(node.attribute_off_mask, node.attribute_on_mask)
        self.assertEqual(node.foreground_directive, ColorDirective(MODE_NUMBER, 1))
        self.assertEqual(node.background_directive, NO_DIRECTIVE)
        self.assertFalse(node.forces_reset)

    def test_attributes_and_background(self):
        node = color_node("underline italic blue / yellow")
        self.assertEqual(node.attribute_on_mask, ATTR_UNDERLINE | ATTR_ITALIC)
        self.assertEqual(node.foreground_directive, ColorDirective(MODE_NUMBER, 4))
        self.assertEqual(node.background_directive, ColorDirective(MODE_NUMBER, 3))

    def test_attribute_aliases(self):
        node = color_node("hilite inverse")
        self.assertEqual(node.attribute_on_mask, ATTR_BOLD | ATTR_REVERSE)

    def test_rgb(self):
        node = color_node("<255 0 0>")
        self.assertEqual(node.foreground_directive, ColorDirective(MODE_RGB, (255, 0, 0)))

    def test_palette_word_becomes_named_color(self):
        node = color_node("orange")
        self.assertEqual(node.foreground_directive, ColorDirective(MODE_NAME, "orange"))

    def test_unknown_words_are_ignored(self):
        node = color_node("bold frobnicate")
        self.assertEqual(node.attribute_on_mask, ATTR_BOLD)
        self.assertEqual(node.foreground_directive, NO_DIRECTIVE)

    def test_later_directive_wins(self):
        node = color_node("red 200")
        self.assertEqual(node.foreground_directive, ColorDirective(MODE_NUMBER, 200))

    def test_clear_forces_reset(self):
        node = color_node("clear")
        self.assertTrue(node.forces_reset)
        self.assertEqual(node.attribute_on_mask, 0)
        self.assertEqual(node.foreground_directive, NO_DIRECTIVE)

    def test_invalid_spec_fails_whole_document(self):
        with self.assertRaises(InvalidColorSpec):
            from_markup(f"{S}c red{E}ok{S}c/{E}{S}c <300 0 0>{E}bad{S}c/{E}")

    def test_resolution_is_repeatable(self):
        node = color_node("bold green / <10 20 30>")
        before = (node.attribute_on_mask, node.foreground_directive, node.background_directive)
        resolve_node(node)
        resolve_node(node)
        after = (node.attribute_on_mask, node.foreground_directive, node.background_directive)
        self.assertEqual(before, after)

    def test_nodes_resolve_independently_of_ancestors(self):
        doc = from_markup(f"{S}c bold red{E}a{S}c / blue{E}b{S}c/{E}{S}c/{E}")
        inner = doc.nodes[1]
        self.assertEqual(inner.attribute_on_mask, 0)
        self.assertEqual(inner.foreground_directive, NO_DIRECTIVE)
        self.assertEqual(inner.background_directive, ColorDirective(MODE_NUMBER, 4))


class TestHtmlResolution(unittest.TestCase):
    def test_simple_tag(self):
        node = html_node("b")
        self.assertEqual(node.open_markup, "<b>")
        self.assertEqual(node.close_markup, "</b>")

    def test_attributes_kept_only_in_open_markup(self):
        node = html_node('send href="go north" hint="north"')
        self.assertEqual(node.open_markup, '<send href="go north" hint="north">')
        self.assertEqual(node.close_markup, "</send>")

    def test_missing_tag_name(self):
        with self.assertRaises(MalformedTag):
            from_markup(f"{S}p   {E}x{S}p/{E}")


class TestDocumentResolution(unittest.TestCase):
    def test_resolve_document_marks_everything(self):
        doc = parse(f"{S}c red{E}a{S}p b{E}b{S}p/{E}{S}c/{E}")
        resolve_document(doc)
        self.assertTrue(doc.resolved)
        self.assertTrue(all(node.resolved for node in doc.nodes))
        self.assertEqual(doc.nodes[1].open_markup, "<b>")


if __name__ == '__main__':
    unittest.main()
