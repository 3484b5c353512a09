"""
Tag authoring helpers.
Wrap text in color and html tags without typing the control markers by hand.
"""
from ansi_markup.models import TAG_START, TAG_END
from ansi_markup.parser import parse


def color(text: str, spec: str) -> str:
    """Wrap text in a color tag (e.g. color("hi", "bold red"))."""
    return f"{TAG_START}c {spec}{TAG_END}{text}{TAG_START}c/{TAG_END}"


def html(text: str, tag: str) -> str:
    """Wrap text in an html tag (e.g. html("Exits", "b"))."""
    return f"{TAG_START}p {tag}{TAG_END}{text}{TAG_START}p/{TAG_END}"


def clear(text: str = "") -> str:
    """Color tag that resets all styling for its text."""
    return color(text, "clear")


def strip_markup(src: str) -> str:
    """Plain text of tagged source, without resolving any tags."""
    return parse(src).plain_text
