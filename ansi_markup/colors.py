"""
Color Grammar Resolver.

Turns the body of a color tag (e.g. "bold red / blue", "<255 0 0>",
"#ff8800", "+orange") into an ordered list of (ColorDirective, ground) pairs.
"""
import logging
import re
from typing import List, Tuple

from ansi_markup.errors import InvalidColorSpec
from ansi_markup.models import (
    ColorDirective, CLEAR_ALL,
    GROUND_FG, GROUND_BG, GROUND_UNSET,
    MODE_LETTERS, MODE_NUMBER, MODE_RGB, MODE_HEX_SHORT, MODE_HEX_LONG, MODE_NAME,
)

logger = logging.getLogger(__name__)

RESET_WORDS = {"clear", "reset"}

# Tried in order at each token; first match wins.
# "rgb" and "hex2" both start with "<" and are told apart by the "#".
MATCH_MAP = [
    ("letters", re.compile(r"(?P<data>[a-z]+(?:[ \t]+[a-z]+)*)\b", re.IGNORECASE)),
    ("numbers", re.compile(r"(?P<data>\d+)\b")),
    ("rgb", re.compile(r"<\s*(?P<red>\d{1,3})\s+(?P<green>\d{1,3})\s+(?P<blue>\d{1,3})\s*>")),
    ("hex1", re.compile(r"#(?P<data>[0-9a-f]{6})\b", re.IGNORECASE)),
    ("hex_short", re.compile(r"#(?P<data>[0-9a-f]{3})\b", re.IGNORECASE)),
    ("hex2", re.compile(r"<#(?P<data>[0-9a-f]{6})>", re.IGNORECASE)),
    ("name", re.compile(r"\+(?P<data>\w+)\b")),
]

_WHITESPACE = re.compile(r"\s*")


def _byte(value: str, spec: str, what: str) -> int:
    number = int(value)
    if number > 255:
        raise InvalidColorSpec(f"{what} {number} out of range 0-255 in color spec {spec!r}")
    return number


def _hex_triplet(data: str) -> Tuple[int, int, int]:
    return int(data[0:2], 16), int(data[2:4], 16), int(data[4:6], 16)


def _directive(kind: str, match: 're.Match', spec: str) -> ColorDirective:
    if kind == "letters":
        return ColorDirective(MODE_LETTERS, tuple(match.group("data").lower().split()))
    if kind == "numbers":
        return ColorDirective(MODE_NUMBER, _byte(match.group("data"), spec, "palette index"))
    if kind == "rgb":
        return ColorDirective(MODE_RGB, (
            _byte(match.group("red"), spec, "red component"),
            _byte(match.group("green"), spec, "green component"),
            _byte(match.group("blue"), spec, "blue component"),
        ))
    if kind in ("hex1", "hex2"):
        return ColorDirective(MODE_HEX_LONG, _hex_triplet(match.group("data")))
    if kind == "hex_short":
        data = match.group("data")
        return ColorDirective(MODE_HEX_SHORT, tuple(int(c, 16) for c in data))
    return ColorDirective(MODE_NAME, match.group("data").lower())


def validate_color_codes(spec: str) -> List[Tuple[ColorDirective, str]]:
    """
    Parse a color specification.

    The first directives are foreground; a lone "/" switches everything after
    it to background. A "clear" or "reset" word anywhere replaces the whole
    result with a single ClearAll directive whose ground is unset.

    Args:
        spec: Color tag body with the kind letter already stripped

    Returns:
        list: (ColorDirective, ground) pairs in source order

    Raises:
        InvalidColorSpec: if any token matches none of the grammar forms
    """
    results: List[Tuple[ColorDirective, str]] = []
    ground = GROUND_FG
    clear = False
    pos = _WHITESPACE.match(spec).end()

    while pos < len(spec):
        if spec[pos] == "/":
            ground = GROUND_BG
            pos = _WHITESPACE.match(spec, pos + 1).end()
            continue

        for kind, pattern in MATCH_MAP:
            match = pattern.match(spec, pos)
            if match:
                break
        else:
            raise InvalidColorSpec(f"Unrecognized color token at offset {pos} in {spec!r}")

        directive = _directive(kind, match, spec)
        if directive.mode == MODE_LETTERS and RESET_WORDS.intersection(directive.value):
            clear = True

        results.append((directive, ground))
        pos = _WHITESPACE.match(spec, match.end()).end()

    if clear:
        return [(CLEAR_ALL, GROUND_UNSET)]
    return results
