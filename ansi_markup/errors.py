"""
Error types raised while parsing, resolving and ingesting tagged text.

Every error is fatal for the document being built: no partial Document
is ever handed back to the caller.
"""


class MarkupError(ValueError):
    """Base class for all markup errors."""


class MalformedTag(MarkupError):
    """A tag could not be read (unknown kind letter, truncated tag, bad Html name)."""


class UnbalancedTag(MarkupError):
    """A closing tag appeared with no matching open tag."""


class UnclosedTag(MarkupError):
    """Input ended while a tag was still open."""


class InvalidColorSpec(MarkupError):
    """A color tag's specification did not match the color grammar."""


class InvalidLegacyCode(MarkupError):
    """A legacy code stream contained an unknown code character."""
