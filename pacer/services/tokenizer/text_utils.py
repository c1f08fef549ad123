"""
Shared text processing utilities for the tokenizer package.

These functions provide marker parsing and punctuation lookups used by the
structure indexer, the delay calculator and the API layer.
"""

from typing import NamedTuple, Optional

from .constants import (
    ANY_MARKER_PREFIX,
    CALLOUT_MARKER_PATTERN,
    HEADING_MARKER_PATTERN,
    OTHER_PAUSE_PUNCTUATION,
    PARAGRAPH_BREAK,
    SENTENCE_ENDERS,
)


class ParsedMarker(NamedTuple):
    """A heading or callout marker parsed from the front of a token."""

    level: int
    text: str
    callout_kind: Optional[str] = None


def strip_line_breaks(text: str) -> str:
    """Remove in-band line breaks from token text."""
    return text.replace(PARAGRAPH_BREAK, "")


def strip_markers(text: str) -> str:
    """
    Remove a leading heading/callout marker and any line breaks.

    Examples:
        >>> strip_markers("[H2]Methods")
        'Methods'
        >>> strip_markers("[CALLOUT:note]Remember\\n")
        'Remember'
        >>> strip_markers("plain")
        'plain'
    """
    return ANY_MARKER_PREFIX.sub("", strip_line_breaks(text).strip(), count=1)


def display_text(texts) -> str:
    """Join token texts for display, markers and line breaks removed."""
    return " ".join(part for part in (strip_markers(t) for t in texts) if part)


def parse_marker(text: str) -> Optional[ParsedMarker]:
    """
    Parse a heading or callout marker at the start of ``text``.

    Headings are tested first; a token is never both. Markers with no text
    after them, or heading levels outside 1-6, do not parse.

    Examples:
        >>> parse_marker("[H1]Intro")
        ParsedMarker(level=1, text='Intro', callout_kind=None)
        >>> parse_marker("[CALLOUT:tip]Shortcut")
        ParsedMarker(level=0, text='Shortcut', callout_kind='tip')
        >>> parse_marker("[H9]Nope") is None
        True
    """
    candidate = strip_line_breaks(text).strip()

    heading = HEADING_MARKER_PATTERN.match(candidate)
    if heading:
        return ParsedMarker(level=int(heading.group(1)), text=heading.group(2))

    callout = CALLOUT_MARKER_PATTERN.match(candidate)
    if callout:
        return ParsedMarker(level=0, text=callout.group(2), callout_kind=callout.group(1))

    return None


def get_terminal_punctuation(text: str) -> Optional[str]:
    """
    Get the punctuation character that ends ``text``, ignoring line breaks.

    Only sentence enders (. ! ?) and lighter punctuation (; : ,) are reported.

    Examples:
        >>> get_terminal_punctuation("done.")
        '.'
        >>> get_terminal_punctuation("first,\\n")
        ','
        >>> get_terminal_punctuation("word") is None
        True
    """
    stripped = text.rstrip(PARAGRAPH_BREAK + " \t")
    if not stripped:
        return None

    char = stripped[-1]
    if char in SENTENCE_ENDERS or char in OTHER_PAUSE_PUNCTUATION:
        return char
    return None
