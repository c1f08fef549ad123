"""
Tokenizer package for paced text processing.

This package turns raw text into the token stream and landmark index the
pacing engine plays back:
- normalizer: Line endings, blank lines and Markdown -> marker conventions
- segmenter: TextSegmenter, text -> ordered tokens
- structure: StructureIndexer, tokens -> heading/callout landmarks
- timing: DelayCalculator and duration helpers
- text_utils: Marker parsing and display helpers
- constants: Marker patterns, heading pause table, punctuation sets

Primary usage:
    >>> from pacer.services.tokenizer import normalize_text, TextSegmenter, StructureIndexer
    >>> normalized = normalize_text("# Intro\\n\\nHello world.", "md")
    >>> tokens = TextSegmenter().segment(normalized)
    >>> landmarks = StructureIndexer().index(tokens)
"""

from .constants import (
    HEADING_PAUSE_MULTIPLIERS,
    MAX_LANDMARK_LABEL_TOKENS,
    PARAGRAPH_BREAK,
    TOKENIZER_VERSION,
)
from .normalizer import MAX_INPUT_SIZE, normalize_text, strip_markdown_inline
from .segmenter import TextSegmenter, segment_text
from .structure import StructureIndexer
from .text_utils import (
    ParsedMarker,
    display_text,
    get_terminal_punctuation,
    parse_marker,
    strip_line_breaks,
    strip_markers,
)
from .timing import (
    DelayCalculator,
    calculate_base_duration_ms,
    delay_multiplier,
    format_duration,
)

__all__ = [
    # Version
    "TOKENIZER_VERSION",
    # Normalizer
    "normalize_text",
    "strip_markdown_inline",
    "MAX_INPUT_SIZE",
    # Segmentation and structure
    "TextSegmenter",
    "segment_text",
    "StructureIndexer",
    # Timing
    "DelayCalculator",
    "delay_multiplier",
    "calculate_base_duration_ms",
    "format_duration",
    "HEADING_PAUSE_MULTIPLIERS",
    # Text utilities
    "ParsedMarker",
    "parse_marker",
    "strip_markers",
    "strip_line_breaks",
    "display_text",
    "get_terminal_punctuation",
    "PARAGRAPH_BREAK",
    "MAX_LANDMARK_LABEL_TOKENS",
]
