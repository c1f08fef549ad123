"""
Tokenizer constants for marker detection and pacing rules.

This module contains the in-band marker patterns, the heading pause table and
the character classes used by the delay rules.
"""

import re

# Tokenizer version - increment when segmentation logic changes
TOKENIZER_VERSION = "2.1.0"

# -----------------------------------------------------------------------------
# In-band structural markers
# -----------------------------------------------------------------------------

# "[H2]Methods" - heading marker glued to the heading's first word
HEADING_MARKER_PATTERN = re.compile(r"^\[H([1-6])\](.+)")
HEADING_PREFIX_PATTERN = re.compile(r"^\[H([1-6])\]")

# "[CALLOUT:warning]Careful" - callout marker glued to the callout title
CALLOUT_MARKER_PATTERN = re.compile(r"^\[CALLOUT:([\w-]+)\](.+)")
CALLOUT_PREFIX_PATTERN = re.compile(r"^\[CALLOUT:[\w-]+\]")

# Any marker prefix, used to strip markers for display
ANY_MARKER_PREFIX = re.compile(r"^\[(?:H[1-6]|CALLOUT:[\w-]+)\]")

# Line break kept in-band on the last token of a paragraph
PARAGRAPH_BREAK = "\n"

# Landmark labels stop at the end of the paragraph or after this many tokens
MAX_LANDMARK_LABEL_TOKENS = 12

# -----------------------------------------------------------------------------
# Pause multipliers
# -----------------------------------------------------------------------------

# Fixed heading pause table: H1 strongest, decreasing to H6
HEADING_PAUSE_MULTIPLIERS = {
    1: 2.0,
    2: 1.8,
    3: 1.5,
    4: 1.3,
    5: 1.2,
    6: 1.1,
}

# -----------------------------------------------------------------------------
# Line-level markers and punctuation
# -----------------------------------------------------------------------------

# Enumerators at token start: "1.", "IV.", "a."
SECTION_MARKER_PATTERN = re.compile(r"^(\d+\.|[IVXLCDM]+\.|[A-Za-z]\.)")

# Bullet glyphs at token start
LIST_BULLETS = ("-", "*", "+", "\u2022")  # \u2022 = •

# Sentence-ending punctuation (full pause)
SENTENCE_ENDERS = {".", "!", "?"}

# Lighter punctuation (other pause); never combined with a sentence ender
OTHER_PAUSE_PUNCTUATION = {";", ":", ","}

# ASCII digits only; other Unicode digit characters do not count as numbers
DIGIT_PATTERN = re.compile(r"[0-9]")
