"""
Text segmentation into the ordered token stream.

Input is text already using the ``[H<n>]`` and ``[CALLOUT:type]`` marker
conventions (see ``normalizer.normalize_text``). Runs of whitespace collapse,
tokens are split on whitespace, and each blank-line paragraph boundary is kept
in-band as a trailing line break on the last token of the paragraph it closes.
"""
import re

from pacer.models.token import Token

from .constants import PARAGRAPH_BREAK

_PARAGRAPH_SPLIT_RE = re.compile(r"\n[ \t]*\n")


class TextSegmenter:
    """
    Split normalized text into tokens.

    Segmentation is total: it never raises, and an empty or all-whitespace
    input yields an empty list.

    Example:
        >>> [t.text for t in TextSegmenter().segment("One two.\\n\\nThree")]
        ['One', 'two.\\n', 'Three']
    """

    def segment(self, text: str) -> list[Token]:
        """Return the ordered token list for ``text``."""
        if not text or not text.strip():
            return []

        text = text.replace("\r\n", "\n").replace("\r", "\n")
        paragraphs = [para.split() for para in _PARAGRAPH_SPLIT_RE.split(text)]
        paragraphs = [words for words in paragraphs if words]

        tokens: list[Token] = []
        last_paragraph = len(paragraphs) - 1

        for para_index, words in enumerate(paragraphs):
            for word_index, word in enumerate(words):
                closes_paragraph = word_index == len(words) - 1 and para_index < last_paragraph
                token_text = word + PARAGRAPH_BREAK if closes_paragraph else word
                tokens.append(Token(text=token_text, index=len(tokens)))

        return tokens


def segment_text(text: str) -> list[Token]:
    """Convenience wrapper around ``TextSegmenter().segment``."""
    return TextSegmenter().segment(text)
