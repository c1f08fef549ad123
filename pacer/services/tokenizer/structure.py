"""
Landmark indexing over the token stream.

One linear scan records every heading and callout marker as a ``Landmark``.
"""
import logging
from collections.abc import Sequence

from pacer.models.landmark import Landmark
from pacer.models.token import Token

from .constants import MAX_LANDMARK_LABEL_TOKENS
from .text_utils import parse_marker, strip_markers

logger = logging.getLogger(__name__)


class StructureIndexer:
    """
    Build the ordered landmark list for a token sequence.

    Headings are tested before callouts, so a token yields at most one
    landmark. Tokens whose marker does not parse are skipped.
    """

    def __init__(self, max_label_tokens: int = MAX_LANDMARK_LABEL_TOKENS):
        self.max_label_tokens = max_label_tokens

    def index(self, tokens: Sequence[Token]) -> list[Landmark]:
        """Return landmarks ordered by token index."""
        landmarks: list[Landmark] = []

        for position, token in enumerate(tokens):
            marker = parse_marker(token.text)
            if marker is None:
                continue

            landmarks.append(
                Landmark(
                    level=marker.level,
                    label=self._build_label(tokens, position),
                    token_index=token.index,
                    callout_kind=marker.callout_kind,
                )
            )

        logger.debug("Indexed %d landmarks over %d tokens", len(landmarks), len(tokens))
        return landmarks

    def _build_label(self, tokens: Sequence[Token], start: int) -> str:
        """
        Collect the label text starting at the marker token.

        The label runs to the end of the marker's paragraph, stops before the
        next marker token and never exceeds ``max_label_tokens`` tokens.
        """
        words: list[str] = []
        end = min(len(tokens), start + self.max_label_tokens)

        for position in range(start, end):
            token = tokens[position]
            if position > start and parse_marker(token.text) is not None:
                break

            word = strip_markers(token.text)
            if word:
                words.append(word)

            if token.ends_paragraph:
                break

        return " ".join(words)
