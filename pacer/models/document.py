"""Loaded document model: the immutable per-load token and landmark data."""

from dataclasses import dataclass

from pacer.models.landmark import Landmark
from pacer.models.token import Token


@dataclass(frozen=True)
class LoadedDocument:
    """Tokens and landmarks produced by one ``load()`` call.

    Both sequences are tuples so they can be shared with external observers
    (renderer, navigation) while the engine keeps playing.
    """

    tokens: tuple[Token, ...]
    landmarks: tuple[Landmark, ...]
    source_text: str = ""

    @property
    def token_count(self) -> int:
        return len(self.tokens)

    def slice_text(self, start: int, end: int) -> str:
        """Join token texts in ``[start, end)`` with single spaces."""
        return " ".join(token.text for token in self.tokens[start:end])
