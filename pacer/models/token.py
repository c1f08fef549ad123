"""Token model for the segmented text stream."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Token:
    """One whitespace-delimited unit of the segmented text stream.

    Attributes:
        text: Token text as segmented. Keeps a heading/callout prefix and, for the
            last token of a paragraph, a trailing line break.
        index: 0-based position in the per-load token sequence.
    """

    text: str
    index: int

    @property
    def ends_paragraph(self) -> bool:
        return "\n" in self.text
