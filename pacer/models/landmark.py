"""Landmark and breadcrumb models."""

from dataclasses import dataclass, field
from typing import Optional

from pacer.models.enums import LandmarkKind

CALLOUT_LEVEL = 0


@dataclass(frozen=True)
class Landmark:
    """A heading or callout occurrence in the token stream.

    Attributes:
        level: 0 for callouts, 1-6 for heading depth.
        label: Human-readable heading/callout text (markers stripped).
        token_index: Index of the token carrying the marker.
        callout_kind: Callout identifier (e.g. "note", "warning") for callouts.
    """

    level: int
    label: str
    token_index: int
    callout_kind: Optional[str] = None

    @property
    def kind(self) -> LandmarkKind:
        return LandmarkKind.CALLOUT if self.level == CALLOUT_LEVEL else LandmarkKind.HEADING

    @property
    def is_callout(self) -> bool:
        return self.level == CALLOUT_LEVEL


@dataclass(frozen=True)
class BreadcrumbContext:
    """Ancestry path of landmarks enclosing a token position."""

    path: tuple[Landmark, ...] = field(default_factory=tuple)

    @property
    def current(self) -> Optional[Landmark]:
        return self.path[-1] if self.path else None

    @property
    def labels(self) -> list[str]:
        return [landmark.label for landmark in self.path]

    def __bool__(self) -> bool:
        return bool(self.path)
