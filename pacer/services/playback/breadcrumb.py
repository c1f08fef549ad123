"""
Breadcrumb resolution over the flat landmark list.

The ancestry of a token position is rebuilt with a stack: landmarks up to the
position are scanned in order, each one popping every stacked landmark at the
same or a deeper level before being pushed. Callouts carry level 0, so a
callout pops everything and stands alone until the next heading.
"""

import bisect
from collections.abc import Sequence
from typing import Optional

from pacer.models.landmark import BreadcrumbContext, Landmark


class BreadcrumbResolver:
    """
    Resolve breadcrumbs and outline queries for one loaded document.

    Example:
        >>> resolver = BreadcrumbResolver([
        ...     Landmark(level=1, label="A", token_index=0),
        ...     Landmark(level=2, label="B", token_index=5),
        ...     Landmark(level=1, label="C", token_index=10),
        ... ])
        >>> resolver.resolve(7).labels
        ['A', 'B']
        >>> resolver.resolve(12).labels
        ['C']
    """

    def __init__(self, landmarks: Sequence[Landmark] = ()) -> None:
        self._landmarks: tuple[Landmark, ...] = tuple(landmarks)
        self._positions = [landmark.token_index for landmark in self._landmarks]

    @property
    def landmarks(self) -> tuple[Landmark, ...]:
        return self._landmarks

    def resolve(self, token_index: int) -> BreadcrumbContext:
        """Return the breadcrumb for ``token_index``."""
        # Landmarks are ordered by token index: everything up to the
        # insertion point is at or before the query.
        visible = bisect.bisect_right(self._positions, token_index)

        stack: list[Landmark] = []
        for landmark in self._landmarks[:visible]:
            while stack and stack[-1].level >= landmark.level:
                stack.pop()
            stack.append(landmark)

        return BreadcrumbContext(path=tuple(stack))

    def outline(self) -> list[Landmark]:
        """All landmarks in document order."""
        return list(self._landmarks)

    def parent_of(self, landmark: Landmark) -> Optional[Landmark]:
        """Closest earlier landmark with a shallower level."""
        position = self._position_of(landmark)
        if position is None:
            return None

        for candidate in reversed(self._landmarks[:position]):
            if candidate.level < landmark.level:
                return candidate
        return None

    def siblings(self, landmark: Landmark) -> list[Landmark]:
        """
        Landmarks at the same level under the same parent, ``landmark`` included.

        The parent's section ends at the next landmark at the parent's level
        or shallower.
        """
        if self._position_of(landmark) is None:
            return []

        parent = self.parent_of(landmark)
        start = -1 if parent is None else parent.token_index
        end = None

        if parent is not None:
            for candidate in self._landmarks:
                if candidate.token_index > parent.token_index and candidate.level <= parent.level:
                    end = candidate.token_index
                    break

        return [
            candidate
            for candidate in self._landmarks
            if candidate.level == landmark.level
            and candidate.token_index > start
            and (end is None or candidate.token_index < end)
        ]

    def _position_of(self, landmark: Landmark) -> Optional[int]:
        position = bisect.bisect_left(self._positions, landmark.token_index)
        while position < len(self._landmarks) and self._positions[position] == landmark.token_index:
            if self._landmarks[position] == landmark:
                return position
            position += 1
        return None


def breadcrumb_changed(previous: Optional[BreadcrumbContext], current: BreadcrumbContext) -> bool:
    """Whether two breadcrumbs differ, comparing landmark token indices."""
    if previous is None:
        return True

    if len(previous.path) != len(current.path):
        return True

    return any(
        old.token_index != new.token_index for old, new in zip(previous.path, current.path)
    )
