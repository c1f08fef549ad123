"""Tests for breadcrumb resolution."""

import pytest

from pacer.models import BreadcrumbContext, Landmark
from pacer.services.playback import BreadcrumbResolver, breadcrumb_changed


@pytest.fixture
def abc_resolver():
    return BreadcrumbResolver(
        [
            Landmark(level=1, label="A", token_index=0),
            Landmark(level=2, label="B", token_index=5),
            Landmark(level=1, label="C", token_index=10),
        ]
    )


class TestResolve:
    def test_nested(self, abc_resolver):
        assert abc_resolver.resolve(7).labels == ["A", "B"]

    def test_sibling_replaces_branch(self, abc_resolver):
        assert abc_resolver.resolve(12).labels == ["C"]

    def test_landmark_position_inclusive(self, abc_resolver):
        assert abc_resolver.resolve(5).labels == ["A", "B"]
        assert abc_resolver.resolve(4).labels == ["A"]

    def test_before_first_landmark(self):
        resolver = BreadcrumbResolver([Landmark(level=1, label="A", token_index=3)])
        context = resolver.resolve(1)
        assert context.path == ()
        assert context.current is None

    def test_no_landmarks(self):
        assert BreadcrumbResolver().resolve(100) == BreadcrumbContext()

    def test_current_is_deepest(self, abc_resolver):
        assert abc_resolver.resolve(7).current.label == "B"

    def test_skipped_levels(self):
        resolver = BreadcrumbResolver(
            [
                Landmark(level=1, label="Top", token_index=0),
                Landmark(level=3, label="Deep", token_index=2),
                Landmark(level=2, label="Mid", token_index=4),
            ]
        )
        assert resolver.resolve(3).labels == ["Top", "Deep"]
        assert resolver.resolve(5).labels == ["Top", "Mid"]

    def test_callout_clears_ancestry(self):
        """A callout has level 0 and pops every heading before it."""
        resolver = BreadcrumbResolver(
            [
                Landmark(level=1, label="A", token_index=0),
                Landmark(level=2, label="B", token_index=2),
                Landmark(level=0, label="Note", token_index=4, callout_kind="note"),
                Landmark(level=3, label="D", token_index=6),
            ]
        )
        assert resolver.resolve(5).labels == ["Note"]
        assert resolver.resolve(7).labels == ["Note", "D"]


class TestOutline:
    def test_outline(self, abc_resolver):
        assert [lm.label for lm in abc_resolver.outline()] == ["A", "B", "C"]

    def test_siblings_under_same_parent(self):
        landmarks = [
            Landmark(level=1, label="One", token_index=0),
            Landmark(level=2, label="1a", token_index=2),
            Landmark(level=2, label="1b", token_index=4),
            Landmark(level=1, label="Two", token_index=6),
            Landmark(level=2, label="2a", token_index=8),
        ]
        resolver = BreadcrumbResolver(landmarks)
        assert [lm.label for lm in resolver.siblings(landmarks[1])] == ["1a", "1b"]
        assert [lm.label for lm in resolver.siblings(landmarks[4])] == ["2a"]
        assert [lm.label for lm in resolver.siblings(landmarks[0])] == ["One", "Two"]
        assert resolver.parent_of(landmarks[4]) == landmarks[3]

    def test_siblings_of_unknown_landmark(self, abc_resolver):
        assert abc_resolver.siblings(Landmark(level=1, label="X", token_index=99)) == []


class TestBreadcrumbChanged:
    def test_first_breadcrumb_is_a_change(self, abc_resolver):
        assert breadcrumb_changed(None, abc_resolver.resolve(0))

    def test_same_path(self, abc_resolver):
        assert not breadcrumb_changed(abc_resolver.resolve(6), abc_resolver.resolve(8))

    def test_different_path(self, abc_resolver):
        assert breadcrumb_changed(abc_resolver.resolve(4), abc_resolver.resolve(6))
        assert breadcrumb_changed(abc_resolver.resolve(8), abc_resolver.resolve(11))
