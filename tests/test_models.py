"""Tests for domain models and the settings snapshot."""

import pytest
from pydantic import ValidationError

from pacer.models import (
    BreadcrumbContext,
    ChunkEvent,
    Landmark,
    LandmarkKind,
    LoadedDocument,
    PlaybackState,
    PlaybackStatus,
    SourceType,
    Token,
)
from pacer.schemas.settings import PacingSettings


def test_enum_values():
    assert SourceType.PASTE.value == "paste"
    assert SourceType.MARKDOWN.value == "md"
    assert PlaybackStatus.COMPLETED.value == "completed"


class TestToken:
    def test_ends_paragraph(self):
        assert Token(text="end.\n", index=3).ends_paragraph
        assert not Token(text="middle", index=2).ends_paragraph

    def test_frozen(self):
        token = Token(text="word", index=0)
        with pytest.raises(AttributeError):
            token.text = "other"


class TestLandmark:
    def test_heading_kind(self):
        landmark = Landmark(level=2, label="Methods", token_index=4)
        assert landmark.kind is LandmarkKind.HEADING
        assert not landmark.is_callout

    def test_callout_kind(self):
        landmark = Landmark(level=0, label="Careful", token_index=9, callout_kind="warning")
        assert landmark.kind is LandmarkKind.CALLOUT
        assert landmark.is_callout


class TestBreadcrumbContext:
    def test_empty(self):
        context = BreadcrumbContext()
        assert context.current is None
        assert context.labels == []
        assert not context

    def test_current_is_last(self):
        a = Landmark(level=1, label="A", token_index=0)
        b = Landmark(level=2, label="B", token_index=5)
        context = BreadcrumbContext(path=(a, b))
        assert context.current == b
        assert context.labels == ["A", "B"]
        assert context


def test_loaded_document_slice_text():
    tokens = tuple(Token(text=word, index=i) for i, word in enumerate(["a", "b", "c"]))
    document = LoadedDocument(tokens=tokens, landmarks=())
    assert document.token_count == 3
    assert document.slice_text(1, 3) == "b c"


def test_playback_state_session_flag():
    state = PlaybackState()
    assert not state.in_session
    state.session_start_time = 12.0
    assert state.in_session


def test_chunk_event_text():
    event = ChunkEvent(
        tokens=(Token(text="one", index=0), Token(text="two", index=1)),
        breadcrumb=BreadcrumbContext(),
        is_final=False,
        index=0,
    )
    assert event.text == "one two"
    assert event.delay_ms == 0.0


class TestPacingSettings:
    def test_defaults(self):
        settings = PacingSettings()
        assert settings.wpm == 300
        assert settings.chunk_size == 1
        assert settings.long_word_threshold == 8
        assert settings.micropause_punctuation == 2.5
        assert settings.micropause_numbers == 1.8

    def test_frozen(self):
        settings = PacingSettings()
        with pytest.raises(ValidationError):
            settings.wpm = 500

    def test_model_copy_builds_new_snapshot(self):
        settings = PacingSettings()
        faster = settings.model_copy(update={"wpm": 600})
        assert faster.wpm == 600
        assert settings.wpm == 300

    @pytest.mark.parametrize(
        "field,value",
        [
            ("wpm", 10),
            ("wpm", 9000),
            ("chunk_size", 0),
            ("micropause_punctuation", 0.5),
            ("acceleration_duration", 0),
        ],
    )
    def test_out_of_range_rejected(self, field, value):
        with pytest.raises(ValidationError):
            PacingSettings(**{field: value})
