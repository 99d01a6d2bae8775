"""
Tests for viewer annotation filters and presets.
"""
import pytest

from gridiron_overlay.core import (
    InterpolatedFrame, InterpolatedPlayer, InterpolatedArrow, InterpolatedTerminology,
    EditorialCallout, CalloutAnchor
)
from gridiron_overlay.overlays import AnnotationFilters, FILTER_PRESETS, get_preset, apply_filters, get_filter_stats


@pytest.fixture
def frame():
    return InterpolatedFrame(
        players=[
            InterpolatedPlayer(id="off_qb", x=50, y=60, label="QB", highlight=True),
            InterpolatedPlayer(id="def_lb", x=40, y=40, label="LB"),
            InterpolatedPlayer(id="off_wr", x=80, y=30, label="WR"),
            InterpolatedPlayer(id="def_x", x=10, y=10),
        ],
        arrows=[
            InterpolatedArrow(from_xy=(0, 0), to_xy=(5, 5), label="Scramble"),
            InterpolatedArrow(from_xy=(0, 0), to_xy=(5, 5), dashed=True),
            InterpolatedArrow(from_xy=(0, 0), to_xy=(5, 5), label="Read", dashed=True),
        ],
        terminology=[
            InterpolatedTerminology(x=10, y=10, term="Blitz"),
            InterpolatedTerminology(x=90, y=90, term="Huddle"),
        ]
    )


@pytest.fixture
def callouts():
    return [EditorialCallout(id="c1", start_time=1, end_time=5, text="Pursuit", detail="d",
                             anchor=CalloutAnchor(x=50, y=50))]


def ids(players):
    return [p.id for p in players]


class TestPresets:
    """Tests for the named presets."""

    def test_all_shows_everything(self, frame, callouts):
        filtered, kept = apply_filters(frame, callouts, get_preset("all"))
        assert filtered.entity_count == frame.entity_count
        assert kept == callouts

    def test_key_players(self, frame, callouts):
        filtered, kept = apply_filters(frame, callouts, get_preset("key-players"))
        assert ids(filtered.players) == ["off_qb"]
        assert [a.label for a in filtered.arrows] == ["Scramble", "Read"]
        assert filtered.terminology == []
        assert kept == callouts

    def test_minimal(self, frame, callouts):
        filtered, kept = apply_filters(frame, callouts, get_preset("minimal"))
        assert ids(filtered.players) == ["off_qb"]
        assert filtered.arrows == []
        assert filtered.terminology == []
        assert kept == []

    def test_unknown_preset_is_default(self):
        assert get_preset("nope") == AnnotationFilters()

    def test_preset_is_a_copy(self):
        preset = get_preset("all")
        preset.show_players = False
        assert FILTER_PRESETS["all"].show_players is True


class TestIndividualFilters:
    """Tests for single filter switches."""

    def test_hide_offense(self, frame, callouts):
        filtered, _ = apply_filters(frame, callouts, AnnotationFilters(show_offensive_players=False))
        assert ids(filtered.players) == ["def_lb", "def_x"]

    def test_high_priority_players(self, frame, callouts):
        filtered, _ = apply_filters(frame, callouts, AnnotationFilters(priority_level="high"))
        assert ids(filtered.players) == ["off_qb", "def_lb", "off_wr"]

    def test_high_priority_terms(self, frame, callouts):
        filtered, _ = apply_filters(frame, callouts, AnnotationFilters(priority_level="high"))
        assert [t.term for t in filtered.terminology] == ["Blitz"]

    def test_hide_callouts(self, frame, callouts):
        _, kept = apply_filters(frame, callouts, AnnotationFilters(show_callouts=False))
        assert kept == []

    def test_input_frame_untouched(self, frame, callouts):
        apply_filters(frame, callouts, get_preset("minimal"))
        assert len(frame.players) == 4


class TestFilterStats:
    """Tests for hidden/shown counts."""

    def test_minimal_stats(self, frame, callouts):
        assert get_filter_stats(frame, callouts, get_preset("minimal")) == {"total": 10, "shown": 1, "hidden": 9}

    def test_all_stats(self, frame, callouts):
        assert get_filter_stats(frame, callouts, AnnotationFilters())["hidden"] == 0
