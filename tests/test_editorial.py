"""
Tests for editorial callout parsing, scheduling and the time-window filter.
"""
import pytest

from gridiron_overlay.core import (
    EditorialCallout, CalloutAnchor, CalloutRejection, RejectionReason
)
from gridiron_overlay.editorial import (
    EditorialCalloutScheduler, parse_callout, active_callouts, score_callout, is_setup_callout
)

TOLERANCE = 1e-6


def callout(text, detail, start=0.0, end=4.0, callout_id="c"):
    return EditorialCallout(id=callout_id, start_time=start, end_time=end, text=text, detail=detail,
                            anchor=CalloutAnchor(x=50, y=50))


def reasons(result):
    return {r.callout_id: r.reason for r in result.rejections}


@pytest.fixture
def scheduler():
    return EditorialCalloutScheduler()


class TestParseCallout:
    """Tests for the callout parse step."""

    def test_valid(self, raw_callout):
        parsed = parse_callout(raw_callout(anchor={"x": 40, "y": 60, "player_id": "lb1"}))
        assert isinstance(parsed, EditorialCallout)
        assert parsed.id == "c1"
        assert parsed.anchor.player_id == "lb1"
        assert parsed.circle is None and parsed.arrow is None

    def test_not_an_object(self):
        result = parse_callout(["not", "a", "callout"])
        assert isinstance(result, CalloutRejection)
        assert result.reason == RejectionReason.NOT_AN_OBJECT

    @pytest.mark.parametrize("field", ["id", "start_time", "text", "detail", "anchor"])
    def test_missing_fields(self, raw_callout, field):
        raw = raw_callout()
        del raw[field]
        result = parse_callout(raw)
        assert isinstance(result, CalloutRejection)
        assert result.reason == RejectionReason.MISSING_FIELD

    @pytest.mark.parametrize("start,end", [("1.0", 5.0), (1.0, None), (float("nan"), 5.0), (True, 5.0)])
    def test_invalid_times(self, raw_callout, start, end):
        result = parse_callout(raw_callout(start=start, end=end))
        assert result.reason == RejectionReason.INVALID_NUMBER
        assert result.callout_id == "c1"

    def test_invalid_anchor(self, raw_callout):
        result = parse_callout(raw_callout(anchor={"x": "left", "y": 10}))
        assert result.reason == RejectionReason.INVALID_NUMBER

    def test_anchor_clamped(self, raw_callout):
        parsed = parse_callout(raw_callout(anchor={"x": 150, "y": -5}))
        assert (parsed.anchor.x, parsed.anchor.y) == (100.0, 0.0)

    def test_truncation(self, raw_callout):
        parsed = parse_callout(raw_callout(text="P" * 80, detail="d" * 300))
        assert len(parsed.text) == 50
        assert len(parsed.detail) == 200

    def test_circle_wins_over_arrow(self, raw_callout):
        parsed = parse_callout(raw_callout(circle={"x": 10, "y": 20, "r": 5},
                                           arrow={"from": [0, 0], "to": [10, 10]}))
        assert parsed.circle is not None
        assert parsed.arrow is None
        assert "arrow" not in parsed.to_dict()

    def test_arrow_decoration(self, raw_callout):
        parsed = parse_callout(raw_callout(arrow={"from": [0, 0], "to": [120, 10]}))
        assert parsed.arrow.from_xy == (0.0, 0.0)
        assert parsed.arrow.to_xy == (100.0, 10.0)

    def test_bad_decoration_is_dropped(self, raw_callout):
        parsed = parse_callout(raw_callout(circle={"x": 10, "y": 20}))
        assert isinstance(parsed, EditorialCallout)
        assert parsed.circle is None


class TestScoring:
    """Tests for relevance scoring and the setup-term filter."""

    def test_action_and_outcome(self):
        assert score_callout(callout("Pursuit", "Pursuit angle cut off the lane")) == 25

    def test_setup_penalty(self):
        assert score_callout(callout("Shotgun Formation", "QB set up deep")) == -10

    def test_setup_penalty_waived_with_outcome_context(self):
        assert score_callout(callout("Shotgun Formation", "Deep set worked because of spacing")) == 0

    def test_setup_filter(self):
        assert is_setup_callout(callout("Shotgun", "QB in the gun"))
        assert not is_setup_callout(callout("Shotgun", "Shotgun depth is why the rush failed"))
        assert not is_setup_callout(callout("Pass Rush", "Edge pressure"))


class TestScheduler:
    """Tests for ingestion-time scheduling."""

    def test_keeps_pursuit_among_top_three(self, scheduler, raw_callout):
        raw = [
            raw_callout("c1", 0.0, 4.0, "Motion", "Motion changed the look"),
            raw_callout("c2", 5.0, 9.0, "Huddle", "Huddle call set the tempo"),
            raw_callout("c3", 10.0, 14.0, "Snap Count", "Snap count drew a jump"),
            raw_callout("p", 15.0, 19.0, "Pursuit", "Linebacker took a good path"),
        ]
        result = scheduler.schedule(raw, video_duration=60.0)

        assert len(result.callouts) == 3
        assert "p" in [c.id for c in result.callouts]
        assert reasons(result) == {"c3": RejectionReason.OVER_CAP}

    def test_invariants_hold_for_crowded_proposals(self, scheduler, raw_callout):
        raw = [
            raw_callout("a", 0.0, 3.5, "Pursuit", "Pursuit closed the lane"),
            raw_callout("b", 1.0, 6.0, "Pass Rush", "Pass rush prevented the throw"),
            raw_callout("c", 2.0, 5.0, "Seal Block", "Seal created the lane"),
            raw_callout("d", 2.5, 9.0, "Coverage", "Coverage breakdown allowed the catch"),
            raw_callout("e", 3.0, 7.0, "Tackle", "Missed tackle"),
        ]
        result = scheduler.schedule(raw, video_duration=30.0)
        callouts = result.callouts

        assert 0 < len(callouts) <= 3
        for c in callouts:
            assert c.end_time - c.start_time >= 3.0 - TOLERANCE
            assert c.end_time <= 30.0
        for first, second in zip(callouts, callouts[1:]):
            assert first.end_time < second.start_time

    def test_first_callout_not_before_one_second(self, scheduler, raw_callout):
        result = scheduler.schedule([raw_callout("c1", 0.0, 4.0)], video_duration=10.0)
        assert result.callouts[0].start_time == pytest.approx(1.0)
        assert result.callouts[0].end_time == pytest.approx(5.0)

    def test_stagger_pushes_later_callouts(self, scheduler, raw_callout):
        result = scheduler.schedule([
            raw_callout("c1", 1.0, 5.0, "Pursuit", "Pursuit closed"),
            raw_callout("c2", 3.0, 7.0, "Pass Rush", "Pass rush closed"),
        ], video_duration=20.0)

        first, second = result.callouts
        assert second.start_time == pytest.approx(first.end_time + 1.0)
        assert second.duration == pytest.approx(4.0)

    def test_drops_callouts_without_room(self, scheduler, raw_callout):
        result = scheduler.schedule([
            raw_callout("c1", 0.0, 4.0, "Pursuit", "Pursuit closed"),
            raw_callout("c2", 2.0, 6.0, "Pass Rush", "Pass rush closed"),
        ], video_duration=8.0)

        assert [c.id for c in result.callouts] == ["c1"]
        assert reasons(result) == {"c2": RejectionReason.NO_ROOM}

    def test_end_capped_at_video_duration(self, scheduler, raw_callout):
        result = scheduler.schedule([raw_callout("c1", 0.0, 5.0)], video_duration=5.5)
        assert result.callouts[0].end_time == pytest.approx(5.5)

    def test_too_short_after_clamping(self, scheduler, raw_callout):
        result = scheduler.schedule([
            raw_callout("short", 1.0, 3.5),
            raw_callout("clipped", 8.0, 20.0),
        ], video_duration=10.0)

        assert result.callouts == []
        assert reasons(result) == {"short": RejectionReason.TOO_SHORT, "clipped": RejectionReason.TOO_SHORT}

    def test_setup_callouts_dropped(self, scheduler, raw_callout):
        result = scheduler.schedule([raw_callout("s", 1.0, 5.0, "Shotgun", "QB in the gun")], video_duration=10.0)
        assert reasons(result) == {"s": RejectionReason.SETUP_TERM}

    def test_setup_filter_can_be_disabled(self, raw_callout):
        scheduler = EditorialCalloutScheduler(drop_setup_callouts=False)
        result = scheduler.schedule([raw_callout("s", 1.0, 5.0, "Shotgun", "QB in the gun")], video_duration=10.0)
        assert [c.id for c in result.callouts] == ["s"]

    def test_invalid_entries_are_rejected_not_raised(self, scheduler, raw_callout):
        result = scheduler.schedule([None, 42, raw_callout("ok", 1.0, 5.0)], video_duration=10.0)
        assert [c.id for c in result.callouts] == ["ok"]
        assert len(result.rejections) == 2

    @pytest.mark.parametrize("payload", [None, "callouts", {"id": "c1"}])
    def test_non_list_payload(self, scheduler, payload):
        result = scheduler.schedule(payload, video_duration=10.0)
        assert result.callouts == []


class TestActiveCallouts:
    """Tests for the query-time window filter."""

    def test_inclusive_window(self):
        callouts = [callout("A", "a", 1.0, 4.0, "a"), callout("B", "b", 5.0, 8.0, "b")]
        assert [c.id for c in active_callouts(callouts, 1.0)] == ["a"]
        assert [c.id for c in active_callouts(callouts, 4.0)] == ["a"]
        assert active_callouts(callouts, 4.5) == []
        assert [c.id for c in active_callouts(callouts, 8.0)] == ["b"]

    def test_empty(self):
        assert active_callouts([], 3.0) == []
