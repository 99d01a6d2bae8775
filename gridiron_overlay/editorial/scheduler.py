"""
Play-level editorial callout scheduling and query-time window filter
"""

from dataclasses import dataclass, field, replace
from typing import List, Any, Dict, Iterable, Tuple
import logging

from gridiron_overlay.core import EditorialCallout, CalloutRejection, RejectionReason
from gridiron_overlay.core.constants import (
    MAX_EDITORIAL_CALLOUTS, MIN_CALLOUT_DURATION, CALLOUT_GAP_SECONDS,
    FIRST_CALLOUT_START, MAX_CALLOUT_TEXT, MAX_CALLOUT_DETAIL
)
from gridiron_overlay.core.vocabulary import (
    ACTION_CONCEPTS, OUTCOME_SCORE_KEYWORDS, OUTCOME_CONTEXT_KEYWORDS,
    SETUP_FILTER_TERMS, SETUP_PENALTY_TERMS
)
from .parser import parse_callout

logger = logging.getLogger(__name__)

# Float slack for window-length comparisons
DURATION_TOLERANCE = 1e-9


@dataclass
class ScheduleResult:
    """Kept callouts in time order plus everything that was dropped"""
    callouts: List[EditorialCallout] = field(default_factory=list)
    rejections: List[CalloutRejection] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'callouts': [c.to_dict() for c in self.callouts],
            'rejections': [r.to_dict() for r in self.rejections]
        }


def has_outcome_context(detail: str) -> bool:
    detail = detail.lower()
    return any(keyword in detail for keyword in OUTCOME_CONTEXT_KEYWORDS)


def is_setup_callout(callout: EditorialCallout) -> bool:
    """Generic setup vocabulary without any claim about why the play turned out as it did"""
    text = callout.text.lower()
    detail = callout.detail.lower()
    mentions_setup = any(term in text or term in detail for term in SETUP_FILTER_TERMS)
    return mentions_setup and not has_outcome_context(detail)


def score_callout(callout: EditorialCallout) -> int:
    """
    Relevance of a callout to the play outcome

    +10 per action concept in text or detail, +5 per outcome keyword in the
    detail, -5 per setup term in the text unless the detail explains an outcome.
    """
    text = callout.text.lower()
    detail = callout.detail.lower()

    score = 0
    for concept in ACTION_CONCEPTS:
        if concept in text or concept in detail:
            score += 10

    for keyword in OUTCOME_SCORE_KEYWORDS:
        if keyword in detail:
            score += 5

    if not has_outcome_context(detail):
        for term in SETUP_PENALTY_TERMS:
            if term in text:
                score -= 5

    return score


def active_callouts(callouts: Iterable[EditorialCallout], current_time: float) -> List[EditorialCallout]:
    """Callouts whose [start_time, end_time] window contains current_time"""
    return [c for c in callouts if c.start_time <= current_time <= c.end_time]


class EditorialCalloutScheduler:
    """Turns raw proposed callouts into at most a few staggered, long-lived callouts"""

    def __init__(self,
                 max_callouts: int = MAX_EDITORIAL_CALLOUTS,
                 min_duration: float = MIN_CALLOUT_DURATION,
                 gap_seconds: float = CALLOUT_GAP_SECONDS,
                 first_start: float = FIRST_CALLOUT_START,
                 max_text: int = MAX_CALLOUT_TEXT,
                 max_detail: int = MAX_CALLOUT_DETAIL,
                 drop_setup_callouts: bool = True):
        """
        Initialize editorial callout scheduler

        Args:
            max_callouts: Maximum callouts kept for a play
            min_duration: Minimum on-screen time per callout
            gap_seconds: Gap enforced between consecutive callouts
            first_start: Earliest time the first callout may start
            max_text: Text truncation length
            max_detail: Detail truncation length
            drop_setup_callouts: Drop callouts about setup vocabulary with no outcome context
        """
        self.max_callouts = max_callouts
        self.min_duration = min_duration
        self.gap_seconds = gap_seconds
        self.first_start = first_start
        self.max_text = max_text
        self.max_detail = max_detail
        self.drop_setup_callouts = drop_setup_callouts

    def schedule(self, raw_callouts: Any, video_duration: float) -> ScheduleResult:
        """
        Validate, rank and stagger raw callouts for one play

        Args:
            raw_callouts: Decoded JSON list proposed by the analysis service
            video_duration: Play length in seconds

        Returns:
            ScheduleResult with non-overlapping callouts of at least min_duration each
        """
        result = ScheduleResult()
        video_duration = max(0.0, video_duration)

        if raw_callouts is None:
            return result
        if not isinstance(raw_callouts, list):
            logger.warning("Callouts payload is not a list, ignoring it")
            return result

        candidates = []
        for raw in raw_callouts:
            parsed = parse_callout(raw, max_text=self.max_text, max_detail=self.max_detail)
            if isinstance(parsed, CalloutRejection):
                self._reject(result, parsed)
                continue

            checked = self._check_candidate(parsed, video_duration)
            if isinstance(checked, CalloutRejection):
                self._reject(result, checked)
                continue
            candidates.append(checked)

        ranked = self._rank(candidates)
        kept = ranked[:self.max_callouts]
        for callout, score in ranked[self.max_callouts:]:
            self._reject(result, CalloutRejection(
                RejectionReason.OVER_CAP, callout.id,
                f"score {score} below the top {self.max_callouts}"
            ))

        result.callouts = self._stagger([callout for callout, _ in kept], video_duration, result)

        logger.info(f"Scheduled {len(result.callouts)} editorial callouts "
                    f"({len(result.rejections)} rejected)")
        return result

    def _check_candidate(self, callout: EditorialCallout, video_duration: float):
        """Clamp into the video and apply the duration and setup-term rules"""
        start_time = min(max(callout.start_time, 0.0), video_duration)
        end_time = min(max(callout.end_time, 0.0), video_duration)

        if end_time - start_time < self.min_duration - DURATION_TOLERANCE:
            return CalloutRejection(
                RejectionReason.TOO_SHORT, callout.id,
                f"window {start_time:.2f}-{end_time:.2f}s shorter than {self.min_duration}s"
            )

        if self.drop_setup_callouts and is_setup_callout(callout):
            return CalloutRejection(RejectionReason.SETUP_TERM, callout.id,
                                    f"setup term without outcome context: {callout.text!r}")

        return replace(callout, start_time=start_time, end_time=end_time)

    def _rank(self, callouts: List[EditorialCallout]) -> List[Tuple[EditorialCallout, int]]:
        scored = [(callout, score_callout(callout)) for callout in callouts]
        # Stable: equal scores keep proposal order
        scored.sort(key=lambda item: -item[1])
        return scored

    def _stagger(self,
                 callouts: List[EditorialCallout],
                 video_duration: float,
                 result: ScheduleResult) -> List[EditorialCallout]:
        """Walk in time order pushing each callout past the previous one plus the gap"""
        scheduled = []
        next_start = self.first_start

        for callout in sorted(callouts, key=lambda c: c.start_time):
            duration = max(self.min_duration, callout.duration)
            start_time = max(next_start, callout.start_time)
            end_time = min(video_duration, start_time + duration)

            if end_time - start_time < self.min_duration - DURATION_TOLERANCE:
                self._reject(result, CalloutRejection(
                    RejectionReason.NO_ROOM, callout.id,
                    f"no room for {self.min_duration}s after {start_time:.2f}s"
                ))
                continue

            scheduled.append(replace(callout, start_time=start_time, end_time=end_time))
            next_start = end_time + self.gap_seconds

        return scheduled

    def _reject(self, result: ScheduleResult, rejection: CalloutRejection):
        result.rejections.append(rejection)
        logger.info(f"Dropped callout {rejection.callout_id or '?'}: "
                    f"{rejection.reason.value} ({rejection.message})")
