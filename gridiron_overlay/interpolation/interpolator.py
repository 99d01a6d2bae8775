"""
Keyframe bracketing and per-entity interpolation
"""

from typing import Dict, List, Optional, Set, Tuple
import logging

from gridiron_overlay.core import (
    AnnotationFrame, PlayerAnnotation, ArrowAnnotation, TerminologyAnnotation,
    InterpolatedFrame, InterpolatedPlayer, InterpolatedArrow, InterpolatedTerminology,
    normalize_term
)
from gridiron_overlay.core.constants import (
    TERM_FADE_SECONDS, TERM_LATE_FADE_IN_THRESHOLD, DEFAULT_TERM_DURATION,
    DISCRETE_SNAP_PROGRESS
)
from gridiron_overlay.utils.numeric import clamp01

logger = logging.getLogger(__name__)


def lerp(a: float, b: float, t: float) -> float:
    """Linear interpolation between two values"""
    return a + (b - a) * t


def find_bracketing_frames(frames: List[AnnotationFrame],
                           current_time: float
                           ) -> Tuple[Optional[AnnotationFrame], Optional[AnnotationFrame], float]:
    """
    Find the keyframes surrounding a query time

    Args:
        frames: Keyframes sorted by timestamp
        current_time: Query time in seconds

    Returns:
        (before, after, progress). before is None when the time is at or
        before the first keyframe, after is None when it is past the last.
    """
    if not frames:
        return None, None, 0.0

    # First index whose timestamp >= current_time
    low, high = 0, len(frames)
    while low < high:
        mid = (low + high) // 2
        if frames[mid].timestamp < current_time:
            low = mid + 1
        else:
            high = mid

    if low == 0:
        return None, frames[0], 0.0
    if low >= len(frames):
        return frames[-1], None, 1.0

    before = frames[low - 1]
    after = frames[low]
    span = after.timestamp - before.timestamp
    if span <= 0:
        return before, after, 1.0

    return before, after, clamp01((current_time - before.timestamp) / span)


class FrameInterpolator:
    """Turns sparse keyframes into a drawable frame for any playback time"""

    def __init__(self,
                 fade_seconds: float = TERM_FADE_SECONDS,
                 late_fade_in_threshold: float = TERM_LATE_FADE_IN_THRESHOLD,
                 default_term_duration: float = DEFAULT_TERM_DURATION):
        """
        Initialize frame interpolator

        Args:
            fade_seconds: Fade window at both ends of a term's visibility
            late_fade_in_threshold: Progress after which terms new in the next keyframe start fading in
            default_term_duration: Visibility for terms that carry no duration
        """
        self.fade_seconds = fade_seconds
        self.late_fade_in_threshold = late_fade_in_threshold
        self.default_term_duration = default_term_duration

    def interpolate(self,
                    frames: List[AnnotationFrame],
                    current_time: float) -> Optional[InterpolatedFrame]:
        """
        Build the frame to draw at current_time

        Args:
            frames: Keyframes sorted by timestamp
            current_time: Playback time in seconds

        Returns:
            Interpolated frame, or None when there are no keyframes
        """
        before, after, progress = find_bracketing_frames(frames, current_time)

        if before is None and after is None:
            return None
        if before is None:
            return self.frame_to_interpolated(after)
        if after is None:
            return self.frame_to_interpolated(before)

        return InterpolatedFrame(
            players=self._interpolate_players(before.players, after.players, progress),
            arrows=self._interpolate_arrows(before.arrows, after.arrows, progress),
            terminology=self._select_terminology(before, after, progress, current_time)
        )

    def frame_to_interpolated(self, frame: AnnotationFrame) -> InterpolatedFrame:
        """Single keyframe as-is, everything fully opaque"""
        return InterpolatedFrame(
            players=[_player(p, opacity=1.0) for p in frame.players],
            arrows=[_arrow(a, opacity=1.0) for a in frame.arrows],
            terminology=[
                self._term(t, opacity=1.0, start_time=frame.timestamp)
                for t in _unique_terms(frame.terminology)
            ]
        )

    def _interpolate_players(self,
                             before: List[PlayerAnnotation],
                             after: List[PlayerAnnotation],
                             progress: float) -> List[InterpolatedPlayer]:
        result = []
        after_by_id = {p.id: p for p in after}
        before_ids = {p.id for p in before}
        snap_to_before = progress < DISCRETE_SNAP_PROGRESS

        for bp in before:
            ap = after_by_id.get(bp.id)
            if ap is None:
                # Leaving
                result.append(_player(bp, opacity=1.0 - progress))
                continue

            source = bp if snap_to_before else ap
            result.append(InterpolatedPlayer(
                id=bp.id,
                x=lerp(bp.x, ap.x, progress),
                y=lerp(bp.y, ap.y, progress),
                label=source.label,
                highlight=source.highlight,
                color=source.color,
                opacity=1.0
            ))

        for ap in after:
            if ap.id not in before_ids:
                # Entering
                result.append(_player(ap, opacity=progress))

        return result

    def _interpolate_arrows(self,
                            before: List[ArrowAnnotation],
                            after: List[ArrowAnnotation],
                            progress: float) -> List[InterpolatedArrow]:
        result = []
        matched_after: Set[int] = set()
        snap_to_before = progress < DISCRETE_SNAP_PROGRESS

        for arrow in before:
            match_idx = _find_arrow_match(arrow, after, matched_after)
            if match_idx is None:
                result.append(_arrow(arrow, opacity=1.0 - progress))
                continue

            matched_after.add(match_idx)
            other = after[match_idx]
            source = arrow if snap_to_before else other
            result.append(InterpolatedArrow(
                from_xy=(lerp(arrow.from_xy[0], other.from_xy[0], progress),
                         lerp(arrow.from_xy[1], other.from_xy[1], progress)),
                to_xy=(lerp(arrow.to_xy[0], other.to_xy[0], progress),
                       lerp(arrow.to_xy[1], other.to_xy[1], progress)),
                color=source.color,
                label=source.label,
                dashed=source.dashed,
                id=arrow.id,
                opacity=1.0
            ))

        for idx, arrow in enumerate(after):
            if idx not in matched_after:
                result.append(_arrow(arrow, opacity=progress))

        return result

    def _select_terminology(self,
                            before: AnnotationFrame,
                            after: AnnotationFrame,
                            progress: float,
                            current_time: float) -> List[InterpolatedTerminology]:
        """
        Terms persist from their keyframe for their own duration, not until
        the next keyframe. Terms introduced by the next keyframe only start
        fading in late in the transition, and never when the same term is
        still showing from the previous keyframe.
        """
        result = []
        visible: Set[str] = set()
        term_start = before.timestamp

        for term in _unique_terms(before.terminology):
            duration = self._duration(term)
            term_end = term_start + duration
            if not term_start <= current_time <= term_end:
                continue

            opacity = 1.0
            if current_time < term_start + self.fade_seconds:
                opacity = (current_time - term_start) / self.fade_seconds
            elif current_time > term_end - self.fade_seconds:
                opacity = (term_end - current_time) / self.fade_seconds

            result.append(self._term(term, opacity=clamp01(opacity), start_time=term_start))
            visible.add(normalize_term(term.term))

        threshold = self.late_fade_in_threshold
        if progress < threshold or threshold >= 1.0:
            return result

        fade_in_start = before.timestamp + threshold * (after.timestamp - before.timestamp)
        opacity = clamp01((progress - threshold) / (1.0 - threshold))

        for term in _unique_terms(after.terminology):
            key = normalize_term(term.term)
            if key in visible:
                continue
            result.append(self._term(term, opacity=opacity, start_time=fade_in_start))
            visible.add(key)

        return result

    def _duration(self, term: TerminologyAnnotation) -> float:
        if term.duration is None or term.duration <= 0:
            return self.default_term_duration
        return term.duration

    def _term(self, term: TerminologyAnnotation, opacity: float, start_time: float) -> InterpolatedTerminology:
        return InterpolatedTerminology(
            x=term.x,
            y=term.y,
            term=term.term,
            definition=term.definition,
            duration=self._duration(term),
            opacity=opacity,
            start_time=start_time
        )


def _player(player: PlayerAnnotation, opacity: float) -> InterpolatedPlayer:
    return InterpolatedPlayer(
        id=player.id, x=player.x, y=player.y, label=player.label,
        highlight=player.highlight, color=player.color, opacity=clamp01(opacity)
    )


def _arrow(arrow: ArrowAnnotation, opacity: float) -> InterpolatedArrow:
    return InterpolatedArrow(
        from_xy=tuple(arrow.from_xy), to_xy=tuple(arrow.to_xy), color=arrow.color,
        label=arrow.label, dashed=arrow.dashed, id=arrow.id, opacity=clamp01(opacity)
    )


def _find_arrow_match(arrow: ArrowAnnotation,
                      candidates: List[ArrowAnnotation],
                      taken: Set[int]) -> Optional[int]:
    """Match by synthetic id when both sides have one, else by exact endpoints"""
    for idx, other in enumerate(candidates):
        if idx in taken:
            continue
        if arrow.id is not None and other.id is not None:
            if arrow.id == other.id:
                return idx
        elif arrow.same_endpoints(other):
            return idx
    return None


def _unique_terms(terms: List[TerminologyAnnotation]) -> List[TerminologyAnnotation]:
    """Drop repeated terms (case-insensitive), keeping the first"""
    seen: Dict[str, bool] = {}
    unique = []
    for term in terms:
        key = normalize_term(term.term)
        if key in seen:
            continue
        seen[key] = True
        unique.append(term)
    return unique


def interpolate(frames: List[AnnotationFrame], current_time: float) -> Optional[InterpolatedFrame]:
    """Interpolate with default settings"""
    return FrameInterpolator().interpolate(frames, current_time)
