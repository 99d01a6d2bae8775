"""
Terminology overlay scheduling: caps, cooldowns, pinning and priority scoring
"""

import numpy as np
from dataclasses import dataclass, replace
from typing import List, Dict, Optional, Set, Any
import logging

from gridiron_overlay.core import (
    TerminologyAnnotation, InterpolatedTerminology, PlayerAnnotation,
    CanvasDimensions, normalize_term
)
from gridiron_overlay.core.constants import (
    MAX_TERMS_ON_SCREEN, TERM_COOLDOWN_SECONDS, TERM_DISPLAY_SECONDS,
    TERM_COLLISION_THRESHOLD, HIGHLIGHTED_PLAYER_DISTANCE, TERM_COLLISION_PENALTY
)
from gridiron_overlay.core.vocabulary import CORE_TERMS, SAFE_ZONES
from gridiron_overlay.geometry import to_canvas_coords

# Score contributions
NEW_TERM_BONUS = 10
CORE_TERM_BONUS = 5
NEAR_HIGHLIGHT_BONUS = 2
SAFE_ZONE_BONUS = 1


@dataclass
class TermHistory:
    """When a term was last shown and how often"""
    term: str
    last_shown: float
    times_shown: int = 1

    def to_dict(self) -> Dict[str, Any]:
        return {
            'term': self.term,
            'last_shown': self.last_shown,
            'times_shown': self.times_shown
        }


@dataclass
class ScoredTerm:
    """Candidate term with its score breakdown"""
    term: TerminologyAnnotation
    index: int
    base_score: float
    is_new: bool
    is_core_term: bool
    near_highlighted_player: bool
    in_safe_zone: bool
    collision_penalty: float = 0.0

    @property
    def score(self) -> float:
        return self.base_score - self.collision_penalty


def is_in_safe_zone(x: float, y: float) -> bool:
    """Check whether a percentage point lies in one of the corner safe zones"""
    for (x_min, x_max), (y_min, y_max) in SAFE_ZONES:
        if x_min <= x <= x_max and y_min <= y <= y_max:
            return True
    return False


class TerminologyOverlayManager:
    """
    Session-scoped scheduler for educational term popups.

    One instance serves one play. It must be called exactly once per frame
    decision since every call updates the shown-history.
    """

    def __init__(self,
                 play_start: float,
                 max_terms: int = MAX_TERMS_ON_SCREEN,
                 cooldown_seconds: float = TERM_COOLDOWN_SECONDS,
                 display_seconds: float = TERM_DISPLAY_SECONDS,
                 collision_threshold: float = TERM_COLLISION_THRESHOLD,
                 highlighted_player_distance: float = HIGHLIGHTED_PLAYER_DISTANCE,
                 collision_penalty: float = TERM_COLLISION_PENALTY):
        """
        Initialize terminology overlay manager

        Args:
            play_start: Start time of the play this manager serves
            max_terms: Maximum terms selected per call
            cooldown_seconds: Minimum time before a shown term may show again
            display_seconds: Time after which a displayed term is auto-dismissed
            collision_threshold: Fraction of the smaller frame side treated as a collision
            highlighted_player_distance: Percentage distance counted as near a highlighted player
            collision_penalty: Score removed per nearby already-selected term
        """
        self.max_terms = max_terms
        self.cooldown_seconds = cooldown_seconds
        self.display_seconds = display_seconds
        self.collision_threshold = collision_threshold
        self.highlighted_player_distance = highlighted_player_distance
        self.collision_penalty = collision_penalty
        self.logger = logging.getLogger(__name__)

        self._seen_terms: Dict[str, TermHistory] = {}
        self._pinned_terms: Set[str] = set()
        self._displayed_terms: Dict[str, float] = {}
        self._visible_terms: Dict[str, InterpolatedTerminology] = {}
        self._play_start = 0.0

        self.reset(play_start)

    @property
    def play_start(self) -> float:
        return self._play_start

    def reset(self, play_start: float):
        """Forget all history, pins and displayed terms for a new play"""
        self._seen_terms.clear()
        self._pinned_terms.clear()
        self._displayed_terms.clear()
        self._visible_terms.clear()
        self._play_start = play_start
        self.logger.debug(f"Terminology manager reset at {play_start}")

    def pin_term(self, term: str):
        self._pinned_terms.add(normalize_term(term))

    def unpin_term(self, term: str):
        self._pinned_terms.discard(normalize_term(term))

    def is_pinned(self, term: str) -> bool:
        return normalize_term(term) in self._pinned_terms

    def is_in_cooldown(self, term: str, now: float) -> bool:
        history = self._seen_terms.get(normalize_term(term))
        if history is None:
            return False
        return now - history.last_shown < self.cooldown_seconds

    def select_terms_to_display(self,
                                candidates: List[TerminologyAnnotation],
                                players: List[PlayerAnnotation],
                                dimensions: CanvasDimensions,
                                now: float) -> List[InterpolatedTerminology]:
        """
        Pick which candidate terms to show right now

        Args:
            candidates: Terms offered by the interpolated frame
            players: Current player positions
            dimensions: Canvas dimensions used for collision distances
            now: Current playback time in seconds

        Returns:
            Newly selected terms, fully opaque and starting now. At most
            max_terms minus the displayed terms still holding a slot.
        """
        self._expire_displayed(now)

        eligible = self._eligible_candidates(candidates, now)
        scored = [self._score_term(term, idx, players) for idx, term in enumerate(eligible)]

        # Terms still displayed and not offered again keep their slots
        offered = {normalize_term(term.term) for term in eligible}
        held = [key for key in self._displayed_terms if key not in offered]
        selected = self._select_greedy(scored, dimensions, max(0, self.max_terms - len(held)))

        result = []
        for item in selected:
            displayed = self._to_displayed(item.term, now)
            self._record_shown(displayed, now)
            result.append(displayed)

        if result:
            self.logger.debug(f"Selected terms at {now:.2f}s: {[t.term for t in result]}")
        return result

    def get_seen_terms(self) -> Dict[str, TermHistory]:
        return {key: replace(history) for key, history in self._seen_terms.items()}

    def get_displayed_terms(self) -> Dict[str, float]:
        return dict(self._displayed_terms)

    def get_visible_terms(self) -> List[InterpolatedTerminology]:
        """
        Terms currently on screen: selected by this or an earlier call and not yet
        dismissed. Each keeps the start_time of the call that first showed it.
        """
        return [replace(term) for term in self._visible_terms.values()]

    def clear_displayed_terms(self):
        self._displayed_terms.clear()
        self._visible_terms.clear()

    def _eligible_candidates(self,
                             candidates: List[TerminologyAnnotation],
                             now: float) -> List[TerminologyAnnotation]:
        """Drop in-call duplicates and unpinned terms still in cooldown"""
        eligible = []
        seen_keys: Set[str] = set()

        for term in candidates:
            key = normalize_term(term.term)
            if not key or key in seen_keys:
                continue
            seen_keys.add(key)

            if not self.is_pinned(key) and self.is_in_cooldown(key, now):
                continue
            eligible.append(term)

        return eligible

    def _score_term(self,
                    term: TerminologyAnnotation,
                    index: int,
                    players: List[PlayerAnnotation]) -> ScoredTerm:
        key = normalize_term(term.term)
        is_new = key not in self._seen_terms
        is_core_term = key in CORE_TERMS
        near_highlight = self._is_near_highlighted_player(term, players)
        in_safe_zone = is_in_safe_zone(term.x, term.y)

        score = 0
        if is_new:
            score += NEW_TERM_BONUS
        if is_core_term:
            score += CORE_TERM_BONUS
        if near_highlight:
            score += NEAR_HIGHLIGHT_BONUS
        if in_safe_zone:
            score += SAFE_ZONE_BONUS

        return ScoredTerm(
            term=term,
            index=index,
            base_score=score,
            is_new=is_new,
            is_core_term=is_core_term,
            near_highlighted_player=near_highlight,
            in_safe_zone=in_safe_zone
        )

    def _is_near_highlighted_player(self,
                                    term: TerminologyAnnotation,
                                    players: List[PlayerAnnotation]) -> bool:
        highlighted = [p for p in players if p.highlight]
        if not highlighted:
            return False

        positions = np.array([[p.x, p.y] for p in highlighted], dtype=float)
        distances = np.linalg.norm(positions - np.array([term.x, term.y], dtype=float), axis=1)
        return bool(np.any(distances <= self.highlighted_player_distance))

    def _select_greedy(self,
                       scored: List[ScoredTerm],
                       dimensions: CanvasDimensions,
                       limit: int) -> List[ScoredTerm]:
        """Pick the best term, re-penalize the rest for crowding it, repeat"""
        remaining = list(scored)
        selected: List[ScoredTerm] = []
        threshold = min(dimensions.width, dimensions.height) * self.collision_threshold

        while remaining and len(selected) < limit:
            for item in remaining:
                item.collision_penalty = self._collision_penalty(item, selected, dimensions, threshold)

            # max() keeps the first of equal scores, so ties stay in input order
            best = max(remaining, key=lambda item: item.score)
            selected.append(best)
            remaining.remove(best)

        return selected

    def _collision_penalty(self,
                           item: ScoredTerm,
                           selected: List[ScoredTerm],
                           dimensions: CanvasDimensions,
                           threshold: float) -> float:
        if not selected or threshold <= 0:
            return 0.0

        x, y = to_canvas_coords((item.term.x, item.term.y), dimensions)
        penalty = 0.0
        for other in selected:
            ox, oy = to_canvas_coords((other.term.x, other.term.y), dimensions)
            if np.hypot(x - ox, y - oy) < threshold:
                penalty += self.collision_penalty
        return penalty

    def _record_shown(self, displayed: InterpolatedTerminology, now: float):
        term = displayed.term
        key = normalize_term(term)
        history = self._seen_terms.get(key)
        if history is None:
            self._seen_terms[key] = TermHistory(term=term, last_shown=now)
        else:
            history.last_shown = now
            history.times_shown += 1

        if key not in self._displayed_terms:
            self._displayed_terms[key] = now
            self._visible_terms[key] = replace(displayed)

    def _expire_displayed(self, now: float):
        """Auto-dismiss displayed terms past the display duration unless pinned"""
        for key, started in list(self._displayed_terms.items()):
            if now - started >= self.display_seconds and key not in self._pinned_terms:
                del self._displayed_terms[key]
                self._visible_terms.pop(key, None)

    def _to_displayed(self, term: TerminologyAnnotation, now: float) -> InterpolatedTerminology:
        duration: Optional[float] = term.duration if term.duration else self.display_seconds
        return InterpolatedTerminology(
            x=term.x,
            y=term.y,
            term=term.term,
            definition=term.definition,
            duration=duration,
            opacity=1.0,
            start_time=now
        )
