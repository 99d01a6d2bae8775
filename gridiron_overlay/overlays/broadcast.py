"""
Broadcast-style density filter: caps callouts, arrows and player circles per frame
"""

from dataclasses import dataclass, field
from typing import List, Dict, Any, Union

from gridiron_overlay.core import (
    PlayerAnnotation, ArrowAnnotation, TerminologyAnnotation,
    is_concept_label, is_position_label, normalize_term
)
from gridiron_overlay.core.constants import MAX_CALLOUTS, MAX_ARROWS, MAX_CIRCLES, MAX_MICRO_STORIES
from gridiron_overlay.core.vocabulary import KEY_ACTOR_ROLES, KEY_ACTOR_KEYWORDS

SHORT_LABEL_LENGTH = 20


@dataclass
class ScoredCallout:
    """Text label surfaced as an overlay box"""
    text: str
    source: str  # 'arrow' or 'terminology'
    score: float
    is_concept: bool
    is_position: bool
    original: Union[ArrowAnnotation, TerminologyAnnotation]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'text': self.text,
            'source': self.source,
            'score': self.score,
            'is_concept': self.is_concept,
            'is_position': self.is_position
        }


@dataclass
class BroadcastFrame:
    """Result of filtering one frame"""
    players: List[PlayerAnnotation] = field(default_factory=list)
    arrows: List[ArrowAnnotation] = field(default_factory=list)
    terminology: List[TerminologyAnnotation] = field(default_factory=list)
    callouts: List[ScoredCallout] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'players': [p.to_dict() for p in self.players],
            'arrows': [a.to_dict() for a in self.arrows],
            'terminology': [t.to_dict() for t in self.terminology],
            'callouts': [c.to_dict() for c in self.callouts]
        }


def is_key_actor(player: PlayerAnnotation) -> bool:
    """Highlighted players and players in ball-involved roles get circled"""
    if player.highlight:
        return True

    label = normalize_term(player.label)
    if label in KEY_ACTOR_ROLES:
        return True
    return any(keyword in label for keyword in KEY_ACTOR_KEYWORDS)


def score_callout(text: str, source: str, original) -> ScoredCallout:
    is_concept = is_concept_label(text)
    is_position = is_position_label(text)

    score = 0
    if is_concept:
        score += 10
    if is_position:
        score += 2
    if source == 'arrow':
        score += 5
    if len(text) < SHORT_LABEL_LENGTH:
        score += 2

    return ScoredCallout(
        text=text,
        source=source,
        score=score,
        is_concept=is_concept,
        is_position=is_position,
        original=original
    )


def _concept_first(is_concept: bool, score: float):
    # Concept labels outrank everything else whatever the numeric score
    return (0 if is_concept else 1, -score)


class BroadcastOverlayFilter:
    """Stateless per-frame selector for a minimal broadcast look"""

    def __init__(self,
                 max_callouts: int = MAX_CALLOUTS,
                 max_arrows: int = MAX_ARROWS,
                 max_circles: int = MAX_CIRCLES,
                 max_micro_stories: int = MAX_MICRO_STORIES):
        """
        Initialize broadcast overlay filter

        Args:
            max_callouts: Maximum text callouts per frame
            max_arrows: Maximum arrows per frame
            max_circles: Maximum circled players per frame
            max_micro_stories: Maximum terminology popups per frame in learn mode
        """
        self.max_callouts = max_callouts
        self.max_arrows = max_arrows
        self.max_circles = max_circles
        self.max_micro_stories = max_micro_stories

    def filter_frame(self,
                     players: List[PlayerAnnotation],
                     arrows: List[ArrowAnnotation],
                     terminology: List[TerminologyAnnotation],
                     learn_mode: bool = False) -> BroadcastFrame:
        """
        Reduce one frame to what a broadcast overlay would show

        Args:
            players: Frame players
            arrows: Frame arrows
            terminology: Frame terminology
            learn_mode: Whether terminology may surface at all

        Returns:
            Capped players, arrows, terminology and text callouts
        """
        return BroadcastFrame(
            players=self.select_players_for_circles(players),
            arrows=self.select_arrows(arrows),
            terminology=self.select_terminology(terminology, learn_mode),
            callouts=self.select_callouts(arrows, terminology, learn_mode)
        )

    def select_callouts(self,
                        arrows: List[ArrowAnnotation],
                        terminology: List[TerminologyAnnotation],
                        learn_mode: bool = False) -> List[ScoredCallout]:
        candidates = [score_callout(a.label, 'arrow', a) for a in arrows if a.label]

        if learn_mode:
            candidates.extend(score_callout(t.term, 'terminology', t) for t in terminology)

        candidates.sort(key=lambda c: _concept_first(c.is_concept, c.score))
        return candidates[:self.max_callouts]

    def select_arrows(self, arrows: List[ArrowAnnotation]) -> List[ArrowAnnotation]:
        scored = []
        for arrow in arrows:
            has_concept = bool(arrow.label) and is_concept_label(arrow.label)
            score = (10 if has_concept else 0) + (5 if arrow.label else 0)
            scored.append((has_concept, score, arrow))

        scored.sort(key=lambda item: _concept_first(item[0], item[1]))
        return [arrow for _, _, arrow in scored[:self.max_arrows]]

    def select_players_for_circles(self, players: List[PlayerAnnotation]) -> List[PlayerAnnotation]:
        # Key actors score 10, plus 5 when highlighted
        key_actors = [(10 + (5 if p.highlight else 0), p) for p in players if is_key_actor(p)]
        key_actors.sort(key=lambda item: -item[0])
        return [player for _, player in key_actors[:self.max_circles]]

    def select_terminology(self,
                           terminology: List[TerminologyAnnotation],
                           learn_mode: bool) -> List[TerminologyAnnotation]:
        """Terminology popups only surface in learn mode"""
        if not learn_mode:
            return []

        scored = []
        for term in terminology:
            is_concept = is_concept_label(term.term)
            if is_concept:
                score = 10
            elif is_position_label(term.term):
                score = 2
            else:
                score = 5
            scored.append((is_concept, score, term))

        scored.sort(key=lambda item: _concept_first(item[0], item[1]))
        return [term for _, _, term in scored[:self.max_micro_stories]]
