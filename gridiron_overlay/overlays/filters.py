"""
Viewer-controlled annotation filters and presets
"""

from dataclasses import dataclass, asdict, replace
from typing import List, Dict, Tuple, Any

from gridiron_overlay.core import (
    InterpolatedFrame, InterpolatedPlayer, InterpolatedArrow, InterpolatedTerminology,
    EditorialCallout
)

PRIORITY_LEVELS = ('all', 'high', 'critical')

OFFENSIVE_ID_PREFIX = 'off_'
KEY_POSITIONS = ('QB', 'RB', 'WR', 'TE', 'CB', 'S', 'LB')
BALL_POSITIONS = ('QB', 'RB')
KEY_TERM_FRAGMENTS = (
    'blitz', 'coverage', 'zone', 'man', 'route', 'pressure',
    'play action', 'screen', 'read option', 'rpo'
)


@dataclass
class AnnotationFilters:
    """What the viewer wants drawn"""
    show_players: bool = True
    show_arrows: bool = True
    show_terminology: bool = True
    show_callouts: bool = True

    # Player filters
    show_highlighted_players_only: bool = False
    show_offensive_players: bool = True
    show_defensive_players: bool = True

    # One of PRIORITY_LEVELS
    priority_level: str = 'all'

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


FILTER_PRESETS: Dict[str, AnnotationFilters] = {
    'all': AnnotationFilters(),
    'key-players': AnnotationFilters(
        show_terminology=False,
        show_highlighted_players_only=True,
        priority_level='high'
    ),
    'minimal': AnnotationFilters(
        show_arrows=False,
        show_terminology=False,
        show_highlighted_players_only=True,
        show_defensive_players=False,
        priority_level='critical'
    ),
}


def get_preset(name: str) -> AnnotationFilters:
    """Copy of a named preset; unknown names give the default filters"""
    return replace(FILTER_PRESETS.get(name, FILTER_PRESETS['all']))


def is_offensive_player(player_id: str) -> bool:
    return player_id.startswith(OFFENSIVE_ID_PREFIX)


def player_priority(player: InterpolatedPlayer) -> int:
    priority = 0
    if player.highlight:
        priority += 100
    if player.label in KEY_POSITIONS:
        priority += 50
    if player.label in BALL_POSITIONS:
        priority += 30
    return priority


def arrow_priority(arrow: InterpolatedArrow) -> int:
    priority = 50
    if arrow.label:
        priority += 30
    if not arrow.dashed:
        priority += 20
    return priority


def terminology_priority(term: InterpolatedTerminology) -> int:
    priority = 40
    term_lower = term.term.lower()
    if any(fragment in term_lower for fragment in KEY_TERM_FRAGMENTS):
        priority += 60
    return priority


def filter_players(players: List[InterpolatedPlayer], filters: AnnotationFilters) -> List[InterpolatedPlayer]:
    if not filters.show_players:
        return []

    kept = []
    for player in players:
        offensive = is_offensive_player(player.id)
        if offensive and not filters.show_offensive_players:
            continue
        if not offensive and not filters.show_defensive_players:
            continue
        if filters.show_highlighted_players_only and not player.highlight:
            continue

        priority = player_priority(player)
        if filters.priority_level == 'high' and priority < 50:
            continue
        if filters.priority_level == 'critical' and priority < 100:
            continue
        kept.append(player)
    return kept


def filter_arrows(arrows: List[InterpolatedArrow], filters: AnnotationFilters) -> List[InterpolatedArrow]:
    if not filters.show_arrows:
        return []

    kept = []
    for arrow in arrows:
        priority = arrow_priority(arrow)
        if filters.priority_level == 'high' and priority < 70:
            continue
        if filters.priority_level == 'critical' and priority < 90:
            continue
        kept.append(arrow)
    return kept


def filter_terminology(terminology: List[InterpolatedTerminology],
                       filters: AnnotationFilters) -> List[InterpolatedTerminology]:
    # No terminology at all in critical mode
    if not filters.show_terminology or filters.priority_level == 'critical':
        return []
    if filters.priority_level == 'high':
        return [t for t in terminology if terminology_priority(t) >= 70]
    return list(terminology)


def filter_callouts(callouts: List[EditorialCallout], filters: AnnotationFilters) -> List[EditorialCallout]:
    """Callouts are always high priority; only critical mode hides them"""
    if not filters.show_callouts or filters.priority_level == 'critical':
        return []
    return list(callouts)


def apply_filters(frame: InterpolatedFrame,
                  callouts: List[EditorialCallout],
                  filters: AnnotationFilters) -> Tuple[InterpolatedFrame, List[EditorialCallout]]:
    """
    Apply viewer filters to one tick's output

    Args:
        frame: Interpolated frame
        callouts: Active editorial callouts
        filters: Viewer filter settings

    Returns:
        Filtered frame and filtered callouts
    """
    filtered = InterpolatedFrame(
        players=filter_players(frame.players, filters),
        arrows=filter_arrows(frame.arrows, filters),
        terminology=filter_terminology(frame.terminology, filters)
    )
    return filtered, filter_callouts(callouts, filters)


def get_filter_stats(frame: InterpolatedFrame,
                     callouts: List[EditorialCallout],
                     filters: AnnotationFilters) -> Dict[str, int]:
    """Count how many annotations the filters hide"""
    total = frame.entity_count + len(callouts)
    filtered_frame, filtered_callouts = apply_filters(frame, callouts, filters)
    shown = filtered_frame.entity_count + len(filtered_callouts)

    return {
        'total': total,
        'shown': shown,
        'hidden': total - shown
    }
