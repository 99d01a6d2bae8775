"""
Play-level term extraction for the terms drawer
"""

import re
from typing import List, Dict, Optional, Any

from gridiron_overlay.core import PlayData, TerminologyAnnotation, normalize_term
from gridiron_overlay.core.vocabulary import PLAY_TERM_CATEGORIES, CATEGORY_DISPLAY_NAMES

DEFAULT_PLAY_TITLE = "Football Play Analysis"

_WHITESPACE = re.compile(r'\s+')
_SENTENCE_END = re.compile(r'[.!?]')


def _matches_category_term(normalized: str, category_term: str) -> bool:
    """Loose match so variations like 'Shotgun Formation' still hit"""
    category_term = category_term.lower()
    return (normalized == category_term or
            category_term in normalized or
            normalized in category_term or
            _WHITESPACE.sub('', normalized) == _WHITESPACE.sub('', category_term))


def match_category(term: str) -> Optional[str]:
    """First category a term belongs to, or None"""
    normalized = normalize_term(term)
    if not normalized:
        return None

    for category, category_terms in PLAY_TERM_CATEGORIES.items():
        if any(_matches_category_term(normalized, ct) for ct in category_terms):
            return category
    return None


def extract_play_terms(play: Optional[PlayData]) -> List[TerminologyAnnotation]:
    """
    Collect unique play-specific terms across all frames

    Terminology entries come first; arrow labels that name a play term are
    added at the arrow midpoint.

    Args:
        play: Parsed play, may be None

    Returns:
        Unique terms in first-seen order
    """
    if play is None or not play.frames:
        return []

    terms: Dict[str, TerminologyAnnotation] = {}

    for frame in play.frames:
        for term in frame.terminology:
            key = normalize_term(term.term)
            if key not in terms and match_category(term.term):
                terms[key] = term

    for frame in play.frames:
        for arrow in frame.arrows:
            if not arrow.label:
                continue
            key = normalize_term(arrow.label)
            if key not in terms and match_category(arrow.label):
                x, y = arrow.midpoint
                terms[key] = TerminologyAnnotation(
                    x=x,
                    y=y,
                    term=arrow.label,
                    definition=f"Movement pattern: {arrow.label}"
                )

    return list(terms.values())


def group_play_terms_by_category(terms: List[TerminologyAnnotation]) -> Dict[str, List[TerminologyAnnotation]]:
    """Group terms by their first matching category, dropping empty groups"""
    grouped: Dict[str, List[TerminologyAnnotation]] = {category: [] for category in PLAY_TERM_CATEGORIES}

    for term in terms:
        category = match_category(term.term)
        if category is not None:
            grouped[category].append(term)

    return {category: items for category, items in grouped.items() if items}


def get_category_display_name(category: str) -> str:
    return CATEGORY_DISPLAY_NAMES.get(category, category)


def extract_play_info(play: PlayData) -> Dict[str, Any]:
    """Header summary for a play"""
    player_ids = set()
    annotation_count = 0
    for frame in play.frames:
        player_ids.update(p.id for p in frame.players)
        annotation_count += len(frame.terminology)

    title = _SENTENCE_END.split(play.play_summary or '')[0].strip()

    return {
        'title': title or DEFAULT_PLAY_TITLE,
        'summary': play.play_summary,
        'duration': play.video_duration,
        'player_count': len(player_ids),
        'annotation_count': annotation_count,
        'frame_count': play.frame_count
    }
