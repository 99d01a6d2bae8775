"""
Overlay selection: terminology scheduling, broadcast filtering, view filters
"""

from .terminology import TerminologyOverlayManager, TermHistory, is_in_safe_zone
from .broadcast import BroadcastOverlayFilter, BroadcastFrame, ScoredCallout, is_key_actor
from .filters import AnnotationFilters, FILTER_PRESETS, get_preset, apply_filters, get_filter_stats
from .play_terms import (
    extract_play_terms, group_play_terms_by_category, get_category_display_name, extract_play_info
)

__all__ = [
    'TerminologyOverlayManager', 'TermHistory', 'is_in_safe_zone',
    'BroadcastOverlayFilter', 'BroadcastFrame', 'ScoredCallout', 'is_key_actor',
    'AnnotationFilters', 'FILTER_PRESETS', 'get_preset', 'apply_filters', 'get_filter_stats',
    'extract_play_terms', 'group_play_terms_by_category', 'get_category_display_name',
    'extract_play_info'
]
