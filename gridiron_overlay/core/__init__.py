"""
Core domain models and constants for the football overlay engine
"""

from .models import (
    PlayerAnnotation, ArrowAnnotation, TerminologyAnnotation, AnnotationFrame,
    InterpolatedPlayer, InterpolatedArrow, InterpolatedTerminology, InterpolatedFrame,
    CalloutAnchor, CalloutCircle, CalloutArrow, EditorialCallout,
    RejectionReason, CalloutRejection,
    CanvasDimensions, Side, Placement, PlayData, Point
)
from .constants import (
    MAX_TERMS_ON_SCREEN, TERM_COOLDOWN_SECONDS, TERM_DISPLAY_SECONDS,
    MAX_EDITORIAL_CALLOUTS, MIN_CALLOUT_DURATION, SAFE_MARGIN, PLACEMENT_OFFSET
)
from .vocabulary import normalize_term, is_concept_label, is_position_label

__all__ = [
    # Models
    'PlayerAnnotation', 'ArrowAnnotation', 'TerminologyAnnotation', 'AnnotationFrame',
    'InterpolatedPlayer', 'InterpolatedArrow', 'InterpolatedTerminology', 'InterpolatedFrame',
    'CalloutAnchor', 'CalloutCircle', 'CalloutArrow', 'EditorialCallout',
    'RejectionReason', 'CalloutRejection',
    'CanvasDimensions', 'Side', 'Placement', 'PlayData', 'Point',
    # Constants
    'MAX_TERMS_ON_SCREEN', 'TERM_COOLDOWN_SECONDS', 'TERM_DISPLAY_SECONDS',
    'MAX_EDITORIAL_CALLOUTS', 'MIN_CALLOUT_DURATION', 'SAFE_MARGIN', 'PLACEMENT_OFFSET',
    # Vocabulary helpers
    'normalize_term', 'is_concept_label', 'is_position_label'
]
