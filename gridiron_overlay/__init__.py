"""
Gridiron Overlay

Temporal annotation interpolation and overlay prioritization for
football play video:
- Keyframe interpolation with entity fade in/out
- Terminology popup scheduling with cooldowns and pinning
- Broadcast-style density caps
- Editorial callout validation and staggering
- Viewport-aware callout box placement
"""

__version__ = "1.0.0"

from .core import (
    AnnotationFrame, PlayerAnnotation, ArrowAnnotation, TerminologyAnnotation,
    InterpolatedFrame, EditorialCallout, CanvasDimensions, PlayData
)
from .config import Settings, get_settings
from .ingestion import parse_play, load_play
from .interpolation import FrameInterpolator, interpolate
from .overlays import TerminologyOverlayManager, BroadcastOverlayFilter
from .editorial import EditorialCalloutScheduler, active_callouts
from .geometry import BoxPlacer, calculate_canvas_dimensions
from .pipeline import PlaybackSession, OverlayDecision

__all__ = [
    # Core models
    'AnnotationFrame', 'PlayerAnnotation', 'ArrowAnnotation', 'TerminologyAnnotation',
    'InterpolatedFrame', 'EditorialCallout', 'CanvasDimensions', 'PlayData',

    # Configuration
    'Settings', 'get_settings',

    # Engine components
    'parse_play', 'load_play',
    'FrameInterpolator', 'interpolate',
    'TerminologyOverlayManager', 'BroadcastOverlayFilter',
    'EditorialCalloutScheduler', 'active_callouts',
    'BoxPlacer', 'calculate_canvas_dimensions',

    # Pipeline
    'PlaybackSession', 'OverlayDecision',

    # Version
    '__version__'
]
