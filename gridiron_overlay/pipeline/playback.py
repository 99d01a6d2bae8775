"""
Per-tick orchestration of interpolation, term scheduling, callouts and placement
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any
import logging

from gridiron_overlay.config import Settings, get_settings
from gridiron_overlay.core import (
    PlayData, InterpolatedFrame, InterpolatedTerminology, EditorialCallout,
    CanvasDimensions, Placement
)
from gridiron_overlay.editorial import active_callouts
from gridiron_overlay.geometry import BoxPlacer, estimate_box_size, to_canvas_coords
from gridiron_overlay.interpolation import FrameInterpolator
from gridiron_overlay.overlays import (
    TerminologyOverlayManager, BroadcastOverlayFilter, BroadcastFrame, AnnotationFilters, apply_filters
)
from gridiron_overlay.overlays.filters import filter_callouts, filter_terminology


@dataclass
class OverlayDecision:
    """Everything the renderer needs for one tick"""
    current_time: float
    frame: Optional[InterpolatedFrame] = None
    terms: List[InterpolatedTerminology] = field(default_factory=list)
    callouts: List[EditorialCallout] = field(default_factory=list)
    broadcast: Optional[BroadcastFrame] = None

    # Keyed by term text / callout id
    term_placements: Dict[str, Placement] = field(default_factory=dict)
    callout_placements: Dict[str, Placement] = field(default_factory=dict)

    @property
    def is_empty(self) -> bool:
        return (self.frame is None or self.frame.entity_count == 0) and not self.callouts

    def to_dict(self) -> Dict[str, Any]:
        return {
            'current_time': self.current_time,
            'frame': self.frame.to_dict() if self.frame is not None else None,
            'terms': [t.to_dict() for t in self.terms],
            'callouts': [c.to_dict() for c in self.callouts],
            'broadcast': self.broadcast.to_dict() if self.broadcast is not None else None,
            'term_placements': {k: p.to_dict() for k, p in self.term_placements.items()},
            'callout_placements': {k: p.to_dict() for k, p in self.callout_placements.items()}
        }


class PlaybackSession:
    """Owns one play and the stateful term scheduler that goes with it"""

    def __init__(self, play: PlayData, settings: Optional[Settings] = None):
        """
        Initialize playback session

        Args:
            play: Parsed play
            settings: Engine settings (global settings if None)
        """
        self.settings = settings or get_settings()
        self.logger = logging.getLogger(__name__)

        self.interpolator = FrameInterpolator(
            fade_seconds=self.settings.term_fade_seconds,
            late_fade_in_threshold=self.settings.term_late_fade_in_threshold,
            default_term_duration=self.settings.default_term_duration
        )
        self.broadcast_filter = BroadcastOverlayFilter(
            max_callouts=self.settings.max_callouts,
            max_arrows=self.settings.max_arrows,
            max_circles=self.settings.max_circles,
            max_micro_stories=self.settings.max_micro_stories
        )
        self.placer = BoxPlacer(
            offset=self.settings.placement_offset,
            safe_margin=self.settings.safe_margin
        )

        self.play = play
        self.term_manager = self._new_term_manager()

        # Session statistics
        self.ticks = 0
        self.empty_ticks = 0

    def load_play(self, play: PlayData):
        """Switch to another play; term history never carries over"""
        self.play = play
        self.term_manager.reset(0.0)
        self.ticks = 0
        self.empty_ticks = 0
        self.logger.info(f"Loaded play with {play.frame_count} frames and {len(play.callouts)} callouts")

    def tick(self,
             current_time: float,
             dimensions: CanvasDimensions,
             learn_mode: bool = False,
             broadcast: bool = False,
             filters: Optional[AnnotationFilters] = None) -> OverlayDecision:
        """
        Compute the overlay for one playback time

        Args:
            current_time: Playback time in seconds
            dimensions: Current canvas dimensions
            learn_mode: Let terminology surface through the broadcast filter
            broadcast: Apply the broadcast density caps
            filters: Viewer filters applied to the frame, callouts and shown terms

        Returns:
            OverlayDecision for this tick
        """
        frame = self.interpolator.interpolate(self.play.frames, current_time)
        callouts = active_callouts(self.play.callouts, current_time)

        if filters is not None:
            if frame is not None:
                frame, callouts = apply_filters(frame, callouts, filters)
            else:
                callouts = filter_callouts(callouts, filters)

        candidates = frame.terminology if frame is not None else []
        players = frame.players if frame is not None else []
        # Exactly one scheduler call per tick
        self.term_manager.select_terms_to_display(candidates, players, dimensions, current_time)

        # Everything still displayed, including picks from earlier ticks
        terms = self.term_manager.get_visible_terms()
        if filters is not None:
            terms = filter_terminology(terms, filters)

        decision = OverlayDecision(
            current_time=current_time,
            frame=frame,
            terms=terms,
            callouts=callouts
        )

        if broadcast and frame is not None:
            decision.broadcast = self.broadcast_filter.filter_frame(
                frame.players, frame.arrows, terms, learn_mode
            )

        if not dimensions.is_empty:
            decision.term_placements = self._place_terms(terms, dimensions)
            decision.callout_placements = self._place_callouts(callouts, dimensions)

        self.ticks += 1
        if decision.is_empty:
            self.empty_ticks += 1

        self.logger.debug(f"Tick {current_time:.3f}s: {len(terms)} terms, {len(callouts)} callouts")
        return decision

    def get_stats(self) -> Dict[str, int]:
        return {
            'ticks': self.ticks,
            'empty_ticks': self.empty_ticks,
            'frames': self.play.frame_count,
            'callouts': len(self.play.callouts)
        }

    def _new_term_manager(self) -> TerminologyOverlayManager:
        return TerminologyOverlayManager(
            play_start=0.0,
            max_terms=self.settings.max_terms_on_screen,
            cooldown_seconds=self.settings.term_cooldown_seconds,
            display_seconds=self.settings.term_display_seconds,
            collision_threshold=self.settings.term_collision_threshold,
            highlighted_player_distance=self.settings.highlighted_player_distance
        )

    def _place_terms(self,
                     terms: List[InterpolatedTerminology],
                     dimensions: CanvasDimensions) -> Dict[str, Placement]:
        placements = {}
        for term in terms:
            anchor = to_canvas_coords((term.x, term.y), dimensions)
            width, height = estimate_box_size(term.term, term.definition, dimensions)
            placements[term.term] = self.placer.place_terminology(anchor, width, height, dimensions)
        return placements

    def _place_callouts(self,
                        callouts: List[EditorialCallout],
                        dimensions: CanvasDimensions) -> Dict[str, Placement]:
        placements = {}
        for callout in callouts:
            anchor = to_canvas_coords((callout.anchor.x, callout.anchor.y), dimensions)
            width, height = estimate_box_size(callout.text, callout.detail, dimensions)
            placements[callout.id] = self.placer.place_terminology(anchor, width, height, dimensions)
        return placements
