"""
Core data models for football play annotations
"""

from dataclasses import dataclass, field
from typing import List, Dict, Optional, Tuple, Any
from enum import Enum

from .constants import PLAYER_NORMAL_COLOR, ARROW_COLOR, DEFAULT_VIDEO_WIDTH, DEFAULT_VIDEO_HEIGHT

Point = Tuple[float, float]


@dataclass
class PlayerAnnotation:
    """Player marker in percentage space (0-100)"""
    id: str
    x: float
    y: float
    label: str = ""
    highlight: bool = False
    color: str = PLAYER_NORMAL_COLOR

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'x': self.x,
            'y': self.y,
            'label': self.label,
            'highlight': self.highlight,
            'color': self.color
        }


@dataclass
class ArrowAnnotation:
    """Movement arrow between two percentage points"""
    from_xy: Point
    to_xy: Point
    color: str = ARROW_COLOR
    label: Optional[str] = None
    dashed: bool = False
    id: Optional[str] = None  # Assigned at ingestion by ArrowIdentityAssigner

    @property
    def midpoint(self) -> Point:
        return ((self.from_xy[0] + self.to_xy[0]) / 2, (self.from_xy[1] + self.to_xy[1]) / 2)

    def same_endpoints(self, other: 'ArrowAnnotation') -> bool:
        """Structural identity: identical from/to pairs"""
        return (tuple(self.from_xy) == tuple(other.from_xy) and
                tuple(self.to_xy) == tuple(other.to_xy))

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'from': list(self.from_xy),
            'to': list(self.to_xy),
            'color': self.color,
            'dashed': self.dashed
        }
        if self.label is not None:
            data['label'] = self.label
        return data


@dataclass
class TerminologyAnnotation:
    """Educational term call-out anchored at a percentage point"""
    x: float
    y: float
    term: str
    definition: str = ""
    duration: Optional[float] = None  # Seconds to remain visible once shown

    def to_dict(self) -> Dict[str, Any]:
        return {
            'x': self.x,
            'y': self.y,
            'term': self.term,
            'definition': self.definition,
            'duration': self.duration
        }


@dataclass
class AnnotationFrame:
    """Keyframe: timestamped snapshot of annotation state"""
    timestamp: float
    players: List[PlayerAnnotation] = field(default_factory=list)
    arrows: List[ArrowAnnotation] = field(default_factory=list)
    terminology: List[TerminologyAnnotation] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'timestamp': self.timestamp,
            'players': [p.to_dict() for p in self.players],
            'arrows': [a.to_dict() for a in self.arrows],
            'terminology': [t.to_dict() for t in self.terminology]
        }


@dataclass
class InterpolatedPlayer(PlayerAnnotation):
    opacity: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['opacity'] = round(self.opacity, 4)
        return data


@dataclass
class InterpolatedArrow(ArrowAnnotation):
    opacity: float = 1.0

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['opacity'] = round(self.opacity, 4)
        return data


@dataclass
class InterpolatedTerminology(TerminologyAnnotation):
    opacity: float = 1.0
    start_time: float = 0.0  # When the fade-in began

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data['opacity'] = round(self.opacity, 4)
        data['start_time'] = self.start_time
        return data


@dataclass
class InterpolatedFrame:
    """Frame to draw at a query time. Rebuilt on every query."""
    players: List[InterpolatedPlayer] = field(default_factory=list)
    arrows: List[InterpolatedArrow] = field(default_factory=list)
    terminology: List[InterpolatedTerminology] = field(default_factory=list)

    @property
    def entity_count(self) -> int:
        return len(self.players) + len(self.arrows) + len(self.terminology)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'players': [p.to_dict() for p in self.players],
            'arrows': [a.to_dict() for a in self.arrows],
            'terminology': [t.to_dict() for t in self.terminology]
        }


@dataclass
class CalloutAnchor:
    x: float
    y: float
    player_id: Optional[str] = None


@dataclass
class CalloutCircle:
    x: float
    y: float
    r: float


@dataclass
class CalloutArrow:
    from_xy: Point
    to_xy: Point


@dataclass
class EditorialCallout:
    """Long-lived play-level explanatory overlay"""
    id: str
    start_time: float
    end_time: float
    text: str
    detail: str
    anchor: CalloutAnchor

    # Decoration: at most one of circle/arrow
    circle: Optional[CalloutCircle] = None
    arrow: Optional[CalloutArrow] = None

    @property
    def duration(self) -> float:
        return self.end_time - self.start_time

    def is_active(self, current_time: float) -> bool:
        return self.start_time <= current_time <= self.end_time

    def to_dict(self) -> Dict[str, Any]:
        data = {
            'id': self.id,
            'start_time': self.start_time,
            'end_time': self.end_time,
            'text': self.text,
            'detail': self.detail,
            'anchor': {'x': self.anchor.x, 'y': self.anchor.y}
        }
        if self.anchor.player_id is not None:
            data['anchor']['player_id'] = self.anchor.player_id
        if self.circle is not None:
            data['circle'] = {'x': self.circle.x, 'y': self.circle.y, 'r': self.circle.r}
        elif self.arrow is not None:
            data['arrow'] = {'from': list(self.arrow.from_xy), 'to': list(self.arrow.to_xy)}
        return data


class RejectionReason(Enum):
    """Why a raw callout was not kept"""
    NOT_AN_OBJECT = "not_an_object"
    MISSING_FIELD = "missing_field"
    INVALID_NUMBER = "invalid_number"
    TOO_SHORT = "too_short"
    SETUP_TERM = "setup_term"
    OVER_CAP = "over_cap"
    NO_ROOM = "no_room"


@dataclass
class CalloutRejection:
    """Typed rejection produced by the callout parse/schedule steps"""
    reason: RejectionReason
    callout_id: Optional[str] = None
    message: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'reason': self.reason.value,
            'callout_id': self.callout_id,
            'message': self.message
        }


@dataclass
class CanvasDimensions:
    """Affine mapping from percentage space to pixel space"""
    width: float
    height: float
    offset_x: float = 0.0
    offset_y: float = 0.0
    scale: float = 1.0

    @property
    def center(self) -> Point:
        return (self.offset_x + self.width / 2, self.offset_y + self.height / 2)

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0


class Side(Enum):
    TOP = "top"
    RIGHT = "right"
    BOTTOM = "bottom"
    LEFT = "left"


@dataclass
class Placement:
    """Top-left corner of a placed box and the side it ended up on"""
    x: float
    y: float
    placement: Side

    def to_dict(self) -> Dict[str, Any]:
        return {'x': round(self.x, 2), 'y': round(self.y, 2), 'placement': self.placement.value}


@dataclass
class PlayData:
    """Validated annotation set for one play"""
    video_duration: float
    video_url: str = ""
    play_summary: str = ""
    frames: List[AnnotationFrame] = field(default_factory=list)
    callouts: List[EditorialCallout] = field(default_factory=list)
    rejections: List[CalloutRejection] = field(default_factory=list)

    # Source video geometry
    video_width: int = DEFAULT_VIDEO_WIDTH
    video_height: int = DEFAULT_VIDEO_HEIGHT

    @property
    def frame_count(self) -> int:
        return len(self.frames)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'video_duration': self.video_duration,
            'video_url': self.video_url,
            'play_summary': self.play_summary,
            'frames': [f.to_dict() for f in self.frames],
            'callouts': [c.to_dict() for c in self.callouts],
            'rejections': [r.to_dict() for r in self.rejections]
        }
