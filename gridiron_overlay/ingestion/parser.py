"""
Play document ingestion: normalize raw analysis output into PlayData
"""

import re
from typing import Any, Dict, List, Optional
import logging

from gridiron_overlay.config import Settings, get_settings
from gridiron_overlay.core import (
    PlayData, AnnotationFrame, PlayerAnnotation, ArrowAnnotation, TerminologyAnnotation
)
from gridiron_overlay.core.constants import PLAYER_NORMAL_COLOR, ARROW_COLOR
from gridiron_overlay.editorial import EditorialCalloutScheduler, parse_point
from gridiron_overlay.geometry import clamp_percent
from gridiron_overlay.tracking import ArrowIdentityAssigner
from gridiron_overlay.utils import load_json
from gridiron_overlay.utils.numeric import finite_or_default, optional_number

logger = logging.getLogger(__name__)

HEX_COLOR = re.compile(r'^#[0-9A-Fa-f]{6}$')


def is_valid_hex(color: Any) -> bool:
    return isinstance(color, str) and bool(HEX_COLOR.match(color))


def _as_list(value: Any) -> List[Any]:
    return value if isinstance(value, list) else []


def _dimension(value: Any, default: int) -> int:
    number = optional_number(value)
    return int(number) if number is not None and number > 0 else default


def normalize_player(raw: Dict[str, Any]) -> PlayerAnnotation:
    return PlayerAnnotation(
        id=str(raw.get('id') or 'unknown'),
        x=clamp_percent(raw.get('x')),
        y=clamp_percent(raw.get('y')),
        label=str(raw.get('label') or ''),
        highlight=bool(raw.get('highlight')),
        color=raw['color'] if is_valid_hex(raw.get('color')) else PLAYER_NORMAL_COLOR
    )


def normalize_arrow(raw: Dict[str, Any]) -> Optional[ArrowAnnotation]:
    """Arrows without a usable from/to pair are dropped"""
    from_xy = parse_point(raw.get('from'))
    to_xy = parse_point(raw.get('to'))
    if from_xy is None or to_xy is None:
        return None

    label = raw.get('label')
    arrow_id = raw.get('id')
    return ArrowAnnotation(
        from_xy=from_xy,
        to_xy=to_xy,
        color=raw['color'] if is_valid_hex(raw.get('color')) else ARROW_COLOR,
        label=str(label) if label else None,
        dashed=bool(raw.get('dashed')),
        id=str(arrow_id) if arrow_id else None
    )


def normalize_terminology(raw: Dict[str, Any], default_duration: float) -> TerminologyAnnotation:
    duration = optional_number(raw.get('duration'))
    if duration is None or duration <= 0:
        duration = default_duration

    return TerminologyAnnotation(
        x=clamp_percent(raw.get('x')),
        y=clamp_percent(raw.get('y')),
        term=str(raw.get('term') or ''),
        definition=str(raw.get('definition') or ''),
        duration=duration
    )


def normalize_frame(raw: Dict[str, Any], default_term_duration: float) -> AnnotationFrame:
    """
    Normalize one raw keyframe

    Non-numeric coordinates become 0, percentages are clamped, invalid colors
    fall back to defaults and duplicate player ids keep the first occurrence.
    """
    players = []
    seen_ids = set()
    for raw_player in _as_list(raw.get('players')):
        if not isinstance(raw_player, dict):
            continue
        player = normalize_player(raw_player)
        if player.id in seen_ids:
            logger.debug(f"Dropping duplicate player id {player.id}")
            continue
        seen_ids.add(player.id)
        players.append(player)

    arrows = []
    for raw_arrow in _as_list(raw.get('arrows')):
        arrow = normalize_arrow(raw_arrow) if isinstance(raw_arrow, dict) else None
        if arrow is None:
            logger.debug("Dropping arrow without valid endpoints")
            continue
        arrows.append(arrow)

    terminology = [
        normalize_terminology(raw_term, default_term_duration)
        for raw_term in _as_list(raw.get('terminology'))
        if isinstance(raw_term, dict) and raw_term.get('term')
    ]

    return AnnotationFrame(
        timestamp=max(0.0, finite_or_default(raw.get('timestamp'))),
        players=players,
        arrows=arrows,
        terminology=terminology
    )


class PlayParser:
    """Builds validated PlayData from a raw analysis document"""

    def __init__(self, settings: Optional[Settings] = None):
        """
        Initialize play parser

        Args:
            settings: Engine settings (global settings if None)
        """
        self.settings = settings or get_settings()
        self.arrow_assigner = ArrowIdentityAssigner(match_distance=self.settings.arrow_match_distance)
        self.scheduler = EditorialCalloutScheduler(
            max_callouts=self.settings.max_editorial_callouts,
            min_duration=self.settings.min_callout_duration,
            gap_seconds=self.settings.callout_gap_seconds,
            first_start=self.settings.first_callout_start,
            max_text=self.settings.max_callout_text,
            max_detail=self.settings.max_callout_detail,
            drop_setup_callouts=self.settings.drop_setup_callouts
        )

    def parse(self, raw: Any) -> PlayData:
        """
        Parse a raw play document

        Args:
            raw: Decoded JSON document

        Returns:
            PlayData with sorted frames, stable arrow ids and scheduled callouts
        """
        if not isinstance(raw, dict):
            logger.warning("Play document is not an object, using an empty play")
            raw = {}

        video_duration = max(0.0, finite_or_default(raw.get('video_duration')))

        frames = []
        for raw_frame in _as_list(raw.get('frames')):
            if not isinstance(raw_frame, dict):
                logger.warning("Skipping keyframe that is not an object")
                continue
            frames.append(normalize_frame(raw_frame, self.settings.default_term_duration))

        # Stable sort: frames sharing a timestamp keep document order
        frames.sort(key=lambda f: f.timestamp)
        frames = self.arrow_assigner.assign(frames)

        raw_callouts = raw.get('callouts', raw.get('editorial_callouts'))
        schedule = self.scheduler.schedule(raw_callouts, video_duration)

        play = PlayData(
            video_duration=video_duration,
            video_url=str(raw.get('video_url') or ''),
            play_summary=str(raw.get('play_summary') or ''),
            frames=frames,
            callouts=schedule.callouts,
            rejections=schedule.rejections,
            video_width=_dimension(raw.get('video_width'), self.settings.default_video_width),
            video_height=_dimension(raw.get('video_height'), self.settings.default_video_height)
        )

        logger.info(f"Parsed play: {play.frame_count} frames, {len(play.callouts)} callouts, "
                    f"{len(play.rejections)} rejections")
        return play


def parse_play(raw: Any, settings: Optional[Settings] = None) -> PlayData:
    """Parse a raw play document with the given (or global) settings"""
    return PlayParser(settings).parse(raw)


def load_play(path: str, settings: Optional[Settings] = None) -> PlayData:
    """Read and parse a play document from a JSON file"""
    return parse_play(load_json(path), settings)
