"""
Parse step for raw editorial callouts.

Each raw callout yields either a validated EditorialCallout or a typed
CalloutRejection; nothing downstream sees unvalidated data.
"""

from typing import Any, Optional, Union

from gridiron_overlay.core import (
    EditorialCallout, CalloutAnchor, CalloutCircle, CalloutArrow,
    CalloutRejection, RejectionReason
)
from gridiron_overlay.core.constants import MAX_CALLOUT_TEXT, MAX_CALLOUT_DETAIL
from gridiron_overlay.geometry import clamp_percent
from gridiron_overlay.utils.numeric import optional_number

ParseResult = Union[EditorialCallout, CalloutRejection]


def parse_callout(raw: Any,
                  max_text: int = MAX_CALLOUT_TEXT,
                  max_detail: int = MAX_CALLOUT_DETAIL) -> ParseResult:
    """
    Validate one raw callout object

    Args:
        raw: Decoded JSON value proposed by the analysis service
        max_text: Maximum text length kept
        max_detail: Maximum detail length kept

    Returns:
        EditorialCallout, or CalloutRejection describing the first problem found
    """
    if not isinstance(raw, dict):
        return CalloutRejection(RejectionReason.NOT_AN_OBJECT, message="callout is not an object")

    callout_id = raw.get('id')
    if callout_id is None or callout_id == '':
        return CalloutRejection(RejectionReason.MISSING_FIELD, message="missing id")
    callout_id = str(callout_id)

    for key in ('start_time', 'end_time'):
        if key not in raw:
            return CalloutRejection(RejectionReason.MISSING_FIELD, callout_id, f"missing {key}")

    start_time = optional_number(raw.get('start_time'))
    end_time = optional_number(raw.get('end_time'))
    if start_time is None or end_time is None:
        return CalloutRejection(RejectionReason.INVALID_NUMBER, callout_id, "start_time/end_time must be numbers")

    text = raw.get('text')
    detail = raw.get('detail')
    if not text:
        return CalloutRejection(RejectionReason.MISSING_FIELD, callout_id, "missing text")
    if not detail:
        return CalloutRejection(RejectionReason.MISSING_FIELD, callout_id, "missing detail")

    anchor = _parse_anchor(raw.get('anchor'))
    if isinstance(anchor, CalloutRejection):
        anchor.callout_id = callout_id
        return anchor

    circle = _parse_circle(raw.get('circle'))
    # Circle wins when both decorations are present
    arrow = None if circle is not None else _parse_arrow(raw.get('arrow'))

    return EditorialCallout(
        id=callout_id,
        start_time=start_time,
        end_time=end_time,
        text=str(text)[:max_text],
        detail=str(detail)[:max_detail],
        anchor=anchor,
        circle=circle,
        arrow=arrow
    )


def _parse_anchor(raw: Any) -> Union[CalloutAnchor, CalloutRejection]:
    if not isinstance(raw, dict):
        return CalloutRejection(RejectionReason.MISSING_FIELD, message="missing anchor")

    x = optional_number(raw.get('x'))
    y = optional_number(raw.get('y'))
    if x is None or y is None:
        return CalloutRejection(RejectionReason.INVALID_NUMBER, message="anchor x/y must be numbers")

    player_id = raw.get('player_id')
    return CalloutAnchor(
        x=clamp_percent(x),
        y=clamp_percent(y),
        player_id=str(player_id) if player_id else None
    )


def _parse_circle(raw: Any) -> Optional[CalloutCircle]:
    if not isinstance(raw, dict):
        return None

    values = [optional_number(raw.get(key)) for key in ('x', 'y', 'r')]
    if any(v is None for v in values):
        return None

    x, y, r = values
    if r <= 0:
        return None
    return CalloutCircle(x=clamp_percent(x), y=clamp_percent(y), r=r)


def _parse_arrow(raw: Any) -> Optional[CalloutArrow]:
    if not isinstance(raw, dict):
        return None

    from_xy = parse_point(raw.get('from'))
    to_xy = parse_point(raw.get('to'))
    if from_xy is None or to_xy is None:
        return None
    return CalloutArrow(from_xy=from_xy, to_xy=to_xy)


def parse_point(raw: Any) -> Optional[tuple]:
    """[x, y] percentage pair, clamped; None when not a numeric pair"""
    if not isinstance(raw, (list, tuple)) or len(raw) != 2:
        return None

    x = optional_number(raw[0])
    y = optional_number(raw[1])
    if x is None or y is None:
        return None
    return (clamp_percent(x), clamp_percent(y))

