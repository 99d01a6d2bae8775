"""
Percentage <-> pixel coordinate mapping
"""

from typing import Tuple

from gridiron_overlay.core import CanvasDimensions, Point
from gridiron_overlay.core.constants import PERCENT_MIN, PERCENT_MAX
from gridiron_overlay.utils.numeric import clamp, finite_or_default


def clamp_percent(value: float) -> float:
    """Clamp a percentage coordinate into 0-100 (non-numeric -> 0)"""
    return clamp(finite_or_default(value), PERCENT_MIN, PERCENT_MAX)


def pixel_to_percent(pixel: float, dimension: float) -> float:
    """Convert a pixel offset along one axis to a clamped percentage"""
    if not dimension:
        return 0.0
    return clamp_percent(pixel / dimension * 100)


def percent_to_pixel(percent: float, dimension: float) -> float:
    """Convert a percentage along one axis to a pixel offset"""
    return clamp_percent(percent) / 100 * dimension


def to_canvas_coords(point: Point, dimensions: CanvasDimensions) -> Point:
    """Map a (0-100) percentage point to canvas pixels, including letterbox offsets"""
    x, y = point
    return (
        dimensions.offset_x + finite_or_default(x) / 100 * dimensions.width,
        dimensions.offset_y + finite_or_default(y) / 100 * dimensions.height
    )


def to_normalized_coords(point: Point, dimensions: CanvasDimensions) -> Point:
    """Map canvas pixels back to percentage space"""
    if dimensions.is_empty:
        return (0.0, 0.0)
    x, y = point
    return (
        (x - dimensions.offset_x) / dimensions.width * 100,
        (y - dimensions.offset_y) / dimensions.height * 100
    )


def calculate_canvas_dimensions(container_width: float,
                                container_height: float,
                                video_width: float,
                                video_height: float) -> CanvasDimensions:
    """
    Fit the video inside its container, preserving aspect ratio

    Args:
        container_width: Width of the element the overlay is drawn on
        container_height: Height of the element the overlay is drawn on
        video_width: Intrinsic video width
        video_height: Intrinsic video height

    Returns:
        Dimensions of the rendered video area with pillarbox/letterbox offsets
    """
    if container_width <= 0 or container_height <= 0 or video_width <= 0 or video_height <= 0:
        return CanvasDimensions(width=0.0, height=0.0)

    container_aspect = container_width / container_height
    video_aspect = video_width / video_height

    offset_x = 0.0
    offset_y = 0.0

    if container_aspect > video_aspect:
        # Container wider than video: bars on the sides
        render_height = float(container_height)
        render_width = render_height * video_aspect
        offset_x = (container_width - render_width) / 2
    else:
        # Container taller than video: bars top and bottom
        render_width = float(container_width)
        render_height = render_width / video_aspect
        offset_y = (container_height - render_height) / 2

    return CanvasDimensions(
        width=render_width,
        height=render_height,
        offset_x=offset_x,
        offset_y=offset_y,
        scale=render_width / video_width
    )


def frame_bounds(dimensions: CanvasDimensions, margin: float = 0.0) -> Tuple[float, float, float, float]:
    """(min_x, min_y, max_x, max_y) of the video area shrunk by margin"""
    return (
        dimensions.offset_x + margin,
        dimensions.offset_y + margin,
        dimensions.offset_x + dimensions.width - margin,
        dimensions.offset_y + dimensions.height - margin
    )
