"""
Coordinate mapping and overlay box placement
"""

from .coordinates import (
    clamp_percent, pixel_to_percent, percent_to_pixel,
    to_canvas_coords, to_normalized_coords, calculate_canvas_dimensions, frame_bounds
)
from .placement import BoxPlacer, preferred_side_for_anchor, estimate_box_size

__all__ = [
    'clamp_percent', 'pixel_to_percent', 'percent_to_pixel',
    'to_canvas_coords', 'to_normalized_coords', 'calculate_canvas_dimensions', 'frame_bounds',
    'BoxPlacer', 'preferred_side_for_anchor', 'estimate_box_size'
]
