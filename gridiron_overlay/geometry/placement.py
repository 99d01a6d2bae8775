"""
Viewport-aware placement of callout boxes (flip + shift)
"""

from typing import Dict, Optional, Tuple

from gridiron_overlay.core import CanvasDimensions, Placement, Point, Side
from gridiron_overlay.core.constants import PLACEMENT_OFFSET, SAFE_MARGIN, IN_BOUNDS_BONUS
from .coordinates import frame_bounds

# Rough glyph width relative to font size, used when no text metrics are available
CHAR_WIDTH_RATIO = 0.55


class BoxPlacer:
    """Pick the least-overflowing side for a box and clamp it inside the frame"""

    def __init__(self,
                 offset: float = PLACEMENT_OFFSET,
                 safe_margin: float = SAFE_MARGIN):
        """
        Initialize box placer

        Args:
            offset: Gap between the anchor point and the box edge
            safe_margin: Inset from the video frame the box should respect
        """
        self.offset = offset
        self.safe_margin = safe_margin

    def place(self,
              anchor: Point,
              box_width: float,
              box_height: float,
              dimensions: CanvasDimensions,
              preferred: Side = Side.TOP) -> Placement:
        """
        Place a box next to an anchor point

        Args:
            anchor: Anchor in canvas pixels
            box_width: Box width in pixels
            box_height: Box height in pixels
            dimensions: Current canvas dimensions
            preferred: Side to use when several fit equally well

        Returns:
            Top-left corner of the box and the chosen side
        """
        bounds = frame_bounds(dimensions, self.safe_margin)
        candidates = self._candidates(anchor, box_width, box_height)

        # Preferred side first so it wins ties
        best_side = preferred
        best_score = self._score(candidates[preferred], box_width, box_height, bounds)

        for side, position in candidates.items():
            if side == preferred:
                continue
            score = self._score(position, box_width, box_height, bounds)
            if score > best_score:
                best_side = side
                best_score = score

        x, y = self._clamp(candidates[best_side], box_width, box_height, dimensions, bounds)
        return Placement(x=x, y=y, placement=best_side)

    def place_terminology(self,
                          anchor: Point,
                          box_width: float,
                          box_height: float,
                          dimensions: CanvasDimensions) -> Placement:
        """Place a term/callout box pointing away from the frame center"""
        return self.place(anchor, box_width, box_height, dimensions,
                          preferred=preferred_side_for_anchor(anchor, dimensions))

    def place_arrow_label(self,
                          from_point: Point,
                          to_point: Point,
                          label_width: float,
                          label_height: float,
                          dimensions: CanvasDimensions) -> Placement:
        """Place an arrow label above the arrow midpoint"""
        midpoint = ((from_point[0] + to_point[0]) / 2, (from_point[1] + to_point[1]) / 2)
        return self.place(midpoint, label_width, label_height, dimensions, preferred=Side.TOP)

    def _candidates(self, anchor: Point, width: float, height: float) -> Dict[Side, Point]:
        ax, ay = anchor
        return {
            Side.TOP: (ax - width / 2, ay - height - self.offset),
            Side.BOTTOM: (ax - width / 2, ay + self.offset),
            Side.LEFT: (ax - width - self.offset, ay - height / 2),
            Side.RIGHT: (ax + self.offset, ay - height / 2),
        }

    def _score(self,
               position: Point,
               width: float,
               height: float,
               bounds: Tuple[float, float, float, float]) -> float:
        """Higher is better: negative overflow, plus a bonus for fully in-bounds"""
        min_x, min_y, max_x, max_y = bounds
        x, y = position

        overflow_x = max(0.0, min_x - x) + max(0.0, x + width - max_x)
        overflow_y = max(0.0, min_y - y) + max(0.0, y + height - max_y)

        bonus = IN_BOUNDS_BONUS if overflow_x == 0 and overflow_y == 0 else 0.0
        return bonus - overflow_x - overflow_y

    def _clamp(self,
               position: Point,
               width: float,
               height: float,
               dimensions: CanvasDimensions,
               bounds: Tuple[float, float, float, float]) -> Point:
        min_x, min_y, max_x, max_y = bounds
        x = max(min_x, min(max_x - width, position[0]))
        y = max(min_y, min(max_y - height, position[1]))

        # Boxes wider/taller than the safe area still stay inside the frame itself
        frame_min_x, frame_min_y, frame_max_x, frame_max_y = frame_bounds(dimensions)
        x = max(frame_min_x, min(frame_max_x - width, x))
        y = max(frame_min_y, min(frame_max_y - height, y))
        return (x, y)


def preferred_side_for_anchor(anchor: Point, dimensions: CanvasDimensions) -> Side:
    """Quadrant heuristic: left half points right, right half points left"""
    center_x, _ = dimensions.center
    return Side.RIGHT if anchor[0] < center_x else Side.LEFT


def estimate_box_size(text: str,
                      detail: Optional[str],
                      dimensions: CanvasDimensions) -> Tuple[float, float]:
    """
    Approximate the pixel size of a title/detail callout box

    Mirrors the responsive sizing used by the overlay renderer: fonts and
    padding scale with the frame width and the detail line wraps at 30%
    of the frame (max 300px).
    """
    title_font = max(16.0, dimensions.width * 0.020)
    detail_font = max(12.0, dimensions.width * 0.014)
    padding = max(16.0, dimensions.width * 0.020)
    max_width = min(300.0, dimensions.width * 0.30)

    title_width = len(text or "") * title_font * CHAR_WIDTH_RATIO
    detail_width = len(detail or "") * detail_font * CHAR_WIDTH_RATIO

    width = max(title_width + padding * 2, min(max_width, detail_width + padding * 2))
    height = title_font + padding * 2.5
    if detail:
        height += detail_font * 1.4

    # Never ask for more room than the frame has
    width = min(width, max(dimensions.width, 0.0))
    height = min(height, max(dimensions.height, 0.0))
    return (width, height)
