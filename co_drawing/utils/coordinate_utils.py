"""
Coordinate conversion utilities for the drawing canvas.

Maps positions reported in on-screen display space to the canvas's fixed
logical pixel space.
"""

import math
from typing import Tuple

from PyQt6.QtCore import QPointF, QRectF, QSizeF


class CoordinateMapper:
    """
    Converts display coordinates to logical canvas coordinates.

    The display rect is passed on every call and never cached, because the
    widget can be resized between two events.

    A degenerate display rect (zero width or height) yields NaN
    coordinates instead of raising; callers skip non-finite points.
    """

    def __init__(self, logical_width: int, logical_height: int):
        self._logical_size = QSizeF(logical_width, logical_height)

    @property
    def logical_size(self) -> QSizeF:
        return QSizeF(self._logical_size)

    def scale_factors(self, display_rect: QRectF) -> Tuple[float, float]:
        """
        Get (sx, sy) = logical / display for the given rect.

        Args:
            display_rect: The canvas' current on-screen rectangle

        Returns:
            Tuple of horizontal and vertical scale factors (NaN when degenerate)
        """
        width = display_rect.width()
        height = display_rect.height()
        sx = self._logical_size.width() / width if width > 0 else math.nan
        sy = self._logical_size.height() / height if height > 0 else math.nan
        return sx, sy

    def map_to_logical(self, x: float, y: float, display_rect: QRectF) -> QPointF:
        """
        Map a position relative to the canvas origin into logical space.

        Args:
            x: Horizontal offset inside the canvas (display pixels)
            y: Vertical offset inside the canvas (display pixels)
            display_rect: The canvas' current on-screen rectangle

        Returns:
            Position in logical pixel space
        """
        sx, sy = self.scale_factors(display_rect)
        return QPointF(x * sx, y * sy)

    def map_touch_to_logical(self, touch_x: float, touch_y: float, display_rect: QRectF) -> QPointF:
        """
        Map a touch point given in the same space as display_rect.

        The rect origin is subtracted first since touch points carry no
        canvas-relative offset.

        Args:
            touch_x: Touch x in the rect's coordinate space
            touch_y: Touch y in the rect's coordinate space
            display_rect: The canvas' current on-screen rectangle

        Returns:
            Position in logical pixel space
        """
        return self.map_to_logical(
            touch_x - display_rect.x(),
            touch_y - display_rect.y(),
            display_rect
        )


def is_finite_point(point: QPointF) -> bool:
    """Check that both components are real numbers (not NaN/inf)."""
    return math.isfinite(point.x()) and math.isfinite(point.y())


__all__ = ['CoordinateMapper', 'is_finite_point']
