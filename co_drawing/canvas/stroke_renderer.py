"""
StrokeRenderer - Incremental freehand stroke painting

Paints each pointer-move as one line segment directly onto the
compositor's surface. Strokes are not retained once finished; the raster
is the only record.
"""

import logging
from enum import Enum
from typing import List, Optional, Tuple

from PyQt6.QtCore import QObject, QPointF, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QPen

from ..config import Config
from ..utils.coordinate_utils import is_finite_point
from .compositor import CanvasCompositor


logger = logging.getLogger(__name__)


class StrokeState(Enum):
    IDLE = 0
    DRAWING = 1


def create_pen(color: QColor, width: float = Config.PEN_WIDTH) -> QPen:
    """Create the fixed-width round-capped pen used for freehand strokes."""
    pen = QPen(QColor(color), width)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
    return pen


class StrokeRenderer(QObject):
    """
    Two-state (Idle/Drawing) freehand renderer.

    - begin(): starts a new path, paints nothing, keeps existing pixels
    - extend(): strokes one segment from the previous point, immediately
    - end(): back to Idle, point list dropped

    The pen color is read for every segment, so a color change mid-stroke
    applies to the following segments.
    """

    stroke_started = pyqtSignal()
    stroke_finished = pyqtSignal(int)  # number of points in the finished path

    def __init__(self, compositor: CanvasCompositor, parent: Optional[QObject] = None):
        super().__init__(parent)
        self._compositor = compositor
        self._state = StrokeState.IDLE
        self._color = QColor(Config.DEFAULT_PEN_COLOR)
        self._width = Config.PEN_WIDTH
        self._points: List[QPointF] = []

    # ==================== Properties ====================

    @property
    def state(self) -> StrokeState:
        return self._state

    @property
    def is_drawing(self) -> bool:
        return self._state == StrokeState.DRAWING

    @property
    def color(self) -> QColor:
        return QColor(self._color)

    @color.setter
    def color(self, value: QColor):
        self._color = QColor(value)

    @property
    def width(self) -> int:
        return self._width

    def current_points(self) -> List[Tuple[float, float]]:
        """Points of the stroke in progress (empty when Idle)."""
        return [(p.x(), p.y()) for p in self._points]

    # ==================== Stroke Lifecycle ====================

    def begin(self, pos: QPointF) -> bool:
        """
        Start a new stroke at pos.

        Returns:
            True if the stroke started, False for a non-finite position
        """
        if not is_finite_point(pos):
            logger.debug("Ignoring stroke start at non-finite position")
            return False

        self._state = StrokeState.DRAWING
        self._points = [QPointF(pos)]
        self.stroke_started.emit()
        return True

    def extend(self, pos: QPointF) -> bool:
        """
        Stroke one segment from the last point to pos.

        Returns:
            True if a segment was painted
        """
        if self._state != StrokeState.DRAWING or not self._points:
            return False
        if not is_finite_point(pos):
            return False

        last = self._points[-1]
        with self._compositor.paint() as painter:
            painter.setPen(create_pen(self._color, self._width))
            painter.drawLine(last, pos)

        self._points.append(QPointF(pos))
        return True

    def end(self) -> int:
        """
        Finish the current stroke.

        Returns:
            Number of points the finished path had (0 if nothing was active)
        """
        if self._state != StrokeState.DRAWING:
            return 0

        count = len(self._points)
        self._state = StrokeState.IDLE
        self._points = []
        self.stroke_finished.emit(count)
        return count


__all__ = ['StrokeState', 'StrokeRenderer', 'create_pen']
