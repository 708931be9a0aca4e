"""
DrawingCanvas - On-screen view of the drawing surface

Shows the session's fixed-resolution surface stretched to the widget and
forwards mouse and touch input to the session. Touch events are accepted
so the platform does not scroll or run gestures while a stroke is active.
"""

from typing import Optional

from PyQt6.QtWidgets import QWidget, QSizePolicy
from PyQt6.QtCore import Qt, QEvent, QPoint, QRectF
from PyQt6.QtGui import QPainter, QColor, QCursor

from ..config import Config
from ..core.session import DrawingSession


class DrawingCanvas(QWidget):
    """
    Widget displaying the drawing surface.

    The display rect is re-read from the widget geometry on every event,
    so resizing between two moves keeps coordinates correct.
    """

    def __init__(self, session: DrawingSession, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._session = session

        self.setAttribute(Qt.WidgetAttribute.WA_AcceptTouchEvents, True)
        self.setAttribute(Qt.WidgetAttribute.WA_OpaquePaintEvent, True)
        self.setCursor(QCursor(Qt.CursorShape.CrossCursor))
        self.setMinimumHeight(Config.MIN_CANVAS_HEIGHT)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)

        session.surface_changed.connect(self.update)

    def display_rect(self) -> QRectF:
        """Canvas rect in widget-local coordinates."""
        return QRectF(self.rect())

    def global_display_rect(self) -> QRectF:
        """Canvas rect in global (screen) coordinates, used for touch points."""
        origin = self.mapToGlobal(QPoint(0, 0))
        return QRectF(origin.x(), origin.y(), self.width(), self.height())

    # ==================== Painting ====================

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
        painter.fillRect(self.rect(), QColor(Config.BASE_COLOR))
        painter.drawImage(self.display_rect(), self._session.surface())

        # Border
        painter.setPen(QColor("#000000"))
        painter.drawRect(self.rect().adjusted(0, 0, -1, -1))
        painter.end()

    # ==================== Mouse Events ====================

    def mousePressEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            if self._session.pointer_pressed(pos.x(), pos.y(), self.display_rect()):
                event.accept()
                return
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event):
        pos = event.position()
        if self._session.pointer_moved(pos.x(), pos.y(), self.display_rect()):
            event.accept()
            return
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.MouseButton.LeftButton:
            self._session.pointer_released()
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event):
        """Leaving the canvas ends the stroke."""
        self._session.pointer_released()
        super().leaveEvent(event)

    # ==================== Touch Events ====================

    def event(self, event):
        """Intercept touch events before Qt synthesizes mouse events."""
        event_type = event.type()

        if event_type in (QEvent.Type.TouchBegin, QEvent.Type.TouchUpdate):
            points = event.points()
            if points:
                pos = points[0].globalPosition()
                rect = self.global_display_rect()
                if event_type == QEvent.Type.TouchBegin:
                    self._session.pointer_pressed(pos.x(), pos.y(), rect, touch=True)
                else:
                    self._session.pointer_moved(pos.x(), pos.y(), rect, touch=True)
            event.accept()
            return True

        if event_type in (QEvent.Type.TouchEnd, QEvent.Type.TouchCancel):
            self._session.pointer_released()
            event.accept()
            return True

        return super().event(event)


__all__ = ['DrawingCanvas']
