"""
EventBus - Central event system for application-wide state

Pattern: Observer/Publisher-Subscriber

The drawing session publishes here; widgets subscribe so they never
reach into the session's internals.
"""

from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal
from PyQt6.QtGui import QColor

from ..config import Config


class EventBus(QObject):
    """
    Central event bus for decoupled communication between components

    Usage:
        event_bus = get_event_bus()
        event_bus.ui_state_changed.connect(some_handler)
        event_bus.set_pen_color(QColor("#ff0000"))
    """

    # UI state machine
    ui_state_changed = pyqtSignal(object)  # UIState

    # Pen events
    pen_color_changed = pyqtSignal(QColor)

    # Generation events
    generation_started = pyqtSignal()
    generation_finished = pyqtSignal(bool)  # success

    # Model text returned with an image
    message_received = pyqtSignal(str)

    # Status line
    status_message = pyqtSignal(str)

    # Error events
    error_occurred = pyqtSignal(str, str)  # error_type, error_message

    def __init__(self):
        super().__init__()
        self._pen_color = QColor(Config.DEFAULT_PEN_COLOR)

    # Getters

    def get_pen_color(self) -> QColor:
        """Get current pen color"""
        return QColor(self._pen_color)

    # Setters (update state and emit signals)

    def set_pen_color(self, color: QColor):
        """
        Set pen color

        Args:
            color: New pen color
        """
        if self._pen_color != color:
            self._pen_color = QColor(color)
            self.pen_color_changed.emit(QColor(color))

    # Convenience methods

    def report_error(self, error_type: str, message: str):
        """
        Report an error to the UI

        Args:
            error_type: Type of error (e.g., "service", "parse", "validation")
            message: Human-readable error message
        """
        self.error_occurred.emit(error_type, message)

    def show_status(self, message: str):
        """Show a transient status line message"""
        self.status_message.emit(message)


# Singleton instance (lazy initialization)
_event_bus_instance: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """
    Get global EventBus singleton instance

    Returns:
        Global EventBus instance
    """
    global _event_bus_instance
    if _event_bus_instance is None:
        _event_bus_instance = EventBus()
    return _event_bus_instance


# Export
__all__ = ['EventBus', 'get_event_bus']
