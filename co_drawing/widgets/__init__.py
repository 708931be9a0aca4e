"""UI Widgets for Co-Drawing"""

from .main_window import MainWindow, ColorButton
from .drawing_canvas import DrawingCanvas

__all__ = [
    'MainWindow',
    'ColorButton',
    'DrawingCanvas',
]
