"""
CanvasCompositor - Owner of the drawing surface raster

Layers, applied in order on every full redraw:
1. Opaque white fill over the whole logical area
2. The current background image (if any), scaled to the logical area

Freehand strokes are never replayed; they only exist as pixels painted
by the StrokeRenderer, so a full redraw removes them.
"""

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from PyQt6.QtCore import QObject, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QImage, QPainter, QColor

from ..config import Config
from ..utils.image_utils import composite_on_white, encode_image, has_transparency


logger = logging.getLogger(__name__)


class CanvasCompositor(QObject):
    """
    Owns the fixed-resolution drawing surface and the background image.

    The surface QImage object lives as long as the compositor; redraws
    paint into it in place so painters opened by the stroke renderer
    always target the live raster.

    Usage:
        compositor = CanvasCompositor()
        compositor.initialize()
        compositor.set_background(image)
        png_bytes = compositor.flatten()
    """

    surface_changed = pyqtSignal()

    def __init__(
        self,
        width: int = Config.CANVAS_WIDTH,
        height: int = Config.CANVAS_HEIGHT,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self._width = width
        self._height = height
        self._background: Optional[QImage] = None

        # Transparent until initialize() lays down the white base
        self._surface = QImage(width, height, QImage.Format.Format_ARGB32_Premultiplied)
        self._surface.fill(Qt.GlobalColor.transparent)

    # ==================== Properties ====================

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    @property
    def surface(self) -> QImage:
        """The live raster. Treat as read-only outside paint()."""
        return self._surface

    @property
    def has_background(self) -> bool:
        return self._background is not None

    def logical_rect(self) -> QRectF:
        return QRectF(0, 0, self._width, self._height)

    # ==================== Operations ====================

    def initialize(self):
        """Fill the surface white. Called once when the surface is created."""
        with self.paint() as painter:
            self._fill_base(painter)

    def set_background(self, image: QImage):
        """
        Replace the background and redraw (white, then image).

        Strokes painted before this call are overwritten.

        Args:
            image: Decoded background image (any size)
        """
        if image is None or image.isNull():
            raise ValueError("Background image is null")

        self._background = image.copy()
        logger.debug(
            f"Background set ({image.width()}x{image.height()} -> "
            f"{self._width}x{self._height})"
        )
        self._redraw()

    def clear(self):
        """Discard the background and redraw to white only."""
        self._background = None
        self._redraw()

    def flatten(self, fmt: str = "PNG") -> bytes:
        """
        Encode the visible content (white + background + strokes).

        The live surface is never modified. If any pixel is not fully
        opaque the copy is composited onto a fresh white layer first, so
        the result never contains transparency.

        Args:
            fmt: Qt image format name

        Returns:
            Encoded image bytes
        """
        snapshot = self._surface.copy()
        if has_transparency(snapshot):
            logger.debug("Surface has transparent pixels, compositing onto white")
            snapshot = composite_on_white(snapshot)
        else:
            snapshot = snapshot.convertToFormat(QImage.Format.Format_RGB32)
        return encode_image(snapshot, fmt)

    # ==================== Painting ====================

    @contextmanager
    def paint(self) -> Iterator[QPainter]:
        """
        Open an antialiased painter on the live surface.

        surface_changed is emitted once the painter is closed.
        """
        painter = QPainter(self._surface)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            yield painter
        finally:
            painter.end()
        self.surface_changed.emit()

    def _fill_base(self, painter: QPainter):
        painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_Source)
        painter.fillRect(self.logical_rect(), QColor(Config.BASE_COLOR))
        painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_SourceOver)

    def _redraw(self):
        """Full redraw of the fixed layer stack."""
        with self.paint() as painter:
            self._fill_base(painter)
            if self._background is not None:
                if self._background.width() == self._width and self._background.height() == self._height:
                    painter.drawImage(0, 0, self._background)
                else:
                    painter.setRenderHint(QPainter.RenderHint.SmoothPixmapTransform)
                    painter.drawImage(self.logical_rect(), self._background)


__all__ = ['CanvasCompositor']
