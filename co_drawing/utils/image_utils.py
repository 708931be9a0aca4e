"""
Image utilities for the drawing surface

Pattern: QImage <-> numpy helpers for alpha compositing and encoding
"""

from typing import Optional

import numpy as np
from PyQt6.QtGui import QImage
from PyQt6.QtCore import QBuffer, QByteArray, QIODevice


def qimage_to_rgba_array(image: QImage) -> np.ndarray:
    """
    Copy a QImage into a (height, width, 4) uint8 RGBA array

    Args:
        image: Source QImage in any format

    Returns:
        numpy array with straight (non-premultiplied) alpha
    """
    if image.format() != QImage.Format.Format_RGBA8888:
        image = image.convertToFormat(QImage.Format.Format_RGBA8888)

    width = image.width()
    height = image.height()
    bytes_per_line = image.bytesPerLine()

    ptr = image.constBits()
    ptr.setsize(bytes_per_line * height)
    rows = np.array(ptr, dtype=np.uint8).reshape((height, bytes_per_line))

    # Drop any scanline padding
    return rows[:, :width * 4].reshape((height, width, 4)).copy()


def has_transparency(image: QImage) -> bool:
    """Check whether any pixel of the image is not fully opaque."""
    if not image.hasAlphaChannel():
        return False
    return bool((qimage_to_rgba_array(image)[:, :, 3] < 255).any())


def composite_on_white(image: QImage) -> QImage:
    """
    Alpha-composite an image over an opaque white layer

    Args:
        image: Foreground QImage (may have alpha)

    Returns:
        Opaque RGB888 QImage of the same size
    """
    width = image.width()
    height = image.height()

    fg_array = qimage_to_rgba_array(image)
    fg_rgb = fg_array[:, :, :3].astype(np.float32)
    alpha = fg_array[:, :, 3:4].astype(np.float32) / 255.0

    # result = foreground * alpha + white * (1 - alpha)
    composited = np.clip(np.rint(fg_rgb * alpha + 255.0 * (1.0 - alpha)), 0, 255).astype(np.uint8)
    composited = np.ascontiguousarray(composited)

    return QImage(composited.data, width, height, width * 3, QImage.Format.Format_RGB888).copy()


def encode_image(image: QImage, fmt: str = "PNG") -> bytes:
    """
    Encode a QImage to bytes

    Args:
        image: Image to encode
        fmt: Qt image format name ("PNG", "JPG", ...)

    Returns:
        Encoded bytes

    Raises:
        ValueError: If Qt could not encode the image
    """
    data = QByteArray()
    buffer = QBuffer(data)
    buffer.open(QIODevice.OpenModeFlag.WriteOnly)
    ok = image.save(buffer, fmt)
    buffer.close()
    if not ok:
        raise ValueError(f"Failed to encode image as {fmt}")
    return bytes(data.data())


def decode_image_bytes(image_bytes: bytes) -> Optional[QImage]:
    """
    Decode encoded image bytes

    Args:
        image_bytes: PNG/JPEG/... data

    Returns:
        QImage or None if the data could not be decoded
    """
    if not image_bytes:
        return None
    image = QImage.fromData(image_bytes)
    if image.isNull():
        return None
    return image


__all__ = [
    'qimage_to_rgba_array',
    'has_transparency',
    'composite_on_white',
    'encode_image',
    'decode_image_bytes',
]
