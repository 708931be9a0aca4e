"""Utility functions for Co-Drawing"""

from .coordinate_utils import CoordinateMapper, is_finite_point
from .image_utils import (
    qimage_to_rgba_array,
    has_transparency,
    composite_on_white,
    encode_image,
    decode_image_bytes,
)
from .dialog_helper import DialogHelper
from .logging_config import LoggingConfig

__all__ = [
    'CoordinateMapper',
    'is_finite_point',
    'qimage_to_rgba_array',
    'has_transparency',
    'composite_on_white',
    'encode_image',
    'decode_image_bytes',
    'DialogHelper',
    'LoggingConfig',
]
