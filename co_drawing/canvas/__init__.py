"""
Drawing canvas engine.

- compositor: surface ownership, background layering, flattening
- stroke_renderer: incremental freehand painting
"""

from .compositor import CanvasCompositor
from .stroke_renderer import StrokeRenderer, StrokeState, create_pen

__all__ = [
    'CanvasCompositor',
    'StrokeRenderer',
    'StrokeState',
    'create_pen',
]
