"""
Co-Drawing

Freehand drawing canvas that hands the sketch and an instruction to
Gemini native image generation and keeps drawing on the result.
"""

__version__ = "1.0.0"

from .config import Config
from .events.event_bus import EventBus, get_event_bus

__all__ = [
    'Config',
    'EventBus',
    'get_event_bus',
]
