"""
Request/response records for the generation pipeline
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class GenerationRequest:
    """One submission: prompt (with style suffix) plus the flattened canvas."""
    prompt_text: str
    image_bytes: bytes
    mime_type: str = "image/png"


@dataclass(frozen=True)
class GenerationResponse:
    """Parsed service output. A usable response always has image_bytes."""
    message: Optional[str] = None
    image_bytes: Optional[bytes] = None
    mime_type: Optional[str] = None

    @property
    def has_image(self) -> bool:
        return bool(self.image_bytes)


__all__ = ['GenerationRequest', 'GenerationResponse']
