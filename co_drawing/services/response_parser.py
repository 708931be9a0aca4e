"""
ResponseParser - Extracts text and image from a mixed response part list

Parts come either as google-genai SDK objects (part.text,
part.inline_data.data, part.inline_data.mime_type) or as plain dicts in
the REST shape ({"text": ...} / {"inlineData": {"mimeType", "data"}}).
First text part and first inline-data part win; later parts are ignored.
"""

import base64
import binascii
import logging
from typing import Any, Iterable, Optional, Tuple

from PyQt6.QtGui import QImage

from ..core.errors import DecodeFailure, ParseFailure
from ..core.models import GenerationResponse
from ..utils.image_utils import decode_image_bytes


logger = logging.getLogger(__name__)


def _field(obj: Any, *names: str) -> Any:
    """Read the first present attribute/key among names."""
    if obj is None:
        return None
    for name in names:
        if isinstance(obj, dict):
            if name in obj and obj[name] is not None:
                return obj[name]
        else:
            value = getattr(obj, name, None)
            if value is not None:
                return value
    return None


def _inline_payload(part: Any) -> Optional[Tuple[bytes, Optional[str]]]:
    """Return (data, mime_type) for an inline-data part, else None."""
    inline = _field(part, 'inline_data', 'inlineData')
    if inline is None:
        return None

    data = _field(inline, 'data')
    if data is None:
        return None

    if isinstance(data, str):
        try:
            data = base64.b64decode(data, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeFailure(f"Inline data is not valid base64: {e}")

    mime_type = _field(inline, 'mime_type', 'mimeType')
    return bytes(data), mime_type


def parse_response_parts(parts: Iterable[Any]) -> GenerationResponse:
    """
    Pick the first text part and the first inline-data part.

    Args:
        parts: Response parts in the order received

    Returns:
        GenerationResponse with image_bytes always set

    Raises:
        ParseFailure: If no inline-data part is present (a text-only
            response is still a failure)
    """
    message: Optional[str] = None
    image: Optional[Tuple[bytes, Optional[str]]] = None

    for part in parts or []:
        if message is None:
            text = _field(part, 'text')
            if text:
                message = text
                continue
        if image is None:
            image = _inline_payload(part)
        if message is not None and image is not None:
            break

    if image is None or not image[0]:
        if message:
            logger.warning(f"Response had text but no image: {message[:200]}")
        raise ParseFailure("Model did not return an image")

    return GenerationResponse(message=message, image_bytes=image[0], mime_type=image[1])


def parse_generate_response(response: Any) -> GenerationResponse:
    """
    Parse a full generate_content response (first candidate).

    Raises:
        ParseFailure: No candidates, no parts, or no image part
    """
    candidates = _field(response, 'candidates')
    if not candidates:
        feedback = _field(response, 'prompt_feedback', 'promptFeedback')
        reason = _field(feedback, 'block_reason', 'blockReason')
        if reason:
            raise ParseFailure(f"Prompt was blocked: {reason}")
        raise ParseFailure("Response has no candidates")

    content = _field(candidates[0], 'content')
    parts = _field(content, 'parts')
    if not parts:
        raise ParseFailure("Response has no content parts")

    return parse_response_parts(parts)


def decode_image(image_bytes: bytes) -> QImage:
    """
    Decode image bytes from a response.

    Raises:
        DecodeFailure: If the bytes are empty or not a readable image
    """
    image = decode_image_bytes(image_bytes)
    if image is None:
        raise DecodeFailure("Returned image could not be decoded")
    return image


__all__ = ['parse_response_parts', 'parse_generate_response', 'decode_image']
