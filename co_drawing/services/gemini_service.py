"""
Gemini image generation service adapter

Thin wrapper around google-genai's generate_content for image + text in,
text + image out. Every failure is re-raised as ServiceError.
"""

import logging
from typing import Any, Optional

from google import genai
from google.genai import errors as genai_errors
from google.genai import types
from google.genai.types import Modality

from ..config import Config
from ..core.errors import ServiceError
from ..core.models import GenerationRequest


logger = logging.getLogger(__name__)


class GenerationService:
    """Interface for anything that can answer a GenerationRequest."""

    def generate(self, request: GenerationRequest, api_key: str) -> Any:
        """
        Send the request and return the raw response object.

        Raises:
            ServiceError: On network failure or non-success response
        """
        raise NotImplementedError


class GeminiImageService(GenerationService):
    """
    GenerationService backed by the Gemini API.

    A client is created per API key and reused until the key changes.

    Args:
        model: Gemini model name
        timeout_ms: Request timeout in milliseconds, 0 for none
    """

    def __init__(
        self,
        model: str = Config.DEFAULT_MODEL,
        timeout_ms: int = Config.DEFAULT_REQUEST_TIMEOUT_MS
    ):
        self.model = model
        self.timeout_ms = timeout_ms
        self._client: Optional[genai.Client] = None
        self._client_key: Optional[str] = None

    def _get_client(self, api_key: str) -> genai.Client:
        if self._client is None or self._client_key != api_key:
            timeout = self.timeout_ms if self.timeout_ms > 0 else None
            self._client = genai.Client(
                api_key=api_key,
                http_options=types.HttpOptions(timeout=timeout),
            )
            self._client_key = api_key
        return self._client

    def build_config(self) -> types.GenerateContentConfig:
        return types.GenerateContentConfig(
            response_modalities=[Modality.TEXT, Modality.IMAGE],
        )

    def generate(self, request: GenerationRequest, api_key: str) -> Any:
        contents = [
            request.prompt_text,
            types.Part.from_bytes(data=request.image_bytes, mime_type=request.mime_type),
        ]

        try:
            client = self._get_client(api_key)
            return client.models.generate_content(
                model=self.model,
                contents=contents,
                config=self.build_config(),
            )
        except genai_errors.APIError as e:
            logger.error(f"Gemini API error {e.code}: {e.message}")
            raise ServiceError(f"{e.code} {e.message or e.status or ''}".strip())
        except Exception as e:
            logger.error(f"Gemini request failed: {e}")
            raise ServiceError(str(e))


__all__ = ['GenerationService', 'GeminiImageService']
