"""Services for Co-Drawing"""

from .credential_store import CredentialStore, KeyValueStore, QSettingsStore, MemoryStore
from .gemini_service import GenerationService, GeminiImageService
from .generation_client import GenerationClient
from .response_parser import parse_response_parts, parse_generate_response, decode_image

__all__ = [
    'CredentialStore',
    'KeyValueStore',
    'QSettingsStore',
    'MemoryStore',
    'GenerationService',
    'GeminiImageService',
    'GenerationClient',
    'parse_response_parts',
    'parse_generate_response',
    'decode_image',
]
