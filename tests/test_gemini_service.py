"""Tests for the Gemini service adapter, with genai.Client replaced"""

from types import SimpleNamespace

import pytest
from google.genai import errors as genai_errors
from google.genai import types
from google.genai.types import Modality

from co_drawing.core.errors import ServiceError
from co_drawing.core.models import GenerationRequest
from co_drawing.services import gemini_service
from co_drawing.services.gemini_service import GeminiImageService


class FakeClient:
    """Stands in for genai.Client; records construction and calls."""

    instances = []

    def __init__(self, **kwargs):
        self.kwargs = kwargs
        self.calls = []
        self.result = {"candidates": []}
        self.error = None
        self.models = SimpleNamespace(generate_content=self._generate_content)
        FakeClient.instances.append(self)

    def _generate_content(self, **kwargs):
        self.calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.result


@pytest.fixture
def fake_client(monkeypatch):
    FakeClient.instances = []
    monkeypatch.setattr(gemini_service.genai, "Client", FakeClient)
    return FakeClient


@pytest.fixture
def gen_request():
    return GenerationRequest(prompt_text="add a hat", image_bytes=b"\x89PNGDATA")


def test_request_shape(fake_client, gen_request):
    service = GeminiImageService(model="image-model", timeout_ms=1000)
    result = service.generate(gen_request, "key-1")

    client = fake_client.instances[0]
    assert result is client.result
    assert client.kwargs["api_key"] == "key-1"
    assert client.kwargs["http_options"].timeout == 1000

    call = client.calls[0]
    assert call["model"] == "image-model"
    prompt, part = call["contents"]
    assert prompt == "add a hat"
    assert isinstance(part, types.Part)
    assert part.inline_data.data == b"\x89PNGDATA"
    assert part.inline_data.mime_type == "image/png"
    assert list(call["config"].response_modalities) == [Modality.TEXT, Modality.IMAGE]


def test_zero_timeout_means_none(fake_client, gen_request):
    GeminiImageService(timeout_ms=0).generate(gen_request, "key-1")
    assert fake_client.instances[0].kwargs["http_options"].timeout is None


def test_client_reused_until_key_changes(fake_client, gen_request):
    service = GeminiImageService()
    service.generate(gen_request, "key-1")
    service.generate(gen_request, "key-1")
    assert len(fake_client.instances) == 1

    service.generate(gen_request, "key-2")
    assert len(fake_client.instances) == 2
    assert fake_client.instances[1].kwargs["api_key"] == "key-2"


def test_api_error_becomes_service_error(fake_client, gen_request):
    service = GeminiImageService()
    service.generate(gen_request, "key-1")
    fake_client.instances[0].error = genai_errors.APIError(
        429, {"error": {"code": 429, "message": "quota exceeded", "status": "RESOURCE_EXHAUSTED"}}
    )

    with pytest.raises(ServiceError) as excinfo:
        service.generate(gen_request, "key-1")

    assert excinfo.value.user_message == "An error occurred: 429 quota exceeded"


def test_other_errors_become_service_error(fake_client, gen_request):
    service = GeminiImageService()
    service.generate(gen_request, "key-1")
    fake_client.instances[0].error = ConnectionError("network unreachable")

    with pytest.raises(ServiceError, match="network unreachable"):
        service.generate(gen_request, "key-1")
