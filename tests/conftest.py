"""
Shared fixtures for Co-Drawing tests

Runs Qt offscreen; the generation service is replaced by a fake that
returns REST-shaped dict responses.
"""

import os
import threading

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest
from PyQt6.QtCore import QThreadPool
from PyQt6.QtGui import QColor, QImage

from co_drawing.config import Config
from co_drawing.core.session import DrawingSession
from co_drawing.events.event_bus import EventBus
from co_drawing.services.credential_store import CredentialStore, MemoryStore
from co_drawing.services.gemini_service import GenerationService
from co_drawing.utils.image_utils import encode_image


def make_png(width=Config.CANVAS_WIDTH, height=Config.CANVAS_HEIGHT, color="#3366cc") -> bytes:
    """Opaque PNG with a solid fill and a white square in the corner."""
    image = QImage(width, height, QImage.Format.Format_RGB32)
    image.fill(QColor(color))
    for x in range(10):
        for y in range(10):
            image.setPixelColor(x, y, QColor("#ffffff"))
    return encode_image(image, "PNG")


def image_part(data: bytes, mime_type: str = "image/png") -> dict:
    return {"inline_data": {"data": data, "mime_type": mime_type}}


def response_with(*parts) -> dict:
    return {"candidates": [{"content": {"parts": list(parts)}}]}


class FakeService(GenerationService):
    """
    Records requests and answers with a canned response.

    Set `release` to a threading.Event to hold the worker thread until the
    test sets it. Set `error` to make generate() raise.
    """

    def __init__(self, response=None):
        self.response = response
        self.error = None
        self.release = None
        self.requests = []
        self.keys = []

    def generate(self, request, api_key):
        self.requests.append(request)
        self.keys.append(api_key)
        if self.release is not None:
            self.release.wait(5)
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def png_bytes():
    return make_png()


@pytest.fixture
def fake_service(png_bytes):
    return FakeService(response_with({"text": "Added a cat."}, image_part(png_bytes)))


@pytest.fixture
def memory_backend():
    return MemoryStore({Config.CREDENTIAL_KEY: "test-key"})


@pytest.fixture
def credentials(memory_backend):
    store = CredentialStore(memory_backend)
    store.load()
    return store


@pytest.fixture
def empty_credentials():
    return CredentialStore(MemoryStore())


@pytest.fixture
def event_bus(qapp):
    return EventBus()


@pytest.fixture
def thread_pool(qapp):
    pool = QThreadPool()
    yield pool
    pool.waitForDone(5000)


@pytest.fixture
def session(qapp, credentials, fake_service, event_bus, thread_pool):
    return DrawingSession(credentials, fake_service, event_bus=event_bus, thread_pool=thread_pool)


@pytest.fixture
def unlocked_release():
    """Event that is always set on teardown so no worker stays blocked."""
    event = threading.Event()
    yield event
    event.set()
