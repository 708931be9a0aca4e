"""
GenerationClient - Single in-flight generation requests

Pattern: Background request with QRunnable + QThreadPool, results
delivered back on the UI thread through Qt signals.

Flow:
    submit(prompt)
      -> CanvasCompositor.flatten()
      -> GenerationRequest(prompt + style suffix, png bytes)
      -> GenerationTask on the thread pool
           -> GenerationService.generate()
           -> parse_generate_response()
      -> generation_succeeded(GenerationResponse) | generation_failed(kind, message)
"""

import base64
import logging
import time
from typing import Optional

from PyQt6.QtCore import QObject, QRunnable, QThreadPool, pyqtSignal

from ..canvas.compositor import CanvasCompositor
from ..config import Config
from ..core.errors import GenerationError, MissingCredential, ServiceError
from ..core.models import GenerationRequest, GenerationResponse
from .credential_store import CredentialStore
from .gemini_service import GenerationService
from .response_parser import parse_generate_response


logger = logging.getLogger(__name__)


def _preview(data: Optional[bytes]) -> Optional[str]:
    """Truncated base64 preview of binary payloads for log output."""
    if not data:
        return None
    encoded = base64.b64encode(data[:Config.LOG_PREVIEW_CHARS]).decode('ascii')
    return f"{encoded[:Config.LOG_PREVIEW_CHARS]}... (truncated, {len(data)} bytes)"


class GenerationTaskSignals(QObject):
    """Signals for GenerationTask"""

    succeeded = pyqtSignal(object, float)  # GenerationResponse, elapsed_ms
    failed = pyqtSignal(str, str, float)  # error kind, user message, elapsed_ms


class GenerationTask(QRunnable):
    """
    Background task running one service call and parsing its response.

    Usage:
        task = GenerationTask(service, request, api_key)
        task.signals.succeeded.connect(...)
        threadpool.start(task)
    """

    def __init__(self, service: GenerationService, request: GenerationRequest, api_key: str):
        super().__init__()
        self.service = service
        self.request = request
        self.api_key = api_key
        self.signals = GenerationTaskSignals()
        self.start_time = time.time()

    def run(self):
        """Execute the request"""
        try:
            raw = self.service.generate(self.request, self.api_key)
            response = parse_generate_response(raw)
            elapsed_ms = (time.time() - self.start_time) * 1000
            self.signals.succeeded.emit(response, elapsed_ms)

        except GenerationError as e:
            elapsed_ms = (time.time() - self.start_time) * 1000
            logger.error(f"Generation failed ({e.kind}): {e}")
            self.signals.failed.emit(e.kind, e.user_message, elapsed_ms)

        except Exception as e:
            elapsed_ms = (time.time() - self.start_time) * 1000
            logger.exception("Unexpected error during generation")
            error = ServiceError(str(e))
            self.signals.failed.emit(error.kind, error.user_message, elapsed_ms)


class GenerationClient(QObject):
    """
    Builds and dispatches generation requests, one at a time.

    A submit while a request is in flight is rejected (not queued).
    There is no cancellation: a dispatched request always ends in
    exactly one of generation_succeeded / generation_failed.

    Usage:
        client = GenerationClient(compositor, credentials, GeminiImageService())
        client.generation_succeeded.connect(on_response)
        client.submit("draw a cat")
    """

    generation_started = pyqtSignal()
    generation_succeeded = pyqtSignal(object)  # GenerationResponse
    generation_failed = pyqtSignal(str, str)  # error kind, user message

    def __init__(
        self,
        compositor: CanvasCompositor,
        credentials: CredentialStore,
        service: GenerationService,
        thread_pool: Optional[QThreadPool] = None,
        style_suffix: str = Config.STYLE_SUFFIX,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self._compositor = compositor
        self._credentials = credentials
        self._service = service
        self._style_suffix = style_suffix
        self.thread_pool = thread_pool or QThreadPool.globalInstance()

        self._in_flight = False
        self._active_task: Optional[GenerationTask] = None
        self.requests_dispatched = 0

    @property
    def is_busy(self) -> bool:
        return self._in_flight

    def build_request(self, prompt_text: str) -> GenerationRequest:
        """
        Flatten the canvas and pair it with the prompt plus style suffix.

        Args:
            prompt_text: User instruction

        Returns:
            Immutable GenerationRequest
        """
        image_bytes = self._compositor.flatten("PNG")
        return GenerationRequest(
            prompt_text=f"{prompt_text}{self._style_suffix}",
            image_bytes=image_bytes,
            mime_type=Config.FLATTEN_MIME_TYPE,
        )

    def submit(self, prompt_text: str) -> bool:
        """
        Dispatch a generation request for the current canvas.

        Args:
            prompt_text: User instruction

        Returns:
            True if a request was dispatched. False if one is already in
            flight, or if the canvas could not be flattened (in which case
            generation_failed has been emitted)

        Raises:
            MissingCredential: If no API key is stored
        """
        api_key = self._credentials.get()
        if not api_key:
            raise MissingCredential("No API key configured")

        if self._in_flight:
            logger.debug("Generation already in flight, ignoring submit")
            return False

        try:
            request = self.build_request(prompt_text)
        except Exception as e:
            logger.exception(f"Could not flatten canvas: {e}")
            error = ServiceError(str(e))
            self.generation_failed.emit(error.kind, error.user_message)
            return False

        self._in_flight = True
        self.generation_started.emit()

        logger.info(
            f"Request payload: prompt={request.prompt_text!r}, "
            f"drawingData={_preview(request.image_bytes)}"
        )

        task = GenerationTask(self._service, request, api_key)
        task.signals.succeeded.connect(self._on_task_succeeded)
        task.signals.failed.connect(self._on_task_failed)
        self._active_task = task
        self.requests_dispatched += 1

        self.thread_pool.start(task)
        return True

    def _on_task_succeeded(self, response: GenerationResponse, elapsed_ms: float):
        """Handle a parsed response"""
        self._in_flight = False
        self._active_task = None

        logger.info(
            f"Response in {elapsed_ms:.0f} ms: message={response.message!r}, "
            f"imageData={_preview(response.image_bytes)}"
        )
        self.generation_succeeded.emit(response)

    def _on_task_failed(self, kind: str, message: str, elapsed_ms: float):
        """Handle a failed request"""
        self._in_flight = False
        self._active_task = None

        logger.warning(f"Generation failed after {elapsed_ms:.0f} ms ({kind}): {message}")
        self.generation_failed.emit(kind, message)


__all__ = ['GenerationClient', 'GenerationTask', 'GenerationTaskSignals']
