"""
DrawingSession - Orchestrates canvas, credentials and generation

Routes user actions through the UI state machine:

    pointer events -> CoordinateMapper -> StrokeRenderer -> CanvasCompositor
    submit -> GenerationClient -> ResponseParser -> CanvasCompositor.set_background

Widgets call the public methods here and listen to the signals; they
never touch the compositor or the client directly.
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject, QPointF, QRectF, QThreadPool, pyqtSignal
from PyQt6.QtGui import QColor, QImage

from ..canvas.compositor import CanvasCompositor
from ..canvas.stroke_renderer import StrokeRenderer
from ..config import Config
from ..events.event_bus import EventBus, get_event_bus
from ..services.credential_store import CredentialStore
from ..services.gemini_service import GenerationService
from ..services.generation_client import GenerationClient
from ..services.response_parser import decode_image
from ..utils.coordinate_utils import CoordinateMapper
from .errors import DecodeFailure, MissingCredential
from .models import GenerationResponse
from .state_machine import UIAction, UIState, UIStateMachine, initial_state


logger = logging.getLogger(__name__)

_MIME_EXTENSIONS = {
    'image/png': 'png',
    'image/jpeg': 'jpg',
    'image/webp': 'webp',
}


class DrawingSession(QObject):
    """
    One drawing session for the lifetime of the main window.

    Signals:
        credential_requested: the credential dialog should be shown
        notice_requested(title, message): a blocking user-visible notice
        message_received(text): text returned alongside a generated image
        surface_changed: the canvas raster changed and should be repainted
    """

    credential_requested = pyqtSignal()
    notice_requested = pyqtSignal(str, str)
    message_received = pyqtSignal(str)
    surface_changed = pyqtSignal()

    def __init__(
        self,
        credentials: CredentialStore,
        service: GenerationService,
        event_bus: Optional[EventBus] = None,
        thread_pool: Optional[QThreadPool] = None,
        save_generations: bool = False,
        generations_dir: Optional[Path] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent)
        self._event_bus = event_bus or get_event_bus()
        self._credentials = credentials
        self._save_generations = save_generations
        self._generations_dir = generations_dir

        self.mapper = CoordinateMapper(Config.CANVAS_WIDTH, Config.CANVAS_HEIGHT)
        self.compositor = CanvasCompositor(parent=self)
        self.compositor.initialize()
        self.renderer = StrokeRenderer(self.compositor, parent=self)
        self.renderer.color = self._event_bus.get_pen_color()

        self.client = GenerationClient(
            self.compositor, credentials, service, thread_pool=thread_pool, parent=self
        )

        credentials.load()
        self.state_machine = UIStateMachine(initial_state(credentials.has_credential), parent=self)

        self.compositor.surface_changed.connect(self.surface_changed)
        self.state_machine.state_changed.connect(self._on_state_changed)
        self.client.generation_succeeded.connect(self._on_generation_succeeded)
        self.client.generation_failed.connect(self._on_generation_failed)

        logger.info(f"Session started in state {self.state.value}")

    # ==================== Properties ====================

    @property
    def state(self) -> UIState:
        return self.state_machine.state

    @property
    def credentials(self) -> CredentialStore:
        return self._credentials

    @property
    def pen_color(self) -> QColor:
        return self.renderer.color

    def surface(self) -> QImage:
        return self.compositor.surface

    # ==================== Pointer Input ====================

    def pointer_pressed(self, x: float, y: float, display_rect: QRectF, touch: bool = False) -> bool:
        """
        Start a stroke.

        Args:
            x, y: Canvas-relative offset (mouse) or rect-space point (touch)
            display_rect: The canvas' current on-screen rectangle
            touch: True for touch input

        Returns:
            True if a stroke started
        """
        if not self.state_machine.can_draw():
            return False

        pos = self._map(x, y, display_rect, touch)
        if not self.renderer.begin(pos):
            return False

        self.state_machine.dispatch(UIAction.POINTER_DOWN)
        return True

    def pointer_moved(self, x: float, y: float, display_rect: QRectF, touch: bool = False) -> bool:
        """Extend the active stroke. Returns True if a segment was painted."""
        if not self.renderer.is_drawing:
            return False
        return self.renderer.extend(self._map(x, y, display_rect, touch))

    def pointer_released(self):
        """Finish the active stroke (pointer up or leaving the canvas)."""
        if self.renderer.is_drawing:
            self.renderer.end()
        self.state_machine.dispatch(UIAction.POINTER_UP)

    def _map(self, x: float, y: float, display_rect: QRectF, touch: bool) -> QPointF:
        if touch:
            return self.mapper.map_touch_to_logical(x, y, display_rect)
        return self.mapper.map_to_logical(x, y, display_rect)

    # ==================== Canvas Actions ====================

    def set_pen_color(self, color: QColor):
        """Change the pen color; applies to the next painted segment."""
        self.renderer.color = color
        self._event_bus.set_pen_color(color)

    def clear(self):
        """Reset the canvas to blank white and drop the background."""
        if self.renderer.is_drawing:
            self.pointer_released()
        self.compositor.clear()
        logger.info("Canvas cleared")

    # ==================== Generation ====================

    def submit(self, prompt: str) -> bool:
        """
        Send the canvas and prompt to the generation service.

        Without a credential the session moves to AWAITING_CREDENTIAL and
        asks for one instead. A submit while SUBMITTING is a no-op.

        Returns:
            True if a request was dispatched
        """
        state = self.state
        if state in (UIState.SUBMITTING, UIState.AWAITING_CREDENTIAL):
            logger.debug(f"Submit ignored in state {state.value}")
            return False

        prompt = (prompt or "").strip()
        if not prompt:
            self._event_bus.show_status("Describe what should be added first.")
            return False

        if self.renderer.is_drawing:
            self.pointer_released()

        if not self._credentials.has_credential:
            self._redirect_to_credentials()
            return False

        self.state_machine.dispatch(UIAction.SUBMIT)
        try:
            dispatched = self.client.submit(prompt)
        except MissingCredential:
            self.state_machine.dispatch(UIAction.REQUEST_FAILED)
            self._redirect_to_credentials()
            return False

        if not dispatched:
            # Flatten failures were already reported through generation_failed
            self.state_machine.dispatch(UIAction.REQUEST_FAILED)
            return False

        self._event_bus.generation_started.emit()
        self._event_bus.show_status("Generating...")
        return True

    def _redirect_to_credentials(self):
        logger.info("No API key stored, asking for one")
        self.state_machine.dispatch(UIAction.SUBMIT_WITHOUT_CREDENTIAL)
        self.credential_requested.emit()

    def _on_generation_succeeded(self, response: GenerationResponse):
        try:
            image = decode_image(response.image_bytes)
        except DecodeFailure as e:
            logger.error(f"Generated image could not be decoded: {e}")
            self._on_generation_failed(e.kind, e.user_message)
            return

        self.compositor.set_background(image)
        self.state_machine.dispatch(UIAction.REQUEST_RESOLVED)

        if self._save_generations:
            self._save_generation(response)

        self._event_bus.generation_finished.emit(True)

        if response.message:
            self.message_received.emit(response.message)
            self._event_bus.message_received.emit(response.message)
            self._event_bus.show_status(response.message)
        else:
            self._event_bus.show_status("Drawing updated.")

    def _on_generation_failed(self, kind: str, message: str):
        self.state_machine.dispatch(UIAction.REQUEST_FAILED)
        self._event_bus.generation_finished.emit(False)
        self._event_bus.report_error(kind, message)
        self._event_bus.show_status("")
        self.notice_requested.emit("Generation Failed", message)

    def _save_generation(self, response: GenerationResponse) -> Optional[Path]:
        """Write the generated image to the generations folder."""
        extension = _MIME_EXTENSIONS.get(response.mime_type or '', 'png')
        file_name = f"generation_{datetime.now().strftime('%Y%m%d_%H%M%S_%f')}.{extension}"
        try:
            folder = self._generations_dir or Config.get_generations_dir()
            folder.mkdir(parents=True, exist_ok=True)
            path = folder / file_name
            path.write_bytes(response.image_bytes)
        except OSError as e:
            logger.warning(f"Could not save generated image {file_name}: {e}")
            return None
        logger.info(f"Generated image saved to {path}")
        return path

    # ==================== Credentials ====================

    def open_settings(self) -> bool:
        """
        Explicit settings action. Returns True if the credential dialog
        should be shown.
        """
        if self.state == UIState.AWAITING_CREDENTIAL:
            self.credential_requested.emit()
            return True

        if self.renderer.is_drawing:
            self.pointer_released()

        if self.state_machine.dispatch(UIAction.OPEN_SETTINGS) != UIState.AWAITING_CREDENTIAL:
            return False
        self.credential_requested.emit()
        return True

    def save_credential(self, candidate: str) -> str:
        """
        Store a new API key and return to IDLE.

        Raises:
            ValidationError: On empty/whitespace input; state is unchanged
        """
        value = self._credentials.save(candidate)
        self.state_machine.dispatch(UIAction.CREDENTIAL_SAVED)
        self._event_bus.show_status("API key saved.")
        return value

    def cancel_settings(self) -> bool:
        """
        Close the credential dialog without saving.

        Only leaves AWAITING_CREDENTIAL when a key is already stored.

        Returns:
            True if the session is back to IDLE
        """
        if self.state != UIState.AWAITING_CREDENTIAL:
            return True
        if not self._credentials.has_credential:
            return False
        self.state_machine.dispatch(UIAction.CANCEL_SETTINGS)
        return True

    def _on_state_changed(self, state: UIState):
        self._event_bus.ui_state_changed.emit(state)


__all__ = ['DrawingSession']
