"""
MainWindow - Main application window

Layout:
    +------------------------------------------+
    |  Title                 [color][clear][key] |
    +------------------------------------------+
    |                                          |
    |  DrawingCanvas                           |
    |                                          |
    +------------------------------------------+
    |  [ What should I add?          ] [Send]  |
    +------------------------------------------+
    |  StatusBar                               |
    +------------------------------------------+
"""

from typing import Optional

from PyQt6.QtWidgets import (
    QMainWindow, QWidget, QVBoxLayout, QHBoxLayout, QLabel,
    QPushButton, QLineEdit, QStatusBar, QColorDialog
)
from PyQt6.QtCore import Qt, QSettings, QTimer, pyqtSignal
from PyQt6.QtGui import QCloseEvent, QColor

from ..config import Config
from ..core.session import DrawingSession
from ..core.state_machine import UIState
from ..events.event_bus import EventBus, get_event_bus
from ..utils.dialog_helper import DialogHelper
from .drawing_canvas import DrawingCanvas
from .dialogs.credential_dialog import CredentialDialog


class ColorButton(QPushButton):
    """Round swatch showing the pen color. Click, Enter or Space opens the picker."""

    picker_requested = pyqtSignal()

    def __init__(self, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.setFixedSize(40, 40)
        self.setToolTip("Pen color")
        self.setAccessibleName("Open color picker")
        self.clicked.connect(self.picker_requested)
        self.set_color(QColor(Config.DEFAULT_PEN_COLOR))

    def set_color(self, color: QColor):
        self.setStyleSheet(
            f"QPushButton {{ background-color: {color.name()}; border: 2px solid white; "
            f"border-radius: 20px; }}"
        )

    def keyPressEvent(self, event):
        if event.key() in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.picker_requested.emit()
            event.accept()
            return
        super().keyPressEvent(event)


class MainWindow(QMainWindow):
    """
    Main application window

    Features:
    - Pen color picker, clear and API key buttons
    - Drawing canvas
    - Prompt input with submit button (disabled while generating)
    - Status bar with model messages
    - Window geometry persistence
    """

    SUBMIT_LABEL = "Send"
    SUBMITTING_LABEL = "Generating..."

    def __init__(
        self,
        session: DrawingSession,
        event_bus: Optional[EventBus] = None,
        settings: Optional[QSettings] = None,
        parent=None
    ):
        super().__init__(parent)

        self._session = session
        self._event_bus = event_bus or get_event_bus()
        self._settings = settings or QSettings(Config.APP_AUTHOR, Config.APP_NAME)
        self._credential_dialog: Optional[CredentialDialog] = None

        self._setup_window()
        self._create_widgets()
        self._create_layout()
        self._connect_signals()
        self._load_settings()
        self._apply_state(self._session.state)

    def _setup_window(self):
        """Configure window properties"""
        self.setWindowTitle(f"{Config.APP_NAME} {Config.APP_VERSION}")
        self.setGeometry(100, 100, Config.DEFAULT_WINDOW_WIDTH, Config.DEFAULT_WINDOW_HEIGHT)

    def _create_widgets(self):
        """Create UI widgets"""
        self._title_label = QLabel("Gemini Co-Drawing")
        self._title_label.setStyleSheet("font-size: 22px; font-weight: bold;")
        self._subtitle_label = QLabel("Built with Gemini native image generation")
        self._subtitle_label.setStyleSheet("color: #6b7280;")

        self._color_btn = ColorButton()
        self._color_btn.set_color(self._session.pen_color)

        self._clear_btn = QPushButton("Clear")
        self._clear_btn.setToolTip("Clear canvas")

        self._key_btn = QPushButton("API Key")
        self._key_btn.setToolTip("Set the Gemini API key")

        self._canvas = DrawingCanvas(self._session)

        self._prompt_input = QLineEdit()
        self._prompt_input.setPlaceholderText("What should I add?")
        self._prompt_input.setStyleSheet("font-family: monospace; padding: 8px;")

        self._submit_btn = QPushButton(self.SUBMIT_LABEL)
        self._submit_btn.setDefault(True)

        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)

    def _create_layout(self):
        """Create window layout"""
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(24, 16, 24, 16)
        layout.setSpacing(12)

        header = QHBoxLayout()
        titles = QVBoxLayout()
        titles.setSpacing(2)
        titles.addWidget(self._title_label)
        titles.addWidget(self._subtitle_label)
        header.addLayout(titles)
        header.addStretch()
        header.addWidget(self._color_btn)
        header.addWidget(self._clear_btn)
        header.addWidget(self._key_btn)
        layout.addLayout(header)

        layout.addWidget(self._canvas, 1)

        prompt_row = QHBoxLayout()
        prompt_row.addWidget(self._prompt_input, 1)
        prompt_row.addWidget(self._submit_btn)
        layout.addLayout(prompt_row)

        self.setCentralWidget(central)

    def _connect_signals(self):
        """Connect widget, session and event bus signals"""
        self._color_btn.picker_requested.connect(self._on_pick_color)
        self._clear_btn.clicked.connect(self._session.clear)
        self._key_btn.clicked.connect(self._session.open_settings)
        self._submit_btn.clicked.connect(self._on_submit)
        self._prompt_input.returnPressed.connect(self._on_submit)

        self._session.credential_requested.connect(self._schedule_credential_dialog)
        self._session.notice_requested.connect(self._on_notice)

        self._event_bus.ui_state_changed.connect(self._apply_state)
        self._event_bus.pen_color_changed.connect(self._color_btn.set_color)
        self._event_bus.status_message.connect(self._on_status_message)

    # ==================== Accessors ====================

    @property
    def canvas(self) -> DrawingCanvas:
        return self._canvas

    @property
    def prompt_input(self) -> QLineEdit:
        return self._prompt_input

    @property
    def submit_button(self) -> QPushButton:
        return self._submit_btn

    # ==================== Handlers ====================

    def _on_submit(self):
        self._session.submit(self._prompt_input.text())

    def _on_pick_color(self):
        color = QColorDialog.getColor(self._session.pen_color, self, "Pen Color")
        if color.isValid():
            self._session.set_pen_color(color)

    def _on_status_message(self, message: str):
        if message:
            self._status_bar.showMessage(message)
        else:
            self._status_bar.clearMessage()

    def _on_notice(self, title: str, message: str):
        DialogHelper.error(self, title, message)

    def _apply_state(self, state: UIState):
        """Enable/disable controls for the current UI state"""
        submitting = state == UIState.SUBMITTING
        awaiting = state == UIState.AWAITING_CREDENTIAL

        self._submit_btn.setEnabled(not submitting and not awaiting)
        self._submit_btn.setText(self.SUBMITTING_LABEL if submitting else self.SUBMIT_LABEL)
        self._canvas.setEnabled(not awaiting)
        self._key_btn.setEnabled(not submitting)

        if awaiting and self._credential_dialog is None:
            self._status_bar.showMessage("An API key is required to generate images.")

    # ==================== Credential Dialog ====================

    def _schedule_credential_dialog(self):
        # Deferred so the dialog's event loop never runs inside a click handler
        QTimer.singleShot(0, self.show_credential_dialog)

    def show_credential_dialog(self):
        """Open the modal API key dialog (no-op if already open)."""
        if self._credential_dialog is not None:
            return

        self._credential_dialog = CredentialDialog(self._session, self)
        try:
            self._credential_dialog.exec()
        finally:
            self._credential_dialog = None
        self._apply_state(self._session.state)

    def showEvent(self, event):
        super().showEvent(event)
        if self._session.state == UIState.AWAITING_CREDENTIAL:
            self._schedule_credential_dialog()

    # ==================== Settings ====================

    def _load_settings(self):
        """Load window geometry"""
        if self._settings.contains("window/geometry"):
            self.restoreGeometry(self._settings.value("window/geometry"))

    def _save_settings(self):
        """Save window geometry"""
        self._settings.setValue("window/geometry", self.saveGeometry())

    def closeEvent(self, event: QCloseEvent):
        """Handle window close"""
        self._save_settings()
        super().closeEvent(event)


__all__ = ['MainWindow', 'ColorButton']
