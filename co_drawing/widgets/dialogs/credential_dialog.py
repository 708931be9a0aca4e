"""
Credential Dialog - Modal API key entry

Validation errors are shown inline under the input; the dialog stays
open until a key is saved or the user cancels.
"""

from typing import Optional

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QLabel, QPushButton, QLineEdit, QWidget
)
from PyQt6.QtCore import Qt

from ...core.errors import ValidationError
from ...core.session import DrawingSession


class CredentialDialog(QDialog):
    """
    Ask for the Gemini API key.

    Saving goes through DrawingSession.save_credential(); cancelling
    goes through DrawingSession.cancel_settings().
    """

    def __init__(self, session: DrawingSession, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self._session = session

        self._configure_window()
        self._build_ui()

    def _configure_window(self):
        """Configure window properties"""
        self.setWindowTitle("API Key")
        self.setMinimumWidth(420)
        self.setModal(True)

    def _build_ui(self):
        """Build the dialog UI"""
        layout = QVBoxLayout(self)
        layout.setSpacing(12)
        layout.setContentsMargins(20, 20, 20, 20)

        intro = QLabel(
            "Enter your Gemini API key. It is stored on this computer and "
            "only sent to the Gemini API."
        )
        intro.setWordWrap(True)
        layout.addWidget(intro)

        self._key_input = QLineEdit()
        self._key_input.setEchoMode(QLineEdit.EchoMode.Password)
        self._key_input.setPlaceholderText("API key")
        self._key_input.setText(self._session.credentials.get() or "")
        self._key_input.textChanged.connect(self._clear_error)
        layout.addWidget(self._key_input)

        self._error_label = QLabel("")
        self._error_label.setStyleSheet("color: #d32f2f;")
        self._error_label.setVisible(False)
        layout.addWidget(self._error_label)

        button_layout = QHBoxLayout()
        button_layout.addStretch()

        self._cancel_btn = QPushButton("Cancel")
        self._cancel_btn.clicked.connect(self.reject)
        button_layout.addWidget(self._cancel_btn)

        self._save_btn = QPushButton("Save")
        self._save_btn.setDefault(True)
        self._save_btn.clicked.connect(self._on_save)
        button_layout.addWidget(self._save_btn)

        layout.addLayout(button_layout)

    # ==================== Accessors ====================

    @property
    def key_input(self) -> QLineEdit:
        return self._key_input

    def error_text(self) -> str:
        return self._error_label.text() if self._error_label.isVisibleTo(self) else ""

    # ==================== Handlers ====================

    def _on_save(self):
        try:
            self._session.save_credential(self._key_input.text())
        except ValidationError as e:
            self._error_label.setText(str(e))
            self._error_label.setVisible(True)
            self._key_input.setFocus(Qt.FocusReason.OtherFocusReason)
            return
        self.accept()

    def reject(self):
        # Escape key and window close land here too
        self._session.cancel_settings()
        super().reject()

    def _clear_error(self):
        self._error_label.setVisible(False)
        self._error_label.setText("")


__all__ = ['CredentialDialog']
