"""Widget tests for the main window, canvas and credential dialog"""

import pytest
from PyQt6.QtCore import QPoint, QSettings, Qt
from PyQt6.QtWidgets import QDialog

from co_drawing.core.session import DrawingSession
from co_drawing.core.state_machine import UIState
from co_drawing.widgets.dialogs.credential_dialog import CredentialDialog
from co_drawing.widgets.drawing_canvas import DrawingCanvas
from co_drawing.widgets.main_window import ColorButton, MainWindow


@pytest.fixture
def window(session, event_bus, tmp_path, qtbot):
    settings = QSettings(str(tmp_path / "window.ini"), QSettings.Format.IniFormat)
    window = MainWindow(session, event_bus=event_bus, settings=settings)
    qtbot.addWidget(window)
    return window


def test_submit_button_busy_label(window, session, fake_service, unlocked_release, qtbot):
    fake_service.release = unlocked_release
    window.prompt_input.setText("draw a cat")

    window.submit_button.click()

    assert session.state == UIState.SUBMITTING
    assert window.submit_button.text() == "Generating..."
    assert not window.submit_button.isEnabled()

    with qtbot.waitSignal(session.message_received, timeout=5000):
        unlocked_release.set()

    assert window.submit_button.text() == "Send"
    assert window.submit_button.isEnabled()


def test_canvas_mouse_stroke(session, qtbot):
    canvas = DrawingCanvas(session)
    qtbot.addWidget(canvas)
    canvas.resize(480, 270)
    canvas.show()

    qtbot.mousePress(canvas, Qt.MouseButton.LeftButton, pos=QPoint(50, 50))
    assert session.state == UIState.DRAWING
    qtbot.mouseRelease(canvas, Qt.MouseButton.LeftButton, pos=QPoint(50, 50))
    assert session.state == UIState.IDLE


def test_color_button_opens_on_enter(qtbot):
    button = ColorButton()
    qtbot.addWidget(button)
    button.show()

    with qtbot.waitSignal(button.picker_requested, timeout=1000):
        qtbot.keyClick(button, Qt.Key.Key_Return)


def test_credential_dialog_inline_error(qapp, empty_credentials, fake_service, event_bus, thread_pool, qtbot):
    session = DrawingSession(empty_credentials, fake_service, event_bus=event_bus, thread_pool=thread_pool)
    dialog = CredentialDialog(session)
    qtbot.addWidget(dialog)

    dialog.key_input.setText("   ")
    dialog._save_btn.click()
    assert dialog.error_text() == "Please enter a valid API key"
    assert session.state == UIState.AWAITING_CREDENTIAL

    dialog.key_input.setText("real-key")
    assert dialog.error_text() == ""
    dialog._save_btn.click()

    assert dialog.result() == QDialog.DialogCode.Accepted
    assert session.state == UIState.IDLE
    assert empty_credentials.get() == "real-key"


def test_window_geometry_saved_on_close(window, tmp_path):
    window.resize(900, 700)
    window.close()
    settings = QSettings(str(tmp_path / "window.ini"), QSettings.Format.IniFormat)
    assert settings.contains("window/geometry")
