"""
UI state machine for the drawing session

Pattern: explicit enum state + pure transition function, wrapped by a
QObject that publishes changes as a Qt signal.
"""

import logging
from enum import Enum
from typing import Dict, Tuple

from PyQt6.QtCore import QObject, pyqtSignal


logger = logging.getLogger(__name__)


class UIState(Enum):
    """Top-level UI states. Exactly one is active at a time."""
    IDLE = "idle"
    DRAWING = "drawing"
    AWAITING_CREDENTIAL = "awaiting_credential"
    SUBMITTING = "submitting"


class UIAction(Enum):
    """Inputs that can move the state machine."""
    POINTER_DOWN = "pointer_down"
    POINTER_UP = "pointer_up"
    SUBMIT = "submit"
    SUBMIT_WITHOUT_CREDENTIAL = "submit_without_credential"
    OPEN_SETTINGS = "open_settings"
    CREDENTIAL_SAVED = "credential_saved"
    CANCEL_SETTINGS = "cancel_settings"
    REQUEST_RESOLVED = "request_resolved"
    REQUEST_FAILED = "request_failed"


_TRANSITIONS: Dict[Tuple[UIState, UIAction], UIState] = {
    (UIState.IDLE, UIAction.POINTER_DOWN): UIState.DRAWING,
    (UIState.DRAWING, UIAction.POINTER_UP): UIState.IDLE,
    (UIState.IDLE, UIAction.SUBMIT_WITHOUT_CREDENTIAL): UIState.AWAITING_CREDENTIAL,
    (UIState.IDLE, UIAction.OPEN_SETTINGS): UIState.AWAITING_CREDENTIAL,
    (UIState.AWAITING_CREDENTIAL, UIAction.CREDENTIAL_SAVED): UIState.IDLE,
    (UIState.AWAITING_CREDENTIAL, UIAction.CANCEL_SETTINGS): UIState.IDLE,
    (UIState.IDLE, UIAction.SUBMIT): UIState.SUBMITTING,
    (UIState.SUBMITTING, UIAction.REQUEST_RESOLVED): UIState.IDLE,
    (UIState.SUBMITTING, UIAction.REQUEST_FAILED): UIState.IDLE,
}


def transition(state: UIState, action: UIAction) -> UIState:
    """
    Compute the next state.

    Pairs without a transition leave the state unchanged, so a second
    SUBMIT while SUBMITTING or a POINTER_DOWN while the credential dialog
    is open are no-ops.

    Args:
        state: Current state
        action: Incoming action

    Returns:
        Next state
    """
    return _TRANSITIONS.get((state, action), state)


def initial_state(has_credential: bool) -> UIState:
    """Initial state: AWAITING_CREDENTIAL until a key has been stored."""
    return UIState.IDLE if has_credential else UIState.AWAITING_CREDENTIAL


class UIStateMachine(QObject):
    """
    Holds the current UIState and emits state_changed on every change.

    Usage:
        machine = UIStateMachine(UIState.IDLE)
        machine.state_changed.connect(on_state)
        machine.dispatch(UIAction.POINTER_DOWN)
    """

    state_changed = pyqtSignal(object)  # UIState

    def __init__(self, state: UIState = UIState.IDLE, parent=None):
        super().__init__(parent)
        self._state = state

    @property
    def state(self) -> UIState:
        return self._state

    def dispatch(self, action: UIAction) -> UIState:
        """Apply an action; returns the (possibly unchanged) state."""
        new_state = transition(self._state, action)
        if new_state != self._state:
            logger.debug(f"UI state {self._state.value} -> {new_state.value} ({action.value})")
            self._state = new_state
            self.state_changed.emit(new_state)
        return self._state

    def can_draw(self) -> bool:
        return self._state in (UIState.IDLE, UIState.DRAWING, UIState.SUBMITTING)

    def is_submitting(self) -> bool:
        return self._state == UIState.SUBMITTING


__all__ = ['UIState', 'UIAction', 'UIStateMachine', 'transition', 'initial_state']
