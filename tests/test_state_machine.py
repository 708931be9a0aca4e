"""Tests for the UI state machine"""

import pytest

from co_drawing.core.state_machine import (
    UIAction, UIState, UIStateMachine, initial_state, transition
)


@pytest.mark.parametrize("state, action, expected", [
    (UIState.IDLE, UIAction.POINTER_DOWN, UIState.DRAWING),
    (UIState.DRAWING, UIAction.POINTER_UP, UIState.IDLE),
    (UIState.IDLE, UIAction.SUBMIT_WITHOUT_CREDENTIAL, UIState.AWAITING_CREDENTIAL),
    (UIState.IDLE, UIAction.OPEN_SETTINGS, UIState.AWAITING_CREDENTIAL),
    (UIState.AWAITING_CREDENTIAL, UIAction.CREDENTIAL_SAVED, UIState.IDLE),
    (UIState.AWAITING_CREDENTIAL, UIAction.CANCEL_SETTINGS, UIState.IDLE),
    (UIState.IDLE, UIAction.SUBMIT, UIState.SUBMITTING),
    (UIState.SUBMITTING, UIAction.REQUEST_RESOLVED, UIState.IDLE),
    (UIState.SUBMITTING, UIAction.REQUEST_FAILED, UIState.IDLE),
])
def test_transitions(state, action, expected):
    assert transition(state, action) == expected


@pytest.mark.parametrize("state, action", [
    (UIState.SUBMITTING, UIAction.SUBMIT),
    (UIState.SUBMITTING, UIAction.POINTER_DOWN),
    (UIState.AWAITING_CREDENTIAL, UIAction.POINTER_DOWN),
    (UIState.AWAITING_CREDENTIAL, UIAction.SUBMIT),
    (UIState.IDLE, UIAction.REQUEST_RESOLVED),
])
def test_unlisted_pairs_keep_state(state, action):
    assert transition(state, action) == state


def test_initial_state():
    assert initial_state(True) == UIState.IDLE
    assert initial_state(False) == UIState.AWAITING_CREDENTIAL


def test_dispatch_emits_only_on_change(qapp):
    machine = UIStateMachine(UIState.IDLE)
    seen = []
    machine.state_changed.connect(seen.append)

    machine.dispatch(UIAction.SUBMIT)
    machine.dispatch(UIAction.SUBMIT)
    machine.dispatch(UIAction.REQUEST_RESOLVED)

    assert seen == [UIState.SUBMITTING, UIState.IDLE]


def test_drawing_allowed_while_submitting(qapp):
    machine = UIStateMachine(UIState.SUBMITTING)
    assert machine.can_draw()
    assert machine.is_submitting()
    assert not UIStateMachine(UIState.AWAITING_CREDENTIAL).can_draw()
