"""Core session logic for Co-Drawing"""

from .errors import (
    CoDrawingError,
    MissingCredential,
    ValidationError,
    GenerationError,
    ServiceError,
    ParseFailure,
    DecodeFailure,
)
from .models import GenerationRequest, GenerationResponse
from .state_machine import UIState, UIAction, UIStateMachine, transition, initial_state

__all__ = [
    'CoDrawingError',
    'MissingCredential',
    'ValidationError',
    'GenerationError',
    'ServiceError',
    'ParseFailure',
    'DecodeFailure',
    'GenerationRequest',
    'GenerationResponse',
    'UIState',
    'UIAction',
    'UIStateMachine',
    'transition',
    'initial_state',
]
