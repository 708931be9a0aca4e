"""
Error types for Co-Drawing

Generation failures all derive from GenerationError so the session can
turn any of them into one user-visible notice.
"""


class CoDrawingError(Exception):
    """Base class for all application errors"""


class MissingCredential(CoDrawingError):
    """Submission attempted with no stored API key"""


class ValidationError(CoDrawingError):
    """User input rejected before it was stored"""


class GenerationError(CoDrawingError):
    """A generation request did not produce a usable image"""

    kind = "generation"
    user_message = "Failed to generate image. Please try again."


class ServiceError(GenerationError):
    """Network failure or non-success response from the generation service"""

    kind = "service"

    def __init__(self, message: str = ""):
        super().__init__(message)
        if message:
            self.user_message = f"An error occurred: {message}"
        else:
            self.user_message = "An error occurred. Please try again."


class ParseFailure(GenerationError):
    """Response received but it carries no image part"""

    kind = "parse"


class DecodeFailure(GenerationError):
    """Image part present but its bytes could not be decoded"""

    kind = "decode"


__all__ = [
    'CoDrawingError',
    'MissingCredential',
    'ValidationError',
    'GenerationError',
    'ServiceError',
    'ParseFailure',
    'DecodeFailure',
]
