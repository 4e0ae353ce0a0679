"""
Error taxonomy for the parse / detect / dispatch pipeline.

Every error carries the phase it was raised in so callers can tell which
step of the pipeline rejected the input.
"""
from typing import Optional


class EdifactError(ValueError):
    """Base class for all EDIFACT processing errors."""

    phase = "edifact"

    def __init__(self, message: str, phase: Optional[str] = None):
        super().__init__(message)
        self.message = message
        if phase:
            self.phase = phase

    def __str__(self) -> str:
        return f"{self.phase}: {self.message}"


class EdifactSyntaxError(EdifactError):
    """Malformed delimiter or escape sequence while tokenizing."""

    phase = "tokenize"


class BuildError(EdifactError):
    """Tokenized input that cannot form a segment (bad or missing tag)."""

    phase = "build"


class DetectionError(EdifactError):
    """Header segment missing or its type descriptor malformed."""

    phase = "detect"


class HandlerError(EdifactError):
    """
    Raised by business handlers that reject a message.

    The dispatcher never catches it; it reaches the caller unchanged.
    """

    phase = "handle"

    def __init__(self, message: str, message_type: str = "", field: Optional[str] = None):
        super().__init__(message)
        self.message_type = message_type
        self.field = field


class RegistrationError(EdifactError):
    """Misuse of the handler registry (frozen registry, non-callable handler)."""

    phase = "register"
