from __future__ import annotations


class EngineError(Exception):
    def __init__(self, message: str, *, code: str = "engine_error"):
        super().__init__(message)
        self.message = message
        self.code = code


class InsufficientInputError(EngineError):
    """Job or resume text is too short to score; callers show no score."""

    default_message = "Not enough text to compute a match score."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message, code="insufficient_input")


class MalformedDraftError(EngineError):
    """The generated draft cannot be turned into any resume structure."""

    default_message = "The generated resume could not be read. Please regenerate and try again."

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message, code="malformed_draft")
