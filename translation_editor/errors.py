from __future__ import annotations

from typing import Optional


class TranslationEditorError(Exception):
    """Base class for errors raised by the translation editor."""


class MalformedKeyError(TranslationEditorError, ValueError):
    """A path key could not be decoded into an ordered list of strings."""

    def __init__(self, key, reason: str = ''):
        self.key = key
        self.reason = reason
        message = f"Malformed path key: {key!r}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class EmptyChangeSetError(TranslationEditorError):
    """Raised when a submission is attempted with no recorded changes."""

    def __init__(self, message: str = "There are no proposed changes to submit."):
        super().__init__(message)


class SubmissionError(TranslationEditorError):
    def __init__(self, message: str, status_code: Optional[int] = None, body: str = ''):
        self.status_code = status_code
        self.body = body
        super().__init__(message)


class ConfigurationError(TranslationEditorError):
    pass


class RevisionError(TranslationEditorError):
    pass
