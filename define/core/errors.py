"""
Error taxonomy shared by sources, normalizers, validation, and rendering.
"""

from __future__ import annotations

from typing import Any, Optional

EMPTY_RESULT_ERROR_MESSAGE = "the source returned an empty result"
AUTHENTICATION_ERROR_MESSAGE = "the source returned an authentication error"
INVALID_RESPONSE_ERROR_MESSAGE = "the source returned an invalid response"
ERROR_MESSAGE_FOR_WORD_SUFFIX = ' for word: "{word}"'


class DefineError(Exception):
    """Base class for all expected lookup failures."""


class EmptyResultError(DefineError):
    """Raised when a lookup produced no usable results."""

    def __init__(self, word: str = "") -> None:
        self.word = word
        super().__init__(str(self))

    def __str__(self) -> str:
        message = EMPTY_RESULT_ERROR_MESSAGE
        if self.word:
            message += ERROR_MESSAGE_FOR_WORD_SUFFIX.format(word=self.word)
        return message

    def __eq__(self, other: object) -> bool:
        return isinstance(other, EmptyResultError) and other.word == self.word

    def __hash__(self) -> int:
        return hash((EmptyResultError, self.word))


class AuthenticationError(DefineError):
    """Raised when a source rejects our credentials."""

    def __str__(self) -> str:
        return AUTHENTICATION_ERROR_MESSAGE


class InvalidResponseError(DefineError):
    """Raised when a source answers with an unacceptable status or content type.

    The raw response is kept so callers can log the details.
    """

    def __init__(self, response: Optional[Any] = None) -> None:
        self.response = response
        super().__init__(str(self))

    def __str__(self) -> str:
        return INVALID_RESPONSE_ERROR_MESSAGE

    @property
    def status_code(self) -> Optional[int]:
        return getattr(self.response, "status_code", None)


class RequiredConfigError(DefineError):
    """Raised when a source can't be provided without a configuration value."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(str(self))

    def __str__(self) -> str:
        return f'required configuration key "{self.key}" is missing'


class ConfigurationError(DefineError):
    """Raised when configuration can't be loaded."""


class OutputWriteError(DefineError):
    """Raised when writing rendered output fails.

    There's no partial-output recovery, so this aborts the whole command.
    """
