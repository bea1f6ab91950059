"""
Core Package.

This package provides the canonical lookup model, error taxonomy, text
cleanup helpers, and result validation shared by every source.
"""

from define.core.errors import (
    AuthenticationError,
    ConfigurationError,
    DefineError,
    EmptyResultError,
    InvalidResponseError,
    OutputWriteError,
    RequiredConfigError,
)
from define.core.lexical import (
    AttributedText,
    DictionaryEntry,
    DictionaryResult,
    Sense,
    format_pronunciation,
    format_pronunciations,
)
from define.core.text import equal_fold_plain, remove_diacritics
from define.core.validation import (
    is_sorted_for_primary_result,
    sort_for_primary_result,
    validate_and_return_dictionary_results,
    validate_and_return_search_results,
    validate_dictionary_results,
    validate_search_results,
)

__all__ = [
    # Model
    "AttributedText",
    "Sense",
    "DictionaryEntry",
    "DictionaryResult",
    "format_pronunciation",
    "format_pronunciations",
    # Errors
    "DefineError",
    "EmptyResultError",
    "AuthenticationError",
    "InvalidResponseError",
    "RequiredConfigError",
    "ConfigurationError",
    "OutputWriteError",
    # Text
    "remove_diacritics",
    "equal_fold_plain",
    # Validation
    "validate_dictionary_results",
    "validate_and_return_dictionary_results",
    "validate_search_results",
    "validate_and_return_search_results",
    "is_sorted_for_primary_result",
    "sort_for_primary_result",
]
