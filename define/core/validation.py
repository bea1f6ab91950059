"""
Validation of normalized lookup results.

Normalizers and sources run their output through these checks so that an
empty lookup always surfaces as an EmptyResultError, never as an empty list.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from define.core.errors import EmptyResultError
from define.core.lexical import DictionaryResult


def validate_dictionary_results(word: str, results: Optional[Sequence[DictionaryResult]]) -> None:
    """Raise EmptyResultError if there are no results for the word."""
    if not results:
        raise EmptyResultError(word)


def validate_and_return_dictionary_results(
    word: str,
    results: Optional[List[DictionaryResult]],
) -> List[DictionaryResult]:
    """Validate results and hand them back unchanged, for pipelining."""
    validate_dictionary_results(word, results)
    return results


def validate_search_results(word: str, results: Optional[Sequence[str]]) -> None:
    """Raise EmptyResultError if a search found nothing for the word."""
    if not results:
        raise EmptyResultError(word)


def validate_and_return_search_results(word: str, results: Optional[List[str]]) -> List[str]:
    validate_search_results(word, results)
    return results


def is_sorted_for_primary_result(word: str, results: Sequence[DictionaryResult]) -> bool:
    """Check whether the result for exactly ``word`` is already first.

    The comparison is exact and case-sensitive. An empty list counts as sorted.
    """
    if not results:
        return True
    return results[0].word == word


def sort_for_primary_result(word: str, results: List[DictionaryResult]) -> List[DictionaryResult]:
    """Move the first result whose word is exactly ``word`` to the front.

    Only that one result moves; every other result keeps its relative order.
    If no result matches, the list is left unchanged. The list is reordered
    in place and also returned.

    Args:
        word: The word originally looked up
        results: Results as returned by a source

    Returns:
        The same list, reordered
    """
    if is_sorted_for_primary_result(word, results):
        return results

    for index, result in enumerate(results):
        if result.word == word:
            results.insert(0, results.pop(index))
            break

    return results
