"""
Merriam-Webster's Collegiate Dictionary source.

Requires an API key from https://dictionaryapi.com, sent as the ``key``
query parameter. The same endpoint serves definitions and, for unknown
words, spelling suggestions, so it backs both ``define`` and ``search``.
"""

from __future__ import annotations

from typing import List
from urllib.parse import quote

from define.config import Configuration
from define.core.errors import EmptyResultError, RequiredConfigError
from define.core.lexical import DictionaryResult
from define.core.normalizers.webster import WebsterNormalizer, WebsterResponse, WebsterSearchResponse, parse_response
from define.core.validation import validate_and_return_search_results
from define.sources.base import Source, SourceProvider, check_lookup_response, truncate_search_results

NAME = "Merriam-Webster's Dictionary API"
JSON_KEY = "MerriamWebsterDictionary"

ENTRIES_URL = "https://www.dictionaryapi.com/api/v3/references/collegiate/json/"


class WebsterSource(Source):
    name = NAME

    def __init__(self, app_key: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.app_key = app_key
        self.normalizer = WebsterNormalizer()

    def define(self, word: str) -> List[DictionaryResult]:
        return self.normalizer.normalize(self._lookup(word), word)

    def search(self, word: str, limit: int = 0) -> List[str]:
        response = self._lookup(word)
        if not isinstance(response, WebsterSearchResponse):
            # Entries mean the word exists, so there's nothing to suggest
            raise EmptyResultError(word)

        results = truncate_search_results(response.to_search_results(), limit)
        return validate_and_return_search_results(word, results)

    def _lookup(self, word: str) -> WebsterResponse:
        response = self._get(ENTRIES_URL + quote(word, safe=""), params={"key": self.app_key})
        check_lookup_response(word, response)

        payload = response.json()
        if not payload:
            raise EmptyResultError(word)

        return parse_response(payload)


def provide(config: Configuration) -> WebsterSource:
    app_key = config.merriam_webster_dictionary.app_key
    if not app_key:
        raise RequiredConfigError("AppKey")

    return WebsterSource(app_key)


PROVIDER = SourceProvider(NAME, JSON_KEY, provide)
