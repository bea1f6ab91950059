"""
Oxford Dictionaries API (v2) source.

Requires an app ID and key from https://developer.oxforddictionaries.com,
sent as request headers. Words without their own entry (often inflected
forms) are looked up again through the search API.
"""

from __future__ import annotations

import logging
from typing import List
from urllib.parse import quote

from define.config import Configuration
from define.core.errors import EmptyResultError, RequiredConfigError
from define.core.lexical import DictionaryResult
from define.core.normalizers.oxford import (
    OxfordNormalizer,
    OxfordResponse,
    OxfordSearchResponse,
    find_inflection_fallback,
)
from define.core.validation import validate_and_return_search_results
from define.sources.base import Source, SourceProvider, check_lookup_response, truncate_search_results

logger = logging.getLogger(__name__)

NAME = "Oxford Dictionaries API"
JSON_KEY = "OxfordDictionary"

BASE_URL = "https://od-api.oxforddictionaries.com/api/v2/"
LANGUAGE = "en-us"
ENTRIES_URL = f"{BASE_URL}entries/{LANGUAGE}/"
SEARCH_URL = f"{BASE_URL}search/{LANGUAGE}"

FALLBACK_SEARCH_LIMIT = 10


class OxfordSource(Source):
    name = NAME

    def __init__(self, app_id: str, app_key: str, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.session.headers.update({"app_id": app_id, "app_key": app_key})
        self.normalizer = OxfordNormalizer()

    def define(self, word: str) -> List[DictionaryResult]:
        return self._define(word, allow_fallback=True)

    def _define(self, word: str, allow_fallback: bool) -> List[DictionaryResult]:
        response = self._get(ENTRIES_URL + quote(word, safe=""))

        try:
            check_lookup_response(word, response)
            api_response = OxfordResponse.model_validate(response.json())
            if not api_response.results:
                raise EmptyResultError(word)
        except EmptyResultError:
            if not allow_fallback:
                raise
            return self._define_by_inflection(word)

        return self.normalizer.normalize(api_response, word)

    def search(self, word: str, limit: int = 0) -> List[str]:
        results = truncate_search_results(self._search(word, limit).to_search_results(), limit)
        return validate_and_return_search_results(word, results)

    def _search(self, word: str, limit: int = 0) -> OxfordSearchResponse:
        params = {"q": word}
        if limit > 0:
            params["limit"] = str(limit)

        response = self._get(SEARCH_URL, params=params)
        check_lookup_response(word, response)

        search_response = OxfordSearchResponse.model_validate(response.json())
        if not search_response.results:
            raise EmptyResultError(word)
        return search_response

    def _define_by_inflection(self, word: str) -> List[DictionaryResult]:
        logger.debug("No entry for %r, searching for an inflection", word)

        fallback = find_inflection_fallback(word, self._search(word, FALLBACK_SEARCH_LIMIT))
        if fallback is None:
            raise EmptyResultError(word)

        logger.debug("Defining %r as an inflection of %r", word, fallback)
        try:
            return self._define(fallback, allow_fallback=False)
        except EmptyResultError:
            raise EmptyResultError(word) from None


def provide(config: Configuration) -> OxfordSource:
    if not config.oxford_dictionary.app_id:
        raise RequiredConfigError("AppID")
    if not config.oxford_dictionary.app_key:
        raise RequiredConfigError("AppKey")

    return OxfordSource(config.oxford_dictionary.app_id, config.oxford_dictionary.app_key)


PROVIDER = SourceProvider(NAME, JSON_KEY, provide)
