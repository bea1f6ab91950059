"""Free Dictionary API source (https://dictionaryapi.dev). No credentials needed."""

from __future__ import annotations

from typing import List
from urllib.parse import quote

from define.config import Configuration
from define.core.lexical import DictionaryResult
from define.core.normalizers.free_dictionary import FreeDictionaryNormalizer
from define.sources.base import Source, SourceProvider, check_lookup_response

NAME = "Free Dictionary API"
JSON_KEY = "FreeDictionaryAPI"

ENTRIES_URL = "https://api.dictionaryapi.dev/api/v2/entries/en/"


class FreeDictionarySource(Source):
    name = NAME

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.normalizer = FreeDictionaryNormalizer()

    def define(self, word: str) -> List[DictionaryResult]:
        response = self._get(ENTRIES_URL + quote(word, safe=""))
        check_lookup_response(word, response)

        return self.normalizer.normalize(response.json(), word)


def provide(config: Configuration) -> FreeDictionarySource:
    return FreeDictionarySource()


PROVIDER = SourceProvider(NAME, JSON_KEY, provide)
