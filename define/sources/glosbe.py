"""Glosbe translation API source, queried English to English. No credentials needed."""

from __future__ import annotations

from typing import List

from define.config import Configuration
from define.core.lexical import DictionaryResult
from define.core.normalizers.glosbe import GlosbeNormalizer
from define.sources.base import Source, SourceProvider, check_lookup_response

NAME = "Glosbe API"
JSON_KEY = "GlosbeAPI"

TRANSLATE_URL = "https://glosbe.com/gapi/translate"
TRANSLATE_PARAMS = {"format": "json", "from": "en", "dest": "en"}


class GlosbeSource(Source):
    name = NAME

    def __init__(self, *args, **kwargs) -> None:
        super().__init__(*args, **kwargs)
        self.normalizer = GlosbeNormalizer()

    def define(self, word: str) -> List[DictionaryResult]:
        response = self._get(TRANSLATE_URL, params={**TRANSLATE_PARAMS, "phrase": word})
        check_lookup_response(word, response)

        return self.normalizer.normalize(response.json(), word)


def provide(config: Configuration) -> GlosbeSource:
    return GlosbeSource()


PROVIDER = SourceProvider(NAME, JSON_KEY, provide)
