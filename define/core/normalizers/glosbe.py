"""
Normalizer for Glosbe translation API responses.

Glosbe is a translation memory, queried here with English as both source
and destination language. Its "tuc" items pair a phrase with meanings:
items for the looked-up phrase itself provide definitions, and items for
other phrases are treated as synonyms.
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional

from pydantic import BaseModel, Field

from define.core.errors import EmptyResultError
from define.core.lexical import DictionaryEntry, DictionaryResult, Sense
from define.core.text import collapse_whitespace, sanitize_html
from define.core.validation import validate_and_return_dictionary_results

logger = logging.getLogger(__name__)


class GlosbePhrase(BaseModel):
    language: str = ""
    text: str = ""


class GlosbeTranslation(BaseModel):
    meanings: List[GlosbePhrase] = Field(default_factory=list)
    phrase: Optional[GlosbePhrase] = None
    authors: List[int] = Field(default_factory=list)


class GlosbeResponse(BaseModel):
    result: str = ""
    tuc: List[GlosbeTranslation] = Field(default_factory=list)
    phrase: str = ""
    dest: str = ""


class GlosbeNormalizer:
    """Normalizes Glosbe translation pairs to a single dictionary entry."""

    def normalize(self, response: Any, word: str) -> List[DictionaryResult]:
        """Convert a Glosbe response to dictionary results.

        Args:
            response: A parsed GlosbeResponse, or the decoded JSON object
            word: The word that was looked up

        Returns:
            A single result with one entry for the resolved phrase

        Raises:
            EmptyResultError: If the response holds no translation items
        """
        if not isinstance(response, GlosbeResponse):
            response = GlosbeResponse.model_validate(response or {})

        if not response.tuc:
            raise EmptyResultError(word)

        entry = DictionaryEntry(word=response.phrase or word)

        for item in response.tuc:
            if self._is_definition_source(item, response.phrase):
                for meaning in item.meanings:
                    definition = collapse_whitespace(sanitize_html(meaning.text))
                    if definition:
                        entry.senses.append(Sense(definitions=[definition]))
            elif item.phrase.text and item.phrase.text not in entry.synonyms:
                entry.synonyms.append(item.phrase.text)

        logger.debug("Glosbe gave %d senses, %d synonyms for %r", len(entry.senses), len(entry.synonyms), word)

        results = [DictionaryResult(language=response.dest, word=entry.word, entries=[entry])]
        return validate_and_return_dictionary_results(word, results)

    def _is_definition_source(self, item: GlosbeTranslation, phrase: str) -> bool:
        """Whether an item describes the looked-up phrase rather than another."""
        return item.phrase is None or item.phrase.text.casefold() == phrase.casefold()
