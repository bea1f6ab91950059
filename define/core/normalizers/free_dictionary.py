"""
Normalizer for Free Dictionary API responses.

Transforms the decoded JSON of https://api.dictionaryapi.dev entries into
canonical DictionaryResult instances. The API is simple: each result is a
word with phonetics and a list of meanings (one per part of speech), each
meaning holding flat definitions with an optional example.
"""

from __future__ import annotations

import logging
from typing import Any, List

from pydantic import BaseModel, ConfigDict, Field

from define.core.errors import EmptyResultError
from define.core.lexical import AttributedText, DictionaryEntry, DictionaryResult, Sense
from define.core.text import collapse_whitespace, equal_fold_plain
from define.core.validation import validate_and_return_dictionary_results

logger = logging.getLogger(__name__)

# The API wraps phonetic spellings in slashes; the canonical model doesn't
PHONETICS_WRAPPER = "/"

DEFAULT_LANGUAGE = "en"


class FreeDictionaryThesaurusValues(BaseModel):
    synonyms: List[str] = Field(default_factory=list)
    antonyms: List[str] = Field(default_factory=list)


class FreeDictionaryDefinition(FreeDictionaryThesaurusValues):
    definition: str = ""
    example: str = ""


class FreeDictionaryMeaning(FreeDictionaryThesaurusValues):
    model_config = ConfigDict(populate_by_name=True)

    part_of_speech: str = Field("", alias="partOfSpeech")
    definitions: List[FreeDictionaryDefinition] = Field(default_factory=list)


class FreeDictionaryPhonetic(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    audio: str = ""
    source_url: str = Field("", alias="sourceUrl")


class FreeDictionaryResult(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    word: str = ""
    phonetic: str = ""
    phonetics: List[FreeDictionaryPhonetic] = Field(default_factory=list)
    meanings: List[FreeDictionaryMeaning] = Field(default_factory=list)
    source_urls: List[str] = Field(default_factory=list, alias="sourceUrls")


def parse_response(payload: Any) -> List[FreeDictionaryResult]:
    """Parse a decoded response body into result DTOs.

    Raises:
        pydantic.ValidationError: If the payload doesn't match the API schema
    """
    if not payload:
        return []
    if isinstance(payload, dict):
        # Not-found responses are a single object with a "title" message
        return []
    return [FreeDictionaryResult.model_validate(item) for item in payload]


class FreeDictionaryNormalizer:
    """Normalizes Free Dictionary API results to canonical form."""

    def normalize(self, payload: Any, word: str) -> List[DictionaryResult]:
        """Convert a decoded Free Dictionary API response to results.

        Args:
            payload: Decoded JSON body (a list of result objects), or parsed DTOs
            word: The word that was looked up

        Returns:
            One DictionaryResult per upstream result matching the main headword

        Raises:
            EmptyResultError: If the response holds no usable results
        """
        api_results = payload if _is_parsed(payload) else parse_response(payload)
        if not api_results:
            raise EmptyResultError(word)

        main_word = api_results[0].word

        results = []
        for api_result in api_results:
            if not equal_fold_plain(api_result.word, main_word):
                logger.debug("Skipping result for different headword %r", api_result.word)
                continue
            results.append(self._to_result(api_result))

        return validate_and_return_dictionary_results(word, results)

    def _to_result(self, api_result: FreeDictionaryResult) -> DictionaryResult:
        pronunciations = self._extract_pronunciations(api_result)

        entries = []
        for meaning in api_result.meanings:
            entry = self._meaning_to_entry(meaning)
            entry.word = api_result.word
            entry.pronunciations = list(pronunciations)
            entries.append(entry)

        return DictionaryResult(language=DEFAULT_LANGUAGE, word=api_result.word, entries=entries)

    def _extract_pronunciations(self, api_result: FreeDictionaryResult) -> List[str]:
        """Collect phonetic spellings, headline spelling first, without duplicates."""
        candidates = [api_result.phonetic] + [phonetic.text for phonetic in api_result.phonetics]

        pronunciations: List[str] = []
        for candidate in candidates:
            cleaned = clean_phonetic_text(candidate)
            if cleaned and cleaned not in pronunciations:
                pronunciations.append(cleaned)
        return pronunciations

    def _meaning_to_entry(self, meaning: FreeDictionaryMeaning) -> DictionaryEntry:
        return DictionaryEntry(
            lexical_category=meaning.part_of_speech,
            senses=[self._definition_to_sense(definition) for definition in meaning.definitions],
            synonyms=list(meaning.synonyms),
            antonyms=list(meaning.antonyms),
        )

    def _definition_to_sense(self, definition: FreeDictionaryDefinition) -> Sense:
        sense = Sense(synonyms=list(definition.synonyms), antonyms=list(definition.antonyms))

        if definition.definition:
            sense.definitions.append(collapse_whitespace(definition.definition))
        if definition.example:
            sense.examples.append(AttributedText(text=collapse_whitespace(definition.example)))

        return sense


def clean_phonetic_text(text: str) -> str:
    """Trim the enclosing slashes the API wraps phonetic spellings in."""
    return (text or "").strip().strip(PHONETICS_WRAPPER)


def _is_parsed(payload: Any) -> bool:
    return isinstance(payload, list) and bool(payload) and isinstance(payload[0], FreeDictionaryResult)
