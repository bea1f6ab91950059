"""
Normalizer for Oxford Dictionaries API (v2) responses.

Oxford nests a lookup as results -> lexical entries (one per part of
speech) -> entries (one per homograph) -> senses -> subsenses. Each
canonical DictionaryEntry corresponds to one upstream entry, with the
lexical category of the lexical entry that holds it.

Lookups that come back empty are retried once through the search API,
using an inflection of the word (e.g. "tests" -> "test"). Choosing the
inflection lives here so it can be exercised without any HTTP.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from define.core.errors import EmptyResultError
from define.core.lexical import AttributedText, DictionaryEntry, DictionaryResult, Sense
from define.core.text import clean_tokens, collapse_whitespace, equal_fold_plain, strip_meta_tokens
from define.core.validation import validate_and_return_dictionary_results

logger = logging.getLogger(__name__)

PHONETIC_NOTATION_IPA = "IPA"

SEARCH_MATCH_TYPE_INFLECTION = "inflection"


class OxfordModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class OxfordIdText(OxfordModel):
    id: str = ""
    text: str = ""
    type: str = ""


class OxfordWordReference(OxfordModel):
    id: str = ""
    language: str = ""
    text: str = ""


class OxfordCrossReference(OxfordModel):
    """A link to another headword, e.g. "run" for "past of run"."""

    id: str = ""
    text: str = ""
    type: str = ""


class OxfordPronunciation(OxfordModel):
    audio_file: str = Field("", alias="audioFile")
    dialects: List[str] = Field(default_factory=list)
    phonetic_notation: str = Field("", alias="phoneticNotation")
    phonetic_spelling: str = Field("", alias="phoneticSpelling")


class OxfordExample(OxfordModel):
    text: str = ""
    notes: List[OxfordIdText] = Field(default_factory=list)


class OxfordSense(OxfordModel):
    id: str = ""
    definitions: List[str] = Field(default_factory=list)
    short_definitions: List[str] = Field(default_factory=list, alias="shortDefinitions")
    examples: List[OxfordExample] = Field(default_factory=list)
    notes: List[OxfordIdText] = Field(default_factory=list)
    etymologies: List[str] = Field(default_factory=list)
    pronunciations: List[OxfordPronunciation] = Field(default_factory=list)
    synonyms: List[OxfordWordReference] = Field(default_factory=list)
    antonyms: List[OxfordWordReference] = Field(default_factory=list)
    cross_reference_markers: List[str] = Field(default_factory=list, alias="crossReferenceMarkers")
    cross_references: List[OxfordCrossReference] = Field(default_factory=list, alias="crossReferences")
    subsenses: List[OxfordSense] = Field(default_factory=list)


class OxfordEntry(OxfordModel):
    etymologies: List[str] = Field(default_factory=list)
    homograph_number: str = Field("", alias="homographNumber")
    notes: List[OxfordIdText] = Field(default_factory=list)
    pronunciations: List[OxfordPronunciation] = Field(default_factory=list)
    senses: List[OxfordSense] = Field(default_factory=list)


class OxfordLexicalEntry(OxfordModel):
    entries: List[OxfordEntry] = Field(default_factory=list)
    language: str = ""
    lexical_category: OxfordIdText = Field(default_factory=OxfordIdText, alias="lexicalCategory")
    pronunciations: List[OxfordPronunciation] = Field(default_factory=list)
    text: str = ""


class OxfordResult(OxfordModel):
    id: str = ""
    language: str = ""
    lexical_entries: List[OxfordLexicalEntry] = Field(default_factory=list, alias="lexicalEntries")
    pronunciations: List[OxfordPronunciation] = Field(default_factory=list)
    type: str = ""
    word: str = ""


class OxfordResponse(OxfordModel):
    metadata: dict = Field(default_factory=dict)
    results: List[OxfordResult] = Field(default_factory=list)


class OxfordSearchResult(OxfordModel):
    id: str = ""
    label: str = ""
    match_string: str = Field("", alias="matchString")
    match_type: str = Field("", alias="matchType")
    word: str = ""


class OxfordSearchResponse(OxfordModel):
    metadata: dict = Field(default_factory=dict)
    results: List[OxfordSearchResult] = Field(default_factory=list)

    def to_search_results(self) -> List[str]:
        return [result.label for result in self.results]


OxfordSense.model_rebuild()


def find_inflection_fallback(word: str, search_response: OxfordSearchResponse) -> Optional[str]:
    """Pick the word to redefine when a direct lookup found nothing.

    Args:
        word: The word whose lookup came back empty
        search_response: Search results for that word

    Returns:
        The label of the first inflection match, or None if there isn't one
        or it's the same word again (which would just loop)
    """
    for result in search_response.results:
        if result.match_type != SEARCH_MATCH_TYPE_INFLECTION:
            continue

        if not result.label or equal_fold_plain(result.label, word):
            logger.debug("Inflection %r for %r is the same word", result.label, word)
            return None
        return result.label

    return None


class OxfordNormalizer:
    """Normalizes Oxford Dictionaries API results to canonical form."""

    def normalize(self, response: Any, word: str) -> List[DictionaryResult]:
        """Convert an Oxford entries response to dictionary results.

        Args:
            response: A parsed OxfordResponse, or the decoded JSON object
            word: The word that was looked up

        Returns:
            One DictionaryResult per upstream result matching the main headword

        Raises:
            EmptyResultError: If the response holds no results
        """
        if not isinstance(response, OxfordResponse):
            response = OxfordResponse.model_validate(response or {})

        if not response.results:
            raise EmptyResultError(word)

        main_word = response.results[0].word

        results = []
        for api_result in response.results:
            if not equal_fold_plain(api_result.word, main_word):
                logger.debug("Skipping result for different headword %r", api_result.word)
                continue
            results.append(self._to_result(api_result))

        return validate_and_return_dictionary_results(word, results)

    def _to_result(self, api_result: OxfordResult) -> DictionaryResult:
        entries = []

        for lexical_entry in api_result.lexical_entries:
            for api_entry in lexical_entry.entries:
                entry = self._to_entry(api_entry)
                entry.word = lexical_entry.text or api_result.word
                entry.lexical_category = lexical_entry.lexical_category.text
                entry.pronunciations = select_pronunciations(
                    api_entry.pronunciations, lexical_entry.pronunciations, api_result.pronunciations
                )
                entries.append(entry)

        return DictionaryResult(language=api_result.language, word=api_result.word, entries=entries)

    def _to_entry(self, api_entry: OxfordEntry) -> DictionaryEntry:
        entry = DictionaryEntry(
            senses=[self._to_sense(api_sense) for api_sense in api_entry.senses],
            etymologies=_clean_etymologies(api_entry.etymologies),
        )

        # Entry-level thesaurus values are gathered from its senses
        for sense in entry.senses:
            _extend_unique(entry.synonyms, sense.synonyms)
            _extend_unique(entry.antonyms, sense.antonyms)

        return entry

    def _to_sense(self, api_sense: OxfordSense) -> Sense:
        sense = self._to_flat_sense(api_sense)

        for api_subsense in _walk_subsenses(api_sense):
            sense.sub_senses.append(self._to_flat_sense(api_subsense))

        return sense

    def _to_flat_sense(self, api_sense: OxfordSense) -> Sense:
        """Map one sense without looking at its subsenses."""
        # Inflected forms often carry only a marker such as "past of run"
        definitions = api_sense.definitions or api_sense.short_definitions or _cross_reference_texts(api_sense)

        return Sense(
            definitions=[collapse_whitespace(definition) for definition in definitions if definition.strip()],
            examples=[
                AttributedText(text=collapse_whitespace(example.text))
                for example in api_sense.examples
                if example.text.strip()
            ],
            notes=[collapse_whitespace(note.text) for note in api_sense.notes if note.text.strip()],
            synonyms=_reference_texts(api_sense.synonyms),
            antonyms=_reference_texts(api_sense.antonyms),
        )


def select_pronunciations(*levels: Iterable[OxfordPronunciation]) -> List[str]:
    """Collect phonetic spellings across entry levels, preferring IPA.

    Spellings in other notations are only used when no IPA spelling exists.
    """
    ipa: List[str] = []
    other: List[str] = []

    for pronunciations in levels:
        for pronunciation in pronunciations:
            spelling = pronunciation.phonetic_spelling.strip()
            if not spelling:
                continue

            if pronunciation.phonetic_notation.upper() == PHONETIC_NOTATION_IPA:
                _extend_unique(ipa, [spelling])
            else:
                _extend_unique(other, [spelling])

    return ipa or other


def _walk_subsenses(api_sense: OxfordSense) -> List[OxfordSense]:
    """All subsenses below a sense, depth first, flattened to one level."""
    subsenses = []
    for api_subsense in api_sense.subsenses:
        subsenses.append(api_subsense)
        subsenses.extend(_walk_subsenses(api_subsense))
    return subsenses


def _cross_reference_texts(api_sense: OxfordSense) -> List[str]:
    """Markers for a sense, or its bare targets when it has no markers."""
    markers = [collapse_whitespace(clean_tokens(marker)) for marker in api_sense.cross_reference_markers]
    markers = [marker for marker in markers if marker]
    if markers:
        return markers

    return [reference.text for reference in api_sense.cross_references if reference.text.strip()]


def _clean_etymologies(etymologies: List[str]) -> List[str]:
    cleaned = [collapse_whitespace(clean_tokens(strip_meta_tokens(etymology))) for etymology in etymologies]
    return [etymology for etymology in cleaned if etymology]


def _reference_texts(references: List[OxfordWordReference]) -> List[str]:
    texts: List[str] = []
    _extend_unique(texts, [reference.text for reference in references if reference.text])
    return texts


def _extend_unique(target: List[str], values: Iterable[str]) -> None:
    for value in values:
        if value not in target:
            target.append(value)
