"""
Normalizer for Merriam-Webster Collegiate Dictionary (v3 JSON) responses.

The collegiate API answers a lookup with one of two shapes: an array of
entry objects when the word is found, or an array of plain strings
(spelling suggestions) when it isn't. The shape is decided once, when the
payload is parsed, into either a WebsterDefinitionResponse or a
WebsterSearchResponse.

Entry text is heavily marked up with curly-brace tokens, and senses are
nested through "sense numbers" (1, b, 2 a (1), ...). Both are reduced
here to the canonical two-level Sense model with plain text.

See https://www.dictionaryapi.com/products/json for the upstream schema.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from define.core.errors import EmptyResultError
from define.core.lexical import AttributedText, DictionaryEntry, DictionaryResult, Sense
from define.core.text import (
    clean_tokens,
    collapse_whitespace,
    equal_fold_plain,
    extract_small_caps,
    strip_meta_tokens,
)
from define.core.validation import validate_and_return_dictionary_results

logger = logging.getLogger(__name__)

DEFAULT_LANGUAGE = "en"

# Array data tags, the first element of each tagged "[tag, value]" pair
TAG_TEXT = "text"
TAG_SENSE = "sense"
TAG_BINDING_SUBSTITUTE = "bs"
TAG_PARENTHESIZED_SEQUENCE = "pseq"
TAG_VERBAL_ILLUSTRATIONS = "vis"
TAG_USAGE_NOTES = "uns"
TAG_SUPPLEMENTAL_NOTE = "snote"
TAG_SUPPLEMENTAL_NOTE_TEXT = "t"

# Bold colon; starts a new definition within defining text
DEFINITION_MARKER = "{bc}"

# Syllable breaks in headwords, e.g. "vo*lu*mi*nous"
HEADWORD_SYLLABLE_MARK = "*"

# Sense numbers: a numeral, a letter, and a parenthesized numeral, each optional
SENSE_NUMBER_PATTERN = re.compile(r"(\d+)? ?(\w+)? ?(\(\d+\))?")

# Characters trimmed around example text left over after removing attribution
ATTRIBUTION_RESIDUE_CHARS = " \t\n-–—,"


class WebsterPronunciation(BaseModel):
    mw: str = ""
    ipa: str = ""


class WebsterHeadwordInfo(BaseModel):
    hw: str = ""
    prs: List[WebsterPronunciation] = Field(default_factory=list)


class WebsterDividedSense(BaseModel):
    """A sense divider ("also", "specifically", ...) with its own defining text."""

    sd: str = ""
    dt: List[List[Any]] = Field(default_factory=list)


class WebsterSense(BaseModel):
    sn: Optional[str] = None
    dt: List[List[Any]] = Field(default_factory=list)
    sdsense: Optional[WebsterDividedSense] = None


class WebsterDefinitionSection(BaseModel):
    vd: str = ""
    sseq: List[List[List[Any]]] = Field(default_factory=list)


class WebsterSynonymParagraph(BaseModel):
    pl: str = ""
    pt: List[List[Any]] = Field(default_factory=list)


class WebsterCrossReferenceTarget(BaseModel):
    cxt: str = ""
    cxn: str = ""


class WebsterCrossReference(BaseModel):
    """A cross-reference group, e.g. label "past tense of" with target "run"."""

    cxl: str = ""
    cxtis: List[WebsterCrossReferenceTarget] = Field(default_factory=list)


class WebsterEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    meta: Dict[str, Any] = Field(default_factory=dict)
    hom: Optional[int] = None
    hwi: WebsterHeadwordInfo = Field(default_factory=WebsterHeadwordInfo)
    fl: str = ""
    definition_sections: List[WebsterDefinitionSection] = Field(default_factory=list, alias="def")
    et: List[List[Any]] = Field(default_factory=list)
    cxs: List[WebsterCrossReference] = Field(default_factory=list)
    syns: List[WebsterSynonymParagraph] = Field(default_factory=list)
    shortdef: List[str] = Field(default_factory=list)

    @property
    def headword(self) -> str:
        return clean_headword(self.hwi.hw)


class WebsterSearchResponse(BaseModel):
    """Spelling suggestions returned when a word has no entry."""

    suggestions: List[str] = Field(default_factory=list)

    def to_search_results(self) -> List[str]:
        return list(self.suggestions)


class WebsterDefinitionResponse(BaseModel):
    entries: List[WebsterEntry] = Field(default_factory=list)


WebsterResponse = Union[WebsterSearchResponse, WebsterDefinitionResponse]


class SenseNumber(BaseModel):
    number: int = 0
    letter: str = ""
    sub: str = ""


def parse_response(payload: Any) -> WebsterResponse:
    """Parse a decoded collegiate response into its tagged shape.

    A first element that is a string means the whole array is suggestions;
    anything else is read as entry objects.

    Raises:
        pydantic.ValidationError: If the payload doesn't fit the chosen shape
    """
    if isinstance(payload, list) and payload and isinstance(payload[0], str):
        return WebsterSearchResponse.model_validate({"suggestions": payload})
    return WebsterDefinitionResponse.model_validate({"entries": payload or []})


def clean_headword(headword: str) -> str:
    return headword.replace(HEADWORD_SYLLABLE_MARK, "")


def parse_sense_number(raw: Optional[str]) -> Optional[SenseNumber]:
    """Parse a sense number such as ``"2 a (1)"``.

    Returns:
        The parsed number, or None if the sense isn't numbered at all
    """
    if raw is None:
        return None

    match = SENSE_NUMBER_PATTERN.match(raw)
    numeral, letter, sub = match.groups()

    return SenseNumber(number=int(numeral) if numeral else 0, letter=letter or "", sub=sub or "")


class WebsterNormalizer:
    """Normalizes collegiate dictionary entries to canonical form."""

    def normalize(self, response: Any, word: str) -> List[DictionaryResult]:
        """Convert a collegiate response to dictionary results.

        Args:
            response: A parsed WebsterResponse, or the decoded JSON array
            word: The word that was looked up

        Returns:
            A single DictionaryResult holding every entry for the main headword

        Raises:
            EmptyResultError: If the response holds suggestions or no entries
        """
        if not isinstance(response, (WebsterSearchResponse, WebsterDefinitionResponse)):
            response = parse_response(response)

        if isinstance(response, WebsterSearchResponse):
            # Suggestions mean there's no entry for the word itself
            logger.debug("Got %d suggestions instead of entries for %r", len(response.suggestions), word)
            raise EmptyResultError(word)

        if not response.entries:
            raise EmptyResultError(word)

        main_word = response.entries[0].headword

        entries = []
        for api_entry in response.entries:
            if not equal_fold_plain(api_entry.headword, main_word):
                logger.debug("Skipping entry for different headword %r", api_entry.headword)
                continue
            entries.append(self._to_entry(api_entry))

        results = [DictionaryResult(language=DEFAULT_LANGUAGE, word=main_word, entries=entries)]
        return validate_and_return_dictionary_results(word, results)

    def _to_entry(self, api_entry: WebsterEntry) -> DictionaryEntry:
        entry = DictionaryEntry(word=api_entry.headword, lexical_category=api_entry.fl)

        for pronunciation in api_entry.hwi.prs:
            spelling = pronunciation.ipa or pronunciation.mw
            if spelling:
                entry.pronunciations.append(spelling)

        for section in api_entry.definition_sections:
            entry.senses.extend(self._to_senses(section))

        if not entry.senses:
            entry.senses = self._cross_reference_senses(api_entry)

        entry.etymologies = self._extract_etymologies(api_entry)
        entry.synonyms = self._extract_synonyms(api_entry)

        return entry

    def _cross_reference_senses(self, api_entry: WebsterEntry) -> List[Sense]:
        """One sense per cross-reference group, for entries that only point elsewhere."""
        senses = []

        for reference in api_entry.cxs:
            targets = [collapse_whitespace(clean_tokens(target.cxt)) for target in reference.cxtis]
            label = collapse_whitespace(reference.cxl)

            text = " ".join(part for part in (label, ", ".join(target for target in targets if target)) if part)
            if text:
                senses.append(Sense(definitions=[text]))

        return senses

    def _to_senses(self, section: WebsterDefinitionSection) -> List[Sense]:
        """Flatten a sense sequence into top-level senses with sub-senses.

        A sense becomes a new top-level sense when it's the first of its
        sequence element, or when its numeral is greater than the previous
        sense's. Everything else nests under the last top-level sense.
        """
        senses: List[Sense] = []

        for element in section.sseq:
            last_number: Optional[SenseNumber] = None

            for api_sense in self._iter_sense_data(element):
                number = parse_sense_number(api_sense.sn)
                sense = self._to_sense(api_sense)

                # The first sense of each element always opens a top-level sense,
                # so a sub-sense never lacks a parent
                if last_number is None or (number is not None and last_number.number < number.number):
                    senses.append(sense)
                else:
                    senses[-1].sub_senses.append(sense)

                last_number = number

        return senses

    def _iter_sense_data(self, element: List[List[Any]]) -> List[WebsterSense]:
        """Unwrap the tagged containers of one sense sequence element."""
        sense_data = []

        for container in element:
            if len(container) < 2:
                continue

            tag, value = container[0], container[1]
            if tag == TAG_SENSE:
                sense_data.append(WebsterSense.model_validate(value))
            elif tag == TAG_BINDING_SUBSTITUTE:
                sense_data.append(WebsterSense.model_validate(value.get(TAG_SENSE, {})))
            elif tag == TAG_PARENTHESIZED_SEQUENCE:
                sense_data.extend(self._iter_sense_data(value))
            else:
                logger.debug("Ignoring sense container %r", tag)

        return sense_data

    def _to_sense(self, api_sense: WebsterSense) -> Sense:
        sense = Sense()
        self._apply_defining_text(sense, api_sense.dt)

        if api_sense.sdsense is not None:
            divided = Sense()
            self._apply_defining_text(divided, api_sense.sdsense.dt)

            text = "; ".join(divided.definitions)
            if api_sense.sdsense.sd:
                text = f"{api_sense.sdsense.sd} {text}".strip()
            if text:
                _continue_definition(sense, text, "; ")

            sense.examples.extend(divided.examples)
            sense.notes.extend(divided.notes)

        return sense

    def _apply_defining_text(self, sense: Sense, items: List[List[Any]]) -> None:
        for item in items:
            if len(item) < 2:
                continue

            tag, value = item[0], item[1]
            if tag == TAG_TEXT:
                self._add_definition_text(sense, value)
            elif tag == TAG_VERBAL_ILLUSTRATIONS:
                sense.examples.extend(self._to_examples(value))
            elif tag == TAG_USAGE_NOTES:
                sense.notes.extend(self._extract_usage_notes(value))
            elif tag == TAG_SUPPLEMENTAL_NOTE:
                sense.notes.extend(self._extract_supplemental_notes(value))

    def _add_definition_text(self, sense: Sense, raw: str) -> None:
        """Add a chunk of defining text to the sense.

        A chunk that opens with the definition marker starts a new
        definition; any other chunk continues the last one. Further markers
        inside a chunk join their fragments with "; ".
        """
        fragments = [collapse_whitespace(clean_tokens(fragment)) for fragment in raw.split(DEFINITION_MARKER)]
        text = "; ".join(fragment for fragment in fragments if fragment)
        if not text:
            return

        if raw.lstrip().startswith(DEFINITION_MARKER) or not sense.definitions:
            sense.definitions.append(text)
        else:
            _continue_definition(sense, text, " ")

    def _to_examples(self, illustrations: List[Dict[str, Any]]) -> List[AttributedText]:
        examples = []

        for illustration in illustrations:
            text = collapse_whitespace(clean_tokens(illustration.get("t", "")))
            if not text:
                continue

            attribution = illustration.get("aq") or {}
            author = collapse_whitespace(clean_tokens(attribution.get("auth", "")))
            source = collapse_whitespace(clean_tokens(attribution.get("source", "")))

            examples.append(
                AttributedText(text=remove_embedded_attribution(text, author, source), author=author, source=source)
            )

        return examples

    def _extract_usage_notes(self, notes: List[List[List[Any]]]) -> List[str]:
        texts = []
        for note in notes:
            for item in note:
                if len(item) >= 2 and item[0] == TAG_TEXT:
                    text = collapse_whitespace(clean_tokens(item[1]))
                    if text:
                        texts.append(text)
        return texts

    def _extract_supplemental_notes(self, note: List[List[Any]]) -> List[str]:
        texts = []
        for item in note:
            if len(item) >= 2 and item[0] == TAG_SUPPLEMENTAL_NOTE_TEXT:
                text = collapse_whitespace(clean_tokens(item[1]))
                if text:
                    texts.append(text)
        return texts

    def _extract_etymologies(self, api_entry: WebsterEntry) -> List[str]:
        etymologies = []
        for item in api_entry.et:
            # Etymologies are tagged pairs too; only text carries the origin
            if len(item) < 2 or item[0] != TAG_TEXT:
                continue

            text = collapse_whitespace(clean_tokens(strip_meta_tokens(item[1])))
            if text:
                etymologies.append(text)
        return etymologies

    def _extract_synonyms(self, api_entry: WebsterEntry) -> List[str]:
        synonyms: List[str] = []
        for paragraph in api_entry.syns:
            for item in paragraph.pt:
                if len(item) < 2 or item[0] != TAG_TEXT:
                    continue

                for synonym in extract_small_caps(item[1]):
                    if synonym not in synonyms:
                        synonyms.append(synonym)
        return synonyms


def remove_embedded_attribution(text: str, author: str, source: str) -> str:
    """Drop an author or source name that's already written into an example.

    The text is split on the first occurrence of the attribution and only
    the residual parts are kept, so the rendered attribution isn't repeated.

    >>> remove_embedded_attribution("a fine day - Dickens", "Dickens", "")
    'a fine day'
    """
    for attribution in (author, source):
        if not attribution or attribution not in text:
            continue

        parts = [part.strip(ATTRIBUTION_RESIDUE_CHARS) for part in text.split(attribution, 1)]
        text = " ".join(part for part in parts if part)

    return text


def _continue_definition(sense: Sense, text: str, separator: str) -> None:
    if sense.definitions:
        sense.definitions[-1] = f"{sense.definitions[-1]}{separator}{text}"
    else:
        sense.definitions.append(text)
