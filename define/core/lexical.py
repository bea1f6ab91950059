"""
Core lexical data models for the normalization layer.

This module defines the canonical internal representation of a dictionary
lookup, providing a source-agnostic model that all normalizers produce and
all rendering consumes.
"""

from __future__ import annotations

from typing import List, Sequence

from pydantic import BaseModel, Field

PRONUNCIATION_WRAPPER = "/"


def format_pronunciation(value: str) -> str:
    """Format a single phonetic spelling, e.g. ``/test/``.

    The value is always wrapped, so an empty spelling formats as ``//``.
    """
    return f"{PRONUNCIATION_WRAPPER}{value}{PRONUNCIATION_WRAPPER}"


def format_pronunciations(values: Sequence[str]) -> str:
    """Format a list of phonetic spellings for display.

    The first spelling stands alone and any alternates follow it in
    parentheses, each wrapped individually.

    Args:
        values: Phonetic spellings, without enclosing slashes

    Returns:
        ``""`` for no spellings, ``/a/`` for one, ``/a/ (/b/ /c/)`` for more
    """
    if not values:
        return ""

    first = format_pronunciation(values[0])
    if len(values) == 1:
        return first

    alternates = " ".join(format_pronunciation(value) for value in values[1:])
    return f"{first} ({alternates})"


class AttributedText(BaseModel):
    """An example or quotation with optional sourcing.

    Example:
        AttributedText(text="to be, or not to be", author="Shakespeare", source="Hamlet")
        renders as: "to be, or not to be" - Shakespeare (Hamlet)
    """

    text: str = ""
    author: str = ""
    source: str = ""

    def __str__(self) -> str:
        formatted = f'"{self.text}"'
        if self.author:
            formatted += f" - {self.author}"
        if self.source:
            formatted += f" ({self.source})"
        return formatted


class Sense(BaseModel):
    """One meaning of an entry, with at most one level of sub-senses."""

    definitions: List[str] = Field(default_factory=list, description="One or more definition strings")
    examples: List[AttributedText] = Field(default_factory=list)
    notes: List[str] = Field(default_factory=list, description="Free-text usage notes")

    synonyms: List[str] = Field(default_factory=list)
    antonyms: List[str] = Field(default_factory=list)

    sub_senses: List[Sense] = Field(default_factory=list)

    @property
    def has_thesaurus_values(self) -> bool:
        return bool(self.synonyms or self.antonyms)


class DictionaryEntry(BaseModel):
    """One lexical entry for a word (one part of speech or homograph).

    An entry may carry no senses when a source only provides etymology or
    thesaurus data for it.
    """

    word: str = ""
    lexical_category: str = Field("", description="Part of speech, e.g. 'noun'")

    pronunciations: List[str] = Field(
        default_factory=list, description="Phonetic spellings without enclosing slashes"
    )
    senses: List[Sense] = Field(default_factory=list)
    etymologies: List[str] = Field(default_factory=list, description="Origins of the word")

    synonyms: List[str] = Field(default_factory=list, description="Words with similar meaning")
    antonyms: List[str] = Field(default_factory=list, description="Words with the opposite meaning")

    @property
    def pronunciation_text(self) -> str:
        """Display form of this entry's pronunciations."""
        return format_pronunciations(self.pronunciations)

    @property
    def has_thesaurus_values(self) -> bool:
        return bool(self.synonyms or self.antonyms)


class DictionaryResult(BaseModel):
    """One language-specific result set for a lookup.

    Entries keep the order the source returned them in, which is also the
    order they are displayed in.
    """

    language: str = ""
    word: str = Field("", description="Headword actually returned by the source")
    entries: List[DictionaryEntry] = Field(default_factory=list)


Sense.model_rebuild()
