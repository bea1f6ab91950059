"""
Plain-text rendering of dictionary results for the terminal.

The layout is a depth-first walk over results, entries and senses, one
indentation step per level:

    <blank>
      test  /test/
    <blank>
    <blank>
        (noun)
    <blank>
        1. a procedure
           "run a test"

followed by an optional source footer.
"""

from __future__ import annotations

import io
from typing import List, Optional, Sequence

from define.core.lexical import DictionaryEntry, DictionaryResult, Sense
from define.rendering.writer import DEFAULT_INDENT_SIZE, IndentedWriter

ETYMOLOGY_HEADER = "Origin"
SYNONYMS_HEADER = "Synonyms"
ANTONYMS_HEADER = "Antonyms"

THESAURUS_SEPARATOR = " ; "
CONTINUED_DEFINITION_PREFIX = " - "
SOURCE_NAME_TEMPLATE = 'Results provided by: "{name}"'
MAX_SEPARATOR_WIDTH = 60


def result_header(result: DictionaryResult) -> str:
    """The headline of a result: its word plus the first entry's pronunciations."""
    if not result.entries:
        return result.word

    first_entry = result.entries[0]
    return _headword_line(first_entry.word or result.word, first_entry)


def entry_header(result_heading: str, last_entry_header: str, last_word: str, entry: DictionaryEntry) -> str:
    """Compute the header for an entry, or "" when none should be printed.

    An entry gets a header when it has its own pronunciations or a different
    word than the entry before it, unless the header would just repeat the
    result header or the previous entry header.
    """
    if entry.pronunciations:
        header = _headword_line(entry.word, entry)
    elif entry.word != last_word:
        header = entry.word
    else:
        header = ""

    if header in (result_heading, last_entry_header):
        return ""
    return header


def _headword_line(word: str, entry: DictionaryEntry) -> str:
    if not entry.pronunciations:
        return word
    return f"{word}  {entry.pronunciation_text}"


class ResultPrinter:
    """Prints dictionary results, search results and source names."""

    def __init__(self, writer: IndentedWriter) -> None:
        self.writer = writer

    def print_dictionary_results(self, results: Sequence[DictionaryResult]) -> None:
        last_word = ""

        with self.writer.indented() as writer:
            for result in results:
                header = result_header(result)
                writer.write_padded_line(header)

                last_entry_header = ""
                for entry in result.entries:
                    current_header = entry_header(header, last_entry_header, last_word, entry)
                    if current_header:
                        writer.write_new_line(2)
                        writer.write_line(current_header)
                        last_entry_header = current_header

                    with writer.indented() as entry_writer:
                        self._print_entry(entry_writer, entry)

                    last_word = entry.word

                writer.write_new_line()

    def print_search_results(self, results: Sequence[str]) -> None:
        with self.writer.indented() as writer:
            for index, result in enumerate(results, start=1):
                writer.write_line(f"{index}. {result}")

    def print_source_name(self, name: str) -> None:
        text = SOURCE_NAME_TEMPLATE.format(name=name)

        with self.writer.indented() as writer:
            writer.write_new_line()
            writer.write_line("-" * min(MAX_SEPARATOR_WIDTH, len(text)))
            writer.write_line(text)
            writer.write_new_line()

    def _print_entry(self, writer: IndentedWriter, entry: DictionaryEntry) -> None:
        if entry.lexical_category:
            writer.write_padded_line(f"({entry.lexical_category})")

        for index, sense in enumerate(entry.senses, start=1):
            self._print_sense(writer, index, sense)

        self._print_etymologies(writer, entry.etymologies)
        self._print_thesaurus_values(writer, entry.synonyms, entry.antonyms)

    def _print_sense(self, writer: IndentedWriter, index: int, sense: Sense) -> None:
        prefix = f"{index}. "
        for position, definition in enumerate(sense.definitions):
            if position > 0:
                prefix = CONTINUED_DEFINITION_PREFIX
            writer.write_line(prefix + definition)

        # Examples and notes line up under the last definition's text
        with writer.indented(len(prefix)) as detail_writer:
            for example in sense.examples:
                detail_writer.write_line(str(example))
            for note in sense.notes:
                detail_writer.write_line(f"[{note}]")

        with writer.indented() as sub_writer:
            for sub_sense in sense.sub_senses:
                for definition in sub_sense.definitions:
                    sub_writer.write_line(CONTINUED_DEFINITION_PREFIX + definition)

                # Sub-senses only ever show their first example
                if sub_sense.examples:
                    with sub_writer.indented(len(CONTINUED_DEFINITION_PREFIX)) as detail_writer:
                        detail_writer.write_line(str(sub_sense.examples[0]))

    def _print_etymologies(self, writer: IndentedWriter, etymologies: List[str]) -> None:
        if not etymologies:
            return

        writer.write_padded_line(ETYMOLOGY_HEADER)
        for etymology in etymologies:
            writer.write_line(etymology)
        writer.write_new_line()

    def _print_thesaurus_values(self, writer: IndentedWriter, synonyms: List[str], antonyms: List[str]) -> None:
        for header, values in ((SYNONYMS_HEADER, synonyms), (ANTONYMS_HEADER, antonyms)):
            if not values:
                continue

            writer.write_padded_line(header)
            writer.write_line(THESAURUS_SEPARATOR.join(values))
            writer.write_new_line()


def render(
    results: Sequence[DictionaryResult],
    source_name: Optional[str] = None,
    indent_size: int = DEFAULT_INDENT_SIZE,
) -> str:
    """Render results (and optionally a source footer) to a string.

    Args:
        results: Results to render, in display order
        source_name: Display name of the source, for the footer
        indent_size: Spaces per indentation step

    Returns:
        The rendered text
    """
    buffer = io.StringIO()
    printer = ResultPrinter(IndentedWriter(buffer, indent_size))

    printer.print_dictionary_results(results)
    if source_name:
        printer.print_source_name(source_name)

    return buffer.getvalue()
