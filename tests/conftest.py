"""Shared fixtures for lookup results."""

import pytest

from define.core.lexical import AttributedText, DictionaryEntry, DictionaryResult, Sense


@pytest.fixture
def test_result():
    """A single result for "test" with one noun sense and an example."""
    return DictionaryResult(
        language="en",
        word="test",
        entries=[
            DictionaryEntry(
                word="test",
                lexical_category="noun",
                pronunciations=["test"],
                senses=[Sense(definitions=["a procedure"], examples=[AttributedText(text="run a test")])],
            )
        ],
    )


@pytest.fixture
def result_for():
    """Wrap entries in a result for "test"."""

    def _result_for(*entries):
        return DictionaryResult(word="test", entries=list(entries))

    return _result_for
