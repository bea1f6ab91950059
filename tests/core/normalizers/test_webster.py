"""Tests for the Merriam-Webster collegiate normalizer."""

import pytest
from pydantic import ValidationError

from define.core.errors import EmptyResultError
from define.core.normalizers.webster import (
    SenseNumber,
    WebsterDefinitionResponse,
    WebsterNormalizer,
    WebsterSearchResponse,
    clean_headword,
    parse_response,
    parse_sense_number,
    remove_embedded_attribution,
)


@pytest.fixture
def normalizer():
    """Create a normalizer instance for testing."""
    return WebsterNormalizer()


@pytest.fixture
def test_entries():
    """A trimmed collegiate response for "test", with a homograph and a related word."""
    return [
        {
            "meta": {"id": "test:1", "stems": ["test", "tests"]},
            "hom": 1,
            "hwi": {"hw": "test", "prs": [{"mw": "ˈtest", "sound": {"audio": "test0001"}}]},
            "fl": "noun",
            "def": [
                {
                    "sseq": [
                        [
                            ["sense", {"sn": "1 a", "dt": [["text", "{bc}a means of testing "]]}],
                            [
                                "sense",
                                {
                                    "sn": "b",
                                    "dt": [
                                        ["text", "{bc}something for measuring skill"],
                                        ["vis", [{"t": "a {wi}test{/wi} of strength"}]],
                                    ],
                                },
                            ],
                        ],
                        [
                            [
                                "sense",
                                {
                                    "sn": "2",
                                    "dt": [["text", "{bc}a critical examination {bc}{sx|trial||}"]],
                                    "sdsense": {"sd": "also", "dt": [["text", "{bc}a result of such examination"]]},
                                },
                            ]
                        ],
                    ]
                }
            ],
            "et": [["text", "Middle English, from Latin {it}testum{/it} {ma}{mat|test|}{/ma}"]],
            "syns": [{"pl": "test", "pt": [["text", "{sc}trial{/sc}, {sc}proof{/sc} mean a check"]]}],
            "shortdef": ["a means of testing"],
        },
        {
            "meta": {"id": "test:2"},
            "hom": 2,
            "hwi": {"hw": "test"},
            "fl": "verb",
            "def": [{"sseq": [[["sense", {"sn": "1", "dt": [["text", "{bc}to put to test"]]}]]]}],
        },
        {"meta": {"id": "testy"}, "hwi": {"hw": "tes*ty"}, "fl": "adjective"},
    ]


def _entry_with_dt(dt, sn="1"):
    return [{"hwi": {"hw": "test"}, "fl": "noun", "def": [{"sseq": [[["sense", {"sn": sn, "dt": dt}]]]}]}]


class TestParsing:
    """Test response shape detection and small parsers."""

    def test_strings_are_suggestions(self):
        """An array of strings parses as search suggestions."""
        response = parse_response(["tset", "tests"])
        assert isinstance(response, WebsterSearchResponse)
        assert response.to_search_results() == ["tset", "tests"]

    def test_objects_are_entries(self, test_entries):
        """An array of objects parses as entries."""
        response = parse_response(test_entries)
        assert isinstance(response, WebsterDefinitionResponse)
        assert len(response.entries) == 3
        assert response.entries[2].headword == "testy"

    def test_malformed_payload_raises(self):
        """Payloads that fit neither shape fail validation."""
        with pytest.raises(ValidationError):
            parse_response([{"hwi": "not an object"}])

    @pytest.mark.parametrize(
        "headword,expected",
        [("", ""), ("tree", "tree"), ("re*fuse", "refuse"), ("vo*lu*mi*nous", "voluminous")],
    )
    def test_clean_headword(self, headword, expected):
        """Syllable marks are removed from headwords."""
        assert clean_headword(headword) == expected

    def test_parse_sense_number(self):
        """Sense numbers split into numeral, letter and sub-number."""
        assert parse_sense_number(None) is None
        assert parse_sense_number("2 a (1)") == SenseNumber(number=2, letter="a", sub="(1)")
        assert parse_sense_number("b") == SenseNumber(number=0, letter="b", sub="")
        assert parse_sense_number("(3)") == SenseNumber(number=0, letter="", sub="(3)")


class TestNormalize:
    """Test conversion of entries to dictionary results."""

    def test_keeps_main_headword_entries(self, normalizer, test_entries):
        """Entries for other headwords are dropped."""
        results = normalizer.normalize(test_entries, "test")

        assert len(results) == 1
        assert results[0].word == "test"
        assert results[0].language == "en"
        assert [entry.lexical_category for entry in results[0].entries] == ["noun", "verb"]

    def test_entry_fields(self, normalizer, test_entries):
        """Pronunciation, etymology and synonyms are extracted and cleaned."""
        entry = normalizer.normalize(test_entries, "test")[0].entries[0]

        assert entry.word == "test"
        assert entry.pronunciations == ["ˈtest"]
        assert entry.etymologies == ["Middle English, from Latin testum"]
        assert entry.synonyms == ["trial", "proof"]

    def test_sense_nesting(self, normalizer, test_entries):
        """Lettered senses nest under the preceding numbered sense."""
        senses = normalizer.normalize(test_entries, "test")[0].entries[0].senses

        assert len(senses) == 2
        assert senses[0].definitions == ["a means of testing"]
        assert len(senses[0].sub_senses) == 1
        assert senses[0].sub_senses[0].definitions == ["something for measuring skill"]
        assert senses[0].sub_senses[0].examples[0].text == "a test of strength"

    def test_divided_sense_continues_definition(self, normalizer, test_entries):
        """Inline markers and divided senses extend the same definition."""
        sense = normalizer.normalize(test_entries, "test")[0].entries[0].senses[1]
        assert sense.definitions == ["a critical examination; trial; also a result of such examination"]

    def test_parenthesized_sequence_flattened(self, normalizer):
        """Binding substitutes and parenthesized senses become sub-senses."""
        payload = [
            {
                "hwi": {"hw": "test"},
                "def": [
                    {
                        "sseq": [
                            [
                                ["sense", {"sn": "1", "dt": [["text", "{bc}one"]]}],
                                [
                                    "pseq",
                                    [
                                        ["bs", {"sense": {"sn": "b", "dt": [["text", "{bc}binding"]]}}],
                                        ["sense", {"sn": "(1)", "dt": [["text", "{bc}first"]]}],
                                    ],
                                ],
                                ["sense", {"sn": "2", "dt": [["text", "{bc}two"]]}],
                            ]
                        ]
                    }
                ],
            }
        ]
        senses = normalizer.normalize(payload, "test")[0].entries[0].senses

        assert [sense.definitions for sense in senses] == [["one"], ["two"]]
        assert [sub.definitions for sub in senses[0].sub_senses] == [["binding"], ["first"]]

    def test_ipa_preferred(self, normalizer):
        """IPA spellings win over Merriam-Webster respellings."""
        payload = [{"hwi": {"hw": "test", "prs": [{"mw": "ˈtest", "ipa": "tɛst"}, {"mw": "ˈtes"}]}}]
        entry = normalizer.normalize(payload, "test")[0].entries[0]
        assert entry.pronunciations == ["tɛst", "ˈtes"]

    def test_cross_reference_entry(self, normalizer):
        """Entries without definitions get one sense per cross-reference group."""
        payload = [
            {
                "hwi": {"hw": "ran"},
                "fl": "verb",
                "cxs": [
                    {"cxl": "past tense of", "cxtis": [{"cxt": "run"}]},
                    {"cxl": "variant of", "cxtis": [{"cxt": "{it}rin{/it}"}, {"cxt": "rann"}]},
                ],
            }
        ]
        senses = normalizer.normalize(payload, "ran")[0].entries[0].senses

        assert [sense.definitions for sense in senses] == [["past tense of run"], ["variant of rin, rann"]]

    def test_cross_references_ignored_with_definitions(self, normalizer, test_entries):
        """Entries with their own senses don't gain cross-reference senses."""
        test_entries[0]["cxs"] = [{"cxl": "compare", "cxtis": [{"cxt": "trial"}]}]
        senses = normalizer.normalize(test_entries, "test")[0].entries[0].senses

        assert all("compare" not in sense.definitions[0] for sense in senses)

    def test_suggestions_are_empty_result(self, normalizer):
        """Suggestions instead of entries mean the word wasn't found."""
        with pytest.raises(EmptyResultError) as exc_info:
            normalizer.normalize(["tset", "tests"], "tst")
        assert exc_info.value.word == "tst"

    def test_empty_payload(self, normalizer):
        """An empty array is an empty result."""
        with pytest.raises(EmptyResultError):
            normalizer.normalize([], "test")

    def test_accepts_parsed_response(self, normalizer, test_entries):
        """Already-parsed responses are normalized directly."""
        results = normalizer.normalize(parse_response(test_entries), "test")
        assert len(results[0].entries) == 2


class TestDefiningText:
    """Test assembly of definitions, examples and notes."""

    def test_marker_inside_chunk_joins_with_semicolon(self, normalizer):
        """A second marker in one chunk continues the definition."""
        payload = _entry_with_dt([["text", "{bc}a thing {bc}related thing"]])
        sense = normalizer.normalize(payload, "test")[0].entries[0].senses[0]
        assert sense.definitions == ["a thing; related thing"]

    def test_chunk_without_marker_continues(self, normalizer):
        """A chunk without a marker continues the last definition with a space."""
        payload = _entry_with_dt([["text", "{bc}a thing "], ["vis", [{"t": "one"}]], ["text", "or other"]])
        sense = normalizer.normalize(payload, "test")[0].entries[0].senses[0]
        assert sense.definitions == ["a thing or other"]

    def test_new_marker_chunk_starts_definition(self, normalizer):
        """A chunk opening with a marker starts a new definition."""
        payload = _entry_with_dt([["text", "{bc}first"], ["text", "{bc}second"]])
        sense = normalizer.normalize(payload, "test")[0].entries[0].senses[0]
        assert sense.definitions == ["first", "second"]

    def test_attribution_not_repeated(self, normalizer):
        """An author already written into the example is removed from its text."""
        payload = _entry_with_dt(
            [
                ["text", "{bc}a trial"],
                ["vis", [{"t": "a true test of character — Jane Austen", "aq": {"auth": "Jane Austen"}}]],
            ]
        )
        example = normalizer.normalize(payload, "test")[0].entries[0].senses[0].examples[0]

        assert example.text == "a true test of character"
        assert str(example) == '"a true test of character" - Jane Austen'

    def test_attribution_source_kept(self, normalizer):
        """Authors and sources not in the text are kept as attribution."""
        payload = _entry_with_dt(
            [["text", "{bc}a trial"], ["vis", [{"t": "put it to the test", "aq": {"auth": "A. Writer", "source": "The Times"}}]]]
        )
        example = normalizer.normalize(payload, "test")[0].entries[0].senses[0].examples[0]
        assert str(example) == '"put it to the test" - A. Writer (The Times)'

    def test_notes(self, normalizer):
        """Usage and supplemental notes become notes."""
        payload = _entry_with_dt(
            [
                ["text", "{bc}a trial"],
                ["uns", [[["text", "often used with {it}for{/it}"]]]],
                ["snote", [["t", "{it}Test{/it} is also slang"], ["vis", [{"t": "ignored"}]]]],
            ]
        )
        sense = normalizer.normalize(payload, "test")[0].entries[0].senses[0]
        assert sense.notes == ["often used with for", "Test is also slang"]

    def test_remove_embedded_attribution(self):
        """Residual text around the attribution is kept and trimmed."""
        assert remove_embedded_attribution("a fine day - Dickens", "Dickens", "") == "a fine day"
        assert remove_embedded_attribution("as Dickens put it, a fine day", "Dickens", "") == "as put it, a fine day"
        assert remove_embedded_attribution("no attribution", "", "") == "no attribution"
