"""Tests for the HTTP dictionary sources, using a mocked session."""

from unittest.mock import Mock

import pytest
import requests

from define.config import Configuration
from define.core.errors import AuthenticationError, EmptyResultError, InvalidResponseError, RequiredConfigError
from define.sources import free_dictionary, glosbe, oxford, webster
from define.sources.base import (
    JSON_MIME_TYPE,
    USER_AGENT,
    Source,
    create_session,
    truncate_search_results,
    validate_http_response,
)
from define.sources.free_dictionary import FreeDictionarySource
from define.sources.glosbe import GlosbeSource
from define.sources.oxford import OxfordSource
from define.sources.webster import WebsterSource


def make_response(payload=None, status_code=200, content_type=JSON_MIME_TYPE):
    """Build a fake requests.Response."""
    response = Mock(spec=requests.Response)
    response.status_code = status_code
    response.headers = {"Content-Type": content_type}
    response.url = "https://example.com"
    response.json.return_value = payload
    return response


def make_session(*responses):
    """Build a fake session answering GETs with the given responses in order."""
    session = Mock(spec=requests.Session)
    session.headers = {}
    session.get.side_effect = list(responses)
    return session


FREE_DICTIONARY_PAYLOAD = [
    {"word": "test", "meanings": [{"partOfSpeech": "noun", "definitions": [{"definition": "A trial."}]}]}
]

OXFORD_PAYLOAD = {
    "results": [
        {
            "word": "test",
            "language": "en-us",
            "lexicalEntries": [
                {
                    "lexicalCategory": {"text": "Noun"},
                    "text": "test",
                    "entries": [{"senses": [{"definitions": ["a procedure"]}]}],
                }
            ],
        }
    ]
}


class TestHttpHelpers:
    """Test session setup and response checks."""

    def test_session_headers(self):
        """Sessions send JSON accept and user agent headers."""
        session = create_session()
        assert session.headers["Accept"] == JSON_MIME_TYPE
        assert session.headers["User-Agent"] == USER_AGENT

    def test_valid_response(self):
        """A 200 JSON response passes."""
        validate_http_response(make_response(content_type="application/json; charset=utf-8"), [JSON_MIME_TYPE])

    def test_missing_response(self):
        """A missing response is invalid."""
        with pytest.raises(InvalidResponseError):
            validate_http_response(None)

    def test_bad_status(self):
        """Unexpected statuses are invalid, unless explicitly accepted."""
        with pytest.raises(InvalidResponseError) as exc_info:
            validate_http_response(make_response(status_code=500))
        assert exc_info.value.status_code == 500

        validate_http_response(make_response(status_code=304), valid_status_codes=[304])

    def test_bad_content_type(self):
        """Content types not in the accepted list are invalid."""
        with pytest.raises(InvalidResponseError):
            validate_http_response(make_response(content_type="text/html"), [JSON_MIME_TYPE])

    @pytest.mark.parametrize("limit,expected", [(0, 3), (1, 3), (2, 2), (5, 3)])
    def test_truncate_search_results(self, limit, expected):
        """Limits of 0 or 1 don't truncate."""
        assert len(truncate_search_results(["a", "b", "c"], limit)) == expected

    def test_searchable(self):
        """Only sources overriding search are searchable."""
        assert not FreeDictionarySource(session=make_session()).searchable
        assert WebsterSource("key", session=make_session()).searchable
        assert not Source(session=make_session()).searchable


class TestFreeDictionarySource:
    """Test Free Dictionary lookups."""

    def test_define(self):
        """A successful lookup is normalized."""
        session = make_session(make_response(FREE_DICTIONARY_PAYLOAD))
        results = FreeDictionarySource(session=session).define("test")

        assert results[0].entries[0].senses[0].definitions == ["A trial."]
        url = session.get.call_args[0][0]
        assert url == free_dictionary.ENTRIES_URL + "test"

    def test_word_is_escaped(self):
        """Words are path-escaped in the URL."""
        session = make_session(make_response(FREE_DICTIONARY_PAYLOAD))
        FreeDictionarySource(session=session).define("a/b c")
        assert session.get.call_args[0][0].endswith("a%2Fb%20c")

    def test_not_found(self):
        """A 404 is an empty result."""
        session = make_session(make_response({"title": "No Definitions Found"}, status_code=404))
        with pytest.raises(EmptyResultError):
            FreeDictionarySource(session=session).define("zzz")

    def test_forbidden(self):
        """A 403 is an authentication error."""
        session = make_session(make_response(status_code=403))
        with pytest.raises(AuthenticationError):
            FreeDictionarySource(session=session).define("test")

    def test_search_unsupported(self):
        """The Free Dictionary can't search."""
        with pytest.raises(NotImplementedError):
            FreeDictionarySource(session=make_session()).search("test")


class TestWebsterSource:
    """Test Merriam-Webster lookups and suggestions."""

    def test_key_sent(self):
        """The API key is sent as a query parameter."""
        payload = [{"hwi": {"hw": "test"}, "fl": "noun"}]
        session = make_session(make_response(payload))
        WebsterSource("secret", session=session).define("test")

        assert session.get.call_args[1]["params"] == {"key": "secret"}

    def test_search_returns_suggestions(self):
        """Suggestions are returned, limited."""
        session = make_session(make_response(["tset", "tests", "taste"]))
        assert WebsterSource("key", session=session).search("tst", limit=2) == ["tset", "tests"]

    def test_search_for_known_word(self):
        """Searching a known word has nothing to suggest."""
        session = make_session(make_response([{"hwi": {"hw": "test"}}]))
        with pytest.raises(EmptyResultError):
            WebsterSource("key", session=session).search("test")

    def test_empty_body(self):
        """An empty array is an empty result."""
        session = make_session(make_response([]))
        with pytest.raises(EmptyResultError):
            WebsterSource("key", session=session).define("zzz")

    def test_provide_requires_key(self):
        """The source can't be provided without an app key."""
        with pytest.raises(RequiredConfigError) as exc_info:
            webster.provide(Configuration())
        assert exc_info.value.key == "AppKey"


class TestOxfordSource:
    """Test Oxford lookups and the inflection fallback."""

    def test_credentials_in_headers(self):
        """App ID and key are sent as session headers."""
        session = make_session()
        OxfordSource("id", "key", session=session)
        assert session.headers == {"app_id": "id", "app_key": "key"}

    def test_define(self):
        """A direct hit is normalized without searching."""
        session = make_session(make_response(OXFORD_PAYLOAD))
        results = OxfordSource("id", "key", session=session).define("test")

        assert results[0].entries[0].senses[0].definitions == ["a procedure"]
        assert session.get.call_count == 1

    def test_inflection_fallback(self):
        """A miss is redefined through the first inflection."""
        search = {"results": [{"label": "test", "matchType": "inflection"}]}
        session = make_session(
            make_response(status_code=404),
            make_response(search),
            make_response(OXFORD_PAYLOAD),
        )
        results = OxfordSource("id", "key", session=session).define("tests")

        assert results[0].word == "test"
        urls = [call[0][0] for call in session.get.call_args_list]
        assert urls == [oxford.ENTRIES_URL + "tests", oxford.SEARCH_URL, oxford.ENTRIES_URL + "test"]

    def test_fallback_is_single_hop(self):
        """A miss on the inflection too is an empty result for the original word."""
        search = {"results": [{"label": "test", "matchType": "inflection"}]}
        session = make_session(make_response(status_code=404), make_response(search), make_response({"results": []}))

        with pytest.raises(EmptyResultError) as exc_info:
            OxfordSource("id", "key", session=session).define("tests")
        assert exc_info.value.word == "tests"
        assert session.get.call_count == 3

    def test_no_inflection(self):
        """Without an inflection the original miss stands."""
        search = {"results": [{"label": "testing", "matchType": "fuzzy"}]}
        session = make_session(make_response(status_code=404), make_response(search))

        with pytest.raises(EmptyResultError):
            OxfordSource("id", "key", session=session).define("tests")

    def test_search(self):
        """Search sends the query and limit."""
        search = {"results": [{"label": "test"}, {"label": "tests"}]}
        session = make_session(make_response(search))

        assert OxfordSource("id", "key", session=session).search("test", limit=5) == ["test", "tests"]
        assert session.get.call_args[1]["params"] == {"q": "test", "limit": "5"}

    @pytest.mark.parametrize(
        "oxford_config,missing",
        [({}, "AppID"), ({"AppID": "id"}, "AppKey")],
    )
    def test_provide_requires_credentials(self, oxford_config, missing):
        """Both the app ID and key are required."""
        config = Configuration.model_validate({"OxfordDictionary": oxford_config})
        with pytest.raises(RequiredConfigError) as exc_info:
            oxford.provide(config)
        assert exc_info.value.key == missing


class TestGlosbeSource:
    """Test Glosbe lookups."""

    def test_define(self):
        """The phrase is sent with English as both languages."""
        payload = {"result": "ok", "phrase": "test", "dest": "en", "tuc": [{"meanings": [{"text": "a trial"}]}]}
        session = make_session(make_response(payload))
        results = GlosbeSource(session=session).define("test")

        assert results[0].entries[0].senses[0].definitions == ["a trial"]
        assert session.get.call_args[1]["params"] == {**glosbe.TRANSLATE_PARAMS, "phrase": "test"}
