"""
Common transport for dictionary sources.

Sources fetch JSON over HTTP with a shared requests.Session setup (pooled
connections, retries on transient server errors, fixed timeout), check the
response, and hand the decoded body to their normalizer.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from define import __version__
from define.config import Configuration
from define.core.errors import AuthenticationError, EmptyResultError, InvalidResponseError
from define.core.lexical import DictionaryResult

logger = logging.getLogger(__name__)

JSON_MIME_TYPE = "application/json"

ACCEPTABLE_STATUS_CODES = (200,)

DEFAULT_TIMEOUT = 10
DEFAULT_MAX_RETRIES = 2

USER_AGENT = f"define/{__version__} python-requests/{requests.__version__}"


def create_session(max_retries: int = DEFAULT_MAX_RETRIES) -> requests.Session:
    """Create an HTTP session for talking to a dictionary API."""
    session = requests.Session()
    session.headers.update({"Accept": JSON_MIME_TYPE, "User-Agent": USER_AGENT})

    retry_strategy = Retry(
        total=max_retries,
        backoff_factor=0.5,
        status_forcelist=[429, 500, 502, 503, 504],
        allowed_methods=["HEAD", "GET", "OPTIONS"],
        # Hand back the last response so its status is reported like any other
        raise_on_status=False,
    )
    adapter = HTTPAdapter(max_retries=retry_strategy)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    return session


def validate_http_response(
    response: Optional[requests.Response],
    valid_content_types: Sequence[str] = (),
    valid_status_codes: Sequence[int] = (),
) -> None:
    """Check a response's status code and content type.

    Args:
        response: The response to check
        valid_content_types: Accepted MIME types, matched case-insensitively
            as substrings of the Content-Type header; empty accepts any
        valid_status_codes: Status codes accepted besides 200

    Raises:
        InvalidResponseError: If the response is missing or unacceptable
    """
    if response is None:
        raise InvalidResponseError()

    if response.status_code not in (*ACCEPTABLE_STATUS_CODES, *valid_status_codes):
        logger.debug("Unexpected status %s from %s", response.status_code, response.url)
        raise InvalidResponseError(response)

    if valid_content_types:
        content_type = response.headers.get("Content-Type", "").lower()
        if not any(valid_type.lower() in content_type for valid_type in valid_content_types):
            logger.debug("Unexpected content type %r from %s", content_type, response.url)
            raise InvalidResponseError(response)


class Source:
    """A dictionary that words can be looked up in.

    Subclasses set ``name`` and implement ``define``. Sources that can also
    suggest words implement ``search``.
    """

    name: str = ""

    def __init__(self, session: Optional[requests.Session] = None, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.session = session or create_session()
        self.timeout = timeout

    def define(self, word: str) -> List[DictionaryResult]:
        raise NotImplementedError

    def search(self, word: str, limit: int = 0) -> List[str]:
        raise NotImplementedError(f"{self.name} doesn't support searching")

    @property
    def searchable(self) -> bool:
        return type(self).search is not Source.search

    def _get(
        self, url: str, params: Optional[Dict[str, Any]] = None, headers: Optional[Dict[str, str]] = None
    ) -> requests.Response:
        logger.debug("GET %s", url)
        response = self.session.get(url, params=params, headers=headers, timeout=self.timeout)
        logger.debug("%s responded with %s", url, response.status_code)
        return response


def truncate_search_results(results: List[str], limit: int) -> List[str]:
    """Apply a search limit; a limit of 0 or 1 means no limit."""
    if 1 < limit < len(results):
        return results[:limit]
    return results


def check_lookup_response(
    word: str,
    response: requests.Response,
    valid_content_types: Sequence[str] = (JSON_MIME_TYPE,),
) -> None:
    """Map a lookup response's status to the error taxonomy.

    Raises:
        EmptyResultError: On 404 Not Found
        AuthenticationError: On 403 Forbidden
        InvalidResponseError: On any other unacceptable status or content type
    """
    if response.status_code == 404:
        raise EmptyResultError(word)
    if response.status_code == 403:
        raise AuthenticationError()

    validate_http_response(response, valid_content_types)


class SourceProvider:
    """Builds a source from the application configuration.

    Args:
        name: Display name of the source
        json_key: Key identifying the source in configuration
        factory: Callable building the source; raises RequiredConfigError
            when configuration it needs is missing
    """

    def __init__(self, name: str, json_key: str, factory: Callable[[Configuration], Source]) -> None:
        self.name = name
        self.json_key = json_key
        self.factory = factory

    def provide(self, config: Configuration) -> Source:
        return self.factory(config)

    def __repr__(self) -> str:
        return f"SourceProvider({self.json_key!r})"
