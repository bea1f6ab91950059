"""
Dictionary sources.

Each source fetches a word over HTTP and normalizes the response into
DictionaryResult instances.
"""

from define.sources.base import Source, SourceProvider, validate_http_response
from define.sources.registry import PROVIDERS, get_provider, provide_preferred, provider_names

__all__ = [
    "Source",
    "SourceProvider",
    "validate_http_response",
    "PROVIDERS",
    "get_provider",
    "provider_names",
    "provide_preferred",
]
