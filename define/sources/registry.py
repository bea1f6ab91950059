"""
Registry of the available dictionary sources.

Providers are listed in fallback order: when the preferred source can't be
provided, the first one that can is used instead.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from define.config import Configuration
from define.core.errors import ConfigurationError, RequiredConfigError
from define.sources import free_dictionary, glosbe, oxford, webster
from define.sources.base import Source, SourceProvider

logger = logging.getLogger(__name__)

PROVIDERS: List[SourceProvider] = [
    free_dictionary.PROVIDER,
    webster.PROVIDER,
    oxford.PROVIDER,
    glosbe.PROVIDER,
]


def get_provider(json_key: str) -> Optional[SourceProvider]:
    for provider in PROVIDERS:
        if provider.json_key == json_key:
            return provider
    return None


def provider_names() -> List[str]:
    return [provider.name for provider in PROVIDERS]


def provide_preferred(preferred_key: str, config: Configuration) -> Source:
    """Provide the preferred source, falling back to any other available one.

    Args:
        preferred_key: JSON key of the preferred provider, e.g. "OxfordDictionary"
        config: Merged application configuration

    Returns:
        The first source that could be provided

    Raises:
        ConfigurationError: If no source can be provided at all
    """
    preferred = get_provider(preferred_key)
    if preferred is None and preferred_key:
        logger.warning("Unknown preferred source %r", preferred_key)

    candidates = [preferred] if preferred else []
    candidates.extend(provider for provider in PROVIDERS if provider is not preferred)

    for provider in candidates:
        try:
            return provider.provide(config)
        except RequiredConfigError as exc:
            logger.debug("Source %r unavailable: %s", provider.name, exc)

    raise ConfigurationError("no source could be provided with the current configuration")
