"""
Normalizers for converting decoded source responses to DictionaryResult.

Each normalizer transforms one source's response DTOs into the canonical
model, handling homograph filtering, pronunciation selection, sense
flattening, and markup cleanup.
"""

from define.core.normalizers.free_dictionary import FreeDictionaryNormalizer
from define.core.normalizers.glosbe import GlosbeNormalizer
from define.core.normalizers.oxford import OxfordNormalizer
from define.core.normalizers.webster import WebsterNormalizer

__all__ = ["WebsterNormalizer", "OxfordNormalizer", "FreeDictionaryNormalizer", "GlosbeNormalizer"]
