"""
Core Text Processing Module.

Language-agnostic string helpers shared by the source normalizers: diacritic
folding for headword comparison, and cleanup of the markup that dictionary
APIs embed in their text (HTML, BBCode-like markers, and curly-brace tokens).
"""

from __future__ import annotations

import re
import unicodedata
import warnings
from typing import Dict, List

from bs4 import BeautifulSoup, MarkupResemblesLocatorWarning

# Curly-brace text tokens, e.g. "{bc}", "{it}word{/it}", "{sx|test|test:2|}".
# The first "|" group is the token's display text; tokens without one are dropped.
TOKEN_PATTERN = re.compile(r"{.*?(?:\|(.*?)(?:\|.*?\|?)?)?}")

# Tokens replaced with literal text before generic token removal
TOKEN_SUBSTITUTIONS: Dict[str, str] = {
    "{ldquo}": "“",
    "{rdquo}": "”",
}

# Meta blocks that carry cross-reference apparatus rather than text,
# e.g. "{ma}{mat|test|}{/ma}" ("more at test"). Removed with their content.
META_BLOCK_PATTERN = re.compile(r"{(ma|dx|dx_ety|dx_def)}.*?{/\1}")

# Small-capitals token content, used by sources to mark related words
SMALL_CAPS_PATTERN = re.compile(r"{sc}(.*?){/sc}")

BBCODE_PATTERN = re.compile(r"\[/?(?:i|b|u)\]", re.IGNORECASE)

WHITESPACE_PATTERN = re.compile(r"\s+")


def remove_diacritics(text: str) -> str:
    """Return the text with any combining diacritical marks removed.

    >>> remove_diacritics("résumé")
    'resume'
    """
    if not text:
        return ""

    # NFD decomposition separates base chars from combining marks
    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(c for c in decomposed if unicodedata.category(c) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def equal_fold_plain(s: str, t: str) -> bool:
    """Report whether two strings are equal ignoring case and diacritics."""
    return remove_diacritics(s).casefold() == remove_diacritics(t).casefold()


def collapse_whitespace(text: str) -> str:
    """Collapse runs of whitespace into single spaces and trim the ends."""
    return WHITESPACE_PATTERN.sub(" ", text).strip()


def clean_tokens(text: str) -> str:
    """Strip curly-brace tokens, keeping any token display text.

    >>> clean_tokens("{bc}testing a {bc}{sx|test|test:2|}")
    'testing a test'
    """
    if not text:
        return ""

    for token, replacement in TOKEN_SUBSTITUTIONS.items():
        text = text.replace(token, replacement)

    return TOKEN_PATTERN.sub(lambda match: match.group(1) or "", text)


def strip_meta_tokens(text: str) -> str:
    """Remove meta blocks (cross-reference markers) along with their content."""
    if not text:
        return ""
    return META_BLOCK_PATTERN.sub("", text)


def extract_small_caps(text: str) -> List[str]:
    """Return the cleaned contents of every small-caps token in the text."""
    if not text:
        return []
    return [clean_tokens(match).strip() for match in SMALL_CAPS_PATTERN.findall(text) if match.strip()]


def sanitize_html(text: str) -> str:
    """Clean a string of HTML markup, entities, and BBCode-like markers."""
    if not text:
        return ""

    if "<" in text or "&" in text:
        with warnings.catch_warnings():
            warnings.simplefilter("ignore", MarkupResemblesLocatorWarning)
            # get_text() also unescapes any HTML entities
            text = BeautifulSoup(text, "html.parser").get_text()

    return BBCODE_PATTERN.sub("", text)
