"""
Naming helpers for token paths.

Turns slash-delimited variable and style names into slugs, display labels
and WordPress custom-property references (``var(--wp--custom--a--b)``).
"""

from __future__ import annotations

import re
from collections.abc import Iterable

CUSTOM_PROPERTY_PREFIX = "--wp--custom--"

# Size tokens kept upper-case in display labels
SIZE_TOKENS = frozenset({"xs", "sm", "md", "lg", "xl", "2xl", "3xl", "4xl", "5xl", "6xl"})

_CAMEL_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_WORD_CAMEL_BOUNDARY = re.compile(r"([a-z])([A-Z])")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def name_parts(name: str) -> list[str]:
    """Split a variable name on ``/`` and lowercase each segment."""
    return [part.lower() for part in name.split("/")]


def camel_to_kebab(value: str) -> str:
    """Convert camelCase to kebab-case.

    >>> camel_to_kebab("XMLHttpRequest")
    'xmlhttp-request'
    """
    return _CAMEL_BOUNDARY.sub(r"\1-\2", value).lower()


def capitalize_first(text: str) -> str:
    return text[:1].upper() + text[1:]


def _words(name: str) -> list[str]:
    spaced = _WORD_CAMEL_BOUNDARY.sub(r"\1 \2", name)
    words: list[str] = []
    for word in _NON_ALNUM.split(spaced.lower()):
        if not word or (words and words[-1] == word):
            continue
        words.append(word)
    return words


def slug(name: str) -> str:
    """Build a dash-separated slug from a hierarchical name.

    Splits on ``/``, ``-``, ``_``, whitespace, punctuation and camelCase
    boundaries. A word that repeats its predecessor is dropped, so
    ``"Body/Body MD"`` becomes ``"body-md"``.
    """
    return "-".join(_words(name))


def label(name: str) -> str:
    """Build a human-readable label from a hierarchical name.

    Uses the same word split as :func:`slug`. Size tokens (``xs`` .. ``6xl``)
    are upper-cased, other words title-cased.
    """
    return " ".join(
        word.upper() if word in SIZE_TOKENS else capitalize_first(word) for word in _words(name)
    )


def css_var_path(parts: Iterable[str]) -> str:
    """Build a ``--wp--custom--`` property path from name segments.

    An empty sequence yields the bare prefix.
    """
    return CUSTOM_PROPERTY_PREFIX + "--".join(camel_to_kebab(part.lower()) for part in parts)


def css_var_ref(parts: Iterable[str]) -> str:
    """Wrap :func:`css_var_path` in ``var(...)``."""
    return f"var({css_var_path(parts)})"
