"""
Identifier helpers.

Turns human-readable room and device names into machine identifiers (slugs)
and display labels. Every generated signal name is built from these, so they
must stay pure and deterministic.
"""

import re
from typing import List

from heating_topology.exceptions import ConfigurationError

_LOWER_UPPER = re.compile(r"([a-z0-9])([A-Z])")
_ACRONYM_WORD = re.compile(r"([A-Z])([A-Z][a-z])")
_NON_ALNUM = re.compile(r"[^A-Za-z0-9]+")


def split_words(name: str) -> List[str]:
    """Split a name into words on case boundaries and punctuation."""
    spaced = _LOWER_UPPER.sub(r"\1 \2", name)
    spaced = _ACRONYM_WORD.sub(r"\1 \2", spaced)
    return [w for w in _NON_ALNUM.split(spaced) if w]


def derive_slug(name: str) -> str:
    """
    Derive a snake_case slug from a human-readable name.

    Examples:
        "Main bedroom TRV" -> "main_bedroom_trv"
        "LoungeCorner"     -> "lounge_corner"

    Raises:
        ConfigurationError: If the name has no alphanumeric content
    """
    words = split_words(name)
    if not words:
        raise ConfigurationError(f"Cannot derive identifier from name {name!r}")
    return "_".join(w.lower() for w in words)


def derive_label(name: str) -> str:
    """
    Derive a sentence-case display label.

    "main bedroom TRV" -> "Main bedroom trv"
    """
    words = [w.lower() for w in split_words(name)]
    if not words:
        return ""
    words[0] = words[0][:1].upper() + words[0][1:]
    return " ".join(words)
