from __future__ import annotations

import enum
import re


class IdentifierKind(enum.Enum):
    TMDB = "tmdb"
    IMDB = "imdb"
    FREE_TEXT = "free_text"


# Checked in order: two-letter IMDb prefixes must win over the bare TMDB marker,
# otherwise "tt0137523" would read as TMDB id "t0137523".
_PREFIXES: tuple[tuple[str, IdentifierKind], ...] = (
    ("nm", IdentifierKind.IMDB),
    ("tt", IdentifierKind.IMDB),
    ("t", IdentifierKind.TMDB),
)

_DIGITS = re.compile(r"[0-9]+")

TMDB_MARKER = "t"


def classify_query(query: str) -> IdentifierKind:
    """Tell whether a lookup query is a TMDB id, an IMDb id or free text.

    - ``nm<digits>`` / ``tt<digits>``: IMDb person / title ids
    - ``t<digits>``: TMDB numeric id with a leading marker
    - anything else: free text that has to go through search
    """
    q = query or ""
    for prefix, kind in _PREFIXES:
        if q.startswith(prefix) and _DIGITS.match(q, len(prefix)):
            return kind
    return IdentifierKind.FREE_TEXT


def strip_tmdb_marker(query: str) -> str:
    """``"t550"`` -> ``"550"``. Only meaningful for TMDB-form queries."""
    m = _DIGITS.match(query or "", len(TMDB_MARKER))
    return m.group(0) if m else ""


_IMDB_ID = re.compile(r"(?:nm|tt)[0-9]+")


def imdb_id_of(query: str) -> str:
    """``"tt0137523 #2"`` -> ``"tt0137523"``. Only meaningful for IMDb-form queries."""
    m = _IMDB_ID.match(query or "")
    return m.group(0) if m else ""
