"""Text index over event title and type.

Each event stores its stemmed title+type tokens in ``Event.search_terms``.
A search string is reduced the same way and matches an event when any of
its terms is present, so "robotics" finds "Robot Building Night" and
"workshops" finds events of type "Workshop".
"""

import re

import snowballstemmer
from sqlalchemy import ColumnElement, false, or_

from college_events.models import Event

_TOKEN_RE = re.compile(r"[^\W_]+", re.UNICODE)

_stemmer = snowballstemmer.stemmer("english")

STOP_WORDS = frozenset(
    """
    a about an and are as at be but by for from has have in is it its of on
    or that the this to was were will with
    """.split()
)


def tokenize(text: str | None) -> list[str]:
    """Lowercase, split on non-word characters, drop stop words and stem.

    Order is preserved and duplicates are removed.
    """
    if not text:
        return []
    words = [w for w in _TOKEN_RE.findall(text.lower()) if w not in STOP_WORDS]
    seen: dict[str, None] = {}
    for stem in _stemmer.stemWords(words):
        seen.setdefault(stem, None)
    return list(seen)


def build_search_terms(title: str, event_type: str) -> str:
    """Build the stored ``search_terms`` value for an event."""
    terms = tokenize(f"{title} {event_type}")
    return f" {' '.join(terms)} " if terms else " "


def search_clause(search: str) -> ColumnElement[bool]:
    """SQL clause matching events that share at least one term with ``search``.

    A search made only of stop words or punctuation matches nothing.
    """
    terms = tokenize(search)
    if not terms:
        return false()
    return or_(*(Event.search_terms.contains(f" {term} ", autoescape=True) for term in terms))
