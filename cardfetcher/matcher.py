"""
Picks the one card from a Scryfall search result that the user meant.

Scryfall's search returns every card whose name contains the query terms,
so "[[Shock]]" also brings back "Shocker", "Aftershock" and friends. Two
policies are available:

  STRICT   Drop every candidate whose Jaro-Winkler similarity to the query
           is not above SIMILARITY_THRESHOLD, then take the smallest
           Levenshtein distance among the rest. Returns None when nothing
           is close enough.
  LENIENT  Smallest Levenshtein distance over the whole list. Only returns
           None for an empty list.

Both compare case-insensitively and break ties by list order.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Sequence

from rapidfuzz.distance import JaroWinkler, Levenshtein

from cardfetcher.models import Candidate

SIMILARITY_THRESHOLD = 0.8


class MatchPolicy(str, Enum):
    STRICT = "strict"
    LENIENT = "lenient"


def similarity(a: str, b: str) -> float:
    """Case-insensitive Jaro-Winkler similarity in [0, 1]."""
    return JaroWinkler.normalized_similarity(a.lower(), b.lower())


def distance(a: str, b: str) -> int:
    """Case-insensitive Levenshtein distance."""
    return Levenshtein.distance(a.lower(), b.lower())


def _closest(query: str, candidates: Sequence[Candidate]) -> Candidate | None:
    # min() keeps the first of equal keys
    if not candidates:
        return None
    return min(candidates, key=lambda card: distance(query, card.name))


def pick_lenient(query: str, candidates: Sequence[Candidate]) -> Candidate | None:
    return _closest(query, candidates)


def pick_strict(
    query: str,
    candidates: Sequence[Candidate],
    threshold: float = SIMILARITY_THRESHOLD,
) -> Candidate | None:
    close = [card for card in candidates if similarity(query, card.name) > threshold]
    return _closest(query, close)


_POLICIES: dict[MatchPolicy, Callable[[str, Sequence[Candidate]], Candidate | None]] = {
    MatchPolicy.STRICT: pick_strict,
    MatchPolicy.LENIENT: pick_lenient,
}


def resolve(
    query: str,
    candidates: Sequence[Candidate],
    policy: MatchPolicy = MatchPolicy.STRICT,
) -> Candidate | None:
    """Return the best candidate for query under the given policy, or None."""
    return _POLICIES[policy](query, candidates)
