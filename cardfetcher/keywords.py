"""
Rules keyword lookups for the !kw command.

The keyword table is a JSON object of keyword -> rules text, read once at
startup and handed to the command as a read-only mapping.
"""

import json
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Mapping

from rapidfuzz.distance import Levenshtein

logger = logging.getLogger(__name__)

DEFAULT_KEYWORDS_FILE = Path(__file__).parent / "data" / "keywords.json"
MAX_KEYWORD_DISTANCE = 4

EMPTY_QUERY_MESSAGE = "You must input a valid keyword."


def load_keywords(path: Path = DEFAULT_KEYWORDS_FILE) -> Mapping[str, str]:
    """Read the keyword table. Raises ValueError if the file isn't a str -> str object."""
    with open(path, encoding="utf-8") as f:
        data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object of keyword -> rules text")
    for key, value in data.items():
        if not isinstance(value, str):
            raise ValueError(f"{path}: rules text for {key!r} is not a string")

    logger.info("Loaded %d keywords from %s", len(data), path)
    return MappingProxyType(data)


def resolve_keyword(query: str, table: Mapping[str, str]) -> str:
    """
    Return the rules text for a keyword.

    Falls back to the first keyword (in table order) within
    MAX_KEYWORD_DISTANCE edits of the query. That is the first close one,
    not the closest.
    """
    if query == "":
        return EMPTY_QUERY_MESSAGE

    if query in table:
        return table[query]

    for key, text in table.items():
        if Levenshtein.distance(key, query) <= MAX_KEYWORD_DISTANCE:
            logger.debug("Keyword %r matched %r", query, key)
            return text

    return f"Keyword '{query}' not found"
