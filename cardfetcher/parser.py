"""
Parser for the bracket syntaxes used in messages.

Each bracket family sends the card somewhere different:

  [[Card Name]]           Gatherer page + card image
  {{Card Name}}           EDHREC page + card image
  <<Card Name>>           Format legalities
  ((Card Name))           TCGPlayer pricing
  [[Card Name|SET]]       Only search printings from one set
"""

from dataclasses import dataclass
from typing import Iterator

from cardfetcher.models import Target

# (prefix, suffix, target) - scanned in this order
SYNTAXES: tuple[tuple[str, str, Target], ...] = (
    ("[[", "]]", Target.GATHERER),
    ("{{", "}}", Target.EDHREC),
    ("<<", ">>", Target.LEGALITIES),
    ("((", "))", Target.PRICING),
)


@dataclass
class CardQuery:
    raw: str              # The original text between the delimiters
    target: Target
    name: str             # Card name (cleaned)
    set_code: str | None  # e.g. "C21"

    @property
    def search_text(self) -> str:
        """The string sent to Scryfall's search endpoint."""
        if self.set_code:
            return f"{self.name} set:{self.set_code.lower()}"
        return self.name


def extract(text: str, prefix: str, suffix: str) -> Iterator[str]:
    """
    Yield every substring found between prefix and suffix, left to right.

    Scanning resumes after each consumed suffix. A suffix with no earlier
    prefix is skipped over; a prefix with no later suffix ends the scan.
    """
    pos = 0
    while True:
        start = text.find(prefix, pos)
        if start == -1:
            return
        content_start = start + len(prefix)
        end = text.find(suffix, content_start)
        if end == -1:
            return
        yield text[content_start:end]
        pos = end + len(suffix)


def has_card_syntax(text: str) -> bool:
    """True if the text has at least one opening and one closing delimiter."""
    has_prefix = any(prefix in text for prefix, _, _ in SYNTAXES)
    has_suffix = any(suffix in text for _, suffix, _ in SYNTAXES)
    return has_prefix and has_suffix


def parse_queries(text: str) -> list[CardQuery]:
    """
    Extract card queries from a message body.

    Every bracket family scans the whole text on its own, so a message may
    mix syntaxes. Empty brackets are ignored.
    """
    if not has_card_syntax(text):
        return []

    queries = []
    for prefix, suffix, target in SYNTAXES:
        for raw in extract(text, prefix, suffix):
            query = _parse_single(raw, target)
            if query.name:
                queries.append(query)
    return queries


def _parse_single(raw: str, target: Target) -> CardQuery:
    # Split off an optional set code via pipe
    parts = [p.strip() for p in raw.split("|")]
    name = parts[0]
    set_code = parts[1].upper() if len(parts) > 1 and parts[1] else None

    return CardQuery(raw=raw, target=target, name=name, set_code=set_code)
