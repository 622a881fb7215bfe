"""
Data passed between the parser, Scryfall client, matcher and formatter.

Candidates are built from Scryfall JSON in cardfetcher.scryfall and never handled
as raw dicts past that point. Payloads are what the formatter hands back
to the command for sending.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping


class Target(str, Enum):
    """Where a looked-up card should be sent to."""

    GATHERER = "gatherer"
    EDHREC = "edhrec"
    LEGALITIES = "legalities"
    PRICING = "pricing"


@dataclass(frozen=True)
class Candidate:
    name: str
    image_url: str | None = None
    related_urls: Mapping[Target, str] = field(default_factory=dict)
    legalities: Mapping[str, str] = field(default_factory=dict)
    purchase_url: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Candidate name must not be empty")
        # Freeze the mappings so a candidate can't change after the fetch
        object.__setattr__(self, "related_urls", MappingProxyType(dict(self.related_urls)))
        object.__setattr__(self, "legalities", MappingProxyType(dict(self.legalities)))


# ── Render payloads ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ImagePayload:
    title: str
    url: str
    image_url: str


@dataclass(frozen=True)
class LegalityTable:
    title: str
    lines: tuple[str, ...]


@dataclass(frozen=True)
class PlainText:
    text: str


RenderPayload = ImagePayload | LegalityTable | PlainText
