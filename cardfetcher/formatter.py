"""
Builds the reply for a matched card.

render() turns a Candidate into one of the payload types in
cardfetcher.models. Signal has no embeds, so to_message() then flattens a
payload into (text, image_url | None), where image_url is the picture to
attach to the message.
"""

from __future__ import annotations

from cardfetcher.models import (
    Candidate,
    ImagePayload,
    LegalityTable,
    PlainText,
    RenderPayload,
    Target,
)

PAGE_TITLES = {
    Target.GATHERER: "Gatherer Page",
    Target.EDHREC: "EDHREC Page",
}


class MissingFieldError(Exception):
    """The matched card doesn't carry a field the reply needs."""
    def __init__(self, card_name: str, field: str):
        self.card_name = card_name
        self.field = field
        super().__init__(f"{card_name} has no {field}")


def _require(card: Candidate, value: str | None, field: str) -> str:
    if not value:
        raise MissingFieldError(card.name, field)
    return value


# ── Per-target renderers ─────────────────────────────────────────────────────

def render_page(card: Candidate, target: Target) -> ImagePayload:
    """Link to the card's Gatherer or EDHREC page, with the card image."""
    url = _require(card, card.related_urls.get(target), f"{target.value} url")
    return ImagePayload(
        title=f"{card.name} - {PAGE_TITLES[target]}",
        url=url,
        image_url=_require(card, card.image_url, "image url"),
    )


def render_legalities(card: Candidate) -> LegalityTable:
    """One "<format>: <status>" line per format, in Scryfall's order."""
    lines = tuple(
        f"{fmt}: {status.replace('_', ' ')}"
        for fmt, status in card.legalities.items()
    )
    return LegalityTable(title=f"{card.name} - Legalities", lines=lines)


def render_pricing(card: Candidate) -> ImagePayload:
    return ImagePayload(
        title=f"{card.name} - TCGPlayer pricing",
        url=_require(card, card.purchase_url, "purchase url"),
        image_url=_require(card, card.image_url, "image url"),
    )


def render(card: Candidate, target: Target) -> RenderPayload:
    if target in PAGE_TITLES:
        return render_page(card, target)
    if target == Target.LEGALITIES:
        return render_legalities(card)
    if target == Target.PRICING:
        return render_pricing(card)
    raise ValueError(f"Unknown target: {target!r}")


def to_message(payload: RenderPayload) -> tuple[str, str | None]:
    if isinstance(payload, ImagePayload):
        return f"{payload.title}\n{payload.url}", payload.image_url
    if isinstance(payload, LegalityTable):
        return "\n".join([payload.title, "", *payload.lines]), None
    return payload.text, None
