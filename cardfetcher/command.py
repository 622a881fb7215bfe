"""
CardFetcherCommand - the signalbot Command that handles card lookups.

Listens to every message (in groups and DMs) and responds whenever it
finds one of the bracket syntaxes, or one of the ! commands. Multiple
cards per message are supported; they are looked up concurrently and each
gets exactly one reply, in whatever order the lookups finish.
"""

import asyncio
import base64
import logging
import random
from typing import Mapping

import httpx
from signalbot import Command, Context

from cardfetcher.alerts import OutageAlerter
from cardfetcher.dice import roll
from cardfetcher.formatter import MissingFieldError, render, to_message
from cardfetcher.keywords import resolve_keyword
from cardfetcher.matcher import MatchPolicy, resolve
from cardfetcher.models import PlainText, RenderPayload
from cardfetcher.parser import CardQuery, parse_queries
from cardfetcher.scryfall import ScryfallError, search_cards

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "Unable to find the card as searched."

HELP_TEXT = """\
CardFetcher - Card Lookup

Bracket syntax (works in groups and DMs):
  [[Card Name]]         Gatherer page + image
  {{Card Name}}         EDHREC page + image
  <<Card Name>>         Legalities
  ((Card Name))         TCGPlayer pricing
  [[Card|SET]]          Only search one set

Commands:
  !help                 This message
  !kw <keyword>         Rules text for a keyword
  !roll <n>             Roll an n-sided die

Misspelled names are matched to the closest card."""


class LookupFailed(Exception):
    """A lookup finished without a card to show. The message is the reply."""


async def lookup(query: CardQuery, policy: MatchPolicy = MatchPolicy.STRICT) -> RenderPayload:
    """
    Search, match and render a single query.

    Raises LookupFailed when nothing usable came back, MissingFieldError
    when the matched card lacks something the reply needs, and
    ScryfallError when the search itself failed.
    """
    candidates = await search_cards(query.search_text)
    if not candidates:
        raise LookupFailed(f'Unable to retrieve information for "{query.name}"')

    card = resolve(query.name, candidates, policy)
    if card is None:
        logger.info("No close match for %r among %d results", query.name, len(candidates))
        raise LookupFailed(NOT_FOUND_MESSAGE)

    logger.info("Matched %r to %r (%s)", query.name, card.name, query.target.value)
    return render(card, query.target)


class CardFetcherCommand(Command):
    """
    Responds to card lookups and ! commands in Signal messages.

        [[Card Name]]   - Gatherer page
        {{Card Name}}   - EDHREC page
        <<Card Name>>   - format legalities
        ((Card Name))   - TCGPlayer pricing
        !help, !kw <keyword>, !roll <n>
    """

    def __init__(
        self,
        keywords: Mapping[str, str],
        match_policy: MatchPolicy = MatchPolicy.STRICT,
        alerter: OutageAlerter | None = None,
        rng: random.Random | None = None,
    ):
        super().__init__()
        self._keywords = keywords
        self._match_policy = match_policy
        self._alerter = alerter
        self._rng = rng

    async def handle(self, c: Context) -> None:
        text = c.message.text
        if not text:
            return

        command, _, argument = text.strip().partition(" ")
        command = command.lower()

        if command == "!help":
            await c.send(HELP_TEXT)
            return
        if command == "!kw":
            await c.send(resolve_keyword(argument.strip(), self._keywords))
            return
        if command == "!roll":
            await c.send(roll(argument, self._rng))
            return

        queries = parse_queries(text)
        if not queries:
            return

        await asyncio.gather(*(self._answer_query(c, query) for query in queries))

    async def _answer_query(self, c: Context, query: CardQuery) -> None:
        outage: ScryfallError | None = None
        try:
            payload = await lookup(query, self._match_policy)
        except LookupFailed as e:
            payload = PlainText(str(e))
        except MissingFieldError as e:
            logger.info("Can't answer %r: %s", query.raw, e)
            payload = PlainText(NOT_FOUND_MESSAGE)
        except ScryfallError as e:
            logger.warning("Scryfall error for query '%s': %s", query.raw, e)
            if e.status == 0 or e.status >= 500:
                outage = e
            payload = PlainText(f"Something went wrong looking up '{query.name}'.")
        except Exception:
            logger.exception("Unexpected error for query '%s'", query.raw)
            payload = PlainText(f"Something went wrong looking up '{query.name}'.")

        try:
            await self._send(c, payload)
        except Exception:
            logger.exception("Failed to send reply for query '%s'", query.raw)

        # The user's reply goes out before the owner is alerted
        if outage is not None and self._alerter:
            await self._alerter.report(query.raw, outage.details)

    async def _send(self, c: Context, payload: RenderPayload) -> None:
        text, image_url = to_message(payload)
        if image_url:
            await self._send_with_image(c, text, image_url)
        else:
            await c.send(text)

    async def _send_with_image(self, c: Context, text: str, image_url: str) -> None:
        """
        Download the card image and send it as an attachment.

        signal-cli-rest-api accepts base64-encoded attachments. If the image
        can't be fetched or the attachment is rejected, the text goes out on
        its own.
        """
        try:
            async with httpx.AsyncClient() as client:
                response = await client.get(image_url, timeout=15.0)
                response.raise_for_status()

            attachment = base64.b64encode(response.content).decode()
            await c.send(text, base64_attachments=[attachment])

        except Exception as e:
            logger.warning("Failed to fetch/send image %s: %s", image_url, e)
            await c.send(text)
