"""
Entry point for CardFetcher.

Reads configuration from environment variables (see cardfetcher.config),
loads the keyword table and starts the signalbot event loop. The bot
connects to signal-cli-rest-api running in a sibling Docker container
(or locally for dev).
"""

import logging

from dotenv import load_dotenv
from signalbot import SignalBot, Config

from cardfetcher.alerts import OutageAlerter
from cardfetcher.command import CardFetcherCommand
from cardfetcher.config import Settings
from cardfetcher.keywords import load_keywords
from cardfetcher.scryfall import close as close_scryfall

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"

logger = logging.getLogger(__name__)


def setup_logging(settings: Settings) -> None:
    logging.basicConfig(level=settings.log_level, format=LOG_FORMAT)
    if settings.log_file:
        handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logging.getLogger().addHandler(handler)


def main() -> None:
    load_dotenv()
    settings = Settings.from_env()
    setup_logging(settings)

    keywords = load_keywords(settings.keywords_file)

    logger.info(
        "Starting CardFetcher on %s (match policy: %s)",
        settings.phone_number,
        settings.match_policy.value,
    )

    bot = SignalBot(
        Config(
            signal_service=settings.signal_service,
            phone_number=settings.phone_number,
        )
    )

    alerter = None
    if settings.owner_phone:
        async def signal_sender(phone: str, message: str) -> None:
            await bot._signal.send(phone, message)

        alerter = OutageAlerter(signal_sender, settings.owner_phone)
    else:
        logger.info("OWNER_PHONE_NUMBER not set, outage alerts disabled")

    bot.register(
        CardFetcherCommand(
            keywords=keywords,
            match_policy=settings.match_policy,
            alerter=alerter,
        )
    )

    try:
        bot.start()
    finally:
        bot._event_loop.run_until_complete(close_scryfall())


if __name__ == "__main__":
    main()
