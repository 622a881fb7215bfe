"""
Scryfall outage alerting.

When a lookup fails because Scryfall couldn't be reached (or returned an
error), the owner gets a one-off Signal message. Further failures inside
the cooldown window are only logged, so a long outage doesn't flood the
owner's inbox.
"""

import time
import logging
from typing import Callable, Awaitable

logger = logging.getLogger(__name__)

ALERT_COOLDOWN = 1800  # 30 minutes

SignalSender = Callable[[str, str], Awaitable[None]]


class OutageAlerter:
    def __init__(
        self,
        signal_sender: SignalSender,
        owner_phone: str,
        cooldown: float = ALERT_COOLDOWN,
        clock: Callable[[], float] = time.time,
    ):
        self._signal_sender = signal_sender
        self._owner_phone = owner_phone
        self._cooldown = cooldown
        self._clock = clock
        self._last_alert: float | None = None

    async def report(self, query: str, details: str) -> None:
        """Tell the owner about a failed lookup, unless we did so recently."""
        now = self._clock()
        if self._last_alert is not None and now - self._last_alert < self._cooldown:
            return

        self._last_alert = now
        msg = f"Scryfall lookup failed for '{query}': {details}"
        logger.warning("Alerting owner: %s", msg)
        try:
            await self._signal_sender(self._owner_phone, msg)
        except Exception:
            logger.exception("Failed to send outage alert")
