"""
Runtime settings, read once from the environment at startup.

Required environment variables:
    SIGNAL_SERVICE      - URL of signal-cli-rest-api, e.g. localhost:8080
    BOT_PHONE_NUMBER    - E.164 phone number the bot is registered under,
                          e.g. +61400000000

Optional:
    OWNER_PHONE_NUMBER  - Owner's phone for Scryfall outage alerts
    LOG_LEVEL           - Python log level, default INFO
    LOG_FILE            - Also append log output to this file
    KEYWORDS_FILE       - JSON keyword table, default is the bundled one
    MATCH_POLICY        - "strict" (default) or "lenient"
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping

from cardfetcher.keywords import DEFAULT_KEYWORDS_FILE
from cardfetcher.matcher import MatchPolicy


@dataclass(frozen=True)
class Settings:
    signal_service: str
    phone_number: str
    owner_phone: str = ""
    log_level: str = "INFO"
    log_file: str = ""
    keywords_file: Path = DEFAULT_KEYWORDS_FILE
    match_policy: MatchPolicy = MatchPolicy.STRICT

    @classmethod
    def from_env(cls, environ: Mapping[str, str] = os.environ) -> "Settings":
        policy = environ.get("MATCH_POLICY", "strict").strip().lower()
        try:
            match_policy = MatchPolicy(policy)
        except ValueError:
            choices = ", ".join(p.value for p in MatchPolicy)
            raise ValueError(f"MATCH_POLICY must be one of {choices}, got {policy!r}") from None

        return cls(
            signal_service=environ["SIGNAL_SERVICE"],
            phone_number=environ["BOT_PHONE_NUMBER"],
            owner_phone=environ.get("OWNER_PHONE_NUMBER", ""),
            log_level=environ.get("LOG_LEVEL", "INFO").upper(),
            log_file=environ.get("LOG_FILE", ""),
            keywords_file=Path(environ.get("KEYWORDS_FILE") or DEFAULT_KEYWORDS_FILE),
            match_policy=match_policy,
        )
