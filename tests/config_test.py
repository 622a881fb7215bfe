"""Tests for cardfetcher/config.py"""
from pathlib import Path

import pytest
from cardfetcher.config import Settings
from cardfetcher.keywords import DEFAULT_KEYWORDS_FILE
from cardfetcher.matcher import MatchPolicy

REQUIRED = {
    "SIGNAL_SERVICE": "localhost:8080",
    "BOT_PHONE_NUMBER": "+61400000000",
}


def test_defaults():
    settings = Settings.from_env(REQUIRED)
    assert settings.signal_service == "localhost:8080"
    assert settings.phone_number == "+61400000000"
    assert settings.owner_phone == ""
    assert settings.log_level == "INFO"
    assert settings.log_file == ""
    assert settings.keywords_file == DEFAULT_KEYWORDS_FILE
    assert settings.match_policy == MatchPolicy.STRICT


def test_overrides():
    settings = Settings.from_env({
        **REQUIRED,
        "OWNER_PHONE_NUMBER": "+61499999999",
        "LOG_LEVEL": "debug",
        "LOG_FILE": "/tmp/bot.log",
        "KEYWORDS_FILE": "/etc/cardfetcher/keywords.json",
        "MATCH_POLICY": "Lenient",
    })
    assert settings.owner_phone == "+61499999999"
    assert settings.log_level == "DEBUG"
    assert settings.log_file == "/tmp/bot.log"
    assert settings.keywords_file == Path("/etc/cardfetcher/keywords.json")
    assert settings.match_policy == MatchPolicy.LENIENT


def test_missing_required_variable():
    with pytest.raises(KeyError):
        Settings.from_env({"SIGNAL_SERVICE": "localhost:8080"})


def test_unknown_match_policy():
    with pytest.raises(ValueError, match="MATCH_POLICY"):
        Settings.from_env({**REQUIRED, "MATCH_POLICY": "fuzzy"})


def test_reads_process_environment(monkeypatch):
    monkeypatch.setenv("SIGNAL_SERVICE", "signal:8080")
    monkeypatch.setenv("BOT_PHONE_NUMBER", "+61411111111")
    monkeypatch.delenv("MATCH_POLICY", raising=False)
    settings = Settings.from_env()
    assert settings.signal_service == "signal:8080"
    assert settings.match_policy == MatchPolicy.STRICT
