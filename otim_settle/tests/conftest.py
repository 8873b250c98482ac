from __future__ import annotations

import logging

import pytest

from fakes import BUILD_PAYLOAD, RECIPIENT
from otim_settle.config import REQUIRED_VARS, Settings


@pytest.fixture(autouse=True)
def _reset_logger():
    # get_logger binds sys.stderr once; drop it so each test gets the current capture stream.
    yield
    log = logging.getLogger("otim-settle")
    for handler in list(log.handlers):
        log.removeHandler(handler)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        api_url="https://api.example.test/v1",
        api_key="test-key",
        private_key="0x" + "ab" * 32,
        recipient_address=RECIPIENT,
    )


@pytest.fixture
def clean_env(monkeypatch):
    for name in (*REQUIRED_VARS, "LOG_LEVEL", "OTIM_HTTP_TIMEOUT", "SETTLEMENT_AMOUNT",
                 "SETTLEMENT_NOTE", "EVENTS_DIR"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def full_env(clean_env):
    clean_env.setenv("OTIM_API_URL", "https://api.example.test/v1")
    clean_env.setenv("OTIM_API_KEY", "test-key")
    clean_env.setenv("OTIM_PRIVATE_KEY", "0x" + "ab" * 32)
    clean_env.setenv("RECIPIENT_ADDRESS", RECIPIENT)
    return clean_env


@pytest.fixture
def build_payload() -> dict:
    return dict(BUILD_PAYLOAD)
