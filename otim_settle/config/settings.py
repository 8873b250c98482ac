from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

from otim_settle.domain.errors import InvalidConfigError, MissingConfigError
from otim_settle.settlement.plan import DEFAULT_SETTLEMENT_AMOUNT

REQUIRED_VARS = (
    "OTIM_API_URL",
    "OTIM_API_KEY",
    "OTIM_PRIVATE_KEY",
    "RECIPIENT_ADDRESS",
)

DEFAULT_NOTE = "Settlement of Ethereum pyUSD / Base USDC into USDC on Base"


def _env_int(name: str, default: int, min_value: int | None = None) -> int:
    """Whole number from the environment. Values below min_value are rejected."""
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw.strip())
    except ValueError as exc:
        raise InvalidConfigError(name, raw, "expected a whole number") from exc
    if min_value is not None and value < min_value:
        raise InvalidConfigError(name, raw, f"must be at least {min_value}")
    return value


def _env_float(name: str, default: float, min_value: float | None = None) -> float:
    raw = os.environ.get(name)
    if raw is None or not raw.strip():
        value = default
    else:
        try:
            value = float(raw.strip())
        except ValueError as exc:
            raise InvalidConfigError(name, raw, "expected a number") from exc
    if min_value is not None:
        value = max(min_value, value)
    return value


def _env_required(name: str) -> str:
    value = os.environ.get(name, "").strip()
    if not value:
        raise MissingConfigError(name)
    return value


@dataclass(frozen=True)
class Settings:
    api_url: str
    api_key: str
    private_key: str
    recipient_address: str
    log_level: str = "INFO"
    http_timeout: float = 30.0
    settlement_amount: int = DEFAULT_SETTLEMENT_AMOUNT
    note: str = DEFAULT_NOTE
    events_dir: str | None = None

    def __repr__(self) -> str:
        # Keep credentials out of logs and tracebacks.
        return (
            f"Settings(api_url={self.api_url!r}, recipient_address={self.recipient_address!r}, "
            f"log_level={self.log_level!r}, http_timeout={self.http_timeout!r}, "
            f"settlement_amount={self.settlement_amount!r}, events_dir={self.events_dir!r})"
        )


def load_env_file(path: str = ".env", log=None) -> bool:
    """Populate os.environ from a key=value file. Process variables take precedence."""
    if not os.path.isfile(path):
        if log is not None:
            log.warning("%s file not found, using environment variables", path)
        return False
    return load_dotenv(path, override=False)


def load_settings() -> Settings:
    api_url = _env_required("OTIM_API_URL")
    api_key = _env_required("OTIM_API_KEY")
    private_key = _env_required("OTIM_PRIVATE_KEY")
    recipient_address = _env_required("RECIPIENT_ADDRESS")

    return Settings(
        api_url=api_url,
        api_key=api_key,
        private_key=private_key,
        recipient_address=recipient_address,
        log_level=os.environ.get("LOG_LEVEL", "INFO").strip().upper() or "INFO",
        http_timeout=_env_float("OTIM_HTTP_TIMEOUT", 30.0, min_value=1.0),
        settlement_amount=_env_int("SETTLEMENT_AMOUNT", DEFAULT_SETTLEMENT_AMOUNT, min_value=1),
        note=os.environ.get("SETTLEMENT_NOTE", "").strip() or DEFAULT_NOTE,
        events_dir=os.environ.get("EVENTS_DIR", "").strip() or None,
    )
