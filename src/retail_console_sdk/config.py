from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

PRODUCTION_ENV_NAMES = {"prod", "production"}
DEFAULT_DEV_PROXY_URL = "http://localhost:5173/api"


class ConfigError(ValueError):
    pass


@dataclass(frozen=True)
class ClientConfig:
    env_name: str
    api_base_url: str
    timeout_seconds: float = 10.0
    retry_max_attempts: int = 3
    retry_base_delay_seconds: float = 1.0
    verify_ssl: bool = True
    log_level: str | None = None

    @property
    def normalized_env(self) -> str:
        return self.env_name.lower().strip()

    @property
    def is_production(self) -> bool:
        return self.normalized_env in PRODUCTION_ENV_NAMES


def _coerce_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


def _read_float(name: str, default: str) -> float:
    raw = os.getenv(name, default)
    try:
        return float(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected a number, got {raw!r}") from exc


def _read_int(name: str, default: str) -> int:
    raw = os.getenv(name, default)
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigError(f"Invalid {name}: expected an integer, got {raw!r}") from exc


def _validate(condition: bool, message: str) -> None:
    if not condition:
        raise ConfigError(message)


def _resolve_base_url(production: bool) -> str:
    if production:
        # VITE_API_URL is still honoured so the console's deploy env can be reused as-is.
        base_url = (
            (os.getenv("RETAIL_CONSOLE_API_URL") or "").strip()
            or (os.getenv("VITE_API_URL") or "").strip()
        )
        _validate(bool(base_url), "Missing required config values: RETAIL_CONSOLE_API_URL")
        return base_url
    return (os.getenv("RETAIL_CONSOLE_DEV_PROXY_URL") or DEFAULT_DEV_PROXY_URL).strip()


def load_config(env_file: str | None = None) -> ClientConfig:
    """Load config from environment with optional .env override."""
    load_dotenv(env_file)

    env_name = (os.getenv("RETAIL_CONSOLE_ENV") or "development").strip()
    production = env_name.lower() in PRODUCTION_ENV_NAMES
    api_base_url = _resolve_base_url(production)

    timeout_seconds = _read_float("RETAIL_CONSOLE_TIMEOUT_SECONDS", "10")
    _validate(
        timeout_seconds > 0,
        f"Invalid RETAIL_CONSOLE_TIMEOUT_SECONDS: expected > 0, got {timeout_seconds}",
    )

    retry_max_attempts = _read_int("RETAIL_CONSOLE_RETRY_MAX_ATTEMPTS", "3")
    _validate(
        retry_max_attempts >= 1,
        f"Invalid RETAIL_CONSOLE_RETRY_MAX_ATTEMPTS: expected >= 1, got {retry_max_attempts}",
    )

    retry_base_delay_seconds = _read_float("RETAIL_CONSOLE_RETRY_BASE_DELAY_SECONDS", "1.0")
    _validate(
        retry_base_delay_seconds >= 0,
        (
            "Invalid RETAIL_CONSOLE_RETRY_BASE_DELAY_SECONDS: "
            f"expected >= 0, got {retry_base_delay_seconds}"
        ),
    )

    verify_ssl = _coerce_bool(os.getenv("RETAIL_CONSOLE_VERIFY_SSL"), True)
    log_level = (os.getenv("RETAIL_CONSOLE_LOG_LEVEL") or "").strip().upper() or None

    return ClientConfig(
        env_name=env_name,
        api_base_url=api_base_url.rstrip("/"),
        timeout_seconds=timeout_seconds,
        retry_max_attempts=retry_max_attempts,
        retry_base_delay_seconds=retry_base_delay_seconds,
        verify_ssl=verify_ssl,
        log_level=log_level,
    )
