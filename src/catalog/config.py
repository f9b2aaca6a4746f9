"""Environment-driven settings for the catalog service."""

import logging
import os
from dataclasses import dataclass
from pathlib import Path

from catalog.exceptions import ConfigurationError

BROKERS = ("redis", "memory")

_LEVEL_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}


def get_environment() -> str:
    """Return the active environment name, lower-cased."""
    return (os.getenv("CATALOG_ENV") or os.getenv("ENVIRONMENT") or "development").lower()


def _float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = float(raw)
    except ValueError:
        raise ConfigurationError(name, raw, "expected a number") from None
    if value <= 0:
        raise ConfigurationError(name, raw, "must be greater than zero")
    return value


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(name, raw, "expected an integer") from None
    if value <= 0:
        raise ConfigurationError(name, raw, "must be greater than zero")
    return value


@dataclass(frozen=True)
class Settings:
    environment: str = "development"
    log_level: str = "DEBUG"
    log_dir: Path | None = None
    event_broker: str = "redis"
    redis_url: str = "redis://localhost:6379/0"
    stock_events_stream: str = "catalog::stock"
    stream_maxlen: int = 10_000
    publish_timeout: float = 2.0
    publish_workers: int = 4
    seed_file: Path | None = None

    def __post_init__(self):
        if self.log_level not in logging.getLevelNamesMapping():
            raise ConfigurationError("LOG_LEVEL", self.log_level, "not a known logging level")
        if self.event_broker not in BROKERS:
            raise ConfigurationError("EVENT_BROKER", self.event_broker, f"expected one of {', '.join(BROKERS)}")

    @property
    def is_production(self) -> bool:
        return self.environment in ("production", "staging")

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables."""
        env = get_environment()

        log_dir_raw = os.getenv("LOG_DIR")
        if log_dir_raw is None:
            log_dir = None if env == "test" else Path("logs")
        else:
            log_dir = Path(log_dir_raw) if log_dir_raw else None

        seed_file = os.getenv("SEED_FILE")

        return cls(
            environment=env,
            log_level=os.getenv("LOG_LEVEL", _LEVEL_BY_ENV.get(env, "INFO")).upper(),
            log_dir=log_dir,
            event_broker=os.getenv("EVENT_BROKER", "redis").lower(),
            redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
            stock_events_stream=os.getenv("STOCK_EVENTS_STREAM", "catalog::stock"),
            stream_maxlen=_int("STREAM_MAXLEN", 10_000),
            publish_timeout=_float("PUBLISH_TIMEOUT", 2.0),
            publish_workers=_int("PUBLISH_WORKERS", 4),
            seed_file=Path(seed_file) if seed_file else None,
        )
