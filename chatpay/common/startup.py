"""Startup-time helpers for safe config logging."""

from pydantic_settings import BaseSettings

from chatpay.common.logging import logger


SECRET_MARKERS = ("key", "secret", "password", "token", "dsn")


def redacted_config(config: BaseSettings, fields: list[str]) -> dict[str, object]:
    """Return selected settings with secret-like fields replaced by a marker."""

    values: dict[str, object] = {}
    for field in fields:
        value = getattr(config, field)
        if any(marker in field for marker in SECRET_MARKERS):
            value = "<set>" if value else "<unset>"
        values[field] = value
    return values


def log_startup_config(config: BaseSettings, fields: list[str]) -> None:
    """Log selected startup config for quick troubleshooting."""

    logger.info("startup_config=%s", redacted_config(config, fields))
