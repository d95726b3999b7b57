"""Central environment-driven settings for the payment-intent service.

The service process loads this once at startup. Behavior is controlled by
environment variables (see `.env.example`).
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_CURRENCY_SYMBOLS: dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "CRC": "₡",
    "GBP": "£",
    "ILS": "₪",
    "INR": "₹",
    "JPY": "¥",
    "KRW": "₩",
    "NGN": "₦",
    "PHP": "₱",
    "PLN": "zł",
    "PYG": "₲",
    "THB": "฿",
    "UAH": "₴",
    "VND": "₫",
}


class CommonSettings(BaseSettings):
    """Typed view of runtime configuration from environment variables."""

    service_name: str = "payment-intent"
    log_level: str = "INFO"
    postgres_dsn: str
    db_pool_size: int = 5
    # AES-256 key; must be exactly 32 bytes once UTF-8 encoded.
    encryption_secret: str = ""
    stripe_api_version: str = "2020-08-27"
    stripe_timeout_seconds: float = 30.0
    currency_symbols: dict[str, str] = Field(default_factory=lambda: dict(DEFAULT_CURRENCY_SYMBOLS))
    cors_allow_origins: list[str] = ["*"]
    expose_internal_errors: bool = False
    tracing_enabled: bool = True
    otel_exporter_otlp_endpoint: str = "http://otel-collector:4318/v1/traces"
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = CommonSettings()
