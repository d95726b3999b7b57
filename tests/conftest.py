"""Shared fixtures for the payment-intent pipeline tests."""

import os

os.environ.setdefault("POSTGRES_DSN", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("ENCRYPTION_SECRET", "0123456789abcdef0123456789abcdef")
os.environ.setdefault("TRACING_ENABLED", "false")

from types import SimpleNamespace  # noqa: E402

import pytest  # noqa: E402

from chatpay.common.config import DEFAULT_CURRENCY_SYMBOLS  # noqa: E402
from chatpay.common.crypto import encrypt  # noqa: E402
from chatpay.services.payment_intent.credentials import CredentialResolver, EncryptedRecord  # noqa: E402
from chatpay.services.payment_intent.currency import CurrencyFormatter  # noqa: E402
from chatpay.services.payment_intent.service import PaymentIntentService  # noqa: E402


LIVE_AND_TEST_KEYS = {
    "live": {"secretKey": "sk_live_123", "publicKey": "pk_live_123"},
    "test": {"secretKey": "sk_test_456", "publicKey": "pk_test_456"},
}


class InMemoryCredentialStore:
    """Credential store double that records every lookup."""

    def __init__(self, records: dict[str, dict] | None = None) -> None:
        self.records = {}
        for credentials_id, payload in (records or {}).items():
            data, iv = encrypt(payload)
            self.records[credentials_id] = EncryptedRecord(data=data, iv=iv)
        self.lookups: list[str] = []

    def get(self, credentials_id: str) -> EncryptedRecord | None:
        self.lookups.append(credentials_id)
        return self.records.get(credentials_id)


class SpyGateway:
    """Gateway double recording calls and optionally raising."""

    def __init__(self, client_secret: str = "pi_123_secret_abc", error: Exception | None = None) -> None:
        self.client_secret = client_secret
        self.error = error
        self.calls: list[SimpleNamespace] = []

    async def create_payment_intent(self, secret_key, amount, currency, receipt_email=None):
        self.calls.append(
            SimpleNamespace(secret_key=secret_key, amount=amount, currency=currency, receipt_email=receipt_email)
        )
        if self.error is not None:
            raise self.error
        return self.client_secret


@pytest.fixture
def store():
    return InMemoryCredentialStore({"cred-1": LIVE_AND_TEST_KEYS, "cred-live": {"live": LIVE_AND_TEST_KEYS["live"]}})


@pytest.fixture
def gateway():
    return SpyGateway()


@pytest.fixture
def service(store, gateway):
    return PaymentIntentService(
        resolver=CredentialResolver(store),
        gateway=gateway,
        formatter=CurrencyFormatter(DEFAULT_CURRENCY_SYMBOLS),
    )


def make_request_body(**overrides) -> dict:
    """Build a camelCase request body with sensible defaults."""

    input_options = {
        "credentialsId": "cred-1",
        "amount": "{{Price}}",
        "currency": "USD",
        "additionalInformation": {"email": "{{Email}}"},
    }
    input_options.update(overrides.pop("input_options", {}))
    body = {
        "inputOptions": input_options,
        "isPreview": False,
        "variables": [
            {"id": "v1", "name": "Price", "value": "10"},
            {"id": "v2", "name": "Email", "value": "buyer@example.com"},
        ],
    }
    body.update(overrides)
    return body
