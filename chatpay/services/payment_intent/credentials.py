"""Credential lookup, decryption and environment key selection."""

from dataclasses import dataclass
from typing import Protocol

from sqlalchemy import select

from chatpay.common.crypto import decrypt
from chatpay.services.payment_intent.errors import AuthorizationError
from chatpay.services.payment_intent.models import Credentials
from chatpay.services.payment_intent.schemas import StripeCredentialsData


@dataclass(frozen=True)
class EncryptedRecord:
    """Ciphertext and iv as stored for one credential row."""

    data: str
    iv: str


class CredentialStore(Protocol):
    def get(self, credentials_id: str) -> EncryptedRecord | None: ...


class SqlCredentialStore:
    """Reads credential rows through a SQLAlchemy session factory."""

    def __init__(self, session_factory) -> None:
        self.session_factory = session_factory

    def get(self, credentials_id: str) -> EncryptedRecord | None:
        with self.session_factory() as db:
            row = db.execute(
                select(Credentials.data, Credentials.iv).where(Credentials.id == credentials_id)
            ).one_or_none()
        if row is None:
            return None
        return EncryptedRecord(data=row.data, iv=row.iv)


class CredentialResolver:
    """Fetches one credential record and decrypts it into Stripe keys.

    Nothing is cached: every call reads the store and returns a fresh object
    owned by the caller.
    """

    def __init__(self, store: CredentialStore, decrypt_fn=decrypt) -> None:
        self.store = store
        self.decrypt_fn = decrypt_fn

    def resolve(self, credentials_id: str) -> StripeCredentialsData | None:
        record = self.store.get(credentials_id)
        if record is None:
            return None
        return StripeCredentialsData.model_validate(self.decrypt_fn(record.data, record.iv))


@dataclass(frozen=True)
class StripeKeys:
    secret_key: str
    public_key: str

    def __repr__(self) -> str:
        return f"StripeKeys(public_key={self.public_key!r}, secret_key='<redacted>')"


def select_keys(credentials: StripeCredentialsData, is_preview: bool) -> StripeKeys:
    """Pick test keys in preview mode when present, live keys otherwise.

    Secret and public keys fall back to live independently of each other.
    """

    live = credentials.live
    test = credentials.test if is_preview else None

    secret_key = test.secret_key if test and test.secret_key else (live.secret_key if live else None)
    public_key = test.public_key if test and test.public_key else (live.public_key if live else None)
    if not secret_key:
        raise AuthorizationError("no usable Stripe secret key")
    if not public_key:
        raise AuthorizationError("no usable Stripe public key")
    return StripeKeys(secret_key=secret_key, public_key=public_key)
