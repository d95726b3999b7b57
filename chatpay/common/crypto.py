"""AES-256-CBC helpers for credential payloads stored at rest.

Stored records keep the base64 ciphertext in `data` and a 16-character iv
string in `iv`; the iv string's UTF-8 bytes are the cipher IV.
"""

import base64
import json
import secrets
from typing import Any

from cryptography.hazmat.primitives import padding
from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from chatpay.common.config import settings


def _key(secret: str | None) -> bytes:
    secret = settings.encryption_secret if secret is None else secret
    if not secret:
        raise RuntimeError("ENCRYPTION_SECRET is not set")
    key = secret.encode("utf-8")
    if len(key) != 32:
        raise RuntimeError("ENCRYPTION_SECRET must be 32 bytes long")
    return key


def encrypt(payload: Any, secret: str | None = None) -> tuple[str, str]:
    """Encrypt a JSON-serializable payload, returning `(data, iv)`."""

    iv = secrets.token_hex(8)
    padder = padding.PKCS7(algorithms.AES.block_size).padder()
    plaintext = padder.update(json.dumps(payload).encode("utf-8")) + padder.finalize()
    encryptor = Cipher(algorithms.AES(_key(secret)), modes.CBC(iv.encode("utf-8"))).encryptor()
    ciphertext = encryptor.update(plaintext) + encryptor.finalize()
    return base64.b64encode(ciphertext).decode("ascii"), iv


def decrypt(data: str, iv: str, secret: str | None = None) -> Any:
    """Decrypt one stored payload and decode its JSON body."""

    decryptor = Cipher(algorithms.AES(_key(secret)), modes.CBC(iv.encode("utf-8"))).decryptor()
    padded = decryptor.update(base64.b64decode(data)) + decryptor.finalize()
    unpadder = padding.PKCS7(algorithms.AES.block_size).unpadder()
    plaintext = unpadder.update(padded) + unpadder.finalize()
    return json.loads(plaintext.decode("utf-8"))
