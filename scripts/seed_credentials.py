"""Encrypt a Stripe key set and insert it as a credential record.

Useful for local testing of payment blocks without the builder UI.
"""

import argparse

from chatpay.common.crypto import encrypt
from chatpay.common.db import SessionLocal
from chatpay.services.payment_intent.models import Credentials


def build_payload(args: argparse.Namespace) -> dict:
    """Assemble the `{live, test}` key payload from CLI args."""

    payload: dict = {"live": {"secretKey": args.live_secret_key, "publicKey": args.live_public_key}}
    if args.test_secret_key or args.test_public_key:
        payload["test"] = {"secretKey": args.test_secret_key, "publicKey": args.test_public_key}
    return payload


def main() -> None:
    parser = argparse.ArgumentParser(description="Insert an encrypted Stripe credential record.")
    parser.add_argument("--workspace-id", required=True)
    parser.add_argument("--name", default="Stripe")
    parser.add_argument("--live-secret-key", required=True)
    parser.add_argument("--live-public-key", required=True)
    parser.add_argument("--test-secret-key", default=None)
    parser.add_argument("--test-public-key", default=None)
    args = parser.parse_args()

    data, iv = encrypt(build_payload(args))
    with SessionLocal() as db:
        record = Credentials(workspace_id=args.workspace_id, name=args.name, type="stripe", data=data, iv=iv)
        db.add(record)
        db.commit()
        print(f"credentials_id={record.id}")


if __name__ == "__main__":
    main()
