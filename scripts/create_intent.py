"""Call the payment-intent endpoint once and print the response."""

import argparse
import asyncio
import json
import time
from uuid import uuid4

import httpx


async def create_intent(base_url: str, payload: dict) -> None:
    """Send one request and print status, latency and body."""

    started = time.perf_counter()
    async with httpx.AsyncClient(timeout=30.0) as client:
        resp = await client.post(
            f"{base_url}/api/integrations/stripe/createPaymentIntent",
            json=payload,
            headers={"x-correlation-id": str(uuid4())},
        )
    latency = (time.perf_counter() - started) * 1000
    print(f"status={resp.status_code}")
    print(f"latency_ms={latency:.2f}")
    print(json.dumps(resp.json(), indent=2))


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--base-url", default="http://localhost:8000")
    parser.add_argument("--credentials-id", required=True)
    parser.add_argument("--amount", default="10", help="Amount expression, may reference {{variables}}")
    parser.add_argument("--currency", default="USD")
    parser.add_argument("--email", default=None, help="Receipt email expression")
    parser.add_argument("--var", action="append", default=[], help="Variable binding as name=value")
    parser.add_argument("--preview", action="store_true")
    args = parser.parse_args()

    variables = []
    for binding in args.var:
        name, _, value = binding.partition("=")
        variables.append({"id": str(uuid4()), "name": name, "value": value})
    payload = {
        "inputOptions": {
            "credentialsId": args.credentials_id,
            "amount": args.amount,
            "currency": args.currency,
            "additionalInformation": {"email": args.email},
        },
        "isPreview": args.preview,
        "variables": variables,
    }
    asyncio.run(create_intent(args.base_url, payload))
