"""Stripe payment-intent client.

A client is built per call from the selected secret key, so no key outlives
the request that resolved it. Stripe rejections that carry a structured error
object are re-raised as `ProviderError`; other failures propagate as-is.
"""

from typing import Any, Protocol

import stripe

from chatpay.common.config import settings
from chatpay.common.logging import logger
from chatpay.services.payment_intent.errors import ProviderError


class PaymentGateway(Protocol):
    async def create_payment_intent(
        self,
        secret_key: str,
        amount: int,
        currency: str,
        receipt_email: str | None = None,
    ) -> str: ...


def _default_http_client() -> stripe.HTTPXClient:
    return stripe.HTTPXClient(timeout=settings.stripe_timeout_seconds)


def _default_client(secret_key: str, http_client: stripe.HTTPXClient) -> stripe.StripeClient:
    return stripe.StripeClient(
        secret_key,
        stripe_version=settings.stripe_api_version,
        max_network_retries=0,
        http_client=http_client,
    )


def provider_error_from(exc: stripe.StripeError) -> ProviderError | None:
    """Translate a Stripe exception carrying an error object, else `None`."""

    error = exc.error
    if error is None:
        return None
    return ProviderError(
        status_code=exc.http_status,
        error_type=getattr(error, "type", None),
        param=getattr(error, "param", None),
        message=getattr(error, "message", None),
    )


class StripePaymentGateway:
    """Creates payment intents with automatic payment-method negotiation."""

    def __init__(self, client_factory=_default_client, http_client_factory=_default_http_client) -> None:
        self.client_factory = client_factory
        self.http_client_factory = http_client_factory

    async def create_payment_intent(
        self,
        secret_key: str,
        amount: int,
        currency: str,
        receipt_email: str | None = None,
    ) -> str:
        params: dict[str, Any] = {
            "amount": amount,
            "currency": currency,
            "automatic_payment_methods": {"enabled": True},
        }
        if receipt_email is not None:
            params["receipt_email"] = receipt_email

        # The HTTP client is scoped to this call and closed whatever the outcome.
        http_client = self.http_client_factory()
        try:
            client = self.client_factory(secret_key, http_client)
            intent = await client.v1.payment_intents.create_async(params=params)
        except stripe.StripeError as exc:
            provider_error = provider_error_from(exc)
            if provider_error is None:
                raise
            logger.warning(
                "stripe rejected payment intent status=%s type=%s param=%s request_id=%s",
                provider_error.status_code,
                provider_error.error_type,
                provider_error.param,
                exc.request_id,
            )
            raise provider_error from exc
        finally:
            await http_client.close_async()
        return intent.client_secret
