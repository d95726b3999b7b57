"""Payment-intent pipeline.

Resolves credentials, selects the Stripe environment, resolves the amount and
receipt email from chat variables, creates the intent and builds the
response. Every stage transition is validated against the pipeline state
machine; any failure moves the run to `FAILED` and propagates to the caller
for normalization.
"""

from starlette.concurrency import run_in_threadpool

from chatpay.common.logging import credentials_id_ctx, logger
from chatpay.common.state_machine import (
    AMOUNT_VALIDATED,
    CREDENTIALS_RESOLVED,
    ENVIRONMENT_SELECTED,
    FAILED,
    INTENT_CREATED,
    RESPONDED,
    START,
    validate_transition,
)
from chatpay.common.tracing import tracer
from chatpay.services.payment_intent.amount import compute_amount, compute_receipt_email
from chatpay.services.payment_intent.credentials import CredentialResolver, select_keys
from chatpay.services.payment_intent.currency import CurrencyFormatter
from chatpay.services.payment_intent.errors import AuthorizationError
from chatpay.services.payment_intent.gateway import PaymentGateway
from chatpay.services.payment_intent.schemas import PaymentIntentRequest, PaymentIntentResponse
from chatpay.services.payment_intent.templating import VariableInterpolator, parse_variables


class PipelineRun:
    """Tracks the stage of one request through the pipeline."""

    def __init__(self) -> None:
        self.state = START

    def advance(self, new_state: str) -> None:
        validate_transition(self.state, new_state)
        logger.debug("payment_intent_stage from=%s to=%s", self.state, new_state)
        self.state = new_state


class PaymentIntentService:
    """Turns a payment block configuration into a Stripe payment intent."""

    def __init__(
        self,
        resolver: CredentialResolver,
        gateway: PaymentGateway,
        formatter: CurrencyFormatter,
        interpolator: VariableInterpolator = parse_variables,
    ) -> None:
        self.resolver = resolver
        self.gateway = gateway
        self.formatter = formatter
        self.interpolator = interpolator

    async def create_payment_intent(self, req: PaymentIntentRequest) -> PaymentIntentResponse:
        run = PipelineRun()
        try:
            response = await self._run(run, req)
        except Exception:
            run.advance(FAILED)
            raise
        run.advance(RESPONDED)
        return response

    async def _run(self, run: PipelineRun, req: PaymentIntentRequest) -> PaymentIntentResponse:
        options = req.input_options
        if not options.credentials_id:
            raise AuthorizationError("missing credentials id")
        credentials_id_ctx.set(options.credentials_id)

        # Decrypted keys stay local to this call and are never stored on self.
        credentials = await run_in_threadpool(self.resolver.resolve, options.credentials_id)
        if credentials is None:
            raise AuthorizationError("unknown credentials id")
        run.advance(CREDENTIALS_RESOLVED)

        keys = select_keys(credentials, req.is_preview)
        run.advance(ENVIRONMENT_SELECTED)

        interpolate = self.interpolator(req.variables)
        amount = compute_amount(options.amount, interpolate)
        additional = options.additional_information
        receipt_email = compute_receipt_email(additional.email if additional else None, interpolate)
        run.advance(AMOUNT_VALIDATED)

        with tracer.start_as_current_span("stripe.payment_intents.create"):
            client_secret = await self.gateway.create_payment_intent(
                keys.secret_key,
                amount,
                options.currency,
                receipt_email=receipt_email,
            )
        run.advance(INTENT_CREATED)
        logger.info(
            "payment_intent_created amount=%s currency=%s preview=%s",
            amount,
            options.currency,
            req.is_preview,
        )

        return PaymentIntentResponse(
            client_secret=client_secret,
            public_key=keys.public_key,
            amount_label=self.formatter.label(amount, options.currency),
        )
