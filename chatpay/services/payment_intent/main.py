"""HTTP entrypoint for chatbot payment blocks.

`POST /api/integrations/stripe/createPaymentIntent` resolves the block's
Stripe credentials and returns a client secret the chat widget uses to
confirm the payment.
"""

import json
from time import perf_counter
from uuid import uuid4

from fastapi import Depends, FastAPI, Header, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError as SchemaError
from starlette.exceptions import HTTPException as StarletteHTTPException

from chatpay.common.config import settings
from chatpay.common.db import SessionLocal
from chatpay.common.logging import configure_logging, logger, trace_id_ctx
from chatpay.common.metrics import (
    http_request_duration_seconds,
    http_requests_total,
    metrics_response,
    payment_intent_failure_total,
    payment_intent_latency_seconds,
    payment_intent_requests_total,
    payment_intent_success_total,
)
from chatpay.common.startup import log_startup_config
from chatpay.common.tracing import instrument_app, setup_tracing
from chatpay.services.payment_intent.credentials import CredentialResolver, SqlCredentialStore
from chatpay.services.payment_intent.currency import CurrencyFormatter
from chatpay.services.payment_intent.errors import (
    AuthorizationError,
    NormalizedError,
    ValidationError,
    normalize,
)
from chatpay.services.payment_intent.gateway import StripePaymentGateway
from chatpay.services.payment_intent.schemas import PaymentIntentRequest
from chatpay.services.payment_intent.service import PaymentIntentService

configure_logging()
setup_tracing(settings.service_name)
log_startup_config(
    settings,
    [
        "service_name",
        "postgres_dsn",
        "encryption_secret",
        "stripe_api_version",
        "stripe_timeout_seconds",
        "cors_allow_origins",
        "expose_internal_errors",
        "tracing_enabled",
    ],
)
service = PaymentIntentService(
    resolver=CredentialResolver(SqlCredentialStore(SessionLocal)),
    gateway=StripePaymentGateway(),
    formatter=CurrencyFormatter(settings.currency_symbols),
)

app = FastAPI(title="Chatpay Payment Intents")
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["*"],
)
instrument_app(app)


def get_service() -> PaymentIntentService:
    return service


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    """Record request count and latency for every HTTP call."""

    start = perf_counter()
    route = request.url.path
    method = request.method
    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        route_obj = request.scope.get("route")
        if route_obj is not None and getattr(route_obj, "path", None):
            route = route_obj.path
        return response
    finally:
        elapsed = max(0.0, perf_counter() - start)
        http_request_duration_seconds.labels(
            service=settings.service_name,
            route=route,
            method=method,
        ).observe(elapsed)
        http_requests_total.labels(
            service=settings.service_name,
            route=route,
            method=method,
            status_code=str(status_code),
        ).inc()


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_: Request, exc: StarletteHTTPException):
    """Keep framework errors (404, 405) in the `{message}` body shape."""

    return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)


def _parse_request(raw: bytes) -> PaymentIntentRequest:
    """Accept JSON bodies regardless of the declared content type."""

    try:
        return PaymentIntentRequest.model_validate(json.loads(raw or b"null"))
    except (ValueError, SchemaError) as exc:
        raise ValidationError("malformed request body") from exc


def _error_response(exc: Exception, error: NormalizedError) -> JSONResponse:
    if isinstance(exc, (AuthorizationError, ValidationError)):
        return JSONResponse(status_code=error.status_code, content={"message": error.message})
    return JSONResponse(
        status_code=error.status_code,
        content={"error": {"name": error.name, "message": error.message}},
    )


@app.post("/api/integrations/stripe/createPaymentIntent")
async def create_payment_intent(
    request: Request,
    service: PaymentIntentService = Depends(get_service),
    x_correlation_id: str | None = Header(default=None),
):
    """Create a Stripe payment intent for one payment block submission."""

    trace_id_ctx.set(x_correlation_id or str(uuid4()))
    payment_intent_requests_total.labels(service=settings.service_name).inc()
    with payment_intent_latency_seconds.labels(service=settings.service_name).time():
        try:
            req = _parse_request(await request.body())
            result = await service.create_payment_intent(req)
        except Exception as exc:
            error = normalize(exc)
            payment_intent_failure_total.labels(service=settings.service_name, error_kind=error.kind).inc()
            if isinstance(exc, (AuthorizationError, ValidationError)):
                logger.warning("payment_intent_rejected status=%s reason=%s", error.status_code, exc)
            elif error.status_code >= 500:
                logger.exception("payment_intent_failed status=%s name=%s", error.status_code, error.name)
            else:
                logger.warning("payment_intent_declined status=%s name=%s", error.status_code, error.name)
            return _error_response(exc, error)
    payment_intent_success_total.labels(service=settings.service_name).inc()
    return JSONResponse(content=result.model_dump(by_alias=True))


@app.get("/metrics")
def metrics():
    """Prometheus scrape endpoint."""

    return metrics_response()


@app.get("/health")
def health():
    """Container health probe endpoint."""

    return {"ok": True}
