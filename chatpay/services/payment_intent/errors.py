"""Error taxonomy for the payment-intent pipeline and its normalization.

Authorization and validation failures are raised before the gateway call;
`ProviderError` is raised by the gateway client when Stripe rejects a
request. Anything else is treated as internal.
"""

from dataclasses import dataclass

from chatpay.common.config import settings


class PaymentError(Exception):
    """Base class for failures the pipeline classifies explicitly."""


class AuthorizationError(PaymentError):
    """Missing credentials id, unknown record, or unusable keys."""


class ValidationError(PaymentError):
    """The payment block resolved to an unusable amount."""


class ProviderError(PaymentError):
    """Structured rejection returned by the payment gateway."""

    def __init__(
        self,
        status_code: int | None,
        error_type: str | None,
        param: str | None,
        message: str | None,
    ) -> None:
        super().__init__(message or error_type or "provider error")
        self.status_code = status_code
        self.error_type = error_type
        self.param = param
        self.message = message


@dataclass(frozen=True)
class NormalizedError:
    """Uniform failure payload returned to callers."""

    status_code: int
    name: str
    message: str

    @property
    def kind(self) -> str:
        # Low-cardinality label for metrics.
        return self.name.split(" ", 1)[0]


INTERNAL_ERROR_MESSAGE = "Internal Server Error"


def normalize(exc: Exception, expose_internal: bool | None = None) -> NormalizedError:
    """Map any pipeline failure onto `{status_code, name, message}`."""

    if isinstance(exc, ProviderError):
        name = " ".join(part for part in (exc.error_type, exc.param) if part)
        return NormalizedError(
            status_code=exc.status_code or 500,
            name=name or "provider_error",
            message=exc.message or "",
        )
    if isinstance(exc, AuthorizationError):
        return NormalizedError(status_code=403, name="forbidden", message="Forbidden")
    if isinstance(exc, ValidationError):
        return NormalizedError(status_code=400, name="bad_request", message="Bad Request")

    if expose_internal is None:
        expose_internal = settings.expose_internal_errors
    message = str(exc) if expose_internal else INTERNAL_ERROR_MESSAGE
    return NormalizedError(status_code=500, name="internal", message=message)
