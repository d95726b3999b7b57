"""End-to-end pipeline behavior with in-memory collaborators."""

import pytest

from chatpay.services.payment_intent.errors import AuthorizationError, ProviderError, ValidationError
from chatpay.services.payment_intent import service as service_module
from chatpay.services.payment_intent.schemas import PaymentIntentRequest
from conftest import make_request_body


def _request(**overrides) -> PaymentIntentRequest:
    return PaymentIntentRequest.model_validate(make_request_body(**overrides))


@pytest.mark.asyncio
async def test_creates_intent_with_live_keys(service, gateway):
    result = await service.create_payment_intent(_request())

    assert result.client_secret == "pi_123_secret_abc"
    assert result.public_key == "pk_live_123"
    assert result.amount_label == "10$"
    assert len(gateway.calls) == 1
    call = gateway.calls[0]
    assert (call.secret_key, call.amount, call.currency, call.receipt_email) == (
        "sk_live_123",
        1000,
        "USD",
        "buyer@example.com",
    )


@pytest.mark.asyncio
async def test_preview_uses_test_secret_key(service, gateway):
    result = await service.create_payment_intent(_request(isPreview=True))
    assert gateway.calls[0].secret_key == "sk_test_456"
    assert result.public_key == "pk_test_456"


@pytest.mark.asyncio
async def test_preview_without_test_keys_uses_live(service, gateway):
    await service.create_payment_intent(_request(isPreview=True, input_options={"credentialsId": "cred-live"}))
    assert gateway.calls[0].secret_key == "sk_live_123"


@pytest.mark.asyncio
async def test_amount_is_rounded_half_up(service, gateway):
    body = make_request_body(variables=[{"name": "Price", "value": "19.999"}])
    result = await service.create_payment_intent(PaymentIntentRequest.model_validate(body))
    assert gateway.calls[0].amount == 2000
    assert result.amount_label == "20$"


@pytest.mark.asyncio
@pytest.mark.parametrize("credentials_id", [None, ""])
async def test_missing_credentials_id_never_reaches_store(service, store, gateway, credentials_id):
    with pytest.raises(AuthorizationError):
        await service.create_payment_intent(_request(input_options={"credentialsId": credentials_id}))
    assert store.lookups == []
    assert gateway.calls == []


@pytest.mark.asyncio
async def test_unknown_credentials_is_authorization_error(service, store, gateway):
    with pytest.raises(AuthorizationError):
        await service.create_payment_intent(_request(input_options={"credentialsId": "nope"}))
    assert store.lookups == ["nope"]
    assert gateway.calls == []


@pytest.mark.asyncio
@pytest.mark.parametrize("price", ["abc", "", "ten dollars", "NaN"])
async def test_non_numeric_amount_never_calls_gateway(service, gateway, price):
    body = make_request_body(variables=[{"name": "Price", "value": price}])
    with pytest.raises(ValidationError):
        await service.create_payment_intent(PaymentIntentRequest.model_validate(body))
    assert gateway.calls == []


@pytest.mark.asyncio
async def test_empty_receipt_email_is_sent_as_absent(service, gateway):
    body = make_request_body(variables=[{"name": "Price", "value": "5"}, {"name": "Email", "value": ""}])
    await service.create_payment_intent(PaymentIntentRequest.model_validate(body))
    assert gateway.calls[0].receipt_email is None


@pytest.mark.asyncio
async def test_missing_additional_information(service, gateway):
    await service.create_payment_intent(_request(input_options={"additionalInformation": None}))
    assert gateway.calls[0].receipt_email is None


@pytest.mark.asyncio
async def test_unknown_currency_label(service):
    result = await service.create_payment_intent(_request(input_options={"currency": "CHF"}))
    assert result.amount_label == "10 CHF"


@pytest.mark.asyncio
async def test_provider_error_propagates(service, gateway):
    gateway.error = ProviderError(402, "card_error", "cvc", "declined")
    with pytest.raises(ProviderError):
        await service.create_payment_intent(_request())
    assert len(gateway.calls) == 1


@pytest.fixture
def runs(monkeypatch):
    """Record every pipeline run and the stages it passed through."""

    recorded: list = []

    class RecordingRun(service_module.PipelineRun):
        def __init__(self) -> None:
            super().__init__()
            self.history = [self.state]
            recorded.append(self)

        def advance(self, new_state: str) -> None:
            super().advance(new_state)
            self.history.append(new_state)

    monkeypatch.setattr(service_module, "PipelineRun", RecordingRun)
    return recorded


@pytest.mark.asyncio
async def test_successful_run_ends_responded(service, runs):
    await service.create_payment_intent(_request())

    assert [run.state for run in runs] == ["RESPONDED"]
    assert runs[0].history == [
        "START",
        "CREDENTIALS_RESOLVED",
        "ENVIRONMENT_SELECTED",
        "AMOUNT_VALIDATED",
        "INTENT_CREATED",
        "RESPONDED",
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides,last_stage",
    [
        ({"input_options": {"credentialsId": ""}}, "START"),
        ({"input_options": {"credentialsId": "nope"}}, "START"),
        ({"input_options": {"amount": "free"}}, "ENVIRONMENT_SELECTED"),
    ],
)
async def test_rejected_run_ends_failed(service, runs, overrides, last_stage):
    with pytest.raises((AuthorizationError, ValidationError)):
        await service.create_payment_intent(_request(**overrides))

    assert runs[0].state == "FAILED"
    assert runs[0].history[-2:] == [last_stage, "FAILED"]


@pytest.mark.asyncio
async def test_gateway_failure_ends_failed_after_amount_validation(service, gateway, runs):
    gateway.error = ProviderError(402, "card_error", "cvc", "declined")
    with pytest.raises(ProviderError):
        await service.create_payment_intent(_request())

    assert runs[0].state == "FAILED"
    assert runs[0].history[-2:] == ["AMOUNT_VALIDATED", "FAILED"]
