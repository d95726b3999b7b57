"""API request/response schemas for the payment-intent endpoint.

Field aliases keep the camelCase wire format used by the chatbot viewer.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class CamelModel(BaseModel):
    """Base model accepting both alias and field names."""

    model_config = ConfigDict(populate_by_name=True)


class AdditionalInformation(CamelModel):
    """Optional customer details configured on the payment block."""

    name: str | None = None
    email: str | None = None
    phone_number: str | None = Field(default=None, alias="phoneNumber")


class PaymentInputOptions(CamelModel):
    """Payment block configuration authored in the chatbot builder."""

    credentials_id: str | None = Field(default=None, alias="credentialsId")
    amount: str | None = None
    currency: str = "USD"
    additional_information: AdditionalInformation | None = Field(default=None, alias="additionalInformation")


class Variable(CamelModel):
    """One runtime variable binding from the chat session."""

    id: str | None = None
    name: str
    value: Any = None


class PaymentIntentRequest(CamelModel):
    """Body accepted by `POST /api/integrations/stripe/createPaymentIntent`."""

    input_options: PaymentInputOptions = Field(alias="inputOptions")
    is_preview: bool = Field(default=False, alias="isPreview")
    variables: list[Variable] = Field(default_factory=list)


class PaymentIntentResponse(CamelModel):
    """Everything the client needs to confirm the payment."""

    client_secret: str = Field(alias="clientSecret")
    public_key: str = Field(alias="publicKey")
    amount_label: str = Field(alias="amountLabel")


class StripeEnvironmentKeys(CamelModel):
    """Secret/public key pair for one Stripe environment."""

    secret_key: str | None = Field(default=None, alias="secretKey")
    public_key: str | None = Field(default=None, alias="publicKey")


class StripeCredentialsData(CamelModel):
    """Decrypted Stripe credential payload with live and test environments."""

    live: StripeEnvironmentKeys | None = None
    test: StripeEnvironmentKeys | None = None
