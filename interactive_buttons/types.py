from __future__ import annotations

import re
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

ButtonType = Literal[
    "quick_reply",
    "cta_url",
    "cta_copy",
    "cta_call",
    "cta_catalog",
    "cta_reminder",
    "cta_cancel_reminder",
    "address_message",
    "send_location",
    "open_webview",
    "mpm",
    "wa_payment_transaction_details",
    "automated_greeting_message_view_catalog",
    "galaxy_message",
    "single_select",
    "review_and_pay",
    "payment_info",
]
MediaType = Literal["image", "video", "document"]
MessageFormat = Literal["legacy", "current", "custom"]

MAX_BUTTON_ID_LENGTH = 64

PHONE_NUMBER_RE = re.compile(r"^\+?[1-9]\d{1,14}$")
# shortest national significant number accepted for call buttons
MIN_PHONE_DIGITS = 7


def is_valid_phone_number(value: Any) -> bool:
    """E.164-like: optional leading +, no leading zero, 7 to 15 digits, nothing else."""
    if not isinstance(value, str) or not PHONE_NUMBER_RE.fullmatch(value):
        return False
    return len(value.lstrip("+")) >= MIN_PHONE_DIGITS


class WireModel(BaseModel):
    """Immutable model serialized with camelCase keys."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


# --- Buttons ---


class BaseButton(WireModel):
    id: str = Field(min_length=1, max_length=MAX_BUTTON_ID_LENGTH)
    title: str = Field(min_length=1)
    subtitle: str | None = None
    disabled: bool | None = None


class QuickReplyButton(BaseButton):
    type: Literal["quick_reply"] = "quick_reply"
    body: str | None = None
    response: str | None = None


class CTAUrlButton(BaseButton):
    type: Literal["cta_url"] = "cta_url"
    url: str = Field(min_length=1)


class CTACopyButton(BaseButton):
    type: Literal["cta_copy"] = "cta_copy"
    copy_text: str = Field(min_length=1)


class CTACallButton(BaseButton):
    type: Literal["cta_call"] = "cta_call"
    phone_number: str

    @field_validator("phone_number")
    @classmethod
    def _check_phone_number(cls, value: str) -> str:
        if not is_valid_phone_number(value):
            raise ValueError("phone number must be E.164 with 7 to 15 digits")
        return value


class CTACatalogButton(BaseButton):
    type: Literal["cta_catalog"] = "cta_catalog"
    catalog_link: str


class CTAReminderButton(BaseButton):
    type: Literal["cta_reminder"] = "cta_reminder"
    reminder_text: str
    date_time: str


class CTACancelReminderButton(BaseButton):
    type: Literal["cta_cancel_reminder"] = "cta_cancel_reminder"
    reminder_id: str


class AddressMessageButton(BaseButton):
    type: Literal["address_message"] = "address_message"
    address_id: str


class SendLocationButton(BaseButton):
    type: Literal["send_location"] = "send_location"
    latitude: float | None = None
    longitude: float | None = None
    address: str | None = None


class OpenWebViewButton(BaseButton):
    type: Literal["open_webview"] = "open_webview"
    url: str = Field(min_length=1)
    webview_height: Literal["compact", "tall", "full"] | None = None


class MPMButton(BaseButton):
    type: Literal["mpm"] = "mpm"
    merchant_id: str


class WAPaymentTransactionDetailsButton(BaseButton):
    type: Literal["wa_payment_transaction_details"] = "wa_payment_transaction_details"
    transaction_id: str


class AutomatedGreetingMessageViewCatalogButton(BaseButton):
    type: Literal["automated_greeting_message_view_catalog"] = (
        "automated_greeting_message_view_catalog"
    )
    catalog_id: str


class GalaxyMessageButton(BaseButton):
    type: Literal["galaxy_message"] = "galaxy_message"
    message_type: str
    payload: Any


class ButtonOption(WireModel):
    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    description: str | None = None


class SingleSelectButton(BaseButton):
    type: Literal["single_select"] = "single_select"
    options: list[ButtonOption] = Field(min_length=1)


class ReviewAndPayButton(BaseButton):
    type: Literal["review_and_pay"] = "review_and_pay"
    order_id: str
    amount: float
    currency: str


class PaymentInfoButton(BaseButton):
    type: Literal["payment_info"] = "payment_info"
    payment_id: str
    amount: float
    currency: str
    status: str


Button = Annotated[
    QuickReplyButton
    | CTAUrlButton
    | CTACopyButton
    | CTACallButton
    | CTACatalogButton
    | CTAReminderButton
    | CTACancelReminderButton
    | AddressMessageButton
    | SendLocationButton
    | OpenWebViewButton
    | MPMButton
    | WAPaymentTransactionDetailsButton
    | AutomatedGreetingMessageViewCatalogButton
    | GalaxyMessageButton
    | SingleSelectButton
    | ReviewAndPayButton
    | PaymentInfoButton,
    Field(discriminator="type"),
]

button_adapter: TypeAdapter[Any] = TypeAdapter(Button)

BUTTON_MODELS: dict[str, type[BaseButton]] = {
    "quick_reply": QuickReplyButton,
    "cta_url": CTAUrlButton,
    "cta_copy": CTACopyButton,
    "cta_call": CTACallButton,
    "cta_catalog": CTACatalogButton,
    "cta_reminder": CTAReminderButton,
    "cta_cancel_reminder": CTACancelReminderButton,
    "address_message": AddressMessageButton,
    "send_location": SendLocationButton,
    "open_webview": OpenWebViewButton,
    "mpm": MPMButton,
    "wa_payment_transaction_details": WAPaymentTransactionDetailsButton,
    "automated_greeting_message_view_catalog": AutomatedGreetingMessageViewCatalogButton,
    "galaxy_message": GalaxyMessageButton,
    "single_select": SingleSelectButton,
    "review_and_pay": ReviewAndPayButton,
    "payment_info": PaymentInfoButton,
}


def required_fields(button_type: str) -> list[str]:
    """Wire names of the fields a button variant cannot be built without."""
    model = BUTTON_MODELS.get(button_type)
    if model is None:
        return []
    return [
        info.alias or to_camel(name)
        for name, info in model.model_fields.items()
        if info.is_required()
    ]


# --- Native flow wire units ---


class NativeFlowEntry(WireModel):
    name: str
    button_params_json: str


# --- Message configuration ---


class HeaderMedia(WireModel):
    media_type: MediaType
    media_url: str
    media_caption: str | None = None


class MessageConfig(WireModel):
    body: str = Field(min_length=1)
    footer: str | None = None
    header_type: int | None = None
    header_text: str | None = None
    header_media: HeaderMedia | None = None


# --- Validation results ---


class ValidationErrorDetail(WireModel):
    path: str
    message: str
    value: Any = None
    expected: Any = None


class ValidationWarning(WireModel):
    path: str
    message: str
    suggestion: str | None = None


class ValidationResult(WireModel):
    is_valid: bool
    errors: list[ValidationErrorDetail] = Field(default_factory=list)
    warnings: list[ValidationWarning] = Field(default_factory=list)
    example: Any = None


# --- Envelope ---


class TextParam(WireModel):
    text: str


class HeaderMediaParam(WireModel):
    url: str
    caption: str = ""


class HeaderParam(WireModel):
    type: int
    text: str
    media: HeaderMediaParam | None = None


class MessageParams(WireModel):
    body: TextParam
    footer: TextParam | None = None
    header: HeaderParam | None = None


class NativeFlow(WireModel):
    buttons: list[NativeFlowEntry]
    message_params: MessageParams


class InteractiveContent(WireModel):
    native_flow: NativeFlow


class MessageEnvelope(WireModel):
    interactive: InteractiveContent
