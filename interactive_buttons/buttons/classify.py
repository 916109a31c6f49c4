from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from interactive_buttons.types import ButtonType

DEFAULT_BUTTON_TYPE: ButtonType = "quick_reply"

# Checked in order; the first field present decides the type.
CLASSIFICATION_RULES: tuple[tuple[str, ButtonType], ...] = (
    ("url", "cta_url"),
    ("copyText", "cta_copy"),
    ("phoneNumber", "cta_call"),
    ("catalogLink", "cta_catalog"),
    ("reminderText", "cta_reminder"),
    ("reminderId", "cta_cancel_reminder"),
    ("addressId", "address_message"),
    ("options", "single_select"),
)


def button_fields(button: Any) -> Mapping[str, Any] | None:
    """Wire-keyed view of a button-like value, or None when it has no fields."""
    if isinstance(button, BaseModel):
        return button.model_dump(by_alias=True, exclude_none=True)
    if isinstance(button, Mapping):
        return button
    return None


def get_button_type(button: Any) -> ButtonType:
    fields = button_fields(button)
    if fields is None:
        return DEFAULT_BUTTON_TYPE

    explicit = fields.get("type")
    if explicit:
        return explicit  # type: ignore[no-any-return]

    for field, button_type in CLASSIFICATION_RULES:
        if fields.get(field):
            return button_type
    return DEFAULT_BUTTON_TYPE


def matching_button_types(button: Any) -> list[ButtonType]:
    """Every type whose classification rule matches, in rule order."""
    fields = button_fields(button)
    if fields is None:
        return []
    return [button_type for field, button_type in CLASSIFICATION_RULES if fields.get(field)]
