from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from interactive_buttons.buttons.classify import button_fields, get_button_type, matching_button_types
from interactive_buttons.errors import InteractiveValidationError
from interactive_buttons.types import (
    BUTTON_MODELS,
    MAX_BUTTON_ID_LENGTH,
    BaseButton,
    ValidationErrorDetail,
    ValidationResult,
    ValidationWarning,
    button_adapter,
    is_valid_phone_number,
    required_fields,
)

logger = logging.getLogger(__name__)


def is_valid_button_id(value: Any) -> bool:
    return isinstance(value, str) and 0 < len(value) <= MAX_BUTTON_ID_LENGTH


def _is_non_empty_string(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _observed(fields: Mapping[str, Any], key: str) -> dict[str, Any]:
    # absent keys leave ``value`` unset so reports omit it
    return {"value": fields[key]} if key in fields else {}


def _validate_type_specific(
    fields: Mapping[str, Any], index: int, errors: list[ValidationErrorDetail]
) -> None:
    button_type = get_button_type(fields)
    if button_type == "cta_url":
        url = fields.get("url")
        if not _is_non_empty_string(url):
            errors.append(
                ValidationErrorDetail(
                    path=f"buttons[{index}].url",
                    message="URL button requires a valid URL string",
                    expected="string (URL format)",
                    **_observed(fields, "url"),
                )
            )
    elif button_type == "cta_call":
        phone_number = fields.get("phoneNumber")
        if not is_valid_phone_number(phone_number):
            errors.append(
                ValidationErrorDetail(
                    path=f"buttons[{index}].phoneNumber",
                    message="Call button requires a valid phone number",
                    expected="string (E.164 format)",
                    **_observed(fields, "phoneNumber"),
                )
            )
    elif button_type == "cta_copy":
        copy_text = fields.get("copyText")
        if not _is_non_empty_string(copy_text):
            errors.append(
                ValidationErrorDetail(
                    path=f"buttons[{index}].copyText",
                    message="Copy button requires copyText string",
                    expected="string",
                    **_observed(fields, "copyText"),
                )
            )


def _validate_button(
    button: Any,
    index: int,
    seen_ids: set[str],
    errors: list[ValidationErrorDetail],
    warnings: list[ValidationWarning],
) -> None:
    fields = button_fields(button) or {}

    button_id = fields.get("id")
    if not is_valid_button_id(button_id):
        errors.append(
            ValidationErrorDetail(
                path=f"buttons[{index}].id",
                message=f"Button ID must be a non-empty string (max {MAX_BUTTON_ID_LENGTH} chars)",
                expected=f"string (1-{MAX_BUTTON_ID_LENGTH} chars)",
                **_observed(fields, "id"),
            )
        )
    elif button_id in seen_ids:
        errors.append(
            ValidationErrorDetail(
                path=f"buttons[{index}].id",
                message="Duplicate button ID",
                expected="unique string within the message",
                value=button_id,
            )
        )
    else:
        seen_ids.add(button_id)

    title = fields.get("title")
    if not _is_non_empty_string(title):
        errors.append(
            ValidationErrorDetail(
                path=f"buttons[{index}].title",
                message="Button title is required and must be a string",
                expected="string",
                **_observed(fields, "title"),
            )
        )

    _validate_type_specific(fields, index, errors)

    if not fields.get("type"):
        candidates = matching_button_types(fields)
        if len(candidates) > 1:
            warnings.append(
                ValidationWarning(
                    path=f"buttons[{index}]",
                    message=(
                        f"Button has fields for several types ({', '.join(candidates)}); "
                        f"treating it as {candidates[0]}"
                    ),
                    suggestion="Set an explicit 'type' on the button",
                )
            )


def validate_interactive_message(config: Any, buttons: Any) -> ValidationResult:
    """Check a message configuration and its buttons, collecting every problem.

    Never raises; callers decide whether to proceed from ``is_valid``.
    """
    errors: list[ValidationErrorDetail] = []
    warnings: list[ValidationWarning] = []

    config_fields = button_fields(config) or {}
    body = config_fields.get("body")
    if not _is_non_empty_string(body):
        errors.append(
            ValidationErrorDetail(
                path="body",
                message="Body text is required and must be a string",
                expected="string",
                **_observed(config_fields, "body"),
            )
        )

    is_sequence = isinstance(buttons, Sequence) and not isinstance(buttons, (str, bytes))
    if not is_sequence or len(buttons) == 0:
        errors.append(
            ValidationErrorDetail(
                path="buttons",
                message="At least one button is required",
                expected="array with minimum 1 item",
                value=buttons,
            )
        )

    if is_sequence:
        seen_ids: set[str] = set()
        for index, button in enumerate(buttons):
            _validate_button(button, index, seen_ids, errors, warnings)

    return ValidationResult(is_valid=not errors, errors=errors, warnings=warnings)


def _pydantic_details(exc: PydanticValidationError) -> list[ValidationErrorDetail]:
    details: list[ValidationErrorDetail] = []
    for item in exc.errors():
        # the first location element is the discriminator tag
        loc = [str(part) for part in item["loc"][1:]]
        details.append(
            ValidationErrorDetail(
                path=".".join(["button", *loc]),
                message=item["msg"],
                value=item.get("input"),
            )
        )
    return details


def parse_button(data: Any) -> BaseButton:
    """Build the tagged button variant for ``data``, enforcing its required fields."""
    if isinstance(data, BaseButton):
        return data

    fields = dict(button_fields(data) or {})
    button_type = get_button_type(fields)
    if not isinstance(button_type, str) or button_type not in BUTTON_MODELS:
        raise InteractiveValidationError(
            f"Unknown button type: {button_type}",
            "button_validation",
            [
                ValidationErrorDetail(
                    path="button.type",
                    message="Unsupported button type",
                    expected=sorted(BUTTON_MODELS),
                    value=button_type,
                )
            ],
        )

    try:
        return button_adapter.validate_python({**fields, "type": button_type})  # type: ignore[no-any-return]
    except PydanticValidationError as exc:
        provided = [key for key, value in fields.items() if value not in (None, "")]
        error = InteractiveValidationError.create_button_validation_error(
            button_type, required_fields(button_type), provided
        )
        if not error.errors:
            error = InteractiveValidationError(
                error.message, error.context, _pydantic_details(exc), [], error.example
            )
        logger.debug("Rejected %s button: %s", button_type, exc)
        raise error from exc


def ensure_valid(config: Any, buttons: Any, *, context: str) -> ValidationResult:
    """Validate and raise a single error carrying every finding on failure."""
    result = validate_interactive_message(config, buttons)
    if not result.is_valid:
        logger.warning(
            "Interactive message rejected in %s with %d error(s)", context, len(result.errors)
        )
        raise InteractiveValidationError.from_result(
            result, "Invalid interactive message configuration", context
        )
    return result
