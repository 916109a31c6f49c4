from __future__ import annotations

import copy
import json
from collections.abc import Iterable, Sequence
from typing import Any

from interactive_buttons.types import ValidationErrorDetail, ValidationResult, ValidationWarning

_FIELD_PLACEHOLDERS: dict[str, Any] = {
    "url": "https://example.com",
    "phoneNumber": "+1234567890",
    "copyText": "Text to copy",
    "reminderText": "Reminder message",
    "dateTime": "2024-01-01T00:00:00Z",
    "catalogLink": "catalog://product/123",
    "addressId": "address_123",
    "options": [{"id": "opt1", "title": "Option 1"}],
}

_CONFIG_EXAMPLE: dict[str, Any] = {
    "body": "Message body text",
    "footer": "Optional footer",
    "headerType": 1,
    "headerText": "Optional header",
    "headerMedia": {
        "mediaType": "image",
        "mediaUrl": "https://example.com/image.jpg",
        "mediaCaption": "Optional caption",
    },
}


def _dump(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=str)


class InteractiveValidationError(Exception):
    """A failed validation carrying every finding plus an optional corrective example.

    Instances are not mutated after construction; ``add_context`` returns a new
    error so call sites can stack context without losing the original detail.
    """

    name = "InteractiveValidationError"

    def __init__(
        self,
        message: str,
        context: str,
        errors: Iterable[ValidationErrorDetail] = (),
        warnings: Iterable[ValidationWarning] = (),
        example: Any = None,
    ) -> None:
        super().__init__(message)
        self._message = message
        self._context = context
        self._errors = tuple(errors)
        self._warnings = tuple(warnings)
        self._example = example

    @property
    def message(self) -> str:
        return self._message

    @property
    def context(self) -> str:
        return self._context

    @property
    def errors(self) -> tuple[ValidationErrorDetail, ...]:
        return self._errors

    @property
    def warnings(self) -> tuple[ValidationWarning, ...]:
        return self._warnings

    @property
    def example(self) -> Any:
        return self._example

    def __repr__(self) -> str:
        return (
            f"{self.name}(message={self._message!r}, context={self._context!r}, "
            f"errors={len(self._errors)}, warnings={len(self._warnings)})"
        )

    def to_json(self) -> ValidationResult:
        return ValidationResult(
            is_valid=False,
            errors=list(self._errors),
            warnings=list(self._warnings),
            example=self._example,
        )

    def format_detailed(self) -> str:
        lines = [f"{self.name}: {self._message}", f"Context: {self._context}", ""]

        if self._errors:
            lines.append("Errors:")
            for index, error in enumerate(self._errors, 1):
                lines.append(f"  {index}. {error.path}: {error.message}")
                if "value" in error.model_fields_set:
                    lines.append(f"     Value: {_dump(error.value)}")
                if "expected" in error.model_fields_set:
                    lines.append(f"     Expected: {_dump(error.expected)}")
            lines.append("")

        if self._warnings:
            lines.append("Warnings:")
            for index, warning in enumerate(self._warnings, 1):
                lines.append(f"  {index}. {warning.path}: {warning.message}")
                if warning.suggestion:
                    lines.append(f"     Suggestion: {warning.suggestion}")
            lines.append("")

        if self._example:
            lines.append("Example (correct format):")
            lines.append("```json")
            lines.append(json.dumps(self._example, indent=2, ensure_ascii=False, default=str))
            lines.append("```")
            lines.append("")

        return "\n".join(lines)

    def add_context(self, context: str) -> InteractiveValidationError:
        return InteractiveValidationError(
            f"{self._message} in {context}",
            f"{self._context} -> {context}",
            self._errors,
            self._warnings,
            self._example,
        )

    @classmethod
    def from_result(
        cls, result: ValidationResult, message: str, context: str
    ) -> InteractiveValidationError:
        return cls(message, context, result.errors, result.warnings, result.example)

    @classmethod
    def create_button_validation_error(
        cls,
        button_type: str,
        required_fields: Sequence[str],
        provided_fields: Sequence[str],
    ) -> InteractiveValidationError:
        provided = set(provided_fields)
        errors = [
            ValidationErrorDetail(
                path=f"button.{field}",
                message=f"Missing required field for {button_type} button",
                expected=field,
            )
            for field in required_fields
            if field not in provided
        ]

        example: dict[str, Any] = {"type": button_type, "id": "button_id", "title": "Button Title"}
        for field in required_fields:
            if field in _FIELD_PLACEHOLDERS:
                example[field] = copy.deepcopy(_FIELD_PLACEHOLDERS[field])

        return cls(
            f"Invalid {button_type} button configuration",
            "button_validation",
            errors,
            [],
            example,
        )

    @classmethod
    def create_config_validation_error(
        cls, field: str, issue: str, expected: Any, actual: Any
    ) -> InteractiveValidationError:
        errors = [
            ValidationErrorDetail(path=f"config.{field}", message=issue, expected=expected, value=actual)
        ]
        return cls(
            f"Invalid message configuration: {field}",
            "config_validation",
            errors,
            [],
            copy.deepcopy(_CONFIG_EXAMPLE),
        )


class TransportUnavailableError(RuntimeError):
    """No configured transport provider could be resolved."""

    def __init__(self, failures: Sequence[tuple[str, Exception]]) -> None:
        self.failures = list(failures)
        if self.failures:
            detail = "; ".join(f"{name}: {exc}" for name, exc in self.failures)
        else:
            detail = "no providers configured"
        super().__init__(f"No transport provider available ({detail})")
