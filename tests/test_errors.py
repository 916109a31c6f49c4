from __future__ import annotations

import pytest

from interactive_buttons.buttons.validate import ensure_valid
from interactive_buttons.errors import InteractiveValidationError, TransportUnavailableError
from interactive_buttons.types import ValidationErrorDetail, ValidationWarning


def _error() -> InteractiveValidationError:
    return InteractiveValidationError(
        "Invalid interactive message configuration",
        "send_interactive_buttons_basic",
        [
            ValidationErrorDetail(path="body", message="Body text is required", expected="string", value=None),
            ValidationErrorDetail(path="buttons[0].id", message="Bad id"),
        ],
        [ValidationWarning(path="buttons[1]", message="Ambiguous", suggestion="Set type")],
        {"body": "Hello"},
    )


def test_is_an_exception_with_message() -> None:
    error = _error()
    assert isinstance(error, Exception)
    assert str(error) == "Invalid interactive message configuration"
    with pytest.raises(InteractiveValidationError):
        raise error


def test_fields_are_read_only() -> None:
    error = _error()
    with pytest.raises(AttributeError):
        error.context = "other"  # type: ignore[misc]
    assert isinstance(error.errors, tuple)


def test_to_json() -> None:
    result = _error().to_json()
    assert result.is_valid is False
    assert [e.path for e in result.errors] == ["body", "buttons[0].id"]
    assert result.warnings[0].suggestion == "Set type"
    assert result.example == {"body": "Hello"}
    assert result.to_payload()["isValid"] is False


def test_format_detailed_sections() -> None:
    report = _error().format_detailed()
    assert report.startswith("InteractiveValidationError: Invalid interactive message configuration\n")
    assert "Context: send_interactive_buttons_basic" in report
    assert "  1. body: Body text is required" in report
    assert "     Value: null" in report
    assert '     Expected: "string"' in report
    assert "  2. buttons[0].id: Bad id" in report
    assert "Warnings:\n  1. buttons[1]: Ambiguous\n     Suggestion: Set type" in report
    assert "Example (correct format):\n```json\n{\n  \"body\": \"Hello\"\n}\n```" in report


def test_format_detailed_omits_unset_value_and_expected() -> None:
    error = InteractiveValidationError(
        "m", "c", [ValidationErrorDetail(path="p", message="bad")]
    )
    report = error.format_detailed()
    assert "Value:" not in report
    assert "Expected:" not in report
    assert "Warnings:" not in report
    assert "Example" not in report


def test_format_detailed_skips_value_of_missing_fields() -> None:
    with pytest.raises(InteractiveValidationError) as exc_info:
        ensure_valid({"body": "b"}, [{"id": "c", "type": "cta_url"}], context="send")
    report = exc_info.value.format_detailed()
    assert "  1. buttons[0].title: Button title is required" in report
    assert "Value:" not in report
    assert report.count("Expected:") == 2


def test_add_context_returns_new_error() -> None:
    original = _error()
    chained = original.add_context("send_buttons").add_context("handler")
    assert chained is not original
    assert chained.message == "Invalid interactive message configuration in send_buttons in handler"
    assert chained.context == "send_interactive_buttons_basic -> send_buttons -> handler"
    assert chained.errors == original.errors
    assert chained.example == original.example
    assert original.context == "send_interactive_buttons_basic"


def test_create_button_validation_error() -> None:
    error = InteractiveValidationError.create_button_validation_error(
        "cta_url", ["url", "phoneNumber"], ["id", "title", "phoneNumber"]
    )
    assert error.message == "Invalid cta_url button configuration"
    assert error.context == "button_validation"
    assert len(error.errors) == 1
    detail = error.errors[0]
    assert detail.path == "button.url"
    assert detail.message == "Missing required field for cta_url button"
    assert detail.expected == "url"
    assert "value" not in detail.model_fields_set
    assert error.example == {
        "type": "cta_url",
        "id": "button_id",
        "title": "Button Title",
        "url": "https://example.com",
        "phoneNumber": "+1234567890",
    }


def test_create_button_validation_error_placeholders() -> None:
    fields = ["copyText", "reminderText", "dateTime", "catalogLink", "addressId", "options", "merchantId"]
    error = InteractiveValidationError.create_button_validation_error("galaxy", fields, [])
    assert len(error.errors) == len(fields)
    assert error.example["copyText"] == "Text to copy"
    assert error.example["catalogLink"] == "catalog://product/123"
    assert error.example["addressId"] == "address_123"
    assert error.example["options"] == [{"id": "opt1", "title": "Option 1"}]
    assert "merchantId" not in error.example


def test_create_config_validation_error() -> None:
    error = InteractiveValidationError.create_config_validation_error(
        "body", "Body text is required", "string", None
    )
    assert error.message == "Invalid message configuration: body"
    assert error.context == "config_validation"
    [detail] = error.errors
    assert detail.path == "config.body"
    assert detail.value is None
    assert error.example["headerMedia"]["mediaType"] == "image"
    error.example["body"] = "changed"
    fresh = InteractiveValidationError.create_config_validation_error("body", "x", "string", None)
    assert fresh.example["body"] == "Message body text"


def test_transport_unavailable_error_lists_failures() -> None:
    error = TransportUnavailableError([("a:B", ImportError("no a")), ("c:D", AttributeError("no D"))])
    assert "a:B: no a" in str(error)
    assert "c:D: no D" in str(error)
    assert len(error.failures) == 2
    assert "no providers configured" in str(TransportUnavailableError([]))
