from interactive_buttons.buttons import (
    CLASSIFICATION_RULES,
    build_interactive_buttons,
    build_message_content,
    get_button_type,
    is_valid_button_id,
    normalize_button_format,
    parse_button,
    validate_interactive_message,
)
from interactive_buttons.channels import (
    BaseTransport,
    DeliveryOptions,
    DeliveryOutcome,
    WhatsAppGatewayTransport,
    discover_transport,
)
from interactive_buttons.config import get_package_info
from interactive_buttons.errors import InteractiveValidationError, TransportUnavailableError
from interactive_buttons.ops.events import configure_ops_event_logging, recent_delivery_events
from interactive_buttons.send import (
    send_buttons,
    send_interactive_buttons_basic,
    send_interactive_message,
)
from interactive_buttons.types import (
    Button,
    ButtonType,
    HeaderMedia,
    MessageConfig,
    MessageEnvelope,
    NativeFlowEntry,
    ValidationErrorDetail,
    ValidationResult,
    ValidationWarning,
)

get_info = get_package_info

__all__ = [
    "CLASSIFICATION_RULES",
    "BaseTransport",
    "Button",
    "ButtonType",
    "DeliveryOptions",
    "DeliveryOutcome",
    "HeaderMedia",
    "InteractiveValidationError",
    "MessageConfig",
    "MessageEnvelope",
    "NativeFlowEntry",
    "TransportUnavailableError",
    "ValidationErrorDetail",
    "ValidationResult",
    "ValidationWarning",
    "WhatsAppGatewayTransport",
    "build_interactive_buttons",
    "build_message_content",
    "configure_ops_event_logging",
    "discover_transport",
    "get_button_type",
    "get_info",
    "get_package_info",
    "is_valid_button_id",
    "normalize_button_format",
    "parse_button",
    "recent_delivery_events",
    "send_buttons",
    "send_interactive_buttons_basic",
    "send_interactive_message",
    "validate_interactive_message",
]
