from interactive_buttons.buttons.assemble import build_message_content
from interactive_buttons.buttons.classify import CLASSIFICATION_RULES, get_button_type
from interactive_buttons.buttons.normalize import build_interactive_buttons, normalize_button_format
from interactive_buttons.buttons.validate import (
    is_valid_button_id,
    parse_button,
    validate_interactive_message,
)

__all__ = [
    "CLASSIFICATION_RULES",
    "build_interactive_buttons",
    "build_message_content",
    "get_button_type",
    "is_valid_button_id",
    "normalize_button_format",
    "parse_button",
    "validate_interactive_message",
]
