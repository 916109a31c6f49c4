"""Normalize historical and upstream button shapes into native-flow entries.

Accepted input shapes:

1. Already native flow: ``{"name": "quick_reply", "buttonParamsJson": "{...}"}``
2. Simple legacy: ``{"id": "id1", "title": "My Button"}``
3. Old socket-library shape: ``{"buttonId": "id1", "buttonText": {"displayText": "My Button"}}``
4. Anything else is passed through verbatim.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from interactive_buttons.buttons.classify import button_fields, get_button_type


def _params_json(fields: Mapping[str, Any], button_id: Any, title: Any) -> str:
    params = {
        "id": button_id,
        "title": title,
        "subtitle": fields.get("subtitle") or None,
        "disabled": fields.get("disabled") or False,
    }
    return json.dumps(params, separators=(",", ":"), ensure_ascii=False)


def _display_text(button_text: Any) -> Any:
    if isinstance(button_text, Mapping):
        return button_text.get("displayText") or button_text
    return button_text


def normalize_button(button: Any) -> Any:
    fields = button_fields(button)
    if fields is None:
        return button

    if fields.get("name") and fields.get("buttonParamsJson"):
        return button

    if fields.get("id") and fields.get("title"):
        return {
            "name": get_button_type(fields),
            "buttonParamsJson": _params_json(fields, fields["id"], fields["title"]),
        }

    if fields.get("buttonId") and fields.get("buttonText"):
        title = _display_text(fields["buttonText"])
        return {
            "name": get_button_type(fields),
            "buttonParamsJson": _params_json(fields, fields["buttonId"], title),
        }

    return button


def build_interactive_buttons(buttons: Iterable[Any] | None = None) -> list[Any]:
    """Map raw buttons to ``{name, buttonParamsJson}`` entries, one for one."""
    return [normalize_button(button) for button in buttons or ()]


normalize_button_format = build_interactive_buttons
