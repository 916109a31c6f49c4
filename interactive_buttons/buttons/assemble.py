from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any

from interactive_buttons.buttons.classify import button_fields
from interactive_buttons.errors import InteractiveValidationError
from interactive_buttons.types import (
    HeaderMediaParam,
    HeaderParam,
    InteractiveContent,
    MessageEnvelope,
    MessageParams,
    NativeFlow,
    NativeFlowEntry,
    TextParam,
    ValidationErrorDetail,
)

DEFAULT_HEADER_TYPE = 1
MEDIA_HEADER_TYPES = {"image": 1, "video": 2, "document": 3}
FALLBACK_MEDIA_HEADER_TYPE = 3


def _project_entries(buttons: Iterable[Any]) -> list[NativeFlowEntry]:
    entries: list[NativeFlowEntry] = []
    problems: list[ValidationErrorDetail] = []
    for index, button in enumerate(buttons):
        fields = button_fields(button) or {}
        name = fields.get("name")
        params_json = fields.get("buttonParamsJson")
        if not isinstance(name, str) or not isinstance(params_json, str):
            problems.append(
                ValidationErrorDetail(
                    path=f"buttons[{index}]",
                    message="Button is not a native flow entry",
                    expected={"name": "string", "buttonParamsJson": "string"},
                    value=button,
                )
            )
            continue
        entries.append(NativeFlowEntry(name=name, button_params_json=params_json))

    if problems:
        raise InteractiveValidationError(
            "Buttons must be normalized before assembly",
            "build_message_content",
            problems,
        )
    return entries


def _build_header(config: Mapping[str, Any]) -> HeaderParam | None:
    header_text = config.get("headerText")
    header_media = button_fields(config.get("headerMedia"))

    if header_media:
        return HeaderParam(
            type=MEDIA_HEADER_TYPES.get(header_media.get("mediaType"), FALLBACK_MEDIA_HEADER_TYPE),
            text=header_text or "",
            media=HeaderMediaParam(
                url=header_media.get("mediaUrl"),
                caption=header_media.get("mediaCaption") or "",
            ),
        )
    if header_text:
        return HeaderParam(type=config.get("headerType") or DEFAULT_HEADER_TYPE, text=header_text)
    return None


def build_message_content(config: Any, buttons: Iterable[Any]) -> MessageEnvelope:
    """Assemble the native-flow envelope from a validated config and normalized buttons."""
    fields = button_fields(config) or {}
    footer = fields.get("footer")

    message_params = MessageParams(
        body=TextParam(text=fields.get("body")),
        footer=TextParam(text=footer) if footer else None,
        header=_build_header(fields),
    )
    return MessageEnvelope(
        interactive=InteractiveContent(
            native_flow=NativeFlow(buttons=_project_entries(buttons), message_params=message_params)
        )
    )
