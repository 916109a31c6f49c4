from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from interactive_buttons.buttons.assemble import build_message_content
from interactive_buttons.buttons.normalize import build_interactive_buttons
from interactive_buttons.buttons.validate import ensure_valid
from interactive_buttons.channels.base import BaseTransport
from interactive_buttons.channels.discovery import discover_transport
from interactive_buttons.channels.types import DeliveryOptions, DeliveryOutcome
from interactive_buttons.errors import InteractiveValidationError
from interactive_buttons.ops.events import new_delivery_id, reset_delivery_id, set_delivery_id
from interactive_buttons.types import MessageConfig, MessageFormat

logger = logging.getLogger(__name__)


async def send_interactive_message(
    *,
    jid: str,
    config: MessageConfig | dict[str, Any],
    buttons: Sequence[Any],
    transport: BaseTransport | None = None,
    message_format: MessageFormat = "current",
    options: DeliveryOptions | None = None,
) -> DeliveryOutcome:
    """Lower-level send with full control and no validation.

    ``message_format="legacy"`` hands ``buttons`` to the assembler as-is, so they must
    already be native flow entries. Any other format normalizes first. When no
    transport is given one is discovered from the configured providers.
    """
    if transport is None:
        transport = discover_transport()

    entries = list(buttons) if message_format == "legacy" else build_interactive_buttons(buttons)
    envelope = build_message_content(config, entries)

    token = set_delivery_id(new_delivery_id())
    try:
        logger.info(
            "Delivering interactive message with %d button(s) via %s",
            len(entries),
            transport.name,
            extra={
                "event_type": "delivery.started",
                "ops_payload": {"destination": jid, "format": message_format, "buttons": len(entries)},
            },
        )
        outcome = await transport.deliver(envelope, jid, options or DeliveryOptions())
        logger.info(
            "Interactive message delivery finished ok=%s",
            outcome.ok,
            extra={"event_type": "delivery.finished", "ops_payload": {"ok": outcome.ok}},
        )
        return outcome
    finally:
        reset_delivery_id(token)


async def send_interactive_buttons_basic(
    *,
    jid: str,
    config: MessageConfig | dict[str, Any],
    buttons: Sequence[Any],
    transport: BaseTransport | None = None,
    options: DeliveryOptions | None = None,
) -> DeliveryOutcome:
    """Validate, then send. Raises ``InteractiveValidationError`` with every finding."""
    ensure_valid(config, buttons, context="send_interactive_buttons_basic")
    return await send_interactive_message(
        jid=jid,
        config=config,
        buttons=buttons,
        transport=transport,
        message_format="current",
        options=options,
    )


async def send_buttons(
    transport: BaseTransport | None,
    jid: str,
    buttons: Sequence[Any],
    body: str,
    footer: str | None = None,
) -> DeliveryOutcome:
    config: dict[str, Any] = {"body": body}
    if footer:
        config["footer"] = footer
    try:
        return await send_interactive_buttons_basic(
            jid=jid, config=config, buttons=buttons, transport=transport
        )
    except InteractiveValidationError as exc:
        raise exc.add_context("send_buttons") from exc
