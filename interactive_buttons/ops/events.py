"""Recent delivery activity captured from the package's own log records.

Call ``configure_ops_event_logging()`` once at startup to attach the handler to
the ``interactive_buttons`` logger, then read back what it captured with
``recent_delivery_events()``. Each send runs under its own delivery id, so the
events of one message can be pulled out together. Destinations and credentials
are redacted before anything is stored.
"""

from __future__ import annotations

import logging
import re
from collections import deque
from contextvars import ContextVar, Token
from datetime import UTC, datetime
from threading import Lock
from typing import Any, Literal, TypedDict
from uuid import uuid4

from interactive_buttons.config import get_settings

PACKAGE_LOGGER = "interactive_buttons"

EventLevel = Literal["info", "warning", "error"]

JID_RE = re.compile(r"\b\d{5,}(?:[:.]\d+)?@(?:s\.whatsapp\.net|g\.us|c\.us|lid)\b")
PHONE_RE = re.compile(r"\+?\b[1-9]\d{7,14}\b")
SENSITIVE_KEYWORDS = ("jid", "destination", "number", "phone", "apikey", "api_key", "authorization", "token")
REDACTED = "[REDACTED]"

_delivery_id_ctx: ContextVar[str | None] = ContextVar("delivery_id", default=None)


class DeliveryEvent(TypedDict):
    timestamp: str
    level: EventLevel
    logger: str
    event_type: str
    message: str
    delivery_id: str | None
    payload: dict[str, Any]


def redact_text(value: str) -> str:
    return PHONE_RE.sub(REDACTED, JID_RE.sub(REDACTED, value))


def sanitize_value(value: Any, key_hint: str | None = None) -> Any:
    if key_hint and any(keyword in key_hint.lower() for keyword in SENSITIVE_KEYWORDS):
        return REDACTED
    if isinstance(value, str):
        return redact_text(value)
    if isinstance(value, dict):
        return {key: sanitize_value(nested, str(key)) for key, nested in value.items()}
    if isinstance(value, (list, tuple)):
        return [sanitize_value(item) for item in value]
    return value


def get_delivery_id() -> str | None:
    return _delivery_id_ctx.get()


def set_delivery_id(delivery_id: str) -> Token[str | None]:
    return _delivery_id_ctx.set(delivery_id)


def reset_delivery_id(token: Token[str | None]) -> None:
    _delivery_id_ctx.reset(token)


def new_delivery_id() -> str:
    return uuid4().hex


class DeliveryEventLog:
    """Bounded, thread-safe log of the most recent delivery events."""

    def __init__(self, max_size: int = 500) -> None:
        self._events: deque[DeliveryEvent] = deque(maxlen=max_size)
        self._lock = Lock()

    @property
    def max_size(self) -> int | None:
        return self._events.maxlen

    def resize(self, max_size: int) -> None:
        with self._lock:
            self._events = deque(self._events, maxlen=max_size)

    def clear(self) -> None:
        with self._lock:
            self._events.clear()

    def append(self, event: DeliveryEvent) -> None:
        with self._lock:
            self._events.append(event)

    def snapshot(self, *, limit: int, delivery_id: str | None = None) -> list[DeliveryEvent]:
        """Newest first, optionally only the events of one delivery."""
        with self._lock:
            items = list(self._events)
        if delivery_id is not None:
            items = [item for item in items if item["delivery_id"] == delivery_id]
        return items[::-1][:limit]


delivery_event_log = DeliveryEventLog()


def _event_level(levelno: int) -> EventLevel:
    if levelno >= logging.ERROR:
        return "error"
    if levelno >= logging.WARNING:
        return "warning"
    return "info"


class DeliveryEventHandler(logging.Handler):
    def emit(self, record: logging.LogRecord) -> None:
        payload = sanitize_value(getattr(record, "ops_payload", {}))
        if not isinstance(payload, dict):
            payload = {"value": payload}

        delivery_event_log.append(
            {
                "timestamp": datetime.now(UTC).isoformat(timespec="milliseconds").replace("+00:00", "Z"),
                "level": _event_level(record.levelno),
                "logger": record.name,
                "event_type": str(getattr(record, "event_type", record.name)),
                "message": redact_text(record.getMessage()),
                "delivery_id": get_delivery_id(),
                "payload": payload,
            }
        )


def configure_ops_event_logging(max_size: int | None = None) -> None:
    delivery_event_log.resize(max_size if max_size is not None else get_settings().ops_event_buffer_size)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if package_logger.level == logging.NOTSET:
        package_logger.setLevel(logging.INFO)
    if not any(isinstance(handler, DeliveryEventHandler) for handler in package_logger.handlers):
        package_logger.addHandler(DeliveryEventHandler())


def recent_delivery_events(limit: int = 50, *, delivery_id: str | None = None) -> list[DeliveryEvent]:
    return delivery_event_log.snapshot(limit=limit, delivery_id=delivery_id)
