from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from interactive_buttons.config import get_settings


def _default_ephemeral_expiration() -> int:
    return get_settings().ephemeral_expiration_seconds


class DeliveryOptions(BaseModel):
    """Per-send options handed to the transport."""

    ephemeral_expiration: int = Field(default_factory=_default_ephemeral_expiration, ge=0)
    extra: dict[str, Any] = Field(default_factory=dict)


class DeliveryOutcome(BaseModel):
    """Result reported by a transport for one delivery."""

    ok: bool
    destination_id: str
    message_id: str | None = None
    error_code: str | None = None
    error_detail: str | None = None
    raw_response: dict[str, Any] | None = None
