from __future__ import annotations

import logging
from typing import Any

import httpx

from interactive_buttons.channels.base import BaseTransport
from interactive_buttons.channels.types import DeliveryOptions, DeliveryOutcome
from interactive_buttons.config import get_settings
from interactive_buttons.types import MessageEnvelope

logger = logging.getLogger(__name__)


def build_binary_nodes() -> list[dict[str, Any]]:
    """Protocol nodes that make the remote client render native-flow buttons."""
    return [
        {
            "tag": "biz",
            "attrs": {},
            "content": [
                {
                    "tag": "interactive",
                    "attrs": {"type": "native_flow", "v": "1"},
                    "content": [{"tag": "native_flow", "attrs": {"v": "9", "name": "mixed"}}],
                }
            ],
        }
    ]


class WhatsAppGatewayTransport(BaseTransport):
    name = "whatsapp_gateway"

    def __init__(
        self,
        api_url: str | None = None,
        api_key: str | None = None,
        instance: str | None = None,
        timeout_seconds: float | None = None,
    ) -> None:
        settings = get_settings()
        self.api_url = (api_url or settings.whatsapp_gateway_url).rstrip("/")
        self.api_key = api_key or settings.whatsapp_gateway_api_key
        self.instance = instance or settings.whatsapp_gateway_instance
        self.http_timeout_seconds = timeout_seconds or settings.whatsapp_http_timeout_seconds

    def build_request_body(
        self, envelope: MessageEnvelope, destination_id: str, options: DeliveryOptions
    ) -> dict[str, Any]:
        return {
            **options.extra,
            "number": destination_id,
            "message": envelope.to_payload(),
            "additionalNodes": build_binary_nodes(),
            "options": {"ephemeralExpiration": options.ephemeral_expiration},
        }

    async def deliver(
        self,
        envelope: MessageEnvelope,
        destination_id: str,
        options: DeliveryOptions,
    ) -> DeliveryOutcome:
        url = f"{self.api_url}/message/sendInteractive/{self.instance}"
        headers = {"apikey": self.api_key} if self.api_key else {}
        body = self.build_request_body(envelope, destination_id, options)
        try:
            async with httpx.AsyncClient(timeout=self.http_timeout_seconds) as client:
                response = await client.post(url, headers=headers, json=body)
                response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            logger.exception(
                "Gateway rejected interactive message",
                extra={"event_type": "delivery.rejected", "ops_payload": {"destination": destination_id}},
            )
            return DeliveryOutcome(
                ok=False,
                destination_id=destination_id,
                error_code=str(exc.response.status_code),
                error_detail=exc.response.text,
            )
        except httpx.RequestError as exc:
            logger.exception(
                "Failed to reach gateway",
                extra={"event_type": "delivery.unreachable", "ops_payload": {"destination": destination_id}},
            )
            return DeliveryOutcome(
                ok=False,
                destination_id=destination_id,
                error_code="request_error",
                error_detail=str(exc),
            )

        payload = _json_or_none(response)
        key = (payload or {}).get("key") or {}
        return DeliveryOutcome(
            ok=True,
            destination_id=destination_id,
            message_id=key.get("id") if isinstance(key, dict) else None,
            raw_response=payload,
        )


def _json_or_none(response: httpx.Response) -> dict[str, Any] | None:
    if "application/json" not in response.headers.get("content-type", ""):
        return None
    try:
        data = response.json()
    except ValueError:
        logger.warning("Gateway returned malformed JSON for a delivered message")
        return None
    return data if isinstance(data, dict) else None
