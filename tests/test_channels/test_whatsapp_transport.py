from __future__ import annotations

from typing import Any

import httpx
import pytest

from interactive_buttons.buttons.assemble import build_message_content
from interactive_buttons.buttons.normalize import build_interactive_buttons
from interactive_buttons.channels.types import DeliveryOptions
from interactive_buttons.channels.whatsapp import WhatsAppGatewayTransport, build_binary_nodes
from interactive_buttons.config import get_settings

JID = "5511999999999@s.whatsapp.net"


def _envelope():  # type: ignore[no-untyped-def]
    entries = build_interactive_buttons([{"id": "accept", "title": "Accept"}])
    return build_message_content({"body": "Confirm?", "footer": "f"}, entries)


class FakeResponse:
    def __init__(self, status_code: int = 200, payload: Any = None) -> None:
        self.status_code = status_code
        self._payload = payload
        self.headers = {"content-type": "application/json"} if payload is not None else {}
        self.text = "error body"

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise httpx.HTTPStatusError(
                "fail", request=httpx.Request("POST", "http://x"), response=self  # type: ignore[arg-type]
            )

    def json(self) -> Any:
        return self._payload


def _fake_client(captured: dict[str, Any], response: FakeResponse | Exception) -> Any:
    class FakeClient:
        async def __aenter__(self):  # type: ignore[no-untyped-def]
            return self

        async def __aexit__(self, *args: object) -> None:
            return None

        async def post(self, url: str, **kwargs: Any) -> FakeResponse:
            captured["url"] = url
            captured["kwargs"] = kwargs
            if isinstance(response, Exception):
                raise response
            return response

    def factory(**kw: Any) -> FakeClient:
        captured["client_kwargs"] = kw
        return FakeClient()

    return factory


def test_settings_provide_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WHATSAPP_GATEWAY_URL", "http://gateway:9000/")
    monkeypatch.setenv("WHATSAPP_GATEWAY_INSTANCE", "shop")
    get_settings.cache_clear()
    transport = WhatsAppGatewayTransport()
    assert transport.api_url == "http://gateway:9000"
    assert transport.instance == "shop"
    assert transport.api_key is None
    assert transport.http_timeout_seconds == 30.0


def test_request_body_embeds_envelope_and_nodes() -> None:
    transport = WhatsAppGatewayTransport(api_url="http://test:8080", api_key="k")
    body = transport.build_request_body(
        _envelope(), JID, DeliveryOptions(ephemeral_expiration=3600, extra={"delay": 5})
    )
    assert body["number"] == JID
    assert body["delay"] == 5
    assert body["options"] == {"ephemeralExpiration": 3600}
    assert body["message"]["interactive"]["nativeFlow"]["messageParams"]["footer"] == {"text": "f"}
    assert body["additionalNodes"] == build_binary_nodes()


def test_binary_nodes_wrap_native_flow() -> None:
    [biz] = build_binary_nodes()
    assert biz["tag"] == "biz"
    interactive = biz["content"][0]
    assert interactive["attrs"]["type"] == "native_flow"
    assert interactive["content"][0]["attrs"]["name"] == "mixed"


@pytest.mark.asyncio
async def test_deliver_posts_to_instance_endpoint(monkeypatch: pytest.MonkeyPatch) -> None:
    captured: dict[str, Any] = {}
    response = FakeResponse(payload={"key": {"id": "WAMSG1"}, "status": "PENDING"})
    monkeypatch.setattr(
        "interactive_buttons.channels.whatsapp.httpx.AsyncClient", _fake_client(captured, response)
    )
    transport = WhatsAppGatewayTransport(
        api_url="http://test:8080", api_key="key123", instance="main", timeout_seconds=5.0
    )
    outcome = await transport.deliver(_envelope(), JID, DeliveryOptions())

    assert outcome.ok is True
    assert outcome.message_id == "WAMSG1"
    assert outcome.destination_id == JID
    assert captured["url"] == "http://test:8080/message/sendInteractive/main"
    assert captured["kwargs"]["headers"] == {"apikey": "key123"}
    assert captured["client_kwargs"] == {"timeout": 5.0}


@pytest.mark.asyncio
async def test_deliver_without_json_response(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "interactive_buttons.channels.whatsapp.httpx.AsyncClient", _fake_client({}, FakeResponse())
    )
    outcome = await WhatsAppGatewayTransport(api_url="http://t").deliver(_envelope(), JID, DeliveryOptions())
    assert outcome.ok is True
    assert outcome.message_id is None
    assert outcome.raw_response is None


@pytest.mark.asyncio
async def test_deliver_reports_http_error(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "interactive_buttons.channels.whatsapp.httpx.AsyncClient",
        _fake_client({}, FakeResponse(status_code=401)),
    )
    outcome = await WhatsAppGatewayTransport(api_url="http://t").deliver(_envelope(), JID, DeliveryOptions())
    assert outcome.ok is False
    assert outcome.error_code == "401"
    assert outcome.error_detail == "error body"


@pytest.mark.asyncio
async def test_deliver_reports_connection_error(monkeypatch: pytest.MonkeyPatch) -> None:
    error = httpx.ConnectError("refused", request=httpx.Request("POST", "http://t"))
    monkeypatch.setattr(
        "interactive_buttons.channels.whatsapp.httpx.AsyncClient", _fake_client({}, error)
    )
    outcome = await WhatsAppGatewayTransport(api_url="http://t").deliver(_envelope(), JID, DeliveryOptions())
    assert outcome.ok is False
    assert outcome.error_code == "request_error"
    assert "refused" in (outcome.error_detail or "")


class MalformedJsonResponse(FakeResponse):
    def __init__(self) -> None:
        super().__init__(payload={})

    def json(self) -> Any:
        raise ValueError("Expecting value: line 1 column 1 (char 0)")


@pytest.mark.asyncio
async def test_deliver_tolerates_malformed_json_after_success(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr(
        "interactive_buttons.channels.whatsapp.httpx.AsyncClient",
        _fake_client({}, MalformedJsonResponse()),
    )
    outcome = await WhatsAppGatewayTransport(api_url="http://t").deliver(_envelope(), JID, DeliveryOptions())
    assert outcome.ok is True
    assert outcome.message_id is None
    assert outcome.raw_response is None
