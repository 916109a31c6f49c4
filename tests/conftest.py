from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest

from interactive_buttons.channels.discovery import clear_resolved_providers
from interactive_buttons.config import get_package_info, get_settings
from interactive_buttons.ops.events import delivery_event_log

_SETTINGS_ENV = (
    "WHATSAPP_GATEWAY_URL",
    "WHATSAPP_GATEWAY_API_KEY",
    "WHATSAPP_GATEWAY_INSTANCE",
    "WHATSAPP_HTTP_TIMEOUT_SECONDS",
    "EPHEMERAL_EXPIRATION_SECONDS",
    "TRANSPORT_PROVIDERS",
    "OPS_EVENT_BUFFER_SIZE",
)


@pytest.fixture(autouse=True)
def _default_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in _SETTINGS_ENV:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    get_package_info.cache_clear()
    clear_resolved_providers()


@pytest.fixture(autouse=True)
def _reset_package_logger() -> Iterator[None]:
    package_logger = logging.getLogger("interactive_buttons")
    handlers = list(package_logger.handlers)
    level = package_logger.level
    yield
    delivery_event_log.clear()
    delivery_event_log.resize(500)
    package_logger.handlers[:] = handlers
    package_logger.setLevel(level)
