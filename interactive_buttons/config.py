from __future__ import annotations

from functools import lru_cache
from importlib.metadata import PackageNotFoundError, metadata
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PACKAGE_NAME = "interactive-buttons"
DEFAULT_TRANSPORT_PROVIDER = "interactive_buttons.channels.whatsapp:WhatsAppGatewayTransport"


class Settings(BaseSettings):
    whatsapp_gateway_url: str = "http://localhost:8080"
    whatsapp_gateway_api_key: str | None = None
    whatsapp_gateway_instance: str = "default"
    whatsapp_http_timeout_seconds: float = 30.0

    ephemeral_expiration_seconds: int = 86400
    transport_providers: str = DEFAULT_TRANSPORT_PROVIDER

    ops_event_buffer_size: int = 500

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @field_validator("transport_providers")
    @classmethod
    def validate_transport_providers(cls, value: str) -> str:
        if not any(item.strip() for item in value.split(",")):
            raise ValueError("TRANSPORT_PROVIDERS must name at least one provider")
        return value

    def transport_provider_list(self) -> list[str]:
        return [item.strip() for item in self.transport_providers.split(",") if item.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


@lru_cache(maxsize=1)
def get_package_info() -> dict[str, Any]:
    """Installed distribution metadata, read once per process."""
    try:
        meta = metadata(PACKAGE_NAME)
    except PackageNotFoundError:
        return {"name": PACKAGE_NAME, "version": None, "description": None, "author": None}
    return {
        "name": meta["Name"],
        "version": meta["Version"],
        "description": meta.get("Summary"),
        "author": meta.get("Author") or meta.get("Author-email"),
    }
