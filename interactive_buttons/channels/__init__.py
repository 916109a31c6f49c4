from interactive_buttons.channels.base import BaseTransport
from interactive_buttons.channels.discovery import discover_transport
from interactive_buttons.channels.types import DeliveryOptions, DeliveryOutcome
from interactive_buttons.channels.whatsapp import WhatsAppGatewayTransport

__all__ = [
    "BaseTransport",
    "DeliveryOptions",
    "DeliveryOutcome",
    "WhatsAppGatewayTransport",
    "discover_transport",
]
