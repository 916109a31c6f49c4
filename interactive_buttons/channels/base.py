from __future__ import annotations

from abc import ABC, abstractmethod

from interactive_buttons.channels.types import DeliveryOptions, DeliveryOutcome
from interactive_buttons.types import MessageEnvelope


class BaseTransport(ABC):
    """Abstract delivery mechanism for assembled interactive envelopes."""

    name: str = "transport"

    @abstractmethod
    async def deliver(
        self,
        envelope: MessageEnvelope,
        destination_id: str,
        options: DeliveryOptions,
    ) -> DeliveryOutcome:
        """Deliver one envelope to ``destination_id``.

        Connection handling and retries belong to the implementation; callers
        receive the outcome (or the exception) untouched."""
        ...

    async def aclose(self) -> None:
        """Release any held connections. Stateless transports need nothing."""
        return None
