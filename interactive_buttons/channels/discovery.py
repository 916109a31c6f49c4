"""Ordered search over configured transport providers.

Each provider is named ``"package.module:Attribute"``. The first one that
imports and builds a transport wins; when none do, a single
``TransportUnavailableError`` lists every failure. Only the winning provider
name is remembered per candidate list; transports are built fresh each call.
"""

from __future__ import annotations

import importlib
import logging
from collections.abc import Callable, Sequence

from interactive_buttons.channels.base import BaseTransport
from interactive_buttons.config import get_settings
from interactive_buttons.errors import TransportUnavailableError

logger = logging.getLogger(__name__)

TransportFactory = Callable[[], BaseTransport]

_resolved_providers: dict[tuple[str, ...], str] = {}


def _load_provider(provider: str) -> TransportFactory:
    module_name, sep, attribute = provider.partition(":")
    if not sep or not module_name or not attribute:
        raise ValueError(f"Provider must look like 'module:attribute', got {provider!r}")
    module = importlib.import_module(module_name)
    factory = getattr(module, attribute)
    if not callable(factory):
        raise TypeError(f"{provider} is not callable")
    return factory  # type: ignore[no-any-return]


def _build(provider: str) -> BaseTransport:
    transport = _load_provider(provider)()
    if not isinstance(transport, BaseTransport):
        raise TypeError(f"{provider} built {type(transport).__name__}, not a BaseTransport")
    return transport


def clear_resolved_providers() -> None:
    _resolved_providers.clear()


def resolved_provider(candidates: Sequence[str]) -> str | None:
    return _resolved_providers.get(tuple(candidates))


def resolve_transport(candidates: Sequence[str]) -> tuple[str, BaseTransport]:
    key = tuple(candidates)
    cached = _resolved_providers.get(key)
    if cached is not None:
        try:
            return cached, _build(cached)
        except Exception as exc:
            logger.warning("Cached transport provider %s failed, searching again: %s", cached, exc)
            del _resolved_providers[key]

    failures: list[tuple[str, Exception]] = []
    for provider in key:
        try:
            transport = _build(provider)
        except Exception as exc:
            failures.append((provider, exc))
            logger.warning("Transport provider %s unavailable: %s", provider, exc)
            continue
        logger.info("Using transport provider %s", provider)
        _resolved_providers[key] = provider
        return provider, transport
    raise TransportUnavailableError(failures)


def discover_transport(candidates: Sequence[str] | None = None) -> BaseTransport:
    if candidates is None:
        candidates = get_settings().transport_provider_list()
    _provider, transport = resolve_transport(candidates)
    return transport
