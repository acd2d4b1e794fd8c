"""
HTTP client factories for the three upstream providers.

Each tool invocation opens its own clients, so nothing is shared between
concurrent requests. ``transport`` lets tests substitute a mock transport.
"""

from typing import Optional

import httpx

from .config import Settings, get_settings


def _client(
    base_url: str,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    headers: Optional[dict] = None,
) -> httpx.AsyncClient:
    return httpx.AsyncClient(
        base_url=base_url,
        headers=headers,
        timeout=settings.http_timeout,
        transport=transport,
    )


def noaa_client(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    settings = settings or get_settings()
    headers = {
        "User-Agent": settings.user_agent,
        "Accept": "application/geo+json",
    }
    return _client(settings.noaa_base_url, settings, transport, headers)


def marine_client(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    settings = settings or get_settings()
    return _client(settings.marine_base_url, settings, transport)


def geocoding_client(
    settings: Optional[Settings] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    settings = settings or get_settings()
    return _client(settings.geocoding_base_url, settings, transport)
