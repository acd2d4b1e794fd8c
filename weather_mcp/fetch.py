"""
Single upstream fetch stage used by every provider chain.

A stage either yields the decoded JSON object or ``None``. Transport errors,
HTTP error statuses, timeouts and undecodable bodies are logged here, where
they are first observed, so callers only have to stop at the first absence.
"""

import logging
from typing import Any, Dict, Mapping, Optional

import httpx

logger = logging.getLogger("weather-mcp.fetch")


async def fetch_json(
    client: httpx.AsyncClient,
    url: str,
    *,
    operation: str,
    params: Optional[Mapping[str, Any]] = None,
    failure_level: int = logging.ERROR,
) -> Optional[Dict[str, Any]]:
    """
    GET ``url`` and decode the body as a JSON object.

    Args:
        client: HTTP client, usually created with a provider base URL
        url: Absolute URL or path relative to the client's base URL
        operation: Name of the calling operation, used in log messages
        params: Optional query string parameters
        failure_level: Log level for failures; optional enrichment stages
            pass ``logging.DEBUG``

    Returns:
        The decoded JSON object, or None if the request failed or the body
        was not a JSON object
    """
    logger.debug("%s: GET %s params=%s", operation, url, params)
    try:
        resp = await client.get(url, params=params)
        resp.raise_for_status()
        data = resp.json()
    except httpx.TimeoutException:
        logger.log(failure_level, "%s: timed out fetching %s", operation, url)
        return None
    except httpx.HTTPStatusError as exc:
        logger.log(
            failure_level,
            "%s: HTTP %s from %s",
            operation,
            exc.response.status_code,
            exc.request.url,
        )
        return None
    except httpx.HTTPError:
        logger.log(failure_level, "%s: transport error fetching %s", operation, url, exc_info=True)
        return None
    except ValueError:
        logger.log(failure_level, "%s: invalid JSON from %s", operation, url, exc_info=True)
        return None

    if not isinstance(data, dict):
        logger.log(
            failure_level,
            "%s: expected a JSON object from %s, got %s",
            operation,
            url,
            type(data).__name__,
        )
        return None
    return data
