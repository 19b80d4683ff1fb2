from __future__ import annotations

"""Async HTTP client util for the rate API.

Single attempt GET returning decoded JSON. Failures are split into the two
kinds the screen distinguishes: NetworkError (timeout, connection, non-2xx)
and DecodeError (body is not JSON).
"""
import logging
from typing import Any, Dict, Mapping, Optional

import httpx

from exchange.core.errors import DecodeError, NetworkError

logger = logging.getLogger("exchange.http")


async def get_json(
    url: str,
    *,
    params: Optional[Mapping[str, str]] = None,
    headers: Optional[Mapping[str, str]] = None,
    timeout: float = 5.0,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict[str, Any]:
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            resp = await client.get(url, params=params, headers=headers)
            resp.raise_for_status()
    except httpx.TimeoutException as e:
        raise NetworkError(f"Timed out after {timeout}s fetching {url}") from e
    except httpx.HTTPStatusError as e:
        raise NetworkError(f"HTTP {e.response.status_code} for {url}") from e
    except httpx.RequestError as e:
        raise NetworkError(f"Failed to reach {url}: {e}") from e

    try:
        data = resp.json()
    except ValueError as e:
        raise DecodeError(f"Response from {url} is not JSON") from e
    if not isinstance(data, dict):
        raise DecodeError(f"Response from {url} is not a JSON object")
    logger.debug("fetched %s", url, extra={"status": resp.status_code})
    return data
