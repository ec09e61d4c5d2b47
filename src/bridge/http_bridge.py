"""
Shared HTTP plumbing for bridge adapters.

Wraps one httpx.AsyncClient per adapter and converts every transport failure
into a BridgeError so nothing from httpx leaks past the adapter boundary.
"""

from __future__ import annotations

from typing import Any, Dict, Optional

import httpx

from bridge.errors import BridgeNotFoundError, BridgeUnreachableError
from utils.logger import get_logger, LogCategory

log = get_logger().for_category(LogCategory.BRIDGE)

DEFAULT_REQUEST_TIMEOUT = 5.0


class HttpBridgeAdapter:
    """
    Base class for HTTP bridge adapters.

    Subclasses provide the base URL and headers, then call _request() which
    returns decoded JSON or raises:
    - BridgeUnreachableError: timeout, connection error, 5xx/4xx, non-JSON body
    - BridgeNotFoundError: HTTP 404
    """

    def __init__(
        self,
        base_url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        verify: bool = True,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url
        self._client = httpx.AsyncClient(
            base_url=base_url,
            headers=headers or {},
            timeout=timeout,
            verify=verify,
            transport=transport,
        )

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        payload: Optional[Dict[str, Any]] = None,
    ) -> Any:
        log.debug("Bridge request", operation=operation, method=method, path=path, payload=payload)

        try:
            response = await self._client.request(method, path, json=payload)
        except httpx.TimeoutException as e:
            raise BridgeUnreachableError(operation, f"timed out ({type(e).__name__})") from e
        except httpx.HTTPError as e:
            raise BridgeUnreachableError(operation, f"transport error: {e}") from e

        if response.status_code == 404:
            raise BridgeNotFoundError(operation, f"{path} not found", details={"status": 404})
        if response.is_error:
            raise BridgeUnreachableError(
                operation,
                f"HTTP {response.status_code}",
                details={"status": response.status_code, "body": response.text[:200]},
            )

        try:
            return response.json()
        except ValueError as e:
            raise BridgeUnreachableError(operation, "malformed JSON response") from e

    async def close(self) -> None:
        await self._client.aclose()
