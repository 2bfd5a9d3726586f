# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_synthesis

"""
HTTP transport module.

Sends built requests with httpx under a hard timeout and classifies every
outcome into either a parsed JSON body or a `SourceSyncError`.
"""

import asyncio
from typing import Any, Awaitable, Callable, Dict, Optional

import httpx

from sourcesync_mcp.exceptions import ApiError, RequestFailedError, RequestTimeoutError, status_label
from sourcesync_mcp.interfaces import Transport
from sourcesync_mcp.models import BuiltRequest
from sourcesync_mcp.utils.http import create_http_client
from sourcesync_mcp.utils.logger import logger


class HttpTransport(Transport):
    """Concrete transport using httpx.AsyncClient.

    Without an injected client, every call opens and closes its own client so
    calls never share connection state.
    """

    def __init__(self, http_client: Optional[httpx.AsyncClient] = None):
        """Initializes the HttpTransport.

        Args:
            http_client: Optional client to reuse for every call. The transport
                does not close an injected client.
        """
        self.http_client = http_client

    async def send(self, request: BuiltRequest, timeout_ms: int) -> Any:
        logger.debug(f"{request.method.value} {request.url}")
        response = await self._exchange(
            lambda client: client.request(
                request.method.value,
                request.url,
                headers=request.headers,
                content=request.content,
                data=request.data,
                files=request.files,
            ),
            timeout_ms,
        )
        return self._parse(response)

    async def fetch_text(self, url: str, headers: Dict[str, str], timeout_ms: int) -> str:
        logger.debug(f"GET {url}")
        response = await self._exchange(
            lambda client: client.get(url, headers=headers, follow_redirects=True),
            timeout_ms,
        )
        if not response.is_success:
            self._log_api_error(response.status_code, response.text)
            raise ApiError(response.status_code, error=response.text)
        return response.text

    async def _exchange(
        self, call: Callable[[httpx.AsyncClient], Awaitable[httpx.Response]], timeout_ms: int
    ) -> httpx.Response:
        """Runs one HTTP exchange; whichever of response and timeout comes first wins."""
        seconds = timeout_ms / 1000
        try:
            if self.http_client is not None:
                return await asyncio.wait_for(call(self.http_client), timeout=seconds)
            async with create_http_client(timeout_ms) as client:
                return await asyncio.wait_for(call(client), timeout=seconds)
        except (asyncio.TimeoutError, httpx.TimeoutException) as e:
            logger.warning(f"Request timed out after {timeout_ms}ms")
            raise RequestTimeoutError(timeout_ms) from e
        except (httpx.RequestError, httpx.InvalidURL, UnicodeEncodeError) as e:
            # raised while encoding the URL or headers
            logger.error(f"Request failed: {e}")
            raise RequestFailedError(str(e) or type(e).__name__) from e

    def _parse(self, response: httpx.Response) -> Any:
        status = response.status_code

        if not response.is_success:
            try:
                payload: Any = response.json()
            except ValueError:
                payload = response.text
            self._log_api_error(status, payload)
            raise ApiError(status, error=payload)

        if status == 204:
            return None

        try:
            return response.json()
        except ValueError as e:
            logger.error(f"SourceSync API returned an unreadable body with status {status}")
            raise ApiError(status, message="Malformed JSON response body", details=response.text) from e

    @staticmethod
    def _log_api_error(status: int, payload: Any) -> None:
        logger.error(f"SourceSync API Error: {status_label(status)} (status={status}, error={payload!r})")
