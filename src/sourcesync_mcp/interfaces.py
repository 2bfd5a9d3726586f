# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_synthesis

from abc import ABC, abstractmethod
from typing import Any, Dict

from .models import BuiltRequest


class Transport(ABC):
    """Abstract interface for sending built requests to the SourceSync API."""

    @abstractmethod
    async def send(self, request: BuiltRequest, timeout_ms: int) -> Any:
        """
        Sends a request and returns the parsed JSON response body.

        Args:
            request: The fully-built request.
            timeout_ms: Time allowed for the whole exchange.

        Returns:
            The parsed JSON body of a 2xx response.

        Raises:
            SourceSyncError: With kind timeout, request_failed or api_error.
        """
        pass

    @abstractmethod
    async def fetch_text(self, url: str, headers: Dict[str, str], timeout_ms: int) -> str:
        """
        Issues a GET to an arbitrary URL and returns the response text.

        Args:
            url: Absolute URL to fetch.
            headers: Headers to send as-is.
            timeout_ms: Time allowed for the whole exchange.

        Returns:
            The body text of a 2xx response.
        """
        pass

    async def close(self) -> None:
        """Releases any resources held by the transport."""
        return None

