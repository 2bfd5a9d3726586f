# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_synthesis

import pytest
from pydantic import ValidationError

from sourcesync_mcp.authentication import validate_api_key
from sourcesync_mcp.clients.sourcesync import SourceSyncClient
from sourcesync_mcp.config import Settings
from sourcesync_mcp.exceptions import ApiError, MissingConfigError, RequestTimeoutError
from sourcesync_mcp.models import HttpMethod
from sourcesync_mcp.schemas import FetchUrlContentParams, ValidateApiKeyParams
from sourcesync_mcp.utilities import fetch_url_content
from tests.mocks import RecordingTransport


class TestValidateApiKey:
    @pytest.mark.asyncio
    async def test_valid(self, client: SourceSyncClient, transport: RecordingTransport) -> None:
        assert await validate_api_key(client, ValidateApiKeyParams(api_key="candidate")) is True
        assert transport.last.method == HttpMethod.GET
        assert transport.last.url.endswith("/v1/namespaces")
        assert transport.last.headers["Authorization"] == "Bearer candidate"

    @pytest.mark.parametrize("status", [401, 403])
    @pytest.mark.asyncio
    async def test_rejected(self, settings: Settings, status: int) -> None:
        client = SourceSyncClient(settings, RecordingTransport(error=ApiError(status)))
        assert await validate_api_key(client, ValidateApiKeyParams()) is False

    @pytest.mark.asyncio
    async def test_other_api_errors_propagate(self, settings: Settings) -> None:
        client = SourceSyncClient(settings, RecordingTransport(error=ApiError(500)))
        with pytest.raises(ApiError):
            await validate_api_key(client, ValidateApiKeyParams())

    @pytest.mark.asyncio
    async def test_timeout_propagates(self, settings: Settings) -> None:
        client = SourceSyncClient(settings, RecordingTransport(error=RequestTimeoutError(5000)))
        with pytest.raises(RequestTimeoutError):
            await validate_api_key(client, ValidateApiKeyParams())

    @pytest.mark.asyncio
    async def test_missing_key_propagates(self) -> None:
        transport = RecordingTransport()
        client = SourceSyncClient(Settings(), transport)
        with pytest.raises(MissingConfigError):
            await validate_api_key(client, ValidateApiKeyParams())
        assert transport.requests == []


class TestFetchUrlContent:
    @pytest.mark.asyncio
    async def test_wraps_text(self, client: SourceSyncClient, transport: RecordingTransport) -> None:
        transport.text = "parsed document text"

        result = await fetch_url_content(client, FetchUrlContentParams(url="https://files.example/doc.txt"))

        assert result == {"content": "parsed document text"}
        assert transport.fetches == [("https://files.example/doc.txt", {})]

    def test_rejects_non_http_url(self) -> None:
        with pytest.raises(ValidationError):
            FetchUrlContentParams(url="file:///etc/passwd")
