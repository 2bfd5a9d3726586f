# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_synthesis

from typing import Iterator

import pytest

from sourcesync_mcp.clients.sourcesync import SourceSyncClient
from sourcesync_mcp.config import Settings, get_settings
from tests.mocks import RecordingTransport

API_URL = "https://api.test.sourcesync.ai"


@pytest.fixture(autouse=True)
def clear_settings_cache() -> Iterator[None]:
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def settings() -> Settings:
    return Settings(api_url=API_URL, timeout_ms=5000, api_key="env-key", namespace_id="ns_1")


@pytest.fixture
def transport() -> RecordingTransport:
    return RecordingTransport()


@pytest.fixture
def client(settings: Settings, transport: RecordingTransport) -> SourceSyncClient:
    return SourceSyncClient(settings=settings, transport=transport)
