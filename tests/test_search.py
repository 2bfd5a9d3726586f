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

from sourcesync_mcp.clients.sourcesync import SourceSyncClient
from sourcesync_mcp.models import HttpMethod
from sourcesync_mcp.schemas import HybridSearchParams, SemanticSearchParams
from sourcesync_mcp.search import hybrid_search, semantic_search
from tests.mocks import RecordingTransport


@pytest.mark.asyncio
async def test_semantic_search_minimal(client: SourceSyncClient, transport: RecordingTransport) -> None:
    await semantic_search(client, SemanticSearchParams(query="what is sourcesync?"))

    assert transport.last.method == HttpMethod.POST
    assert transport.last.url.endswith("/v1/search")
    assert transport.last_body == {"query": "what is sourcesync?", "namespaceId": "ns_1", "searchType": "SEMANTIC"}


@pytest.mark.asyncio
async def test_semantic_search_options(client: SourceSyncClient, transport: RecordingTransport) -> None:
    params = SemanticSearchParams(
        query="pricing",
        top_k=5,
        score_threshold=0.5,
        filter={"metadata": {"team": "sales"}},
        api_key="k",
        tenant_id="t1",
    )

    await semantic_search(client, params)

    body = transport.last_body
    assert body["topK"] == 5
    assert body["scoreThreshold"] == 0.5
    assert body["filter"] == {"metadata": {"team": "sales"}}
    assert "apiKey" not in body and "tenantId" not in body
    assert transport.last.headers["X-Tenant-ID"] == "t1"


@pytest.mark.asyncio
async def test_hybrid_search(client: SourceSyncClient, transport: RecordingTransport) -> None:
    params = HybridSearchParams(query="pricing", hybrid_config={"semantic_weight": 0.7, "keyword_weight": 0.3})

    await hybrid_search(client, params)

    assert transport.last.url.endswith("/v1/search/hybrid")
    assert transport.last_body == {
        "query": "pricing",
        "namespaceId": "ns_1",
        "searchType": "HYBRID",
        "hybridConfig": {"semanticWeight": 0.7, "keywordWeight": 0.3},
    }
