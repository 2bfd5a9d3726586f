# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_synthesis

from typing import Any, Dict

from .clients.sourcesync import SourceSyncClient
from .models import HttpMethod, SearchType
from .schemas import HybridSearchParams, SemanticSearchParams


def search_body(client: SourceSyncClient, params: SemanticSearchParams, default_type: SearchType) -> Dict[str, Any]:
    body: Dict[str, Any] = {
        "query": params.query,
        "namespaceId": client.namespace_id(params.namespace_id),
        "searchType": (params.search_type or default_type).value,
    }
    if params.top_k is not None:
        body["topK"] = params.top_k
    if params.score_threshold is not None:
        body["scoreThreshold"] = params.score_threshold
    if params.filter is not None:
        body["filter"] = params.filter.to_api()
    return body


async def semantic_search(client: SourceSyncClient, params: SemanticSearchParams) -> Any:
    body = search_body(client, params, SearchType.SEMANTIC)
    return await client.request(
        HttpMethod.POST, "/v1/search", api_key=params.api_key, tenant_id=params.tenant_id, body=body
    )


async def hybrid_search(client: SourceSyncClient, params: HybridSearchParams) -> Any:
    """Searches with both vector similarity and keyword matching, weighted by `hybrid_config`."""
    body = search_body(client, params, SearchType.HYBRID)
    body["hybridConfig"] = params.hybrid_config.to_api()
    return await client.request(
        HttpMethod.POST, "/v1/search/hybrid", api_key=params.api_key, tenant_id=params.tenant_id, body=body
    )
