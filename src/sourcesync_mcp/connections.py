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
Connection operations.

A connection authorizes SourceSync against a third-party connector such as
Notion or Google Drive. Creating or updating one returns an authorization URL
the user is redirected to.
"""

from typing import Any, Dict

from .clients.sourcesync import SourceSyncClient
from .models import HttpMethod
from .schemas import (
    CreateConnectionParams,
    GetConnectionParams,
    ListConnectionsParams,
    RevokeConnectionParams,
    UpdateConnectionParams,
)
from .utils.http import path_segment


async def create_connection(client: SourceSyncClient, params: CreateConnectionParams) -> Any:
    body: Dict[str, Any] = {
        "namespaceId": client.namespace_id(params.namespace_id),
        "name": params.name,
        "connector": params.connector.value,
    }
    if params.client_redirect_url:
        body["clientRedirectUrl"] = params.client_redirect_url

    return await client.request(
        HttpMethod.POST, "/v1/connections", api_key=params.api_key, tenant_id=params.tenant_id, body=body
    )


async def list_connections(client: SourceSyncClient, params: ListConnectionsParams) -> Any:
    query = {
        "namespaceId": client.namespace_id(params.namespace_id),
        "connector": params.connector.value if params.connector else None,
    }
    return await client.request(
        HttpMethod.GET, "/v1/connections", api_key=params.api_key, tenant_id=params.tenant_id, query_params=query
    )


async def get_connection(client: SourceSyncClient, params: GetConnectionParams) -> Any:
    query = {"namespaceId": client.namespace_id(params.namespace_id)}
    return await client.request(
        HttpMethod.GET,
        f"/v1/connections/{path_segment(params.connection_id)}",
        api_key=params.api_key,
        tenant_id=params.tenant_id,
        query_params=query,
    )


async def update_connection(client: SourceSyncClient, params: UpdateConnectionParams) -> Any:
    body: Dict[str, Any] = {"namespaceId": client.namespace_id(params.namespace_id)}
    if params.name:
        body["name"] = params.name
    if params.client_redirect_url:
        body["clientRedirectUrl"] = params.client_redirect_url

    return await client.request(
        HttpMethod.PATCH,
        f"/v1/connections/{path_segment(params.connection_id)}",
        api_key=params.api_key,
        tenant_id=params.tenant_id,
        body=body,
    )


async def revoke_connection(client: SourceSyncClient, params: RevokeConnectionParams) -> Any:
    body = {"namespaceId": client.namespace_id(params.namespace_id)}
    return await client.request(
        HttpMethod.POST,
        f"/v1/connections/{path_segment(params.connection_id)}/revoke",
        api_key=params.api_key,
        tenant_id=params.tenant_id,
        body=body,
    )
