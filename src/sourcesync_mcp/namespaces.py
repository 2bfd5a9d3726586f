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
Namespace operations.

A namespace bundles the file storage, vector storage and embedding model a
set of documents is ingested into.
"""

from typing import Any, Dict

from pydantic.alias_generators import to_camel

from .clients.sourcesync import SourceSyncClient
from .models import HttpMethod
from .schemas import (
    CreateNamespaceParams,
    DeleteNamespaceParams,
    GetNamespaceParams,
    ListNamespacesParams,
    UpdateNamespaceParams,
)
from .utils.http import path_segment

_UPDATABLE_CONFIGS = (
    "file_storage_config",
    "vector_storage_config",
    "embedding_model_config",
    "web_scraper_config",
    "notion_config",
    "google_drive_config",
    "dropbox_config",
    "onedrive_config",
    "box_config",
    "sharepoint_config",
)


async def create_namespace(client: SourceSyncClient, params: CreateNamespaceParams) -> Any:
    body: Dict[str, Any] = {
        "name": params.name,
        "fileStorageConfig": params.file_storage_config.to_api(),
        "vectorStorageConfig": params.vector_storage_config.to_api(),
        "embeddingModelConfig": params.embedding_model_config.to_api(),
    }
    if params.web_scraper_config is not None:
        body["webScraperConfig"] = params.web_scraper_config.to_api()

    return await client.request(
        HttpMethod.POST, "/v1/namespaces", api_key=params.api_key, tenant_id=params.tenant_id, body=body
    )


async def list_namespaces(client: SourceSyncClient, params: ListNamespacesParams) -> Any:
    return await client.request(HttpMethod.GET, "/v1/namespaces", api_key=params.api_key, tenant_id=params.tenant_id)


async def get_namespace(client: SourceSyncClient, params: GetNamespaceParams) -> Any:
    path = f"/v1/namespaces/{path_segment(client.namespace_id(params.namespace_id))}"
    return await client.request(HttpMethod.GET, path, api_key=params.api_key, tenant_id=params.tenant_id)


async def update_namespace(client: SourceSyncClient, params: UpdateNamespaceParams) -> Any:
    """
    Updates a namespace with whichever settings were given.

    Settings left out are not sent, so the API keeps their current values.
    """
    namespace_id = client.namespace_id(params.namespace_id)

    body: Dict[str, Any] = {}
    if params.name:
        body["name"] = params.name
    for field in _UPDATABLE_CONFIGS:
        value = getattr(params, field)
        if value is not None:
            body[to_camel(field)] = value.to_api()

    return await client.request(
        HttpMethod.PATCH,
        f"/v1/namespaces/{path_segment(namespace_id)}",
        api_key=params.api_key,
        tenant_id=params.tenant_id,
        body=body,
    )


async def delete_namespace(client: SourceSyncClient, params: DeleteNamespaceParams) -> Any:
    path = f"/v1/namespaces/{path_segment(client.namespace_id(params.namespace_id))}"
    return await client.request(HttpMethod.DELETE, path, api_key=params.api_key, tenant_id=params.tenant_id)
