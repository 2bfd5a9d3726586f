# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_synthesis

from typing import Any, Dict, List, Optional

from .clients.sourcesync import SourceSyncClient
from .exceptions import ErrorKind, SourceSyncError
from .models import DocumentFilterConfig, HttpMethod
from .schemas import (
    DeleteDocumentsParams,
    FetchDocumentsParams,
    ResyncDocumentsParams,
    UpdateDocumentsParams,
)

EMPTY_METADATA_OPERATIONS: Dict[str, Dict[str, Any]] = {"$set": {}, "$append": {}, "$remove": {}}


def merge_filter(filter_config: DocumentFilterConfig, document_ids: Optional[List[str]]) -> Dict[str, Any]:
    """
    Renders a document filter, adding the given ids unless the filter already has some.

    Args:
        filter_config: The caller's filter.
        document_ids: Ids passed alongside the filter.

    Returns:
        The filter with API field names.
    """
    payload = filter_config.to_api()
    if document_ids and not filter_config.document_ids:
        payload["documentIds"] = list(document_ids)
    return payload


def documents_page(response: Any) -> Dict[str, Any]:
    """
    Flattens a documents response to the page shape returned by `fetch_documents`.

    `data.documents` becomes `data`; the paging cursor and stats are lifted to
    the top level. Keys the API left out are left out here too.

    Raises:
        SourceSyncError: With kind api_error when the response has no `data` object.
    """
    data = response.get("data") if isinstance(response, dict) else None
    if not isinstance(data, dict):
        raise SourceSyncError(ErrorKind.API_ERROR, "Unexpected documents response", details=response)

    page = {
        "data": data.get("documents"),
        "hasNextPage": data.get("hasNextPage"),
        "nextCursor": data.get("nextCursor"),
        "statsBySource": data.get("statsBySource"),
        "statsByStatus": data.get("statsByStatus"),
    }
    return {key: value for key, value in page.items() if value is not None}


async def fetch_documents(client: SourceSyncClient, params: FetchDocumentsParams) -> Dict[str, Any]:
    """Fetches documents matching a filter. Document records are included unless told otherwise."""
    body: Dict[str, Any] = {
        "namespaceId": client.namespace_id(params.namespace_id),
        "filterConfig": merge_filter(params.filter_config, params.document_ids),
        "includeConfig": params.include_config.to_api() if params.include_config else {"documents": True},
    }
    if params.pagination is not None:
        body["pagination"] = params.pagination.to_api()

    response = await client.request(
        HttpMethod.POST, "/v1/documents", api_key=params.api_key, tenant_id=params.tenant_id, body=body
    )
    return documents_page(response)


async def update_documents(client: SourceSyncClient, params: UpdateDocumentsParams) -> Any:
    """
    Updates the metadata of every document matching the filter.

    Entries in `documents` contribute their ids to the filter when it has none,
    and their metadata is merged into `data.metadata` in order.
    """
    documents = params.documents or []
    filter_config = merge_filter(params.filter_config, [doc.document_id for doc in documents])

    metadata: Dict[str, str] = dict(params.data.metadata or {})
    for doc in documents:
        if doc.metadata:
            metadata.update(doc.metadata)

    operations = params.data.metadata_operations
    body = {
        "namespaceId": client.namespace_id(params.namespace_id),
        "filterConfig": filter_config,
        "data": {
            "metadata": metadata,
            "$metadata": operations.to_api() if operations else dict(EMPTY_METADATA_OPERATIONS),
        },
    }
    return await client.request(
        HttpMethod.PATCH, "/v1/documents", api_key=params.api_key, tenant_id=params.tenant_id, body=body
    )


async def delete_documents(client: SourceSyncClient, params: DeleteDocumentsParams) -> Any:
    body = {
        "namespaceId": client.namespace_id(params.namespace_id),
        "filterConfig": merge_filter(params.filter_config, params.document_ids),
    }
    return await client.request(
        HttpMethod.DELETE, "/v1/documents", api_key=params.api_key, tenant_id=params.tenant_id, body=body
    )


async def resync_documents(client: SourceSyncClient, params: ResyncDocumentsParams) -> Any:
    body = {
        "namespaceId": client.namespace_id(params.namespace_id),
        "filterConfig": merge_filter(params.filter_config, params.document_ids),
    }
    return await client.request(
        HttpMethod.POST, "/v1/documents/resync", api_key=params.api_key, tenant_id=params.tenant_id, body=body
    )
