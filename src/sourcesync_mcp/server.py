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
MCP server module.

Exposes every SourceSync operation as an MCP tool. Each call builds its own
parameter model and client; failures surface as tool errors whose text is the
JSON error record.
"""

import json
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from . import authentication, connections, ingestion, namespaces, search, utilities
from . import documents as document_ops
from .clients.sourcesync import SourceSyncClient
from .config import get_settings
from .exceptions import SourceSyncError
from .models import (
    ChunkConfig,
    Connector,
    ConnectorAppConfig,
    ConnectorIngestConfig,
    DocumentFilterConfig,
    DocumentIncludeConfig,
    DocumentMetadataUpdate,
    DocumentUpdateData,
    EmbeddingModelConfig,
    FileStorageConfig,
    GoogleDriveConfig,
    HybridConfig,
    Metadata,
    Pagination,
    SearchFilter,
    SearchType,
    SitemapIngestConfig,
    TextIngestConfig,
    UrlsIngestConfig,
    VectorStorageConfig,
    WebScraperConfig,
    WebsiteIngestConfig,
)
from .schemas import (
    CreateConnectionParams,
    CreateNamespaceParams,
    DeleteDocumentsParams,
    DeleteNamespaceParams,
    FetchDocumentsParams,
    FetchUrlContentParams,
    GetConnectionParams,
    GetNamespaceParams,
    HybridSearchParams,
    IngestConnectorParams,
    IngestFileParams,
    IngestJobRunStatusParams,
    IngestSitemapParams,
    IngestTextParams,
    IngestUrlsParams,
    IngestWebsiteParams,
    ListConnectionsParams,
    ListNamespacesParams,
    ResyncDocumentsParams,
    RevokeConnectionParams,
    SemanticSearchParams,
    ToolParams,
    UpdateConnectionParams,
    UpdateDocumentsParams,
    UpdateNamespaceParams,
    ValidateApiKeyParams,
)
from .utils.logger import logger

SERVER_NAME = "SourceSyncAI"

INSTRUCTIONS = (
    "Tools for the SourceSync.ai document ingestion and search API. "
    "api_key and namespace_id default to the server's SOURCESYNC_API_KEY and "
    "SOURCESYNC_NAMESPACE_ID; tenant_id is forwarded as X-Tenant-ID."
)

P = TypeVar("P", bound=ToolParams)

mcp = FastMCP(SERVER_NAME, instructions=INSTRUCTIONS)


def create_client() -> SourceSyncClient:
    return SourceSyncClient(get_settings())


async def call_operation(operation: Callable[[SourceSyncClient, P], Awaitable[Any]], params: P) -> Any:
    """
    Runs one operation and converts a SourceSyncError into an MCP tool error.

    Args:
        operation: The operation to run.
        params: Its validated parameters.

    Returns:
        The operation's result.

    Raises:
        ToolError: Carrying the JSON error record.
    """
    try:
        async with create_client() as client:
            return await operation(client, params)
    except SourceSyncError as e:
        logger.warning(f"{operation.__name__} failed: {e.kind.value}: {e.message}")
        raise ToolError(json.dumps(e.to_dict())) from e


# Authentication


async def validate_api_key(api_key: Optional[str] = None, tenant_id: Optional[str] = None) -> bool:
    """Checks whether a SourceSync API key is valid. Returns false if the API rejects it."""
    return await call_operation(
        authentication.validate_api_key, ValidateApiKeyParams(api_key=api_key, tenant_id=tenant_id)
    )


# Namespaces


async def create_namespace(
    name: str,
    file_storage_config: FileStorageConfig,
    vector_storage_config: VectorStorageConfig,
    embedding_model_config: EmbeddingModelConfig,
    web_scraper_config: Optional[WebScraperConfig] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """Creates a namespace with its file storage, vector storage and embedding model settings."""
    params = CreateNamespaceParams(
        name=name,
        file_storage_config=file_storage_config,
        vector_storage_config=vector_storage_config,
        embedding_model_config=embedding_model_config,
        web_scraper_config=web_scraper_config,
        api_key=api_key,
        tenant_id=tenant_id,
    )
    return await call_operation(namespaces.create_namespace, params)


async def list_namespaces(api_key: Optional[str] = None, tenant_id: Optional[str] = None) -> Any:
    """Lists all namespaces visible to the API key."""
    return await call_operation(namespaces.list_namespaces, ListNamespacesParams(api_key=api_key, tenant_id=tenant_id))


async def get_namespace(
    namespace_id: Optional[str] = None, api_key: Optional[str] = None, tenant_id: Optional[str] = None
) -> Any:
    """Gets a namespace by id."""
    params = GetNamespaceParams(namespace_id=namespace_id, api_key=api_key, tenant_id=tenant_id)
    return await call_operation(namespaces.get_namespace, params)


async def update_namespace(
    namespace_id: Optional[str] = None,
    name: Optional[str] = None,
    file_storage_config: Optional[FileStorageConfig] = None,
    vector_storage_config: Optional[VectorStorageConfig] = None,
    embedding_model_config: Optional[EmbeddingModelConfig] = None,
    web_scraper_config: Optional[WebScraperConfig] = None,
    notion_config: Optional[ConnectorAppConfig] = None,
    google_drive_config: Optional[GoogleDriveConfig] = None,
    dropbox_config: Optional[ConnectorAppConfig] = None,
    onedrive_config: Optional[ConnectorAppConfig] = None,
    box_config: Optional[ConnectorAppConfig] = None,
    sharepoint_config: Optional[ConnectorAppConfig] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """Updates a namespace. Only the settings given are changed."""
    params = UpdateNamespaceParams(
        namespace_id=namespace_id,
        name=name,
        file_storage_config=file_storage_config,
        vector_storage_config=vector_storage_config,
        embedding_model_config=embedding_model_config,
        web_scraper_config=web_scraper_config,
        notion_config=notion_config,
        google_drive_config=google_drive_config,
        dropbox_config=dropbox_config,
        onedrive_config=onedrive_config,
        box_config=box_config,
        sharepoint_config=sharepoint_config,
        api_key=api_key,
        tenant_id=tenant_id,
    )
    return await call_operation(namespaces.update_namespace, params)


async def delete_namespace(
    namespace_id: Optional[str] = None, api_key: Optional[str] = None, tenant_id: Optional[str] = None
) -> Any:
    """Deletes a namespace and everything ingested into it."""
    params = DeleteNamespaceParams(namespace_id=namespace_id, api_key=api_key, tenant_id=tenant_id)
    return await call_operation(namespaces.delete_namespace, params)


# Ingestion


async def ingest_text(
    ingest_config: TextIngestConfig,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """Ingests a piece of text. Chunking defaults to 400 tokens with an overlap of 50."""
    params = IngestTextParams(
        ingest_config=ingest_config, namespace_id=namespace_id, api_key=api_key, tenant_id=tenant_id
    )
    return await call_operation(ingestion.ingest_text, params)


async def ingest_file(
    file_path: Optional[str] = None,
    file_content: Optional[str] = None,
    file_name: Optional[str] = None,
    content_type: Optional[str] = None,
    metadata: Optional[Metadata] = None,
    chunk_config: Optional[ChunkConfig] = None,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """
    Uploads and ingests a single file.

    Pass either file_path, a path on the server's filesystem, or file_content
    as base64 together with file_name.
    """
    params = IngestFileParams(
        file_path=file_path,
        file_content=file_content,
        file_name=file_name,
        content_type=content_type,
        metadata=metadata,
        chunk_config=chunk_config,
        namespace_id=namespace_id,
        api_key=api_key,
        tenant_id=tenant_id,
    )
    return await call_operation(ingestion.ingest_file, params)


async def ingest_urls(
    ingest_config: UrlsIngestConfig,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """Ingests a list of web pages."""
    params = IngestUrlsParams(
        ingest_config=ingest_config, namespace_id=namespace_id, api_key=api_key, tenant_id=tenant_id
    )
    return await call_operation(ingestion.ingest_urls, params)


async def ingest_sitemap(
    ingest_config: SitemapIngestConfig,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """Ingests the pages listed in a sitemap."""
    params = IngestSitemapParams(
        ingest_config=ingest_config, namespace_id=namespace_id, api_key=api_key, tenant_id=tenant_id
    )
    return await call_operation(ingestion.ingest_sitemap, params)


async def ingest_website(
    ingest_config: WebsiteIngestConfig,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """Crawls and ingests a website starting from a URL."""
    params = IngestWebsiteParams(
        ingest_config=ingest_config, namespace_id=namespace_id, api_key=api_key, tenant_id=tenant_id
    )
    return await call_operation(ingestion.ingest_website, params)


async def ingest_connector(
    ingest_config: ConnectorIngestConfig,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """
    Ingests all documents picked for a connection that are in backlog or failed status.

    Document ids are not needed: they were recorded when the user picked them
    during authorization.
    """
    params = IngestConnectorParams(
        ingest_config=ingest_config, namespace_id=namespace_id, api_key=api_key, tenant_id=tenant_id
    )
    return await call_operation(ingestion.ingest_connector, params)


async def get_ingest_job_run_status(
    ingest_job_run_id: str,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """Gets the status of an ingest job run."""
    params = IngestJobRunStatusParams(
        ingest_job_run_id=ingest_job_run_id, namespace_id=namespace_id, api_key=api_key, tenant_id=tenant_id
    )
    return await call_operation(ingestion.get_ingest_job_run_status, params)


# Documents


async def fetch_documents(
    filter_config: Optional[DocumentFilterConfig] = None,
    document_ids: Optional[List[str]] = None,
    include_config: Optional[DocumentIncludeConfig] = None,
    pagination: Optional[Pagination] = None,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """Fetches documents matching a filter, with optional stats and file URLs."""
    params = FetchDocumentsParams(
        filter_config=filter_config or DocumentFilterConfig(),
        document_ids=document_ids,
        include_config=include_config,
        pagination=pagination,
        namespace_id=namespace_id,
        api_key=api_key,
        tenant_id=tenant_id,
    )
    return await call_operation(document_ops.fetch_documents, params)


async def update_documents(
    filter_config: Optional[DocumentFilterConfig] = None,
    data: Optional[DocumentUpdateData] = None,
    documents: Optional[List[DocumentMetadataUpdate]] = None,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """Updates the metadata of documents matching a filter."""
    params = UpdateDocumentsParams(
        filter_config=filter_config or DocumentFilterConfig(),
        data=data or DocumentUpdateData(),
        documents=documents,
        namespace_id=namespace_id,
        api_key=api_key,
        tenant_id=tenant_id,
    )
    return await call_operation(document_ops.update_documents, params)


async def delete_documents(
    filter_config: Optional[DocumentFilterConfig] = None,
    document_ids: Optional[List[str]] = None,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """Deletes documents matching a filter."""
    params = DeleteDocumentsParams(
        filter_config=filter_config or DocumentFilterConfig(),
        document_ids=document_ids,
        namespace_id=namespace_id,
        api_key=api_key,
        tenant_id=tenant_id,
    )
    return await call_operation(document_ops.delete_documents, params)


async def resync_documents(
    filter_config: Optional[DocumentFilterConfig] = None,
    document_ids: Optional[List[str]] = None,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """Queues documents matching a filter for re-ingestion."""
    params = ResyncDocumentsParams(
        filter_config=filter_config or DocumentFilterConfig(),
        document_ids=document_ids,
        namespace_id=namespace_id,
        api_key=api_key,
        tenant_id=tenant_id,
    )
    return await call_operation(document_ops.resync_documents, params)


# Search


async def semantic_search(
    query: str,
    top_k: Optional[int] = None,
    score_threshold: Optional[float] = None,
    filter: Optional[SearchFilter] = None,
    search_type: Optional[SearchType] = None,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """Searches a namespace by meaning."""
    params = SemanticSearchParams(
        query=query,
        top_k=top_k,
        score_threshold=score_threshold,
        filter=filter,
        search_type=search_type,
        namespace_id=namespace_id,
        api_key=api_key,
        tenant_id=tenant_id,
    )
    return await call_operation(search.semantic_search, params)


async def hybrid_search(
    query: str,
    hybrid_config: HybridConfig,
    top_k: Optional[int] = None,
    score_threshold: Optional[float] = None,
    filter: Optional[SearchFilter] = None,
    search_type: Optional[SearchType] = None,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """Searches a namespace with weighted semantic and keyword matching."""
    params = HybridSearchParams(
        query=query,
        hybrid_config=hybrid_config,
        top_k=top_k,
        score_threshold=score_threshold,
        filter=filter,
        search_type=search_type,
        namespace_id=namespace_id,
        api_key=api_key,
        tenant_id=tenant_id,
    )
    return await call_operation(search.hybrid_search, params)


# Connections


async def create_connection(
    name: str,
    connector: Connector,
    client_redirect_url: Optional[str] = None,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """
    Creates a connection to a connector and returns an authorization URL.

    Redirect the user there to authorize access and pick the documents to ingest.
    """
    params = CreateConnectionParams(
        name=name,
        connector=connector,
        client_redirect_url=client_redirect_url,
        namespace_id=namespace_id,
        api_key=api_key,
        tenant_id=tenant_id,
    )
    return await call_operation(connections.create_connection, params)


async def list_connections(
    connector: Optional[Connector] = None,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """Lists the connections in a namespace, optionally for one connector."""
    params = ListConnectionsParams(connector=connector, namespace_id=namespace_id, api_key=api_key, tenant_id=tenant_id)
    return await call_operation(connections.list_connections, params)


async def get_connection(
    connection_id: str,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """Gets a connection by id."""
    params = GetConnectionParams(
        connection_id=connection_id, namespace_id=namespace_id, api_key=api_key, tenant_id=tenant_id
    )
    return await call_operation(connections.get_connection, params)


async def update_connection(
    connection_id: str,
    name: Optional[str] = None,
    client_redirect_url: Optional[str] = None,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """
    Updates a connection and returns a fresh authorization URL.

    Use it to change the redirect URL or to let the user pick a different set of documents.
    """
    params = UpdateConnectionParams(
        connection_id=connection_id,
        name=name,
        client_redirect_url=client_redirect_url,
        namespace_id=namespace_id,
        api_key=api_key,
        tenant_id=tenant_id,
    )
    return await call_operation(connections.update_connection, params)


async def revoke_connection(
    connection_id: str,
    namespace_id: Optional[str] = None,
    api_key: Optional[str] = None,
    tenant_id: Optional[str] = None,
) -> Any:
    """Revokes a connection's access to its connector."""
    params = RevokeConnectionParams(
        connection_id=connection_id, namespace_id=namespace_id, api_key=api_key, tenant_id=tenant_id
    )
    return await call_operation(connections.revoke_connection, params)


# Utility


async def fetch_url_content(url: str, api_key: Optional[str] = None, tenant_id: Optional[str] = None) -> Dict[str, str]:
    """Fetches the text content of a URL, e.g. a parsed text file URL returned by fetch_documents."""
    params = FetchUrlContentParams(url=url, api_key=api_key, tenant_id=tenant_id)
    return await call_operation(utilities.fetch_url_content, params)


TOOLS: List[Callable[..., Awaitable[Any]]] = [
    validate_api_key,
    create_namespace,
    list_namespaces,
    get_namespace,
    update_namespace,
    delete_namespace,
    ingest_text,
    ingest_file,
    ingest_urls,
    ingest_sitemap,
    ingest_website,
    ingest_connector,
    get_ingest_job_run_status,
    fetch_documents,
    update_documents,
    delete_documents,
    resync_documents,
    semantic_search,
    hybrid_search,
    create_connection,
    list_connections,
    get_connection,
    update_connection,
    revoke_connection,
    fetch_url_content,
]

for tool in TOOLS:
    mcp.tool()(tool)
