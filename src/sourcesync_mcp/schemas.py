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
Tool parameter module.

One validated parameter model per operation. Credential and tenant fields are
never part of a request body; operations split them out before building it.
"""

import base64
import binascii
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator

from .models import (
    ChunkConfig,
    ConnectorAppConfig,
    ConnectorIngestConfig,
    Connector,
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


class ToolParams(BaseModel):
    """Fields shared by every tool call."""

    api_key: Optional[str] = Field(None, description="API key; defaults to SOURCESYNC_API_KEY")
    tenant_id: Optional[str] = Field(None, description="Tenant forwarded as X-Tenant-ID")


class NamespacedParams(ToolParams):
    namespace_id: Optional[str] = Field(None, description="Namespace; defaults to SOURCESYNC_NAMESPACE_ID")


# Authentication


class ValidateApiKeyParams(ToolParams):
    pass


# Namespaces


class CreateNamespaceParams(ToolParams):
    name: str = Field(..., min_length=1, description="Namespace name")
    file_storage_config: FileStorageConfig
    vector_storage_config: VectorStorageConfig
    embedding_model_config: EmbeddingModelConfig
    web_scraper_config: Optional[WebScraperConfig] = None


class ListNamespacesParams(ToolParams):
    pass


class GetNamespaceParams(NamespacedParams):
    pass


class UpdateNamespaceParams(NamespacedParams):
    name: Optional[str] = None
    file_storage_config: Optional[FileStorageConfig] = None
    vector_storage_config: Optional[VectorStorageConfig] = None
    embedding_model_config: Optional[EmbeddingModelConfig] = None
    web_scraper_config: Optional[WebScraperConfig] = None
    notion_config: Optional[ConnectorAppConfig] = None
    google_drive_config: Optional[GoogleDriveConfig] = None
    dropbox_config: Optional[ConnectorAppConfig] = None
    onedrive_config: Optional[ConnectorAppConfig] = None
    box_config: Optional[ConnectorAppConfig] = None
    sharepoint_config: Optional[ConnectorAppConfig] = None


class DeleteNamespaceParams(NamespacedParams):
    pass


# Ingestion


class IngestTextParams(NamespacedParams):
    ingest_config: TextIngestConfig


class IngestFileParams(NamespacedParams):
    """A file upload, given either as a path on the server or as base64 content."""

    file_path: Optional[str] = Field(None, description="Path of a file on the server's filesystem")
    file_content: Optional[str] = Field(None, description="Base64-encoded file content")
    file_name: Optional[str] = Field(None, description="File name; required with file_content")
    content_type: Optional[str] = Field(None, description="MIME type; guessed from the file name when omitted")
    metadata: Optional[Metadata] = None
    chunk_config: Optional[ChunkConfig] = None

    @model_validator(mode="after")
    def check_file_source(self) -> "IngestFileParams":
        if bool(self.file_path) == bool(self.file_content):
            raise ValueError("Pass exactly one of file_path or file_content")
        if self.file_content:
            if not self.file_name:
                raise ValueError("file_name is required with file_content")
            try:
                base64.b64decode(self.file_content, validate=True)
            except binascii.Error as e:
                raise ValueError(f"file_content is not valid base64: {e}") from e
        return self


class IngestUrlsParams(NamespacedParams):
    ingest_config: UrlsIngestConfig


class IngestSitemapParams(NamespacedParams):
    ingest_config: SitemapIngestConfig


class IngestWebsiteParams(NamespacedParams):
    ingest_config: WebsiteIngestConfig


class IngestConnectorParams(NamespacedParams):
    ingest_config: ConnectorIngestConfig


class IngestJobRunStatusParams(NamespacedParams):
    ingest_job_run_id: str = Field(..., min_length=1)


# Documents


class FetchDocumentsParams(NamespacedParams):
    filter_config: DocumentFilterConfig = Field(default_factory=DocumentFilterConfig)
    include_config: Optional[DocumentIncludeConfig] = None
    pagination: Optional[Pagination] = None
    document_ids: Optional[List[str]] = Field(None, description="Shortcut for filter_config.document_ids")


class UpdateDocumentsParams(NamespacedParams):
    filter_config: DocumentFilterConfig = Field(default_factory=DocumentFilterConfig)
    data: DocumentUpdateData = Field(default_factory=DocumentUpdateData)
    documents: Optional[List[DocumentMetadataUpdate]] = Field(
        None, description="Per-document metadata; ids are added to the filter when it has none"
    )


class DeleteDocumentsParams(NamespacedParams):
    filter_config: DocumentFilterConfig = Field(default_factory=DocumentFilterConfig)
    document_ids: Optional[List[str]] = None


class ResyncDocumentsParams(NamespacedParams):
    filter_config: DocumentFilterConfig = Field(default_factory=DocumentFilterConfig)
    document_ids: Optional[List[str]] = None


# Search


class SemanticSearchParams(NamespacedParams):
    query: str = Field(..., min_length=1, description="Search query")
    top_k: Optional[int] = Field(None, ge=1, le=100)
    score_threshold: Optional[float] = Field(None, ge=0, le=1)
    filter: Optional[SearchFilter] = None
    search_type: Optional[SearchType] = None


class HybridSearchParams(SemanticSearchParams):
    hybrid_config: HybridConfig


# Connections


class CreateConnectionParams(NamespacedParams):
    name: str = Field(..., min_length=1)
    connector: Connector
    client_redirect_url: Optional[str] = None


class ListConnectionsParams(NamespacedParams):
    connector: Optional[Connector] = None


class GetConnectionParams(NamespacedParams):
    connection_id: str = Field(..., min_length=1)


class UpdateConnectionParams(NamespacedParams):
    connection_id: str = Field(..., min_length=1)
    name: Optional[str] = None
    client_redirect_url: Optional[str] = None


class RevokeConnectionParams(NamespacedParams):
    connection_id: str = Field(..., min_length=1)


# Utility


class FetchUrlContentParams(ToolParams):
    url: str = Field(..., pattern=r"^https?://", description="Absolute http(s) URL to fetch")
