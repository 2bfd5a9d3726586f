# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_synthesis

from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

Metadata = Dict[str, Union[str, List[str]]]

# (filename, content, content type), as accepted by httpx `files=`
FilePart = Tuple[str, bytes, str]


class HttpMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"


class FileStorageType(str, Enum):
    S3_COMPATIBLE = "S3_COMPATIBLE"


class VectorStorageProvider(str, Enum):
    PINECONE = "PINECONE"


class EmbeddingModelProvider(str, Enum):
    OPENAI = "OPENAI"
    COHERE = "COHERE"
    JINA = "JINA"


class WebScraperProvider(str, Enum):
    FIRECRAWL = "FIRECRAWL"
    JINA = "JINA"
    SCRAPINGBEE = "SCRAPINGBEE"


EMBEDDING_MODELS: Dict[EmbeddingModelProvider, List[str]] = {
    EmbeddingModelProvider.OPENAI: [
        "text-embedding-3-small",
        "text-embedding-3-large",
        "text-embedding-ada-002",
    ],
    EmbeddingModelProvider.COHERE: [
        "embed-english-v3.0",
        "embed-multilingual-v3.0",
        "embed-english-light-v3.0",
        "embed-multilingual-light-v3.0",
        "embed-english-v2.0",
        "embed-english-light-v2.0",
        "embed-multilingual-v2.0",
    ],
    EmbeddingModelProvider.JINA: ["jina-embeddings-v3"],
}


class Connector(str, Enum):
    """External content sources a namespace can connect to."""

    NOTION = "NOTION"
    GOOGLE_DRIVE = "GOOGLE_DRIVE"
    DROPBOX = "DROPBOX"
    ONEDRIVE = "ONEDRIVE"
    BOX = "BOX"
    SHAREPOINT = "SHAREPOINT"


class IngestionSource(str, Enum):
    TEXT = "TEXT"
    URLS_LIST = "URLS_LIST"
    SITEMAP = "SITEMAP"
    WEBSITE = "WEBSITE"
    LOCAL_FILE = "LOCAL_FILE"
    NOTION = "NOTION"
    GOOGLE_DRIVE = "GOOGLE_DRIVE"
    DROPBOX = "DROPBOX"
    ONEDRIVE = "ONEDRIVE"
    BOX = "BOX"
    SHAREPOINT = "SHAREPOINT"


class IngestionStatus(str, Enum):
    BACKLOG = "BACKLOG"
    QUEUED = "QUEUED"
    QUEUED_FOR_RESYNC = "QUEUED_FOR_RESYNC"
    PROCESSING = "PROCESSING"
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


class DocumentType(str, Enum):
    TEXT = "TEXT"
    URL = "URL"
    FILE = "FILE"
    NOTION_DOCUMENT = "NOTION_DOCUMENT"
    GOOGLE_DRIVE_DOCUMENT = "GOOGLE_DRIVE_DOCUMENT"
    DROPBOX_DOCUMENT = "DROPBOX_DOCUMENT"
    ONEDRIVE_DOCUMENT = "ONEDRIVE_DOCUMENT"
    BOX_DOCUMENT = "BOX_DOCUMENT"
    SHAREPOINT_DOCUMENT = "SHAREPOINT_DOCUMENT"


class SearchType(str, Enum):
    SEMANTIC = "SEMANTIC"
    HYBRID = "HYBRID"


# Request plumbing


class RequestSpec(BaseModel):
    """Everything needed to build one outgoing API request."""

    method: HttpMethod = Field(..., description="HTTP method")
    path: str = Field(..., description="Path relative to the API base URL, starting with '/'")
    body: Optional[Any] = Field(None, description="JSON-compatible request body")
    tenant_id: Optional[str] = Field(None, description="Value for the X-Tenant-ID header")
    query_params: Optional[Dict[str, Optional[str]]] = Field(
        None, description="Query parameters in insertion order; None values are dropped"
    )
    form: Optional[Dict[str, str]] = Field(None, description="Multipart form fields sent alongside files")
    files: Optional[Dict[str, FilePart]] = Field(None, description="Multipart file parts; replaces the JSON body")
    credential: str = Field(..., min_length=1, description="Resolved API key")

    model_config = ConfigDict(frozen=True)


class BuiltRequest(BaseModel):
    """A fully-qualified request ready for the transport."""

    method: HttpMethod
    url: str
    headers: Dict[str, str]
    content: Optional[str] = None
    data: Optional[Dict[str, str]] = None
    files: Optional[Dict[str, FilePart]] = None

    model_config = ConfigDict(frozen=True)


# Wire DTOs


class ApiModel(BaseModel):
    """Base for payload objects sent to the SourceSync API.

    Fields are declared in snake_case and serialized with the API's camelCase names.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)

    def to_api(self) -> Dict[str, Any]:
        """Dumps the model with API field names, leaving out unset fields."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class StorageCredentials(ApiModel):
    access_key_id: str
    secret_access_key: str


class FileStorageConfig(ApiModel):
    type: FileStorageType
    bucket: str
    region: str
    endpoint: str
    credentials: StorageCredentials


class VectorStorageConfig(ApiModel):
    provider: VectorStorageProvider
    api_key: str
    index_host: str


class EmbeddingModelConfig(ApiModel):
    provider: EmbeddingModelProvider
    model: str
    api_key: str

    @model_validator(mode="after")
    def check_model_matches_provider(self) -> "EmbeddingModelConfig":
        allowed = EMBEDDING_MODELS[EmbeddingModelProvider(self.provider)]
        if self.model not in allowed:
            raise ValueError(f"Model '{self.model}' is not available for provider {self.provider}: {allowed}")
        return self


class WebScraperConfig(ApiModel):
    provider: WebScraperProvider
    api_key: str


class ConnectorAppConfig(ApiModel):
    """OAuth application credentials for a connector."""

    client_id: str
    client_secret: str


class GoogleDriveConfig(ConnectorAppConfig):
    api_key: str


class ChunkConfig(ApiModel):
    chunk_size: int = Field(..., gt=0)
    chunk_overlap: int = Field(..., ge=0)


DEFAULT_CHUNK_CONFIG = ChunkConfig(chunk_size=400, chunk_overlap=50)


class ScrapeOptions(ApiModel):
    include_selectors: Optional[List[str]] = None
    exclude_selectors: Optional[List[str]] = None


class TextSourceConfig(ApiModel):
    text: str
    name: Optional[str] = None
    metadata: Optional[Metadata] = None


class UrlsSourceConfig(ApiModel):
    urls: List[str] = Field(..., min_length=1)
    scrape_options: Optional[ScrapeOptions] = None
    metadata: Optional[Metadata] = None


class SitemapSourceConfig(ApiModel):
    url: str
    max_links: Optional[int] = None
    include_paths: Optional[List[str]] = None
    exclude_paths: Optional[List[str]] = None
    metadata: Optional[Metadata] = None


class WebsiteSourceConfig(SitemapSourceConfig):
    max_depth: Optional[int] = None


class ConnectorSourceConfig(ApiModel):
    connection_id: str = Field(..., min_length=1)
    metadata: Optional[Metadata] = None


class TextIngestConfig(ApiModel):
    source: Literal["TEXT"] = "TEXT"
    config: TextSourceConfig
    chunk_config: Optional[ChunkConfig] = None


class UrlsIngestConfig(ApiModel):
    source: Literal["URLS_LIST"] = "URLS_LIST"
    config: UrlsSourceConfig
    chunk_config: Optional[ChunkConfig] = None


class SitemapIngestConfig(ApiModel):
    source: Literal["SITEMAP"] = "SITEMAP"
    config: SitemapSourceConfig
    chunk_config: Optional[ChunkConfig] = None


class WebsiteIngestConfig(ApiModel):
    source: Literal["WEBSITE"] = "WEBSITE"
    config: WebsiteSourceConfig
    chunk_config: Optional[ChunkConfig] = None


class ConnectorIngestConfig(ApiModel):
    source: Literal["NOTION", "GOOGLE_DRIVE", "DROPBOX", "ONEDRIVE", "BOX", "SHAREPOINT"]
    config: ConnectorSourceConfig
    chunk_config: Optional[ChunkConfig] = None


class DocumentFilterConfig(ApiModel):
    document_ids: Optional[List[str]] = None
    document_external_ids: Optional[List[str]] = None
    document_connection_ids: Optional[List[str]] = None
    document_types: Optional[List[DocumentType]] = None
    document_ingestion_sources: Optional[List[IngestionSource]] = None
    document_ingestion_statuses: Optional[List[IngestionStatus]] = None
    metadata: Optional[Metadata] = None


class DocumentIncludeConfig(ApiModel):
    documents: Optional[bool] = None
    stats: Optional[bool] = None
    stats_by_source: Optional[bool] = None
    stats_by_status: Optional[bool] = None
    raw_file_url: Optional[bool] = None
    parsed_text_file_url: Optional[bool] = None


class Pagination(ApiModel):
    page_size: Optional[int] = Field(None, ge=1, le=100)
    cursor: Optional[str] = None


class MetadataOperations(ApiModel):
    """Partial metadata updates applied to every matched document."""

    set: Optional[Metadata] = Field(None, alias="$set")
    append: Optional[Dict[str, List[str]]] = Field(None, alias="$append")
    remove: Optional[Dict[str, List[str]]] = Field(None, alias="$remove")


class DocumentUpdateData(ApiModel):
    metadata: Optional[Dict[str, str]] = None
    metadata_operations: Optional[MetadataOperations] = Field(None, alias="$metadata")


class DocumentMetadataUpdate(ApiModel):
    document_id: str
    metadata: Optional[Dict[str, str]] = None


class SearchFilter(ApiModel):
    metadata: Optional[Metadata] = None


class HybridConfig(ApiModel):
    semantic_weight: float = Field(..., ge=0, le=1)
    keyword_weight: float = Field(..., ge=0, le=1)
