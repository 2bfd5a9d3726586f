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
Ingestion operations.

Each ingest call queues an ingest job in a namespace and returns the job run
id, whose progress is polled with `get_ingest_job_run_status`.
"""

import base64
import json
import mimetypes
from pathlib import Path
from typing import Any, Dict, Optional, Union

from .clients.sourcesync import SourceSyncClient
from .exceptions import RequestFailedError
from .models import (
    DEFAULT_CHUNK_CONFIG,
    ConnectorIngestConfig,
    FilePart,
    HttpMethod,
    SitemapIngestConfig,
    TextIngestConfig,
    UrlsIngestConfig,
    WebsiteIngestConfig,
)
from .schemas import (
    IngestConnectorParams,
    IngestFileParams,
    IngestJobRunStatusParams,
    IngestSitemapParams,
    IngestTextParams,
    IngestUrlsParams,
    IngestWebsiteParams,
)
from .utils.http import path_segment, to_lower_kebab_case
from .utils.logger import logger

IngestConfig = Union[
    TextIngestConfig, UrlsIngestConfig, SitemapIngestConfig, WebsiteIngestConfig, ConnectorIngestConfig
]


def ingest_body(namespace_id: str, ingest_config: IngestConfig) -> Dict[str, Any]:
    """
    Builds the body shared by every ingest endpoint.

    The default chunk config is applied only when the caller gave none.

    Args:
        namespace_id: The resolved namespace.
        ingest_config: The validated ingest config.

    Returns:
        The JSON body with API field names.
    """
    payload = ingest_config.to_api()
    if ingest_config.chunk_config is None:
        payload["chunkConfig"] = DEFAULT_CHUNK_CONFIG.to_api()
    return {"namespaceId": namespace_id, "ingestConfig": payload}


async def _ingest(
    client: SourceSyncClient,
    path: str,
    ingest_config: IngestConfig,
    namespace_id: Optional[str],
    api_key: Optional[str],
    tenant_id: Optional[str],
) -> Any:
    body = ingest_body(client.namespace_id(namespace_id), ingest_config)
    return await client.request(HttpMethod.POST, path, api_key=api_key, tenant_id=tenant_id, body=body)


def read_file(params: IngestFileParams) -> FilePart:
    """
    Loads the upload described by the parameters into a multipart file part.

    Raises:
        RequestFailedError: If the file at `file_path` cannot be read. Nothing is sent.
    """
    if params.file_content:
        name = params.file_name or "upload"
        content = base64.b64decode(params.file_content)
    else:
        path = Path(params.file_path or "")
        try:
            content = path.read_bytes()
        except OSError as e:
            logger.error(f"Could not read {path}: {e}")
            raise RequestFailedError(f"could not read file {path}: {e.strerror or e}") from e
        name = params.file_name or path.name

    content_type = params.content_type or mimetypes.guess_type(name)[0] or "application/octet-stream"
    return (name, content, content_type)


async def ingest_file(client: SourceSyncClient, params: IngestFileParams) -> Any:
    """Uploads a single file as a multipart form; metadata and chunk config travel as JSON strings."""
    form = {"namespaceId": client.namespace_id(params.namespace_id)}
    if params.metadata is not None:
        form["metadata"] = json.dumps(params.metadata)
    form["chunkConfig"] = json.dumps((params.chunk_config or DEFAULT_CHUNK_CONFIG).to_api())

    return await client.request(
        HttpMethod.POST,
        "/v1/ingest/file",
        api_key=params.api_key,
        tenant_id=params.tenant_id,
        form=form,
        files={"file": read_file(params)},
    )


async def ingest_text(client: SourceSyncClient, params: IngestTextParams) -> Any:
    return await _ingest(
        client, "/v1/ingest/text", params.ingest_config, params.namespace_id, params.api_key, params.tenant_id
    )


async def ingest_urls(client: SourceSyncClient, params: IngestUrlsParams) -> Any:
    return await _ingest(
        client, "/v1/ingest/urls", params.ingest_config, params.namespace_id, params.api_key, params.tenant_id
    )


async def ingest_sitemap(client: SourceSyncClient, params: IngestSitemapParams) -> Any:
    return await _ingest(
        client, "/v1/ingest/sitemap", params.ingest_config, params.namespace_id, params.api_key, params.tenant_id
    )


async def ingest_website(client: SourceSyncClient, params: IngestWebsiteParams) -> Any:
    return await _ingest(
        client, "/v1/ingest/website", params.ingest_config, params.namespace_id, params.api_key, params.tenant_id
    )


async def ingest_connector(client: SourceSyncClient, params: IngestConnectorParams) -> Any:
    """Ingests everything picked for a connection, e.g. GOOGLE_DRIVE -> /v1/ingest/google-drive."""
    path = f"/v1/ingest/{to_lower_kebab_case(params.ingest_config.source)}"
    return await _ingest(client, path, params.ingest_config, params.namespace_id, params.api_key, params.tenant_id)


async def get_ingest_job_run_status(client: SourceSyncClient, params: IngestJobRunStatusParams) -> Any:
    query = {"namespaceId": client.namespace_id(params.namespace_id)}
    return await client.request(
        HttpMethod.GET,
        f"/v1/ingest-job-runs/{path_segment(params.ingest_job_run_id)}",
        api_key=params.api_key,
        tenant_id=params.tenant_id,
        query_params=query,
    )
