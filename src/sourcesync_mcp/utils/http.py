# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_synthesis

import json
import re
from typing import Dict, List, Optional, Tuple
from urllib.parse import quote

import httpx

from sourcesync_mcp.models import BuiltRequest, RequestSpec


def create_http_client(timeout_ms: int) -> httpx.AsyncClient:
    """Creates an async HTTP client bounded by the given timeout.

    Args:
        timeout_ms: Timeout applied to connect, read, write and pool waits.

    Returns:
        A configured httpx.AsyncClient. The caller owns it and must close it.
    """
    return httpx.AsyncClient(timeout=timeout_ms / 1000)


def path_segment(value: str) -> str:
    """Percent-encodes a caller-supplied id for use as a single path segment.

    Reserved characters are encoded and a bare '.' or '..' is spelled out as
    %2E, so an id always stays one segment of the path it is put in.
    """
    segment = quote(value, safe="")
    if segment in (".", ".."):
        return segment.replace(".", "%2E")
    return segment


def build_request(spec: RequestSpec, base_url: str) -> BuiltRequest:
    """Builds the URL, headers and serialized body for a request.

    Query parameters whose value is None are skipped; the rest keep their
    insertion order. A JSON body sets Content-Type; a multipart form leaves it
    to httpx so the boundary is filled in. X-Tenant-ID is only sent with a tenant.
    """
    url = f"{base_url.rstrip('/')}{spec.path}"

    if spec.query_params:
        pairs: List[Tuple[str, str]] = [(key, value) for key, value in spec.query_params.items() if value is not None]
        if pairs:
            url = f"{url}?{httpx.QueryParams(pairs)}"

    headers: Dict[str, str] = {
        "Authorization": f"Bearer {spec.credential}",
        "Accept": "application/json",
    }

    content: Optional[str] = None
    if spec.body is not None and spec.files is None:
        headers["Content-Type"] = "application/json"
        content = json.dumps(spec.body)

    if spec.tenant_id:
        headers["X-Tenant-ID"] = spec.tenant_id

    return BuiltRequest(
        method=spec.method, url=url, headers=headers, content=content, data=spec.form, files=spec.files
    )


def to_lower_kebab_case(value: str) -> str:
    """Converts 'GOOGLE_DRIVE' or 'GoogleDrive' to 'google-drive'."""
    value = re.sub(r"([a-z])([A-Z])", r"\1-\2", value)
    value = re.sub(r"[\s_]+", "-", value)
    return value.lower()
