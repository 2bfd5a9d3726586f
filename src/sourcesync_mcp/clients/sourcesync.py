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
SourceSync client module.

This module provides the client used by every operation to reach the
SourceSync API: credential resolution, request building and transport.
"""

from types import TracebackType
from typing import Any, Dict, Iterable, Optional, Type

from sourcesync_mcp.config import ConfigKind, ResolvedDefaults, Settings, get_settings, resolve, resolve_defaults
from sourcesync_mcp.interfaces import Transport
from sourcesync_mcp.models import FilePart, HttpMethod, RequestSpec
from sourcesync_mcp.utils.http import build_request

from .transport import HttpTransport


class SourceSyncClient:
    """Client for the SourceSync REST API.

    Holds no per-call state: every request builds its own RequestSpec, so one
    client can serve concurrent calls for different tenants.
    """

    def __init__(self, settings: Optional[Settings] = None, transport: Optional[Transport] = None):
        """Initializes the SourceSyncClient.

        Args:
            settings: Configuration snapshot. Defaults to the process-wide settings.
            transport: Transport used to send requests. Defaults to HttpTransport.
        """
        self.settings = settings or get_settings()
        self.transport = transport or HttpTransport()

    def resolve(self, value: Optional[str], kind: ConfigKind) -> str:
        """Resolves an identifier against this client's settings."""
        return resolve(value, kind, self.settings)

    def defaults(
        self,
        api_key: Optional[str] = None,
        namespace_id: Optional[str] = None,
        organization_id: Optional[str] = None,
        kinds: Iterable[ConfigKind] = (ConfigKind.API_KEY,),
    ) -> ResolvedDefaults:
        """Resolves the API key plus the other identifier kinds a call needs."""
        return resolve_defaults(self.settings, api_key, namespace_id, organization_id, kinds)

    def namespace_id(self, namespace_id: Optional[str]) -> str:
        return self.resolve(namespace_id, ConfigKind.NAMESPACE_ID)

    def tenant(self, tenant_id: Optional[str]) -> Optional[str]:
        """Returns the explicit tenant, else the configured default, else None."""
        return tenant_id or self.settings.tenant_id or None

    async def request(
        self,
        method: HttpMethod,
        path: str,
        api_key: Optional[str] = None,
        tenant_id: Optional[str] = None,
        body: Optional[Any] = None,
        query_params: Optional[Dict[str, Optional[str]]] = None,
        form: Optional[Dict[str, str]] = None,
        files: Optional[Dict[str, FilePart]] = None,
    ) -> Any:
        """Sends one request to the API and returns the parsed JSON response.

        Args:
            method: HTTP method.
            path: Path relative to the API base URL.
            api_key: Explicit API key; falls back to the configured default.
            tenant_id: Explicit tenant; falls back to the configured default.
            body: JSON-compatible request body.
            query_params: Query parameters; None values are dropped.
            form: Multipart form fields, sent with `files` instead of a JSON body.
            files: Multipart file parts.

        Returns:
            The parsed JSON response body.

        Raises:
            MissingConfigError: If no API key is available. Nothing is sent.
            SourceSyncError: On timeout, transport failure or API error.
        """
        spec = RequestSpec(
            method=method,
            path=path,
            body=body,
            tenant_id=self.tenant(tenant_id),
            query_params=query_params,
            form=form,
            files=files,
            credential=self.defaults(api_key).api_key,
        )
        built = build_request(spec, self.settings.api_url)
        return await self.transport.send(built, self.settings.timeout_ms)

    async def fetch_text(self, url: str, api_key: Optional[str] = None, tenant_id: Optional[str] = None) -> str:
        """Fetches an arbitrary URL, e.g. a parsed text file URL returned by the documents API.

        Authorization is only sent when an API key is given explicitly.
        """
        headers: Dict[str, str] = {}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        tenant = self.tenant(tenant_id)
        if tenant:
            headers["X-Tenant-ID"] = tenant
        return await self.transport.fetch_text(url, headers, self.settings.timeout_ms)

    async def close(self) -> None:
        await self.transport.close()

    async def __aenter__(self) -> "SourceSyncClient":
        return self

    async def __aexit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        await self.close()
