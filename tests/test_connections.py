# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_synthesis

import pytest
from pydantic import ValidationError

from sourcesync_mcp.clients.sourcesync import SourceSyncClient
from sourcesync_mcp.connections import (
    create_connection,
    get_connection,
    list_connections,
    revoke_connection,
    update_connection,
)
from sourcesync_mcp.models import HttpMethod
from sourcesync_mcp.schemas import (
    CreateConnectionParams,
    GetConnectionParams,
    ListConnectionsParams,
    RevokeConnectionParams,
    UpdateConnectionParams,
)
from tests.mocks import RecordingTransport

BASE = "https://api.test.sourcesync.ai"


class TestConnections:
    @pytest.mark.asyncio
    async def test_create(self, client: SourceSyncClient, transport: RecordingTransport) -> None:
        params = CreateConnectionParams(
            name="Team Drive", connector="GOOGLE_DRIVE", client_redirect_url="https://app.example/done"
        )

        await create_connection(client, params)

        assert transport.last.method == HttpMethod.POST
        assert transport.last.url == f"{BASE}/v1/connections"
        assert transport.last_body == {
            "namespaceId": "ns_1",
            "name": "Team Drive",
            "connector": "GOOGLE_DRIVE",
            "clientRedirectUrl": "https://app.example/done",
        }

    def test_create_rejects_unknown_connector(self) -> None:
        with pytest.raises(ValidationError):
            CreateConnectionParams(name="x", connector="GITHUB")

    @pytest.mark.asyncio
    async def test_list_without_connector(self, client: SourceSyncClient, transport: RecordingTransport) -> None:
        await list_connections(client, ListConnectionsParams())

        assert transport.last.method == HttpMethod.GET
        assert transport.last.url == f"{BASE}/v1/connections?namespaceId=ns_1"

    @pytest.mark.asyncio
    async def test_list_with_connector(self, client: SourceSyncClient, transport: RecordingTransport) -> None:
        await list_connections(client, ListConnectionsParams(namespace_id="ns_2", connector="NOTION"))
        assert transport.last.url == f"{BASE}/v1/connections?namespaceId=ns_2&connector=NOTION"

    @pytest.mark.asyncio
    async def test_get(self, client: SourceSyncClient, transport: RecordingTransport) -> None:
        await get_connection(client, GetConnectionParams(connection_id="conn_1"))

        assert transport.last.method == HttpMethod.GET
        assert transport.last.url == f"{BASE}/v1/connections/conn_1?namespaceId=ns_1"
        assert transport.last.content is None

    @pytest.mark.asyncio
    async def test_update(self, client: SourceSyncClient, transport: RecordingTransport) -> None:
        await update_connection(client, UpdateConnectionParams(connection_id="conn_1", name="Renamed"))

        assert transport.last.method == HttpMethod.PATCH
        assert transport.last.url == f"{BASE}/v1/connections/conn_1"
        assert transport.last_body == {"namespaceId": "ns_1", "name": "Renamed"}

    @pytest.mark.asyncio
    async def test_revoke(self, client: SourceSyncClient, transport: RecordingTransport) -> None:
        await revoke_connection(client, RevokeConnectionParams(connection_id="conn_1", tenant_id="t1"))

        assert transport.last.method == HttpMethod.POST
        assert transport.last.url == f"{BASE}/v1/connections/conn_1/revoke"
        assert transport.last_body == {"namespaceId": "ns_1"}
        assert transport.last.headers["X-Tenant-ID"] == "t1"

    def test_connection_id_required(self) -> None:
        with pytest.raises(ValidationError):
            GetConnectionParams(connection_id="")

    @pytest.mark.asyncio
    async def test_connection_id_is_escaped(self, client: SourceSyncClient, transport: RecordingTransport) -> None:
        connection_id = "conn_1/revoke?namespaceId=other#"
        segment = "conn_1%2Frevoke%3FnamespaceId%3Dother%23"

        await get_connection(client, GetConnectionParams(connection_id=connection_id))
        await update_connection(client, UpdateConnectionParams(connection_id=connection_id, name="Renamed"))
        await revoke_connection(client, RevokeConnectionParams(connection_id=connection_id))

        get_request, update_request, revoke_request = transport.requests
        assert get_request.url == f"{BASE}/v1/connections/{segment}?namespaceId=ns_1"
        assert update_request.url == f"{BASE}/v1/connections/{segment}"
        assert revoke_request.url == f"{BASE}/v1/connections/{segment}/revoke"
