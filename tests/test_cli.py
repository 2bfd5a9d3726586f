# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_synthesis

from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from sourcesync_mcp.config import Settings
from sourcesync_mcp.exceptions import MissingConfigError, RequestFailedError
from sourcesync_mcp.main import check_api_key, main


class TestCLI:
    @patch("sourcesync_mcp.main.mcp")
    def test_default_stdio(self, mock_mcp: MagicMock) -> None:
        main([])
        mock_mcp.run.assert_called_once_with(transport="stdio")

    @patch("sourcesync_mcp.main.mcp")
    def test_http_transport(self, mock_mcp: MagicMock) -> None:
        main(["--transport", "streamable-http", "--host", "0.0.0.0", "--port", "9001"])
        mock_mcp.run.assert_called_once_with(transport="streamable-http", host="0.0.0.0", port=9001)

    def test_unknown_transport(self) -> None:
        with pytest.raises(SystemExit):
            main(["--transport", "websocket"])

    @patch("sourcesync_mcp.main.configure_logging")
    @patch("sourcesync_mcp.main.mcp")
    def test_log_level(self, mock_mcp: MagicMock, mock_configure: MagicMock) -> None:
        main(["--log-level", "debug"])
        mock_configure.assert_called_once_with("debug")

    @patch("sourcesync_mcp.main.get_settings", side_effect=ValueError("bad timeout"))
    def test_invalid_configuration(self, mock_settings: MagicMock) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 1

    @patch("sourcesync_mcp.main.mcp")
    @patch("sourcesync_mcp.main.check_api_key", new_callable=AsyncMock, return_value=True)
    def test_check_valid(self, mock_check: AsyncMock, mock_mcp: MagicMock) -> None:
        main(["--check"])
        mock_check.assert_awaited_once()
        mock_mcp.run.assert_not_called()

    @patch("sourcesync_mcp.main.check_api_key", new_callable=AsyncMock, return_value=False)
    def test_check_rejected(self, mock_check: AsyncMock) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--check"])
        assert exc_info.value.code == 1

    @patch("sourcesync_mcp.main.check_api_key", new_callable=AsyncMock, side_effect=RequestFailedError("refused"))
    def test_check_failure(self, mock_check: AsyncMock) -> None:
        with pytest.raises(SystemExit) as exc_info:
            main(["--check"])
        assert exc_info.value.code == 1

    @pytest.mark.asyncio
    async def test_check_api_key_uses_settings(self) -> None:
        with (
            patch("sourcesync_mcp.main.get_settings", return_value=Settings(api_key="key")),
            patch("sourcesync_mcp.main.validate_api_key", new_callable=AsyncMock, return_value=True) as mock_validate,
        ):
            assert await check_api_key() is True

        client, params = mock_validate.await_args.args
        assert client.settings.api_key == "key"
        assert params.api_key is None

    @pytest.mark.asyncio
    async def test_check_api_key_resolves_configured_defaults(self) -> None:
        settings = Settings(api_key="key", organization_id="org_1")
        with (
            patch("sourcesync_mcp.main.get_settings", return_value=settings),
            patch("sourcesync_mcp.main.validate_api_key", new_callable=AsyncMock, return_value=True),
            patch("sourcesync_mcp.main.logger") as mock_logger,
        ):
            assert await check_api_key() is True

        mock_logger.info.assert_called_once_with("Checking API key (namespace=-, organization=org_1)")

    @pytest.mark.asyncio
    async def test_check_api_key_without_key(self) -> None:
        with (
            patch("sourcesync_mcp.main.get_settings", return_value=Settings()),
            patch("sourcesync_mcp.main.validate_api_key", new_callable=AsyncMock) as mock_validate,
        ):
            with pytest.raises(MissingConfigError):
                await check_api_key()

        mock_validate.assert_not_awaited()
