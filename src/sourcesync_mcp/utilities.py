# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_synthesis

from typing import Dict

from .clients.sourcesync import SourceSyncClient
from .schemas import FetchUrlContentParams


async def fetch_url_content(client: SourceSyncClient, params: FetchUrlContentParams) -> Dict[str, str]:
    """
    Fetches the text behind a URL, typically a parsed text file URL from fetch_documents.

    Returns:
        {"content": <body text>}.
    """
    text = await client.fetch_text(params.url, api_key=params.api_key, tenant_id=params.tenant_id)
    return {"content": text}
