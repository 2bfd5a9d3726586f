# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_synthesis

from .clients.sourcesync import SourceSyncClient
from .exceptions import ErrorKind, SourceSyncError
from .models import HttpMethod
from .schemas import ValidateApiKeyParams
from .utils.logger import logger

_REJECTED_STATUSES = (401, 403)


async def validate_api_key(client: SourceSyncClient, params: ValidateApiKeyParams) -> bool:
    """
    Checks whether an API key is accepted by the SourceSync API.

    Lists namespaces as a cheap authenticated call.

    Returns:
        True if the key is accepted, False if the API rejects it with 401 or 403.

    Raises:
        SourceSyncError: For any other failure, including a missing key.
    """
    try:
        await client.request(HttpMethod.GET, "/v1/namespaces", api_key=params.api_key, tenant_id=params.tenant_id)
    except SourceSyncError as e:
        if e.kind == ErrorKind.API_ERROR and e.status in _REJECTED_STATUSES:
            logger.info(f"API key rejected (status={e.status})")
            return False
        raise
    return True
