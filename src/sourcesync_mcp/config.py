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
Configuration module.

Environment-derived settings are captured once into an immutable `Settings`
snapshot. The resolver functions fill identifiers that a caller omitted from
that snapshot and fail when neither source provides a value.
"""

import os
from enum import Enum
from functools import lru_cache
from typing import Iterable, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field

from .exceptions import MissingConfigError

DEFAULT_API_URL = "https://api.sourcesync.ai"
DEFAULT_TIMEOUT_MS = 30000


class ConfigKind(str, Enum):
    """Identifiers that may be defaulted from the environment."""

    API_KEY = "apiKey"
    NAMESPACE_ID = "namespaceId"
    ORGANIZATION_ID = "organizationId"

    @property
    def env_var(self) -> str:
        return _ENV_VARS[self]

    @property
    def param_name(self) -> str:
        return _PARAM_NAMES[self]

    @property
    def label(self) -> str:
        return _LABELS[self]


_ENV_VARS = {
    ConfigKind.API_KEY: "SOURCESYNC_API_KEY",
    ConfigKind.NAMESPACE_ID: "SOURCESYNC_NAMESPACE_ID",
    ConfigKind.ORGANIZATION_ID: "SOURCESYNC_ORGANIZATION_ID",
}

_PARAM_NAMES = {
    ConfigKind.API_KEY: "api_key",
    ConfigKind.NAMESPACE_ID: "namespace_id",
    ConfigKind.ORGANIZATION_ID: "organization_id",
}

_LABELS = {
    ConfigKind.API_KEY: "API key",
    ConfigKind.NAMESPACE_ID: "Namespace ID",
    ConfigKind.ORGANIZATION_ID: "Organization ID",
}


class Settings(BaseModel):
    """Process-wide configuration snapshot."""

    api_url: str = Field(DEFAULT_API_URL, description="Base URL of the SourceSync API")
    timeout_ms: int = Field(DEFAULT_TIMEOUT_MS, gt=0, description="Per-request timeout in milliseconds")
    api_key: Optional[str] = Field(None, description="Default API key")
    organization_id: Optional[str] = Field(None, description="Default organization identifier")
    namespace_id: Optional[str] = Field(None, description="Default namespace identifier")
    tenant_id: Optional[str] = Field(None, description="Default tenant forwarded as X-Tenant-ID")
    log_level: str = Field("INFO", description="Log level for the stderr sink")

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """Builds a snapshot from environment variables.

        Empty values are treated as unset.

        Args:
            environ: Mapping to read from. Defaults to `os.environ`.

        Returns:
            The validated Settings.

        Raises:
            pydantic.ValidationError: If a numeric value cannot be parsed.
        """
        env = os.environ if environ is None else environ

        def read(name: str) -> Optional[str]:
            value = env.get(name)
            return value if value else None

        values = {
            "api_url": read("SOURCESYNC_API_URL"),
            "timeout_ms": read("SOURCESYNC_TIMEOUT_MS"),
            "api_key": read(ConfigKind.API_KEY.env_var),
            "organization_id": read(ConfigKind.ORGANIZATION_ID.env_var),
            "namespace_id": read(ConfigKind.NAMESPACE_ID.env_var),
            "tenant_id": read("SOURCESYNC_TENANT_ID"),
            "log_level": read("SOURCESYNC_LOG_LEVEL"),
        }
        return cls.model_validate({key: value for key, value in values.items() if value is not None})

    def default_for(self, kind: ConfigKind) -> Optional[str]:
        """Returns the configured default for an identifier kind."""
        if kind is ConfigKind.API_KEY:
            return self.api_key
        if kind is ConfigKind.NAMESPACE_ID:
            return self.namespace_id
        return self.organization_id


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Returns the process-wide settings, read from the environment on first use."""
    return Settings.from_env()


def resolve(explicit: Optional[str], kind: ConfigKind, settings: Settings) -> str:
    """Resolves an identifier, preferring the explicit value over the default.

    An explicit empty string counts as not provided.

    Raises:
        MissingConfigError: If neither the explicit value nor the default is set.
    """
    if explicit:
        return explicit
    fallback = settings.default_for(kind)
    if fallback:
        return fallback
    raise MissingConfigError(kind)


class ResolvedDefaults(BaseModel):
    """Identifiers resolved for a single call."""

    api_key: str
    namespace_id: Optional[str] = None
    organization_id: Optional[str] = None

    model_config = ConfigDict(frozen=True)


def resolve_defaults(
    settings: Settings,
    api_key: Optional[str] = None,
    namespace_id: Optional[str] = None,
    organization_id: Optional[str] = None,
    kinds: Iterable[ConfigKind] = (ConfigKind.API_KEY,),
) -> ResolvedDefaults:
    """Resolves the API key plus any other requested identifier kinds.

    Kinds that were not requested are left as None even when a value is available.
    """
    requested = set(kinds)
    return ResolvedDefaults(
        api_key=resolve(api_key, ConfigKind.API_KEY, settings),
        namespace_id=(
            resolve(namespace_id, ConfigKind.NAMESPACE_ID, settings)
            if ConfigKind.NAMESPACE_ID in requested
            else None
        ),
        organization_id=(
            resolve(organization_id, ConfigKind.ORGANIZATION_ID, settings)
            if ConfigKind.ORGANIZATION_ID in requested
            else None
        ),
    )
