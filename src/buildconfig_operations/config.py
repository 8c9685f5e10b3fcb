"""Client configuration.

Loaded from environment variables and a local ``.env`` file (if present):
- OPENSHIFT_URL               API server base URL (required)
- OPENSHIFT_TOKEN             bearer token (optional)
- OPENSHIFT_NAMESPACE         default namespace
- OPENSHIFT_VERIFY_TLS        verify the server certificate
- OPENSHIFT_REQUEST_TIMEOUT   read/write timeout in seconds
- OPENSHIFT_CONNECT_TIMEOUT   connect timeout in seconds
- LOG_LEVEL                   root logging level
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    """Settings for talking to the build API.

    Notes:
        Tests can point at a specific env file with
        ``ClientSettings(_env_file=path_to_env)``.
    """

    api_url: str = Field(
        default="",
        validation_alias="OPENSHIFT_URL",
        description="API server base URL, e.g. https://api.cluster.example:6443",
    )
    token: str | None = Field(
        default=None,
        validation_alias="OPENSHIFT_TOKEN",
        description="Bearer token used for API authentication",
    )
    namespace: str = Field(
        default="default",
        validation_alias="OPENSHIFT_NAMESPACE",
        description="Namespace used when none is given explicitly",
    )
    verify_tls: bool = Field(
        default=True,
        validation_alias="OPENSHIFT_VERIFY_TLS",
        description="Verify the API server TLS certificate",
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        validation_alias="OPENSHIFT_REQUEST_TIMEOUT",
        description="Default read/write timeout in seconds",
    )
    connect_timeout: float = Field(
        default=10.0,
        gt=0,
        validation_alias="OPENSHIFT_CONNECT_TIMEOUT",
        description="Connect timeout in seconds",
    )
    log_level: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Root logging level",
    )

    model_config = SettingsConfigDict(
        env_prefix="",
        env_file=".env",
        extra="ignore",
    )

    @model_validator(mode="after")
    def _require_api_url(self) -> ClientSettings:
        if not self.api_url.strip():
            raise ValueError("OPENSHIFT_URL is required")
        return self
