"""Wire models for the build API group.

Only the fields this package reads are declared; everything else the server
returns is kept as extra data so objects round-trip without loss.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from buildconfig_operations.errors import SerializationError

BUILD_API_VERSION = "build.openshift.io/v1"

M = TypeVar("M", bound=BaseModel)


class _Resource(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")


class ObjectMeta(_Resource):
    """Subset of Kubernetes object metadata."""

    name: str | None = None
    namespace: str | None = None
    uid: str | None = None
    resource_version: str | None = Field(default=None, alias="resourceVersion")
    creation_timestamp: str | None = Field(default=None, alias="creationTimestamp")
    labels: dict[str, str] = Field(default_factory=dict)
    annotations: dict[str, str] = Field(default_factory=dict)


class Build(_Resource):
    api_version: str | None = Field(default=None, alias="apiVersion")
    kind: str | None = None
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: dict[str, Any] = Field(default_factory=dict)
    status: dict[str, Any] = Field(default_factory=dict)


class BuildList(_Resource):
    api_version: str | None = Field(default=None, alias="apiVersion")
    kind: str | None = None
    items: list[Build] | None = None


class BuildConfig(_Resource):
    api_version: str | None = Field(default=None, alias="apiVersion")
    kind: str | None = None
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)
    spec: dict[str, Any] = Field(default_factory=dict)
    status: dict[str, Any] = Field(default_factory=dict)


class BuildRequest(_Resource):
    """Body of ``POST .../instantiate``.

    Optional request fields (``env``, ``triggeredBy``, ``revision``...) are
    passed through as extra data.
    """

    api_version: str | None = Field(default=None, alias="apiVersion")
    kind: str | None = None
    metadata: ObjectMeta = Field(default_factory=ObjectMeta)

    def with_api_version(self) -> BuildRequest:
        """Return a copy with apiVersion and kind filled in when missing."""

        return self.model_copy(
            update={
                "api_version": self.api_version or BUILD_API_VERSION,
                "kind": self.kind or "BuildRequest",
            }
        )


class WebHookTrigger(_Resource):
    secret: str | None = None
    allow_env: bool | None = Field(default=None, alias="allowEnv")


def to_json(model: BaseModel) -> str:
    """Serialize a model using wire names and dropping unset optionals."""

    try:
        return model.model_dump_json(by_alias=True, exclude_none=True)
    except (TypeError, ValueError) as exc:
        raise SerializationError(f"Cannot serialize {type(model).__name__}: {exc}") from exc


def from_json(model: type[M], payload: bytes | str) -> M:
    try:
        return model.model_validate_json(payload)
    except ValidationError as exc:
        raise SerializationError(f"Cannot decode {model.__name__}: {exc}") from exc
