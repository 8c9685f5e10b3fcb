"""Operation object for a single BuildConfig.

``BuildConfigOperations`` is an immutable value. Every configuration call
(``in_namespace``, ``with_secret``, ``with_message``...) returns a new object
and leaves the receiver untouched, so partially configured objects can be
shared and reused freely::

    ops = BuildConfigOperations.from_settings(settings).with_name("frontend")
    ops.with_secret("s3cr3t").with_type("generic").trigger(WebHookTrigger())
    ops.instantiate_binary().with_message("local build").from_file("app.tar")
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import BinaryIO, cast

from buildconfig_operations.config import ClientSettings
from buildconfig_operations.context import ParameterContext, TimeoutUnit
from buildconfig_operations.errors import ApiError, ConfigurationError
from buildconfig_operations.models import (
    Build,
    BuildConfig,
    BuildRequest,
    WebHookTrigger,
    to_json,
)
from buildconfig_operations.reaper import DependentResourceReaper
from buildconfig_operations.resources import BuildsClient, ResourceClient, namespaced_url
from buildconfig_operations.transport import RequestExecutor, create_session, join_url
from buildconfig_operations.trigger import TriggerInvoker
from buildconfig_operations.uploader import StreamingUploader

logger = logging.getLogger(__name__)

BUILD_CONFIGS = "buildconfigs"
INSTANTIATE = "instantiate"


@dataclass(frozen=True, slots=True)
class BuildConfigOperations:
    executor: RequestExecutor
    api_url: str
    namespace: str | None = None
    name: str | None = None
    context: ParameterContext = field(default_factory=ParameterContext)
    builds: ResourceClient | None = None

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> BuildConfigOperations:
        session = create_session(token=settings.token, verify_tls=settings.verify_tls)
        executor = RequestExecutor(
            session=session,
            timeout=settings.request_timeout,
            connect_timeout=settings.connect_timeout,
        )
        return cls(executor=executor, api_url=settings.api_url, namespace=settings.namespace)

    # -- resource selection ------------------------------------------------

    def in_namespace(self, namespace: str) -> BuildConfigOperations:
        return replace(self, namespace=namespace)

    def with_name(self, name: str) -> BuildConfigOperations:
        return replace(self, name=name)

    @property
    def resource_url(self) -> str:
        if not self.namespace:
            raise ConfigurationError("A namespace is required for build config operations")
        if not self.name:
            raise ConfigurationError("A build config name is required")
        return namespaced_url(self.api_url, self.namespace, BUILD_CONFIGS, self.name)

    # -- chained parameters ------------------------------------------------

    def _with_context(self, context: ParameterContext) -> BuildConfigOperations:
        return replace(self, context=context)

    def with_secret(self, secret: str) -> BuildConfigOperations:
        return self._with_context(self.context.with_secret(secret))

    def with_type(self, trigger_type: str) -> BuildConfigOperations:
        return self._with_context(self.context.with_trigger_type(trigger_type))

    def instantiate_binary(self) -> BuildConfigOperations:
        """Start a binary instantiation chain (``with_*``, then ``from_*``)."""

        return replace(self)

    def with_author_name(self, author_name: str) -> BuildConfigOperations:
        return self._with_context(self.context.with_author_name(author_name))

    def with_author_email(self, author_email: str) -> BuildConfigOperations:
        return self._with_context(self.context.with_author_email(author_email))

    def with_committer_name(self, committer_name: str) -> BuildConfigOperations:
        return self._with_context(self.context.with_committer_name(committer_name))

    def with_committer_email(self, committer_email: str) -> BuildConfigOperations:
        return self._with_context(self.context.with_committer_email(committer_email))

    def with_commit(self, commit: str) -> BuildConfigOperations:
        return self._with_context(self.context.with_commit(commit))

    def with_message(self, message: str) -> BuildConfigOperations:
        return self._with_context(self.context.with_message(message))

    def as_file(self, file_name: str) -> BuildConfigOperations:
        return self._with_context(self.context.with_as_file(file_name))

    def with_timeout(self, timeout: float, unit: TimeoutUnit) -> BuildConfigOperations:
        return self._with_context(self.context.with_timeout(timeout, unit))

    def with_timeout_in_millis(self, timeout: float) -> BuildConfigOperations:
        return self.with_timeout(timeout, TimeoutUnit.MILLISECONDS)

    # -- terminal operations -----------------------------------------------

    def get(self) -> BuildConfig | None:
        """Fetch the BuildConfig, or None when it does not exist."""

        try:
            return cast(
                BuildConfig, self.executor.request("GET", self.resource_url, model=BuildConfig)
            )
        except ApiError as exc:
            if exc.status_code == 404:
                return None
            raise

    def instantiate(self, request: BuildRequest) -> Build:
        """Start a new Build from a ``BuildRequest``."""

        url = join_url(self.resource_url, INSTANTIATE)
        body = to_json(request.with_api_version())
        build = cast(
            Build,
            self.executor.request(
                "POST",
                url,
                data=body,
                headers={"Content-Type": "application/json"},
                model=Build,
            ),
        )
        logger.info(
            "Build instantiated",
            extra={"build_config": self.name, "build": build.metadata.name},
        )
        return build

    def trigger(self, webhook_trigger: WebHookTrigger) -> None:
        TriggerInvoker(self.executor, self.resource_url, self.context).trigger(webhook_trigger)

    def from_stream(self, stream: BinaryIO) -> Build:
        return self._uploader().upload_from_stream(stream)

    def from_file(self, path: str | Path) -> Build:
        return self._uploader().upload_from_file(path)

    def _uploader(self) -> StreamingUploader:
        return StreamingUploader(self.executor, self.resource_url, self.context)

    def reaper(self) -> DependentResourceReaper:
        builds = self.builds or BuildsClient(self.executor, self.api_url)
        return DependentResourceReaper(builds)

    def delete(self) -> bool:
        """Delete the BuildConfig and then every Build it spawned.

        Returns:
            False if the BuildConfig did not exist (nothing is reaped then).

        Raises:
            ReapError: If the BuildConfig was deleted but some builds were not.
        """

        url = self.resource_url
        try:
            self.executor.request("DELETE", url)
        except ApiError as exc:
            if exc.status_code == 404:
                logger.info(
                    "Build config not found",
                    extra={"namespace": self.namespace, "build_config": self.name},
                )
                return False
            raise

        self.reaper().delete_builds(cast(str, self.namespace), self.name)
        return True
