"""Build resource client used for dependent-build cleanup."""

from __future__ import annotations

import logging
from typing import Protocol, cast

from buildconfig_operations.errors import ApiError
from buildconfig_operations.models import BUILD_API_VERSION, Build, BuildList
from buildconfig_operations.transport import RequestExecutor, join_url

logger = logging.getLogger(__name__)


class ResourceClient(Protocol):
    """List/delete primitives over a namespaced resource collection."""

    def list(self, namespace: str, label_selector: dict[str, str]) -> list[Build]: ...

    def delete(self, namespace: str, name: str) -> bool: ...


def format_label_selector(labels: dict[str, str]) -> str:
    return ",".join(f"{key}={value}" for key, value in labels.items())


def namespaced_url(api_url: str, namespace: str, plural: str, name: str = "") -> str:
    return join_url(api_url, "apis", BUILD_API_VERSION, "namespaces", namespace, plural, name)


class BuildsClient:
    """``ResourceClient`` for ``builds`` in the build API group."""

    plural = "builds"

    def __init__(self, executor: RequestExecutor, api_url: str) -> None:
        self._executor = executor
        self._api_url = api_url

    def list(self, namespace: str, label_selector: dict[str, str]) -> list[Build]:
        url = namespaced_url(self._api_url, namespace, self.plural)
        result = cast(
            BuildList,
            self._executor.request(
                "GET",
                url,
                params={"labelSelector": format_label_selector(label_selector)},
                model=BuildList,
            ),
        )
        return list(result.items or [])

    def delete(self, namespace: str, name: str) -> bool:
        """Delete a build; return False when it no longer exists."""

        url = namespaced_url(self._api_url, namespace, self.plural, name)
        try:
            self._executor.request("DELETE", url)
        except ApiError as exc:
            if exc.status_code == 404:
                logger.debug("Build already gone", extra={"namespace": namespace, "build": name})
                return False
            raise
        return True
