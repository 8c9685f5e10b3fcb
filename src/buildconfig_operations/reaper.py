"""Deletion of the Builds spawned by a BuildConfig.

The server does not cascade BuildConfig deletion to its Builds. Builds carry
the BuildConfig name twice: as a label, truncated to the 63 character label
value limit and usable in selectors, and as an annotation holding the full
name. Candidates are listed by label and confirmed by annotation so that two
BuildConfigs sharing a 63 character prefix never reap each other's builds.
"""

from __future__ import annotations

import logging

from buildconfig_operations.errors import BuildClientError, ReapError
from buildconfig_operations.models import Build
from buildconfig_operations.resources import ResourceClient

logger = logging.getLogger(__name__)

BUILD_CONFIG_LABEL = "openshift.io/build-config.name"
BUILD_CONFIG_ANNOTATION = "openshift.io/build-config.name"
LABEL_VALUE_MAX_LENGTH = 63


def label_value(name: str) -> str:
    return name[:LABEL_VALUE_MAX_LENGTH]


def _owned_by(build: Build, name: str) -> bool:
    return build.metadata.annotations.get(BUILD_CONFIG_ANNOTATION) == name


class DependentResourceReaper:
    """Best-effort cleanup of builds owned by a BuildConfig.

    Every matching build is attempted. Failures are collected and raised
    together as ``ReapError`` once the loop completes.
    """

    def __init__(self, builds: ResourceClient) -> None:
        self._builds = builds

    def matching_builds(self, namespace: str, name: str) -> list[Build]:
        candidates = self._builds.list(namespace, {BUILD_CONFIG_LABEL: label_value(name)})
        return [build for build in candidates if _owned_by(build, name)]

    def delete_builds(self, namespace: str, name: str | None) -> list[str]:
        """Delete the builds of BuildConfig ``namespace/name``.

        Returns:
            ``namespace/name`` of every build that was deleted.

        Raises:
            ReapError: If any build could not be deleted.
        """

        if not name:
            return []

        deleted: list[str] = []
        failures: dict[str, BuildClientError] = {}
        for build in self.matching_builds(namespace, name):
            build_namespace = build.metadata.namespace or namespace
            build_name = build.metadata.name
            if not build_name:
                continue
            key = f"{build_namespace}/{build_name}"
            try:
                if self._builds.delete(build_namespace, build_name):
                    deleted.append(key)
            except BuildClientError as exc:
                logger.warning(
                    "Failed to delete build", extra={"build": key, "error": str(exc)}
                )
                failures[key] = exc

        logger.info(
            "Reaped builds of build config",
            extra={"build_config": name, "namespace": namespace, "deleted": len(deleted)},
        )
        if failures:
            raise ReapError(failures)
        return deleted
