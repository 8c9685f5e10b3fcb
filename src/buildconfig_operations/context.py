"""Immutable parameters accumulated by chained BuildConfig operation calls.

Each ``with_*`` method returns a new ``ParameterContext`` with one setting
replaced. Fields are independent of each other, so applying the same set of
calls in any order yields an equal context.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import Enum


class TimeoutUnit(Enum):
    """Unit of a configured timeout value, stored as its length in milliseconds."""

    MILLISECONDS = 1
    SECONDS = 1_000
    MINUTES = 60_000
    HOURS = 3_600_000


@dataclass(frozen=True, slots=True)
class ParameterContext:
    """Optional request parameters for trigger and binary instantiation.

    ``None`` means unset. An empty string is a distinct, legal value.
    """

    secret: str | None = None
    trigger_type: str | None = None

    author_name: str | None = None
    author_email: str | None = None
    committer_name: str | None = None
    committer_email: str | None = None
    commit: str | None = None
    message: str | None = None
    as_file: str | None = None

    timeout: float | None = None
    timeout_unit: TimeoutUnit = TimeoutUnit.MILLISECONDS

    def with_secret(self, secret: str | None) -> ParameterContext:
        return replace(self, secret=secret)

    def with_trigger_type(self, trigger_type: str | None) -> ParameterContext:
        return replace(self, trigger_type=trigger_type)

    def with_author_name(self, author_name: str | None) -> ParameterContext:
        return replace(self, author_name=author_name)

    def with_author_email(self, author_email: str | None) -> ParameterContext:
        return replace(self, author_email=author_email)

    def with_committer_name(self, committer_name: str | None) -> ParameterContext:
        return replace(self, committer_name=committer_name)

    def with_committer_email(self, committer_email: str | None) -> ParameterContext:
        return replace(self, committer_email=committer_email)

    def with_commit(self, commit: str | None) -> ParameterContext:
        return replace(self, commit=commit)

    def with_message(self, message: str | None) -> ParameterContext:
        return replace(self, message=message)

    def with_as_file(self, as_file: str | None) -> ParameterContext:
        return replace(self, as_file=as_file)

    def with_timeout(
        self, timeout: float | None, unit: TimeoutUnit
    ) -> ParameterContext:
        """Replace the timeout setting (value and unit travel together)."""

        return replace(self, timeout=timeout, timeout_unit=unit)

    def timeout_seconds(self) -> float | None:
        """Return the configured timeout in seconds, or None when unset."""

        if self.timeout is None:
            return None
        return self.timeout * self.timeout_unit.value / 1000
