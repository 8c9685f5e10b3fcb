"""Error taxonomy for BuildConfig operations.

Every failure surfaces as a ``BuildClientError`` subclass. The underlying cause
(requests exception, OSError, pydantic ValidationError) is chained via
``raise ... from`` so callers can inspect ``__cause__``.
"""

from __future__ import annotations


class BuildClientError(Exception):
    """Base for all errors raised by this package."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(BuildClientError):
    """Bad local input (missing file, unset secret, unbound resource name)."""


class TransportError(BuildClientError):
    """Connection or I/O failure while sending a request."""


class UploadError(TransportError):
    """I/O failure while streaming a binary payload to the server."""


class SerializationError(BuildClientError):
    """A request body could not be encoded or a response could not be decoded."""


class ApiError(BuildClientError):
    """The server answered with a non-2xx status."""

    def __init__(self, message: str, *, status_code: int, body: str = "") -> None:
        super().__init__(message)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        return f"{self.message} (status {self.status_code})"


class ReapError(BuildClientError):
    """One or more dependent builds could not be deleted.

    ``failures`` maps ``namespace/name`` to the error raised for that build.
    """

    def __init__(self, failures: dict[str, BuildClientError]) -> None:
        names = ", ".join(sorted(failures))
        super().__init__(f"Failed to delete {len(failures)} build(s): {names}")
        self.failures = failures
