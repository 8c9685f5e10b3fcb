"""Binary build instantiation by streaming a payload to ``instantiatebinary``.

The payload is copied block by block from the source into the connection; it
is never read into memory as a whole. When the length is known the request
carries an exact ``Content-Length`` and is never sent chunked: the API server
answers ``Expect: 100-continue`` negotiation in a way that breaks chunked
uploads behind some proxies.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from pathlib import Path
from typing import BinaryIO, cast

import requests

from buildconfig_operations.context import ParameterContext
from buildconfig_operations.errors import ConfigurationError, TransportError, UploadError
from buildconfig_operations.models import Build
from buildconfig_operations.query import instantiate_binary_url
from buildconfig_operations.transport import RequestExecutor, handle_response

logger = logging.getLogger(__name__)

UNKNOWN_LENGTH = -1
BLOCK_SIZE = 64 * 1024
OCTET_STREAM = "application/octet-stream"

_STREAM_ERROR = (
    "Can't instantiate binary build, due to error reading/writing stream. "
    "Can be caused if the output stream was closed by the server."
)


class StreamingBody:
    """Read-only view over a byte source handed to the HTTP layer.

    Reads are capped at ``block_size`` so neither the transport nor a caller
    asking for "everything" (``read()``) can pull the whole payload at once.
    """

    def __init__(self, source: BinaryIO, block_size: int = BLOCK_SIZE) -> None:
        self._source = source
        self._block_size = block_size
        self.bytes_read = 0

    def read(self, size: int | None = -1) -> bytes:
        if size is None or size < 0 or size > self._block_size:
            size = self._block_size
        try:
            chunk = self._source.read(size)
        except OSError as exc:
            raise UploadError(_STREAM_ERROR) from exc
        self.bytes_read += len(chunk)
        return chunk

    def __iter__(self) -> Iterator[bytes]:
        while chunk := self.read(self._block_size):
            yield chunk


class StreamingUploader:
    """Uploads a binary payload and returns the Build the server creates."""

    def __init__(
        self,
        executor: RequestExecutor,
        resource_url: str,
        context: ParameterContext,
    ) -> None:
        self._executor = executor
        self._resource_url = resource_url
        self._context = context

    def upload_from_stream(self, stream: BinaryIO) -> Build:
        """Upload from an open stream of unknown length.

        The caller owns ``stream`` and is responsible for closing it.
        """

        return self._upload(stream, UNKNOWN_LENGTH)

    def upload_from_file(self, path: str | Path) -> Build:
        """Upload the contents of ``path`` with an exact ``Content-Length``.

        Raises:
            ConfigurationError: If ``path`` does not exist. No request is sent.
        """

        file_path = Path(path)
        if not file_path.is_file():
            raise ConfigurationError(
                f"Can't instantiate binary build from {file_path}: the file does not exist"
            )

        with file_path.open("rb") as fh:
            return self._upload(fh, file_path.stat().st_size)

    def prepare_request(
        self, stream: BinaryIO, content_length: int
    ) -> requests.PreparedRequest:
        """Prepare the POST without sending it.

        ``content_length`` of ``UNKNOWN_LENGTH`` leaves framing to the transport
        (chunked); any other value is declared verbatim.
        """

        request = requests.Request(
            "POST",
            instantiate_binary_url(self._resource_url, self._context),
            data=StreamingBody(stream),
            headers={"Content-Type": OCTET_STREAM, "Expect": "100-continue"},
        )
        prepared = self._executor.prepare(request)

        if content_length != UNKNOWN_LENGTH:
            prepared.headers.pop("Transfer-Encoding", None)
            prepared.headers["Content-Length"] = str(content_length)
        return prepared

    def _executor_for_call(self) -> RequestExecutor:
        timeout = self._context.timeout_seconds()
        if timeout is None:
            return self._executor
        return self._executor.with_timeout(timeout)

    def _upload(self, stream: BinaryIO, content_length: int) -> Build:
        executor = self._executor_for_call()
        prepared = self.prepare_request(stream, content_length)

        logger.info(
            "Uploading binary build input",
            extra={
                "url": prepared.url,
                "content_length": content_length,
                "timeout": executor.timeout,
            },
        )
        try:
            response = executor.send(prepared)
        except UploadError:
            raise
        except TransportError as exc:
            cause = exc.__cause__
            if isinstance(cause, requests.exceptions.Timeout):
                raise
            raise UploadError(_STREAM_ERROR) from (cause or exc)

        build = cast(Build, handle_response(response, Build))
        logger.info(
            "Binary build instantiated",
            extra={"build": build.metadata.name, "namespace": build.metadata.namespace},
        )
        return build
