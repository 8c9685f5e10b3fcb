"""Test configuration and fixtures."""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

import pytest
import requests

from buildconfig_operations.operations import BuildConfigOperations
from buildconfig_operations.transport import RequestExecutor

API_URL = "https://api.cluster.test:6443"

Responder = Callable[[requests.PreparedRequest], "tuple[int, Any] | requests.Response"]


def make_response(
    status: int,
    payload: Any = None,
    *,
    request: requests.PreparedRequest | None = None,
) -> requests.Response:
    response = requests.Response()
    response.status_code = status
    response.reason = "OK" if status < 400 else "Error"
    response.encoding = "utf-8"
    response._content = b"" if payload is None else json.dumps(payload).encode("utf-8")
    response._content_consumed = True
    if request is not None:
        response.request = request
        response.url = request.url or ""
    return response


class RecordingSession(requests.Session):
    """Session that records prepared requests instead of hitting the network.

    Queued items are consumed in order: ``(status, payload)`` tuples become
    responses, exceptions are raised, callables are invoked with the request
    and may return either a response or a ``(status, payload)`` tuple.
    """

    def __init__(self) -> None:
        super().__init__()
        self.sent: list[requests.PreparedRequest] = []
        self.send_kwargs: list[dict[str, Any]] = []
        self._queue: list[tuple[int, Any] | Exception | Responder] = []

    def queue(self, status: int, payload: Any = None) -> None:
        self._queue.append((status, payload))

    def queue_error(self, error: Exception) -> None:
        self._queue.append(error)

    def queue_responder(self, responder: Responder) -> None:
        self._queue.append(responder)

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:  # type: ignore[override]
        self.sent.append(request)
        self.send_kwargs.append(kwargs)
        if not self._queue:
            raise AssertionError(f"Unexpected request: {request.method} {request.url}")
        item = self._queue.pop(0)
        if isinstance(item, Exception):
            raise item
        if callable(item):
            result = item(request)
            if isinstance(result, requests.Response):
                return result
            item = result
        status, payload = item
        return make_response(status, payload, request=request)


def build_payload(
    name: str,
    namespace: str | None = "ns",
    annotations: dict[str, str] | None = None,
) -> dict[str, Any]:
    metadata: dict[str, Any] = {"name": name, "annotations": annotations or {}}
    if namespace is not None:
        metadata["namespace"] = namespace
    return {"apiVersion": "build.openshift.io/v1", "kind": "Build", "metadata": metadata}


@pytest.fixture
def session() -> RecordingSession:
    return RecordingSession()


@pytest.fixture
def executor(session: RecordingSession) -> RequestExecutor:
    return RequestExecutor(session=session, timeout=10.0, connect_timeout=5.0)


@pytest.fixture
def ops(executor: RequestExecutor) -> BuildConfigOperations:
    return BuildConfigOperations(
        executor=executor, api_url=API_URL, namespace="ns", name="frontend"
    )


@pytest.fixture
def make_build() -> Callable[..., dict[str, Any]]:
    return build_payload
