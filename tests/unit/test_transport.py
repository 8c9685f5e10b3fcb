"""Unit tests for the request executor."""

from __future__ import annotations

import pytest
import requests

from buildconfig_operations.errors import ApiError, SerializationError, TransportError
from buildconfig_operations.models import Build
from buildconfig_operations.transport import RequestExecutor, create_session, join_url


def test_join_url_normalizes_slashes() -> None:
    assert join_url("https://api/", "/a/", "b") == "https://api/a/b"
    assert join_url("https://api", "") == "https://api"


def test_with_timeout_derives_copy_without_touching_original(session) -> None:
    shared = RequestExecutor(session=session, timeout=10.0)

    derived = shared.with_timeout(300.0)

    assert derived.timeout == 300.0
    assert shared.timeout == 10.0
    assert derived.session is shared.session


def test_send_passes_connect_and_read_timeouts(session, executor) -> None:
    session.queue(200, {})

    executor.request("GET", "https://api/thing")

    assert session.send_kwargs[0]["timeout"] == (5.0, 10.0)


def test_request_decodes_model(session, executor, make_build) -> None:
    session.queue(201, make_build("frontend-1"))

    build = executor.request("POST", "https://api/x", model=Build)

    assert isinstance(build, Build)
    assert build.metadata.name == "frontend-1"


def test_non_2xx_raises_api_error_with_status_message(session, executor) -> None:
    session.queue(403, {"kind": "Status", "message": "forbidden: no access"})

    with pytest.raises(ApiError) as excinfo:
        executor.request("GET", "https://api/x")

    assert excinfo.value.status_code == 403
    assert "forbidden: no access" in str(excinfo.value)
    assert "forbidden" in excinfo.value.body


def test_invalid_body_raises_serialization_error(session, executor) -> None:
    session.queue(200, ["not", "an", "object"])

    with pytest.raises(SerializationError):
        executor.request("GET", "https://api/x", model=Build)


def test_connection_failure_raises_transport_error(session, executor) -> None:
    session.queue_error(requests.exceptions.ConnectionError("refused"))

    with pytest.raises(TransportError) as excinfo:
        executor.request("GET", "https://api/x")

    assert isinstance(excinfo.value.__cause__, requests.exceptions.ConnectionError)


def test_create_session_sets_bearer_token_and_tls() -> None:
    session = create_session(token="t0k", verify_tls=False)

    assert session.headers["Authorization"] == "Bearer t0k"
    assert session.verify is False


def test_create_session_without_token_has_no_authorization() -> None:
    assert "Authorization" not in create_session().headers
