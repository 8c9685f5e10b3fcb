"""HTTP transport shared by all BuildConfig operations.

Wraps a ``requests.Session`` so the rest of the package deals in prepared
requests, decoded models and ``BuildClientError`` subclasses only.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field, replace
from typing import Any, TypeVar

import requests
from pydantic import BaseModel

from buildconfig_operations.errors import ApiError, TransportError
from buildconfig_operations.models import from_json

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0
USER_AGENT = "buildconfig-operations"

M = TypeVar("M", bound=BaseModel)


def join_url(base: str, *parts: str) -> str:
    """Join URL path segments with exactly one slash between them."""

    url = base.rstrip("/")
    for part in parts:
        segment = part.strip("/")
        if segment:
            url = f"{url}/{segment}"
    return url


def create_session(*, token: str | None = None, verify_tls: bool = True) -> requests.Session:
    session = requests.Session()
    session.headers.update(
        {
            "Accept": "application/json",
            "User-Agent": USER_AGENT,
        }
    )
    if token:
        session.headers["Authorization"] = f"Bearer {token}"
    session.verify = verify_tls
    return session


@dataclass(frozen=True, slots=True)
class RequestExecutor:
    """Sends requests over a shared session with a fixed timeout.

    Executors are values: ``with_timeout`` derives a new one and leaves the
    original (and the session it shares) untouched.
    """

    session: requests.Session = field(default_factory=requests.Session)
    timeout: float = DEFAULT_TIMEOUT_SECONDS
    connect_timeout: float = DEFAULT_TIMEOUT_SECONDS

    def with_timeout(self, seconds: float) -> RequestExecutor:
        """Return an executor whose read/write timeout is ``seconds``."""

        return replace(self, timeout=seconds)

    def prepare(self, request: requests.Request) -> requests.PreparedRequest:
        return self.session.prepare_request(request)

    def send(self, prepared: requests.PreparedRequest) -> requests.Response:
        logger.debug(
            "Sending request",
            extra={"method": prepared.method, "url": prepared.url, "timeout": self.timeout},
        )
        try:
            return self.session.send(prepared, timeout=(self.connect_timeout, self.timeout))
        except requests.RequestException as exc:
            raise TransportError(f"{prepared.method} {prepared.url} failed: {exc}") from exc

    def request(
        self,
        method: str,
        url: str,
        *,
        model: type[M] | None = None,
        data: str | bytes | None = None,
        params: dict[str, str] | None = None,
        headers: dict[str, str] | None = None,
    ) -> M | None:
        """Build, send and decode a request in one call."""

        prepared = self.prepare(
            requests.Request(method, url, data=data, params=params, headers=headers)
        )
        return handle_response(self.send(prepared), model)


def _status_message(response: requests.Response) -> str:
    """Return the server's Status message when the body carries one."""

    try:
        payload: Any = response.json()
    except ValueError:
        return response.reason or ""
    if isinstance(payload, dict):
        message = payload.get("message")
        if isinstance(message, str) and message.strip():
            return message
    return response.reason or ""


def handle_response(response: requests.Response, model: type[M] | None) -> M | None:
    """Raise ``ApiError`` for non-2xx responses, otherwise decode into ``model``.

    With ``model=None`` the body is discarded.
    """

    request = response.request
    method = request.method if request is not None else "?"
    if not 200 <= response.status_code < 300:
        message = f"{method} {response.url} failed"
        detail = _status_message(response)
        if detail:
            message = f"{message}: {detail}"
        logger.warning(
            "Request failed",
            extra={"method": method, "url": response.url, "status": response.status_code},
        )
        raise ApiError(
            message,
            status_code=response.status_code,
            body=response.text,
        )

    if model is None:
        response.close()
        return None
    return from_json(model, response.content)
