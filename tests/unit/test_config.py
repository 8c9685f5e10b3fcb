"""Unit tests for settings loading."""

from __future__ import annotations

from pathlib import Path

import pytest
from pydantic import ValidationError

from buildconfig_operations.config import ClientSettings

_ENV_VARS = (
    "OPENSHIFT_URL",
    "OPENSHIFT_TOKEN",
    "OPENSHIFT_NAMESPACE",
    "OPENSHIFT_VERIFY_TLS",
    "OPENSHIFT_REQUEST_TIMEOUT",
    "OPENSHIFT_CONNECT_TIMEOUT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_settings_loads_from_dotenv(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.chdir(tmp_path)
    (tmp_path / ".env").write_text(
        "\n".join(
            [
                "OPENSHIFT_URL=https://api.cluster.test:6443",
                "OPENSHIFT_TOKEN=sha256~abc",
                "OPENSHIFT_VERIFY_TLS=false",
                "LOG_LEVEL=DEBUG",
                "",
            ]
        ),
        encoding="utf-8",
    )

    settings = ClientSettings()

    assert settings.api_url == "https://api.cluster.test:6443"
    assert settings.token == "sha256~abc"
    assert settings.verify_tls is False
    assert settings.log_level == "DEBUG"


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENSHIFT_URL", "https://api")

    settings = ClientSettings(_env_file=None)

    assert settings.token is None
    assert settings.namespace == "default"
    assert settings.verify_tls is True
    assert settings.request_timeout == 10.0
    assert settings.connect_timeout == 10.0
    assert settings.log_level == "INFO"


def test_settings_require_api_url() -> None:
    with pytest.raises(ValidationError):
        ClientSettings(_env_file=None)


def test_settings_reject_non_positive_timeout(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPENSHIFT_URL", "https://api")
    monkeypatch.setenv("OPENSHIFT_REQUEST_TIMEOUT", "0")

    with pytest.raises(ValidationError):
        ClientSettings(_env_file=None)
