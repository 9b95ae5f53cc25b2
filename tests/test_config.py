from __future__ import annotations

import pytest

from phonedir.config import DirectoryConfig
from phonedir.exceptions import DirectoryConfigError


def test_defaults() -> None:
    config = DirectoryConfig()
    assert config.base_url == "http://localhost:3001/api/persons"
    assert config.notification_timeout == 5.0


def test_trailing_slash_stripped() -> None:
    assert DirectoryConfig(base_url="https://example.com/api/persons/").base_url == "https://example.com/api/persons"


@pytest.mark.parametrize("url", ["localhost:3001/api/persons", "ftp://example.com/x", ""])
def test_non_http_base_url_rejected(url: str) -> None:
    with pytest.raises(DirectoryConfigError):
        DirectoryConfig(base_url=url)


def test_non_positive_timeouts_rejected() -> None:
    with pytest.raises(DirectoryConfigError):
        DirectoryConfig(notification_timeout=0)
    with pytest.raises(DirectoryConfigError):
        DirectoryConfig(request_timeout=-1)


def test_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PHONEDIR_BASE_URL", "http://directory.test/api/persons")
    monkeypatch.setenv("PHONEDIR_NOTIFICATION_TIMEOUT", "2.5")
    monkeypatch.setenv("PHONEDIR_REQUEST_TIMEOUT", "3")

    config = DirectoryConfig.from_env()

    assert config.base_url == "http://directory.test/api/persons"
    assert config.notification_timeout == 2.5
    assert config.request_timeout == 3.0


def test_from_env_overrides_win(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PHONEDIR_BASE_URL", "http://directory.test/api/persons")
    monkeypatch.setenv("PHONEDIR_NOTIFICATION_TIMEOUT", "not-a-number")

    config = DirectoryConfig.from_env(base_url="http://other.test/persons", notification_timeout=1.0)

    assert config.base_url == "http://other.test/persons"
    assert config.notification_timeout == 1.0


def test_from_env_invalid_number(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PHONEDIR_REQUEST_TIMEOUT", "soon")
    with pytest.raises(DirectoryConfigError):
        DirectoryConfig.from_env()
