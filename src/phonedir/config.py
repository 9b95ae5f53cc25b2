"""Client configuration for phonedir."""

from __future__ import annotations

import dataclasses
import os
from typing import Any
from urllib.parse import urlsplit

from phonedir._constants import BASE_URL, NOTIFICATION_TIMEOUT, REQUEST_TIMEOUT, USER_AGENT
from phonedir.exceptions import DirectoryConfigError


def _env_float(name: str, value: str) -> float:
    try:
        parsed = float(value)
    except ValueError as exc:
        raise DirectoryConfigError(f"{name} must be a number, got {value!r}") from exc
    return parsed


@dataclasses.dataclass(frozen=True)
class DirectoryConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        URL of the person collection (e.g. ``http://host/api/persons``).
        Record URLs are built as ``{base_url}/{id}``.
    notification_timeout : float
        Seconds a success/error notification stays visible before it
        expires on its own.
    request_timeout : float
        Total seconds allowed for one HTTP request.
    user_agent : str
        ``User-Agent`` header sent with every request.
    """

    base_url: str = BASE_URL
    notification_timeout: float = NOTIFICATION_TIMEOUT
    request_timeout: float = REQUEST_TIMEOUT
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        parts = urlsplit(self.base_url)
        if parts.scheme not in {"http", "https"} or not parts.netloc:
            raise DirectoryConfigError(f"base_url must be an http(s) URL, got {self.base_url!r}")
        # Frozen dataclass; record URLs append "/{id}".
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.notification_timeout <= 0:
            raise DirectoryConfigError("notification_timeout must be positive")
        if self.request_timeout <= 0:
            raise DirectoryConfigError("request_timeout must be positive")

    @classmethod
    def from_env(cls, **overrides: Any) -> DirectoryConfig:
        """Create configuration from environment variables.

        Reads ``PHONEDIR_BASE_URL``, ``PHONEDIR_NOTIFICATION_TIMEOUT`` and
        ``PHONEDIR_REQUEST_TIMEOUT``. Explicit keyword arguments override
        environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("PHONEDIR_BASE_URL")
        if base_url is not None:
            config_kwargs["base_url"] = base_url

        _ENV_FLOAT_MAP = {
            "PHONEDIR_NOTIFICATION_TIMEOUT": "notification_timeout",
            "PHONEDIR_REQUEST_TIMEOUT": "request_timeout",
        }
        for env_key, field_name in _ENV_FLOAT_MAP.items():
            val = env.get(env_key)
            if val is not None and field_name not in overrides:
                config_kwargs[field_name] = _env_float(env_key, val)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
