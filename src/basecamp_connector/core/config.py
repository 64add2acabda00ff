from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Optional

from dotenv import load_dotenv

from .auth import BasecampOAuth2Auth, OAuth2Token
from .client import DEFAULT_API_ORIGIN, DEFAULT_USER_AGENT, BasecampClient
from .errors import MissingCredentialsError


@dataclass(frozen=True)
class ConnectorSettings:
    access_token: str
    refresh_token: Optional[str] = None
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    api_origin: str = DEFAULT_API_ORIGIN
    user_agent: str = DEFAULT_USER_AGENT
    timeout_seconds: float = 10.0
    log_level: str = "INFO"


def _env(name: str) -> Optional[str]:
    value = os.getenv(name, "").strip()
    return value or None


def load_env_config(*, use_dotenv: bool = True) -> ConnectorSettings:
    """Load connector settings from environment (optional .env)."""
    if use_dotenv:
        load_dotenv()

    timeout = _env("BASECAMP_TIMEOUT_SECONDS")
    try:
        timeout_seconds = float(timeout) if timeout else 10.0
    except ValueError as exc:
        raise ValueError(
            f"BASECAMP_TIMEOUT_SECONDS must be a number, got {timeout!r}"
        ) from exc

    return ConnectorSettings(
        access_token=_env("BASECAMP_ACCESS_TOKEN") or "",
        refresh_token=_env("BASECAMP_REFRESH_TOKEN"),
        client_id=_env("BASECAMP_CLIENT_ID"),
        client_secret=_env("BASECAMP_CLIENT_SECRET"),
        api_origin=_env("BASECAMP_API_ORIGIN") or DEFAULT_API_ORIGIN,
        user_agent=_env("BASECAMP_USER_AGENT") or DEFAULT_USER_AGENT,
        timeout_seconds=timeout_seconds,
        log_level=_env("LOG_LEVEL") or "INFO",
    )


def auth_from_settings(
    settings: ConnectorSettings,
    *,
    on_refresh: Optional[Callable[[OAuth2Token], None]] = None,
) -> BasecampOAuth2Auth:
    if not settings.access_token:
        raise MissingCredentialsError("BASECAMP_ACCESS_TOKEN not set")
    token = OAuth2Token(
        access_token=settings.access_token, refresh_token=settings.refresh_token
    )
    return BasecampOAuth2Auth(
        token,
        client_id=settings.client_id,
        client_secret=settings.client_secret,
        on_refresh=on_refresh,
    )


def create_client_from_env(**kwargs) -> BasecampClient:
    """Create a BasecampClient from environment variables."""
    settings = load_env_config()
    return BasecampClient(
        auth=auth_from_settings(settings),
        api_origin=settings.api_origin,
        user_agent=settings.user_agent,
        timeout_seconds=settings.timeout_seconds,
        **kwargs,
    )


__all__ = [
    "ConnectorSettings",
    "load_env_config",
    "auth_from_settings",
    "create_client_from_env",
]
