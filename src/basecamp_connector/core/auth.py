"""OAuth2 bearer credentials for the Basecamp API (launchpad.37signals.com)."""

from __future__ import annotations

import logging
from collections.abc import Generator
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

import httpx
from pydantic import BaseModel, ConfigDict

from .observability import log_event

AUTHORIZATION_URL = "https://launchpad.37signals.com/authorization/new"
TOKEN_URL = "https://launchpad.37signals.com/authorization/token"
AUTHORIZATION_JSON_URL = "https://launchpad.37signals.com/authorization.json"

EXPIRY_SKEW = timedelta(seconds=30)

log = logging.getLogger("basecamp_connector.auth")


class OAuth2Token(BaseModel):
    access_token: str
    refresh_token: Optional[str] = None
    expires_at: Optional[datetime] = None

    model_config = ConfigDict(extra="ignore")

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        expires_at = self.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        return now >= expires_at - EXPIRY_SKEW


class BasecampOAuth2Auth(httpx.Auth):
    """
    Attach a bearer token and refresh it when it is expired or rejected.

    Launchpad wants the client id/secret in the token request body rather
    than as Basic auth, so the refresh is a form POST carrying
    type=refresh, refresh_token, client_id and client_secret.
    A refresh is attempted at most once per request; if it fails the
    original 401 is raised as an HTTPStatusError.
    """

    requires_response_body = True

    def __init__(
        self,
        token: OAuth2Token,
        *,
        client_id: Optional[str] = None,
        client_secret: Optional[str] = None,
        token_url: str = TOKEN_URL,
        on_refresh: Optional[Callable[[OAuth2Token], None]] = None,
    ) -> None:
        self.token = token
        self.client_id = client_id
        self.client_secret = client_secret
        self.token_url = token_url
        self.on_refresh = on_refresh

    def can_refresh(self) -> bool:
        return bool(self.token.refresh_token and self.client_id and self.client_secret)

    def build_refresh_request(self) -> httpx.Request:
        return httpx.Request(
            "POST",
            self.token_url,
            data={
                "type": "refresh",
                "refresh_token": self.token.refresh_token or "",
                "client_id": self.client_id or "",
                "client_secret": self.client_secret or "",
            },
        )

    def _refresh_failed(self, response: httpx.Response, reason: str) -> bool:
        log_event(
            "token_refresh_failed",
            log,
            level=logging.WARNING,
            status=response.status_code,
            error_type=reason,
        )
        return False

    def update_token(self, response: httpx.Response) -> bool:
        """Adopt the token from a refresh response; False if it is unusable."""
        if response.status_code != 200:
            return self._refresh_failed(response, "status")

        try:
            payload = response.json()
        except ValueError:
            return self._refresh_failed(response, "invalid_json")
        if not isinstance(payload, dict) or not payload.get("access_token"):
            return self._refresh_failed(response, "missing_access_token")

        expires_at = None
        expires_in = payload.get("expires_in")
        if isinstance(expires_in, (int, float)):
            expires_at = datetime.now(timezone.utc) + timedelta(seconds=expires_in)

        self.token = OAuth2Token(
            access_token=payload["access_token"],
            # launchpad does not rotate refresh tokens on refresh
            refresh_token=payload.get("refresh_token") or self.token.refresh_token,
            expires_at=expires_at,
        )
        log_event("token_refreshed", log)
        if self.on_refresh is not None:
            self.on_refresh(self.token)
        return True

    def _authorize(self, request: httpx.Request) -> None:
        request.headers["Authorization"] = f"Bearer {self.token.access_token}"

    def auth_flow(
        self, request: httpx.Request
    ) -> Generator[httpx.Request, httpx.Response, None]:
        attempted = False
        if self.token.is_expired() and self.can_refresh():
            attempted = True
            refresh_response = yield self.build_refresh_request()
            self.update_token(refresh_response)

        self._authorize(request)
        response = yield request

        if response.status_code == 401 and not attempted and self.can_refresh():
            refresh_response = yield self.build_refresh_request()
            if not self.update_token(refresh_response):
                raise httpx.HTTPStatusError(
                    "Token refresh failed", request=request, response=response
                )
            self._authorize(request)
            yield request


__all__ = [
    "AUTHORIZATION_URL",
    "TOKEN_URL",
    "AUTHORIZATION_JSON_URL",
    "OAuth2Token",
    "BasecampOAuth2Auth",
]
