from __future__ import annotations

from typing import Any, Dict, Optional

import httpx


class BasecampError(Exception):
    """Base error for connector failures."""


class BasecampApiError(BasecampError):
    """
    Single domain error for anything that goes wrong talking to Basecamp:
    transport failures, non-2xx responses and unparseable bodies.
    The original exception is always chained as __cause__.
    """

    def __init__(
        self,
        *,
        method: str,
        url: str,
        message: str,
        status_code: Optional[int] = None,
        node: Optional[str] = None,
        response_json: Optional[Any] = None,
        response_text: Optional[str] = None,
    ):
        prefix = f"{status_code} " if status_code is not None else ""
        super().__init__(f"{prefix}{method} {url}: {message}")
        self.method = method
        self.url = url
        self.message = message
        self.status_code = status_code
        self.node = node
        self.response_json = response_json
        self.response_text = response_text

    @property
    def description(self) -> str:
        """Human readable text the host can show next to the failing node."""
        if self.node:
            return f"[{self.node}] {self}"
        return str(self)


class MissingParameterError(ValueError):
    def __init__(self, name: str, item_index: int = 0):
        super().__init__(f"Missing required parameter '{name}' (item {item_index})")
        self.name = name
        self.item_index = item_index


class MissingCredentialsError(ValueError):
    """Raised when no access token is configured."""


def _error_message(resp: httpx.Response) -> tuple[str, Optional[Any], Optional[str]]:
    message = resp.reason_phrase or "request failed"
    try:
        parsed = resp.json()
    except ValueError:
        return message, None, (resp.text or "")[:500]

    if isinstance(parsed, dict):
        # Basecamp errors carry "error" or "message"; launchpad uses "error_description"
        message = (
            parsed.get("error")
            or parsed.get("message")
            or parsed.get("error_description")
            or message
        )
    return str(message), parsed, None


def error_from_response(
    resp: httpx.Response, *, method: str, node: Optional[str] = None
) -> BasecampApiError:
    message, response_json, response_text = _error_message(resp)
    return BasecampApiError(
        status_code=resp.status_code,
        method=method,
        url=str(resp.request.url),
        message=message,
        node=node,
        response_json=response_json,
        response_text=response_text,
    )


def translate_error(
    exc: BaseException, *, method: str, url: str, node: Optional[str] = None
) -> BasecampApiError:
    """Wrap any failure into a BasecampApiError (translated errors pass through)."""
    if isinstance(exc, BasecampApiError):
        if exc.node is None:
            exc.node = node
        return exc

    if isinstance(exc, httpx.HTTPStatusError):
        error = error_from_response(exc.response, method=method, node=node)
    elif isinstance(exc, httpx.TimeoutException):
        error = BasecampApiError(
            method=method, url=url, message=f"Timeout: {exc}", node=node
        )
    elif isinstance(exc, httpx.HTTPError):
        error = BasecampApiError(
            method=method, url=url, message=f"Network error: {exc}", node=node
        )
    else:
        error = BasecampApiError(
            method=method,
            url=url,
            message=f"{type(exc).__name__}: {exc}",
            node=node,
        )
    error.__cause__ = exc
    return error


def error_details(exc: BaseException) -> Dict[str, Any]:
    """Flatten an error into the dict attached to a failed item's output."""
    details: Dict[str, Any] = {"error": str(exc)}
    if isinstance(exc, BasecampApiError):
        details["status_code"] = exc.status_code
        if exc.node:
            details["node"] = exc.node
    return details


__all__ = [
    "BasecampError",
    "BasecampApiError",
    "MissingParameterError",
    "MissingCredentialsError",
    "error_from_response",
    "translate_error",
    "error_details",
]
