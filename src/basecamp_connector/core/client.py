import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx

from .errors import BasecampApiError, error_from_response, translate_error
from .observability import log_event

DEFAULT_API_ORIGIN = "https://3.basecampapi.com"
DEFAULT_USER_AGENT = "basecamp-connector (https://github.com/basecamp-connector)"


@dataclass(frozen=True)
class ApiResponse:
    body: Any
    headers: httpx.Headers
    status_code: int
    url: str


class BasecampClient:
    """
    Shared HTTP client for the Basecamp 3/4 JSON API.
    - Builds account-scoped URLs and sets the JSON/User-Agent headers
    - Delegates credentials (and token refresh) to the supplied httpx.Auth
    - Translates every failure into BasecampApiError; never retries
    """

    def __init__(
        self,
        *,
        auth: Optional[httpx.Auth] = None,
        api_origin: str = DEFAULT_API_ORIGIN,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_seconds: float = 10.0,
        node: Optional[str] = None,
        request_id: Optional[str] = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
    ):
        api_origin = (api_origin or "").rstrip("/")
        if not api_origin:
            raise ValueError("api_origin must be provided.")

        self.api_origin = api_origin
        self.auth = auth
        self.node = node
        self.request_id = request_id
        self.timeout_seconds = timeout_seconds
        self.log = logger or logging.getLogger("basecamp_connector.client")
        self.headers = {
            "Content-Type": "application/json",
            "User-Agent": user_agent,
        }

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(timeout=timeout_seconds)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "BasecampClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def build_url(self, account: str, path: str) -> str:
        if not account:
            raise ValueError("account id must be provided.")
        return f"{self.api_origin}/{account}{path}"

    async def request(
        self,
        method: str,
        path: str,
        body: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, Any]] = None,
        *,
        account: str,
    ) -> Any:
        """
        Issue one request against {api_origin}/{account}{path}.
        - Empty body/query are omitted entirely, not sent as {} / "?"
        - Returns parsed JSON ({} for empty responses)
        - Raises BasecampApiError on transport errors, non-2xx and bad JSON
        """
        url = self.build_url(account, path)
        response = await self.request_full(
            method, url, body=body, query=query, account=account
        )
        return response.body

    async def request_full(
        self,
        method: str,
        url: str,
        *,
        body: Optional[Dict[str, Any]] = None,
        query: Optional[Dict[str, Any]] = None,
        account: Optional[str] = None,
    ) -> ApiResponse:
        """Request an absolute URL and return body plus headers."""
        resp = await self._send(
            method.upper(),
            url,
            json=body or None,
            params=query or None,
            account=account,
        )
        return ApiResponse(
            body=self._safe_json(resp),
            headers=resp.headers,
            status_code=resp.status_code,
            url=str(resp.request.url),
        )

    async def get_absolute(self, url: str) -> Any:
        """Authenticated GET against a host outside the account API (launchpad)."""
        response = await self.request_full("GET", url)
        return response.body

    async def _send(
        self,
        method: str,
        url: str,
        *,
        json: Optional[Dict[str, Any]],
        params: Optional[Dict[str, Any]],
        account: Optional[str],
    ) -> httpx.Response:
        start = time.perf_counter()
        auth = self.auth if self.auth is not None else httpx.USE_CLIENT_DEFAULT
        try:
            resp = await self.http.request(
                method,
                url,
                json=json,
                params=params,
                headers=self.headers,
                auth=auth,
            )
        except httpx.HTTPError as exc:
            log_event(
                "api_call",
                self.log,
                request_id=self.request_id,
                node=self.node,
                account=account,
                method=method,
                url=url,
                status="exception",
                error_type=type(exc).__name__,
                duration_ms=int((time.perf_counter() - start) * 1000),
            )
            raise translate_error(exc, method=method, url=url, node=self.node) from exc

        log_event(
            "api_call",
            self.log,
            request_id=self.request_id,
            node=self.node,
            account=account,
            method=method,
            url=str(resp.request.url),
            status=resp.status_code,
            duration_ms=int((time.perf_counter() - start) * 1000),
        )

        try:
            resp.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise error_from_response(resp, method=method, node=self.node) from exc
        return resp

    def _safe_json(self, resp: httpx.Response) -> Any:
        # 204 No Content and friends
        if not resp.content:
            return {}

        try:
            return resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise BasecampApiError(
                status_code=resp.status_code,
                method=resp.request.method,
                url=str(resp.request.url),
                message=f"Expected JSON, got non-JSON body snippet: {snippet!r}",
                node=self.node,
                response_text=snippet,
            ) from exc


__all__ = ["BasecampClient", "ApiResponse", "DEFAULT_API_ORIGIN", "DEFAULT_USER_AGENT"]
