"""
Shared helpers for execution handlers.
"""

from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from basecamp_connector.core.context import HostContext
from basecamp_connector.core.pagination import Pagination, collect_all

DEFAULT_LIMIT = 50
DATE_FIELDS = ("due_on", "starts_on")


def param(ctx: HostContext, i: int, name: str) -> str:
    return ctx.get_str(name, i)


def fields(ctx: HostContext, i: int, name: str) -> Dict[str, Any]:
    """Collection parameter such as additionalFields/updateFields; {} when unset."""
    value = ctx.get_parameter(name, i, default={})
    if not isinstance(value, dict):
        raise ValueError(f"Parameter '{name}' must be an object")
    return dict(value)


async def api_get(ctx: HostContext, path: str, query: Optional[Dict[str, Any]] = None):
    return await ctx.client.request("GET", path, None, query, account=ctx.account_id)


async def api_send(
    ctx: HostContext, method: str, path: str, body: Optional[Dict[str, Any]] = None
):
    return await ctx.client.request(method, path, body, account=ctx.account_id)


async def list_items(
    ctx: HostContext,
    i: int,
    path: str,
    *,
    pagination: Pagination = Pagination.PAGE,
    query: Optional[Dict[str, Any]] = None,
) -> List[Any]:
    """
    getAll semantics: returnAll walks every page with the endpoint's
    pagination contract, otherwise one request trimmed to `limit`.
    """
    if ctx.get_parameter("returnAll", i, default=False):
        return await collect_all(
            ctx.client, pagination, path, query, account=ctx.account_id
        )

    limit = int(ctx.get_parameter("limit", i, default=DEFAULT_LIMIT))
    data = await api_get(ctx, path, query)
    if not isinstance(data, list):
        return []
    return data[:limit]


def success(**extra: Any) -> Dict[str, Any]:
    return {"success": True, **extra}


def iso_date(value: Any) -> str:
    """Normalize a date/datetime (or ISO string) to YYYY-MM-DD in UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        return value.isoformat()
    else:
        text = str(value).strip()
        try:
            parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
        except ValueError as exc:
            raise ValueError(f"Invalid date value: {value!r}") from exc

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc)
    return parsed.date().isoformat()


def normalize_dates(
    body: Dict[str, Any], keys: Iterable[str] = DATE_FIELDS
) -> Dict[str, Any]:
    for key in keys:
        if body.get(key):
            body[key] = iso_date(body[key])
    return body
