"""
Exhaustive listing helpers.

Basecamp exposes two pagination contracts and an endpoint uses exactly one:
- Link: each page may carry `Link: <url>; rel="next"`; follow it verbatim.
- Page: implicit fixed-size pages of 50 selected with ?page=N; a short page
  is the last one.
Which one applies is decided by the caller per endpoint, never by looking
at the responses.
"""

from __future__ import annotations

import logging
import re
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional
from urllib.parse import urlencode

from .client import BasecampClient
from .observability import log_event

PAGE_SIZE = 50

_NEXT_LINK_RE = re.compile(r'<([^>]+)>;\s*rel="next"')

log = logging.getLogger("basecamp_connector.pagination")


class Pagination(str, Enum):
    LINK = "link"
    PAGE = "page"


def parse_next_link(headers: Optional[Mapping[str, str]]) -> Optional[str]:
    """
    Return the rel="next" target of a Link header, or None.
    Header lookup is case-insensitive.
    """
    if not headers:
        return None

    value = headers.get("link") or headers.get("Link")
    if value is None:
        for key, candidate in headers.items():
            if key.lower() == "link":
                value = candidate
                break
    if not value:
        return None

    match = _NEXT_LINK_RE.search(value)
    return match.group(1) if match else None


async def collect_by_link(
    client: BasecampClient, path: str, *, account: str
) -> List[Any]:
    """
    Follow Link headers until no rel="next" remains.
    Non-array bodies count as zero items; the loop is driven only by the header.
    """
    items: List[Any] = []
    next_url: Optional[str] = client.build_url(account, path)
    page = 0

    while next_url:
        page += 1
        response = await client.request_full("GET", next_url, account=account)

        if isinstance(response.body, list):
            items.extend(response.body)

        log_event(
            "page_collected",
            log,
            level=logging.DEBUG,
            account=account,
            url=next_url,
            page=page,
            items=len(items),
        )
        next_url = parse_next_link(response.headers)

    return items


async def collect_by_page(
    client: BasecampClient,
    method: str,
    path: str,
    body: Optional[Dict[str, Any]] = None,
    query: Optional[Dict[str, Any]] = None,
    *,
    account: str,
) -> List[Any]:
    """
    Walk ?page=1,2,... while each page comes back full (50 items).
    Stops on a short page, an empty page or a non-array body.
    """
    items: List[Any] = []
    page = 1

    while True:
        page_query = {**(query or {}), "page": page}
        batch = await client.request(method, path, body, page_query, account=account)

        if not isinstance(batch, list) or not batch:
            break

        items.extend(batch)
        log_event(
            "page_collected",
            log,
            level=logging.DEBUG,
            account=account,
            url=path,
            page=page,
            items=len(items),
        )

        if len(batch) < PAGE_SIZE:
            break
        page += 1

    return items


async def collect_all(
    client: BasecampClient,
    pagination: Pagination,
    path: str,
    query: Optional[Dict[str, Any]] = None,
    *,
    account: str,
) -> List[Any]:
    """GET every item of a listing endpoint using its fixed pagination contract."""
    if pagination is Pagination.LINK:
        if query:
            # Link walks carry their query inside the next URL after page one
            path = f"{path}?{urlencode(query, doseq=True)}"
        return await collect_by_link(client, path, account=account)
    return await collect_by_page(client, "GET", path, None, query, account=account)


__all__ = [
    "PAGE_SIZE",
    "Pagination",
    "parse_next_link",
    "collect_by_link",
    "collect_by_page",
    "collect_all",
]
