from __future__ import annotations

import logging
import re
from typing import Optional

from .client import BasecampClient
from .models import DockEntry, DockName, Project, TodosetRef
from .observability import log_event

TODOSET_URL_RE = re.compile(r"buckets/(\d+)/todosets/(\d+)")

log = logging.getLogger("basecamp_connector.dock")


async def fetch_project(
    client: BasecampClient, project_id: str, *, account: str
) -> Project:
    """Fetch a project fresh from the API (docks are never cached)."""
    payload = await client.request(
        "GET", f"/projects/{project_id}.json", account=account
    )
    if not isinstance(payload, dict):
        payload = {"id": project_id}
    return Project.model_validate(payload)


async def resolve_dock_entry(
    client: BasecampClient,
    project_id: str,
    dock_name: DockName | str,
    *,
    account: str,
) -> Optional[DockEntry]:
    """
    Return the first dock entry named `dock_name`, or None.
    Projects may have any tool disabled, so absence is not an error.
    """
    name = DockName(dock_name).value
    project = await fetch_project(client, project_id, account=account)

    for entry in project.dock:
        if entry.name == name:
            return entry

    log_event(
        "dock_entry_absent",
        log,
        level=logging.DEBUG,
        account=account,
        url=f"/projects/{project_id}.json",
        resource=name,
    )
    return None


def parse_todoset_url(url: Optional[str]) -> Optional[TodosetRef]:
    if not url:
        return None
    match = TODOSET_URL_RE.search(url)
    if not match:
        return None
    return TodosetRef(bucket_id=match.group(1), todoset_id=match.group(2))


async def resolve_todoset(
    client: BasecampClient, project_id: str, *, account: str
) -> Optional[TodosetRef]:
    """
    Resolve the bucket/todoset id pair behind a project's to-do dock entry.
    A URL that does not match buckets/<id>/todosets/<id> is treated as absent.
    """
    entry = await resolve_dock_entry(
        client, project_id, DockName.TODOSET, account=account
    )
    if entry is None:
        return None
    return parse_todoset_url(entry.url)


__all__ = [
    "TODOSET_URL_RE",
    "fetch_project",
    "resolve_dock_entry",
    "parse_todoset_url",
    "resolve_todoset",
]
