from __future__ import annotations

from basecamp_connector.core.context import HostContext
from basecamp_connector.core.dispatch import Operation, Resource, handler
from basecamp_connector.core.operations._common import (
    api_get,
    api_send,
    fields,
    list_items,
    param,
)


def _entries_path(ctx: HostContext, i: int) -> str:
    project_id = param(ctx, i, "projectId")
    schedule_id = param(ctx, i, "scheduleId")
    return f"/buckets/{project_id}/schedules/{schedule_id}/entries.json"


def _entry_path(ctx: HostContext, i: int) -> str:
    project_id = param(ctx, i, "projectId")
    entry_id = param(ctx, i, "scheduleEntryId")
    return f"/buckets/{project_id}/schedule_entries/{entry_id}.json"


@handler(Resource.SCHEDULE_ENTRY, Operation.CREATE)
async def create_schedule_entry(ctx: HostContext, i: int):
    body = {
        "summary": param(ctx, i, "summary"),
        "starts_at": param(ctx, i, "startsAt"),
        "ends_at": param(ctx, i, "endsAt"),
        **fields(ctx, i, "additionalFields"),
    }
    return await api_send(ctx, "POST", _entries_path(ctx, i), body)


@handler(Resource.SCHEDULE_ENTRY, Operation.GET)
async def get_schedule_entry(ctx: HostContext, i: int):
    return await api_get(ctx, _entry_path(ctx, i))


@handler(Resource.SCHEDULE_ENTRY, Operation.GET_ALL)
async def list_schedule_entries(ctx: HostContext, i: int):
    return await list_items(ctx, i, _entries_path(ctx, i))


@handler(Resource.SCHEDULE_ENTRY, Operation.UPDATE)
async def update_schedule_entry(ctx: HostContext, i: int):
    return await api_send(
        ctx, "PUT", _entry_path(ctx, i), fields(ctx, i, "updateFields")
    )
