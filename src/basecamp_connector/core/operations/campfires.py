from __future__ import annotations

from basecamp_connector.core.context import HostContext
from basecamp_connector.core.dispatch import Operation, Resource, handler
from basecamp_connector.core.operations._common import (
    api_get,
    api_send,
    list_items,
    param,
    success,
)


def _chat_path(ctx: HostContext, i: int) -> str:
    project_id = param(ctx, i, "projectId")
    campfire_id = param(ctx, i, "campfireId")
    return f"/buckets/{project_id}/chats/{campfire_id}"


@handler(Resource.CAMPFIRE, Operation.GET)
async def get_campfire(ctx: HostContext, i: int):
    return await api_get(ctx, f"{_chat_path(ctx, i)}.json")


@handler(Resource.CAMPFIRE_LINE, Operation.CREATE)
async def create_campfire_line(ctx: HostContext, i: int):
    body = {"content": param(ctx, i, "content")}
    return await api_send(ctx, "POST", f"{_chat_path(ctx, i)}/lines.json", body)


@handler(Resource.CAMPFIRE_LINE, Operation.GET)
async def get_campfire_line(ctx: HostContext, i: int):
    line_id = param(ctx, i, "lineId")
    return await api_get(ctx, f"{_chat_path(ctx, i)}/lines/{line_id}.json")


@handler(Resource.CAMPFIRE_LINE, Operation.GET_ALL)
async def list_campfire_lines(ctx: HostContext, i: int):
    return await list_items(ctx, i, f"{_chat_path(ctx, i)}/lines.json")


@handler(Resource.CAMPFIRE_LINE, Operation.DELETE)
async def delete_campfire_line(ctx: HostContext, i: int):
    line_id = param(ctx, i, "lineId")
    await api_send(ctx, "DELETE", f"{_chat_path(ctx, i)}/lines/{line_id}.json")
    return success()
