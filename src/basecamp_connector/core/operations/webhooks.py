from __future__ import annotations

from typing import Any, List

from basecamp_connector.core.context import HostContext
from basecamp_connector.core.dispatch import Operation, Resource, handler
from basecamp_connector.core.operations._common import (
    api_send,
    fields,
    list_items,
    param,
    success,
)


def _types(ctx: HostContext, i: int) -> List[Any]:
    types = ctx.get_parameter("types", i, default=[])
    if isinstance(types, str):
        types = [t.strip() for t in types.split(",") if t.strip()]
    return list(types)


def _webhook_path(ctx: HostContext, i: int) -> str:
    project_id = param(ctx, i, "projectId")
    webhook_id = param(ctx, i, "webhookId")
    return f"/buckets/{project_id}/webhooks/{webhook_id}.json"


@handler(Resource.WEBHOOK, Operation.CREATE)
async def create_webhook(ctx: HostContext, i: int):
    project_id = param(ctx, i, "projectId")
    body = {"payload_url": param(ctx, i, "payloadUrl"), "types": _types(ctx, i)}
    return await api_send(ctx, "POST", f"/buckets/{project_id}/webhooks.json", body)


@handler(Resource.WEBHOOK, Operation.DELETE)
async def delete_webhook(ctx: HostContext, i: int):
    await api_send(ctx, "DELETE", _webhook_path(ctx, i))
    return success()


@handler(Resource.WEBHOOK, Operation.GET_ALL)
async def list_webhooks(ctx: HostContext, i: int):
    project_id = param(ctx, i, "projectId")
    return await list_items(ctx, i, f"/buckets/{project_id}/webhooks.json")


@handler(Resource.WEBHOOK, Operation.UPDATE)
async def update_webhook(ctx: HostContext, i: int):
    body = {"types": _types(ctx, i), **fields(ctx, i, "updateFields")}
    return await api_send(ctx, "PUT", _webhook_path(ctx, i), body)
