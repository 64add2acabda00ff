from __future__ import annotations

from basecamp_connector.core.context import HostContext
from basecamp_connector.core.dispatch import Operation, Resource, handler
from basecamp_connector.core.operations._common import (
    api_get,
    api_send,
    fields,
    list_items,
    param,
    success,
)
from basecamp_connector.core.pagination import Pagination


@handler(Resource.PROJECT, Operation.CREATE)
async def create_project(ctx: HostContext, i: int):
    body = {"name": param(ctx, i, "name"), **fields(ctx, i, "additionalFields")}
    return await api_send(ctx, "POST", "/projects.json", body)


@handler(Resource.PROJECT, Operation.DELETE)
async def delete_project(ctx: HostContext, i: int):
    # Basecamp trashes the project; the response body is empty
    await api_send(ctx, "DELETE", f"/projects/{param(ctx, i, 'projectId')}.json")
    return success()


@handler(Resource.PROJECT, Operation.GET)
async def get_project(ctx: HostContext, i: int):
    return await api_get(ctx, f"/projects/{param(ctx, i, 'projectId')}.json")


@handler(Resource.PROJECT, Operation.GET_ALL)
async def list_projects(ctx: HostContext, i: int):
    return await list_items(ctx, i, "/projects.json", pagination=Pagination.LINK)


@handler(Resource.PROJECT, Operation.UPDATE)
async def update_project(ctx: HostContext, i: int):
    return await api_send(
        ctx,
        "PUT",
        f"/projects/{param(ctx, i, 'projectId')}.json",
        fields(ctx, i, "updateFields"),
    )
