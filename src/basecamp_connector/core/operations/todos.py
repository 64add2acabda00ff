from __future__ import annotations

from typing import Any, Dict

from basecamp_connector.core.context import HostContext
from basecamp_connector.core.dispatch import Operation, Resource, handler
from basecamp_connector.core.operations._common import (
    api_get,
    api_send,
    fields,
    list_items,
    normalize_dates,
    param,
    success,
)

# --- To-do lists ----------------------------------------------------------- #


@handler(Resource.TODOLIST, Operation.CREATE)
async def create_todolist(ctx: HostContext, i: int):
    project_id = param(ctx, i, "projectId")
    todoset_id = param(ctx, i, "todosetId")
    body = {"name": param(ctx, i, "name"), **fields(ctx, i, "additionalFields")}
    return await api_send(
        ctx, "POST", f"/buckets/{project_id}/todosets/{todoset_id}/todolists.json", body
    )


@handler(Resource.TODOLIST, Operation.GET)
async def get_todolist(ctx: HostContext, i: int):
    project_id = param(ctx, i, "projectId")
    todolist_id = param(ctx, i, "todolistId")
    return await api_get(ctx, f"/buckets/{project_id}/todolists/{todolist_id}.json")


@handler(Resource.TODOLIST, Operation.GET_ALL)
async def list_todolists(ctx: HostContext, i: int):
    project_id = param(ctx, i, "projectId")
    todoset_id = param(ctx, i, "todosetId")
    return await list_items(
        ctx, i, f"/buckets/{project_id}/todosets/{todoset_id}/todolists.json"
    )


# --- To-dos ---------------------------------------------------------------- #


def _todo_path(ctx: HostContext, i: int, suffix: str = "") -> str:
    project_id = param(ctx, i, "projectId")
    todo_id = param(ctx, i, "todoId")
    return f"/buckets/{project_id}/todos/{todo_id}{suffix}.json"


@handler(Resource.TODO, Operation.CREATE)
async def create_todo(ctx: HostContext, i: int):
    project_id = param(ctx, i, "projectId")
    todolist_id = param(ctx, i, "todolistId")
    body = normalize_dates(
        {"content": param(ctx, i, "content"), **fields(ctx, i, "additionalFields")}
    )
    return await api_send(
        ctx, "POST", f"/buckets/{project_id}/todolists/{todolist_id}/todos.json", body
    )


@handler(Resource.TODO, Operation.GET)
async def get_todo(ctx: HostContext, i: int):
    return await api_get(ctx, _todo_path(ctx, i))


@handler(Resource.TODO, Operation.GET_ALL)
async def list_todos(ctx: HostContext, i: int):
    project_id = param(ctx, i, "projectId")
    todolist_id = param(ctx, i, "todolistId")
    filters = fields(ctx, i, "filters")

    query: Dict[str, Any] = {}
    if filters.get("status"):
        query["status"] = filters["status"]
    if filters.get("completed"):
        query["completed"] = str(filters["completed"]).lower()

    return await list_items(
        ctx,
        i,
        f"/buckets/{project_id}/todolists/{todolist_id}/todos.json",
        query=query,
    )


@handler(Resource.TODO, Operation.UPDATE)
async def update_todo(ctx: HostContext, i: int):
    body = normalize_dates(fields(ctx, i, "updateFields"))
    return await api_send(ctx, "PUT", _todo_path(ctx, i), body)


@handler(Resource.TODO, Operation.DELETE)
async def delete_todo(ctx: HostContext, i: int):
    await api_send(ctx, "DELETE", _todo_path(ctx, i))
    return success()


@handler(Resource.TODO, Operation.COMPLETE)
async def complete_todo(ctx: HostContext, i: int):
    await api_send(ctx, "POST", _todo_path(ctx, i, "/completion"))
    return success(completed=True)


@handler(Resource.TODO, Operation.UNCOMPLETE)
async def uncomplete_todo(ctx: HostContext, i: int):
    await api_send(ctx, "DELETE", _todo_path(ctx, i, "/completion"))
    return success(completed=False)
