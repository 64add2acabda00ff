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
from basecamp_connector.core.pagination import Pagination


def _board_messages_path(ctx: HostContext, i: int) -> str:
    project_id = param(ctx, i, "projectId")
    message_board_id = param(ctx, i, "messageBoardId")
    return f"/buckets/{project_id}/message_boards/{message_board_id}/messages.json"


@handler(Resource.MESSAGE, Operation.CREATE)
async def create_message(ctx: HostContext, i: int):
    body = {"subject": param(ctx, i, "subject"), **fields(ctx, i, "additionalFields")}
    return await api_send(ctx, "POST", _board_messages_path(ctx, i), body)


@handler(Resource.MESSAGE, Operation.GET)
async def get_message(ctx: HostContext, i: int):
    project_id = param(ctx, i, "projectId")
    message_id = param(ctx, i, "messageId")
    return await api_get(ctx, f"/buckets/{project_id}/messages/{message_id}.json")


@handler(Resource.MESSAGE, Operation.GET_ALL)
async def list_messages(ctx: HostContext, i: int):
    return await list_items(
        ctx, i, _board_messages_path(ctx, i), pagination=Pagination.LINK
    )


# --- Comments (on any recording) ------------------------------------------ #


def _comments_path(ctx: HostContext, i: int) -> str:
    project_id = param(ctx, i, "projectId")
    recording_id = param(ctx, i, "recordingId")
    return f"/buckets/{project_id}/recordings/{recording_id}/comments.json"


@handler(Resource.COMMENT, Operation.CREATE)
async def create_comment(ctx: HostContext, i: int):
    body = {"content": param(ctx, i, "content")}
    return await api_send(ctx, "POST", _comments_path(ctx, i), body)


@handler(Resource.COMMENT, Operation.GET_ALL)
async def list_comments(ctx: HostContext, i: int):
    return await list_items(ctx, i, _comments_path(ctx, i))
