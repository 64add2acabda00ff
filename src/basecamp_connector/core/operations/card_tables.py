from __future__ import annotations

from basecamp_connector.core.context import HostContext
from basecamp_connector.core.dispatch import Operation, Resource, handler
from basecamp_connector.core.operations._common import (
    api_get,
    api_send,
    fields,
    list_items,
    normalize_dates,
    param,
)


@handler(Resource.CARD_TABLE, Operation.GET)
async def get_card_table(ctx: HostContext, i: int):
    project_id = param(ctx, i, "projectId")
    card_table_id = param(ctx, i, "cardTableId")
    return await api_get(ctx, f"/buckets/{project_id}/card_tables/{card_table_id}.json")


def _column_cards_path(ctx: HostContext, i: int) -> str:
    project_id = param(ctx, i, "projectId")
    column_id = param(ctx, i, "columnId")
    return f"/buckets/{project_id}/card_tables/lists/{column_id}/cards.json"


def _card_path(ctx: HostContext, i: int) -> str:
    project_id = param(ctx, i, "projectId")
    card_id = param(ctx, i, "cardId")
    return f"/buckets/{project_id}/card_tables/cards/{card_id}.json"


@handler(Resource.CARD, Operation.CREATE)
async def create_card(ctx: HostContext, i: int):
    body = normalize_dates(
        {"title": param(ctx, i, "title"), **fields(ctx, i, "additionalFields")}
    )
    return await api_send(ctx, "POST", _column_cards_path(ctx, i), body)


@handler(Resource.CARD, Operation.GET)
async def get_card(ctx: HostContext, i: int):
    return await api_get(ctx, _card_path(ctx, i))


@handler(Resource.CARD, Operation.GET_ALL)
async def list_cards(ctx: HostContext, i: int):
    return await list_items(ctx, i, _column_cards_path(ctx, i))


@handler(Resource.CARD, Operation.UPDATE)
async def update_card(ctx: HostContext, i: int):
    body = normalize_dates(fields(ctx, i, "updateFields"))
    return await api_send(ctx, "PUT", _card_path(ctx, i), body)
