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


@handler(Resource.TEMPLATE, Operation.GET)
async def get_template(ctx: HostContext, i: int):
    return await api_get(ctx, f"/templates/{param(ctx, i, 'templateId')}.json")


@handler(Resource.TEMPLATE, Operation.GET_ALL)
async def list_templates(ctx: HostContext, i: int):
    return await list_items(ctx, i, "/templates.json")


@handler(Resource.TEMPLATE, Operation.CREATE_PROJECT)
async def create_project_from_template(ctx: HostContext, i: int):
    """Start a project construction; Basecamp builds the project asynchronously."""
    template_id = param(ctx, i, "templateId")
    body = {"name": param(ctx, i, "name"), **fields(ctx, i, "additionalFields")}
    return await api_send(
        ctx, "POST", f"/templates/{template_id}/project_constructions.json", body
    )
