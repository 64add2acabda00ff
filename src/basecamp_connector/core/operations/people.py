from __future__ import annotations

from basecamp_connector.core.context import HostContext
from basecamp_connector.core.dispatch import Operation, Resource, handler
from basecamp_connector.core.operations._common import api_get, list_items, param
from basecamp_connector.core.pagination import Pagination


@handler(Resource.PERSON, Operation.GET)
async def get_person(ctx: HostContext, i: int):
    return await api_get(ctx, f"/people/{param(ctx, i, 'personId')}.json")


@handler(Resource.PERSON, Operation.GET_ALL)
async def list_people(ctx: HostContext, i: int):
    return await list_items(ctx, i, "/people.json", pagination=Pagination.LINK)


@handler(Resource.PERSON, Operation.GET_ME)
async def get_my_profile(ctx: HostContext, i: int):
    return await api_get(ctx, "/my/profile.json")
