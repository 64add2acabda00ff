from __future__ import annotations

from basecamp_connector.core.context import HostContext
from basecamp_connector.core.dispatch import Operation, Resource, handler
from basecamp_connector.core.operations._common import list_items, param


@handler(Resource.EVENT, Operation.GET_ALL)
async def list_events(ctx: HostContext, i: int):
    """Activity log of one recording; the recording id is its own parameter."""
    project_id = param(ctx, i, "projectId")
    recording_id = param(ctx, i, "recordingId")
    return await list_items(
        ctx, i, f"/buckets/{project_id}/recordings/{recording_id}/events.json"
    )
