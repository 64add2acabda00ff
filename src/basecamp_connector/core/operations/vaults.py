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

# --- Vaults (folders) ------------------------------------------------------ #


def _child_vaults_path(ctx: HostContext, i: int) -> str:
    project_id = param(ctx, i, "projectId")
    parent_vault_id = param(ctx, i, "parentVaultId")
    return f"/buckets/{project_id}/vaults/{parent_vault_id}/vaults.json"


def _vault_path(ctx: HostContext, i: int, suffix: str = "") -> str:
    project_id = param(ctx, i, "projectId")
    vault_id = param(ctx, i, "vaultId")
    return f"/buckets/{project_id}/vaults/{vault_id}{suffix}.json"


@handler(Resource.VAULT, Operation.CREATE)
async def create_vault(ctx: HostContext, i: int):
    body = {"title": param(ctx, i, "title")}
    return await api_send(ctx, "POST", _child_vaults_path(ctx, i), body)


@handler(Resource.VAULT, Operation.GET)
async def get_vault(ctx: HostContext, i: int):
    return await api_get(ctx, _vault_path(ctx, i))


@handler(Resource.VAULT, Operation.GET_ALL)
async def list_vaults(ctx: HostContext, i: int):
    return await list_items(ctx, i, _child_vaults_path(ctx, i))


@handler(Resource.VAULT, Operation.UPDATE)
async def update_vault(ctx: HostContext, i: int):
    return await api_send(
        ctx, "PUT", _vault_path(ctx, i), fields(ctx, i, "updateFields")
    )


# --- Documents ------------------------------------------------------------- #


def _document_path(ctx: HostContext, i: int) -> str:
    project_id = param(ctx, i, "projectId")
    document_id = param(ctx, i, "documentId")
    return f"/buckets/{project_id}/documents/{document_id}.json"


@handler(Resource.DOCUMENT, Operation.CREATE)
async def create_document(ctx: HostContext, i: int):
    body = {"title": param(ctx, i, "title"), "content": param(ctx, i, "content")}
    return await api_send(ctx, "POST", _vault_path(ctx, i, "/documents"), body)


@handler(Resource.DOCUMENT, Operation.GET)
async def get_document(ctx: HostContext, i: int):
    return await api_get(ctx, _document_path(ctx, i))


@handler(Resource.DOCUMENT, Operation.GET_ALL)
async def list_documents(ctx: HostContext, i: int):
    return await list_items(ctx, i, _vault_path(ctx, i, "/documents"))


@handler(Resource.DOCUMENT, Operation.UPDATE)
async def update_document(ctx: HostContext, i: int):
    return await api_send(
        ctx, "PUT", _document_path(ctx, i), fields(ctx, i, "updateFields")
    )


# --- Uploads --------------------------------------------------------------- #


@handler(Resource.UPLOAD, Operation.GET)
async def get_upload(ctx: HostContext, i: int):
    project_id = param(ctx, i, "projectId")
    upload_id = param(ctx, i, "uploadId")
    return await api_get(ctx, f"/buckets/{project_id}/uploads/{upload_id}.json")


@handler(Resource.UPLOAD, Operation.GET_ALL)
async def list_uploads(ctx: HostContext, i: int):
    return await list_items(ctx, i, _vault_path(ctx, i, "/uploads"))
