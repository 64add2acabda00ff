"""
Option list builders for dependent dropdowns.

Every builder reads the already chosen parent ids from the HostContext,
walks whatever it needs (dock entry, paginated listing) and flattens the
result into OptionEntry pairs. A missing parent dock entry yields [].
"""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Iterable, List

from .auth import AUTHORIZATION_JSON_URL
from .context import HostContext
from .dock import resolve_dock_entry, resolve_todoset
from .models import Authorization, DockName, OptionEntry
from .pagination import collect_by_link, collect_by_page

OptionBuilder = Callable[[HostContext], Awaitable[List[OptionEntry]]]


class UnknownLoadOptionsMethodError(ValueError):
    def __init__(self, method: str):
        super().__init__(f"Unknown load options method: {method}")
        self.method = method


def _options(
    records: Iterable[Any], label: Callable[[Dict[str, Any]], Any]
) -> List[OptionEntry]:
    return [
        OptionEntry.of(label(r), r["id"])
        for r in records
        if isinstance(r, dict) and r.get("id") is not None
    ]


def _title(record: Dict[str, Any]) -> Any:
    return record.get("title")


def _name(record: Dict[str, Any]) -> Any:
    return record.get("name")


async def _single_dock_option(
    ctx: HostContext, dock_name: DockName, fallback: str
) -> List[OptionEntry]:
    entry = await resolve_dock_entry(
        ctx.client,
        ctx.get_str("projectId"),
        dock_name,
        account=ctx.account_id,
    )
    if entry is None:
        return []
    return [OptionEntry.of(entry.title or fallback, entry.id)]


async def _paged_options(
    ctx: HostContext, path: str, label: Callable[[Dict[str, Any]], Any]
) -> List[OptionEntry]:
    records = await collect_by_page(ctx.client, "GET", path, account=ctx.account_id)
    return _options(records, label)


# --- Account / top-level ------------------------------------------------- #


async def get_accounts(ctx: HostContext) -> List[OptionEntry]:
    """Basecamp 3/4 accounts of the authenticated identity (launchpad)."""
    payload = await ctx.client.get_absolute(AUTHORIZATION_JSON_URL)
    authorization = Authorization.model_validate(
        payload if isinstance(payload, dict) else {}
    )
    return [
        OptionEntry.of(a.name, a.id) for a in authorization.accounts if a.is_supported
    ]


async def get_projects(ctx: HostContext) -> List[OptionEntry]:
    projects = await collect_by_link(
        ctx.client, "/projects.json", account=ctx.account_id
    )
    return _options(projects, _name)


async def get_people(ctx: HostContext) -> List[OptionEntry]:
    people = await collect_by_link(ctx.client, "/people.json", account=ctx.account_id)
    return _options(people, _name)


async def get_templates(ctx: HostContext) -> List[OptionEntry]:
    return await _paged_options(ctx, "/templates.json", _name)


# --- Single dock entries ------------------------------------------------- #


async def get_message_boards(ctx: HostContext) -> List[OptionEntry]:
    return await _single_dock_option(ctx, DockName.MESSAGE_BOARD, "Message Board")


async def get_campfires(ctx: HostContext) -> List[OptionEntry]:
    return await _single_dock_option(ctx, DockName.CHAT, "Campfire")


async def get_schedules(ctx: HostContext) -> List[OptionEntry]:
    return await _single_dock_option(ctx, DockName.SCHEDULE, "Schedule")


async def get_questionnaires(ctx: HostContext) -> List[OptionEntry]:
    return await _single_dock_option(
        ctx, DockName.QUESTIONNAIRE, "Automatic Check-ins"
    )


async def get_card_tables(ctx: HostContext) -> List[OptionEntry]:
    return await _single_dock_option(ctx, DockName.KANBAN_BOARD, "Card Table")


async def get_todosets(ctx: HostContext) -> List[OptionEntry]:
    return await _single_dock_option(ctx, DockName.TODOSET, "To-dos")


# --- Cascades ------------------------------------------------------------ #


async def get_todolists(ctx: HostContext) -> List[OptionEntry]:
    """project -> todoset dock entry (bucket/todoset parsed from its url) -> lists"""
    ref = await resolve_todoset(
        ctx.client, ctx.get_str("projectId"), account=ctx.account_id
    )
    if ref is None:
        return []
    return await _paged_options(
        ctx,
        f"/buckets/{ref.bucket_id}/todosets/{ref.todoset_id}/todolists.json",
        _title,
    )


async def get_vaults(ctx: HostContext) -> List[OptionEntry]:
    """Root vault from the dock, always first, followed by its child vaults."""
    project_id = ctx.get_str("projectId")
    root = await resolve_dock_entry(
        ctx.client, project_id, DockName.VAULT, account=ctx.account_id
    )
    if root is None:
        return []

    children = await _paged_options(
        ctx, f"/buckets/{project_id}/vaults/{root.id}/vaults.json", _title
    )
    return [OptionEntry.of(root.title or "Root Vault", root.id), *children]


async def get_questions(ctx: HostContext) -> List[OptionEntry]:
    project_id = ctx.get_str("projectId")
    questionnaire_id = ctx.get_str("questionnaireId")
    return await _paged_options(
        ctx,
        f"/buckets/{project_id}/questionnaires/{questionnaire_id}/questions.json",
        _title,
    )


async def get_card_table_columns(ctx: HostContext) -> List[OptionEntry]:
    """Columns come embedded in the card table itself; no pagination."""
    project_id = ctx.get_str("projectId")
    card_table_id = ctx.get_str("cardTableId")
    card_table = await ctx.client.request(
        "GET",
        f"/buckets/{project_id}/card_tables/{card_table_id}.json",
        account=ctx.account_id,
    )
    columns = card_table.get("lists") if isinstance(card_table, dict) else None
    if not isinstance(columns, list):
        return []
    return _options(columns, _title)


async def get_messages(ctx: HostContext) -> List[OptionEntry]:
    project_id = ctx.get_str("projectId")
    message_board_id = ctx.get_str("messageBoardId")
    messages = await collect_by_link(
        ctx.client,
        f"/buckets/{project_id}/message_boards/{message_board_id}/messages.json",
        account=ctx.account_id,
    )
    return _options(messages, lambda m: m.get("subject") or m.get("title"))


async def get_documents(ctx: HostContext) -> List[OptionEntry]:
    project_id = ctx.get_str("projectId")
    vault_id = ctx.get_str("vaultId")
    return await _paged_options(
        ctx, f"/buckets/{project_id}/vaults/{vault_id}/documents.json", _title
    )


async def get_uploads(ctx: HostContext) -> List[OptionEntry]:
    project_id = ctx.get_str("projectId")
    vault_id = ctx.get_str("vaultId")
    return await _paged_options(
        ctx,
        f"/buckets/{project_id}/vaults/{vault_id}/uploads.json",
        lambda u: u.get("title") or u.get("filename"),
    )


async def get_webhooks(ctx: HostContext) -> List[OptionEntry]:
    project_id = ctx.get_str("projectId")
    return await _paged_options(
        ctx,
        f"/buckets/{project_id}/webhooks.json",
        lambda w: w.get("payload_url") or f"Webhook {w['id']}",
    )


LOAD_OPTIONS: Dict[str, OptionBuilder] = {
    "getAccounts": get_accounts,
    "getCampfires": get_campfires,
    "getCardTableColumns": get_card_table_columns,
    "getCardTables": get_card_tables,
    "getDocuments": get_documents,
    "getMessageBoards": get_message_boards,
    "getMessages": get_messages,
    "getPeople": get_people,
    "getProjects": get_projects,
    "getQuestions": get_questions,
    "getQuestionnaires": get_questionnaires,
    "getSchedules": get_schedules,
    "getTemplates": get_templates,
    "getTodolists": get_todolists,
    "getTodosets": get_todosets,
    "getUploads": get_uploads,
    "getVaults": get_vaults,
    "getWebhooks": get_webhooks,
}


async def load_options(ctx: HostContext, method: str) -> List[OptionEntry]:
    """Dispatch a host load-options call (e.g. "getProjects") to its builder."""
    builder = LOAD_OPTIONS.get(method)
    if builder is None:
        raise UnknownLoadOptionsMethodError(method)
    return await builder(ctx)


__all__ = [
    "OptionBuilder",
    "UnknownLoadOptionsMethodError",
    "LOAD_OPTIONS",
    "load_options",
    "get_accounts",
    "get_projects",
    "get_people",
    "get_templates",
    "get_message_boards",
    "get_campfires",
    "get_schedules",
    "get_questionnaires",
    "get_card_tables",
    "get_todosets",
    "get_todolists",
    "get_vaults",
    "get_questions",
    "get_card_table_columns",
    "get_messages",
    "get_documents",
    "get_uploads",
    "get_webhooks",
]
