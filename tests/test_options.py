import pytest
import respx
from basecamp_connector.core.auth import AUTHORIZATION_JSON_URL
from basecamp_connector.core.client import BasecampClient
from basecamp_connector.core.context import HostContext
from basecamp_connector.core.errors import MissingParameterError
from basecamp_connector.core.models import OptionEntry
from basecamp_connector.core.options import (
    LOAD_OPTIONS,
    UnknownLoadOptionsMethodError,
    get_campfires,
    get_todolists,
    get_vaults,
    load_options,
)
from httpx import Response

API = "https://3.basecampapi.com/9999"


def _project(*dock):
    return {"id": 123, "name": "Launch", "dock": list(dock)}


@pytest.fixture
def client():
    return BasecampClient()


@pytest.fixture
def ctx(client):
    return HostContext(
        client=client, parameters={"accountId": "9999", "projectId": "123"}
    )


@pytest.mark.asyncio
@respx.mock
async def test_vault_options_root_first_then_all_children(client, ctx):
    respx.get(f"{API}/projects/123.json").mock(
        return_value=Response(
            200,
            json=_project(
                {"id": 1, "name": "todoset", "title": "To-dos"},
                {"id": 55, "name": "vault", "title": "Docs"},
            ),
        )
    )
    page_one = [{"id": 1000 + n, "title": f"Folder {n}"} for n in range(50)]
    page_two = [{"id": 2000 + n, "title": f"Archive {n}"} for n in range(3)]
    route = respx.get(f"{API}/buckets/123/vaults/55/vaults.json").mock(
        side_effect=[Response(200, json=page_one), Response(200, json=page_two)]
    )

    async with client:
        options = await get_vaults(ctx)

    assert len(options) == 54
    assert options[0] == OptionEntry(name="Docs", value="55")
    assert options[1] == OptionEntry(name="Folder 0", value="1000")
    assert options[-1] == OptionEntry(name="Archive 2", value="2002")
    assert [c.request.url.params["page"] for c in route.calls] == ["1", "2"]


@pytest.mark.asyncio
@respx.mock
async def test_vault_options_empty_without_vault_dock(client, ctx):
    respx.get(f"{API}/projects/123.json").mock(
        return_value=Response(200, json=_project())
    )

    async with client:
        assert await get_vaults(ctx) == []


@pytest.mark.asyncio
@respx.mock
async def test_vault_root_title_fallback(client, ctx):
    respx.get(f"{API}/projects/123.json").mock(
        return_value=Response(200, json=_project({"id": 55, "name": "vault"}))
    )
    respx.get(f"{API}/buckets/123/vaults/55/vaults.json").mock(
        return_value=Response(200, json=[])
    )

    async with client:
        options = await get_vaults(ctx)

    assert options == [OptionEntry(name="Root Vault", value="55")]


@pytest.mark.asyncio
@respx.mock
async def test_campfire_absent_yields_empty_list(client, ctx):
    route = respx.get(f"{API}/projects/123.json").mock(
        return_value=Response(
            200, json=_project({"id": 55, "name": "vault", "title": "Docs"})
        )
    )

    async with client:
        options = await get_campfires(ctx)

    assert options == []
    assert route.call_count == 1


@pytest.mark.asyncio
@respx.mock
async def test_campfire_present_yields_single_entry(client, ctx):
    respx.get(f"{API}/projects/123.json").mock(
        return_value=Response(
            200, json=_project({"id": 9, "name": "chat", "title": "Chat"})
        )
    )

    async with client:
        options = await get_campfires(ctx)

    assert options == [OptionEntry(name="Chat", value="9")]


@pytest.mark.asyncio
@respx.mock
async def test_todolists_use_bucket_and_todoset_from_dock_url(client, ctx):
    respx.get(f"{API}/projects/123.json").mock(
        return_value=Response(
            200,
            json=_project(
                {
                    "id": 77,
                    "name": "todoset",
                    "url": f"{API}/buckets/55/todosets/77.json",
                }
            ),
        )
    )
    route = respx.get(f"{API}/buckets/55/todosets/77/todolists.json").mock(
        return_value=Response(
            200,
            json=[{"id": 1, "title": "Launch list"}, {"id": 2, "title": "Backlog"}],
        )
    )

    async with client:
        options = await get_todolists(ctx)

    assert options == [
        OptionEntry(name="Launch list", value="1"),
        OptionEntry(name="Backlog", value="2"),
    ]
    assert route.call_count == 1


@pytest.mark.asyncio
@respx.mock
async def test_todolists_empty_when_dock_url_does_not_match(client, ctx):
    route = respx.get(f"{API}/projects/123.json").mock(
        return_value=Response(
            200,
            json=_project(
                {"id": 77, "name": "todoset", "url": f"{API}/projects/123.json"}
            ),
        )
    )

    async with client:
        options = await get_todolists(ctx)

    assert options == []
    assert route.call_count == 1


@pytest.mark.asyncio
@respx.mock
async def test_accounts_keep_only_basecamp_3_and_4(client, ctx):
    respx.get(AUTHORIZATION_JSON_URL).mock(
        return_value=Response(
            200,
            json={
                "identity": {"id": 1, "first_name": "Ada"},
                "accounts": [
                    {"id": 9999, "name": "Acme", "product": "bc3"},
                    {"id": 8888, "name": "Classic", "product": "bcx"},
                    {"id": 7777, "name": "Newco", "product": "bc4"},
                    {"id": 6666, "name": "Tracker", "product": "highrise"},
                ],
            },
        )
    )

    async with client:
        options = await load_options(ctx, "getAccounts")

    assert options == [
        OptionEntry(name="Acme", value="9999"),
        OptionEntry(name="Newco", value="7777"),
    ]


@pytest.mark.asyncio
@respx.mock
async def test_projects_follow_link_header(client, ctx):
    route = respx.get(f"{API}/projects.json").mock(
        side_effect=[
            Response(
                200,
                json=[{"id": 1, "name": "Alpha"}],
                headers={"Link": f'<{API}/projects.json?page=2>; rel="next"'},
            ),
            Response(200, json=[{"id": 2, "name": "Beta"}]),
        ]
    )

    async with client:
        options = await load_options(ctx, "getProjects")

    assert [o.name for o in options] == ["Alpha", "Beta"]
    assert route.call_count == 2


@pytest.mark.asyncio
@respx.mock
async def test_card_table_columns_flatten_embedded_lists(client):
    ctx = HostContext(
        client=client,
        parameters={"accountId": "9999", "projectId": "123", "cardTableId": "42"},
    )
    respx.get(f"{API}/buckets/123/card_tables/42.json").mock(
        return_value=Response(
            200,
            json={
                "id": 42,
                "lists": [
                    {"id": 1, "title": "Triage"},
                    {"id": 2, "title": "In progress"},
                ],
            },
        )
    )

    async with client:
        options = await load_options(ctx, "getCardTableColumns")

    assert options == [
        OptionEntry(name="Triage", value="1"),
        OptionEntry(name="In progress", value="2"),
    ]


@pytest.mark.asyncio
@respx.mock
async def test_uploads_and_webhooks_label_fallbacks(client):
    ctx = HostContext(
        client=client,
        parameters={"accountId": "9999", "projectId": "123", "vaultId": "55"},
    )
    respx.get(f"{API}/buckets/123/vaults/55/uploads.json").mock(
        return_value=Response(200, json=[{"id": 3, "filename": "plan.pdf"}])
    )
    respx.get(f"{API}/buckets/123/webhooks.json").mock(
        return_value=Response(200, json=[{"id": 8}])
    )

    async with client:
        uploads = await load_options(ctx, "getUploads")
        webhooks = await load_options(ctx, "getWebhooks")

    assert uploads == [OptionEntry(name="plan.pdf", value="3")]
    assert webhooks == [OptionEntry(name="Webhook 8", value="8")]


@pytest.mark.asyncio
async def test_unknown_method_is_rejected(ctx):
    with pytest.raises(UnknownLoadOptionsMethodError):
        await load_options(ctx, "getSpaceships")


@pytest.mark.asyncio
async def test_missing_parent_parameter_is_reported(client):
    ctx = HostContext(client=client, parameters={"accountId": "9999"})
    with pytest.raises(MissingParameterError) as exc:
        await load_options(ctx, "getMessages")

    assert exc.value.name == "projectId"


ALL_PARAMETERS = {
    "accountId": "9999",
    "projectId": "123",
    "messageBoardId": "11",
    "questionnaireId": "21",
    "vaultId": "55",
    "cardTableId": "42",
}

SINGLE_DOCK_FALLBACKS = [
    ("getMessageBoards", "message_board", "Message Board"),
    ("getCampfires", "chat", "Campfire"),
    ("getSchedules", "schedule", "Schedule"),
    ("getQuestionnaires", "questionnaire", "Automatic Check-ins"),
    ("getCardTables", "kanban_board", "Card Table"),
    ("getTodosets", "todoset", "To-dos"),
]

LINK_LISTINGS = [
    ("getProjects", "/projects.json"),
    ("getPeople", "/people.json"),
    ("getMessages", "/buckets/123/message_boards/11/messages.json"),
]

PAGE_LISTINGS = [
    ("getTemplates", "/templates.json"),
    ("getQuestions", "/buckets/123/questionnaires/21/questions.json"),
    ("getDocuments", "/buckets/123/vaults/55/documents.json"),
    ("getUploads", "/buckets/123/vaults/55/uploads.json"),
    ("getWebhooks", "/buckets/123/webhooks.json"),
]

# covered by the dedicated tests above
CASCADES = {"getAccounts", "getTodolists", "getVaults", "getCardTableColumns"}


def _record(n):
    label = f"Record {n}"
    return {
        "id": n,
        "name": label,
        "title": label,
        "subject": label,
        "payload_url": label,
    }


def test_every_load_options_method_is_covered():
    covered = (
        {m for m, _, _ in SINGLE_DOCK_FALLBACKS}
        | {m for m, _ in LINK_LISTINGS}
        | {m for m, _ in PAGE_LISTINGS}
        | CASCADES
    )
    assert covered == set(LOAD_OPTIONS)


@pytest.mark.asyncio
@pytest.mark.parametrize("method, dock_name, fallback", SINGLE_DOCK_FALLBACKS)
@respx.mock
async def test_single_dock_builders_fall_back_to_fixed_label(
    client, method, dock_name, fallback
):
    route = respx.get(f"{API}/projects/123.json").mock(
        return_value=Response(
            200,
            json=_project(
                {"id": 1, "name": "vault", "title": "Docs"},
                {"id": 31, "name": dock_name, "title": None},
            ),
        )
    )
    ctx = HostContext(client=client, parameters=ALL_PARAMETERS)

    async with client:
        options = await load_options(ctx, method)

    assert options == [OptionEntry(name=fallback, value="31")]
    assert route.call_count == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("method, path", LINK_LISTINGS)
@respx.mock
async def test_link_listings_follow_next_header(client, method, path):
    route = respx.get(f"{API}{path}").mock(
        side_effect=[
            Response(
                200,
                json=[_record(1)],
                headers={"Link": f'<{API}{path}?page=2>; rel="next"'},
            ),
            Response(200, json=[_record(2)]),
        ]
    )
    ctx = HostContext(client=client, parameters=ALL_PARAMETERS)

    async with client:
        options = await load_options(ctx, method)

    assert options == [
        OptionEntry(name="Record 1", value="1"),
        OptionEntry(name="Record 2", value="2"),
    ]
    assert route.call_count == 2
    assert "page" not in route.calls[0].request.url.params
    assert str(route.calls[1].request.url) == f"{API}{path}?page=2"


@pytest.mark.asyncio
@pytest.mark.parametrize("method, path", PAGE_LISTINGS)
@respx.mock
async def test_page_listings_walk_page_numbers(client, method, path):
    route = respx.get(f"{API}{path}").mock(
        side_effect=[
            Response(200, json=[_record(n) for n in range(50)]),
            Response(200, json=[_record(50), _record(51)]),
        ]
    )
    ctx = HostContext(client=client, parameters=ALL_PARAMETERS)

    async with client:
        options = await load_options(ctx, method)

    assert len(options) == 52
    assert options[-1] == OptionEntry(name="Record 51", value="51")
    assert [c.request.url.params["page"] for c in route.calls] == ["1", "2"]
