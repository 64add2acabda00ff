import logging
from typing import Any, Callable, Dict, List, Optional

from .client import BasecampClient
from .context import HostContext
from .dispatch import execute, load_handlers
from .options import load_options

log = logging.getLogger("basecamp_connector.core.registry")


def register_connector_tools(
    app,
    client_provider: Callable[[], BasecampClient] | BasecampClient,
    *,
    node: str = "Basecamp",
) -> List[str]:
    """
    Register the connector entry points on an app exposing a .tool decorator.
    - basecamp_execute: run one (resource, operation) over a list of items
    - basecamp_load_options: build a dropdown option list (getProjects, ...)
    """
    if isinstance(client_provider, BasecampClient):
        _client = client_provider

        def client_provider():
            return _client

    if not hasattr(app, "tool"):
        raise TypeError("app must expose a 'tool' decorator")

    # Fail fast on a handler table with gaps
    load_handlers()

    async def basecamp_execute(
        resource: str,
        operation: str,
        parameters: Dict[str, Any],
        items: Optional[List[Dict[str, Any]]] = None,
        continue_on_fail: bool = False,
    ) -> List[Dict[str, Any]]:
        """
        Run a Basecamp operation (e.g. resource="todo", operation="create").
        `parameters` holds node-level values (accountId, projectId, ...);
        `items` holds per-item overrides, one entry per item to process.
        """
        ctx = HostContext(
            client=client_provider(),
            parameters=parameters,
            items=items or (),
            node=node,
            continue_on_fail=continue_on_fail,
        )
        results = await execute(ctx, resource, operation)
        return [{"item": r.item, "json": r.json} for r in results]

    async def basecamp_load_options(
        method: str, parameters: Dict[str, Any]
    ) -> List[Dict[str, str]]:
        """Return {name, value} options for a dependent dropdown (e.g. getVaults)."""
        ctx = HostContext(client=client_provider(), parameters=parameters, node=node)
        options = await load_options(ctx, method)
        return [o.model_dump() for o in options]

    names = []
    for fn in (basecamp_execute, basecamp_load_options):
        app.tool(name=fn.__name__)(fn)
        names.append(fn.__name__)
        log.info("Registered tool: %s", fn.__name__)
    return names


__all__ = ["register_connector_tools"]
