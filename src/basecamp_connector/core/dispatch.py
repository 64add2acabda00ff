"""
(resource, operation) dispatch for the execution path.

Handlers live in `basecamp_connector.core.operations.*` and register
themselves with `@handler(Resource.X, Operation.Y)`. The set of supported
pairs is closed: registering an unknown pair, registering twice, or leaving
a pair without a handler is an error caught by `check_exhaustive()`.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
from dataclasses import dataclass
from enum import Enum
from types import ModuleType
from typing import Any, Awaitable, Callable, Dict, FrozenSet, List, Tuple

from .context import HostContext
from .errors import error_details
from .observability import log_event

log = logging.getLogger("basecamp_connector.core.dispatch")

OPERATIONS_PACKAGE = "basecamp_connector.core.operations"


class Resource(str, Enum):
    PROJECT = "project"
    TODOLIST = "todolist"
    TODO = "todo"
    MESSAGE = "message"
    COMMENT = "comment"
    CAMPFIRE = "campfire"
    CAMPFIRE_LINE = "campfireLine"
    CARD_TABLE = "cardTable"
    CARD = "card"
    DOCUMENT = "document"
    EVENT = "event"
    PERSON = "person"
    QUESTION = "question"
    QUESTION_ANSWER = "questionAnswer"
    SCHEDULE_ENTRY = "scheduleEntry"
    TEMPLATE = "template"
    UPLOAD = "upload"
    VAULT = "vault"
    WEBHOOK = "webhook"


class Operation(str, Enum):
    CREATE = "create"
    DELETE = "delete"
    GET = "get"
    GET_ALL = "getAll"
    UPDATE = "update"
    COMPLETE = "complete"
    UNCOMPLETE = "uncomplete"
    GET_ME = "getMe"
    CREATE_PROJECT = "createProject"


OperationKey = Tuple[Resource, Operation]
Handler = Callable[[HostContext, int], Awaitable[Any]]

_C, _D, _G, _A, _U = (
    Operation.CREATE,
    Operation.DELETE,
    Operation.GET,
    Operation.GET_ALL,
    Operation.UPDATE,
)

OPERATIONS_BY_RESOURCE: Dict[Resource, Tuple[Operation, ...]] = {
    Resource.PROJECT: (_C, _D, _G, _A, _U),
    Resource.TODOLIST: (_C, _G, _A),
    Resource.TODO: (_C, _G, _A, _U, _D, Operation.COMPLETE, Operation.UNCOMPLETE),
    Resource.MESSAGE: (_C, _G, _A),
    Resource.COMMENT: (_C, _A),
    Resource.CAMPFIRE: (_G,),
    Resource.CAMPFIRE_LINE: (_C, _G, _A, _D),
    Resource.CARD_TABLE: (_G,),
    Resource.CARD: (_C, _G, _A, _U),
    Resource.DOCUMENT: (_C, _G, _A, _U),
    Resource.EVENT: (_A,),
    Resource.PERSON: (_G, _A, Operation.GET_ME),
    Resource.QUESTION: (_G, _A),
    Resource.QUESTION_ANSWER: (_A,),
    Resource.SCHEDULE_ENTRY: (_C, _G, _A, _U),
    Resource.TEMPLATE: (_G, _A, Operation.CREATE_PROJECT),
    Resource.UPLOAD: (_G, _A),
    Resource.VAULT: (_C, _G, _A, _U),
    Resource.WEBHOOK: (_C, _D, _A, _U),
}

SUPPORTED_OPERATIONS: FrozenSet[OperationKey] = frozenset(
    (resource, operation)
    for resource, operations in OPERATIONS_BY_RESOURCE.items()
    for operation in operations
)

_HANDLERS: Dict[OperationKey, Handler] = {}
_loaded = False


class UnsupportedOperationError(ValueError):
    def __init__(self, resource: str, operation: str):
        super().__init__(
            f"Unsupported operation '{operation}' for resource '{resource}'"
        )
        self.resource = resource
        self.operation = operation


@dataclass(frozen=True)
class ItemResult:
    item: int
    json: Dict[str, Any]


def handler(resource: Resource, operation: Operation) -> Callable[[Handler], Handler]:
    """Register `fn` as the handler of one supported (resource, operation) pair."""
    key = (resource, operation)
    if key not in SUPPORTED_OPERATIONS:
        raise UnsupportedOperationError(resource.value, operation.value)

    def decorator(fn: Handler) -> Handler:
        existing = _HANDLERS.get(key)
        if existing is not None and existing is not fn:
            raise ValueError(
                f"Duplicate handler for {resource.value}.{operation.value}: "
                f"{existing.__module__}.{existing.__name__}"
            )
        _HANDLERS[key] = fn
        return fn

    return decorator


def discover_operation_modules(
    package_name: str = OPERATIONS_PACKAGE,
) -> List[ModuleType]:
    """Import every handler module under the operations package."""
    modules: List[ModuleType] = []
    base_pkg = importlib.import_module(package_name)

    for finder in pkgutil.iter_modules(base_pkg.__path__, base_pkg.__name__ + "."):
        if finder.name.rsplit(".", 1)[-1].startswith("_"):
            continue
        modules.append(importlib.import_module(finder.name))
        log.debug("Loaded operation module %s", finder.name)

    return modules


def check_exhaustive() -> None:
    missing = SUPPORTED_OPERATIONS - _HANDLERS.keys()
    if missing:
        names = sorted(f"{r.value}.{o.value}" for r, o in missing)
        raise RuntimeError(f"Operations without handler: {', '.join(names)}")


def load_handlers() -> Dict[OperationKey, Handler]:
    global _loaded
    if not _loaded:
        discover_operation_modules()
        check_exhaustive()
        _loaded = True
    return dict(_HANDLERS)


def get_handler(resource: Resource | str, operation: Operation | str) -> Handler:
    try:
        key = (Resource(resource), Operation(operation))
    except ValueError as exc:
        raise UnsupportedOperationError(str(resource), str(operation)) from exc

    handlers = load_handlers()
    if key not in handlers:
        raise UnsupportedOperationError(key[0].value, key[1].value)
    return handlers[key]


def _as_json(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {"value": value}


def _to_items(data: Any, item_index: int) -> List[ItemResult]:
    if isinstance(data, list):
        return [ItemResult(item=item_index, json=_as_json(d)) for d in data]
    return [ItemResult(item=item_index, json=_as_json(data))]


async def execute(
    ctx: HostContext, resource: Resource | str, operation: Operation | str
) -> List[ItemResult]:
    """
    Run one operation for every input item, sequentially.
    A failing item either aborts the run (error re-raised unchanged) or, when
    the host asked to continue on fail, gets the error attached to its output.
    """
    fn = get_handler(resource, operation)
    results: List[ItemResult] = []

    for i in range(ctx.item_count):
        try:
            data = await fn(ctx, i)
        except Exception as exc:
            log_event(
                "item_failed",
                log,
                level=logging.WARNING,
                request_id=ctx.request_id,
                node=ctx.node,
                resource=Resource(resource).value,
                operation=Operation(operation).value,
                item_index=i,
                error_type=type(exc).__name__,
            )
            if not ctx.continue_on_fail:
                raise
            results.append(ItemResult(item=i, json=error_details(exc)))
            continue
        results.extend(_to_items(data, i))

    return results


__all__ = [
    "Resource",
    "Operation",
    "OperationKey",
    "Handler",
    "ItemResult",
    "SUPPORTED_OPERATIONS",
    "UnsupportedOperationError",
    "handler",
    "discover_operation_modules",
    "check_exhaustive",
    "load_handlers",
    "get_handler",
    "execute",
]
