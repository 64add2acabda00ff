"""Explicit host context handed to every option builder and operation handler."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from typing import Any, Mapping, Optional, Sequence

from .client import BasecampClient
from .errors import MissingParameterError

ACCOUNT_ID_PARAMETER = "accountId"
DEFAULT_NODE_NAME = "Basecamp"


class _Missing:
    def __repr__(self) -> str:  # pragma: no cover - trivial
        return "MISSING"


MISSING: Any = _Missing()


def _present(value: Any) -> bool:
    return value is not None and value != ""


def ensure_request_id(candidate: Optional[str] = None) -> str:
    return candidate or uuid.uuid4().hex


@dataclass(frozen=True)
class HostContext:
    """
    What the host gives us for one invocation:
    - client: authenticated BasecampClient
    - parameters: node-level parameter values (accountId, projectId, ...)
    - items: per-item parameter overrides; one entry per input item
    - continue_on_fail: host switch deciding whether item failures abort the run
    """

    client: BasecampClient
    parameters: Mapping[str, Any] = field(default_factory=dict)
    items: Sequence[Mapping[str, Any]] = ()
    node: str = DEFAULT_NODE_NAME
    continue_on_fail: bool = False
    request_id: str = field(default_factory=ensure_request_id)

    @property
    def item_count(self) -> int:
        return max(1, len(self.items))

    @property
    def account_id(self) -> str:
        return str(self.get_parameter(ACCOUNT_ID_PARAMETER))

    def get_parameter(
        self, name: str, item_index: int = 0, default: Any = MISSING
    ) -> Any:
        """Per-item value first, then the node-level value, then `default`."""
        if 0 <= item_index < len(self.items):
            item = self.items[item_index]
            value = item.get(name)
            if _present(value):
                return value

        value = self.parameters.get(name)
        if _present(value):
            return value

        if default is MISSING:
            raise MissingParameterError(name, item_index)
        return default

    def get_str(self, name: str, item_index: int = 0) -> str:
        return str(self.get_parameter(name, item_index))


__all__ = [
    "HostContext",
    "MISSING",
    "ACCOUNT_ID_PARAMETER",
    "DEFAULT_NODE_NAME",
    "ensure_request_id",
]
