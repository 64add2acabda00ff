from __future__ import annotations

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

SUPPORTED_PRODUCTS = frozenset({"bc3", "bc4"})


class DockName(str, Enum):
    TODOSET = "todoset"
    MESSAGE_BOARD = "message_board"
    CHAT = "chat"
    VAULT = "vault"
    SCHEDULE = "schedule"
    QUESTIONNAIRE = "questionnaire"
    KANBAN_BOARD = "kanban_board"


class DockEntry(BaseModel):
    """Pointer from a project to one of its tools (chat, vault, schedule...)."""

    name: str
    id: int | str
    title: Optional[str] = None
    url: Optional[str] = None
    app_url: Optional[str] = None
    enabled: bool = True
    position: Optional[int] = None

    model_config = ConfigDict(extra="ignore")


class Project(BaseModel):
    id: int | str
    name: str = ""
    description: Optional[str] = None
    dock: List[DockEntry] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("dock", mode="before")
    @classmethod
    def _dock_entries_only(cls, value: Any) -> Any:
        # Tolerate a missing/null dock and skip malformed entries
        if not isinstance(value, list):
            return []
        return [d for d in value if isinstance(d, dict) and "name" in d and "id" in d]


class TodosetRef(BaseModel):
    bucket_id: str
    todoset_id: str

    model_config = ConfigDict(frozen=True)


class Account(BaseModel):
    id: int | str
    name: str
    product: str
    href: Optional[str] = None
    app_href: Optional[str] = None

    model_config = ConfigDict(extra="ignore")

    @property
    def is_supported(self) -> bool:
        return self.product in SUPPORTED_PRODUCTS


class Identity(BaseModel):
    id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email_address: Optional[str] = None

    model_config = ConfigDict(extra="ignore")


class Authorization(BaseModel):
    """Payload of launchpad's /authorization.json."""

    identity: Optional[Identity] = None
    accounts: List[Account] = Field(default_factory=list)

    model_config = ConfigDict(extra="ignore")

    @field_validator("accounts", mode="before")
    @classmethod
    def _accounts_list(cls, value: Any) -> Any:
        if not isinstance(value, list):
            return []
        return [a for a in value if isinstance(a, dict)]


class OptionEntry(BaseModel):
    """One {name, value} pair for a dependent dropdown."""

    name: str
    value: str

    model_config = ConfigDict(frozen=True)

    @classmethod
    def of(cls, name: Any, value: Any) -> "OptionEntry":
        return cls(name="" if name is None else str(name), value=str(value))


__all__ = [
    "SUPPORTED_PRODUCTS",
    "DockName",
    "DockEntry",
    "Project",
    "TodosetRef",
    "Account",
    "Identity",
    "Authorization",
    "OptionEntry",
]
