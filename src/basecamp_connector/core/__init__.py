"""Core domain surface for basecamp-connector (transport-agnostic)."""

from .auth import BasecampOAuth2Auth, OAuth2Token
from .client import ApiResponse, BasecampClient
from .config import ConnectorSettings, create_client_from_env, load_env_config
from .context import HostContext
from .dispatch import (
    ItemResult,
    Operation,
    Resource,
    UnsupportedOperationError,
    execute,
)
from .dock import resolve_dock_entry, resolve_todoset
from .errors import (
    BasecampApiError,
    BasecampError,
    MissingCredentialsError,
    MissingParameterError,
)
from .models import DockEntry, DockName, OptionEntry, Project, TodosetRef
from .options import LOAD_OPTIONS, UnknownLoadOptionsMethodError, load_options
from .pagination import (
    PAGE_SIZE,
    Pagination,
    collect_all,
    collect_by_link,
    collect_by_page,
    parse_next_link,
)
from .registry import register_connector_tools

__all__ = [
    # Client
    "BasecampClient",
    "ApiResponse",
    "BasecampOAuth2Auth",
    "OAuth2Token",
    # Exceptions
    "BasecampError",
    "BasecampApiError",
    "MissingParameterError",
    "MissingCredentialsError",
    "UnsupportedOperationError",
    "UnknownLoadOptionsMethodError",
    # Pagination
    "PAGE_SIZE",
    "Pagination",
    "parse_next_link",
    "collect_by_link",
    "collect_by_page",
    "collect_all",
    # Dock
    "DockName",
    "DockEntry",
    "Project",
    "TodosetRef",
    "resolve_dock_entry",
    "resolve_todoset",
    # Options / execution
    "OptionEntry",
    "LOAD_OPTIONS",
    "load_options",
    "Resource",
    "Operation",
    "ItemResult",
    "execute",
    # Config / context
    "ConnectorSettings",
    "load_env_config",
    "create_client_from_env",
    "HostContext",
    "register_connector_tools",
]
