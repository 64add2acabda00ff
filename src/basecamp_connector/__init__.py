"""basecamp_connector package exports."""

from .core.client import BasecampClient
from .core.context import HostContext
from .core.dispatch import Operation, Resource, execute
from .core.errors import BasecampApiError, BasecampError, MissingParameterError
from .core.models import DockName, OptionEntry
from .core.options import load_options
from .core.pagination import collect_by_link, collect_by_page

__all__ = [
    # Client
    "BasecampClient",
    "HostContext",
    # Exceptions
    "BasecampError",
    "BasecampApiError",
    "MissingParameterError",
    # Engine
    "collect_by_link",
    "collect_by_page",
    "DockName",
    "OptionEntry",
    "load_options",
    "Resource",
    "Operation",
    "execute",
]
