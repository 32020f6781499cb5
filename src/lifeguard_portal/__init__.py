"""Async client and state stores for the lifeguard admin portal."""

from .client import (
    PortalClient,
    PortalConnectionError,
    PortalError,
    PortalRequestError,
    PortalResponseError,
)
from .config import Settings, get_settings
from .events import (
    EventBus,
    IncidentChanged,
    LifeguardChanged,
    ManagerAssignmentChanged,
    ManagerChanged,
    PortalEvent,
    RegionChanged,
)
from .resources import PortalAPI
from .shell import PortalShell

__all__ = [
    "EventBus",
    "IncidentChanged",
    "LifeguardChanged",
    "ManagerAssignmentChanged",
    "ManagerChanged",
    "PortalAPI",
    "PortalClient",
    "PortalConnectionError",
    "PortalError",
    "PortalEvent",
    "PortalRequestError",
    "PortalResponseError",
    "PortalShell",
    "RegionChanged",
    "Settings",
    "get_settings",
]
