"""Typed resource clients grouped behind a single API facade."""

from __future__ import annotations

from ..client import PortalClient
from .incidents import IncidentsResource
from .lifeguards import LifeguardsResource
from .managers import ManagersResource
from .regions import RegionsResource


class PortalAPI:
    """All resource clients sharing one transport."""

    def __init__(self, client: PortalClient) -> None:
        settings = client.settings
        self.client = client
        self.regions = RegionsResource(client, settings.regions_path)
        self.managers = ManagersResource(client, settings.managers_path)
        self.lifeguards = LifeguardsResource(client, settings.lifeguards_path)
        self.incidents = IncidentsResource(client, settings.incidents_path)


__all__ = [
    "IncidentsResource",
    "LifeguardsResource",
    "ManagersResource",
    "PortalAPI",
    "RegionsResource",
]
