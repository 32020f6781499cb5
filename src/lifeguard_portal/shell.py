"""Top-level portal shell wiring the transport, event bus and stores."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from .client import PortalClient
from .config import Settings, get_settings
from .events import EventBus
from .resources import PortalAPI
from .stores import IncidentStore, LifeguardStore, ManagerStore, RegionStore
from .stores.base import AlertCallback, ConfirmCallback, gather_all

logger = logging.getLogger(__name__)


class PortalShell:
    """Owns one client and one bus shared by every list.

    A mutation in one store publishes a typed event; the other stores decide
    for themselves whether to re-fetch or apply the payload.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        *,
        confirm: Optional[ConfirmCallback] = None,
        alert: Optional[AlertCallback] = None,
        http: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.client = PortalClient(self.settings, http=http)
        self.api = PortalAPI(self.client)
        self.bus = EventBus()
        store_kwargs = {"confirm": confirm, "alert": alert}
        self.regions = RegionStore(self.api, self.bus, **store_kwargs)
        self.managers = ManagerStore(self.api, self.bus, **store_kwargs)
        self.lifeguards = LifeguardStore(self.api, self.bus, **store_kwargs)
        self.incidents = IncidentStore(self.api, self.bus, **store_kwargs)

    @property
    def stores(self) -> tuple:
        return (self.regions, self.managers, self.lifeguards, self.incidents)

    @property
    def revision(self) -> int:
        return self.bus.revision

    async def load(self) -> bool:
        """Fetch every list concurrently; True when all of them loaded."""
        results = await gather_all(*(store.refresh() for store in self.stores))
        loaded = all(results)
        if not loaded:
            failed = [store.name for store in self.stores if store.error]
            logger.warning("portal_load_incomplete failed=%s", ",".join(failed))
        return loaded

    async def aclose(self) -> None:
        for store in self.stores:
            store.detach()
        await self.client.aclose()

    async def __aenter__(self) -> PortalShell:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
