"""Lifeguard list state."""

from __future__ import annotations

import logging
from typing import Any, Optional, Tuple

from ..client import PortalError
from ..events import LifeguardChanged, PortalEvent, RegionChanged
from ..forms import LifeguardDraft
from ..schemas import LifeguardPayload, LifeguardRead, LifeguardUpdate, RegionRead
from .base import EditableStore, EntityCollection, gather_all, region_slug

logger = logging.getLogger(__name__)


class LifeguardStore(EditableStore[LifeguardRead, LifeguardDraft]):
    name = "lifeguards"
    label = "lifeguard"
    delete_prompt = "Delete this lifeguard?"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.all_regions: EntityCollection[RegionRead] = EntityCollection()
        self.lookup_error: Optional[str] = None

    def subscribe(self) -> None:
        self.listen(RegionChanged, self._on_related_change)

    def changed_event(self, action: str, entity_id: str) -> PortalEvent:
        return LifeguardChanged(action=action, lifeguard_id=entity_id, source=self.name)

    async def fetch(self) -> Tuple[Any, ...]:
        return await gather_all(self.api.lifeguards.list(), self.api.regions.list())

    def apply_fetch(self, result: Tuple[Any, ...]) -> None:
        lifeguards, regions = result
        self.items.replace(lifeguards)
        self.all_regions.replace(regions)

    async def fetch_one(self, entity_id: str) -> LifeguardRead:
        return await self.api.lifeguards.get(entity_id)

    async def delete_remote(self, entity_id: str) -> None:
        await self.api.lifeguards.delete(entity_id)

    def new_draft(self) -> LifeguardDraft:
        return LifeguardDraft()

    def draft_for(self, item: LifeguardRead) -> LifeguardDraft:
        return LifeguardDraft(name=item.name, phone=item.phone, region_id=item.region_id)

    async def create_remote(self, payload: LifeguardPayload) -> LifeguardRead:
        return await self.api.lifeguards.create(payload)

    async def update_remote(self, entity_id: str, payload: LifeguardUpdate) -> LifeguardRead:
        return await self.api.lifeguards.update(entity_id, payload)

    def region_label(self, region_id: str) -> str:
        return region_slug(self.all_regions, region_id)

    async def find_by_phone(self, phone: str) -> Optional[LifeguardRead]:
        self.lookup_error = None
        phone = phone.strip()
        if not phone:
            self.lookup_error = "Phone is required"
            return None
        try:
            lifeguard = await self.api.lifeguards.get_by_phone(phone)
        except PortalError as exc:
            self.lookup_error = exc.message
            return None
        self.items.upsert(lifeguard)
        return lifeguard
