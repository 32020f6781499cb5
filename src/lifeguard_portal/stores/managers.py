"""Manager list state: CRUD and region assignment from the manager side."""

from __future__ import annotations

import logging
from typing import Any, List, Tuple

from ..client import PortalError
from ..events import ManagerAssignmentChanged, ManagerChanged, PortalEvent, RegionChanged
from ..forms import ManagerDraft
from ..schemas import ManagerPayload, ManagerRead, ManagerUpdate, RegionRead, RegionSummary
from .base import EditableStore, EntityCollection, find_region, gather_all

logger = logging.getLogger(__name__)


class ManagerStore(EditableStore[ManagerRead, ManagerDraft]):
    name = "managers"
    label = "manager"
    delete_prompt = "Delete this manager?"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.all_regions: EntityCollection[RegionRead] = EntityCollection()

    def subscribe(self) -> None:
        self.listen(RegionChanged, self._on_related_change)
        self.listen(ManagerAssignmentChanged, self._on_assignment_changed)

    async def _on_assignment_changed(self, event: ManagerAssignmentChanged) -> None:
        # the response is a region; manager rows have to be fetched again
        self.all_regions.upsert(event.region)
        await self.refresh()

    def changed_event(self, action: str, entity_id: str) -> PortalEvent:
        return ManagerChanged(action=action, manager_id=entity_id, source=self.name)

    async def fetch(self) -> Tuple[Any, ...]:
        return await gather_all(self.api.managers.list(), self.api.regions.list())

    def apply_fetch(self, result: Tuple[Any, ...]) -> None:
        managers, regions = result
        self.items.replace(managers)
        self.all_regions.replace(regions)

    async def fetch_one(self, entity_id: str) -> ManagerRead:
        return await self.api.managers.get(entity_id)

    async def delete_remote(self, entity_id: str) -> None:
        await self.api.managers.delete(entity_id)

    def new_draft(self) -> ManagerDraft:
        return ManagerDraft()

    def draft_for(self, item: ManagerRead) -> ManagerDraft:
        return ManagerDraft(
            name=item.name,
            email=item.email,
            region_slugs=[region.slug for region in item.regions],
        )

    async def create_remote(self, payload: ManagerPayload) -> ManagerRead:
        return await self.api.managers.create(payload)

    async def update_remote(self, entity_id: str, payload: ManagerUpdate) -> ManagerRead:
        return await self.api.managers.update(entity_id, payload)

    def toggle_new_region(self, slug: str) -> None:
        self.create_draft.toggle_region(slug)

    async def toggle_region(self, manager_id: str, region_id: str) -> bool:
        """Assign or unassign through the region edge, then re-fetch."""
        manager = self.items.get(manager_id)
        if manager is None:
            return False
        assigned = manager.has_region(region_id)
        try:
            if assigned:
                region = await self.api.regions.unassign_manager(region_id, manager_id)
            else:
                region = await self.api.regions.assign_manager(region_id, manager_id)
        except PortalError as exc:
            self.alert(exc.message or "Failed to update region assignment")
            return False

        self.all_regions.upsert(region)
        await self.refresh()
        await self.publish(
            ManagerAssignmentChanged(
                region_id=region_id,
                manager_id=manager_id,
                assigned=not assigned,
                region=region,
                source=self.name,
            )
        )
        return True

    def region_badges(self, manager_id: str) -> List[RegionSummary]:
        manager = self.items.get(manager_id)
        if manager is None:
            return []
        badges = []
        for summary in manager.regions:
            current = find_region(self.all_regions, summary.id)
            if current is not None:
                summary = RegionSummary(
                    id=current.id, pk=current.pk, slug=current.slug, locations=current.locations
                )
            badges.append(summary)
        return badges

    def assignable_regions(self, manager_id: str) -> List[Tuple[RegionRead, bool]]:
        manager = self.items.get(manager_id)
        return [
            (region, bool(manager and manager.has_region(region.id)))
            for region in self.all_regions
        ]

    def selectable_regions(self) -> List[Tuple[RegionRead, bool]]:
        """Regions offered by the create form with their selection state."""
        selected = set(self.create_draft.region_slugs)
        return [(region, region.slug in selected) for region in self.all_regions]
