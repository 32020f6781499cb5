"""Region list state: CRUD, the locations editors and manager assignment."""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Tuple

from ..client import PortalError
from ..events import (
    ManagerAssignmentChanged,
    ManagerChanged,
    PortalEvent,
    RegionChanged,
)
from ..forms import (
    LocationsParseError,
    RegionDraft,
    RegionJsonDraft,
    entries_from_locations,
    format_locations_json,
    parse_locations_json,
)
from ..schemas import (
    ManagerRead,
    ManagerSummary,
    RegionLocationUpdate,
    RegionPayload,
    RegionRead,
    RegionUpdate,
)
from .base import EditableStore, EntityCollection, gather_all

logger = logging.getLogger(__name__)


class RegionStore(EditableStore[RegionRead, RegionDraft]):
    name = "regions"
    label = "region"
    delete_prompt = "Delete this region? This will also delete all associated incident reports."

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.all_managers: EntityCollection[ManagerRead] = EntityCollection()
        self.json_draft = RegionJsonDraft()
        # "form" edits slug and locations together; "locations" is the raw JSON editor
        self.edit_mode: Optional[str] = None
        self.locations_text = ""

    def subscribe(self) -> None:
        self.listen(ManagerChanged, self._on_related_change)
        self.listen(ManagerAssignmentChanged, self._on_assignment_changed)

    async def _on_assignment_changed(self, event: ManagerAssignmentChanged) -> None:
        self.items.upsert(event.region)

    def changed_event(self, action: str, entity_id: str) -> PortalEvent:
        return RegionChanged(action=action, region_id=entity_id, source=self.name)

    # ---- fetching ----

    async def fetch(self) -> Tuple[Any, ...]:
        return await gather_all(self.api.regions.list(), self.api.managers.list())

    def apply_fetch(self, result: Tuple[Any, ...]) -> None:
        regions, managers = result
        self.items.replace(regions)
        self.all_managers.replace(managers)

    async def fetch_one(self, entity_id: str) -> RegionRead:
        return await self.api.regions.get(entity_id)

    async def delete_remote(self, entity_id: str) -> None:
        await self.api.regions.delete(entity_id)

    # ---- create ----

    def new_draft(self) -> RegionDraft:
        return RegionDraft()

    async def create_remote(self, payload: RegionPayload) -> RegionRead:
        return await self.api.regions.create(payload)

    async def create_from_json(self) -> Optional[RegionRead]:
        created = await self.submit_create(self.json_draft)
        if created is not None:
            self.json_draft = RegionJsonDraft()
        return created

    # ---- edit ----

    def draft_for(self, item: RegionRead) -> RegionDraft:
        return RegionDraft(slug=item.slug, entries=entries_from_locations(item.locations))

    async def update_remote(self, entity_id: str, payload: RegionUpdate) -> RegionRead:
        return await self.api.regions.update(entity_id, payload)

    def start_edit(self, entity_id: str) -> bool:
        started = super().start_edit(entity_id)
        if started:
            self.edit_mode = "form"
        return started

    def start_locations_edit(self, entity_id: str) -> bool:
        item = self.items.get(entity_id)
        if item is None:
            return False
        self.row_error = None
        self.editing_id = entity_id
        self.edit_draft = None
        self.edit_mode = "locations"
        self.locations_text = format_locations_json(item.locations)
        self.assigning_id = None
        return True

    def cancel_edit(self) -> None:
        super().cancel_edit()
        self.edit_mode = None
        self.locations_text = ""

    async def save_edit(self) -> bool:
        if self.edit_mode == "locations":
            return await self.save_locations()
        return await super().save_edit()

    async def save_locations(self) -> bool:
        """Save the raw JSON locations editor through the partial update."""
        if self.editing_id is None:
            return False
        self.row_error = None
        parsed = parse_locations_json(self.locations_text)
        if isinstance(parsed, LocationsParseError):
            self.row_error = parsed.message
            return False
        region_id = self.editing_id
        return await self.apply_update(
            region_id,
            self.api.regions.update_locations(
                region_id, RegionLocationUpdate(locations=parsed.locations)
            ),
        )

    # ---- manager assignment ----

    async def toggle_manager(self, region_id: str, manager_id: str) -> Optional[RegionRead]:
        """Assign or unassign depending on current membership.

        Only this region's row is replaced from the response; the manager
        list learns about the change through the published event.
        """
        region = self.items.get(region_id)
        if region is None:
            return None
        assigned = region.has_manager(manager_id)
        try:
            if assigned:
                updated = await self.api.regions.unassign_manager(region_id, manager_id)
            else:
                updated = await self.api.regions.assign_manager(region_id, manager_id)
        except PortalError as exc:
            self.alert(exc.message or "Failed to update manager assignment")
            return None

        self.items.upsert(updated)
        logger.info(
            "manager_assignment_changed region=%s manager=%s assigned=%s",
            region_id,
            manager_id,
            not assigned,
        )
        await self.publish(
            ManagerAssignmentChanged(
                region_id=region_id,
                manager_id=manager_id,
                assigned=not assigned,
                region=updated,
                source=self.name,
            )
        )
        return updated

    # ---- derived views ----

    def manager_badges(self, region_id: str) -> List[ManagerSummary]:
        region = self.items.get(region_id)
        if region is None:
            return []
        badges = []
        for summary in region.managers:
            current = self.all_managers.get(summary.id)
            if current is not None:
                summary = ManagerSummary(
                    id=current.id, pk=current.pk, name=current.name, email=current.email
                )
            badges.append(summary)
        return badges

    def assignable_managers(self, region_id: str) -> List[Tuple[ManagerRead, bool]]:
        region = self.items.get(region_id)
        return [
            (manager, bool(region and region.has_manager(manager.id)))
            for manager in self.all_managers
        ]
