"""Incident list state: read, filter, group and delete reports."""

from __future__ import annotations

from dataclasses import replace
import logging
from typing import Any, List, Optional, Set, Tuple, Union

from ..events import IncidentChanged, PortalEvent, RegionChanged
from ..incident_view import IncidentFilters, IncidentGroup, StatusFilter, build_groups
from ..schemas import IncidentSummary, RegionRead
from .base import EntityCollection, EntityStore, gather_all, region_slug

logger = logging.getLogger(__name__)


class IncidentStore(EntityStore[IncidentSummary]):
    name = "incidents"
    label = "incident"
    delete_prompt = "Delete this incident?"

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.all_regions: EntityCollection[RegionRead] = EntityCollection()
        self.filters = IncidentFilters()
        self.expanded: Set[str] = set()

    def subscribe(self) -> None:
        # deleting a region cascades to its incidents server-side
        self.listen(RegionChanged, self._on_related_change)

    def changed_event(self, action: str, entity_id: str) -> PortalEvent:
        return IncidentChanged(action=action, incident_id=entity_id, source=self.name)

    async def fetch(self) -> Tuple[Any, ...]:
        return await gather_all(self.api.incidents.list(), self.api.regions.list())

    def apply_fetch(self, result: Tuple[Any, ...]) -> None:
        incidents, regions = result
        self.items.replace(incidents)
        self.all_regions.replace(regions)
        self._prune_expanded()

    async def delete_remote(self, entity_id: str) -> None:
        await self.api.incidents.delete(entity_id)

    def forget(self, entity_id: str) -> None:
        super().forget(entity_id)
        self._prune_expanded()

    def _prune_expanded(self) -> None:
        live = {incident.group_id for incident in self.items}
        self.expanded &= live

    # ---- filters ----

    def set_filters(
        self,
        *,
        name: Optional[str] = None,
        date: Optional[str] = None,
        region_id: Optional[str] = None,
        status: Union[StatusFilter, str, None] = None,
    ) -> IncidentFilters:
        changes: dict[str, Any] = {}
        if name is not None:
            changes["name"] = name
        if date is not None:
            changes["date"] = date
        if region_id is not None:
            changes["region_id"] = region_id
        if status is not None:
            changes["status"] = StatusFilter(status)
        self.filters = replace(self.filters, **changes)
        return self.filters

    def clear_filters(self) -> None:
        self.filters = IncidentFilters()

    @property
    def has_active_filters(self) -> bool:
        return self.filters.active

    # ---- derived view ----

    @property
    def groups(self) -> List[IncidentGroup]:
        return build_groups(self.items, self.filters)

    def toggle_group(self, group_id: str) -> bool:
        if group_id in self.expanded:
            self.expanded.discard(group_id)
            return False
        self.expanded.add(group_id)
        return True

    def is_expanded(self, group_id: str) -> bool:
        return group_id in self.expanded

    def region_label(self, region_id: str) -> str:
        return region_slug(self.all_regions, region_id)

    def empty_message(self) -> str:
        return "No incidents match your filters." if self.has_active_filters else "No incidents yet."
