"""Region endpoints, including the region/manager assignment edge."""

from __future__ import annotations

from ..schemas import RegionLocationUpdate, RegionPayload, RegionRead, RegionUpdate
from .base import Resource


class RegionsResource(Resource):
    # GET /regions/
    async def list(self) -> list[RegionRead]:
        return self.parse_list(RegionRead, await self.client.get(self.path()))

    # POST /regions/
    async def create(self, payload: RegionPayload) -> RegionRead:
        data = await self.client.post(self.path(), json=payload.to_json())
        return self.parse(RegionRead, data)

    # GET /regions/{id}
    async def get(self, region_id: str) -> RegionRead:
        return self.parse(RegionRead, await self.client.get(self.path(region_id)))

    # PUT /regions/{id}
    async def update(self, region_id: str, payload: RegionUpdate) -> RegionRead:
        data = await self.client.put(self.path(region_id), json=payload.to_json())
        return self.parse(RegionRead, data)

    # PATCH /regions/{id}/update-locations
    async def update_locations(
        self, region_id: str, payload: RegionLocationUpdate
    ) -> RegionRead:
        data = await self.client.patch(
            self.path(region_id, "update-locations"), json=payload.to_json()
        )
        return self.parse(RegionRead, data)

    # DELETE /regions/{id}; the server also deletes the region's incidents
    async def delete(self, region_id: str) -> None:
        await self.client.delete(self.path(region_id))

    # POST /regions/{region_id}/managers/{manager_id}
    async def assign_manager(self, region_id: str, manager_id: str) -> RegionRead:
        data = await self.client.post(self.path(region_id, "managers", manager_id))
        return self.parse(RegionRead, data)

    # DELETE /regions/{region_id}/managers/{manager_id}
    async def unassign_manager(self, region_id: str, manager_id: str) -> RegionRead:
        data = await self.client.delete(self.path(region_id, "managers", manager_id))
        return self.parse(RegionRead, data)
