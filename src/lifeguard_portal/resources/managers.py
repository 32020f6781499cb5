"""Manager endpoints."""

from __future__ import annotations

from ..schemas import ManagerPayload, ManagerRead, ManagerUpdate
from .base import Resource


class ManagersResource(Resource):
    async def list(self) -> list[ManagerRead]:
        return self.parse_list(ManagerRead, await self.client.get(self.path()))

    async def create(self, payload: ManagerPayload) -> ManagerRead:
        data = await self.client.post(self.path(), json=payload.to_json())
        return self.parse(ManagerRead, data)

    async def get(self, manager_id: str) -> ManagerRead:
        return self.parse(ManagerRead, await self.client.get(self.path(manager_id)))

    async def update(self, manager_id: str, payload: ManagerUpdate) -> ManagerRead:
        data = await self.client.put(self.path(manager_id), json=payload.to_json())
        return self.parse(ManagerRead, data)

    async def delete(self, manager_id: str) -> None:
        await self.client.delete(self.path(manager_id))
