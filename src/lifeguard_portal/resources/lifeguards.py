"""Lifeguard endpoints."""

from __future__ import annotations

from ..schemas import LifeguardPayload, LifeguardRead, LifeguardUpdate
from .base import Resource


class LifeguardsResource(Resource):
    async def list(self) -> list[LifeguardRead]:
        return self.parse_list(LifeguardRead, await self.client.get(self.path()))

    async def create(self, payload: LifeguardPayload) -> LifeguardRead:
        data = await self.client.post(self.path(), json=payload.to_json())
        return self.parse(LifeguardRead, data)

    async def get(self, lifeguard_id: str) -> LifeguardRead:
        return self.parse(LifeguardRead, await self.client.get(self.path(lifeguard_id)))

    async def get_by_phone(self, phone: str) -> LifeguardRead:
        return self.parse(LifeguardRead, await self.client.get(self.path("phone", phone)))

    async def update(self, lifeguard_id: str, payload: LifeguardUpdate) -> LifeguardRead:
        data = await self.client.put(self.path(lifeguard_id), json=payload.to_json())
        return self.parse(LifeguardRead, data)

    async def delete(self, lifeguard_id: str) -> None:
        await self.client.delete(self.path(lifeguard_id))
