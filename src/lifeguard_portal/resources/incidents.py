"""Incident endpoints (the portal only lists and deletes reports)."""

from __future__ import annotations

from ..schemas import IncidentSummary
from .base import Resource


class IncidentsResource(Resource):
    async def list(self) -> list[IncidentSummary]:
        return self.parse_list(IncidentSummary, await self.client.get(self.path()))

    async def delete(self, incident_id: str) -> None:
        await self.client.delete(self.path(incident_id))
