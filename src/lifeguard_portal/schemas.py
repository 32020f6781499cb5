"""Pydantic schemas for the portal REST contract."""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

DONE_STATE = "done"


class PortalModel(BaseModel):
    """Base for response models; unknown server fields are ignored."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class PayloadModel(BaseModel):
    """Base for request bodies; unset optionals are left out of the JSON."""

    model_config = ConfigDict(extra="forbid")

    def to_json(self) -> dict:
        return self.model_dump(mode="json", exclude_none=True)


# ---------- Summaries embedded in other entities ----------


class RegionSummary(PortalModel):
    id: str
    pk: Optional[str] = None
    slug: str
    locations: Dict[str, str] = Field(default_factory=dict)


class ManagerSummary(PortalModel):
    id: str
    pk: Optional[str] = None
    name: str
    email: str


# ---------- Regions ----------


class RegionBase(PortalModel):
    slug: str
    locations: Dict[str, str] = Field(default_factory=dict)


class RegionRead(RegionBase):
    id: str
    pk: Optional[str] = None
    created: Optional[str] = None
    managers: List[ManagerSummary] = Field(default_factory=list)

    def has_manager(self, manager_id: str) -> bool:
        return any(manager.id == manager_id for manager in self.managers)

    def matches(self, region_id: str) -> bool:
        return region_id in (self.id, self.pk)


class RegionPayload(PayloadModel):
    slug: str
    locations: Dict[str, str]
    managers: Optional[List[str]] = Field(None, description="Manager names")


class RegionUpdate(PayloadModel):
    slug: Optional[str] = None
    locations: Optional[Dict[str, str]] = None


class RegionLocationUpdate(PayloadModel):
    locations: Dict[str, str]


# ---------- Managers ----------


class ManagerRead(PortalModel):
    id: str
    pk: Optional[str] = None
    name: str
    email: str
    regions: List[RegionSummary] = Field(default_factory=list)
    created: Optional[str] = None

    def has_region(self, region_id: str) -> bool:
        return any(region_id in (region.id, region.pk) for region in self.regions)


class ManagerPayload(PayloadModel):
    name: str
    email: str
    region_slugs: List[str] = Field(..., min_length=1)


class ManagerUpdate(PayloadModel):
    name: Optional[str] = None
    email: Optional[str] = None


# ---------- Lifeguards ----------


class LifeguardRead(PortalModel):
    id: str
    pk: Optional[str] = None
    name: str
    phone: str
    region_id: str
    created: Optional[str] = None


class LifeguardPayload(PayloadModel):
    name: str
    phone: str = Field(..., description='"+1-555-000-1111" etc.')
    region_id: str


class LifeguardUpdate(PayloadModel):
    name: Optional[str] = None
    phone: Optional[str] = None
    region_id: Optional[str] = None


# ---------- Incidents ----------


class IncidentSummary(PortalModel):
    id: str
    group_id: str
    person_involved_name: str = ""
    date_of_incident: str
    region_id: str
    employee_completing_report: str = ""
    incident_summary: str = ""
    state: str = ""
    created: Optional[str] = None

    @property
    def is_done(self) -> bool:
        return self.state == DONE_STATE
