"""Filtering and grouping of incident reports.

Reports that share a ``group_id`` describe the same real-world event. The
view filters the flat collection, groups what is left, orders each group
newest first and then orders the groups by their newest member.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Dict, Iterable, List, Optional

from .schemas import IncidentSummary


class StatusFilter(str, Enum):
    ALL = "all"
    DONE = "done"
    UNFINISHED = "unfinished"


@dataclass(frozen=True)
class IncidentFilters:
    name: str = ""
    date: str = ""
    region_id: str = ""
    status: StatusFilter = StatusFilter.ALL

    @property
    def active(self) -> bool:
        return bool(self.name or self.date or self.region_id or self.status != StatusFilter.ALL)


@dataclass(frozen=True)
class IncidentGroup:
    group_id: str
    incidents: List[IncidentSummary]

    @property
    def primary(self) -> IncidentSummary:
        return self.incidents[0]

    @property
    def is_single(self) -> bool:
        return len(self.incidents) == 1


def status_label(state: str) -> str:
    return "Done" if state == "done" else "Unfinished"


def parse_incident_date(value: str) -> Optional[datetime]:
    """Parse a report date; bare dates are taken as midnight UTC."""
    if not value:
        return None
    try:
        parsed = datetime.fromisoformat(value.strip())
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _sort_key(incident: IncidentSummary) -> tuple[int, float]:
    # unparseable dates go after every dated report
    parsed = parse_incident_date(incident.date_of_incident)
    if parsed is None:
        return (1, 0.0)
    return (0, -parsed.timestamp())


def matches(incident: IncidentSummary, filters: IncidentFilters) -> bool:
    if filters.name and filters.name.lower() not in incident.person_involved_name.lower():
        return False
    if filters.date and incident.date_of_incident != filters.date:
        return False
    if filters.region_id and incident.region_id != filters.region_id:
        return False
    if filters.status == StatusFilter.DONE and not incident.is_done:
        return False
    if filters.status == StatusFilter.UNFINISHED and incident.is_done:
        return False
    return True


def filter_incidents(
    incidents: Iterable[IncidentSummary], filters: IncidentFilters
) -> List[IncidentSummary]:
    return [incident for incident in incidents if matches(incident, filters)]


def group_incidents(incidents: Iterable[IncidentSummary]) -> List[IncidentGroup]:
    grouped: Dict[str, List[IncidentSummary]] = {}
    for incident in incidents:
        grouped.setdefault(incident.group_id, []).append(incident)

    groups = [
        IncidentGroup(group_id=group_id, incidents=sorted(members, key=_sort_key))
        for group_id, members in grouped.items()
    ]
    groups.sort(key=lambda group: _sort_key(group.primary))
    return groups


def build_groups(
    incidents: Iterable[IncidentSummary], filters: Optional[IncidentFilters] = None
) -> List[IncidentGroup]:
    return group_incidents(filter_incidents(incidents, filters or IncidentFilters()))


def flatten_groups(groups: Iterable[IncidentGroup]) -> List[IncidentSummary]:
    return [incident for group in groups for incident in group.incidents]
