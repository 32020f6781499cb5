"""JSON payloads shaped like the backend responses."""

from __future__ import annotations

from typing import Any, Dict, List, Optional


def manager_json(
    manager_id: str = "m1",
    *,
    name: str = "Ana Lopez",
    email: Optional[str] = None,
    regions: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return {
        "pk": manager_id,
        "id": manager_id,
        "name": name,
        "email": email or f"{manager_id}@example.com",
        "regions": regions or [],
        "created": "2025-05-01T09:00:00Z",
    }


def manager_summary(manager_id: str = "m1", *, name: str = "Ana Lopez") -> Dict[str, Any]:
    return {"pk": manager_id, "id": manager_id, "name": name, "email": f"{manager_id}@example.com"}


def region_json(
    region_id: str = "r1",
    *,
    slug: Optional[str] = None,
    locations: Optional[Dict[str, str]] = None,
    managers: Optional[List[Dict[str, Any]]] = None,
) -> Dict[str, Any]:
    return {
        "pk": region_id,
        "id": region_id,
        "slug": slug or f"region-{region_id}",
        "locations": {"a": "Pool A"} if locations is None else locations,
        "managers": managers or [],
        "created": "2025-05-01T09:00:00Z",
    }


def region_summary(region_id: str = "r1", *, slug: Optional[str] = None) -> Dict[str, Any]:
    return {
        "pk": region_id,
        "id": region_id,
        "slug": slug or f"region-{region_id}",
        "locations": {"a": "Pool A"},
    }


def lifeguard_json(
    lifeguard_id: str = "l1",
    *,
    name: str = "Sam Reed",
    phone: str = "+1-555-000-1111",
    region_id: str = "r1",
) -> Dict[str, Any]:
    return {
        "pk": lifeguard_id,
        "id": lifeguard_id,
        "name": name,
        "phone": phone,
        "region_id": region_id,
        "created": "2025-05-01T09:00:00Z",
    }


def incident_json(
    incident_id: str,
    *,
    group_id: str = "g1",
    name: str = "Jane Doe",
    date: str = "2025-06-01",
    region_id: str = "r1",
    state: str = "done",
) -> Dict[str, Any]:
    return {
        "id": incident_id,
        "group_id": group_id,
        "person_involved_name": name,
        "date_of_incident": date,
        "region_id": region_id,
        "employee_completing_report": "Sam Reed",
        "incident_summary": f"Report {incident_id}",
        "state": state,
        "created": f"{date}T12:00:00Z",
    }
