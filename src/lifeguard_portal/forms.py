"""Form drafts and the client-side validation run before any network call."""

from __future__ import annotations

from dataclasses import dataclass, field
import json
from typing import Dict, List, Mapping, Optional, Union

from .schemas import (
    LifeguardPayload,
    LifeguardUpdate,
    ManagerPayload,
    ManagerUpdate,
    RegionPayload,
    RegionUpdate,
)


class FormError(Exception):
    """Raised when a draft fails client-side validation."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


def _require(value: Optional[str], message: str) -> str:
    value = (value or "").strip()
    if not value:
        raise FormError(message)
    return value


# ---------- Locations ----------


@dataclass
class LocationEntry:
    name: str = ""
    address: str = ""


def entries_from_locations(locations: Mapping[str, str]) -> List[LocationEntry]:
    entries = [LocationEntry(name=name, address=address) for name, address in locations.items()]
    return entries or [LocationEntry()]


def locations_from_entries(entries: List[LocationEntry]) -> Dict[str, str]:
    locations: Dict[str, str] = {}
    for entry in entries:
        name = entry.name.strip()
        if name:
            locations[name] = entry.address.strip()
    return locations


@dataclass
class LocationsParsed:
    locations: Dict[str, str]
    ok: bool = field(default=True, init=False)


@dataclass
class LocationsParseError:
    message: str
    ok: bool = field(default=False, init=False)


LocationsParseResult = Union[LocationsParsed, LocationsParseError]


def parse_locations_json(text: str) -> LocationsParseResult:
    """Parse the free-text locations editor without raising."""
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        return LocationsParseError(f"Invalid JSON: {exc.msg} (line {exc.lineno}, column {exc.colno})")

    if not isinstance(data, dict):
        return LocationsParseError("Invalid JSON: Locations must be a JSON object")

    locations: Dict[str, str] = {}
    for key, value in data.items():
        name = key.strip()
        if not name:
            return LocationsParseError("Invalid JSON: Location keys must not be blank")
        if not isinstance(value, str):
            return LocationsParseError(f"Invalid JSON: Location {name!r} must map to a string")
        locations[name] = value
    return LocationsParsed(locations)


def format_locations_json(locations: Mapping[str, str]) -> str:
    return json.dumps(dict(locations), indent=2)


# ---------- Regions ----------


@dataclass
class RegionDraft:
    slug: str = ""
    entries: List[LocationEntry] = field(default_factory=lambda: [LocationEntry()])

    def add_entry(self) -> None:
        self.entries.append(LocationEntry())

    def update_entry(self, index: int, *, name: Optional[str] = None, address: Optional[str] = None) -> None:
        entry = self.entries[index]
        if name is not None:
            entry.name = name
        if address is not None:
            entry.address = address

    def remove_entry(self, index: int) -> bool:
        # the form always keeps one row to type into
        if len(self.entries) <= 1:
            return False
        del self.entries[index]
        return True

    def _validated_parts(self) -> tuple[str, Dict[str, str]]:
        slug = _require(self.slug, "Slug is required")
        locations = locations_from_entries(self.entries)
        if not locations:
            raise FormError("At least one location with a name is required")
        return slug, locations

    def validate(self) -> RegionPayload:
        slug, locations = self._validated_parts()
        return RegionPayload(slug=slug, locations=locations)

    def validate_update(self) -> RegionUpdate:
        slug, locations = self._validated_parts()
        return RegionUpdate(slug=slug, locations=locations)


SAMPLE_LOCATIONS_JSON = format_locations_json({"loc1": "Main Pool", "loc2": "West Pool"})


@dataclass
class RegionJsonDraft:
    """Raw JSON variant of the region create form."""

    slug: str = ""
    locations_text: str = SAMPLE_LOCATIONS_JSON
    managers_text: str = ""

    def manager_names(self) -> List[str]:
        return [name.strip() for name in self.managers_text.split(",") if name.strip()]

    def validate(self) -> RegionPayload:
        parsed = parse_locations_json(self.locations_text)
        if isinstance(parsed, LocationsParseError):
            raise FormError(parsed.message)
        slug = _require(self.slug, "Slug is required")
        if not parsed.locations:
            raise FormError("At least one location is required")
        return RegionPayload(slug=slug, locations=parsed.locations, managers=self.manager_names())


# ---------- Managers ----------


@dataclass
class ManagerDraft:
    name: str = ""
    email: str = ""
    region_slugs: List[str] = field(default_factory=list)

    def toggle_region(self, slug: str) -> None:
        if slug in self.region_slugs:
            self.region_slugs = [existing for existing in self.region_slugs if existing != slug]
        else:
            self.region_slugs = [*self.region_slugs, slug]

    def validate(self) -> ManagerPayload:
        name = _require(self.name, "Name is required")
        email = _require(self.email, "Email is required")
        if not self.region_slugs:
            raise FormError("At least one region must be selected")
        if len(set(self.region_slugs)) != len(self.region_slugs):
            raise FormError("Duplicate region selection")
        return ManagerPayload(name=name, email=email, region_slugs=list(self.region_slugs))

    def validate_update(self) -> ManagerUpdate:
        name = _require(self.name, "Name is required")
        email = _require(self.email, "Email is required")
        return ManagerUpdate(name=name, email=email)


# ---------- Lifeguards ----------


@dataclass
class LifeguardDraft:
    name: str = ""
    phone: str = ""
    region_id: str = ""

    def _validated_parts(self) -> tuple[str, str, str]:
        name = _require(self.name, "Name is required")
        phone = _require(self.phone, "Phone is required")
        if not self.region_id:
            raise FormError("Please select a region")
        return name, phone, self.region_id

    def validate(self) -> LifeguardPayload:
        name, phone, region_id = self._validated_parts()
        return LifeguardPayload(name=name, phone=phone, region_id=region_id)

    def validate_update(self) -> LifeguardUpdate:
        name, phone, region_id = self._validated_parts()
        return LifeguardUpdate(name=name, phone=phone, region_id=region_id)
