"""Entity stores backing the admin portal lists."""

from .base import EditableStore, EntityCollection, EntityStore
from .incidents import IncidentStore
from .lifeguards import LifeguardStore
from .managers import ManagerStore
from .regions import RegionStore

__all__ = [
    "EditableStore",
    "EntityCollection",
    "EntityStore",
    "IncidentStore",
    "LifeguardStore",
    "ManagerStore",
    "RegionStore",
]
