"""Typed change events and the in-process bus the stores talk through."""

from __future__ import annotations

import inspect
import logging
from collections import defaultdict
from typing import Awaitable, Callable, DefaultDict, List, Literal, Optional, Sequence, Type, Union

from pydantic import BaseModel, ConfigDict

from .schemas import RegionRead

logger = logging.getLogger(__name__)

ChangeAction = Literal["created", "updated", "deleted"]


class PortalEvent(BaseModel):
    """Base class for data-changed events."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    # name of the store that published the event
    source: Optional[str] = None


class RegionChanged(PortalEvent):
    action: ChangeAction
    region_id: str


class ManagerChanged(PortalEvent):
    action: ChangeAction
    manager_id: str


class LifeguardChanged(PortalEvent):
    action: ChangeAction
    lifeguard_id: str


class IncidentChanged(PortalEvent):
    action: ChangeAction
    incident_id: str


class ManagerAssignmentChanged(PortalEvent):
    region_id: str
    manager_id: str
    assigned: bool
    region: RegionRead


EventListener = Callable[[PortalEvent], Union[None, Awaitable[None]]]


class EventBus:
    """Registry of listeners keyed by event type.

    Listeners registered for a base class also receive its subclasses, so
    subscribing to ``PortalEvent`` sees everything.
    """

    def __init__(self) -> None:
        self._listeners: DefaultDict[Type[PortalEvent], List[EventListener]] = defaultdict(list)
        self.revision = 0

    def subscribe(self, event_type: Type[PortalEvent], listener: EventListener) -> None:
        self._listeners[event_type].append(listener)

    def unsubscribe(self, event_type: Type[PortalEvent], listener: EventListener) -> None:
        self._listeners[event_type] = [
            existing for existing in self._listeners[event_type] if existing is not listener
        ]

    def listeners(self, event_type: Type[PortalEvent]) -> Sequence[EventListener]:
        matched: List[EventListener] = []
        for registered_type, listeners in self._listeners.items():
            if issubclass(event_type, registered_type):
                matched.extend(listeners)
        return tuple(matched)

    async def publish(self, event: PortalEvent) -> None:
        self.revision += 1
        logger.info(
            "portal_event=%s revision=%s payload=%s",
            event.__class__.__name__,
            self.revision,
            event.model_dump(exclude={"region"}),
        )
        for listener in self.listeners(type(event)):
            try:
                result = listener(event)
                if inspect.isawaitable(result):
                    await result
            except Exception:
                logger.exception("Portal event listener error: %s", listener)
