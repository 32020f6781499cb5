"""Shared state handling for the entity stores.

A store owns one normalized collection fetched from the backend plus any
lookup collections it needs to label foreign keys. Mutations apply the
server response to local state and then publish a change event so the other
stores can invalidate what they derived from it.
"""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import (
    Any,
    Awaitable,
    Callable,
    ClassVar,
    Dict,
    Generic,
    Iterable,
    Iterator,
    List,
    Optional,
    Tuple,
    Type,
    TypeVar,
    Union,
)

from ..client import PortalError
from ..events import EventBus, EventListener, PortalEvent
from ..forms import FormError
from ..resources import PortalAPI
from ..schemas import PortalModel, RegionRead

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=PortalModel)
DraftT = TypeVar("DraftT")

ConfirmCallback = Callable[[str], Union[bool, Awaitable[bool]]]
AlertCallback = Callable[[str], None]

UNKNOWN_REGION = "Unknown"


def _decline(message: str) -> bool:
    logger.warning("confirmation_unavailable prompt=%r", message)
    return False


def _log_alert(message: str) -> None:
    logger.warning("portal_alert message=%s", message)


async def gather_all(*aws: Awaitable[Any]) -> Tuple[Any, ...]:
    """Run awaitables concurrently and re-raise the first failure."""
    results = await asyncio.gather(*aws, return_exceptions=True)
    for result in results:
        if isinstance(result, BaseException):
            raise result
    return tuple(results)


class EntityCollection(Generic[T]):
    """Entities keyed by id, kept in the order the server returned them."""

    def __init__(self, items: Iterable[T] = ()) -> None:
        self._items: Dict[str, T] = {}
        self.replace(items)

    def replace(self, items: Iterable[T]) -> None:
        self._items = {item.id: item for item in items}  # type: ignore[attr-defined]

    def upsert(self, item: T) -> bool:
        """Replace the entity with the same id in place, or append it.

        Returns True when an existing entity was replaced.
        """
        key = item.id  # type: ignore[attr-defined]
        existed = key in self._items
        self._items[key] = item
        return existed

    def remove(self, entity_id: str) -> bool:
        return self._items.pop(entity_id, None) is not None

    def get(self, entity_id: str) -> Optional[T]:
        return self._items.get(entity_id)

    def ids(self) -> List[str]:
        return list(self._items)

    def values(self) -> List[T]:
        return list(self._items.values())

    def __iter__(self) -> Iterator[T]:
        return iter(list(self._items.values()))

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, entity_id: object) -> bool:
        return entity_id in self._items


def find_region(regions: EntityCollection[RegionRead], region_id: str) -> Optional[RegionRead]:
    region = regions.get(region_id)
    if region is not None:
        return region
    return next((candidate for candidate in regions if candidate.matches(region_id)), None)


def region_slug(regions: EntityCollection[RegionRead], region_id: str) -> str:
    region = find_region(regions, region_id)
    return region.slug if region else UNKNOWN_REGION


class EntityStore(Generic[T]):
    """Fetch, delete and event wiring common to every list."""

    name: ClassVar[str]
    label: ClassVar[str]
    delete_prompt: ClassVar[str]

    def __init__(
        self,
        api: PortalAPI,
        bus: EventBus,
        *,
        confirm: Optional[ConfirmCallback] = None,
        alert: Optional[AlertCallback] = None,
    ) -> None:
        self.api = api
        self.bus = bus
        self.confirm = confirm or _decline
        self.alert = alert or _log_alert
        self.items: EntityCollection[T] = EntityCollection()
        self.loading = False
        self.error: Optional[str] = None
        self._load_seq = 0
        self._subscriptions: List[Tuple[Type[PortalEvent], EventListener]] = []
        self.subscribe()

    # ---- events ----

    def subscribe(self) -> None:
        """Register this store's reactions to other stores' events."""

    def listen(
        self, event_type: Type[PortalEvent], handler: Callable[[Any], Awaitable[None]]
    ) -> None:
        async def listener(event: PortalEvent) -> None:
            if event.source == self.name:
                return
            await handler(event)

        self.bus.subscribe(event_type, listener)
        self._subscriptions.append((event_type, listener))

    def detach(self) -> None:
        for event_type, listener in self._subscriptions:
            self.bus.unsubscribe(event_type, listener)
        self._subscriptions = []

    async def publish(self, event: PortalEvent) -> None:
        await self.bus.publish(event)

    def changed_event(self, action: str, entity_id: str) -> PortalEvent:
        raise NotImplementedError

    async def _on_related_change(self, event: PortalEvent) -> None:
        await self.refresh()

    # ---- fetching ----

    async def fetch(self) -> Tuple[Any, ...]:
        """Return the own collection first, followed by any lookups."""
        raise NotImplementedError

    def apply_fetch(self, result: Tuple[Any, ...]) -> None:
        raise NotImplementedError

    async def fetch_one(self, entity_id: str) -> T:
        raise NotImplementedError

    async def refresh(self) -> bool:
        """Re-fetch everything; the newest issued refresh wins.

        On failure the previous collections stay visible and ``error`` is set.
        """
        self._load_seq += 1
        seq = self._load_seq
        self.loading = True
        self.error = None
        try:
            result = await self.fetch()
        except PortalError as exc:
            if seq == self._load_seq:
                self.error = exc.message or "Failed to load data"
                self.loading = False
            logger.warning("%s_fetch_failed error=%s", self.name, exc.message)
            return False

        if seq != self._load_seq:
            logger.debug("%s_stale_fetch_discarded seq=%s latest=%s", self.name, seq, self._load_seq)
            return False

        self.apply_fetch(result)
        self.loading = False
        return True

    async def refresh_one(self, entity_id: str) -> Optional[T]:
        try:
            item = await self.fetch_one(entity_id)
        except PortalError as exc:
            self.error = exc.message
            return None
        self.items.upsert(item)
        return item

    # ---- deleting ----

    async def _confirm(self, message: str) -> bool:
        answer = self.confirm(message)
        if inspect.isawaitable(answer):
            answer = await answer
        return bool(answer)

    async def delete_remote(self, entity_id: str) -> None:
        raise NotImplementedError

    def forget(self, entity_id: str) -> None:
        self.items.remove(entity_id)

    async def delete(self, entity_id: str) -> bool:
        if not await self._confirm(self.delete_prompt):
            return False
        try:
            await self.delete_remote(entity_id)
        except PortalError as exc:
            self.alert(exc.message or f"Failed to delete {self.label}")
            return False
        self.forget(entity_id)
        logger.info("%s_deleted id=%s", self.label, entity_id)
        await self.publish(self.changed_event("deleted", entity_id))
        return True


class EditableStore(EntityStore[T], Generic[T, DraftT]):
    """Adds the create form, single-row inline editing and the assignment panel."""

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.create_draft: DraftT = self.new_draft()
        self.create_error: Optional[str] = None
        self.creating = False
        self.show_create_form = False
        self.edit_draft: Optional[DraftT] = None
        self.editing_id: Optional[str] = None
        self.saving = False
        self.row_error: Optional[str] = None
        self.assigning_id: Optional[str] = None

    def new_draft(self) -> DraftT:
        raise NotImplementedError

    def draft_for(self, item: T) -> DraftT:
        raise NotImplementedError

    async def create_remote(self, payload: Any) -> T:
        raise NotImplementedError

    async def update_remote(self, entity_id: str, payload: Any) -> T:
        raise NotImplementedError

    # ---- create ----

    def toggle_create_form(self) -> None:
        self.show_create_form = not self.show_create_form
        self.create_error = None

    async def submit_create(self, draft: Any) -> Optional[T]:
        """Validate a draft locally, create it, and append the result."""
        self.create_error = None
        try:
            payload = draft.validate()
        except FormError as exc:
            self.create_error = exc.message
            return None

        self.creating = True
        try:
            created = await self.create_remote(payload)
        except PortalError as exc:
            self.create_error = exc.message or f"Failed to create {self.label}"
            return None
        finally:
            self.creating = False

        self.items.upsert(created)
        self.show_create_form = False
        logger.info("%s_created id=%s", self.label, created.id)  # type: ignore[attr-defined]
        await self.publish(self.changed_event("created", created.id))  # type: ignore[attr-defined]
        return created

    async def create(self) -> Optional[T]:
        created = await self.submit_create(self.create_draft)
        if created is not None:
            self.create_draft = self.new_draft()
        return created

    # ---- inline edit ----

    def start_edit(self, entity_id: str) -> bool:
        item = self.items.get(entity_id)
        if item is None:
            return False
        self.row_error = None
        self.editing_id = entity_id
        self.edit_draft = self.draft_for(item)
        self.assigning_id = None
        return True

    def cancel_edit(self) -> None:
        self.editing_id = None
        self.edit_draft = None
        self.row_error = None

    def forget(self, entity_id: str) -> None:
        super().forget(entity_id)
        if self.editing_id == entity_id:
            self.cancel_edit()
        if self.assigning_id == entity_id:
            self.assigning_id = None

    async def apply_update(self, entity_id: str, call: Awaitable[T]) -> bool:
        """Await an update call and swap the single matching row in place."""
        self.saving = True
        try:
            updated = await call
        except PortalError as exc:
            self.row_error = exc.message or f"Failed to update {self.label}"
            return False
        finally:
            self.saving = False

        self.items.upsert(updated)
        self.cancel_edit()
        logger.info("%s_updated id=%s", self.label, entity_id)
        await self.publish(self.changed_event("updated", entity_id))
        return True

    async def save_edit(self) -> bool:
        if self.editing_id is None or self.edit_draft is None:
            return False
        self.row_error = None
        try:
            payload = self.edit_draft.validate_update()  # type: ignore[attr-defined]
        except FormError as exc:
            self.row_error = exc.message
            return False
        return await self.apply_update(self.editing_id, self.update_remote(self.editing_id, payload))

    # ---- assignment panel ----

    def toggle_assigning(self, entity_id: str) -> None:
        self.assigning_id = None if self.assigning_id == entity_id else entity_id
        self.cancel_edit()
