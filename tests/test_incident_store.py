import httpx
import pytest
import respx
from factories import incident_json, region_json
from lifeguard_portal.events import RegionChanged
from lifeguard_portal.incident_view import StatusFilter
from lifeguard_portal.stores import IncidentStore

BASE_URL = "https://portal.test"


@pytest.fixture
def store(api, bus, confirm_yes, alerts):
    return IncidentStore(api, bus, confirm=confirm_yes, alert=alerts.append)


def _mock_lists(incidents, regions=None):
    respx.get(f"{BASE_URL}/incident/").respond(200, json=incidents)
    respx.get(f"{BASE_URL}/regions/").respond(200, json=regions or [region_json("r1", slug="north")])


@pytest.mark.asyncio
@respx.mock
async def test_groups_and_region_labels(store):
    _mock_lists(
        [
            incident_json("i1", group_id="A", date="2025-06-01"),
            incident_json("i2", group_id="A", date="2025-06-03"),
            incident_json("i3", group_id="B", date="2025-06-02", region_id="r9"),
        ]
    )

    await store.refresh()

    groups = store.groups
    assert [group.group_id for group in groups] == ["A", "B"]
    assert groups[0].primary.id == "i2"
    assert store.region_label("r1") == "north"
    assert store.region_label("r9") == "Unknown"


@pytest.mark.asyncio
@respx.mock
async def test_filters_narrow_groups_and_change_empty_message(store):
    _mock_lists(
        [
            incident_json("i1", name="Jane Doe", state="done"),
            incident_json("i2", group_id="g2", name="Jane Roe", state="in_progress"),
        ]
    )
    await store.refresh()

    store.set_filters(name="Jane", status="done")
    assert [group.primary.id for group in store.groups] == ["i1"]

    store.set_filters(name="nobody")
    assert store.groups == []
    assert store.filters.status == StatusFilter.DONE
    assert store.empty_message() == "No incidents match your filters."

    store.clear_filters()
    assert len(store.groups) == 2
    assert not store.has_active_filters


@pytest.mark.asyncio
async def test_empty_message_without_filters(store):
    assert store.empty_message() == "No incidents yet."


@pytest.mark.asyncio
@respx.mock
async def test_deleting_last_member_removes_expanded_group(store):
    _mock_lists(
        [
            incident_json("i1", group_id="A", date="2025-06-02"),
            incident_json("i2", group_id="B", date="2025-06-01"),
        ]
    )
    respx.delete(f"{BASE_URL}/incident/i1").respond(204)
    await store.refresh()
    assert store.toggle_group("A")

    assert await store.delete("i1")

    assert [group.group_id for group in store.groups] == ["B"]
    assert not store.is_expanded("A")


@pytest.mark.asyncio
@respx.mock
async def test_deleting_one_member_keeps_group(store):
    _mock_lists(
        [
            incident_json("i1", group_id="A", date="2025-06-02"),
            incident_json("i2", group_id="A", date="2025-06-01"),
        ]
    )
    respx.delete(f"{BASE_URL}/incident/i1").respond(204)
    await store.refresh()
    store.toggle_group("A")

    await store.delete("i1")

    assert store.is_expanded("A")
    assert store.groups[0].is_single


@pytest.mark.asyncio
async def test_toggle_group_flips(store):
    assert store.toggle_group("A")
    assert not store.toggle_group("A")
    assert not store.is_expanded("A")


@pytest.mark.asyncio
@respx.mock
async def test_region_deletion_refetches_incidents(store, bus):
    incidents = respx.get(f"{BASE_URL}/incident/")
    incidents.side_effect = [
        httpx.Response(200, json=[incident_json("i1")]),
        httpx.Response(200, json=[]),
    ]
    respx.get(f"{BASE_URL}/regions/").respond(200, json=[])
    await store.refresh()

    await bus.publish(RegionChanged(action="deleted", region_id="r1", source="regions"))

    assert len(store.items) == 0
