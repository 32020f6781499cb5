import pytest
from lifeguard_portal.forms import (
    SAMPLE_LOCATIONS_JSON,
    FormError,
    LifeguardDraft,
    LocationEntry,
    LocationsParsed,
    LocationsParseError,
    ManagerDraft,
    RegionDraft,
    RegionJsonDraft,
    entries_from_locations,
    format_locations_json,
    locations_from_entries,
    parse_locations_json,
)


class TestLocationEntries:
    def test_empty_mapping_still_gives_one_row(self):
        assert entries_from_locations({}) == [LocationEntry()]

    def test_blank_names_are_dropped_and_values_trimmed(self):
        entries = [
            LocationEntry(name=" Main Pool ", address=" 1 Beach Rd "),
            LocationEntry(name="   ", address="ignored"),
        ]

        assert locations_from_entries(entries) == {"Main Pool": "1 Beach Rd"}

    def test_entries_keep_mapping_order(self):
        entries = entries_from_locations({"b": "B", "a": "A"})

        assert [entry.name for entry in entries] == ["b", "a"]


class TestParseLocationsJson:
    def test_object_of_strings_parses(self):
        result = parse_locations_json('{"a": "Pool A"}')

        assert isinstance(result, LocationsParsed)
        assert result.ok
        assert result.locations == {"a": "Pool A"}

    def test_syntax_error_reports_position(self):
        result = parse_locations_json('{"a": ')

        assert isinstance(result, LocationsParseError)
        assert not result.ok
        assert result.message.startswith("Invalid JSON: ")
        assert "line 1" in result.message

    @pytest.mark.parametrize(
        "text, message",
        [
            ('["a"]', "Invalid JSON: Locations must be a JSON object"),
            ('{" ": "x"}', "Invalid JSON: Location keys must not be blank"),
            ('{"a": 1}', "Invalid JSON: Location 'a' must map to a string"),
        ],
    )
    def test_wrong_shapes_are_rejected(self, text, message):
        result = parse_locations_json(text)

        assert isinstance(result, LocationsParseError)
        assert result.message == message

    def test_sample_parses(self):
        result = parse_locations_json(SAMPLE_LOCATIONS_JSON)

        assert result.ok
        assert result.locations == {"loc1": "Main Pool", "loc2": "West Pool"}

    def test_format_is_indented(self):
        assert format_locations_json({"a": "A"}) == '{\n  "a": "A"\n}'


class TestRegionDraft:
    def test_valid_draft_builds_payload(self):
        draft = RegionDraft(slug=" north ")
        draft.update_entry(0, name="Main Pool", address="1 Beach Rd")

        payload = draft.validate()

        assert payload.to_json() == {"slug": "north", "locations": {"Main Pool": "1 Beach Rd"}}

    def test_slug_is_required(self):
        with pytest.raises(FormError, match="Slug is required"):
            RegionDraft(slug="  ").validate()

    def test_location_with_name_is_required(self):
        draft = RegionDraft(slug="north", entries=[LocationEntry(address="1 Beach Rd")])

        with pytest.raises(FormError, match="At least one location with a name is required"):
            draft.validate()

    def test_last_row_cannot_be_removed(self):
        draft = RegionDraft()
        draft.add_entry()

        assert draft.remove_entry(1)
        assert not draft.remove_entry(0)
        assert len(draft.entries) == 1

    def test_update_payload_carries_both_fields(self):
        draft = RegionDraft(slug="north", entries=[LocationEntry("a", "A")])

        assert draft.validate_update().to_json() == {"slug": "north", "locations": {"a": "A"}}


class TestRegionJsonDraft:
    def test_manager_names_are_split_and_trimmed(self):
        draft = RegionJsonDraft(slug="north", locations_text='{"a": "A"}', managers_text="Ana, , Bo ")

        assert draft.validate().managers == ["Ana", "Bo"]

    def test_empty_object_is_rejected(self):
        with pytest.raises(FormError, match="At least one location is required"):
            RegionJsonDraft(slug="north", locations_text="{}").validate()

    def test_parse_error_is_reported_before_slug(self):
        with pytest.raises(FormError, match="Invalid JSON"):
            RegionJsonDraft(slug="", locations_text="nope").validate()


class TestManagerDraft:
    def test_toggle_region_adds_and_removes(self):
        draft = ManagerDraft()
        draft.toggle_region("north")
        draft.toggle_region("south")
        draft.toggle_region("north")

        assert draft.region_slugs == ["south"]

    def test_region_selection_is_required(self):
        draft = ManagerDraft(name="Ana", email="ana@example.com")

        with pytest.raises(FormError, match="At least one region must be selected"):
            draft.validate()

    def test_duplicate_regions_rejected(self):
        draft = ManagerDraft(name="Ana", email="ana@example.com", region_slugs=["n", "n"])

        with pytest.raises(FormError, match="Duplicate region selection"):
            draft.validate()

    def test_update_skips_region_check(self):
        draft = ManagerDraft(name="Ana", email="ana@example.com")

        assert draft.validate_update().to_json() == {"name": "Ana", "email": "ana@example.com"}

    def test_email_is_required(self):
        with pytest.raises(FormError, match="Email is required"):
            ManagerDraft(name="Ana", region_slugs=["n"]).validate()


class TestLifeguardDraft:
    def test_region_is_required(self):
        with pytest.raises(FormError, match="Please select a region"):
            LifeguardDraft(name="Sam", phone="555").validate()

    def test_phone_is_required(self):
        with pytest.raises(FormError, match="Phone is required"):
            LifeguardDraft(name="Sam", region_id="r1").validate()

    def test_valid_draft(self):
        payload = LifeguardDraft(name=" Sam ", phone="555", region_id="r1").validate()

        assert payload.to_json() == {"name": "Sam", "phone": "555", "region_id": "r1"}
