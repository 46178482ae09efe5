from unittest.mock import Mock

import pytest

from fulfillment.schemas.fulfillment import CityMapping
from fulfillment.services.department_resolver import (
    MSG_EMPTY_DEFAULT_DEPARTMENT,
    MSG_MAPPING_UNAVAILABLE,
    DepartmentResolver,
)
from fulfillment.services.errors import ConfigError, MappingNotFoundError

MAPPING = {
    "Zurich": CityMapping(departmentId="D1", optionNumber=1),
    "Geneva": CityMapping(departmentId="D2", optionNumber=2),
    "Basel": CityMapping(departmentId="D3", optionNumber=2),
    "Gaspar": CityMapping(departmentId="tSTWZZELDmdGJovPm"),
}


def make_resolver(mapping_text=None, default_department=None):
    reader = Mock()
    reader.get_city_mapping_text.return_value = mapping_text
    reader.get_default_department.return_value = default_department
    return DepartmentResolver(reader)


class TestLoadMapping:
    def test_loads_fresh_mapping_each_call(self):
        resolver = make_resolver('{"Zurich": {"departmentId": "D1", "optionNumber": 1}}')

        resolver.load_mapping()
        resolver.load_mapping()

        assert resolver.settings_reader.get_city_mapping_text.call_count == 2

    def test_empty_setting_raises_config_error(self):
        resolver = make_resolver("   ")
        with pytest.raises(ConfigError) as exc:
            resolver.load_mapping()
        assert exc.value.message == MSG_MAPPING_UNAVAILABLE
        assert exc.value.status_code == 500

    def test_unparseable_setting_raises_config_error(self):
        resolver = make_resolver("{broken")
        with pytest.raises(ConfigError):
            resolver.load_mapping()

    def test_invalid_record_only_fails_its_city(self):
        resolver = make_resolver('{"Zurich": null, "Geneva": {"departmentId": "D2", "optionNumber": 2}}')
        mapping = resolver.load_mapping()

        assert resolver.resolve_by_city(mapping, "Geneva") == "D2"
        with pytest.raises(MappingNotFoundError) as exc:
            resolver.resolve_by_city(mapping, "Zurich")
        assert exc.value.message == "Error! Invalid mapping record found for city Zurich"


class TestResolveByCity:
    def test_known_city(self):
        assert make_resolver().resolve_by_city(MAPPING, "Zurich") == "D1"

    def test_unknown_city_raises_not_found(self):
        with pytest.raises(MappingNotFoundError) as exc:
            make_resolver().resolve_by_city(MAPPING, "Bern")
        assert exc.value.message == "Error! Invalid mapping record found for city Bern"
        assert exc.value.status_code == 500

    def test_lookup_is_case_sensitive(self):
        with pytest.raises(MappingNotFoundError):
            make_resolver().resolve_by_city(MAPPING, "zurich")


class TestResolveByOption:
    def test_string_option_number_does_not_match(self):
        resolver = make_resolver('{"Zurich": {"departmentId": "D1", "optionNumber": "1"}}')
        assert resolver.resolve_by_option(resolver.load_mapping(), 1) is None

    def test_matching_option(self):
        record = make_resolver().resolve_by_option(MAPPING, 1)
        assert record == MAPPING["Zurich"]

    def test_first_match_wins(self):
        record = make_resolver().resolve_by_option(MAPPING, 2)
        assert record.departmentId == "D2"

    def test_miss_returns_none(self):
        assert make_resolver().resolve_by_option(MAPPING, 9) is None

    def test_entries_without_option_never_match(self):
        mapping = {"Gaspar": CityMapping(departmentId="tSTWZZELDmdGJovPm")}
        assert make_resolver().resolve_by_option(mapping, 1) is None


class TestResolveDefault:
    def test_configured_default(self):
        assert make_resolver(default_department=" D9 ").resolve_default() == "D9"

    def test_empty_default_raises(self):
        with pytest.raises(ConfigError) as exc:
            make_resolver(default_department="").resolve_default()
        assert exc.value.message == MSG_EMPTY_DEFAULT_DEPARTMENT

    def test_missing_default_raises(self):
        with pytest.raises(ConfigError):
            make_resolver(default_department=None).resolve_default()
