import pytest

from fulfillment.config import DEFAULT_CITY_MAPPING, settings
from fulfillment.services.settings_service import (
    CITY_MAPPING_SETTING,
    DEFAULT_DEPARTMENT_SETTING,
    SITE_URL_SETTING,
    SettingsReader,
)


class TestSettingsReader:
    def test_falls_back_to_package_default(self, db_session):
        reader = SettingsReader(db_session)
        assert reader.get_city_mapping_text() == DEFAULT_CITY_MAPPING

    def test_reads_stored_value(self, db_session, store_setting):
        store_setting(DEFAULT_DEPARTMENT_SETTING, "D9")
        assert SettingsReader(db_session).get_default_department() == "D9"

    def test_rereads_on_every_call(self, db_session, store_setting):
        reader = SettingsReader(db_session)
        store_setting(DEFAULT_DEPARTMENT_SETTING, "D1")
        assert reader.get_default_department() == "D1"

        store_setting(DEFAULT_DEPARTMENT_SETTING, "D2")
        assert reader.get_default_department() == "D2"

    def test_site_url_trailing_slash_removed(self, db_session, store_setting):
        store_setting(SITE_URL_SETTING, "https://chat.example.com/")
        assert SettingsReader(db_session).get_site_url() == "https://chat.example.com"

    def test_site_url_empty_is_none(self, db_session, monkeypatch):
        monkeypatch.setattr(settings, "site_url", "")
        assert SettingsReader(db_session).get_site_url() is None

    def test_set_value_creates_and_updates(self, db_session):
        reader = SettingsReader(db_session)
        reader.set_value(CITY_MAPPING_SETTING, "{}")
        reader.set_value(CITY_MAPPING_SETTING, '{"Zurich": "D1"}')
        db_session.commit()

        assert reader.get_city_mapping_text() == '{"Zurich": "D1"}'

    def test_set_unknown_setting_raises(self, db_session):
        with pytest.raises(KeyError):
            SettingsReader(db_session).set_value("Unknown", "x")

    def test_list_settings_marks_defaults(self, db_session, store_setting):
        store_setting(SITE_URL_SETTING, "https://chat.example.com")

        items = {item["id"]: item for item in SettingsReader(db_session).list_settings()}

        assert set(items) == {CITY_MAPPING_SETTING, DEFAULT_DEPARTMENT_SETTING, SITE_URL_SETTING}
        assert items[SITE_URL_SETTING]["is_default"] is False
        assert items[SITE_URL_SETTING]["value"] == "https://chat.example.com"
        assert items[CITY_MAPPING_SETTING]["is_default"] is True
