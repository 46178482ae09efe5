from typing import Optional

from sqlalchemy.orm import Session

from fulfillment.config import settings
from fulfillment.logging_config import get_logger
from fulfillment.models import AppSetting

logger = get_logger("settings_service")

CITY_MAPPING_SETTING = "City-to-department-id-mapping"
DEFAULT_DEPARTMENT_SETTING = "Default-Handover-department"
SITE_URL_SETTING = "Site_Url"


def _package_defaults() -> dict[str, str]:
    return {
        CITY_MAPPING_SETTING: settings.default_city_mapping,
        DEFAULT_DEPARTMENT_SETTING: settings.default_department,
        SITE_URL_SETTING: settings.site_url,
    }


def known_setting_ids() -> list[str]:
    return list(_package_defaults())


class SettingsReader:
    """Reads operator settings from the database on every call, no caching."""

    def __init__(self, db: Session):
        self.db = db

    def _get_row(self, setting_id: str) -> Optional[AppSetting]:
        return self.db.query(AppSetting).filter(AppSetting.id == setting_id).first()

    def get_value(self, setting_id: str) -> Optional[str]:
        row = self._get_row(setting_id)
        if row is not None and row.value is not None:
            return row.value
        return _package_defaults().get(setting_id)

    def set_value(self, setting_id: str, value: str) -> AppSetting:
        if setting_id not in _package_defaults():
            raise KeyError(setting_id)

        row = self._get_row(setting_id)
        if row is None:
            row = AppSetting(id=setting_id, value=value)
            self.db.add(row)
        else:
            row.value = value
        self.db.flush()
        logger.info("Setting updated", extra={"context": {"setting_id": setting_id}})
        return row

    def list_settings(self) -> list[dict]:
        items = []
        for setting_id, default in _package_defaults().items():
            row = self._get_row(setting_id)
            stored = row is not None and row.value is not None
            items.append(
                {
                    "id": setting_id,
                    "value": row.value if stored else default,
                    "is_default": not stored,
                    "updated_at": row.updated_at if row is not None else None,
                }
            )
        return items

    def get_city_mapping_text(self) -> Optional[str]:
        return self.get_value(CITY_MAPPING_SETTING)

    def get_default_department(self) -> Optional[str]:
        return self.get_value(DEFAULT_DEPARTMENT_SETTING)

    def get_site_url(self) -> Optional[str]:
        value = self.get_value(SITE_URL_SETTING)
        return value.rstrip("/") if value else None
