from typing import Optional

from fulfillment.logging_config import get_logger
from fulfillment.schemas.fulfillment import CityMapping
from fulfillment.services.errors import ConfigError, MappingNotFoundError
from fulfillment.services.mapping_parser import parse_mapping
from fulfillment.services.settings_service import SettingsReader

logger = get_logger("department_resolver")

MSG_MAPPING_UNAVAILABLE = "Internal Error. Error resolving city to department id mapping data from settings"
MSG_EMPTY_DEFAULT_DEPARTMENT = "Error! Empty Default department setting"


class DepartmentResolver:
    """Resolves the target department for a handover."""

    def __init__(self, settings_reader: SettingsReader):
        self.settings_reader = settings_reader

    def load_mapping(self) -> dict[str, CityMapping]:
        """Parse the mapping setting fresh. Raises ConfigError when unusable."""
        result = parse_mapping(self.settings_reader.get_city_mapping_text())
        if not result.ok:
            logger.error(
                "Error resolving city to department id mapping data from settings",
                extra={"context": {"reason": result.error_code, "error": result.error}},
            )
            raise ConfigError(MSG_MAPPING_UNAVAILABLE)
        return result.value

    def resolve_by_city(self, mapping: dict[str, CityMapping], city: str) -> str:
        record = mapping.get(city)
        if record is None or not record.departmentId:
            logger.error(
                "No mapping record found for city",
                extra={"context": {"city": city}},
            )
            raise MappingNotFoundError(f"Error! Invalid mapping record found for city {city}")
        return record.departmentId

    def resolve_by_option(self, mapping: dict[str, CityMapping], option_number: int) -> Optional[CityMapping]:
        """First entry with a matching option number, in insertion order; None on miss."""
        for record in mapping.values():
            if record.optionNumber == option_number:
                return record

        logger.error(
            "No mapping record found for option number",
            extra={"context": {"option_number": option_number}},
        )
        return None

    def resolve_default(self) -> str:
        department = self.settings_reader.get_default_department()
        if not department or not department.strip():
            logger.error(MSG_EMPTY_DEFAULT_DEPARTMENT)
            raise ConfigError(MSG_EMPTY_DEFAULT_DEPARTMENT)
        return department.strip()
