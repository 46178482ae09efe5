from pydantic_settings import BaseSettings

CITY_DETECTED_FROM_NAME_INTENT = "1.1 City detected from Name"
SELECT_CITY_FROM_LIST_INTENT = "1.2.1 Select City from List"
SELECT_CITY_FALLBACK_INTENT = "1.2.2 Select City from List - fallback"

SELECT_CITY_FALLBACK_EVENT = "1_2_2_Select_City_from_List_fallback"

DEPARTMENT_TRANSFER_JOB_ID = "DepartmentTransferJob"

DISPATCH_INLINE = "inline"
DISPATCH_DEFERRED = "deferred"

CITY_NOT_FOUND_ERROR = "error"
CITY_NOT_FOUND_FALLBACK = "fallback"

DEFAULT_CITY_MAPPING = """{
    "Gaspar": "tSTWZZELDmdGJovPm",
}"""


class Settings(BaseSettings):
    database_url: str = "sqlite:///./fulfillment.db"
    debug: bool = False
    log_level: str = "INFO"

    site_url: str = ""
    handover_app_id: str = "21b7d3ba-031b-41d9-8ff2-fbbfa081ae90"
    dispatch_mode: str = DISPATCH_INLINE
    transfer_delay_seconds: int = 2
    handover_timeout_seconds: float = 10.0

    option_parameter_names: list[str] = ["optionNumber", "cityNumber"]
    city_not_found_policy: str = CITY_NOT_FOUND_ERROR
    enabled_intents: list[str] = [
        CITY_DETECTED_FROM_NAME_INTENT,
        SELECT_CITY_FROM_LIST_INTENT,
        SELECT_CITY_FALLBACK_INTENT,
    ]

    admin_token: str = ""
    default_city_mapping: str = DEFAULT_CITY_MAPPING
    default_department: str = ""

    class Config:
        env_file = ".env"
        extra = "ignore"


settings = Settings()
