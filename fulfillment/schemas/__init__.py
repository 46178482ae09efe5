from fulfillment.schemas.fulfillment import (
    CityMapping,
    FulfillmentRequest,
    FulfillmentResponse,
    HandoverRequest,
    IntentCallback,
    ScheduledTransfer,
)
from fulfillment.schemas.settings import SettingItem, SettingsResponse, SettingUpdateRequest

__all__ = [
    "CityMapping",
    "FulfillmentRequest",
    "FulfillmentResponse",
    "HandoverRequest",
    "IntentCallback",
    "ScheduledTransfer",
    "SettingItem",
    "SettingsResponse",
    "SettingUpdateRequest",
]
