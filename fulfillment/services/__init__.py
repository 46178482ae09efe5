from fulfillment.services.department_resolver import DepartmentResolver
from fulfillment.services.errors import (
    BadRequestError,
    ConfigError,
    FulfillmentError,
    InvalidSessionError,
    MappingNotFoundError,
)
from fulfillment.services.handover_service import HandoverDispatcher, HandoverOutcome, send_handover
from fulfillment.services.intent_router import IntentRouter
from fulfillment.services.mapping_parser import parse_mapping
from fulfillment.services.scheduler_service import JobProcessor, JobScheduler
from fulfillment.services.settings_service import SettingsReader
