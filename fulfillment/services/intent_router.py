from typing import Any, Awaitable, Callable, Optional

from pydantic import ValidationError

from fulfillment.config import (
    CITY_DETECTED_FROM_NAME_INTENT,
    CITY_NOT_FOUND_FALLBACK,
    SELECT_CITY_FALLBACK_EVENT,
    SELECT_CITY_FALLBACK_INTENT,
    SELECT_CITY_FROM_LIST_INTENT,
    settings,
)
from fulfillment.logging_config import get_logger
from fulfillment.schemas.fulfillment import (
    FollowupEventInput,
    FulfillmentRequest,
    FulfillmentResponse,
    IntentCallback,
)
from fulfillment.services.department_resolver import DepartmentResolver
from fulfillment.services.errors import BadRequestError, MappingNotFoundError
from fulfillment.services.handover_service import HandoverDispatcher

logger = get_logger("intent_router")

MSG_INVALID_INTENT = "Invalid Intent"
MSG_INVALID_BODY = "Invalid request body"
MSG_NO_CITY = "Invalid parameters. No name and city param found"
MSG_NO_OPTION_NUMBER = "Invalid parameters. No optionNumber param found"

IntentHandler = Callable[[IntentCallback], Awaitable[FulfillmentResponse]]


def parse_option_number(value: Any) -> Optional[int]:
    """Normalize an option number sent as int, integral float or numeric string."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            value = float(value)
        except ValueError:
            return None

    if isinstance(value, float):
        if not value.is_integer():
            return None
        value = int(value)

    if not isinstance(value, int) or value <= 0:
        return None
    return value


def fallback_event() -> FulfillmentResponse:
    return FulfillmentResponse(followupEventInput=FollowupEventInput(name=SELECT_CITY_FALLBACK_EVENT))


def handover_started(callback: IntentCallback) -> FulfillmentResponse:
    return FulfillmentResponse(fulfillmentMessages=callback.fulfillment_messages or [])


class IntentRouter:
    """Dispatches an intent-engine callback to the handler for its intent name."""

    def __init__(
        self,
        resolver: DepartmentResolver,
        dispatcher: HandoverDispatcher,
        enabled_intents: Optional[list[str]] = None,
        option_parameter_names: Optional[list[str]] = None,
        city_not_found_policy: Optional[str] = None,
    ):
        self.resolver = resolver
        self.dispatcher = dispatcher
        self.option_parameter_names = option_parameter_names or settings.option_parameter_names
        self.city_not_found_policy = city_not_found_policy or settings.city_not_found_policy

        handlers: dict[str, IntentHandler] = {
            CITY_DETECTED_FROM_NAME_INTENT: self.handle_city_detected_from_name,
            SELECT_CITY_FROM_LIST_INTENT: self.handle_select_city_from_list,
            SELECT_CITY_FALLBACK_INTENT: self.handle_select_city_fallback,
        }
        enabled = settings.enabled_intents if enabled_intents is None else enabled_intents
        self.handlers = {name: handler for name, handler in handlers.items() if name in enabled}

    async def route(self, payload: Any) -> FulfillmentResponse:
        logger.info("Fulfillment request received", extra={"context": {"payload": payload}})

        try:
            request = FulfillmentRequest.model_validate(payload if payload is not None else {})
        except ValidationError as e:
            logger.warning("Fulfillment request rejected", extra={"context": {"error": str(e)}})
            raise BadRequestError(MSG_INVALID_BODY)

        callback = IntentCallback.from_request(request, self.option_parameter_names)
        handler = self.handlers.get(callback.display_name)
        if handler is None:
            logger.warning("Invalid intent", extra={"context": {"intent": callback.display_name}})
            raise BadRequestError(MSG_INVALID_INTENT)

        return await handler(callback)

    async def handle_city_detected_from_name(self, callback: IntentCallback) -> FulfillmentResponse:
        if not callback.city:
            raise BadRequestError(MSG_NO_CITY)

        self.dispatcher.preflight(callback.session)
        mapping = self.resolver.load_mapping()

        try:
            department_id = self.resolver.resolve_by_city(mapping, callback.city)
        except MappingNotFoundError:
            if self.city_not_found_policy == CITY_NOT_FOUND_FALLBACK:
                return fallback_event()
            raise

        await self.dispatcher.dispatch(callback.session, department_id)
        return handover_started(callback)

    async def handle_select_city_from_list(self, callback: IntentCallback) -> FulfillmentResponse:
        option_number = parse_option_number(callback.option_number)
        if option_number is None:
            raise BadRequestError(MSG_NO_OPTION_NUMBER)

        self.dispatcher.preflight(callback.session)
        mapping = self.resolver.load_mapping()

        record = self.resolver.resolve_by_option(mapping, option_number)
        if record is None:
            return fallback_event()

        await self.dispatcher.dispatch(callback.session, record.departmentId)
        return handover_started(callback)

    async def handle_select_city_fallback(self, callback: IntentCallback) -> FulfillmentResponse:
        self.dispatcher.preflight(callback.session)
        department_id = self.resolver.resolve_default()

        await self.dispatcher.dispatch(callback.session, department_id)
        return handover_started(callback)
