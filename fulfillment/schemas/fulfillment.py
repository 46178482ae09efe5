from typing import Any, Literal, Optional

from pydantic import BaseModel, Field, field_validator


class DialogflowIntent(BaseModel):
    displayName: Optional[str] = None


class QueryResult(BaseModel):
    intent: DialogflowIntent = Field(default_factory=DialogflowIntent)
    parameters: dict[str, Any] = Field(default_factory=dict)


class FulfillmentRequest(BaseModel):
    """Webhook body posted by the intent engine. Only consumed fields are declared."""

    queryResult: QueryResult = Field(default_factory=QueryResult)
    session: Optional[str] = None
    fulfillmentMessages: Optional[list[Any]] = None


class IntentCallback(BaseModel):
    """Typed view of a FulfillmentRequest that handlers work with."""

    display_name: Optional[str] = None
    city: Optional[str] = None
    option_number: Any = None
    session: Optional[str] = None
    fulfillment_messages: Optional[list[Any]] = None

    @classmethod
    def from_request(cls, request: FulfillmentRequest, option_parameter_names: list[str]) -> "IntentCallback":
        parameters = request.queryResult.parameters

        option_number = None
        for name in option_parameter_names:
            value = parameters.get(name)
            if value not in (None, ""):
                option_number = value
                break

        city = parameters.get("city")
        return cls(
            display_name=request.queryResult.intent.displayName,
            city=city if isinstance(city, str) and city else None,
            option_number=option_number,
            session=request.session,
            fulfillment_messages=request.fulfillmentMessages,
        )


class CityMapping(BaseModel):
    departmentId: str
    optionNumber: Optional[int] = None

    @field_validator("optionNumber", mode="before")
    @classmethod
    def keep_numeric_option(cls, value: object) -> Optional[int]:
        # Only JSON numbers take part in menu matching; "1" never equals 1.
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return None
        if isinstance(value, float) and not value.is_integer():
            return None
        return int(value)


class HandoverActionData(BaseModel):
    targetDepartment: str


class HandoverRequest(BaseModel):
    action: Literal["handover"] = "handover"
    sessionId: str
    actionData: HandoverActionData


class ScheduledTransfer(BaseModel):
    session: str
    departmentId: str


class FollowupEventInput(BaseModel):
    name: str


class FulfillmentResponse(BaseModel):
    fulfillmentMessages: Optional[list[Any]] = None
    followupEventInput: Optional[FollowupEventInput] = None


class ErrorResponse(BaseModel):
    error: str
