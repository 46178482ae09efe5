from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from fulfillment.database import get_db
from fulfillment.logging_config import get_logger
from fulfillment.schemas.fulfillment import ErrorResponse, FulfillmentResponse
from fulfillment.services.department_resolver import DepartmentResolver
from fulfillment.services.errors import FulfillmentError
from fulfillment.services.handover_service import HandoverDispatcher
from fulfillment.services.intent_router import MSG_INVALID_BODY, IntentRouter
from fulfillment.services.scheduler_service import JobScheduler
from fulfillment.services.settings_service import SettingsReader

logger = get_logger("fulfillment_router")

router = APIRouter()


def get_scheduler(request: Request) -> JobScheduler:
    return request.app.state.scheduler


def error_response(error: FulfillmentError) -> JSONResponse:
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


@router.post(
    "/fulfillment",
    response_model=FulfillmentResponse,
    response_model_exclude_none=True,
    responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
)
async def handle_fulfillment(
    http_request: Request,
    db: Session = Depends(get_db),
    scheduler: JobScheduler = Depends(get_scheduler),
):
    """Handle an intent-engine fulfillment callback and hand the chat over to a department."""
    try:
        payload = await http_request.json()
    except ValueError:
        logger.warning("Fulfillment request body is not valid JSON")
        return JSONResponse(status_code=400, content={"error": MSG_INVALID_BODY})

    settings_reader = SettingsReader(db)
    intent_router = IntentRouter(
        resolver=DepartmentResolver(settings_reader),
        dispatcher=HandoverDispatcher(settings_reader, scheduler),
    )

    try:
        return await intent_router.route(payload)
    except FulfillmentError as e:
        if e.status_code >= 500:
            logger.error("Fulfillment failed", extra={"context": {"error": e.message}})
        return error_response(e)
