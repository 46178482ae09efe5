from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

import httpx

from fulfillment.config import DEPARTMENT_TRANSFER_JOB_ID, DISPATCH_DEFERRED, settings
from fulfillment.logging_config import get_logger
from fulfillment.schemas.fulfillment import HandoverActionData, HandoverRequest, ScheduledTransfer
from fulfillment.services.errors import ConfigError, InvalidSessionError
from fulfillment.services.scheduler_service import JobScheduler
from fulfillment.services.settings_service import SettingsReader
from fulfillment.utils import add_seconds_to_date

logger = get_logger("handover_service")

MSG_INVALID_SITE_URL = "Internal Error. Invalid ServerUrl setting on server"


@dataclass
class HandoverOutcome:
    sent: bool = False
    deferred: bool = False
    status_code: Optional[int] = None
    error: Optional[str] = None


def extract_session_id(session: Optional[str]) -> str:
    """Last path segment of the intent engine session, e.g. ``projects/x/agent/sessions/abc`` -> ``abc``."""
    if not session or not session.strip():
        raise InvalidSessionError("Invalid session. No session found")

    session_id = session.strip().split("/")[-1]
    if not session_id:
        raise InvalidSessionError("Invalid session. No session found")
    return session_id


def build_handover_url(site_url: str) -> str:
    return f"{site_url.rstrip('/')}/api/apps/public/{settings.handover_app_id}/incoming"


def build_handover_request(session: str, department_id: str) -> HandoverRequest:
    return HandoverRequest(
        sessionId=extract_session_id(session),
        actionData=HandoverActionData(targetDepartment=department_id),
    )


async def send_handover(site_url: str, session: str, department_id: str) -> HandoverOutcome:
    """POST the handover request to the chat platform. Upstream failures are logged, never raised."""
    url = build_handover_url(site_url)
    payload = build_handover_request(session, department_id).model_dump()
    context = {"url": url, "payload": payload}

    try:
        async with httpx.AsyncClient(timeout=settings.handover_timeout_seconds) as client:
            response = await client.post(url, json=payload, headers={"Content-Type": "application/json"})
    except httpx.HTTPError as e:
        logger.error("Handover request failed", extra={"context": {**context, "error": str(e)}})
        return HandoverOutcome(sent=False, error=str(e))

    context.update({"status": response.status_code, "content": response.text})
    if response.status_code >= 400:
        logger.error("Handover endpoint returned an error", extra={"context": context})
        return HandoverOutcome(sent=False, status_code=response.status_code, error=response.text)

    logger.info("Handover request sent", extra={"context": context})
    return HandoverOutcome(sent=True, status_code=response.status_code)


class HandoverDispatcher:
    """Sends handovers inline or enqueues them as a delayed transfer job."""

    def __init__(self, settings_reader: SettingsReader, scheduler: JobScheduler, mode: Optional[str] = None):
        self.settings_reader = settings_reader
        self.scheduler = scheduler
        self.mode = mode or settings.dispatch_mode

    @property
    def deferred(self) -> bool:
        return self.mode == DISPATCH_DEFERRED

    def preflight(self, session: Optional[str]) -> Optional[str]:
        """Validate session and, in inline mode, resolve the site url before any lookup."""
        extract_session_id(session)
        if self.deferred:
            # Deferred jobs read the site url when they fire.
            return None

        site_url = self.settings_reader.get_site_url()
        if not site_url:
            logger.error("Server url not found")
            raise ConfigError(MSG_INVALID_SITE_URL)
        return site_url

    async def dispatch(self, session: str, department_id: str) -> HandoverOutcome:
        if self.deferred:
            return self._enqueue(session, department_id)

        site_url = self.preflight(session)
        return await send_handover(site_url, session, department_id)

    def _enqueue(self, session: str, department_id: str) -> HandoverOutcome:
        extract_session_id(session)
        transfer = ScheduledTransfer(session=session, departmentId=department_id)
        when = add_seconds_to_date(datetime.now(timezone.utc), settings.transfer_delay_seconds)
        self.scheduler.schedule_once(DEPARTMENT_TRANSFER_JOB_ID, when, transfer.model_dump())
        return HandoverOutcome(deferred=True)
