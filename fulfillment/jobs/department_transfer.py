from typing import Any, Callable

from sqlalchemy.orm import Session

from fulfillment.config import DEPARTMENT_TRANSFER_JOB_ID
from fulfillment.database import SessionLocal
from fulfillment.logging_config import get_logger
from fulfillment.services.handover_service import HandoverOutcome, send_handover
from fulfillment.services.scheduler_service import JobProcessor
from fulfillment.services.settings_service import SettingsReader

logger = get_logger("department_transfer_job")


class DepartmentTransferJob:
    """Delayed handover. Fire-and-forget: no retry, nothing reported to the caller."""

    def __init__(self, session_factory: Callable[[], Session] = SessionLocal):
        self.session_factory = session_factory

    def get_processor(self) -> JobProcessor:
        return JobProcessor(id=DEPARTMENT_TRANSFER_JOB_ID, processor=self.process)

    def _get_site_url(self) -> str | None:
        db = self.session_factory()
        try:
            return SettingsReader(db).get_site_url()
        finally:
            db.close()

    async def process(self, data: dict[str, Any]) -> HandoverOutcome | None:
        department_id = data.get("departmentId")
        session = data.get("session")
        if not department_id or not session:
            logger.error(
                "Invalid params for job",
                extra={"context": {"has_department": bool(department_id), "has_session": bool(session)}},
            )
            return None

        site_url = self._get_site_url()
        if not site_url:
            logger.error("Server url not found", extra={"context": {"job_id": DEPARTMENT_TRANSFER_JOB_ID}})
            return None

        return await send_handover(site_url, session, department_id)
