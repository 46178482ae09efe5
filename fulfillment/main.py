from fastapi import FastAPI

from fulfillment.config import settings
from fulfillment.database import init_db
from fulfillment.jobs import DepartmentTransferJob
from fulfillment.logging_config import get_logger, setup_logging
from fulfillment.routers import fulfillment as fulfillment_router
from fulfillment.routers import settings as settings_router
from fulfillment.services.scheduler_service import JobScheduler

setup_logging(settings.log_level, debug=settings.debug)

logger = get_logger("main")

app = FastAPI(
    title="Dialogflow Handover Fulfillment",
    description="Routes intent fulfillment callbacks to chat department handovers",
    version="0.1.0",
)

app.state.scheduler = JobScheduler()
app.state.scheduler.register_processor(DepartmentTransferJob().get_processor())

app.include_router(fulfillment_router.router)
app.include_router(settings_router.router)


@app.on_event("startup")
async def startup() -> None:
    init_db()
    logger.info(
        "Fulfillment service started",
        extra={"context": {"dispatch_mode": settings.dispatch_mode, "enabled_intents": settings.enabled_intents}},
    )


@app.on_event("shutdown")
async def shutdown() -> None:
    await app.state.scheduler.shutdown()


@app.get("/health")
async def health():
    return {"status": "ok"}
