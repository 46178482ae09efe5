"""JSON logging for the fulfillment service.

Every record carries the service name, so handover and transfer-job lines can
be told apart from uvicorn's own output in a shared log stream.
"""

import json
import logging
import sys
from datetime import datetime, timezone

SERVICE_NAME = "fulfillment"

QUIET_LOGGERS = ("httpx", "httpcore", "uvicorn.access")


class JSONFormatter(logging.Formatter):
    def __init__(self, service: str = SERVICE_NAME):
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "service": self.service,
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        context = getattr(record, "context", None)
        if context:
            log_data["context"] = context

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        # Payloads may hold datetimes from scheduled transfers.
        return json.dumps(log_data, ensure_ascii=False, default=str)


def setup_logging(level: str = "INFO", debug: bool = False) -> None:
    """Install the JSON handler on the root logger.

    With ``debug`` on, SQLAlchemy statements are logged too; settings are read
    from the database on every callback, so this shows each lookup.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    root_logger.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO if debug else logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(f"{SERVICE_NAME}.{name}")
