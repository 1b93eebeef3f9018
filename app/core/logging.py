"""Logging setup and the booking audit trail."""

import logging
import sys
from typing import Any

from app.core.config import settings

# Attributes AuditLogger attaches to its records
AUDIT_FIELDS = ("action", "actor_role", "actor_id", "entity_type", "entity_id")


class StructuredFormatter(logging.Formatter):
    """Key=value formatter used outside of development.

    Audit attributes attached through ``extra`` are emitted as their own
    keys so log shippers can index them.
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": self.formatTime(record, self.datefmt),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for extra_field in AUDIT_FIELDS:
            if hasattr(record, extra_field):
                log_data[extra_field] = getattr(record, extra_field)

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return " ".join(f"{k}={v}" for k, v in log_data.items())


def setup_logging() -> None:
    """Configure application logging."""
    log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    if settings.is_dev:
        console_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
    else:
        console_handler.setFormatter(StructuredFormatter())

    root_logger.addHandler(console_handler)

    # Reduce noise from third-party libraries
    for noisy in ("uvicorn.access", "sqlalchemy.engine", "passlib"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


class AuditLogger:
    """Audit trail for appointment and availability changes.

    One INFO line per mutation on the ``audit`` logger, naming who changed
    which record.
    """

    def __init__(self) -> None:
        self.logger = get_logger("audit")

    def log(
        self,
        action: str,
        actor_role: str,
        actor_id: str,
        entity_type: str,
        entity_id: str,
        metadata: dict[str, Any] | None = None,
    ) -> None:
        self.logger.info(
            f"AUDIT: action={action} actor={actor_role}:{actor_id} "
            f"entity={entity_type}:{entity_id} metadata={metadata or {}}",
            extra={
                "action": action,
                "actor_role": actor_role,
                "actor_id": actor_id,
                "entity_type": entity_type,
                "entity_id": entity_id,
            },
        )


audit_logger = AuditLogger()
