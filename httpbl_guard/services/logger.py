"""Structured JSON logging for container deployments."""

import logging
import sys
import uuid
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter


# Process instance ID for correlation across log entries
INSTANCE_ID = str(uuid.uuid4())


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter that adds instance_id and standardized fields."""

    def add_fields(
        self,
        log_record: Dict[str, Any],
        record: logging.LogRecord,
        message_dict: Dict[str, Any],
    ) -> None:
        """Add custom fields to log record.

        Args:
            log_record: The log record to modify.
            record: The original logging.LogRecord.
            message_dict: Additional fields from the logging call.
        """
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = (
            datetime.now(timezone.utc).replace(tzinfo=None).isoformat() + "Z"
        )
        log_record["instance_id"] = INSTANCE_ID
        log_record["level"] = record.levelname
        log_record["logger"] = record.name


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure structured JSON logging for the application.

    Args:
        verbose: Log at DEBUG instead of INFO.

    Returns:
        logging.Logger: Configured root logger.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    json_handler = logging.StreamHandler(sys.stdout)
    json_handler.setFormatter(CustomJsonFormatter("%(message)s"))
    logger.addHandler(json_handler)

    return logger


def log_ip_check(
    ip: str,
    blocked: bool,
    header: str,
    duration_ms: int,
) -> None:
    """Log structured per-request check result.

    Args:
        ip: Client address that was checked.
        blocked: Policy decision.
        header: Request header the address was read from.
        duration_ms: Processing time in milliseconds.
    """
    logger = logging.getLogger(__name__)
    logger.info(
        "IP check completed",
        extra={
            "ip": ip,
            "decision": "BLOCK" if blocked else "ALLOW",
            "header": header,
            "duration_ms": duration_ms,
        },
    )


def log_rejected_request(header: str, raw_value: str | None) -> None:
    """Log a request denied because the client IP header was unusable.

    Args:
        header: Configured client IP header name.
        raw_value: Header value as received, None if absent.
    """
    logger = logging.getLogger(__name__)
    logger.warning(
        "Invalid or missing client IP header",
        extra={
            "header": header,
            "raw_value": raw_value,
            "decision": "BLOCK",
        },
    )
