"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger import jsonlogger

from credit_desk.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_preview(
    request_id: str,
    frequency: str,
    installment_count: int,
    total_amount: float,
    schedule_generated: bool,
) -> None:
    """Log structured loan preview outcome"""
    logging.info(
        "Loan preview computed",
        extra={
            "request_id": request_id,
            "step": "loan_preview",
            "frequency": frequency,
            "installment_count": installment_count,
            "total_amount": round(total_amount, 2),
            "schedule_generated": schedule_generated,
        },
    )


def log_delinquency_query(
    request_id: str,
    filter_days: int,
    received: int,
    matched: int,
    critical: int,
    as_of: Optional[str] = None,
) -> None:
    """Log structured late-list query outcome"""
    logging.info(
        "Delinquency classified",
        extra={
            "request_id": request_id,
            "step": "delinquency_query",
            "filter_days": filter_days,
            "received": received,
            "matched": matched,
            "critical": critical,
            "as_of": as_of,
        },
    )
