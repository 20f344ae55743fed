"""Structured JSON logging"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

from pythonjsonlogger.json import JsonFormatter

from finance_dashboard.config import settings
from finance_dashboard.domain.currency import format_currency_label
from finance_dashboard.domain.models import EmergencyFundProfile, InvestmentProjection, Transaction


class CustomJsonFormatter(JsonFormatter):
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


def log_transaction_recorded(request_id: str, transaction: Transaction) -> None:
    logging.info(
        f"Transaction recorded: {transaction.kind.value} {format_currency_label(transaction.amount)}",
        extra={
            "request_id": request_id,
            "step": "transaction_recorded",
            "transaction_id": transaction.id,
            "kind": transaction.kind.value,
            "category": transaction.category,
            "amount": transaction.amount,
        },
    )


def log_transaction_removed(request_id: str, transaction_id: int, removed: int) -> None:
    logging.info(
        "Transaction removed" if removed else "Transaction not found, nothing removed",
        extra={
            "request_id": request_id,
            "step": "transaction_removed",
            "transaction_id": transaction_id,
            "removed": removed,
        },
    )


def log_emergency_fund(request_id: str, household_status: str, profile: EmergencyFundProfile) -> None:
    """Log emergency fund sizing outcome"""
    logging.info(
        f"Emergency fund calculated: target {format_currency_label(profile.target)}",
        extra={
            "request_id": request_id,
            "step": "emergency_fund",
            "household_status": household_status,
            "target": profile.target,
            "shortfall": profile.shortfall,
            "percentage": round(profile.percentage, 1),
        },
    )


def log_projection(request_id: str, projection: InvestmentProjection, duration_ms: float) -> None:
    """Log investment projection summary for analysis"""
    logging.info(
        f"Projection completed: final value {format_currency_label(projection.final_value)}",
        extra={
            "request_id": request_id,
            "step": "projection_complete",
            "horizon_years": projection.horizon_years,
            "total_invested": projection.total_invested,
            "roi": round(projection.roi, 2),
            "duration_ms": duration_ms,
        },
    )
