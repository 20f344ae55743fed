"""Snapshot codec for the browser page-storage layout.

The client keeps two keys in page storage: "transactions" (list of records)
and "emergencyFundData" ({target, current}). The service exports its
session in that shape and rebuilds a session from it.
"""

from datetime import date
from typing import Any, Dict, Mapping, Optional

from finance_dashboard.domain.currency import parse_amount
from finance_dashboard.domain.dashboard import Dashboard
from finance_dashboard.domain.emergency import profile_from_snapshot
from finance_dashboard.domain.exceptions import InvalidTransactionDataError
from finance_dashboard.domain.ledger import Ledger
from finance_dashboard.domain.models import (
    EmergencyFundProfile,
    Transaction,
    TransactionKind,
    is_valid_category,
)

TRANSACTIONS_KEY = "transactions"
EMERGENCY_KEY = "emergencyFundData"


def transaction_to_record(transaction: Transaction) -> Dict[str, Any]:
    return {
        "id": transaction.id,
        "type": transaction.kind.value,
        "category": transaction.category,
        "amount": transaction.amount,
        "description": transaction.description,
        "date": transaction.date.isoformat(),
    }


def _stored_amount(value: Any) -> int:
    # Formatted text goes through parse_amount; JSON numbers must be whole and non-negative
    if value is None or isinstance(value, str):
        return parse_amount(value)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise TypeError(f"amount must be a number or text, got {type(value).__name__}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"amount must be whole rupiah, got {value}")
    if value < 0:
        raise ValueError(f"amount must not be negative, got {value}")
    return int(value)


def record_to_transaction(record: Mapping[str, Any]) -> Transaction:
    """
    Parse one stored transaction record.

    Raises:
        InvalidTransactionDataError: On missing keys, unparseable values or a
            category that does not belong to the record's type
    """
    try:
        kind = TransactionKind(record["type"])
        category = str(record["category"])
        if not is_valid_category(kind, category):
            raise ValueError(f"category '{category}' is not a {kind.value} category")

        return Transaction(
            id=int(record["id"]),
            kind=kind,
            category=category,
            amount=_stored_amount(record["amount"]),
            description=str(record.get("description") or ""),
            # Accept both "2026-10-19" and full ISO timestamps
            date=date.fromisoformat(str(record["date"])[:10]),
        )
    except (KeyError, ValueError, TypeError) as e:
        raise InvalidTransactionDataError(f"Invalid transaction record: {e}") from e


def emergency_to_record(profile: EmergencyFundProfile) -> Dict[str, Any]:
    return {"target": profile.target, "current": profile.current, "months": profile.months}


def dump_snapshot(dashboard: Dashboard) -> Dict[str, Any]:
    return {
        TRANSACTIONS_KEY: [transaction_to_record(t) for t in dashboard.ledger],
        EMERGENCY_KEY: emergency_to_record(dashboard.emergency) if dashboard.emergency else None,
    }


def load_snapshot(data: Optional[Mapping[str, Any]]) -> Dashboard:
    """Rebuild a session; absent keys give an empty ledger and no emergency profile"""
    data = data or {}

    records = data.get(TRANSACTIONS_KEY) or []
    ledger = Ledger(record_to_transaction(r) for r in records)

    emergency = None
    stored = data.get(EMERGENCY_KEY)
    if stored:
        try:
            emergency = profile_from_snapshot(
                _stored_amount(stored["target"]),
                _stored_amount(stored["current"]),
                int(stored.get("months") or 0),
            )
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            raise InvalidTransactionDataError(f"Invalid emergency fund record: {e}") from e

    return Dashboard(ledger=ledger, emergency=emergency)
