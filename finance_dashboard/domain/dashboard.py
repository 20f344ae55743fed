"""Dashboard aggregation and the session object that owns dashboard state"""

from datetime import date, datetime
from typing import Iterable, List, Optional, Union

from finance_dashboard.domain.emergency import calculate_emergency_fund
from finance_dashboard.domain.ledger import Ledger
from finance_dashboard.domain.models import (
    DashboardSummary,
    EmergencyFundProfile,
    Transaction,
    TransactionKind,
    WeekWindow,
    WeeklySeries,
)
from finance_dashboard.domain.windowing import day_index, filter_by_window, week_range

DAYS_PER_WEEK = 7


def weekly_series(transactions: Iterable[Transaction], now: Union[date, datetime]) -> WeeklySeries:
    """Per-day income/expense totals for the week containing now (Monday first)"""
    window = week_range(0, now)
    income = [0] * DAYS_PER_WEEK
    expense = [0] * DAYS_PER_WEEK

    for t in filter_by_window(transactions, window):
        bucket = income if t.kind == TransactionKind.INCOME else expense
        bucket[day_index(t.date)] += t.amount

    return WeeklySeries(window=window, income=income, expense=expense)


class Dashboard:
    """
    Single-user dashboard session.

    Owns the ledger, the latest emergency fund snapshot and the week the
    transaction table is browsing. Every derived view is recomputed from
    this state on request.
    """

    def __init__(
        self,
        ledger: Optional[Ledger] = None,
        emergency: Optional[EmergencyFundProfile] = None,
    ):
        self.ledger = ledger if ledger is not None else Ledger()
        self.emergency = emergency
        self.week_offset = 0

    def record_transaction(
        self,
        kind: TransactionKind,
        category: str,
        amount: int,
        description: str,
        on: date,
    ) -> Transaction:
        transaction = Transaction(
            id=self.ledger.next_id(),
            kind=TransactionKind(kind),
            category=category,
            amount=amount,
            description=description,
            date=on,
        )
        self.ledger.add(transaction)
        return transaction

    def remove_transaction(self, transaction_id: int) -> int:
        return self.ledger.remove(transaction_id)

    def record_emergency_fund(
        self,
        monthly_expense: int,
        household_status: str,
        current_savings: Optional[int] = None,
    ) -> EmergencyFundProfile:
        """Recompute the fund and replace the stored snapshot"""
        self.emergency = calculate_emergency_fund(monthly_expense, household_status, current_savings)
        return self.emergency

    def shift_week(self, delta: int) -> int:
        self.week_offset += delta
        return self.week_offset

    def reset_week(self) -> None:
        self.week_offset = 0

    def week_window(self, now: Union[date, datetime]) -> WeekWindow:
        return week_range(self.week_offset, now)

    def week_transactions(self, now: Union[date, datetime]) -> List[Transaction]:
        return self.ledger.in_window(self.week_window(now))

    def summary(self, now: Union[date, datetime], recent_limit: int = 5) -> DashboardSummary:
        """Current-week totals, all-time balance, weekly chart series and recent entries"""
        window = week_range(0, now)

        return DashboardSummary(
            week=window,
            income=self.ledger.sum_by_kind(window, TransactionKind.INCOME),
            expense=self.ledger.sum_by_kind(window, TransactionKind.EXPENSE),
            balance=self.ledger.balance(),
            emergency=self.emergency,
            series=weekly_series(self.ledger, now),
            recent=self.ledger.recent(recent_limit),
        )
