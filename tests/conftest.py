"""Pytest fixtures for testing"""

import pytest
from datetime import date, datetime
from typing import Callable, List
from fastapi.testclient import TestClient
from finance_dashboard.api.main import create_app
from finance_dashboard.api.dependencies import get_now
from finance_dashboard.domain.ledger import Ledger
from finance_dashboard.domain.models import Transaction, TransactionKind


# Wednesday; its week runs Mon 2026-10-19 .. Sun 2026-10-25
FIXED_NOW = datetime(2026, 10, 21, 10, 30)


@pytest.fixture
def now() -> datetime:
    return FIXED_NOW


@pytest.fixture
def app():
    """Fresh application (and dashboard session) with a frozen clock"""
    app = create_app()
    app.dependency_overrides[get_now] = lambda: FIXED_NOW
    return app


@pytest.fixture
def client(app) -> TestClient:
    """Create FastAPI test client"""
    return TestClient(app)


@pytest.fixture
def make_transaction() -> Callable[..., Transaction]:
    """Factory with sensible defaults; ids count up from 1"""
    counter = {"next": 1}

    def _make(
        amount: int = 100_000,
        kind: TransactionKind = TransactionKind.EXPENSE,
        on: date = date(2026, 10, 21),
        category: str | None = None,
        description: str = "Test",
        id: int | None = None,
    ) -> Transaction:
        if id is None:
            id = counter["next"]
        counter["next"] = id + 1
        if category is None:
            category = "gaji" if kind == TransactionKind.INCOME else "makanan"
        return Transaction(
            id=id,
            kind=kind,
            category=category,
            amount=amount,
            description=description,
            date=on,
        )

    return _make


@pytest.fixture
def sample_transactions(make_transaction) -> List[Transaction]:
    """A week of typical activity plus entries from the weeks around it"""
    return [
        # Previous week
        make_transaction(5_000_000, TransactionKind.INCOME, date(2026, 10, 12), "gaji", "Gaji Oktober"),
        make_transaction(250_000, TransactionKind.EXPENSE, date(2026, 10, 18), "makanan", "Makan malam"),
        # Current week
        make_transaction(1_500_000, TransactionKind.INCOME, date(2026, 10, 19), "freelance", "Proyek desain"),
        make_transaction(75_000, TransactionKind.EXPENSE, date(2026, 10, 19), "transportasi", "Ojek"),
        make_transaction(400_000, TransactionKind.EXPENSE, date(2026, 10, 21), "tagihan", "Listrik"),
        make_transaction(120_000, TransactionKind.EXPENSE, date(2026, 10, 25), "hiburan", "Bioskop"),
        # Next week
        make_transaction(300_000, TransactionKind.EXPENSE, date(2026, 10, 26), "belanja", "Belanja bulanan"),
    ]


@pytest.fixture
def ledger(sample_transactions) -> Ledger:
    return Ledger(sample_transactions)
