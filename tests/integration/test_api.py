"""Integration tests for API endpoints"""

import pytest
from fastapi.testclient import TestClient
from finance_dashboard.api.dependencies import get_crypto_client
from finance_dashboard.domain.exceptions import MarketDataError
from finance_dashboard.domain.models import CryptoQuote


class StubCryptoClient:
    """Stands in for CryptoClient without touching the network"""

    def __init__(self, quotes=None, error=None):
        self.quotes = quotes or []
        self.error = error

    async def get_prices(self):
        if self.error:
            raise self.error
        return self.quotes


def _add(client: TestClient, **overrides) -> dict:
    body = {
        "kind": "expense",
        "category": "makanan",
        "amount": 50_000,
        "description": "Makan siang",
        "date": "2026-10-21",
    }
    body.update(overrides)
    response = client.post("/v1/transactions", json=body)
    assert response.status_code == 201, response.text
    return response.json()


def test_health_endpoint(client: TestClient):
    """Test health check endpoint"""
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json()["status"] == "ok"


def test_metrics_endpoint(client: TestClient):
    """Test Prometheus metrics endpoint"""
    response = client.get("/metrics")
    assert response.status_code == 200
    assert "finance_transactions_removed_total" in response.text


def test_request_id_header(client: TestClient):
    assert client.get("/health").headers["X-Request-ID"]

    response = client.get("/health", headers={"X-Request-ID": "req-123"})
    assert response.headers["X-Request-ID"] == "req-123"


def test_create_transaction(client: TestClient):
    """Test POST /v1/transactions assigns an id and echoes the entry"""
    data = _add(client)

    assert data["id"] > 0
    assert data["kind"] == "expense"
    assert data["amount"] == 50_000
    assert data["date"] == "2026-10-21"


def test_create_transaction_accepts_formatted_amount(client: TestClient):
    data = _add(client, kind="income", category="gaji", amount="Rp 7.500.000")
    assert data["amount"] == 7_500_000


def test_create_transaction_category_must_match_kind(client: TestClient):
    response = client.post(
        "/v1/transactions",
        json={"kind": "income", "category": "makanan", "amount": 1000, "date": "2026-10-21"},
    )
    assert response.status_code == 422


def test_create_transaction_rejects_unknown_kind(client: TestClient):
    response = client.post(
        "/v1/transactions",
        json={"kind": "transfer", "category": "makanan", "amount": 1000, "date": "2026-10-21"},
    )
    assert response.status_code == 422


def test_list_week_transactions(client: TestClient):
    """Test GET /v1/transactions returns the Monday-to-Sunday week, newest first"""
    _add(client, date="2026-10-19", description="Senin")
    _add(client, date="2026-10-25", description="Minggu")
    _add(client, date="2026-10-26", description="Minggu depan")
    _add(client, kind="income", category="bonus", amount=1_000_000, date="2026-10-20")

    response = client.get("/v1/transactions")

    assert response.status_code == 200
    data = response.json()
    assert data["week"]["offset"] == 0
    assert data["week"]["start"] == "2026-10-19T00:00:00"
    assert data["week"]["end"].startswith("2026-10-25T23:59:59.999")
    assert data["income"] == 1_000_000
    assert data["expense"] == 100_000
    assert [t["description"] for t in data["transactions"]] == ["Minggu", "Makan siang", "Senin"]


def test_list_other_week_by_offset(client: TestClient):
    _add(client, date="2026-10-26", description="Minggu depan")

    data = client.get("/v1/transactions", params={"week_offset": 1}).json()

    assert data["week"]["start"] == "2026-10-26T00:00:00"
    assert [t["description"] for t in data["transactions"]] == ["Minggu depan"]


def test_week_shift_and_reset(client: TestClient):
    """Test POST /v1/transactions/week moves the browsed week"""
    _add(client, date="2026-10-14", description="Minggu lalu")

    response = client.post("/v1/transactions/week", json={"delta": -1})
    assert response.status_code == 200
    assert response.json()["offset"] == -1
    assert response.json()["start"] == "2026-10-12T00:00:00"

    data = client.get("/v1/transactions").json()
    assert [t["description"] for t in data["transactions"]] == ["Minggu lalu"]

    response = client.post("/v1/transactions/week", json={"reset": True})
    assert response.json()["offset"] == 0
    assert client.get("/v1/transactions").json()["transactions"] == []


def test_recent_transactions(client: TestClient):
    for day in range(19, 26):
        _add(client, date=f"2026-10-{day}", description=f"Hari {day}")

    data = client.get("/v1/transactions/recent").json()
    assert [t["description"] for t in data] == ["Hari 25", "Hari 24", "Hari 23", "Hari 22", "Hari 21"]

    assert len(client.get("/v1/transactions/recent", params={"limit": 2}).json()) == 2
    assert client.get("/v1/transactions/recent", params={"limit": 0}).json() == []


def test_delete_transaction(client: TestClient):
    """Test DELETE removes the entry and an unknown id is not an error"""
    kept = _add(client, description="Tetap")
    gone = _add(client, description="Hapus")

    assert client.delete(f"/v1/transactions/{gone['id']}").status_code == 204
    assert client.delete("/v1/transactions/123").status_code == 204

    remaining = client.get("/v1/transactions").json()["transactions"]
    assert [t["id"] for t in remaining] == [kept["id"]]


def test_dashboard_summary(client: TestClient):
    """Test GET /v1/dashboard totals the current week and balances all time"""
    _add(client, kind="income", category="gaji", amount=8_000_000, date="2026-10-12")
    _add(client, kind="income", category="freelance", amount=1_500_000, date="2026-10-19")
    _add(client, amount=400_000, category="tagihan", date="2026-10-21")
    _add(client, amount=120_000, category="hiburan", date="2026-10-25")

    response = client.get("/v1/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert data["income"] == 1_500_000
    assert data["expense"] == 520_000
    assert data["balance"] == 8_980_000
    assert data["emergency"] is None
    assert data["series"]["days"][0] == "2026-10-19"
    assert data["series"]["income"] == [1_500_000, 0, 0, 0, 0, 0, 0]
    assert data["series"]["expense"] == [0, 0, 400_000, 0, 0, 0, 120_000]
    assert len(data["recent"]) == 4


def test_empty_dashboard(client: TestClient):
    data = client.get("/v1/dashboard").json()

    assert data["balance"] == 0
    assert data["recent"] == []
    assert data["series"]["expense"] == [0] * 7


def test_emergency_fund_calculation(client: TestClient):
    """Test POST /v1/emergency-fund sizes and stores the fund"""
    response = client.post(
        "/v1/emergency-fund",
        json={"monthly_expense": "5.000.000", "household_status": "single", "current_savings": 10_000_000},
    )

    assert response.status_code == 200
    fund = response.json()["fund"]
    assert fund["target"] == 30_000_000
    assert fund["shortfall"] == 20_000_000
    assert fund["percentage"] == pytest.approx(33.33, abs=0.01)
    assert [p["months"] for p in fund["savings_plan"]] == [12, 24]

    codes = [r["code"] for r in response.json()["recommendations"]]
    assert codes == ["needs_improvement", "single_tip", "allocation_strategy"]

    stored = client.get("/v1/emergency-fund").json()
    assert stored["target"] == 30_000_000
    assert client.get("/v1/dashboard").json()["emergency"]["current"] == 10_000_000


def test_emergency_fund_unknown_status_counts_as_single(client: TestClient):
    response = client.post(
        "/v1/emergency-fund",
        json={"monthly_expense": 1_000_000, "household_status": "lajang"},
    )

    assert response.status_code == 200
    assert response.json()["fund"]["months"] == 6


def test_emergency_fund_not_calculated(client: TestClient):
    assert client.get("/v1/emergency-fund").status_code == 404


def test_investment_projection(client: TestClient):
    """Test POST /v1/investment/projection"""
    response = client.post(
        "/v1/investment/projection",
        json={
            "initial_investment": 0,
            "monthly_investment": 1_000_000,
            "annual_return_rate": 0.08,
            "horizon_years": 10,
            "annual_inflation_rate": 0.03,
        },
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total_invested"] == 120_000_000
    assert data["final_value"] == pytest.approx(184_166_000, rel=1e-4)
    assert data["real_value"] == pytest.approx(data["final_value"] / 1.03**10)
    assert len(data["yearly_schedule"]) == 10
    assert data["yearly_schedule"][-1]["balance"] == pytest.approx(data["final_value"])
    assert data["growth"][0] == {"year": 0, "invested": 0, "value": 0.0}
    assert data["recommendations"][0]["code"] == "moderate_strategy"


@pytest.mark.parametrize(
    "overrides",
    [{"horizon_years": 0}, {"annual_return_rate": -1.0}, {"annual_return_rate": 1.5}, {"monthly_investment": -1}],
)
def test_investment_projection_validation(client: TestClient, overrides):
    body = {"monthly_investment": 1_000_000, "annual_return_rate": 0.08, "horizon_years": 10}
    body.update(overrides)

    assert client.post("/v1/investment/projection", json=body).status_code == 422


def test_market_quotes_live_crypto(app, client: TestClient):
    quotes = [
        CryptoQuote("BTC", 100_000.0, 1.0, "coingecko"),
        CryptoQuote("ETH", 4_000.0, -2.0, "coingecko"),
    ]
    app.dependency_overrides[get_crypto_client] = lambda: StubCryptoClient(quotes=quotes)

    response = client.get("/v1/market/quotes")

    assert response.status_code == 200
    data = response.json()
    assert len(data["stocks"]) == 12
    assert [c["source"] for c in data["crypto"]] == ["coingecko", "coingecko"]
    assert data["status"] in {"open", "pre_market", "after_hours", "closed"}
    assert data["spy"]["sentiment"] in {
        "bullish",
        "slightly_bullish",
        "neutral",
        "slightly_bearish",
        "bearish",
    }
    assert data["refresh_after_seconds"] > 0


def test_market_quotes_fall_back_to_mock_crypto(app, client: TestClient):
    """Test a crypto API failure still returns a full ticker"""
    app.dependency_overrides[get_crypto_client] = lambda: StubCryptoClient(error=MarketDataError("down"))

    response = client.get("/v1/market/quotes")

    assert response.status_code == 200
    assert [c["source"] for c in response.json()["crypto"]] == ["mock", "mock"]
    assert "finance_market_fallback_total" in client.get("/metrics").text


def test_market_quotes_walk_between_refreshes(app, client: TestClient):
    app.dependency_overrides[get_crypto_client] = lambda: StubCryptoClient(error=MarketDataError("down"))

    first = {q["symbol"]: q for q in client.get("/v1/market/quotes").json()["stocks"]}
    second = {q["symbol"]: q for q in client.get("/v1/market/quotes").json()["stocks"]}

    assert second["SPY"]["prev_close"] == first["SPY"]["prev_close"]


def test_state_round_trip(client: TestClient):
    """Test the session exports and re-imports in page-storage layout"""
    _add(client, description="Kopi")
    client.post("/v1/emergency-fund", json={"monthly_expense": 2_000_000, "household_status": "married"})

    snapshot = client.get("/v1/state").json()
    assert snapshot["transactions"][0]["type"] == "expense"
    assert snapshot["emergencyFundData"]["target"] == 18_000_000

    assert client.put("/v1/state", json={}).status_code == 200
    assert client.get("/v1/state").json() == {"transactions": [], "emergencyFundData": None}

    restored = client.put("/v1/state", json=snapshot)
    assert restored.status_code == 200
    assert client.get("/v1/dashboard").json()["balance"] == -50_000
    assert client.get("/v1/emergency-fund").json()["target"] == 18_000_000


def test_state_import_page_storage_records(client: TestClient):
    response = client.put(
        "/v1/state",
        json={
            "transactions": [
                {
                    "id": 1760832000000,
                    "type": "income",
                    "category": "gaji",
                    "amount": "6.000.000",
                    "description": "Gaji",
                    "date": "2026-10-20",
                }
            ],
            "emergencyFundData": {"target": 36_000_000, "current": 9_000_000},
        },
    )

    assert response.status_code == 200
    data = client.get("/v1/dashboard").json()
    assert data["income"] == 6_000_000
    assert data["emergency"]["percentage"] == 25.0


def test_state_import_rejects_malformed_record(client: TestClient):
    response = client.put("/v1/state", json={"transactions": [{"id": 1, "type": "gift"}]})
    assert response.status_code == 422


def test_state_import_rejects_category_of_other_kind(client: TestClient):
    response = client.put(
        "/v1/state",
        json={
            "transactions": [
                {"id": 1, "type": "income", "category": "makanan", "amount": 1000, "date": "2026-10-20"}
            ]
        },
    )

    assert response.status_code == 422
    assert client.get("/v1/state").json()["transactions"] == []


def test_investment_projection_accepts_negative_return(client: TestClient):
    response = client.post(
        "/v1/investment/projection",
        json={"monthly_investment": 1_000_000, "annual_return_rate": -0.05, "horizon_years": 3},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["total_invested"] == 36_000_000
    assert data["final_value"] < data["total_invested"]
    assert data["roi"] < 0
