"""GET /v1/market/quotes - ticker strip data"""

import logging
from dataclasses import asdict
from datetime import datetime, timezone

from fastapi import APIRouter, Depends, Request

from finance_dashboard.api.dependencies import get_crypto_client, get_quote_generator, get_request_id
from finance_dashboard.api.v1.schemas import CryptoQuoteSchema, MarketResponse, QuoteSchema, SpyOutlookSchema
from finance_dashboard.config import settings
from finance_dashboard.domain.exceptions import MarketDataError
from finance_dashboard.domain.market import MockQuoteGenerator, market_status, mock_crypto_quotes, spy_outlook
from finance_dashboard.infrastructure.clients.crypto import CryptoClient
from finance_dashboard.infrastructure.observability.metrics import market_fallback_counter

router = APIRouter()


@router.get("/market/quotes", response_model=MarketResponse)
async def get_market_quotes(
    request: Request,
    generator: MockQuoteGenerator = Depends(get_quote_generator),
    crypto_client: CryptoClient = Depends(get_crypto_client),
):
    """
    Advance the ticker one tick.

    Flow:
    1. Walk every stock/index quote one step from its last price
    2. Fetch live BTC/ETH prices, falling back to mock prices on failure
    3. Read the US session status and the SPY outlook
    """
    request_id = get_request_id(request)
    now = datetime.now(timezone.utc)

    stocks = generator.refresh()

    try:
        crypto = await crypto_client.get_prices()
    except MarketDataError as e:
        market_fallback_counter.labels(source="crypto").inc()
        logging.warning(f"Crypto prices unavailable, using mock data: {e}", extra={"request_id": request_id})
        crypto = mock_crypto_quotes(generator.rng)

    spy = generator.last_quote("SPY")

    return MarketResponse(
        updated_at=now,
        status=market_status(now),
        stocks=[QuoteSchema(**asdict(q)) for q in stocks],
        crypto=[CryptoQuoteSchema(**asdict(c)) for c in crypto],
        spy=SpyOutlookSchema(**asdict(spy_outlook(spy))) if spy else None,
        refresh_after_seconds=settings.market_refresh_seconds,
    )
