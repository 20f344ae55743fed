"""Ticker strip market data - mocked random-walk quotes, US session hours, SPY outlook"""

import random
from datetime import datetime, time, timezone
from typing import Dict, List, Optional
from zoneinfo import ZoneInfo

from finance_dashboard.domain.models import CryptoQuote, MarketStatus, Quote, Sentiment, SpyOutlook
from finance_dashboard.utils.math_utils import safe_ratio

US_SYMBOLS = ("SPY", "QQQ", "AAPL", "MSFT", "NVDA", "GOOGL")
ID_SYMBOLS = ("IHSG", "BBCA", "BBRI", "TLKM", "ASII", "GOTO")

BASE_PRICES = {
    "SPY": 607.50,
    "QQQ": 525.75,
    "AAPL": 248.50,
    "MSFT": 448.20,
    "NVDA": 138.50,
    "GOOGL": 187.40,
    "IHSG": 7285,
    "BBCA": 10125,
    "BBRI": 4650,
    "TLKM": 2820,
    "ASII": 4850,
    "GOTO": 84,
}

# Daily volatility as a fraction of the base price
VOLATILITY = {
    "SPY": 0.008,
    "QQQ": 0.01,
    "AAPL": 0.012,
    "MSFT": 0.011,
    "NVDA": 0.025,
    "GOOGL": 0.013,
    "IHSG": 0.008,
    "BBCA": 0.012,
    "BBRI": 0.015,
    "TLKM": 0.01,
    "ASII": 0.012,
    "GOTO": 0.03,
}

DEFAULT_BASE_PRICE = 100.0
DEFAULT_VOLATILITY = 0.01
IDX_TICK_SIZE = 25

NEW_YORK = ZoneInfo("America/New_York")
PRE_MARKET_START = time(4, 0)
MARKET_OPEN = time(9, 30)
MARKET_CLOSE = time(16, 0)
AFTER_HOURS_END = time(20, 0)


def _round_to_tick(symbol: str, price: float) -> float:
    # IDX prices move in 25-rupiah ticks; sub-100 stocks like GOTO tick by 1
    if symbol == "GOTO":
        return float(round(price))
    return float(round(price / IDX_TICK_SIZE) * IDX_TICK_SIZE)


class MockQuoteGenerator:
    """
    Random-walk quote source for the ticker strip.

    Holds the last quote per symbol: the first quote scatters around the
    base price, later quotes walk from the last price while keeping the
    previous close fixed.
    """

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()
        self._last: Dict[str, Quote] = {}

    def _jitter(self) -> float:
        return self.rng.random() - 0.5

    def last_quote(self, symbol: str) -> Optional[Quote]:
        return self._last.get(symbol)

    def quote(self, symbol: str, market: str = "US") -> Quote:
        base = BASE_PRICES.get(symbol, DEFAULT_BASE_PRICE)
        vol = VOLATILITY.get(symbol, DEFAULT_VOLATILITY)

        cached = self._last.get(symbol)
        if cached is not None:
            price = cached.price + self._jitter() * base * vol
            prev_close = cached.prev_close
        else:
            price = base + self._jitter() * base * vol * 2
            prev_close = base - self._jitter() * base * vol

        is_id = market == "ID"
        if is_id:
            price = _round_to_tick(symbol, price)
            prev_close = _round_to_tick(symbol, prev_close)

        change = price - prev_close
        day_range = abs(change) + base * vol

        quote = Quote(
            symbol=symbol,
            market=market,
            currency="IDR" if is_id else "USD",
            price=price,
            change=change,
            change_percent=safe_ratio(change, prev_close) * 100,
            open=prev_close + self._jitter() * base * vol,
            high=max(price, prev_close) + self.rng.random() * day_range,
            low=min(price, prev_close) - self.rng.random() * day_range,
            prev_close=prev_close,
            volume=self.rng.randrange(10_000_000, 60_000_000),
            fifty_two_week_high=base * 1.15,
            fifty_two_week_low=base * 0.85,
        )
        self._last[symbol] = quote
        return quote

    def refresh(self) -> List[Quote]:
        """One tick of the whole strip: US symbols, then IDX symbols"""
        quotes = [self.quote(symbol, "US") for symbol in US_SYMBOLS]
        quotes.extend(self.quote(symbol, "ID") for symbol in ID_SYMBOLS)
        return quotes


def mock_crypto_quotes(rng: random.Random) -> List[CryptoQuote]:
    """Fallback BTC/ETH prices when the live API is unreachable"""
    return [
        CryptoQuote("BTC", 101_500 + (rng.random() - 0.5) * 2000, (rng.random() - 0.5) * 4, "mock"),
        CryptoQuote("ETH", 3_950 + (rng.random() - 0.5) * 100, (rng.random() - 0.5) * 5, "mock"),
    ]


def market_status(now: datetime) -> MarketStatus:
    """
    US equity session at `now` (naive datetimes are taken as UTC).

    Weekends are closed; weekdays run pre-market 04:00, regular 09:30-16:00,
    after-hours until 20:00 New York time.
    """
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    local = now.astimezone(NEW_YORK)
    clock = local.time()

    if local.weekday() >= 5:
        return MarketStatus.CLOSED
    if MARKET_OPEN <= clock < MARKET_CLOSE:
        return MarketStatus.OPEN
    if PRE_MARKET_START <= clock < MARKET_OPEN:
        return MarketStatus.PRE_MARKET
    if MARKET_CLOSE <= clock < AFTER_HOURS_END:
        return MarketStatus.AFTER_HOURS
    return MarketStatus.CLOSED


def spy_outlook(quote: Quote) -> SpyOutlook:
    """
    Classify the day's move and the distance from the 52-week high.

    Bands: > 1.5% bullish, > 0.5% slightly bullish, < -1.5% bearish,
    < -0.5% slightly bearish, otherwise neutral. Above 98% of the high is
    "near_high", below 85% is "far_from_high".
    """
    pct = quote.change_percent
    if pct > 1.5:
        sentiment = Sentiment.BULLISH
    elif pct > 0.5:
        sentiment = Sentiment.SLIGHTLY_BULLISH
    elif pct < -1.5:
        sentiment = Sentiment.BEARISH
    elif pct < -0.5:
        sentiment = Sentiment.SLIGHTLY_BEARISH
    else:
        sentiment = Sentiment.NEUTRAL

    price_vs_high = safe_ratio(quote.price, quote.fifty_two_week_high) * 100
    if price_vs_high > 98:
        high_note = "near_high"
    elif price_vs_high < 85:
        high_note = "far_from_high"
    else:
        high_note = None

    return SpyOutlook(
        sentiment=sentiment,
        change_percent=pct,
        price_vs_high=price_vs_high,
        high_note=high_note,
    )
