"""CoinGecko HTTP client for BTC/ETH ticker prices"""

import httpx
from typing import List, Optional

from finance_dashboard.config import settings
from finance_dashboard.domain.exceptions import MarketDataError
from finance_dashboard.domain.models import CryptoQuote

# Ticker symbol -> CoinGecko coin id
COIN_IDS = {"BTC": "bitcoin", "ETH": "ethereum"}


class CryptoClient:
    """Client for the CoinGecko simple price API"""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = base_url or settings.crypto_api_base
        self.timeout = timeout or settings.http_timeout_seconds
        self.transport = transport

    async def get_prices(self) -> List[CryptoQuote]:
        """
        Fetch USD price and 24h change for the ticker coins.

        Raises:
            MarketDataError: On timeout, HTTP errors, or invalid response
        """
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            try:
                response = await client.get(
                    f"{self.base_url}/simple/price",
                    params={
                        "ids": ",".join(COIN_IDS.values()),
                        "vs_currencies": "usd",
                        "include_24hr_change": "true",
                    },
                )
                response.raise_for_status()
                data = response.json()

                return [
                    CryptoQuote(
                        symbol=symbol,
                        price=float(data[coin_id]["usd"]),
                        change_percent=float(data[coin_id].get("usd_24h_change") or 0),
                        source="coingecko",
                    )
                    for symbol, coin_id in COIN_IDS.items()
                ]

            except httpx.TimeoutException as e:
                raise MarketDataError(f"Crypto API timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise MarketDataError(f"Crypto API error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise MarketDataError(f"Crypto API unreachable: {e}") from e
            except (KeyError, ValueError, TypeError) as e:
                raise MarketDataError(f"Invalid price data from crypto API: {e}") from e
