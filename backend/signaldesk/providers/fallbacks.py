"""Static market payloads served when VNDirect cannot be reached.

Quote prices are fixed and timestamps are generated on every call so the
payload looks current to the widgets consuming it. Stock price history is
synthesised per request.
"""

from __future__ import annotations

import datetime
import random


def _now() -> datetime.datetime:
    return datetime.datetime.now(datetime.UTC)


def _iso_timestamp(moment: datetime.datetime) -> str:
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def commodities() -> dict:
    last_updated = _iso_timestamp(_now())
    return {
        "data": [
            {
                "code": "SPOT_GOLDS",
                "lastPrice": 1945.50,
                "lastUpdated": last_updated,
                "priceChgCr1D": 12.30,
                "priceChgPctCr1D": 0.64,
                "unit": "USD/oz",
            },
            {
                "code": "GEN1ST_BRENT_OIL",
                "lastPrice": 85.67,
                "lastUpdated": last_updated,
                "priceChgCr1D": -1.25,
                "priceChgPctCr1D": -1.44,
                "unit": "USD/barrel",
            },
        ]
    }


def indices() -> dict:
    last_updated = _iso_timestamp(_now())
    return {
        "data": [
            {
                "code": "VNINDEX",
                "lastPrice": 1250.45,
                "lastUpdated": last_updated,
                "priceChgCr1D": 5.23,
                "priceChgPctCr1D": 0.42,
                "highPrice": 1255.30,
                "lowPrice": 1245.10,
                "openPrice": 1247.20,
            },
            {
                "code": "HNX",
                "lastPrice": 235.67,
                "lastUpdated": last_updated,
                "priceChgCr1D": -2.15,
                "priceChgPctCr1D": -0.90,
                "highPrice": 238.50,
                "lowPrice": 234.20,
                "openPrice": 237.80,
            },
        ]
    }


def world_indices() -> dict:
    last_updated = _iso_timestamp(_now())
    return {
        "data": [
            {
                "code": "DOWJONES",
                "lastPrice": 34567.89,
                "lastUpdated": last_updated,
                "priceChgCr1D": 125.45,
                "priceChgPctCr1D": 0.36,
            },
            {
                "code": "NASDAQ",
                "lastPrice": 13567.23,
                "lastUpdated": last_updated,
                "priceChgCr1D": -45.67,
                "priceChgPctCr1D": -0.34,
            },
        ]
    }


def exchange_rates() -> dict:
    trading_date = _now().date().isoformat()
    return {
        "data": [
            {
                "code": "USD_VND",
                "codeName": "Tỷ giá USD/VND",
                "tradingDate": trading_date,
                "openPrice": 26366.0,
                "highPrice": 26383.0,
                "lowPrice": 26366.0,
                "closePrice": 26371.0,
                "change": 5.0,
                "changePct": 0.019,
                "locale": "VN",
            },
            {
                "code": "EUR_VND",
                "codeName": "Tỷ giá EUR/VND",
                "tradingDate": trading_date,
                "openPrice": 30378.0,
                "highPrice": 30553.0,
                "lowPrice": 30367.0,
                "closePrice": 30512.0,
                "change": 134.0,
                "changePct": 0.4411,
                "locale": "VN",
            },
        ]
    }


def top_gainers() -> dict:
    last_updated = _iso_timestamp(_now())
    return {
        "data": [
            {
                "code": "HPG",
                "index": "VNINDEX",
                "lastPrice": 28.5,
                "lastUpdated": last_updated,
                "priceChgCr1D": 1.8,
                "priceChgPctCr1D": 6.74,
                "accumulatedVal": 450000000000,
                "nmVolumeAvgCr20D": 15000000,
            },
            {
                "code": "VNM",
                "index": "VNINDEX",
                "lastPrice": 85.2,
                "lastUpdated": last_updated,
                "priceChgCr1D": 5.3,
                "priceChgPctCr1D": 6.62,
                "accumulatedVal": 380000000000,
                "nmVolumeAvgCr20D": 8500000,
            },
        ]
    }


def stock_prices(code: str, size: int, rng: random.Random | None = None) -> dict:
    """Random daily candles for ``code``, oldest first, ending today."""
    rng = rng or random.Random()
    code = code.upper()
    base_price = 80000 + rng.random() * 20000
    day = _now().date()

    candles = []
    for _ in range(size):
        open_price = base_price + (rng.random() - 0.5) * 4000
        close = open_price + (rng.random() - 0.5) * 2000
        high = max(open_price, close) + rng.random() * 1000
        low = min(open_price, close) - rng.random() * 1000
        change = close - open_price
        candles.append(
            {
                "date": day.isoformat(),
                "open": round(open_price, 2),
                "high": round(high, 2),
                "low": round(low, 2),
                "close": round(close, 2),
                "adOpen": round(open_price, 2),
                "adHigh": round(high, 2),
                "adLow": round(low, 2),
                "adClose": round(close, 2),
                "adAverage": round((open_price + close) / 2, 2),
                "nmVolume": rng.randrange(1_000_000, 11_000_000),
                "nmValue": rng.randrange(100_000_000_000, 600_000_000_000),
                "ptVolume": 0,
                "ptValue": 0,
                "change": round(change, 2),
                "pctChange": round(change / open_price * 100, 2),
                "adChange": round(change, 2),
                "code": code,
            }
        )
        day -= datetime.timedelta(days=1)

    candles.reverse()
    return {
        "data": candles,
        "currentPage": 1,
        "size": size,
        "totalElements": size,
    }
