from __future__ import annotations

import json
import logging
from collections.abc import Callable
from http.client import HTTPException
from typing import Any
from urllib.error import HTTPError
from urllib.parse import urlencode
from urllib.request import Request, urlopen

from pydantic import BaseModel, ValidationError

from signaldesk.cache import ResultCache
from signaldesk.config.settings import Settings, settings
from signaldesk.errors import UpstreamResponseError
from signaldesk.providers import fallbacks
from signaldesk.schemas.market import (
    CommodityData,
    ExchangeRateData,
    IndexData,
    RatioData,
    StockPriceData,
    TopGainerStock,
    VNDirectResponse,
    WorldIndexData,
)
from signaldesk.schemas.provider import UpstreamResult

logger = logging.getLogger(__name__)

_PROVIDER = "vndirect"
_HEADERS = {
    "Accept": "application/json",
    "User-Agent": "Mozilla/5.0",
}
# The price history endpoint rejects clients that do not look like dstock.
_BROWSER_HEADERS = {
    "Accept": "application/json",
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
    ),
    "Accept-Language": "vi-VN,vi;q=0.9,en-US;q=0.8,en;q=0.7",
    "Referer": "https://dstock.vndirect.com.vn/",
    "Origin": "https://dstock.vndirect.com.vn",
}

_CHANGE_PRICES_PATH = "/v4/change_prices"
_CURRENCIES_PATH = "/v4/currencies/latest"
_TOP_STOCKS_PATH = "/v4/top_stocks"
_STOCK_PRICES_PATH = "/v4/stock_prices"
_RATIOS_PATH = "/v4/ratios/latest"

COMMODITY_CODES = "SPOT_GOLDS,GEN1ST_BRENT_OIL"
INDEX_CODES = "VNINDEX,HNX,UPCOM,VN30,VN30F1M"
WORLD_INDEX_CODES = "DOWJONES,NASDAQ,NIKKEI225,SHANGHAI,HANGSENG,FTSE100,DAX"
EXCHANGE_RATE_CODES = "USD_VND,EUR_VND,CNY_VND,JPY_VND,EUR_USD,USD_JPY,USD_CNY"
TOP_GAINERS_QUERY = (
    "index:VNIndex~lastPrice:gte:6~nmVolumeAvgCr20D:gte:100000~priceChgPctCr1D:gt:0"
)
DEFAULT_STOCK_PRICES_SIZE = 270
RATIO_CODES = (
    "MARKETCAP",
    "PE",
    "PB",
    "PS",
    "BETA",
    "EPS",
    "BVPS",
    "ROAE",
    "ROAA",
    "DIVIDEND",
    "PAYOUTRATIO",
    "EBITDA",
    "EVEBITDA",
    "DEBTEQUITY",
    "QUICKRATIO",
    "CURRENTRATIO",
    "GROSSPROFITMARGIN",
    "NETPROFITMARGIN",
    "ASSETTURNOVER",
    "INVENTORYTURNOVER",
)


def build_url(base_url: str, path: str, params: dict[str, str] | None = None) -> str:
    url = f"{base_url.rstrip('/')}{path}"
    if params:
        url = f"{url}?{urlencode(params, safe=':,~')}"
    return url


def fetch_json(url: str, timeout: float, headers: dict[str, str] | None = None) -> Any:
    request = Request(url, headers=headers or _HEADERS)
    with urlopen(request, timeout=timeout) as response:
        body = response.read().decode("utf-8")
    return json.loads(body)


def fetch_validated(
    url: str,
    schema: type[BaseModel],
    timeout: float,
    headers: dict[str, str] | None = None,
) -> Any:
    """Fetch ``url`` and check it against ``schema``.

    Every failure mode, from transport errors and malformed HTTP to bodies
    that do not match the schema, surfaces as ``UpstreamResponseError``.
    The decoded payload is returned untouched.
    """
    try:
        payload = fetch_json(url, timeout, headers)
    except HTTPError as exc:
        status = "rate_limited" if exc.code == 429 else "error"
        raise UpstreamResponseError(_PROVIDER, status, f"HTTP {exc.code}") from exc
    except (OSError, HTTPException, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise UpstreamResponseError(_PROVIDER, "error", repr(exc)) from exc

    try:
        schema.model_validate(payload)
    except ValidationError as exc:
        raise UpstreamResponseError(
            _PROVIDER, "invalid", f"{exc.error_count()} schema errors"
        ) from exc
    return payload


def fetch_with_fallback(
    endpoint: str,
    path: str,
    params: dict[str, str],
    schema: type[BaseModel],
    fallback_factory: Callable[[], dict],
    config: Settings | None = None,
    *,
    cache_key: str | None = None,
    ttl_seconds: int | None = None,
    headers: dict[str, str] | None = None,
) -> UpstreamResult:
    config = config or settings
    cache_key = cache_key or f"{_PROVIDER}:{endpoint}"
    if ttl_seconds is None:
        ttl_seconds = config.market_cache_ttl_seconds
    cache = ResultCache(config.redis_url, ttl_seconds)
    cached = cache.get(cache_key)
    if cached:
        return cached

    url = build_url(config.providers.vndirect_base_url, path, params)
    try:
        payload = fetch_validated(
            url, schema, config.providers.upstream_timeout_seconds, headers
        )
    except UpstreamResponseError as exc:
        logger.warning(
            "VNDirect %s failed (%s), serving fallback data: %s",
            endpoint,
            exc.status,
            exc.reason,
        )
        return UpstreamResult(
            provider=_PROVIDER,
            endpoint=endpoint,
            cache_key=cache_key,
            payload=fallback_factory(),
            status=exc.status,
            fallback=True,
        )

    result = UpstreamResult(
        provider=_PROVIDER,
        endpoint=endpoint,
        cache_key=cache_key,
        payload=payload,
        status="ok",
    )
    cache.put(result)
    return result


def fetch_commodities(config: Settings | None = None) -> UpstreamResult:
    return fetch_with_fallback(
        "commodities",
        _CHANGE_PRICES_PATH,
        {"q": f"period:1D~code:{COMMODITY_CODES}"},
        VNDirectResponse[CommodityData],
        fallbacks.commodities,
        config,
    )


def fetch_indices(config: Settings | None = None) -> UpstreamResult:
    return fetch_with_fallback(
        "indices",
        _CHANGE_PRICES_PATH,
        {"q": f"code:{INDEX_CODES}~period:1D"},
        VNDirectResponse[IndexData],
        fallbacks.indices,
        config,
    )


def fetch_world_indices(config: Settings | None = None) -> UpstreamResult:
    return fetch_with_fallback(
        "world-indices",
        _CHANGE_PRICES_PATH,
        {"q": f"period:1D~code:{WORLD_INDEX_CODES}"},
        VNDirectResponse[WorldIndexData],
        fallbacks.world_indices,
        config,
    )


def fetch_exchange_rates(config: Settings | None = None) -> UpstreamResult:
    return fetch_with_fallback(
        "exchange-rates",
        _CURRENCIES_PATH,
        {
            "order": "tradingDate",
            "where": "locale:VN",
            "filter": f"code:{EXCHANGE_RATE_CODES}",
        },
        VNDirectResponse[ExchangeRateData],
        fallbacks.exchange_rates,
        config,
    )


def fetch_top_gainers(config: Settings | None = None) -> UpstreamResult:
    return fetch_with_fallback(
        "top-gainers",
        _TOP_STOCKS_PATH,
        {"q": TOP_GAINERS_QUERY, "size": "10", "sort": "priceChgPctCr1D"},
        VNDirectResponse[TopGainerStock],
        fallbacks.top_gainers,
        config,
    )


def fetch_stock_prices(
    code: str,
    size: int = DEFAULT_STOCK_PRICES_SIZE,
    config: Settings | None = None,
) -> UpstreamResult:
    config = config or settings
    code = code.upper()
    return fetch_with_fallback(
        "stock-prices",
        _STOCK_PRICES_PATH,
        {"sort": "date:desc", "q": f"code:{code}", "size": str(size)},
        VNDirectResponse[StockPriceData],
        lambda: fallbacks.stock_prices(code, size),
        config,
        cache_key=f"{_PROVIDER}:stock-prices:{code}:{size}",
        ttl_seconds=config.stock_prices_cache_ttl_seconds,
        headers=_BROWSER_HEADERS,
    )


def fetch_ratios(code: str, config: Settings | None = None) -> UpstreamResult:
    """Latest financial ratios for ``code``.

    There is no fallback for ratios: failures raise ``UpstreamResponseError``.
    """
    config = config or settings
    code = code.upper()
    cache_key = f"{_PROVIDER}:ratios:{code}"
    cache = ResultCache(config.redis_url, config.ratios_cache_ttl_seconds)
    cached = cache.get(cache_key)
    if cached:
        return cached

    url = build_url(
        config.providers.vndirect_base_url,
        _RATIOS_PATH,
        {
            "filter": ",".join(f"ratioCode:{ratio}" for ratio in RATIO_CODES),
            "where": f"code:{code}",
        },
    )
    try:
        payload = fetch_validated(
            url, VNDirectResponse[RatioData], config.providers.upstream_timeout_seconds
        )
    except UpstreamResponseError as exc:
        logger.error("VNDirect ratios for %s failed (%s): %s", code, exc.status, exc.reason)
        raise

    result = UpstreamResult(
        provider=_PROVIDER,
        endpoint="ratios",
        cache_key=cache_key,
        payload=payload,
        status="ok",
    )
    cache.put(result)
    return result
