import datetime

from fastapi import APIRouter, Depends, Query, Response, status
from fastapi.responses import JSONResponse

from signaldesk.config.settings import Settings, get_settings
from signaldesk.errors import InvalidRequestError, UpstreamResponseError
from signaldesk.providers import openai, vndirect
from signaldesk.schemas.provider import UpstreamResult
from signaldesk.schemas.signal import SignalResponse

router = APIRouter()

UPSTREAM_STATUS_HEADER = "X-Upstream-Status"
MOCK_DATA_HEADER = "X-Mock-Data"
STOCK_PRICES_CACHE_CONTROL = "public, s-maxage=120, stale-while-revalidate=240"
RATIOS_CACHE_CONTROL = "public, s-maxage=3600, stale-while-revalidate=7200"


def _market_response(result: UpstreamResult, response: Response) -> dict:
    response.headers[UPSTREAM_STATUS_HEADER] = result.status
    return result.payload


@router.get("/health")
def health(config: Settings = Depends(get_settings)) -> dict:
    return {
        "status": "ok",
        "timestamp": datetime.datetime.now(datetime.UTC).isoformat(),
        "providers": {
            "openai": {"configured": bool(config.providers.openai_api_key)},
            "vndirect": {"base_url": config.providers.vndirect_base_url},
        },
    }


@router.get("/ai-signal", response_model=SignalResponse)
def ai_signal(
    response: Response,
    ticker: str | None = None,
    config: Settings = Depends(get_settings),
) -> SignalResponse:
    result = openai.fetch_signal(ticker, config)
    response.headers[UPSTREAM_STATUS_HEADER] = result.status
    return result.to_response()


@router.get("/market/commodities")
def market_commodities(
    response: Response, config: Settings = Depends(get_settings)
) -> dict:
    return _market_response(vndirect.fetch_commodities(config), response)


@router.get("/market/indices")
def market_indices(response: Response, config: Settings = Depends(get_settings)) -> dict:
    return _market_response(vndirect.fetch_indices(config), response)


@router.get("/market/world-indices")
def market_world_indices(
    response: Response, config: Settings = Depends(get_settings)
) -> dict:
    return _market_response(vndirect.fetch_world_indices(config), response)


@router.get("/market/exchange-rates")
def market_exchange_rates(
    response: Response, config: Settings = Depends(get_settings)
) -> dict:
    return _market_response(vndirect.fetch_exchange_rates(config), response)


@router.get("/market/top-gainers")
def market_top_gainers(
    response: Response, config: Settings = Depends(get_settings)
) -> dict:
    return _market_response(vndirect.fetch_top_gainers(config), response)


def _require_code(code: str | None) -> str:
    if not code:
        raise InvalidRequestError("Missing stock code parameter")
    return code


@router.get("/vndirect/stock-prices")
def vndirect_stock_prices(
    response: Response,
    code: str | None = None,
    size: int = Query(vndirect.DEFAULT_STOCK_PRICES_SIZE, ge=1),
    config: Settings = Depends(get_settings),
) -> dict:
    result = vndirect.fetch_stock_prices(_require_code(code), size, config)
    response.headers["Cache-Control"] = STOCK_PRICES_CACHE_CONTROL
    if result.fallback:
        response.headers[MOCK_DATA_HEADER] = "true"
    return _market_response(result, response)


@router.get("/vndirect/ratios")
def vndirect_ratios(
    response: Response,
    code: str | None = None,
    config: Settings = Depends(get_settings),
):
    code = _require_code(code)
    try:
        result = vndirect.fetch_ratios(code, config)
    except UpstreamResponseError as exc:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch financial ratios", "details": exc.reason},
            headers={UPSTREAM_STATUS_HEADER: exc.status},
        )
    response.headers["Cache-Control"] = RATIOS_CACHE_CONTROL
    return _market_response(result, response)
