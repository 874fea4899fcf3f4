from __future__ import annotations

import json
import logging
from http.client import HTTPException
from urllib.error import HTTPError
from urllib.request import Request, urlopen

from pydantic import ValidationError

from signaldesk.config.settings import Settings, settings
from signaldesk.errors import UpstreamUnavailableError
from signaldesk.schemas.signal import ChatCompletion, SignalResult

logger = logging.getLogger(__name__)

_PROVIDER = "openai"
_COMPLETIONS_PATH = "/v1/chat/completions"

DEFAULT_TICKER = "VNINDEX"
DEFAULT_SIGNAL = "No signal"
SYSTEM_PROMPT = (
    "You are an expert Vietnamese stock trading assistant. "
    "Provide BUY, SELL, or HOLD signals briefly."
)


def normalize_ticker(ticker: str | None) -> str:
    if not ticker:
        return DEFAULT_TICKER
    return ticker


def build_request_body(ticker: str, model: str) -> dict:
    return {
        "model": model,
        "messages": [
            {"role": "system", "content": SYSTEM_PROMPT},
            {
                "role": "user",
                "content": f"Analyze {ticker} and give a short recommendation.",
            },
        ],
    }


def parse_content(body: str) -> str | None:
    try:
        completion = ChatCompletion.model_validate_json(body)
    except ValidationError:
        return None
    return completion.first_content()


def _read_error_body(exc: HTTPError) -> str:
    try:
        with exc:
            raw = exc.read()
    except (OSError, HTTPException):
        return ""
    # HTTPError built without a body reads from an empty StringIO.
    if isinstance(raw, str):
        return raw
    return raw.decode("utf-8", errors="replace")


def fetch_signal(ticker: str | None, config: Settings | None = None) -> SignalResult:
    config = config or settings
    ticker = normalize_ticker(ticker)
    api_key = config.providers.openai_api_key
    if not api_key:
        logger.warning("OpenAI API key is not configured, returning default signal")
        return SignalResult(ticker=ticker, signal=DEFAULT_SIGNAL, status="missing_key")

    url = f"{config.providers.openai_base_url.rstrip('/')}{_COMPLETIONS_PATH}"
    data = json.dumps(build_request_body(ticker, config.providers.openai_model))
    request = Request(
        url,
        data=data.encode("utf-8"),
        method="POST",
        headers={
            "Content-Type": "application/json",
            "Authorization": f"Bearer {api_key}",
        },
    )
    try:
        with urlopen(request, timeout=config.providers.upstream_timeout_seconds) as response:
            body = response.read().decode("utf-8")
    except HTTPError as exc:
        status = "rate_limited" if exc.code == 429 else "error"
        logger.warning("OpenAI returned HTTP %s for %s", exc.code, ticker)
        content = parse_content(_read_error_body(exc))
        return SignalResult(ticker=ticker, signal=content or DEFAULT_SIGNAL, status=status)
    except (OSError, HTTPException) as exc:
        raise UpstreamUnavailableError(_PROVIDER, repr(exc)) from exc
    except UnicodeDecodeError:
        return SignalResult(ticker=ticker, signal=DEFAULT_SIGNAL, status="invalid")

    content = parse_content(body)
    if content is None:
        return SignalResult(ticker=ticker, signal=DEFAULT_SIGNAL, status="invalid")
    return SignalResult(ticker=ticker, signal=content, status="ok")
