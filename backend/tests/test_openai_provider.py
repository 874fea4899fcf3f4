import http.client
import io
import json
from unittest.mock import patch
from urllib.error import HTTPError, URLError

import pytest

from signaldesk.errors import UpstreamUnavailableError
from signaldesk.providers import openai


def _completion(content) -> dict:
    return {
        "id": "chatcmpl-1",
        "object": "chat.completion",
        "choices": [
            {"index": 0, "message": {"role": "assistant", "content": content}}
        ],
    }


def test_signal_echoes_ticker_and_content(config, upstream_json) -> None:
    with patch(
        "signaldesk.providers.openai.urlopen",
        return_value=upstream_json(_completion("BUY: breakout above resistance.")),
    ):
        result = openai.fetch_signal("FPT", config)

    assert result.ticker == "FPT"
    assert result.signal == "BUY: breakout above resistance."
    assert result.status == "ok"
    assert result.to_response().model_dump() == {
        "ticker": "FPT",
        "signal": "BUY: breakout above resistance.",
    }


@pytest.mark.parametrize("ticker", [None, ""])
def test_missing_ticker_defaults_to_vnindex(config, upstream_json, ticker) -> None:
    with patch(
        "signaldesk.providers.openai.urlopen",
        return_value=upstream_json(_completion("HOLD")),
    ) as urlopen_mock:
        result = openai.fetch_signal(ticker, config)

    assert result.ticker == "VNINDEX"
    body = json.loads(urlopen_mock.call_args.args[0].data)
    assert body["messages"][1]["content"] == (
        "Analyze VNINDEX and give a short recommendation."
    )


def test_request_shape(config, upstream_json) -> None:
    with patch(
        "signaldesk.providers.openai.urlopen",
        return_value=upstream_json(_completion("SELL")),
    ) as urlopen_mock:
        openai.fetch_signal("HPG", config)

    request = urlopen_mock.call_args.args[0]
    assert request.full_url == "https://ai.test/v1/chat/completions"
    assert request.get_method() == "POST"
    assert request.get_header("Authorization") == "Bearer test-key"
    assert request.get_header("Content-type") == "application/json"
    assert urlopen_mock.call_args.kwargs["timeout"] == 2.5

    body = json.loads(request.data)
    assert body["model"] == "gpt-4o-mini"
    assert body["messages"][0] == {"role": "system", "content": openai.SYSTEM_PROMPT}
    assert body["messages"][1]["role"] == "user"


@pytest.mark.parametrize(
    "payload",
    [
        {},
        {"choices": []},
        {"choices": [{"message": None}]},
        {"choices": [{"message": {"role": "assistant"}}]},
        _completion(""),
        {"error": {"message": "quota exceeded"}},
    ],
)
def test_unusable_content_yields_default_signal(config, upstream_json, payload) -> None:
    with patch(
        "signaldesk.providers.openai.urlopen", return_value=upstream_json(payload)
    ):
        result = openai.fetch_signal("VCB", config)

    assert result.ticker == "VCB"
    assert result.signal == "No signal"
    assert result.status == "invalid"


def test_malformed_body_yields_default_signal(config, upstream_bytes) -> None:
    with patch(
        "signaldesk.providers.openai.urlopen",
        return_value=upstream_bytes(b"upstream exploded"),
    ):
        result = openai.fetch_signal("VCB", config)

    assert result.signal == "No signal"


def test_http_error_yields_default_signal(config) -> None:
    error = HTTPError("https://ai.test", 401, "Unauthorized", None, None)
    with patch("signaldesk.providers.openai.urlopen", side_effect=error):
        result = openai.fetch_signal("MWG", config)

    assert result.signal == "No signal"
    assert result.status == "error"


def test_missing_key_skips_upstream(config) -> None:
    config.providers.openai_api_key = None
    with patch("signaldesk.providers.openai.urlopen") as urlopen_mock:
        result = openai.fetch_signal("MWG", config)

    assert urlopen_mock.called is False
    assert result.signal == "No signal"
    assert result.status == "missing_key"


def test_transport_failure_raises(config) -> None:
    with patch(
        "signaldesk.providers.openai.urlopen", side_effect=URLError("dns failure")
    ):
        with pytest.raises(UpstreamUnavailableError) as exc_info:
            openai.fetch_signal("MWG", config)

    assert exc_info.value.provider == "openai"


@pytest.mark.parametrize("ticker", ["   ", " fpt "])
def test_whitespace_ticker_is_echoed(config, upstream_json, ticker) -> None:
    with patch(
        "signaldesk.providers.openai.urlopen",
        return_value=upstream_json(_completion("HOLD")),
    ):
        result = openai.fetch_signal(ticker, config)

    assert result.ticker == ticker


def test_http_error_body_is_read(config) -> None:
    body = io.BytesIO(json.dumps({"error": {"message": "invalid api key"}}).encode())
    error = HTTPError("https://ai.test", 401, "Unauthorized", None, body)
    with patch("signaldesk.providers.openai.urlopen", side_effect=error):
        result = openai.fetch_signal("MWG", config)

    assert body.closed is True
    assert result.signal == "No signal"
    assert result.status == "error"


def test_http_error_body_with_content_is_used(config) -> None:
    body = io.BytesIO(json.dumps(_completion("SELL on weakness")).encode())
    error = HTTPError("https://ai.test", 500, "Server Error", None, body)
    with patch("signaldesk.providers.openai.urlopen", side_effect=error):
        result = openai.fetch_signal("MWG", config)

    assert result.signal == "SELL on weakness"
    assert result.status == "error"


@pytest.mark.parametrize(
    "failure",
    [
        http.client.IncompleteRead(b""),
        http.client.BadStatusLine("GARBAGE"),
        TimeoutError("timed out"),
    ],
)
def test_malformed_http_raises_unavailable(config, failure) -> None:
    with patch("signaldesk.providers.openai.urlopen", side_effect=failure):
        with pytest.raises(UpstreamUnavailableError):
            openai.fetch_signal("MWG", config)
