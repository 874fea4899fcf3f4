import json

import pytest

from signaldesk.config.settings import ProviderSettings, Settings


class FakeUpstreamResponse:
    def __init__(self, body: bytes, status: int = 200) -> None:
        self.body = body
        self.status = status

    def read(self) -> bytes:
        return self.body

    def __enter__(self) -> "FakeUpstreamResponse":
        return self

    def __exit__(self, *exc_info) -> bool:
        return False


class FakeRedis:
    def __init__(self) -> None:
        self.store: dict[str, str] = {}
        self.expirations: dict[str, int] = {}

    def get(self, key: str) -> str | None:
        return self.store.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self.store[key] = value
        self.expirations[key] = ttl


@pytest.fixture
def config() -> Settings:
    return Settings(
        redis_url="redis://cache.test:6379/0",
        market_cache_ttl_seconds=0,
        stock_prices_cache_ttl_seconds=0,
        ratios_cache_ttl_seconds=0,
        providers=ProviderSettings(
            openai_api_key="test-key",
            openai_base_url="https://ai.test",
            vndirect_base_url="https://market.test",
            upstream_timeout_seconds=2.5,
        ),
    )


@pytest.fixture
def upstream_json():
    def _build(payload, status: int = 200) -> FakeUpstreamResponse:
        return FakeUpstreamResponse(json.dumps(payload).encode("utf-8"), status)

    return _build


@pytest.fixture
def fake_redis(monkeypatch) -> FakeRedis:
    fake = FakeRedis()
    monkeypatch.setattr("signaldesk.cache._get_client", lambda redis_url: fake)
    return fake


@pytest.fixture
def upstream_bytes():
    def _build(body: bytes, status: int = 200) -> FakeUpstreamResponse:
        return FakeUpstreamResponse(body, status)

    return _build
