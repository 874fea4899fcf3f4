from typing import Literal

from pydantic import BaseModel, Field

UpstreamStatus = Literal["ok", "error", "rate_limited", "invalid", "missing_key"]


class UpstreamResult(BaseModel):
    provider: str
    endpoint: str
    cache_key: str
    payload: dict = Field(default_factory=dict)
    status: UpstreamStatus = "ok"
    fallback: bool = False

    @property
    def is_live(self) -> bool:
        return self.status == "ok" and not self.fallback
