from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from signaldesk.schemas.provider import UpstreamStatus


class ChatMessage(BaseModel):
    model_config = ConfigDict(extra="ignore")

    role: Optional[str] = None
    content: Optional[str] = None


class ChatChoice(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: Optional[ChatMessage] = None


class ChatCompletion(BaseModel):
    model_config = ConfigDict(extra="ignore")

    choices: list[ChatChoice] = Field(default_factory=list)

    def first_content(self) -> str | None:
        if not self.choices:
            return None
        message = self.choices[0].message
        if message is None or not message.content:
            return None
        return message.content


class SignalResponse(BaseModel):
    ticker: str
    signal: str


class SignalResult(BaseModel):
    ticker: str
    signal: str
    status: UpstreamStatus = "ok"

    def to_response(self) -> SignalResponse:
        return SignalResponse(ticker=self.ticker, signal=self.signal)
