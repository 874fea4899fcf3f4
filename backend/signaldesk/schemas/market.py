from __future__ import annotations

from typing import Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict


class MarketItem(BaseModel):
    model_config = ConfigDict(extra="allow")

    code: str


class PriceChange(MarketItem):
    lastPrice: float
    lastUpdated: str
    priceChgCr1D: float
    priceChgPctCr1D: float


class IndexData(PriceChange):
    index: Optional[str] = None
    highPrice: Optional[float] = None
    lowPrice: Optional[float] = None
    openPrice: Optional[float] = None
    totalVolume: Optional[float] = None
    totalValue: Optional[float] = None


class WorldIndexData(PriceChange):
    highPrice: Optional[float] = None
    lowPrice: Optional[float] = None
    openPrice: Optional[float] = None


class CommodityData(PriceChange):
    unit: Optional[str] = None


class TopGainerStock(PriceChange):
    index: str
    accumulatedVal: float
    nmVolumeAvgCr20D: float
    nmVolNmVolAvg20DPctCr: Optional[float] = None
    totalVolumeAvgCr20D: Optional[float] = None


class ExchangeRateData(MarketItem):
    codeName: str
    tradingDate: str
    openPrice: float
    highPrice: float
    lowPrice: float
    closePrice: float
    change: float
    changePct: float
    locale: str


ItemT = TypeVar("ItemT", bound=MarketItem)


class VNDirectResponse(BaseModel, Generic[ItemT]):
    model_config = ConfigDict(extra="allow")

    data: list[ItemT]
    currentPage: Optional[int] = None
    size: Optional[int] = None
    totalElements: Optional[int] = None
    totalPages: Optional[int] = None


class StockPriceData(MarketItem):
    date: str
    open: float
    high: float
    low: float
    close: float
    nmVolume: Optional[float] = None
    change: Optional[float] = None
    pctChange: Optional[float] = None


class RatioData(MarketItem):
    ratioCode: str
    value: Optional[float] = None
    reportDate: Optional[str] = None
