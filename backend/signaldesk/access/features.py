"""Feature tiers for premium gating.

Free features are available to every user; premium features require an
active membership. Routes map onto features by path prefix.
"""

from __future__ import annotations

from enum import Enum


class Feature(str, Enum):
    DASHBOARD = "dashboard"
    STOCKS = "stocks"
    MARKET = "market"
    PROFILE = "profile"
    SIGNALS = "signals"
    AI_ANALYSIS = "ai-analysis"
    PORTFOLIO = "portfolio"
    ALERTS = "alerts"


FREE_FEATURES: tuple[Feature, ...] = (
    Feature.DASHBOARD,
    Feature.STOCKS,
    Feature.MARKET,
    Feature.PROFILE,
)

PREMIUM_FEATURES: tuple[Feature, ...] = (
    Feature.SIGNALS,
    Feature.AI_ANALYSIS,
    Feature.PORTFOLIO,
    Feature.ALERTS,
)

ALL_FEATURES: tuple[Feature, ...] = FREE_FEATURES + PREMIUM_FEATURES

ROUTE_FEATURES: dict[str, Feature] = {
    "/dashboard": Feature.DASHBOARD,
    "/stocks": Feature.STOCKS,
    "/market": Feature.MARKET,
    "/profile": Feature.PROFILE,
    "/signals": Feature.SIGNALS,
    "/ai-analysis": Feature.AI_ANALYSIS,
    "/portfolio": Feature.PORTFOLIO,
    "/alerts": Feature.ALERTS,
}


def is_premium_feature(feature: Feature) -> bool:
    return feature in PREMIUM_FEATURES


def accessible_features(is_premium: bool) -> tuple[Feature, ...]:
    return ALL_FEATURES if is_premium else FREE_FEATURES


def can_access_feature(feature: Feature, is_premium: bool) -> bool:
    return feature in accessible_features(is_premium)


def feature_for_path(path: str) -> Feature | None:
    normalized = "/" + path.strip().strip("/")
    matches = [
        route
        for route in ROUTE_FEATURES
        if normalized == route or normalized.startswith(route + "/")
    ]
    if not matches:
        return None
    return ROUTE_FEATURES[max(matches, key=len)]


def can_access_path(path: str, is_premium: bool) -> bool:
    feature = feature_for_path(path)
    if feature is None:
        return True
    return can_access_feature(feature, is_premium)
