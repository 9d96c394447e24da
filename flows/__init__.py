"""Static catalog of flows.

Each flow is declared as data (schemas, prompt template, model overrides and
the feature that gates it). `build_registry()` wires them into a fresh
SchemaRegistry at startup.
"""

from typing import List

from contracts import FlowDefinition
from engine import SchemaRegistry

from .advice import COIN_ADVICE, SMART_ALERT
from .analysis import FUTURE_PRICE, PRICE_TREND, SENTIMENT, WHALE_MOVEMENT
from .market import (
    ALPHA_FEED,
    COIN_BUZZ,
    MARKET_ANOMALIES,
    MARKET_NARRATIVES,
    ONCHAIN_INTELLIGENCE,
    PRE_LAUNCH_GEMS,
)
from .signals import (
    COIN_TRADING_SIGNAL,
    CUSTOM_SIGNAL,
    SIGNAL_OF_THE_DAY,
    STRATEGIC_TIMING,
    WEEKLY_FORECASTS,
)
from .tools import COIN_COMPARISON, PREDICTION_CONFIDENCE, ROI_PREDICTION

ALL_FLOWS: List[FlowDefinition] = [
    COIN_TRADING_SIGNAL,
    SIGNAL_OF_THE_DAY,
    CUSTOM_SIGNAL,
    COIN_ADVICE,
    MARKET_ANOMALIES,
    SMART_ALERT,
    ALPHA_FEED,
    PRE_LAUNCH_GEMS,
    ONCHAIN_INTELLIGENCE,
    STRATEGIC_TIMING,
    WEEKLY_FORECASTS,
    COIN_BUZZ,
    MARKET_NARRATIVES,
    SENTIMENT,
    PRICE_TREND,
    WHALE_MOVEMENT,
    FUTURE_PRICE,
    ROI_PREDICTION,
    COIN_COMPARISON,
    PREDICTION_CONFIDENCE,
]


def build_registry() -> SchemaRegistry:
    """Create a registry holding every catalog flow."""
    registry = SchemaRegistry()
    for definition in ALL_FLOWS:
        registry.add(definition)
    return registry


__all__ = [
    "ALL_FLOWS",
    "build_registry",
    "COIN_TRADING_SIGNAL",
    "SIGNAL_OF_THE_DAY",
    "CUSTOM_SIGNAL",
    "COIN_ADVICE",
    "MARKET_ANOMALIES",
    "SMART_ALERT",
    "ALPHA_FEED",
    "PRE_LAUNCH_GEMS",
    "ONCHAIN_INTELLIGENCE",
    "STRATEGIC_TIMING",
    "WEEKLY_FORECASTS",
    "COIN_BUZZ",
    "MARKET_NARRATIVES",
    "SENTIMENT",
    "PRICE_TREND",
    "WHALE_MOVEMENT",
    "FUTURE_PRICE",
    "ROI_PREDICTION",
    "COIN_COMPARISON",
    "PREDICTION_CONFIDENCE",
]
