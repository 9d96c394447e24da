"""Subscription tier gating."""

from .tier_gate import DEFAULT_ACCESS_RULES, DEFAULT_SIGNAL_QUOTAS, TierGate

__all__ = [
    "TierGate",
    "DEFAULT_ACCESS_RULES",
    "DEFAULT_SIGNAL_QUOTAS",
]
