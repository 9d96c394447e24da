"""Tier gate: which features a subscription tier unlocks.

A pure decision function over a static AccessRule table. It never invokes
flows; callers (presentation code and the flow executor) consult it.
"""

from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set, TypeVar

from contracts.tier_contracts import AccessRule, Tier
from engine.errors import UnknownFeature

T = TypeVar("T")

_ALL_TIERS = frozenset(Tier)
_PRO_AND_UP = frozenset({Tier.PRO, Tier.PREMIUM})
_PREMIUM_ONLY = frozenset({Tier.PREMIUM})

DEFAULT_ACCESS_RULES: List[AccessRule] = [
    # Open to everyone
    AccessRule(feature_id="dashboard", tiers=_ALL_TIERS, label="Dashboard"),
    AccessRule(feature_id="signals", tiers=_ALL_TIERS, label="Live Signals"),
    AccessRule(feature_id="ai-advisor", tiers=_ALL_TIERS, label="AI Advisor"),
    AccessRule(feature_id="weekly-forecasts", tiers=_ALL_TIERS, label="Weekly Forecasts"),
    AccessRule(feature_id="analysis", tiers=_ALL_TIERS, label="AI Analysis"),
    AccessRule(feature_id="custom-signals", tiers=_ALL_TIERS, label="Custom Signal Generator"),
    AccessRule(feature_id="news-buzz", tiers=_ALL_TIERS, label="News & Buzz Aggregator"),
    AccessRule(feature_id="narrative-engine", tiers=_ALL_TIERS, label="AI Narrative Engine"),
    AccessRule(feature_id="confidence-dashboard", tiers=_ALL_TIERS, label="Prediction Confidence Dashboard"),
    AccessRule(feature_id="roi-calculator", tiers=_ALL_TIERS, label="ROI Calculator"),
    AccessRule(feature_id="coin-comparison", tiers=_ALL_TIERS, label="Coin Comparison"),
    # Pro or Premium
    AccessRule(feature_id="alpha-feed", tiers=_PRO_AND_UP, label="AI Alpha Feed"),
    AccessRule(feature_id="market-anomalies", tiers=_PRO_AND_UP, label="AI Market Anomaly Detector"),
    AccessRule(feature_id="onchain-intelligence", tiers=_PRO_AND_UP, label="AI On-Chain Intelligence Scoring"),
    # Premium only
    AccessRule(feature_id="ai-coach", tiers=_PREMIUM_ONLY, label="AI Investment Coach"),
    AccessRule(feature_id="strategic-insights", tiers=_PREMIUM_ONLY, label="AI Strategic Insights"),
    AccessRule(feature_id="smart-alerts", tiers=_PREMIUM_ONLY, label="AI Smart Alert Setup"),
    AccessRule(feature_id="pre-launch-radar", tiers=_PREMIUM_ONLY, label="AI Pre-Launch Gem Radar"),
]

# Signals shown per tier on the live signal list; None means all of them
DEFAULT_SIGNAL_QUOTAS: Dict[Tier, Optional[int]] = {
    Tier.FREE: 1,
    Tier.BASIC: 3,
    Tier.PRO: None,
    Tier.PREMIUM: None,
}


class TierGate:
    """Answers "is feature X unlocked for tier T".

    Read-only after construction and safe to share across threads.
    """

    def __init__(
        self,
        rules: Optional[Iterable[AccessRule]] = None,
        signal_quotas: Optional[Dict[Tier, Optional[int]]] = None,
    ):
        """Initialize the gate.

        Args:
            rules: Access rules; defaults to DEFAULT_ACCESS_RULES
            signal_quotas: Per-tier signal limits; defaults to DEFAULT_SIGNAL_QUOTAS

        Raises:
            ValueError: If two rules share a feature id, or a tier has no signal quota
        """
        self._rules: Dict[str, AccessRule] = {}
        for rule in (DEFAULT_ACCESS_RULES if rules is None else rules):
            if rule.feature_id in self._rules:
                raise ValueError(f"Duplicate access rule for feature: {rule.feature_id}")
            self._rules[rule.feature_id] = rule
        self._signal_quotas = dict(DEFAULT_SIGNAL_QUOTAS if signal_quotas is None else signal_quotas)
        missing = [tier.value for tier in Tier if tier not in self._signal_quotas]
        if missing:
            raise ValueError(f"Signal quota missing for tiers: {', '.join(missing)}")

    @property
    def feature_ids(self) -> List[str]:
        return list(self._rules)

    def rule(self, feature_id: str) -> AccessRule:
        """Get the access rule for a feature.

        Raises:
            UnknownFeature: If no rule exists for `feature_id`
        """
        try:
            return self._rules[feature_id]
        except KeyError:
            raise UnknownFeature(feature_id) from None

    def validate_features(self, feature_ids: Iterable[str]) -> None:
        """Startup check that every referenced feature has a rule.

        Raises:
            UnknownFeature: For the first unregistered feature id
        """
        for feature_id in feature_ids:
            self.rule(feature_id)

    def is_unlocked(self, tier: Tier, feature_id: str) -> bool:
        """Whether `tier` unlocks `feature_id`."""
        return tier in self.rule(feature_id).tiers

    def locked_features(self, tier: Tier) -> Set[str]:
        """Feature ids the tier cannot use."""
        return {fid for fid, rule in self._rules.items() if tier not in rule.tiers}

    def unlocked_features(self, tier: Tier) -> Set[str]:
        """Feature ids the tier can use."""
        return {fid for fid, rule in self._rules.items() if tier in rule.tiers}

    def required_tier(self, feature_id: str) -> Tier:
        """Lowest tier that unlocks the feature, for upgrade prompts."""
        tiers: FrozenSet[Tier] = self.rule(feature_id).tiers
        return min(tiers, key=lambda t: t.rank)

    def signal_quota(self, tier: Tier) -> Optional[int]:
        """How many live signals the tier may see (None for unlimited)."""
        return self._signal_quotas[tier]

    def visible_signals(self, tier: Tier, signals: Sequence[T]) -> List[T]:
        """Trim a ranked signal list to the tier's quota."""
        quota = self.signal_quota(tier)
        if quota is None:
            return list(signals)
        return list(signals[:quota])
