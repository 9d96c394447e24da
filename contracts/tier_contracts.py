"""Subscription tier contracts for feature gating."""

from enum import Enum
from typing import FrozenSet, List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Tier(str, Enum):
    """Subscription level, ordered from lowest to highest."""
    FREE = "Free"
    BASIC = "Basic"
    PRO = "Pro"
    PREMIUM = "Premium"

    @classmethod
    def ordered(cls) -> List["Tier"]:
        """All tiers, lowest first."""
        return [cls.FREE, cls.BASIC, cls.PRO, cls.PREMIUM]

    @property
    def rank(self) -> int:
        return Tier.ordered().index(self)


class AccessRule(BaseModel):
    """The set of tiers that unlock one feature.

    Set membership rather than an ordinal comparison: "Pro or Premium" and
    "Premium only" are both expressible.
    """
    model_config = ConfigDict(frozen=True)

    feature_id: str = Field(..., min_length=1, description="Stable feature identifier, e.g. 'alpha-feed'")
    tiers: FrozenSet[Tier] = Field(..., description="Tiers for which the feature is unlocked")
    label: str = Field(default="", description="Human-readable feature name for upgrade prompts")

    @field_validator("tiers")
    @classmethod
    def _not_empty(cls, v: FrozenSet[Tier]) -> FrozenSet[Tier]:
        if not v:
            raise ValueError("an access rule must unlock at least one tier")
        return v
