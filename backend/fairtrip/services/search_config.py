"""Search engine configuration — single source for all scoring constants.

The distance penalty and the balanced-cost divisor have no derivation beyond
product judgement; they are kept here as named values rather than tuned.
"""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WeightedScoring:
    """Penalty applied for travelling further to reach a departure airport."""
    distance_penalty_per_mile: float = 0.5   # half a currency unit per mile


@dataclass(frozen=True)
class AirportLimits:
    """How many departure airports to query per traveler."""
    non_hub_max_airports: int = 3


@dataclass(frozen=True)
class ShortlistLimits:
    """Per-traveler result sizes."""
    shortlist_size: int = 5           # offers kept per traveler, best-first
    combination_choices: int = 3      # offers per traveler explored by the search


@dataclass(frozen=True)
class BalancedWeights:
    """Composite used by the balanced strategy."""
    fairness: float = 0.6
    cost: float = 0.4
    cost_divisor: float = 5.0         # avg cost / 5 → 0-100, saturates around 500


@dataclass(frozen=True)
class RecommendationThresholds:
    """Fairness scores that earn a recommendation flag."""
    fairest_min: int = 75             # fairest recommended at >= 75
    balanced_min: int = 60            # balanced recommended in [60, 75)


@dataclass(frozen=True)
class SearchConfig:
    """Top-level config aggregating all sub-configs."""
    scoring: WeightedScoring = field(default_factory=WeightedScoring)
    airports: AirportLimits = field(default_factory=AirportLimits)
    shortlist: ShortlistLimits = field(default_factory=ShortlistLimits)
    balanced: BalancedWeights = field(default_factory=BalancedWeights)
    recommend: RecommendationThresholds = field(default_factory=RecommendationThresholds)


# Singleton, import this everywhere
search_config = SearchConfig()
