"""Combination engine — picks cheapest, fairest and balanced group packages.

Each traveler's best offer is chosen independently by weighted score, which
is not necessarily fair to the group. The fairest and balanced strategies
search one offer per traveler across each traveler's top few options.

The search is exhaustive over ``combination_choices ** travelers`` candidates
(3^10 = 59,049 at the maximum group size), which is fine for a one-shot
interactive request. Larger groups would need pruning.
"""

import dataclasses
import itertools
import logging
from collections.abc import Callable, Iterator, Mapping, Sequence

from fairtrip.models import Combination, Selection, Traveler, TravelerShortlist
from fairtrip.services.fairness import ensure_single_currency, fairness_details, fairness_score
from fairtrip.services.search_config import search_config

logger = logging.getLogger(__name__)

Picks = tuple[Selection, ...]

STRATEGIES = {
    "cheapest": ("Cheapest Total", "Everyone books their cheapest flight"),
    "fairest": ("Most Fair", "Best price balance across the group"),
    "balanced": ("Balanced", "Good price and fairness"),
}


def _costs(picks: Picks) -> list[float]:
    return [s.offer.price for s in picks]


def balance_score(picks: Picks) -> float:
    """Fairness blended with a 0-100 cost score (cheaper average = higher)."""
    weights = search_config.balanced
    costs = _costs(picks)
    avg_cost = sum(costs) / len(costs)
    cost_score = max(0.0, 100 - avg_cost / weights.cost_divisor)
    return fairness_score(costs) * weights.fairness + cost_score * weights.cost


def candidate_picks(travelers: Sequence[Traveler], shortlists: Mapping[str, TravelerShortlist]) -> Iterator[Picks]:
    """Every combination of one top offer per traveler, first traveler varying slowest."""
    limit = search_config.shortlist.combination_choices
    options = [
        [Selection(t, offer) for offer in shortlists[t.id].offers[:limit]]
        for t in travelers
    ]
    return itertools.product(*options)


def best_picks(
    travelers: Sequence[Traveler],
    shortlists: Mapping[str, TravelerShortlist],
    score: Callable[[Picks], float],
) -> Picks:
    """Highest-scoring combination; the first one found wins ties."""
    if not travelers:
        return ()
    if len(travelers) == 1:
        only = travelers[0]
        return (Selection(only, shortlists[only.id].best),)
    return max(candidate_picks(travelers, shortlists), key=score)


def cheapest_picks(travelers: Sequence[Traveler], shortlists: Mapping[str, TravelerShortlist]) -> Picks:
    return tuple(Selection(t, shortlists[t.id].best) for t in travelers)


def fairest_picks(travelers: Sequence[Traveler], shortlists: Mapping[str, TravelerShortlist]) -> Picks:
    return best_picks(travelers, shortlists, lambda picks: fairness_score(_costs(picks)))


def balanced_picks(travelers: Sequence[Traveler], shortlists: Mapping[str, TravelerShortlist]) -> Picks:
    return best_picks(travelers, shortlists, balance_score)


def _build(strategy: str, picks: Picks, travelers: Sequence[Traveler]) -> Combination:
    title, description = STRATEGIES[strategy]
    return Combination(
        id=strategy,
        title=title,
        description=description,
        selections=picks,
        total_cost=sum(_costs(picks)),
        fairness=fairness_details(travelers, {s.traveler.id: s.offer for s in picks}),
    )


def compute_combinations(
    shortlists: Mapping[str, TravelerShortlist],
    travelers: Sequence[Traveler],
) -> list[Combination]:
    """
    Labeled group packages, recommended first.

    Travelers without a shortlist are left out. Packages that pick the same
    offers as an earlier one are dropped, and exactly one package is
    recommended whenever any is returned.
    """
    with_results = [t for t in travelers if t.id in shortlists]
    if not with_results:
        return []
    ensure_single_currency(o for t in with_results for o in shortlists[t.id].offers)

    thresholds = search_config.recommend
    cheapest = _build("cheapest", cheapest_picks(with_results, shortlists), with_results)
    fairest = _build("fairest", fairest_picks(with_results, shortlists), with_results)
    balanced = _build("balanced", balanced_picks(with_results, shortlists), with_results)

    combinations = [cheapest]

    if fairest.offer_key() != cheapest.offer_key():
        if fairest.fairness.score >= thresholds.fairest_min:
            fairest = dataclasses.replace(fairest, recommended=True)
        combinations.append(fairest)

    if balanced.offer_key() not in (cheapest.offer_key(), fairest.offer_key()):
        already = any(c.recommended for c in combinations)
        if not already and thresholds.balanced_min <= balanced.fairness.score < thresholds.fairest_min:
            balanced = dataclasses.replace(balanced, recommended=True)
        combinations.append(balanced)

    if not any(c.recommended for c in combinations):
        combinations[0] = dataclasses.replace(combinations[0], recommended=True)

    combinations.sort(key=lambda c: (not c.recommended, -c.fairness.score))
    logger.debug(f"Combinations: {[(c.id, c.fairness.score, c.recommended) for c in combinations]}")
    return combinations
