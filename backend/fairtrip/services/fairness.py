"""Fairness calculator — weighted cost per offer and group price dispersion scores.

Two distinct measures live here:
  weighted_score   price plus a distance penalty, used to rank one traveler's offers
  fairness_score   0-100 spread of the group's costs around their mean
"""

import math
from collections.abc import Iterable, Mapping, Sequence

from fairtrip.models import FairnessDetail, ScoredOffer, Traveler, TravelerFairness
from fairtrip.services.search_config import search_config


class CurrencyMismatch(ValueError):
    """Group math was asked to combine prices in different currencies."""


def round_half_up(value: float) -> int:
    """Round .5 upwards, matching how prices and scores are shown to users."""
    return math.floor(value + 0.5)


def weighted_score(price: float, distance_miles: float) -> float:
    """Price plus a fixed penalty per mile travelled to the departure airport."""
    return price + distance_miles * search_config.scoring.distance_penalty_per_mile


def ensure_single_currency(offers: Iterable[ScoredOffer]) -> str | None:
    """Return the shared currency of ``offers``; raise CurrencyMismatch if they differ."""
    currencies = {o.currency for o in offers}
    if len(currencies) > 1:
        raise CurrencyMismatch(f"Cannot compare prices across currencies: {sorted(currencies)}")
    return next(iter(currencies), None)


def fairness_score(costs: Sequence[float]) -> int:
    """
    Score how evenly a group's costs are spread (0-100, higher = fairer).

    100 - (largest deviation from the mean / mean * 100), floored at 0.
    A single outlier is penalised in proportion to the mean, so the same
    absolute spread hurts a cheap trip more than an expensive one.
    """
    if not costs:
        return 0
    avg = sum(costs) / len(costs)
    max_deviation = max(abs(c - avg) for c in costs)
    if avg <= 0:
        # All-free group: identical costs are perfectly fair
        return 100 if max_deviation == 0 else 0
    return round_half_up(max(0.0, 100 - (max_deviation / avg) * 100))


def fairness_details(
    travelers: Sequence[Traveler],
    offers_by_traveler: Mapping[str, ScoredOffer],
) -> FairnessDetail | None:
    """Per-traveler breakdown for the travelers that have a resolved offer.

    Travelers without an entry in ``offers_by_traveler`` are skipped; None
    when nobody has one.
    """
    resolved = [(t, offers_by_traveler[t.id]) for t in travelers if t.id in offers_by_traveler]
    if not resolved:
        return None

    ensure_single_currency(o for _, o in resolved)
    costs = [o.price for _, o in resolved]
    avg = sum(costs) / len(costs)
    return FairnessDetail(
        score=fairness_score(costs),
        avg_cost=avg,
        per_traveler=tuple(
            TravelerFairness(
                name=t.display_name,
                airport_label=o.departure_airport.label,
                cost=o.price,
                diff_from_avg=o.price - avg,
            )
            for t, o in resolved
        ),
    )
