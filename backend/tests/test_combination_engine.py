import pytest

from conftest import make_traveler, scored, shortlist
from fairtrip.services.combination_engine import (
    balance_score,
    candidate_picks,
    compute_combinations,
    fairest_picks,
)
from fairtrip.services.fairness import CurrencyMismatch
from fairtrip.services.search_config import RecommendationThresholds, SearchConfig

T1, T2, T3 = make_traveler("t1", name="Ann"), make_traveler("t2", name="Ben"), make_traveler("t3", name="Cat")


def offer_ids(combination):
    return [s.offer.id for s in combination.selections]


@pytest.fixture
def three_way():
    """Cheapest, fairest and balanced all pick different offers."""
    return {
        "t1": shortlist("t1", scored("a", 100), scored("b", 300), scored("e", 120)),
        "t2": shortlist("t2", scored("c", 60), scored("d", 300), scored("f", 110)),
    }


def test_scenario_cheapest_already_fairest():
    shortlists = {
        "t1": shortlist("t1", scored("A", 50, 60), scored("B", 70, 65)),
        "t2": shortlist("t2", scored("C", 55, 58), scored("D", 40, 72)),
    }

    combos = compute_combinations(shortlists, [T1, T2])

    assert len(combos) == 1
    assert combos[0].id == "cheapest"
    assert offer_ids(combos[0]) == ["A", "C"]
    assert combos[0].total_cost == 105
    assert combos[0].fairness.score == 95
    assert combos[0].recommended


def test_fairest_differs_from_cheapest():
    shortlists = {
        "t1": shortlist("t1", scored("a", 100), scored("b", 140)),
        "t2": shortlist("t2", scored("c", 200), scored("d", 150)),
    }

    combos = compute_combinations(shortlists, [T1, T2])

    assert [c.id for c in combos] == ["fairest", "cheapest"]
    assert offer_ids(combos[0]) == ["b", "d"]
    assert combos[0].fairness.score == 97
    assert combos[0].recommended and not combos[1].recommended
    assert combos[0].title == "Most Fair"


def test_three_distinct_packages(three_way):
    combos = compute_combinations(three_way, [T1, T2])

    assert [c.id for c in combos] == ["fairest", "balanced", "cheapest"]
    assert [offer_ids(c) for c in combos] == [["b", "d"], ["a", "f"], ["a", "c"]]
    assert [c.fairness.score for c in combos] == [100, 95, 75]
    assert [c.recommended for c in combos] == [True, False, False]


def test_balanced_recommended_when_fairest_is_not(three_way, monkeypatch):
    config = SearchConfig(recommend=RecommendationThresholds(fairest_min=101, balanced_min=90))
    monkeypatch.setattr("fairtrip.services.combination_engine.search_config", config)

    combos = compute_combinations(three_way, [T1, T2])

    assert combos[0].id == "balanced"
    assert sum(c.recommended for c in combos) == 1


def test_no_duplicate_packages(three_way):
    for shortlists in (
        three_way,
        {"t1": shortlist("t1", scored("x", 10)), "t2": shortlist("t2", scored("y", 10))},
    ):
        keys = [c.offer_key() for c in compute_combinations(shortlists, [T1, T2])]
        assert len(keys) == len(set(keys))


def test_exactly_one_recommended(three_way):
    assert sum(c.recommended for c in compute_combinations(three_way, [T1, T2])) == 1


def test_idempotent(three_way):
    assert compute_combinations(three_way, [T1, T2]) == compute_combinations(three_way, [T1, T2])


def test_same_offer_id_from_different_airports_is_distinct():
    shortlists = {
        "t1": shortlist("t1", scored("1", 100, airport="EMA"), scored("1", 140, airport="BHX")),
        "t2": shortlist("t2", scored("1", 200, airport="MAN"), scored("2", 150, airport="MAN")),
    }

    combos = compute_combinations(shortlists, [T1, T2])

    assert [c.id for c in combos] == ["fairest", "cheapest"]
    assert combos[0].offer_key() == (("t1", "BHX:1"), ("t2", "MAN:2"))


def test_single_traveler_gets_one_package():
    combos = compute_combinations({"t1": shortlist("t1", scored("a", 80), scored("b", 81))}, [T1, T2])

    assert len(combos) == 1
    assert combos[0].id == "cheapest"
    assert offer_ids(combos[0]) == ["a"]
    assert combos[0].recommended
    assert combos[0].fairness.score == 100


def test_travelers_without_shortlists_are_left_out(three_way):
    combos = compute_combinations(three_way, [T1, T3, T2])

    for combo in combos:
        assert [s.traveler.id for s in combo.selections] == ["t1", "t2"]
        assert [t.name for t in combo.fairness.per_traveler] == ["Ann", "Ben"]


def test_empty_when_nobody_has_flights():
    assert compute_combinations({}, [T1, T2]) == []


def test_search_limited_to_top_three_choices():
    shortlists = {
        "t1": shortlist("t1", scored("a", 100)),
        "t2": shortlist("t2", scored("b", 200), scored("c", 210), scored("d", 220), scored("e", 100)),
    }

    assert len(list(candidate_picks([T1, T2], shortlists))) == 3
    for combo in compute_combinations(shortlists, [T1, T2]):
        assert "e" not in offer_ids(combo)


def test_first_found_wins_ties():
    shortlists = {
        "t1": shortlist("t1", scored("a", 100), scored("b", 200)),
        "t2": shortlist("t2", scored("c", 100), scored("d", 200)),
    }

    picks = fairest_picks([T1, T2], shortlists)

    assert [s.offer.id for s in picks] == ["a", "c"]


def test_balance_score_saturates_cost_component():
    cheap = next(candidate_picks([T1], {"t1": shortlist("t1", scored("a", 100))}))
    pricey = next(candidate_picks([T1], {"t1": shortlist("t1", scored("a", 900))}))

    assert balance_score(cheap) == pytest.approx(100 * 0.6 + 80 * 0.4)
    assert balance_score(pricey) == pytest.approx(60)


def test_mixed_currencies_rejected():
    shortlists = {
        "t1": shortlist("t1", scored("a", 100)),
        "t2": shortlist("t2", scored("b", 100, currency="EUR")),
    }

    with pytest.raises(CurrencyMismatch):
        compute_combinations(shortlists, [T1, T2])
