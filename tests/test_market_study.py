import pytest

from rental_engine.config import NeighborhoodScores
from rental_engine.services.market_study import adjusted_rent_per_m2, estimate_market, suggest_initial_rent


def test_adjusted_rent_per_m2_uses_neighborhood_multiplier():
    assert adjusted_rent_per_m2(NeighborhoodScores(8, 7, 6), 400) == pytest.approx(448)
    assert adjusted_rent_per_m2(NeighborhoodScores(8, 7, 8), 400) == pytest.approx(464)


def test_multiplier_stays_within_bounds():
    low = adjusted_rent_per_m2(NeighborhoodScores(1, 1, 1), 400)
    high = adjusted_rent_per_m2(NeighborhoodScores(10, 10, 10), 400)
    assert low == pytest.approx(0.76 * 400)
    assert high == pytest.approx(1.3 * 400)


def test_market_range_scales_with_size():
    study = estimate_market(50, NeighborhoodScores(8, 7, 6), 400)
    assert study.market_range.min_rent_clp == pytest.approx(19_040)
    assert study.market_range.max_rent_clp == pytest.approx(25_760)
    assert study.neighborhood_factors.location_score == 8
    assert study.comparable_properties == []


def test_zero_size_gives_zero_range():
    study = estimate_market(0, NeighborhoodScores(), 400)
    assert study.market_range.min_rent_clp == 0
    assert study.market_range.max_rent_clp == 0


def test_suggest_initial_rent_rounds_size_times_rate():
    study = estimate_market(50, NeighborhoodScores(8, 7, 6), 400)
    assert suggest_initial_rent(50, study).suggested_rent_clp == 22_400
    assert suggest_initial_rent(0, study).suggested_rent_clp == 0
    assert suggest_initial_rent(33.3, study).suggested_rent_clp == 14_918


def test_overflowing_size_degrades_to_zero():
    study = estimate_market(1e306, NeighborhoodScores(8, 7, 6), 400)
    assert study.market_range.min_rent_clp == 0
    assert study.market_range.max_rent_clp == 0
    assert suggest_initial_rent(1e306, study).suggested_rent_clp == 0


def test_notes_are_carried_on_the_study():
    study = estimate_market(50, NeighborhoodScores(8, 7, 6), 400, notes="Two similar units on the same block")
    assert study.notes == "Two similar units on the same block"
