import pytest

from rental_engine.services.vacancy import break_even_reduction_percentage, calculate_vacancy_impact


@pytest.mark.parametrize("rent", [1, 350_000, 800_000, 12_345_678.9, 1e308])
def test_break_even_is_rent_independent(rent):
    assert break_even_reduction_percentage(rent) == pytest.approx(100 / 11)


def test_zero_rent_is_guarded():
    impact = calculate_vacancy_impact(0)
    assert impact.lost_income_clp == 0
    assert impact.break_even_reduction_percentage == 0


def test_vacancy_constants():
    impact = calculate_vacancy_impact(800_000)
    assert impact.days_vacant == 30
    assert impact.percentage_annual_loss == 8.33
    assert impact.lost_income_clp == 800_000
