"""Cost of one vacant month and the price cut that offsets it."""

from __future__ import annotations

from ..config import VACANCY_ANNUAL_LOSS_PERCENTAGE, VACANCY_DAYS
from ..models.analysis import VacancyImpact
from ..utils.logging import get_logger, kv

LOGGER = get_logger("services.vacancy")

REMAINING_LEASE_MONTHS = 11


def break_even_reduction_percentage(monthly_rent_clp: float) -> float:
    """Largest cut over the remaining 11 months that still beats one empty month.

    Equals 100/11 for any positive rent; a zero rent is defined as 0.
    """

    if monthly_rent_clp <= 0:
        return 0.0
    # rent / (rent * 11) * 100
    return 100 / REMAINING_LEASE_MONTHS


def calculate_vacancy_impact(monthly_rent_clp: float) -> VacancyImpact:
    if monthly_rent_clp <= 0:
        LOGGER.debug("vacancy_degenerate %s", kv(monthly_rent_clp=monthly_rent_clp))
    return VacancyImpact(
        days_vacant=VACANCY_DAYS,
        percentage_annual_loss=VACANCY_ANNUAL_LOSS_PERCENTAGE,
        lost_income_clp=monthly_rent_clp,
        break_even_reduction_percentage=break_even_reduction_percentage(monthly_rent_clp),
    )


__all__ = ["break_even_reduction_percentage", "calculate_vacancy_impact"]
