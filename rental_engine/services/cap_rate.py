"""CAP-rate analysis from normalized property value, rent and expenses."""

from __future__ import annotations

from ..config import CapRateThresholds
from ..models.analysis import CapRateAnalysis
from ..models.property import ExpenseProfile
from ..utils.logging import get_logger, kv

LOGGER = get_logger("services.cap_rate")

MONTHS_PER_YEAR = 12


def cap_rate_percentage(net_operating_income: float, property_value_clp: float) -> float:
    """NOI over property value as a percentage; 0 for a non-positive value."""

    if property_value_clp <= 0:
        return 0.0
    return net_operating_income / property_value_clp * 100


def calculate_cap_rate(
    property_value_clp: float,
    suggested_rent_clp: float,
    expenses: ExpenseProfile,
    thresholds: CapRateThresholds,
) -> CapRateAnalysis:
    annual_rental_income = suggested_rent_clp * MONTHS_PER_YEAR
    annual_expenses = expenses.annual_total
    # negative NOI is reported as is
    net_operating_income = annual_rental_income - annual_expenses
    cap_rate = cap_rate_percentage(net_operating_income, property_value_clp)
    if property_value_clp <= 0:
        LOGGER.debug("cap_rate_degenerate %s", kv(property_value_clp=property_value_clp))

    return CapRateAnalysis(
        property_value_clp=property_value_clp,
        annual_rental_income=annual_rental_income,
        annual_expenses=annual_expenses,
        net_operating_income=net_operating_income,
        cap_rate_percentage=cap_rate,
        comparison_to_market=thresholds.classify(cap_rate),
    )


def annual_rental_yield(analysis: CapRateAnalysis) -> float:
    """Gross yield: annual rent over property value, as a percentage."""

    return cap_rate_percentage(analysis.annual_rental_income, analysis.property_value_clp)


def cap_rate_with_rent_change(
    property_value_clp: float,
    new_rent_clp: float,
    annual_expenses: float,
    vacancy_rate: float = 0.0,
) -> float:
    """CAP rate if the monthly rent moved to ``new_rent_clp`` with a vacancy allowance."""

    annual_income = new_rent_clp * MONTHS_PER_YEAR * (1 - vacancy_rate)
    return cap_rate_percentage(annual_income - annual_expenses, property_value_clp)


__all__ = ["cap_rate_percentage", "calculate_cap_rate", "annual_rental_yield", "cap_rate_with_rent_change"]
