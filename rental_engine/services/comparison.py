"""Per-plan comparison figures and plan ranking.

Risk and recommendation scores come from a fixed policy table keyed by plan id.
They are deliberately independent of the income computed here, so Plan A ranks
first under the default policy whatever the arithmetic says for a given input.
"""

from __future__ import annotations

from typing import List, Literal, Mapping, Sequence

import numpy as np

from ..config import BROKERAGE_FLOW, PlanPolicy
from ..models.analysis import CommercialPlan, PlanComparison
from ..utils.logging import get_logger, kv
from .cap_rate import MONTHS_PER_YEAR, cap_rate_with_rent_change

LOGGER = get_logger("services.comparison")

AverageRentMethod = Literal["midpoint", "time_weighted"]
RankingPolicy = Literal["recommendation", "net_income"]


def midpoint_average_rent(plan: CommercialPlan, base_rent_clp: float) -> float:
    """Treat the last discount as landing halfway between the list and final price."""

    schedule = plan.price_adjustment_schedule
    if len(schedule) <= 1:
        return base_rent_clp
    return base_rent_clp * (1 - schedule[-1].percentage_reduction / 200)


def time_weighted_average_rent(plan: CommercialPlan, base_rent_clp: float) -> float:
    """Day-weighted mean of the step schedule over the marketing window.

    Each step holds from its day until the next step (or the end of the window);
    steps scheduled on or after the last day carry no weight.
    """

    window = plan.marketing_duration_days
    schedule = plan.price_adjustment_schedule
    if window <= 0 or len(schedule) <= 1:
        return base_rent_clp
    days = np.array([adj.day for adj in schedule] + [window], dtype=float)
    widths = np.diff(np.clip(days, 0, window))
    reductions = np.array([adj.percentage_reduction for adj in schedule], dtype=float)
    mean_reduction = float(np.dot(widths, reductions) / window)
    return base_rent_clp * (1 - mean_reduction / 100)


def compare_plans(
    plans: Sequence[CommercialPlan],
    base_rent_clp: float,
    policy: Mapping[str, PlanPolicy] = BROKERAGE_FLOW.policy,
    property_value_clp: float = 0.0,
    annual_expenses: float = 0.0,
    average_rent_method: AverageRentMethod = "midpoint",
) -> List[PlanComparison]:
    if average_rent_method == "midpoint":
        average_rent = midpoint_average_rent
    elif average_rent_method == "time_weighted":
        average_rent = time_weighted_average_rent
    else:
        raise ValueError(f"Unknown average rent method: {average_rent_method}")

    comparisons: List[PlanComparison] = []
    for plan in plans:
        try:
            prior = policy[plan.id]
        except KeyError:
            raise ValueError(f"No policy entry for plan {plan.id}") from None

        avg_effective_rent = average_rent(plan, base_rent_clp)
        effective_months = MONTHS_PER_YEAR - prior.months_vacant
        annual_rent_with_vacancy = avg_effective_rent * effective_months
        total_commission = annual_rent_with_vacancy * plan.commission_percentage / 100
        net_annual_income = annual_rent_with_vacancy - total_commission

        comparisons.append(
            PlanComparison(
                plan_id=plan.id,
                expected_rental_time=prior.expected_rental_time_days,
                months_vacant=prior.months_vacant,
                average_effective_rent_clp=avg_effective_rent,
                total_commission=total_commission,
                net_annual_income=net_annual_income,
                final_cap_rate_percentage=cap_rate_with_rent_change(
                    property_value_clp,
                    plan.final_rent_clp,
                    annual_expenses,
                    vacancy_rate=prior.months_vacant / MONTHS_PER_YEAR,
                ),
                vacancy_risk_score=prior.vacancy_risk_score,
                recommendation_score=prior.recommendation_score,
            )
        )
        LOGGER.debug(
            "plan_compared %s",
            kv(plan=plan.id, avg_rent=avg_effective_rent, net_annual=net_annual_income, method=average_rent_method),
        )
    return comparisons


def rank_plans(comparisons: Sequence[PlanComparison], policy: RankingPolicy = "recommendation") -> List[PlanComparison]:
    """Order comparisons best first; ties keep the A, B, C order."""

    if policy == "recommendation":
        return sorted(comparisons, key=lambda c: -c.recommendation_score)
    if policy == "net_income":
        return sorted(comparisons, key=lambda c: -c.net_annual_income)
    raise ValueError(f"Unknown ranking policy: {policy}")


__all__ = [
    "midpoint_average_rent",
    "time_weighted_average_rent",
    "compare_plans",
    "rank_plans",
]
