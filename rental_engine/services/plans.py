"""Build the three commercial plans with their price-decay schedules."""

from __future__ import annotations

from typing import List, Mapping, Optional

from ..config import BROKERAGE_TEMPLATE, DEFAULT_CONFIG, PLAN_IDS, PlanSpec, PlanTemplate
from ..models.analysis import CommercialPlan, PriceAdjustment
from ..utils.logging import get_logger, kv

LOGGER = get_logger("services.plans")


def reduced_rent(base_rent_clp: float, percentage_reduction: float) -> float:
    return base_rent_clp * (1 - percentage_reduction / 100)


def build_schedule(spec: PlanSpec, base_rent_clp: float) -> List[PriceAdjustment]:
    return [
        PriceAdjustment(
            day=step.day,
            new_rent_clp=reduced_rent(base_rent_clp, step.reduction),
            percentage_reduction=step.reduction,
        )
        for step in spec.steps
    ]


def generate_plans(
    base_rent_clp: float,
    commissions: Optional[Mapping[str, float]] = None,
    template: PlanTemplate = BROKERAGE_TEMPLATE,
) -> List[CommercialPlan]:
    """Return plans A, B and C, in that order, priced off ``base_rent_clp``.

    ``commissions`` overrides the configured default percentage per plan id;
    plan ids that are absent keep their default.
    """

    rates = dict(DEFAULT_CONFIG.commissions)
    if commissions:
        unknown = set(commissions) - set(PLAN_IDS)
        if unknown:
            raise ValueError(f"Unknown plan ids in commission overrides: {sorted(unknown)}")
        rates.update(commissions)

    plans: List[CommercialPlan] = []
    for plan_id in PLAN_IDS:
        spec = template.get(plan_id)
        schedule = build_schedule(spec, base_rent_clp)
        plans.append(
            CommercialPlan(
                id=spec.plan_id,
                name=spec.name,
                description=spec.description,
                initial_rent_clp=base_rent_clp,
                final_rent_clp=schedule[-1].new_rent_clp,
                commission_percentage=rates[plan_id],
                marketing_duration_days=spec.marketing_duration_days,
                service_level=spec.service_level,
                price_adjustment_schedule=schedule,
                success_probability_percentage=spec.success_probability_percentage,
                included_services=list(spec.included_services),
            )
        )

    commission_values = [plan.commission_percentage for plan in plans]
    if not commission_values[0] > commission_values[1] > commission_values[2]:
        LOGGER.warning("commission_order_broken %s", kv(template=template.name, commissions=commission_values))
    LOGGER.debug("plans_generated %s", kv(template=template.name, base_rent_clp=base_rent_clp))
    return plans


__all__ = ["reduced_rent", "build_schedule", "generate_plans"]
