"""Engine defaults and immutable configuration.

Environment variables are read once at import time. Everything the pipeline
consumes is carried by :class:`EngineConfig`, a frozen value that services
receive at construction and never mutate.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import List, Literal, Mapping, Optional, Tuple

PLAN_IDS: Tuple[str, ...] = ("A", "B", "C")

FlowName = Literal["brokerage", "quick"]

UF_VALUE_CLP = float(os.getenv("UF_VALUE_CLP", "38000"))
DEFAULT_MAINTENANCE_CLP = float(os.getenv("DEFAULT_MAINTENANCE_CLP", "500000"))
DEFAULT_PROPERTY_TAX_CLP = float(os.getenv("DEFAULT_PROPERTY_TAX_CLP", "300000"))
DEFAULT_INSURANCE_CLP = float(os.getenv("DEFAULT_INSURANCE_CLP", "200000"))
PLAN_A_COMMISSION = float(os.getenv("PLAN_A_COMMISSION", "12"))
PLAN_B_COMMISSION = float(os.getenv("PLAN_B_COMMISSION", "10"))
PLAN_C_COMMISSION = float(os.getenv("PLAN_C_COMMISSION", "8"))
BASE_RENT_PER_M2 = float(os.getenv("BASE_RENT_PER_M2", "400"))
GOOD_CAP_RATE = float(os.getenv("GOOD_CAP_RATE", "6"))
MIN_CAP_RATE = float(os.getenv("MIN_CAP_RATE", "4"))
QUICK_GOOD_CAP_RATE = float(os.getenv("QUICK_GOOD_CAP_RATE", "8"))
QUICK_MIN_CAP_RATE = float(os.getenv("QUICK_MIN_CAP_RATE", "6"))
ANALYSIS_CACHE_ENABLED = os.getenv("ANALYSIS_CACHE_ENABLED", "true").lower() in {"1", "true", "yes"}

VACANCY_DAYS = 30
VACANCY_ANNUAL_LOSS_PERCENTAGE = 8.33


# ---------------------------------------------------------------------------
# Plan templates
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ScheduleStep:
    day: int
    reduction: float


@dataclass(frozen=True)
class PlanSpec:
    """Fixed identity and price-decay steps of one commercial plan."""

    plan_id: str
    name: str
    description: str
    service_level: Literal["basic", "standard", "premium"]
    steps: Tuple[ScheduleStep, ...]
    marketing_duration_days: int = 30
    success_probability_percentage: Optional[float] = None
    included_services: Tuple[str, ...] = ()

    @property
    def first_reduction_day(self) -> int:
        for step in self.steps:
            if step.reduction > 0:
                return step.day
        return self.marketing_duration_days


@dataclass(frozen=True)
class PlanTemplate:
    name: str
    plans: Tuple[PlanSpec, ...]

    def __post_init__(self) -> None:
        ids = tuple(plan.plan_id for plan in self.plans)
        if ids != PLAN_IDS:
            raise ValueError(f"Template '{self.name}' must define plans {PLAN_IDS}, got {ids}")
        for plan in self.plans:
            if not plan.steps or plan.steps[0] != ScheduleStep(day=0, reduction=0):
                raise ValueError(f"Plan {plan.plan_id} of '{self.name}' must start at day 0 with no reduction")
            for prev, cur in zip(plan.steps, plan.steps[1:]):
                if cur.day <= prev.day or cur.reduction < prev.reduction:
                    raise ValueError(f"Plan {plan.plan_id} of '{self.name}' has a non-monotonic schedule")

    def get(self, plan_id: str) -> PlanSpec:
        for plan in self.plans:
            if plan.plan_id == plan_id:
                return plan
        raise ValueError(f"Unknown plan id: {plan_id}")


BROKERAGE_TEMPLATE = PlanTemplate(
    name="brokerage",
    plans=(
        PlanSpec(
            plan_id="A",
            name="Plan Premium",
            description="Frequent adjustments every 7-10 days for the fastest possible lease",
            service_level="premium",
            steps=(ScheduleStep(0, 0), ScheduleStep(7, 4), ScheduleStep(15, 8), ScheduleStep(22, 12)),
        ),
        PlanSpec(
            plan_id="B",
            name="Plan Standard",
            description="Balanced approach with moderate adjustments every 10 days",
            service_level="standard",
            steps=(ScheduleStep(0, 0), ScheduleStep(10, 5), ScheduleStep(20, 10)),
        ),
        PlanSpec(
            plan_id="C",
            name="Plan Basic",
            description="Stable price with a single adjustment after 15 days",
            service_level="basic",
            steps=(ScheduleStep(0, 0), ScheduleStep(15, 3)),
        ),
    ),
)

QUICK_TEMPLATE = PlanTemplate(
    name="quick",
    plans=(
        PlanSpec(
            plan_id="A",
            name="Plan Premium",
            description="Full service with intensive marketing and flexible adjustments for a fast lease",
            service_level="premium",
            steps=(ScheduleStep(0, 0), ScheduleStep(15, 5), ScheduleStep(25, 8), ScheduleStep(30, 10)),
            success_probability_percentage=95,
            included_services=(
                "Professional HDR photography",
                "360 video tour",
                "Listing on 10+ portals",
                "Full visit management",
                "Thorough tenant screening",
                "Lease drafting",
                "3 months of post-lease support",
            ),
        ),
        PlanSpec(
            plan_id="B",
            name="Plan Standard",
            description="Balance between price and service with moderate adjustments",
            service_level="standard",
            steps=(ScheduleStep(0, 0), ScheduleStep(20, 7), ScheduleStep(30, 12)),
            success_probability_percentage=85,
            included_services=(
                "Professional photography",
                "Listing on 5+ portals",
                "Coordinated visits",
                "Basic tenant screening",
                "Lease drafting",
                "1 month of post-lease support",
            ),
        ),
        PlanSpec(
            plan_id="C",
            name="Plan Basic",
            description="Economy service with a single adjustment at the end of the period",
            service_level="basic",
            steps=(ScheduleStep(0, 0), ScheduleStep(30, 15)),
            success_probability_percentage=75,
            included_services=(
                "Basic photography",
                "Listing on 3 main portals",
                "Basic visit coordination",
                "Standard lease template",
            ),
        ),
    ),
)

PLAN_TEMPLATES: Mapping[str, PlanTemplate] = MappingProxyType(
    {BROKERAGE_TEMPLATE.name: BROKERAGE_TEMPLATE, QUICK_TEMPLATE.name: QUICK_TEMPLATE}
)


def get_template(name: str) -> PlanTemplate:
    try:
        return PLAN_TEMPLATES[name]
    except KeyError:
        raise ValueError(f"Unknown plan template: {name}") from None


# ---------------------------------------------------------------------------
# Policy and flow configuration
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class CapRateThresholds:
    """Bucket boundaries for ``comparison_to_market``.

    ``inclusive_upper`` makes a cap rate equal to ``upper`` count as above the market.
    """

    upper: float
    lower: float
    inclusive_upper: bool = False

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise ValueError(f"CAP-rate lower threshold {self.lower} exceeds upper {self.upper}")

    def classify(self, cap_rate: float) -> str:
        if cap_rate > self.upper or (self.inclusive_upper and cap_rate == self.upper):
            return "above"
        if cap_rate < self.lower:
            return "below"
        return "average"


@dataclass(frozen=True)
class NeighborhoodScores:
    location: float = 8
    transportation: float = 7
    amenities: float = 6


@dataclass(frozen=True)
class PlanPolicy:
    """Business-policy priors for one plan. Not derived from computed income."""

    expected_rental_time_days: int
    months_vacant: float
    vacancy_risk_score: int
    recommendation_score: int


def _policy_table(expected_days: Tuple[int, int, int]) -> Mapping[str, PlanPolicy]:
    months_vacant = (0.25, 0.4, 0.67)
    risk = (2, 5, 8)
    recommendation = (9, 7, 5)
    return MappingProxyType(
        {
            plan_id: PlanPolicy(expected_days[i], months_vacant[i], risk[i], recommendation[i])
            for i, plan_id in enumerate(PLAN_IDS)
        }
    )


@dataclass(frozen=True)
class FlowConfig:
    """Everything that differs between the brokerage and quick-analysis entry points."""

    name: str
    template: PlanTemplate
    thresholds: CapRateThresholds
    policy: Mapping[str, PlanPolicy]
    neighborhood: NeighborhoodScores
    plan_base: Literal["suggested", "capture"] = "suggested"

    def __post_init__(self) -> None:
        missing = [plan_id for plan_id in PLAN_IDS if plan_id not in self.policy]
        if missing:
            raise ValueError(f"Flow '{self.name}' policy table is missing plans {missing}")


BROKERAGE_FLOW = FlowConfig(
    name="brokerage",
    template=BROKERAGE_TEMPLATE,
    thresholds=CapRateThresholds(upper=GOOD_CAP_RATE, lower=MIN_CAP_RATE),
    policy=_policy_table((7, 12, 20)),
    neighborhood=NeighborhoodScores(8, 7, 6),
)

QUICK_FLOW = FlowConfig(
    name="quick",
    template=QUICK_TEMPLATE,
    thresholds=CapRateThresholds(upper=QUICK_GOOD_CAP_RATE, lower=QUICK_MIN_CAP_RATE, inclusive_upper=True),
    policy=_policy_table((15, 20, 30)),
    neighborhood=NeighborhoodScores(8, 7, 8),
    plan_base="capture",
)


@dataclass(frozen=True)
class ExpenseDefaults:
    maintenance: float = DEFAULT_MAINTENANCE_CLP
    property_tax: float = DEFAULT_PROPERTY_TAX_CLP
    insurance: float = DEFAULT_INSURANCE_CLP


@dataclass(frozen=True)
class EngineConfig:
    uf_value_clp: float = UF_VALUE_CLP
    expenses: ExpenseDefaults = field(default_factory=ExpenseDefaults)
    commissions: Mapping[str, float] = field(
        default_factory=lambda: MappingProxyType(
            {"A": PLAN_A_COMMISSION, "B": PLAN_B_COMMISSION, "C": PLAN_C_COMMISSION}
        )
    )
    base_rent_per_m2: float = BASE_RENT_PER_M2
    default_bedrooms: int = 1
    default_bathrooms: int = 1
    default_parking_spaces: int = 0
    default_storage_units: int = 0
    flows: Mapping[str, FlowConfig] = field(
        default_factory=lambda: MappingProxyType({BROKERAGE_FLOW.name: BROKERAGE_FLOW, QUICK_FLOW.name: QUICK_FLOW})
    )
    cache_enabled: bool = ANALYSIS_CACHE_ENABLED

    def __post_init__(self) -> None:
        values = [self.commissions.get(plan_id) for plan_id in PLAN_IDS]
        if any(value is None for value in values):
            raise ValueError(f"Default commissions must cover plans {PLAN_IDS}")
        if not values[0] > values[1] > values[2]:
            raise ValueError(f"Default commissions must strictly decrease A>B>C, got {values}")

    def flow(self, name: str) -> FlowConfig:
        try:
            return self.flows[name]
        except KeyError:
            raise ValueError(f"Unknown analysis flow: {name}") from None


DEFAULT_CONFIG = EngineConfig()


def validate_config(config: EngineConfig = DEFAULT_CONFIG) -> Tuple[bool, List[str]]:
    """Soft sanity checks on the configured defaults."""

    errors: List[str] = []
    if config.uf_value_clp < 30000 or config.uf_value_clp > 50000:
        errors.append("UF value seems invalid (should be between 30,000 and 50,000 CLP)")
    plan_a = config.commissions["A"]
    if plan_a < 5 or plan_a > 20:
        errors.append("Plan A commission should be between 5% and 20%")
    return (not errors, errors)


__all__ = [
    "PLAN_IDS",
    "ScheduleStep",
    "PlanSpec",
    "PlanTemplate",
    "BROKERAGE_TEMPLATE",
    "QUICK_TEMPLATE",
    "PLAN_TEMPLATES",
    "get_template",
    "CapRateThresholds",
    "NeighborhoodScores",
    "PlanPolicy",
    "FlowConfig",
    "BROKERAGE_FLOW",
    "QUICK_FLOW",
    "ExpenseDefaults",
    "EngineConfig",
    "DEFAULT_CONFIG",
    "validate_config",
]
