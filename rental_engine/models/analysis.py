"""Pydantic schemas for rental analysis responses."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .property import PropertyInput

PlanIdField = Literal["A", "B", "C"]


class ComparableProperty(BaseModel):
    id: int
    address: str
    size_m2: float
    bedrooms: int
    bathrooms: int
    parking_spaces: int
    storage_units: int
    rent_clp: float
    price_per_m2: float
    similarity_score: float
    link: Optional[str] = None


class MarketRange(BaseModel):
    min_rent_clp: float
    max_rent_clp: float


class NeighborhoodFactors(BaseModel):
    location_score: float
    transportation_access: float
    amenities_score: float


class MarketStudy(BaseModel):
    comparable_properties: List[ComparableProperty] = Field(default_factory=list)
    average_rent_per_m2: float
    comparables_average_rent_per_m2: float = 0.0
    market_range: MarketRange
    neighborhood_factors: NeighborhoodFactors
    notes: str = ""


class CapRateAnalysis(BaseModel):
    property_value_clp: float
    annual_rental_income: float
    annual_expenses: float
    net_operating_income: float
    cap_rate_percentage: float
    comparison_to_market: Literal["above", "average", "below"]


class VacancyImpact(BaseModel):
    days_vacant: int
    percentage_annual_loss: float
    lost_income_clp: float
    break_even_reduction_percentage: float


class PriceAdjustment(BaseModel):
    day: int
    new_rent_clp: float
    percentage_reduction: float


class CommercialPlan(BaseModel):
    id: PlanIdField
    name: str
    description: str
    initial_rent_clp: float
    final_rent_clp: float
    commission_percentage: float
    marketing_duration_days: int
    service_level: Literal["basic", "standard", "premium"]
    price_adjustment_schedule: List[PriceAdjustment]
    success_probability_percentage: Optional[float] = None
    included_services: List[str] = Field(default_factory=list)


class PlanComparison(BaseModel):
    plan_id: PlanIdField
    expected_rental_time: int
    months_vacant: float
    average_effective_rent_clp: float
    total_commission: float
    net_annual_income: float
    final_cap_rate_percentage: float
    vacancy_risk_score: int
    recommendation_score: int


class Recommendation(BaseModel):
    code: str
    message: str


class RentalCalculations(BaseModel):
    cap_rate: float
    annual_rental_yield: float
    monthly_net_income: float
    vacancy_cost_per_month: float
    break_even_rent_reduction: float
    plan_comparisons: List[PlanComparison]


class RentalAnalysisResult(BaseModel):
    flow: Literal["brokerage", "quick"] = "brokerage"
    property: PropertyInput
    plans: List[CommercialPlan]
    market_study: MarketStudy
    cap_rate_analysis: CapRateAnalysis
    vacancy_impact: VacancyImpact
    plan_comparisons: List[PlanComparison]
    recommendations: List[Recommendation] = Field(default_factory=list)
    recommended_initial_rent: float


class SuggestedRent(BaseModel):
    size_m2: float
    average_rent_per_m2: float
    suggested_rent_clp: int
