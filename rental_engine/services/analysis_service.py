"""Compose the rental pipeline and assemble structured results.

normalize -> market study -> CAP rate -> vacancy -> plans -> comparison -> result.
Every run works from its own immutable snapshot, so a new form state simply
produces a new result; identical snapshots are served from the memo cache.
"""

from __future__ import annotations

from typing import Optional

from ..config import DEFAULT_CONFIG, EngineConfig, FlowConfig
from ..models.analysis import MarketStudy, RentalAnalysisResult, RentalCalculations, SuggestedRent
from ..models.property import RentalAnalysisForm
from ..utils.caching import clear_prefix, memoize
from ..utils.logging import get_logger, kv
from .cap_rate import annual_rental_yield, calculate_cap_rate
from .comparison import AverageRentMethod, compare_plans
from .comps_service import CompsService
from .market_study import estimate_market, suggest_initial_rent
from .normalizer import NormalizedInputs, normalize
from .plans import generate_plans
from .recommendations import build_recommendations
from .vacancy import calculate_vacancy_impact

LOGGER = get_logger("services.analysis")

RESULT_CACHE_PREFIX = "analysis.result"
RESULT_CACHE_SIZE = 100


class AnalysisService:
    def __init__(self, config: EngineConfig = DEFAULT_CONFIG, comps_service: Optional[CompsService] = None) -> None:
        self.config = config
        self.comps_service = comps_service or CompsService()

    # ------------------------------------------------------------------
    # Public entry points
    def analyze(
        self,
        form: RentalAnalysisForm,
        flow: str = "brokerage",
        average_rent_method: AverageRentMethod = "midpoint",
    ) -> RentalAnalysisResult:
        normalized = normalize(form, self.config)
        return self.analyze_normalized(normalized, flow=flow, average_rent_method=average_rent_method)

    def analyze_normalized(
        self,
        normalized: NormalizedInputs,
        flow: str = "brokerage",
        average_rent_method: AverageRentMethod = "midpoint",
    ) -> RentalAnalysisResult:
        # fail before touching the cache
        self.config.flow(flow)
        if not self.config.cache_enabled:
            return self._pipeline(normalized, flow, average_rent_method)
        return self._cached_pipeline(normalized, flow, average_rent_method).model_copy(deep=True)

    def calculations(self, form: RentalAnalysisForm, flow: str = "brokerage") -> RentalCalculations:
        result = self.analyze(form, flow=flow)
        cap = result.cap_rate_analysis
        return RentalCalculations(
            cap_rate=cap.cap_rate_percentage,
            annual_rental_yield=annual_rental_yield(cap),
            monthly_net_income=cap.net_operating_income / 12,
            vacancy_cost_per_month=result.vacancy_impact.lost_income_clp,
            break_even_rent_reduction=result.vacancy_impact.break_even_reduction_percentage,
            plan_comparisons=result.plan_comparisons,
        )

    def suggest_initial_rent(self, form: RentalAnalysisForm, flow: str = "brokerage") -> SuggestedRent:
        normalized = normalize(form, self.config)
        study = self._market_study(normalized, self.config.flow(flow))
        return suggest_initial_rent(normalized.subject.size_m2, study)

    def clear_cache(self) -> None:
        clear_prefix(RESULT_CACHE_PREFIX)

    # ------------------------------------------------------------------
    # Pipeline
    @memoize(RESULT_CACHE_PREFIX, maxsize=RESULT_CACHE_SIZE)
    def _cached_pipeline(
        self, normalized: NormalizedInputs, flow: str, average_rent_method: AverageRentMethod
    ) -> RentalAnalysisResult:
        return self._pipeline(normalized, flow, average_rent_method)

    def _pipeline(
        self, normalized: NormalizedInputs, flow: str, average_rent_method: AverageRentMethod
    ) -> RentalAnalysisResult:
        flow_config = self.config.flow(flow)
        subject = normalized.subject

        market_study = self._market_study(normalized, flow_config)
        cap_rate_analysis = calculate_cap_rate(
            subject.value_clp,
            normalized.suggested_rent_clp,
            normalized.expenses,
            flow_config.thresholds,
        )
        vacancy_impact = calculate_vacancy_impact(normalized.suggested_rent_clp)

        base_rent = self._plan_base_rent(normalized, flow_config)
        plans = generate_plans(base_rent, normalized.commission_map, flow_config.template)
        comparisons = compare_plans(
            plans,
            base_rent,
            policy=flow_config.policy,
            property_value_clp=subject.value_clp,
            annual_expenses=cap_rate_analysis.annual_expenses,
            average_rent_method=average_rent_method,
        )

        result = RentalAnalysisResult(
            flow=flow_config.name,
            property=subject,
            plans=plans,
            market_study=market_study,
            cap_rate_analysis=cap_rate_analysis,
            vacancy_impact=vacancy_impact,
            plan_comparisons=comparisons,
            recommendations=build_recommendations(
                cap_rate_analysis.cap_rate_percentage, normalized.suggested_rent_clp
            ),
            recommended_initial_rent=base_rent,
        )
        LOGGER.info(
            "analysis_assembled %s",
            kv(
                flow=flow_config.name,
                cap_rate=cap_rate_analysis.cap_rate_percentage,
                bucket=cap_rate_analysis.comparison_to_market,
                base_rent_clp=base_rent,
            ),
        )
        return result

    def _market_study(self, normalized: NormalizedInputs, flow_config: FlowConfig) -> MarketStudy:
        size_m2 = normalized.subject.size_m2
        comps, comps_per_m2 = self.comps_service.get_ranked_comps(size_m2, normalized.comparables)
        return estimate_market(
            size_m2,
            flow_config.neighborhood,
            base_rent_per_m2=self.config.base_rent_per_m2,
            comparables=comps,
            comparables_average_rent_per_m2=comps_per_m2,
            notes=normalized.market_study_notes,
        )

    @staticmethod
    def _plan_base_rent(normalized: NormalizedInputs, flow_config: FlowConfig) -> float:
        if flow_config.plan_base == "capture":
            return normalized.capture_or_suggested_rent_clp
        return normalized.suggested_rent_clp


_SERVICE_SINGLETON: AnalysisService | None = None


def _get_default_service() -> AnalysisService:
    global _SERVICE_SINGLETON
    if _SERVICE_SINGLETON is None:
        _SERVICE_SINGLETON = AnalysisService(DEFAULT_CONFIG)
    return _SERVICE_SINGLETON


def analyze_rental(form: RentalAnalysisForm, flow: str = "brokerage") -> RentalAnalysisResult:
    """Module-level helper used by the FastAPI layer."""

    service = _get_default_service()
    return service.analyze(form, flow=flow)
