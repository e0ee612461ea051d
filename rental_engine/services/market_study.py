"""Heuristic market-rent estimate driven by property size and neighborhood scores."""

from __future__ import annotations

import math
from typing import Sequence

from ..config import BASE_RENT_PER_M2, NeighborhoodScores
from ..models.analysis import ComparableProperty, MarketRange, MarketStudy, NeighborhoodFactors, SuggestedRent
from ..utils.coerce import finite_or
from ..utils.logging import get_logger, kv

LOGGER = get_logger("services.market_study")

RANGE_LOW_FACTOR = 0.85
RANGE_HIGH_FACTOR = 1.15


def adjusted_rent_per_m2(neighborhood: NeighborhoodScores, base_rent_per_m2: float = BASE_RENT_PER_M2) -> float:
    """Scale the base CLP/m2 by the neighborhood scores.

    With scores in [1, 10] the factor ``0.7 + multiplier * 0.6`` stays within
    roughly 0.76x to 1.3x of the base figure.
    """

    market_multiplier = (neighborhood.location + neighborhood.transportation + neighborhood.amenities) / 30
    return base_rent_per_m2 * (0.7 + market_multiplier * 0.6)


def estimate_market(
    size_m2: float,
    neighborhood: NeighborhoodScores,
    base_rent_per_m2: float = BASE_RENT_PER_M2,
    comparables: Sequence[ComparableProperty] = (),
    comparables_average_rent_per_m2: float = 0.0,
    notes: str = "",
) -> MarketStudy:
    rent_per_m2 = adjusted_rent_per_m2(neighborhood, base_rent_per_m2)
    LOGGER.debug("market_study %s", kv(size_m2=size_m2, rent_per_m2=rent_per_m2, comparables=len(comparables)))
    return MarketStudy(
        comparable_properties=list(comparables),
        average_rent_per_m2=rent_per_m2,
        comparables_average_rent_per_m2=comparables_average_rent_per_m2,
        market_range=MarketRange(
            min_rent_clp=finite_or(size_m2 * rent_per_m2 * RANGE_LOW_FACTOR),
            max_rent_clp=finite_or(size_m2 * rent_per_m2 * RANGE_HIGH_FACTOR),
        ),
        neighborhood_factors=NeighborhoodFactors(
            location_score=neighborhood.location,
            transportation_access=neighborhood.transportation,
            amenities_score=neighborhood.amenities,
        ),
        notes=notes,
    )


def suggest_initial_rent(size_m2: float, study: MarketStudy) -> SuggestedRent:
    estimate = finite_or(size_m2 * study.average_rent_per_m2) if size_m2 > 0 else 0.0
    # half-up
    suggested = int(math.floor(estimate + 0.5))
    return SuggestedRent(
        size_m2=size_m2,
        average_rent_per_m2=study.average_rent_per_m2,
        suggested_rent_clp=suggested,
    )


__all__ = ["adjusted_rent_per_m2", "estimate_market", "suggest_initial_rent"]
