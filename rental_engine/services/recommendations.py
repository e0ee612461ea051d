"""Advisory messages attached to an analysis."""

from __future__ import annotations

from typing import List

from ..models.analysis import Recommendation
from ..utils.formatting import format_currency, format_percentage

EXCELLENT_CAP_RATE = 8.0
GOOD_CAP_RATE = 6.0
MODERATE_CAP_RATE = 4.0


def cap_rate_tier(cap_rate: float) -> Recommendation:
    if cap_rate >= EXCELLENT_CAP_RATE:
        code, advice = "cap_rate_excellent", "excellent return, a very attractive investment"
    elif cap_rate >= GOOD_CAP_RATE:
        code, advice = "cap_rate_good", "good return, competitive in the current market"
    elif cap_rate >= MODERATE_CAP_RATE:
        code, advice = "cap_rate_moderate", "moderate return, consider tightening expenses"
    else:
        code, advice = "cap_rate_low", "low return, consider revisiting the asking rent"
    return Recommendation(code=code, message=f"CAP rate of {format_percentage(cap_rate)}: {advice}")


def build_recommendations(cap_rate: float, suggested_rent_clp: float) -> List[Recommendation]:
    items = [cap_rate_tier(cap_rate)]
    if suggested_rent_clp > 0:
        items.append(
            Recommendation(
                code="rent_aligned",
                message=f"The suggested rent of {format_currency(suggested_rent_clp)} is in line with the market",
            )
        )
    items.append(
        Recommendation(code="review_comparables", message="Review comparables quarterly to stay competitive")
    )
    items.append(
        Recommendation(code="staged_adjustments", message="Apply staged price adjustments to speed up the lease")
    )
    return items


__all__ = ["cap_rate_tier", "build_recommendations"]
