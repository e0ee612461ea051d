"""Comparable rental listing table for the market study."""

from __future__ import annotations

from typing import List, Sequence, Tuple

import pandas as pd

from ..models.analysis import ComparableProperty
from ..models.property import ComparableInput
from ..utils.logging import get_logger, kv

LOGGER = get_logger("services.comps")

DEFAULT_SIMILARITY = 85.0


class CompsService:
    def get_ranked_comps(
        self, subject_size_m2: float, comparables: Sequence[ComparableInput]
    ) -> Tuple[List[ComparableProperty], float]:
        """Return comparables ordered by size similarity and their mean CLP/m2."""

        if not comparables:
            return [], 0.0

        df = pd.DataFrame([comp.model_dump() for comp in comparables])
        df["size_m2"] = pd.to_numeric(df["size_m2"], errors="coerce").fillna(0.0)
        df["rent_clp"] = pd.to_numeric(df["rent_clp"], errors="coerce").fillna(0.0)

        has_size = df["size_m2"] > 0
        df["price_per_m2"] = 0.0
        df.loc[has_size, "price_per_m2"] = df.loc[has_size, "rent_clp"] / df.loc[has_size, "size_m2"]

        if subject_size_m2 > 0:
            larger = df["size_m2"].where(df["size_m2"] > subject_size_m2, subject_size_m2)
            gap = (df["size_m2"] - subject_size_m2).abs() / larger
            df["similarity_score"] = (100 * (1 - gap)).clip(lower=0, upper=100)
            df.loc[~has_size, "similarity_score"] = DEFAULT_SIMILARITY
        else:
            df["similarity_score"] = DEFAULT_SIMILARITY

        df = df.sort_values(["similarity_score", "id"], ascending=[False, True], kind="stable")
        priced = df.loc[has_size, "price_per_m2"]
        average_per_m2 = float(priced.mean()) if not priced.empty else 0.0

        comps: List[ComparableProperty] = []
        for _, row in df.iterrows():
            comps.append(
                ComparableProperty(
                    id=int(row["id"]),
                    address=str(row["address"]),
                    size_m2=float(row["size_m2"]),
                    bedrooms=int(row["bedrooms"]),
                    bathrooms=int(row["bathrooms"]),
                    parking_spaces=int(row["parking_spaces"]),
                    storage_units=int(row["storage_units"]),
                    rent_clp=float(row["rent_clp"]),
                    price_per_m2=float(row["price_per_m2"]),
                    similarity_score=round(float(row["similarity_score"]), 2),
                    link=row["link"] if isinstance(row["link"], str) else None,
                )
            )
        LOGGER.debug("ranked_comps %s", kv(count=len(comps), avg_per_m2=average_per_m2))
        return comps, average_per_m2
