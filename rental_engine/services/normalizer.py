"""Turn the raw form record into numeric CLP values.

The normalizer is total: missing, empty or malformed fields never raise. A
field that was never provided (``None``) takes its configured default where one
exists, anything else that does not parse becomes zero.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple

from ..config import DEFAULT_CONFIG, PLAN_IDS, EngineConfig
from ..models.property import (
    ComparableInput,
    Currency,
    ExchangeRate,
    ExpenseProfile,
    PropertyInput,
    RawField,
    RentalAnalysisForm,
    RentQuote,
)
from ..utils.coerce import finite_or, to_float, to_float_or, to_int, to_int_or, to_str
from ..utils.logging import get_logger, kv

LOGGER = get_logger("services.normalizer")

MAX_COMPARABLES = 3


@dataclass(frozen=True)
class NormalizedInputs:
    """Immutable, hashable snapshot every downstream calculation reads from."""

    subject: PropertyInput
    exchange_rate: ExchangeRate
    suggested_rent_clp: float
    capture_price_clp: float
    expenses: ExpenseProfile
    commissions: Tuple[Tuple[str, float], ...]
    comparables: Tuple[ComparableInput, ...] = ()
    market_study_notes: str = ""

    @property
    def commission_map(self) -> Dict[str, float]:
        return dict(self.commissions)

    @property
    def capture_or_suggested_rent_clp(self) -> float:
        return self.capture_price_clp or self.suggested_rent_clp


def _or_default(value: RawField, default: float) -> float:
    return default if value is None else to_float(value)


def resolve_exchange_rate(raw: RawField, config: EngineConfig = DEFAULT_CONFIG) -> ExchangeRate:
    """Unset, unparsable or non-positive rates fall back to the configured UF value."""

    value = to_float(raw)
    if value <= 0:
        value = config.uf_value_clp
    return ExchangeRate(uf_value_clp=value)


def quote(amount_clp: RawField, amount_uf: RawField, currency: Currency) -> RentQuote:
    if currency == "UF":
        return RentQuote(amount=to_float(amount_uf), currency="UF")
    return RentQuote(amount=to_float(amount_clp), currency="CLP")


def to_clp(amount: RentQuote, rate: ExchangeRate) -> float:
    """Convert to CLP; a UF amount whose conversion overflows normalizes to zero."""

    return finite_or(amount.to_clp(rate))


def normalize_comparables(form: RentalAnalysisForm) -> Tuple[ComparableInput, ...]:
    comparables = []
    for index in range(1, MAX_COMPARABLES + 1):
        address = to_str(getattr(form, f"comparable_{index}_address")).strip()
        price = getattr(form, f"comparable_{index}_price")
        if not address or price in (None, ""):
            continue
        comparables.append(
            ComparableInput(
                id=index,
                address=address,
                size_m2=to_float(getattr(form, f"comparable_{index}_m2")),
                bedrooms=to_int(getattr(form, f"comparable_{index}_bedrooms")),
                bathrooms=to_int(getattr(form, f"comparable_{index}_bathrooms")),
                parking_spaces=to_int(getattr(form, f"comparable_{index}_parking")),
                storage_units=to_int(getattr(form, f"comparable_{index}_storage")),
                rent_clp=to_float(price),
                link=getattr(form, f"comparable_{index}_link") or None,
            )
        )
    return tuple(comparables)


def normalize(form: RentalAnalysisForm, config: EngineConfig = DEFAULT_CONFIG) -> NormalizedInputs:
    rate = resolve_exchange_rate(form.uf_value_clp, config)

    value_quote = quote(form.property_value_clp, form.property_value_uf, form.property_value_currency)
    property_value_clp = to_clp(value_quote, rate)
    if value_quote.currency == "UF":
        property_value_uf = value_quote.amount
    else:
        property_value_uf = to_float(form.property_value_uf) or property_value_clp / rate.uf_value_clp

    suggested_rent_clp = to_clp(quote(form.suggested_rent_clp, form.suggested_rent_uf, form.rent_currency), rate)
    capture_price_clp = to_clp(quote(form.capture_price_clp, form.capture_price_uf, form.capture_price_currency), rate)

    expenses = ExpenseProfile(
        maintenance=_or_default(form.annual_maintenance_clp, config.expenses.maintenance),
        property_tax=_or_default(form.annual_property_tax_clp, config.expenses.property_tax),
        insurance=_or_default(form.annual_insurance_clp, config.expenses.insurance),
    )

    commissions = tuple(
        (plan_id, to_float_or(getattr(form, f"plan_{plan_id.lower()}_commission"), config.commissions[plan_id]))
        for plan_id in PLAN_IDS
    )

    snapshot = PropertyInput(
        address=form.property_address.strip(),
        value_clp=property_value_clp,
        value_uf=property_value_uf,
        market_rent_clp=suggested_rent_clp,
        size_m2=to_float(form.property_size_m2),
        bedrooms=to_int_or(form.bedrooms, config.default_bedrooms),
        bathrooms=to_int_or(form.bathrooms, config.default_bathrooms),
        parking_spaces=to_int_or(form.parking_spaces, config.default_parking_spaces),
        storage_units=to_int_or(form.storage_units, config.default_storage_units),
    )

    normalized = NormalizedInputs(
        subject=snapshot,
        exchange_rate=rate,
        suggested_rent_clp=suggested_rent_clp,
        capture_price_clp=capture_price_clp,
        expenses=expenses,
        commissions=commissions,
        comparables=normalize_comparables(form),
        market_study_notes=form.market_study_notes.strip(),
    )
    LOGGER.debug(
        "normalized %s",
        kv(
            value_clp=property_value_clp,
            rent_clp=suggested_rent_clp,
            capture_clp=capture_price_clp,
            uf=rate.uf_value_clp,
            comparables=len(normalized.comparables),
        ),
    )
    return normalized


__all__ = ["NormalizedInputs", "normalize", "normalize_comparables", "resolve_exchange_rate", "quote", "to_clp"]
