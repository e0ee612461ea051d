"""Pydantic models for the raw form record and the normalized property snapshot."""

from __future__ import annotations

from typing import Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

Currency = Literal["CLP", "UF"]
RawField = Optional[Union[str, float, int]]


class RentalAnalysisForm(BaseModel):
    """Flat form record as handed over by the upstream form collaborator.

    Every numeric field is raw text (numbers are accepted too). ``None`` means
    the field was never filled and picks up the configured default, while an
    empty or unparsable value normalizes to zero.
    """

    property_address: str = ""
    property_value_clp: RawField = None
    property_value_uf: RawField = None
    property_value_currency: Currency = "CLP"
    property_size_m2: RawField = None
    bedrooms: RawField = None
    bathrooms: RawField = None
    parking_spaces: RawField = None
    storage_units: RawField = None

    suggested_rent_clp: RawField = None
    suggested_rent_uf: RawField = None
    rent_currency: Currency = "CLP"

    capture_price_clp: RawField = None
    capture_price_uf: RawField = None
    capture_price_currency: Currency = "CLP"

    market_study_notes: str = ""

    plan_a_commission: RawField = None
    plan_b_commission: RawField = None
    plan_c_commission: RawField = None

    annual_maintenance_clp: RawField = None
    annual_property_tax_clp: RawField = None
    annual_insurance_clp: RawField = None

    uf_value_clp: RawField = None

    comparable_1_link: Optional[str] = None
    comparable_1_address: Optional[str] = None
    comparable_1_m2: RawField = None
    comparable_1_bedrooms: RawField = None
    comparable_1_bathrooms: RawField = None
    comparable_1_parking: RawField = None
    comparable_1_storage: RawField = None
    comparable_1_price: RawField = None

    comparable_2_link: Optional[str] = None
    comparable_2_address: Optional[str] = None
    comparable_2_m2: RawField = None
    comparable_2_bedrooms: RawField = None
    comparable_2_bathrooms: RawField = None
    comparable_2_parking: RawField = None
    comparable_2_storage: RawField = None
    comparable_2_price: RawField = None

    comparable_3_link: Optional[str] = None
    comparable_3_address: Optional[str] = None
    comparable_3_m2: RawField = None
    comparable_3_bedrooms: RawField = None
    comparable_3_bathrooms: RawField = None
    comparable_3_parking: RawField = None
    comparable_3_storage: RawField = None
    comparable_3_price: RawField = None


class ExchangeRate(BaseModel):
    model_config = ConfigDict(frozen=True)

    uf_value_clp: float

    def to_clp(self, amount: float, currency: Currency) -> float:
        if currency == "UF":
            return amount * self.uf_value_clp
        return amount


class RentQuote(BaseModel):
    model_config = ConfigDict(frozen=True)

    amount: float
    currency: Currency = "CLP"

    def to_clp(self, rate: ExchangeRate) -> float:
        return rate.to_clp(self.amount, self.currency)


class ExpenseProfile(BaseModel):
    model_config = ConfigDict(frozen=True)

    maintenance: float = 0.0
    property_tax: float = 0.0
    insurance: float = 0.0

    @property
    def annual_total(self) -> float:
        return self.maintenance + self.property_tax + self.insurance


class PropertyInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    address: str = ""
    value_clp: float = 0.0
    value_uf: float = 0.0
    market_rent_clp: float = 0.0
    size_m2: float = 0.0
    bedrooms: int = 1
    bathrooms: int = 1
    parking_spaces: int = 0
    storage_units: int = 0


class ComparableInput(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: int
    address: str
    size_m2: float = 0.0
    bedrooms: int = 0
    bathrooms: int = 0
    parking_spaces: int = 0
    storage_units: int = 0
    rent_clp: float = 0.0
    link: Optional[str] = None
