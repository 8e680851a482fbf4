"""Pydantic schemas for sizing results."""

from pydantic import BaseModel, ConfigDict


class ResolvedEquipment(BaseModel):
    """One canonical model with its quantity-weighted capacities."""
    model_config = ConfigDict(protected_namespaces=())

    model_number: str
    quantity: int
    ahri_number: int | None = None
    btu_95_min: float
    btu_design_max: float


class UnresolvedEquipment(BaseModel):
    """A requested identifier with no catalog match."""
    identifier: str
    quantity: int


class CalculationTotals(BaseModel):
    model_config = ConfigDict(frozen=True)

    btu_95_min: float = 0.0
    btu_5_max: float = 0.0
    btu_17_max: float = 0.0
    btu_17_rated: float = 0.0
    btu_design_max: float = 0.0


class RecommendationRange(BaseModel):
    """Equipment size band derived from the design-temperature total."""
    min: float
    mid: float
    max: float


class SizingReport(BaseModel):
    design_temp: float
    resolved: list[ResolvedEquipment]
    unresolved: list[UnresolvedEquipment]
    totals: CalculationTotals
    recommendation: RecommendationRange
