"""Sum per-model contributions into report totals."""

from typing import Mapping

from ingestion.catalog import EquipmentRecord

from . import logger
from .aggregator import AggregatedDemand
from .interpolation import capacity_at
from .models import (
    CalculationTotals,
    RecommendationRange,
    ResolvedEquipment,
    SizingReport,
    UnresolvedEquipment,
)

# Oversizing margins applied to the design-temperature total
RECOMMEND_MIN_DIVISOR = 1.2
RECOMMEND_MID_DIVISOR = 1.1


def recommend_range(total_btu_design_max: float) -> RecommendationRange:
    """Derive the recommended capacity band from the design-temperature total."""
    return RecommendationRange(
        min=total_btu_design_max / RECOMMEND_MIN_DIVISOR,
        mid=total_btu_design_max / RECOMMEND_MID_DIVISOR,
        max=total_btu_design_max,
    )


def build_report(
    aggregated: AggregatedDemand,
    catalog: Mapping[str, EquipmentRecord],
    design_temp: float,
) -> SizingReport:
    """
    Compute per-model rows and the five running totals.

    Models are processed in ascending model-number order; missing fields
    count as zero. Unresolved identifiers are carried through with no
    contribution.
    """
    btu_95_min = 0.0
    btu_5_max = 0.0
    btu_17_max = 0.0
    btu_17_rated = 0.0
    btu_design_max = 0.0
    resolved: list[ResolvedEquipment] = []

    for model_number, quantity in sorted(aggregated.demand.items()):
        record = aggregated.records.get(model_number) or catalog[model_number]
        qty = float(quantity)
        row_95_min = (record.btu_95_min or 0.0) * qty
        row_design_max = capacity_at(record, design_temp) * qty

        btu_95_min += row_95_min
        btu_design_max += row_design_max
        btu_5_max += (record.btu_5_max or 0.0) * qty
        btu_17_max += (record.btu_17_max or 0.0) * qty
        btu_17_rated += (record.btu_17_rated or 0.0) * qty

        logger.debug(
            "%s x %s: %.0f Btu @95 min, %.0f Btu @%g max",
            model_number, quantity, row_95_min, row_design_max, design_temp,
        )
        resolved.append(
            ResolvedEquipment(
                model_number=record.model_number,
                quantity=quantity,
                ahri_number=record.ahri_number,
                btu_95_min=row_95_min,
                btu_design_max=row_design_max,
            )
        )

    totals = CalculationTotals(
        btu_95_min=btu_95_min,
        btu_5_max=btu_5_max,
        btu_17_max=btu_17_max,
        btu_17_rated=btu_17_rated,
        btu_design_max=btu_design_max,
    )
    return SizingReport(
        design_temp=design_temp,
        resolved=resolved,
        unresolved=[
            UnresolvedEquipment(identifier=identifier, quantity=quantity)
            for identifier, quantity in aggregated.unresolved
        ],
        totals=totals,
        recommendation=recommend_range(totals.btu_design_max),
    )
