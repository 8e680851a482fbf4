"""Resolve requested identifiers against the catalog and merge quantities."""

from dataclasses import dataclass, field
from typing import Dict, List, Mapping, Tuple

from ingestion.catalog import EquipmentRecord

from . import logger


@dataclass
class AggregatedDemand:
    """Requested quantities keyed by canonical model number, plus misses.

    ``records`` holds the record each model number was resolved to, so later
    stages never look it up again through the shared alias namespace.
    """

    demand: Dict[str, int] = field(default_factory=dict)
    records: Dict[str, EquipmentRecord] = field(default_factory=dict)
    unresolved: List[Tuple[str, int]] = field(default_factory=list)


def aggregate(
    requested: Mapping[str, int],
    catalog: Mapping[str, EquipmentRecord],
) -> AggregatedDemand:
    """Map every requested identifier onto its canonical model number.

    Model numbers and short codes share one key namespace in ``catalog``.
    Quantities reaching the same model through different identifiers are
    summed. Unresolved identifiers are returned sorted by identifier.
    """
    result = AggregatedDemand()
    for identifier, quantity in requested.items():
        record = catalog.get(identifier)
        if record is None:
            logger.debug("No catalog entry for %r", identifier)
            result.unresolved.append((identifier, quantity))
            continue
        if identifier != record.model_number:
            logger.debug("Resolved alias %r -> %s", identifier, record.model_number)
        result.records[record.model_number] = record
        result.demand[record.model_number] = result.demand.get(record.model_number, 0) + quantity

    result.unresolved.sort(key=lambda item: item[0])
    return result
