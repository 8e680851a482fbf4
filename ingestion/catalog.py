"""Equipment records and the alias-aware catalog that indexes them."""

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Dict, Iterable, Optional, Tuple

from . import IngestionMetrics, logger


@dataclass(frozen=True)
class EquipmentRecord:
    """One catalog entry with its published heating performance points.

    Every numeric field is optional; loaders translate blanks, garbage and
    sentinel values to ``None`` so downstream code never sees them.
    """

    model_number: str
    short_code: Optional[str] = None
    ahri_number: Optional[int] = None
    btu_95_min: Optional[float] = None
    btu_lowest_max: Optional[float] = None
    lowest_temp: Optional[float] = None
    btu_5_max: Optional[float] = None
    btu_17_max: Optional[float] = None
    btu_17_rated: Optional[float] = None
    btu_47_max: Optional[float] = None


class Catalog(Mapping):
    """Read-only lookup of records by model number or short code.

    Records are stored once; the index maps both key spaces onto the same
    record object.
    """

    def __init__(
        self,
        records: Iterable[EquipmentRecord],
        metrics: IngestionMetrics | None = None,
    ) -> None:
        self._records: Tuple[EquipmentRecord, ...] = tuple(records)
        self._index: Dict[str, EquipmentRecord] = {}
        for record in self._records:
            self._register(record.model_number, record)
            if metrics:
                metrics.mark_record()
            if record.short_code:
                self._register(record.short_code, record)
                if metrics:
                    metrics.mark_alias()

    def _register(self, key: str, record: EquipmentRecord) -> None:
        existing = self._index.get(key)
        if existing is not None and existing is not record:
            logger.warning(
                "Catalog key %r already maps to %s; replacing with %s",
                key,
                existing.model_number,
                record.model_number,
            )
        self._index[key] = record

    @property
    def records(self) -> Tuple[EquipmentRecord, ...]:
        return self._records

    def __getitem__(self, key: str) -> EquipmentRecord:
        return self._index[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._index)

    def __len__(self) -> int:
        return len(self._index)

    def __repr__(self) -> str:
        return f"Catalog(records={len(self._records)}, keys={len(self._index)})"
