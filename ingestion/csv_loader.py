"""CSV ingestion utilities for the equipment catalog."""

import csv
import math
from functools import lru_cache
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Tuple

from . import CatalogLoadError, IngestionMetrics, logger
from .catalog import Catalog, EquipmentRecord

EMBEDDED_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "equipment_info.csv"

# Source rows use values at or below this to mark a blank/invalid cell.
SENTINEL_FLOOR = -90000.0

MODEL_NUMBER_COLUMN = "model_number"
SHORT_CODE_COLUMN = "machine_code"
AHRI_COLUMN = "ahri"

# Normalized header -> EquipmentRecord attribute
CAPACITY_COLUMNS = {
    "btu@95min": "btu_95_min",
    "btu@lowest_max": "btu_lowest_max",
    "lowest_temperature": "lowest_temp",
    "btu@5max": "btu_5_max",
    "btu@17max": "btu_17_max",
    "btu@17rated": "btu_17_rated",
    "btu@47max": "btu_47_max",
}


def normalize_header(header: str) -> str:
    """Normalize a CSV header by lower-casing and replacing whitespace with underscores."""

    return "_".join(header.strip().lower().split())


def parse_optional_float(value: Optional[str]) -> Optional[float]:
    """Parse a capacity/temperature cell, returning ``None`` for blanks, garbage and sentinels."""

    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    # NaN fails the comparison and is dropped with the sentinels
    if number > SENTINEL_FLOOR:
        return number
    return None


def parse_ahri_number(value: Optional[str]) -> Optional[int]:
    """Parse an AHRI certificate number; non-positive or unparseable values become ``None``."""

    if value is None:
        return None
    text = value.strip()
    if not text:
        return None
    try:
        number = float(text)
    except ValueError:
        return None
    if not math.isfinite(number) or number <= 0:
        return None
    return int(number)


def load_csv_records(
    csv_path: Path,
    metrics: IngestionMetrics | None = None,
) -> Tuple[List[Dict[str, str]], Dict[str, str]]:
    """Load a CSV file and normalize its headers.

    Args:
        csv_path: Path to the CSV file.
        metrics: Optional metrics collector.

    Returns:
        A tuple containing a list of normalized records and a canonical field map
        relating normalized headers back to their original names.

    Raises:
        CatalogLoadError: if the file is missing or a row does not match the header.
    """

    normalized_records: List[Dict[str, str]] = []
    field_map: Dict[str, str] = {}

    logger.info("Loading CSV file: %s", csv_path)
    try:
        handle = csv_path.open(newline="", encoding="utf-8")
    except OSError as exc:
        raise CatalogLoadError(f"Cannot read catalog {csv_path}: {exc}") from exc

    with handle:
        reader = csv.DictReader(handle)
        field_map = {normalize_header(h): h for h in reader.fieldnames or []}
        for row in reader:
            if None in row or any(value is None for value in row.values()):
                raise CatalogLoadError(
                    f"CSV Parse Error: {csv_path} line {reader.line_num} has "
                    f"a different number of fields than the header"
                )
            normalized = {
                normalize_header(key): value.strip() for key, value in row.items()
            }
            normalized_records.append(normalized)

    row_count = len(normalized_records)
    logger.info("Processed %s rows from %s", row_count, csv_path)
    if metrics:
        metrics.add_rows(row_count)
    return normalized_records, field_map


def build_record(
    row: Mapping[str, str],
    metrics: IngestionMetrics | None = None,
) -> EquipmentRecord:
    """Convert one normalized CSV row into an :class:`EquipmentRecord`."""

    model_number = (row.get(MODEL_NUMBER_COLUMN) or "").strip()
    if not model_number:
        raise CatalogLoadError(f"CSV Parse Error: row without a model number: {dict(row)}")

    values: Dict[str, Optional[float]] = {}
    for column, attribute in CAPACITY_COLUMNS.items():
        raw = row.get(column)
        parsed = parse_optional_float(raw)
        if parsed is None and raw and raw.strip():
            logger.debug("Discarding %s=%r for %s", column, raw, model_number)
            if metrics:
                metrics.increment_extra(f"discarded_{attribute}")
        values[attribute] = parsed

    return EquipmentRecord(
        model_number=model_number,
        short_code=(row.get(SHORT_CODE_COLUMN) or "").strip() or None,
        ahri_number=parse_ahri_number(row.get(AHRI_COLUMN)),
        **values,
    )


def load_catalog(
    csv_path: Path | None = None,
    metrics: IngestionMetrics | None = None,
) -> Catalog:
    """Load the equipment catalog from ``csv_path`` (the embedded table by default)."""

    path = Path(csv_path) if csv_path is not None else EMBEDDED_CATALOG_PATH
    rows, field_map = load_csv_records(path, metrics=metrics)
    if MODEL_NUMBER_COLUMN not in field_map:
        raise CatalogLoadError(
            f"CSV Parse Error: {path} is missing the 'model number' column "
            f"(found: {', '.join(field_map.values()) or 'no header'})"
        )

    catalog = Catalog((build_record(row, metrics=metrics) for row in rows), metrics=metrics)
    logger.info("Loaded %s equipment records from %s", len(catalog.records), path)
    return catalog


@lru_cache(maxsize=1)
def load_embedded_catalog() -> Catalog:
    """Load the embedded catalog once per process and share it read-only."""

    return load_catalog(EMBEDDED_CATALOG_PATH)
