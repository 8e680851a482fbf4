"""Ingestion utilities for the equipment reference catalog."""

import logging
from dataclasses import dataclass, field
from typing import Dict

logger = logging.getLogger("ingestion")
if not logger.handlers:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


class CatalogLoadError(Exception):
    """Raised when the catalog source is structurally malformed."""


@dataclass
class IngestionMetrics:
    """Track statistics while loading the equipment catalog."""

    csv_rows_processed: int = 0
    records_loaded: int = 0
    aliases_indexed: int = 0
    extra: Dict[str, int] = field(default_factory=dict)

    def add_rows(self, count: int) -> None:
        self.csv_rows_processed += count
        logger.debug("Added %s CSV rows; total=%s", count, self.csv_rows_processed)

    def mark_record(self) -> None:
        self.records_loaded += 1

    def mark_alias(self) -> None:
        self.aliases_indexed += 1
        logger.debug("Indexed short code alias; total=%s", self.aliases_indexed)

    def increment_extra(self, key: str, count: int = 1) -> None:
        self.extra[key] = self.extra.get(key, 0) + count
        logger.debug("Incremented %s metric by %s; total=%s", key, count, self.extra[key])


__all__ = ["CatalogLoadError", "IngestionMetrics", "logger"]
