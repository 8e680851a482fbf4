"""Aggregate heating capacity sizing for lists of catalog equipment."""

import logging

logger = logging.getLogger("sizing")
if not logger.handlers:
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


__all__ = ["logger"]
