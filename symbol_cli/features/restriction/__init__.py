"""Mosaic restriction transactions."""

from symbol_cli.features.restriction.service import (
    MosaicRestrictionTransactionService,
    RestrictionMosaicRepository,
)

__all__ = ["MosaicRestrictionTransactionService", "RestrictionMosaicRepository"]
