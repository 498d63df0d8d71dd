"""Card catalog - static card definitions and incentive compatibility."""

from .cards import CardCategory, CardDefinition, StatTotals, STAT_TYPES
from .catalog import CardCatalog
from .validation import validate_catalog, CatalogIntegrityError, ValidationResult

__all__ = [
    "CardCategory",
    "CardDefinition",
    "StatTotals",
    "STAT_TYPES",
    "CardCatalog",
    "validate_catalog",
    "CatalogIntegrityError",
    "ValidationResult",
]
