"""
Catalog Validation - Integrity checks for card catalogs.

Validates that:
1. Card names are present and unique
2. Every incentive maps to exactly one known consumer
3. Every mapped name refers to a card of the right category
4. The mapping is one-to-one
"""

from __future__ import annotations
from dataclasses import dataclass

from .cards import CardCategory
from .catalog import CardCatalog


class CatalogIntegrityError(Exception):
    """Raised when catalog data needed by the engine is missing or inconsistent."""

    def __init__(self, errors: list[str]):
        self.errors = errors
        super().__init__(f"Catalog integrity check failed with {len(errors)} error(s)")


@dataclass
class ValidationResult:
    """Result of validation, with errors and warnings."""
    valid: bool
    errors: list[str]
    warnings: list[str]

    def raise_for_errors(self):
        if not self.valid:
            raise CatalogIntegrityError(self.errors)


def validate_catalog(catalog: CardCatalog) -> ValidationResult:
    """
    Validate a card catalog.

    Returns ValidationResult with errors and warnings.
    """
    errors: list[str] = []
    warnings: list[str] = []

    seen: set[str] = set()
    for card in catalog.cards:
        if not card.name:
            errors.append("Card has empty name")
            continue
        if card.name in seen:
            errors.append(f"Duplicate card name '{card.name}'")
        seen.add(card.name)

    errors.extend(_validate_incentive_map(catalog))

    if not catalog.cards_by_category(CardCategory.CONSUMER):
        warnings.append("No consumer cards defined")
    if not any(card.is_generator for card in catalog.cards):
        warnings.append("No generator cards defined")

    return ValidationResult(
        valid=len(errors) == 0,
        errors=errors,
        warnings=warnings,
    )


def _validate_incentive_map(catalog: CardCatalog) -> list[str]:
    """Check incentive -> consumer references."""
    errors = []

    for incentive in catalog.cards_by_category(CardCategory.INCENTIVE):
        if incentive.name not in catalog.incentive_map:
            errors.append(f"Incentive '{incentive.name}' has no matching consumer")

    targets: dict[str, str] = {}
    for incentive_name, consumer_name in catalog.incentive_map.items():
        incentive = catalog.get_card(incentive_name)
        if incentive is None or not incentive.is_incentive:
            errors.append(f"Incentive map references unknown incentive '{incentive_name}'")
        consumer = catalog.get_card(consumer_name)
        if consumer is None or not consumer.is_consumer:
            errors.append(
                f"Incentive '{incentive_name}' references unknown consumer '{consumer_name}'"
            )
        if consumer_name in targets:
            errors.append(
                f"Consumer '{consumer_name}' is targeted by both "
                f"'{targets[consumer_name]}' and '{incentive_name}'"
            )
        targets[consumer_name] = incentive_name

    return errors
