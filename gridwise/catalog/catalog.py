"""
Card Catalog - Read-only lookup over the card list.

The catalog owns two pieces of reference data:
1. The ordered card list (order matters: shop ids derive from it)
2. The incentive -> consumer compatibility map
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Iterable, Mapping

from .cards import CardCategory, CardDefinition


@dataclass(frozen=True)
class CardCatalog:
    """
    Static card reference data.

    Usage:
        catalog = CardCatalog.from_cards(cards, incentive_map)
        catalog.matching_consumer_for("LED Lights")  # "Lights"
    """
    cards: tuple[CardDefinition, ...]
    incentive_map: Mapping[str, str] = field(default_factory=dict)

    @classmethod
    def from_cards(
        cls,
        cards: Iterable[CardDefinition],
        incentive_map: Mapping[str, str],
    ) -> CardCatalog:
        return cls(cards=tuple(cards), incentive_map=dict(incentive_map))

    def all_cards(self) -> list[CardDefinition]:
        return list(self.cards)

    def cards_by_category(self, category: CardCategory) -> list[CardDefinition]:
        return [card for card in self.cards if card.category == category]

    def get_card(self, name: str) -> CardDefinition | None:
        """Get a card definition by name."""
        for card in self.cards:
            if card.name == name:
                return card
        return None

    def index_of(self, name: str) -> int | None:
        """Catalog position of a card, or None if unknown."""
        for index, card in enumerate(self.cards):
            if card.name == name:
                return index
        return None

    def matching_consumer_for(self, incentive_name: str) -> str | None:
        """Name of the one consumer an incentive may upgrade."""
        return self.incentive_map.get(incentive_name)

    def matching_incentive_for(self, consumer_name: str) -> str | None:
        """Reverse lookup: the incentive that upgrades a consumer."""
        for incentive_name, consumer in self.incentive_map.items():
            if consumer == consumer_name:
                return incentive_name
        return None
