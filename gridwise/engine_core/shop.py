"""
Shop Composer - Derives the purchasable card set from the grid.

The shop is never patched incrementally; it is rebuilt from the
catalog every time the grid changes.
"""

from __future__ import annotations

from ..catalog.catalog import CardCatalog
from .state import CardInstance, GridState


def shop_id(catalog_index: int) -> str:
    return f"shop-{catalog_index}"


def recompose_shop(grid: GridState, catalog: CardCatalog) -> tuple[CardInstance, ...]:
    """
    Build the shop for the current grid.

    - Every generator and big generator (Fossil included)
    - Each incentive whose consumer is present in the consumer row,
      face-down or not; it is listed face-down while that consumer is
    - Never consumers
    """
    present: dict[str, bool] = {}
    for consumer in grid.consumers:
        if consumer is not None and consumer.definition.is_consumer:
            # Any face-up copy makes the incentive visible
            present[consumer.name] = present.get(consumer.name, True) and consumer.face_down

    shop = []
    for index, card in enumerate(catalog.cards):
        if card.is_generator:
            shop.append(CardInstance(definition=card, instance_id=shop_id(index)))
        elif card.is_incentive:
            target = catalog.matching_consumer_for(card.name)
            if target is not None and target in present:
                shop.append(CardInstance(
                    definition=card,
                    instance_id=shop_id(index),
                    face_down=present[target],
                ))
    return tuple(shop)
